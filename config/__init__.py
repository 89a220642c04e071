"""Configuration management package for the implicit grant client"""

from .loader import ConfigLoader, get_config_loader

__all__ = [
    "ConfigLoader",
    "get_config_loader",
]
