"""CLI package for the Spotify implicit grant client

Opens the authorization page, or handles the callback URL the OS passes
back through the registered custom scheme.
"""

from cli.cli_app import ImplicitGrantCLI
from cli.main import main

__all__ = [
    "ImplicitGrantCLI",
    "main",
]
