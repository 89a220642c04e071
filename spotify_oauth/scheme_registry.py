"""Custom URL scheme registration with the desktop environment

On freedesktop systems a scheme handler is a .desktop entry declaring the
``x-scheme-handler/<scheme>`` MIME type, made default with ``xdg-mime``.
The OS then runs the entry's Exec line with the callback URL in place of
``%u``.
"""

import logging
import platform
import subprocess
from pathlib import Path
from typing import Callable, Optional

from .exceptions import SchemeRegistrationError


logger = logging.getLogger(__name__)

DEFAULT_APPLICATIONS_DIR = Path.home() / ".local" / "share" / "applications"


def mime_type_for(scheme: str) -> str:
    return f"x-scheme-handler/{scheme.lower()}"


def desktop_file_name(scheme: str) -> str:
    return f"{scheme.lower()}-handler.desktop"


def desktop_entry(scheme: str, exec_command: str) -> str:
    """Render the desktop entry that handles ``scheme`` URLs

    Args:
        scheme: Custom URL scheme, without ``://``
        exec_command: Command to run; the URL is appended as ``%u``

    Returns:
        Desktop entry file content
    """
    return "\n".join([
        "[Desktop Entry]",
        "Type=Application",
        f"Name=Spotify Implicit Grant ({scheme})",
        f"Exec={exec_command} %u",
        "Terminal=true",
        "NoDisplay=true",
        f"MimeType={mime_type_for(scheme)};",
        "",
    ])


def register_url_scheme(
    scheme: str,
    exec_command: str,
    applications_dir: Optional[Path] = None,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> Path:
    """Register this application as the OS handler for ``scheme``

    Args:
        scheme: Custom URL scheme, without ``://``
        exec_command: Command the OS runs with the callback URL
        applications_dir: Where to write the desktop entry
        runner: subprocess.run compatible callable

    Returns:
        Path of the written desktop entry

    Raises:
        SchemeRegistrationError: unsupported platform, or xdg-mime failed
    """
    system = platform.system()
    if system != "Linux":
        raise SchemeRegistrationError(
            f"Automatic scheme registration is only supported on Linux, not {system}"
        )

    target_dir = Path(applications_dir) if applications_dir else DEFAULT_APPLICATIONS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    desktop_path = target_dir / desktop_file_name(scheme)
    desktop_path.write_text(desktop_entry(scheme, exec_command), encoding="utf-8")
    logger.info(f"Wrote desktop entry {desktop_path}")

    command = ["xdg-mime", "default", desktop_path.name, mime_type_for(scheme)]
    try:
        runner(command, check=True, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise SchemeRegistrationError("xdg-mime not found; is xdg-utils installed?") from e
    except subprocess.CalledProcessError as e:
        raise SchemeRegistrationError(
            f"xdg-mime exited with status {e.returncode}: {(e.stderr or '').strip()}"
        ) from e

    logger.info(f"Registered {desktop_path.name} as handler for {mime_type_for(scheme)}")
    return desktop_path
