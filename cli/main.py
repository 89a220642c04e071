"""CLI entry point and argument parsing"""

import argparse
import asyncio
import sys
from rich.console import Console

import settings
from cli.cli_app import ImplicitGrantCLI
from cli.logging_setup import setup_logging
from spotify_oauth import SpotifyOAuthError


console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Spotify OAuth implicit grant for desktop applications")
    parser.add_argument(
        "urls",
        nargs="*",
        metavar="URL",
        help="Callback URL(s) passed by the OS when the custom scheme is opened",
    )
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--paste",
        action="store_true",
        help="After opening the browser, prompt for the callback URL instead of waiting for the OS",
    )
    parser.add_argument(
        "--register-scheme",
        action="store_true",
        help="Register this program as the handler for the custom URL scheme and exit",
    )
    return parser


async def run(cli: ImplicitGrantCLI, args: argparse.Namespace) -> int:
    """Run the flow selected by ``args``; returns the process exit code"""
    if args.urls:
        # Invoked by the OS with the redirect URL
        delivered = await cli.handle_os_invocation(args.urls)
        if not delivered:
            cli.console.print(f"[yellow]No {cli.uri_scheme}:// URL in arguments[/yellow]")
            return 1
        cli.report(cli.receiver.last_result)
        return 0

    cli.display_header()
    cli.login()

    if args.paste:
        result = await cli.paste_callback()
        cli.report(result)
    else:
        cli.console.print(
            f"\n[bold]Step 2:[/bold] Log in; the browser will hand {cli.redirect_uri} back to this program"
        )
    return 0


def main():
    """Entry point for the CLI"""
    parser = build_parser()
    args = parser.parse_args()

    setup_logging(settings.LOG_LEVEL, debug=args.debug, debug_log_file=settings.DEBUG_LOG_FILE)

    try:
        cli = ImplicitGrantCLI(console=console)

        if args.register_scheme:
            cli.register_scheme()
            sys.exit(0)

        sys.exit(asyncio.run(run(cli, args)))

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        console.print("Goodbye!")
    except SpotifyOAuthError as e:
        console.print(f"[red]ERROR:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
