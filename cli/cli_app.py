"""Main CLI application class for the Spotify implicit grant client"""

import logging
import sys
from typing import Any, Dict, Iterable, Optional
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

import settings
from spotify_oauth import (
    CALLBACK_HOST,
    CallbackReceiver,
    LaunchCoordinator,
    ProfileFetcher,
    ProfileResult,
    TokenState,
    URLEventDispatcher,
    register_url_scheme,
)


logger = logging.getLogger(__name__)

PLACEHOLDER_CLIENT_ID = "[YOUR-CLIENT-ID]"


class ImplicitGrantCLI:
    """Wires the launch, callback and profile steps together for one run"""

    def __init__(
        self,
        client_id: str = None,
        uri_scheme: str = None,
        strict_status: bool = None,
        console: Optional[Console] = None,
        transport=None,
    ):
        self.client_id = client_id or settings.SPOTIFY_CLIENT_ID
        if uri_scheme:
            self.uri_scheme = uri_scheme
            self.redirect_uri = f"{uri_scheme}://{CALLBACK_HOST}"
        else:
            self.uri_scheme = settings.URI_SCHEME
            self.redirect_uri = settings.REDIRECT_URI
        if strict_status is None:
            strict_status = settings.PROFILE_STRICT_STATUS
        self.console = console or Console()

        self.state = TokenState()
        self.coordinator = LaunchCoordinator(self.client_id, self.redirect_uri)
        self.fetcher = ProfileFetcher(self.state, transport=transport, strict_status=strict_status)
        self.receiver = CallbackReceiver(self.state, self.fetcher, self.greet_user)
        self.dispatcher = URLEventDispatcher(self.uri_scheme)

        # One registration for the lifetime of the process
        self.receiver.register(self.dispatcher)

    def display_header(self):
        """Display application header"""
        self.console.print(Panel.fit(
            "[bold green]Spotify Implicit Grant[/bold green]\n"
            f"[dim]Redirect URI: {self.redirect_uri}[/dim]",
            border_style="green"
        ))

    def greet_user(self, details: Dict[str, Any]) -> None:
        """Default profile handler: greet the user by display name"""
        display_name = details.get("display_name")
        if display_name is not None:
            self.console.print(
                "[green]Congrats on implementing the Spotify Implicit Grant flow "
                f"in your desktop application, {display_name}![/green]"
            )

    def login(self) -> str:
        """Open the authorization page in the browser"""
        if self.client_id == PLACEHOLDER_CLIENT_ID:
            self.console.print(
                "[yellow]SPOTIFY_CLIENT_ID is not set; Spotify will reject the authorization request[/yellow]"
            )

        self.console.print("\n[bold]Step 1:[/bold] Opening browser for authentication...")
        auth_url = self.coordinator.launch()
        logger.debug(f"Authorization URL: {auth_url}")
        self.console.print("[dim]If nothing opened, visit:[/dim]")
        self.console.print(auth_url, markup=False)
        return auth_url

    async def paste_callback(self) -> Optional[ProfileResult]:
        """Ask the user for the callback URL and deliver it

        Used where the scheme is not registered with the OS: the browser
        shows the redirect URL and the user copies it here.
        """
        self.console.print("\n[bold]Step 2:[/bold] Paste the URL the browser was redirected to")
        self.console.print(f"[dim]It starts with {self.redirect_uri}#access_token=[/dim]\n")

        url = Prompt.ask("Callback URL", console=self.console)
        return await self.deliver(url)

    async def deliver(self, url: str) -> Optional[ProfileResult]:
        """Deliver one callback URL through the dispatcher"""
        if not await self.dispatcher.dispatch(url):
            self.console.print(f"[yellow]Not a {self.uri_scheme}:// URL, ignoring[/yellow]")
            return None
        return self.receiver.last_result

    async def handle_os_invocation(self, argv: Iterable[str]) -> int:
        """Handle callback URLs the OS passed on the command line

        Returns:
            Number of URLs delivered
        """
        delivered = await self.dispatcher.dispatch_argv(argv)
        if not delivered:
            logger.debug("No callback URL found in arguments")
        return delivered

    def report(self, result: Optional[ProfileResult]) -> None:
        """Print a one-line summary of a profile request"""
        if result is None:
            self.console.print("[yellow]No access token in the callback URL[/yellow]")
        elif result.ok:
            self.console.print("[green][OK][/green] Profile retrieved")
        else:
            self.console.print(f"[red][ERROR][/red] Profile request failed: {result.error}")

    def register_scheme(self, exec_command: Optional[str] = None) -> None:
        """Register this CLI as the OS handler for the custom scheme"""
        command = exec_command or f'"{sys.executable}" -m cli'
        desktop_path = register_url_scheme(self.uri_scheme, command)
        self.console.print(f"[green]✓ Registered {self.uri_scheme}:// handler[/green] ({desktop_path})")
