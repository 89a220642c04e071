"""Delivery of custom-scheme URLs to the registered handler

The OS hands a custom-scheme URL to the application by launching the
registered command with the URL as an argument. URLEventDispatcher is the
in-process end of that: it owns exactly one handler and forwards the URLs
of its scheme to it, whether they come from argv, a paste prompt or a test.
"""

import logging
from typing import Any, Awaitable, Callable, Iterable, Optional
from urllib.parse import urlparse

from .exceptions import HandlerAlreadyRegisteredError


logger = logging.getLogger(__name__)

URLEventHandler = Callable[[str], Awaitable[Any]]


class URLEventDispatcher:
    """Routes URLs of one custom scheme to a single registered handler"""

    def __init__(self, scheme: str):
        self.scheme = scheme.lower()
        self._handler: Optional[URLEventHandler] = None

    @property
    def has_handler(self) -> bool:
        return self._handler is not None

    def set_event_handler(self, handler: URLEventHandler) -> None:
        """Register the handler for this scheme

        Raises:
            HandlerAlreadyRegisteredError: if a handler is already registered
        """
        if self._handler is not None:
            raise HandlerAlreadyRegisteredError(
                f"A handler is already registered for {self.scheme}://"
            )
        self._handler = handler
        logger.debug(f"Registered URL handler for {self.scheme}://")

    def accepts(self, url: str) -> bool:
        """Check whether ``url`` belongs to this dispatcher's scheme"""
        try:
            scheme = urlparse(url.strip()).scheme
        except ValueError:
            return False
        return scheme.lower() == self.scheme

    async def dispatch(self, url: str) -> bool:
        """Deliver a URL to the registered handler

        Returns:
            True if the URL was delivered, False if no handler is registered
            or the URL has another scheme
        """
        if self._handler is None:
            logger.debug("No URL handler registered, dropping event")
            return False

        if not self.accepts(url):
            logger.debug(f"Ignoring URL outside {self.scheme}:// scheme")
            return False

        await self._handler(url.strip())
        return True

    async def dispatch_argv(self, argv: Iterable[str]) -> int:
        """Deliver every argument that is a URL of this scheme

        Args:
            argv: Command line arguments as passed by the OS launcher

        Returns:
            Number of URLs delivered
        """
        delivered = 0
        for arg in argv:
            if self.accepts(arg) and await self.dispatch(arg):
                delivered += 1
        return delivered
