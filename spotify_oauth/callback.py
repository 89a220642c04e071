"""Redirect callback handling for the implicit grant"""

import logging
from typing import Optional
from urllib.parse import unquote, urlparse

from .constants import ACCESS_TOKEN_PARAM
from .dispatch import URLEventDispatcher
from .models import ProfileResult, TokenState
from .profile import ProfileFetcher, ProfileHandler


logger = logging.getLogger(__name__)


def extract_access_token(url: str) -> Optional[str]:
    """Extract the access token from a redirect URL fragment

    The implicit grant puts the token response in the fragment, e.g.
    ``my-app://spotifyOauthCallback#access_token=...&token_type=Bearer``.

    Args:
        url: Full callback URL

    Returns:
        The first non-empty ``access_token`` value, or None
    """
    try:
        fragment = urlparse(url).fragment
    except ValueError:
        # e.g. an unbalanced "[" in the host
        return None
    if not fragment:
        return None

    # Percent-decoding only: "+" is part of the token, not a space
    for pair in fragment.split("&"):
        name, _, value = pair.partition("=")
        if unquote(name) == ACCESS_TOKEN_PARAM and value:
            return unquote(value)

    return None


class CallbackReceiver:
    """Receives the redirect callback and triggers the profile request"""

    def __init__(
        self,
        state: TokenState,
        fetcher: ProfileFetcher,
        profile_handler: ProfileHandler,
    ):
        self.state = state
        self.fetcher = fetcher
        self.profile_handler = profile_handler
        self.last_result: Optional[ProfileResult] = None

    def register(self, dispatcher: URLEventDispatcher) -> None:
        """Register as the dispatcher's URL handler (once per process)"""
        dispatcher.set_event_handler(self.handle_url)

    async def handle_url(self, url: str) -> Optional[ProfileResult]:
        """Handle a callback URL

        URLs without a token are ignored without logging.

        Returns:
            Result of the profile request, or None if the URL carried no token
        """
        self.last_result = None
        token = extract_access_token(url)
        if token is None:
            return None

        self.state.access_token = token
        logger.info("Access token received from redirect callback")

        self.last_result = await self.fetcher.fetch_profile(self.profile_handler)
        return self.last_result
