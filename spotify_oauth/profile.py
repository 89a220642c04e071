"""Spotify user profile request authenticated with the implicit grant token"""

import logging
from typing import Any, Callable, Dict, Optional

import httpx

from .constants import PROFILE_URL
from .models import ProfileResult, TokenState


logger = logging.getLogger(__name__)

ProfileHandler = Callable[[Dict[str, Any]], None]


class ProfileFetcher:
    """Issues the single authenticated profile request of a run"""

    def __init__(
        self,
        state: TokenState,
        profile_url: str = PROFILE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        strict_status: bool = False,
    ):
        """Initialize the profile fetcher

        Args:
            state: Token holder shared with the callback receiver
            profile_url: Profile endpoint
            transport: Optional httpx transport (tests use httpx.MockTransport)
            strict_status: Report a non-200 status as a failure instead of
                parsing the body anyway
        """
        self.state = state
        self.profile_url = profile_url
        self.transport = transport
        self.strict_status = strict_status

    async def fetch(self) -> Optional[ProfileResult]:
        """Request the current user's profile

        Returns:
            None if no token is stored (no request is made), otherwise a
            ProfileResult describing the outcome
        """
        if not self.state.has_token():
            logger.debug("No access token stored, skipping profile request")
            return None

        token = self.state.access_token
        if not token.isascii():
            logger.error("Access token contains non-ASCII characters, cannot send it in a header")
            return ProfileResult.failure("access token is not ASCII")

        headers = {"Authorization": f"Bearer {token}"}

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                logger.debug(f"Requesting profile from {self.profile_url}")
                response = await client.get(self.profile_url, headers=headers)
        except httpx.RequestError as e:
            logger.error(f"Profile request failed: {e!r}")
            return ProfileResult.failure(f"request failed: {e}")

        logger.debug(f"Profile response status: {response.status_code}")

        if response.status_code != 200:
            logger.warning(f"Profile status code should be 200, but is {response.status_code}")
            logger.warning(f"Response: {response.text}")
            if self.strict_status:
                return ProfileResult.failure(
                    f"unexpected status {response.status_code}",
                    status_code=response.status_code,
                )

        try:
            payload = response.json()
        except ValueError as e:
            logger.debug(f"Profile response is not JSON: {e}")
            return ProfileResult.failure("response body is not JSON", status_code=response.status_code)

        if not isinstance(payload, dict):
            logger.debug(f"Profile response is JSON but not an object: {type(payload).__name__}")
            return ProfileResult.failure("response body is not a JSON object", status_code=response.status_code)

        return ProfileResult.success(payload, status_code=response.status_code)

    async def fetch_profile(self, handler: ProfileHandler) -> Optional[ProfileResult]:
        """Fetch the profile and hand it to ``handler`` on success

        The handler is called exactly once when the profile was parsed and
        never otherwise.

        Args:
            handler: Callable receiving the parsed profile mapping

        Returns:
            The fetch result, or None if no token is stored
        """
        result = await self.fetch()
        if result is not None and result.ok:
            handler(result.profile)
        return result
