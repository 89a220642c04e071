"""Authorization URL construction for the Spotify implicit grant"""

import logging
import webbrowser
from urllib.parse import quote

from .constants import AUTHORIZE_URL, RESPONSE_TYPE, REDIRECT_URI_SAFE_CHARS


logger = logging.getLogger(__name__)


def encode_redirect_uri(redirect_uri: str) -> str:
    """Percent-encode a redirect URI for use as a query parameter value

    Only ASCII alphanumerics and ``-_.!~*'()`` are left as-is, so the
    scheme separator and slashes are escaped as well.

    Args:
        redirect_uri: Raw redirect URI, e.g. ``my-app://spotifyOauthCallback``

    Returns:
        Encoded redirect URI
    """
    return quote(redirect_uri, safe=REDIRECT_URI_SAFE_CHARS)


def build_authorization_url(
    client_id: str,
    redirect_uri: str,
    authorize_url: str = AUTHORIZE_URL,
) -> str:
    """Construct the implicit grant authorization URL

    Args:
        client_id: Spotify application client ID
        redirect_uri: Raw redirect URI registered for the application
        authorize_url: Authorization endpoint

    Returns:
        Full authorization URL
    """
    return (
        f"{authorize_url}?response_type={RESPONSE_TYPE}"
        f"&client_id={client_id}"
        f"&redirect_uri={encode_redirect_uri(redirect_uri)}"
    )


class LaunchCoordinator:
    """Builds the authorization URL and opens it in the default browser"""

    def __init__(self, client_id: str, redirect_uri: str, authorize_url: str = AUTHORIZE_URL):
        self.client_id = client_id
        self.redirect_uri = redirect_uri
        self.authorize_url = authorize_url

    def get_authorize_url(self) -> str:
        """Build a fresh authorization URL for this launch"""
        return build_authorization_url(self.client_id, self.redirect_uri, self.authorize_url)

    def launch(self) -> str:
        """Start the login flow by opening the browser

        Failing to open the browser is not an error; the URL is returned
        either way so a caller may show it.

        Returns:
            Authorization URL that was opened
        """
        auth_url = self.get_authorize_url()

        try:
            opened = webbrowser.open(auth_url)
        except webbrowser.Error as e:
            logger.debug(f"Could not open browser: {e}")
            opened = False

        if not opened:
            logger.debug("No browser accepted the authorization URL")

        return auth_url
