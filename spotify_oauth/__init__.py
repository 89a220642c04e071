"""Spotify OAuth implicit grant for desktop applications

Opens the Spotify authorization page, receives the custom-scheme redirect
carrying the access token, and fetches the user's profile with it.
"""

from .constants import (
    AUTHORIZE_URL,
    PROFILE_URL,
    CALLBACK_HOST,
)
from .models import TokenState, ProfileResult
from .exceptions import (
    SpotifyOAuthError,
    HandlerAlreadyRegisteredError,
    SchemeRegistrationError,
)
from .authorization import (
    LaunchCoordinator,
    build_authorization_url,
    encode_redirect_uri,
)
from .dispatch import URLEventDispatcher
from .profile import ProfileFetcher
from .callback import CallbackReceiver, extract_access_token
from .scheme_registry import desktop_entry, register_url_scheme

__all__ = [
    # Constants
    "AUTHORIZE_URL",
    "PROFILE_URL",
    "CALLBACK_HOST",
    # Models
    "TokenState",
    "ProfileResult",
    # Errors
    "SpotifyOAuthError",
    "HandlerAlreadyRegisteredError",
    "SchemeRegistrationError",
    # Authorization
    "LaunchCoordinator",
    "build_authorization_url",
    "encode_redirect_uri",
    # Callback
    "URLEventDispatcher",
    "CallbackReceiver",
    "extract_access_token",
    # Profile
    "ProfileFetcher",
    # Scheme registration
    "desktop_entry",
    "register_url_scheme",
]
