"""Exceptions raised by the spotify_oauth package"""


class SpotifyOAuthError(Exception):
    """Base class for implicit grant client errors"""


class HandlerAlreadyRegisteredError(SpotifyOAuthError):
    """A URL event handler was registered twice on the same dispatcher"""


class SchemeRegistrationError(SpotifyOAuthError):
    """The custom URL scheme could not be registered with the OS"""
