"""
Spotify OAuth constants (not user configurable)
"""

# Accounts service
SPOTIFY_ACCOUNTS_BASE_URI = "https://accounts.spotify.com"
AUTHORIZE_URL = f"{SPOTIFY_ACCOUNTS_BASE_URI}/authorize"

# Web API
SPOTIFY_API_BASE_URI = "https://api.spotify.com"
PROFILE_URL = f"{SPOTIFY_API_BASE_URI}/v1/me"

# Implicit grant returns the token in the redirect fragment
RESPONSE_TYPE = "token"
ACCESS_TOKEN_PARAM = "access_token"

# Host part of the custom-scheme redirect URI
CALLBACK_HOST = "spotifyOauthCallback"

# Characters left unescaped in the redirect URI besides ASCII alphanumerics
REDIRECT_URI_SAFE_CHARS = "-_.!~*'()"
