from config.loader import get_config_loader
from spotify_oauth.constants import CALLBACK_HOST

# Get the config loader instance
config = get_config_loader()

# Logging
LOG_LEVEL = config.get("LOG_LEVEL", "info")
DEBUG_LOG_FILE = config.get("DEBUG_LOG_FILE", "implicit_grant_debug.log")

# Spotify application registration
# Create an app at https://developer.spotify.com/dashboard and whitelist REDIRECT_URI
SPOTIFY_CLIENT_ID = config.get("SPOTIFY_CLIENT_ID", "[YOUR-CLIENT-ID]")

# Custom URL scheme the OS routes back to this application
URI_SCHEME = config.get("URI_SCHEME", "my-awesome-app")
REDIRECT_URI = f"{URI_SCHEME}://{CALLBACK_HOST}"

# Treat a non-200 profile response as a failure instead of parsing the body anyway
PROFILE_STRICT_STATUS = config.get("PROFILE_STRICT_STATUS", False)
