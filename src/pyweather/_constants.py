"""Internal constants shared across the library."""

API_PREFIX = "/api/v1/weather"
WEATHER_PATH = API_PREFIX + "/{city}"
URL_PARAM_CITY = "city"

CONTENT_TYPE_JSON = "application/json"

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8080

# Seconds.
DEFAULT_REQUEST_TIMEOUT = 5.0
DEFAULT_HANDLER_TIMEOUT = 10.0
DEFAULT_SHUTDOWN_TIMEOUT = 10.0

# ------------------------------------------------------------------
# Demo harness
# ------------------------------------------------------------------

DEFAULT_CITY = "Moscow"
DEMO_MIN_TEMP = -10.0
DEMO_MAX_TEMP = 40.0
