"""Constants for Lay-Z Spa integration.

This module contains all the constants used throughout the integration,
including API endpoints, wire attribute names and temperature limits.
"""

DOMAIN = "layz_spa"

MANUFACTURER = "Bestway"
MODEL = "Lay-Z"

BASE_URL = "https://usapi.gizwits.com/app"
APPLICATION_ID = "98754e684ec045528b073876c34c7348"
LOGIN_LANGUAGE = "en"

DEFAULT_POLL_INTERVAL = 10  # Most ticks are served from the cache window
CACHE_WINDOW = 60  # At most one remote read per window unless forced
REQUEST_TIMEOUT = 10.0

MIN_TEMPERATURE = 20
MAX_TEMPERATURE = 40
TEMPERATURE_STEP = 1

DEFAULT_CURRENT_TEMPERATURE = 25
DEFAULT_TARGET_TEMPERATURE = 30
DISCONNECTED_TARGET_TEMPERATURE = 25

# Attribute names as reported by devdata/{did}/latest and accepted by control/{did}
ATTR_POWER = "power"
ATTR_TEMP_NOW = "temp_now"
ATTR_TEMP_SET = "temp_set"
ATTR_HEAT_POWER = "heat_power"
ATTR_FILTER_POWER = "filter_power"
ATTR_WAVE_POWER = "wave_power"

ERROR_INVALID_AUTH = "invalid_auth"
ERROR_CANNOT_CONNECT = "cannot_connect"
ERROR_TIMEOUT = "timeout_error"
ERROR_NO_DEVICES = "no_devices"
ERROR_API_ERROR = "api_error"
ERROR_UNKNOWN = "unknown_error"
