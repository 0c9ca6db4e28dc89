# Fixed token length for every link in the system (62**12 token space)
TOKEN_LENGTH = 12

# Default capacity of the in-memory resolution cache (entries)
DEFAULT_CACHE_CAPACITY = 8192

# Default store timeouts in seconds
DEFAULT_REDIS_SOCKET_TIMEOUT = 2.0
DEFAULT_REDIS_SOCKET_CONNECT_TIMEOUT = 2.0
DEFAULT_SQLITE_TIMEOUT = 5.0

# Seconds a client should wait before retrying when the store is unavailable
STORE_UNAVAILABLE_RETRY_AFTER = 5

# Supported persistent store backends
SUPPORTED_BACKENDS = frozenset({'redis', 'sqlite'})

# Application environment variables
APP_ENV_ENV = 'APP_ENV'
APP_NAME_ENV = 'APP_NAME'
PROJECT_ROOT_ENV = 'PROJECT_ROOT'
AWS_SAM_LOCAL_ENV = 'AWS_SAM_LOCAL'
LOG_LEVEL_ENV = 'LOG_LEVEL'

# AppConfig environment variables
APPCONFIG_APP_ID_ENV = 'APPCONFIG_APP_ID'
APPCONFIG_ENV_ID_ENV = 'APPCONFIG_ENV_ID'
APPCONFIG_PROFILE_ID_ENV = 'APPCONFIG_PROFILE_ID'
APPCONFIG_AGENT_URL_ENV = 'APPCONFIG_AGENT_URL'
APPCONFIG_PROFILE_NAME_ENV = 'APPCONFIG_PROFILE_NAME'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
