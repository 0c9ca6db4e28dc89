# Log events / error codes reported by the redirect_url lambda
MISSING_TOKEN = 'MISSING_TOKEN'
MALFORMED_TOKEN = 'MALFORMED_TOKEN'
LINK_NOT_FOUND = 'LINK_NOT_FOUND'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
