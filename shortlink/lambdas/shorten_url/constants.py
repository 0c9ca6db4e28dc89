# Log events / error codes reported by the shorten_url lambda
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MALFORMED_TARGET = 'MALFORMED_TARGET'
TOKEN_COLLISION = 'TOKEN_COLLISION'
STORE_UNAVAILABLE = 'STORE_UNAVAILABLE'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
LINK_CREATED = 'LINK_CREATED'
LINK_EXISTS = 'LINK_EXISTS'
