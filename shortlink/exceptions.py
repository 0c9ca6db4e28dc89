"""Service-level exceptions raised by the shortener core.

Every exception carries an `error_code` which HTTP adapters report back to
clients unchanged.

Classes:
    ShortLinkError:
        Base exception for all application-specific errors.

    MalformedInputError:
        Raised when a token or target is rejected before any store access.

    LinkNotFoundError:
        Raised when a token has no row in the store (an expected outcome).

    TokenCollisionError:
        Raised when a derived token already maps to an unrelated target.

    StoreUnavailableError:
        Raised when the persistent store fails (I/O, timeout). Retryable.

    ConfigurationError:
        Raised when the application is configured with invalid parameters.
"""


class ShortLinkError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortlink_error'


class MalformedInputError(ShortLinkError, ValueError):
    """Raised when a token or target is malformed."""

    error_code = 'input:malformed'


class LinkNotFoundError(ShortLinkError):
    """Raised when a token is absent from the store."""

    error_code = 'link:not_found'


class TokenCollisionError(ShortLinkError):
    """Raised when a token already belongs to a different target.

    This is the one condition signalling that the token space is too short or
    the codec is misbehaving. The existing row is never overwritten.
    """

    error_code = 'link:token_collision'

    def __init__(self, token: str, existing_target: str, target: str):
        super().__init__(f"Token '{token}' already maps to a different target.")
        self.token = token
        self.existing_target = existing_target
        self.target = target


class StoreUnavailableError(ShortLinkError):
    """Raised when the persistent store cannot serve a request."""

    error_code = 'infra:store_unavailable'


class ConfigurationError(ShortLinkError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:configuration_error'
