import functools
import logging

from shortlink.dao.exceptions import DataStoreError
from shortlink.exceptions import ConfigurationError, LinkNotFoundError, MalformedInputError, StoreUnavailableError
from shortlink.service import ShortenerService
from shortlink.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlink.utils import load_config, get_short_url, app_prefix
from shortlink.utils.constants import STORE_UNAVAILABLE_RETRY_AFTER
from shortlink.utils.helpers import guarantee_500_response
from shortlink.lambdas.responses import response_307, response_400, response_404, response_500, response_503
from shortlink.lambdas.redirect_url.constants import (
    MISSING_TOKEN,
    MALFORMED_TOKEN,
    LINK_NOT_FOUND,
    STORE_UNAVAILABLE,
    CONFIGURATION_ERROR,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@functools.cache
def get_service() -> ShortenerService:
    """Build the shortener service once per warm Lambda container

    The resolution cache lives inside the service, so it survives between
    invocations served by the same container. Failures are not cached.
    """
    app_config = load_config('redirect_url')
    return ShortenerService.from_config(app_config, prefix=app_prefix())


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect short links

    This Lambda handler follows this procedure to redirect:
    - Step 1: Extract token from request path
    - Step 2: Resolve token through the resolution cache and store
    - Step 3: Redirect client to target URL

    HTTP responses:
        307: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing or malformed token in path parameters
        404: Not found
            message: token is unknown
        500: Internal server error
            message: server experienced an internal error
        503: Service unavailable
            message: persistent store is unreachable, retry later

    Args:
        event (LambdaEvent):
            API Gateway event payload containing the token path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'token': 'Gh71WPTaq0Zx'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        307
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 1- Extract token from request's path
    token = (event.get('pathParameters') or {}).get('token')
    if token is None:
        logger.info('Missing "token" in path. Responding with 400.', extra={'event': MISSING_TOKEN})
        return response_400(message="missing 'token' in path", error_code=MISSING_TOKEN)

    # 2- Resolve token to its target URL
    try:
        service = get_service()
        target_url = service.resolve(token)
    except MalformedInputError:
        logger.info('Malformed token in path. Responding with 400.', extra={'token': token, 'event': MALFORMED_TOKEN})
        return response_400(message=f"malformed token '{token}'", error_code=MALFORMED_TOKEN)
    except LinkNotFoundError:
        logger.info('Short link not found. Responding with 404.', extra={'token': token, 'event': LINK_NOT_FOUND})
        return response_404(message=f"short url {get_short_url(token, event)} doesn't exist", error_code=LINK_NOT_FOUND)
    except (StoreUnavailableError, DataStoreError):
        logger.exception('Persistent store unavailable. Responding with 503.', extra={'token': token, 'event': STORE_UNAVAILABLE})
        return response_503(retry_after=STORE_UNAVAILABLE_RETRY_AFTER, error_code=STORE_UNAVAILABLE)
    except (ConfigurationError, KeyError, FileNotFoundError):
        logger.exception('Failed to configure redirect URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500()

    # 3- Redirect client to target URL
    logger.info('Redirecting client to target URL. Responding with 307.', extra={'token': token, 'event': REDIRECT_SUCCESS})
    return response_307(location=target_url)
