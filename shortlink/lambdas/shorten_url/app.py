import json
import functools
import logging

from shortlink.dao.exceptions import DataStoreError
from shortlink.exceptions import ConfigurationError, MalformedInputError, StoreUnavailableError, TokenCollisionError
from shortlink.service import ShortenerService
from shortlink.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlink.utils import load_config, get_short_url, app_prefix, normalize_target
from shortlink.utils.constants import STORE_UNAVAILABLE_RETRY_AFTER
from shortlink.utils.helpers import guarantee_500_response
from shortlink.lambdas.responses import response_json, response_400, response_409, response_500, response_503
from shortlink.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    MALFORMED_TARGET,
    TOKEN_COLLISION,
    STORE_UNAVAILABLE,
    CONFIGURATION_ERROR,
    LINK_CREATED,
    LINK_EXISTS,
)


logger = logging.getLogger(__name__)


@functools.cache
def get_service() -> ShortenerService:
    """Build the shortener service once per warm Lambda container."""
    app_config = load_config('shorten_url')
    return ShortenerService.from_config(app_config, prefix=app_prefix())


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract target URL (and its transport encoding) from request body
    - Step 2: Normalize the target into its canonical decoded form
    - Step 3: Create or fetch the short link (via ShortenerService)
    - Step 4: Respond to user with 201 (created) or 200 (already existed)

    HTTP responses:
        201 / 200: Successful URL shortening
            message: success message
            target_url: canonical target url
            short_url: short url
            token: link token
            created: whether this request created the link
        400: Bad client request
            message: invalid JSON, missing or malformed target_url
        409: Conflict
            message: token already belongs to another target
        500: Internal server error
            message: indicate the server experienced an internal error
        503: Service unavailable
            message: persistent store is unreachable, retry later

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            JSON-serializable response following API Gateway Lambda Proxy
            output format.

    Example:
        >>> event = {'body': '{"target_url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
    """
    # 1- Extract target URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)
    if not isinstance(request_body, dict) or not request_body.get('target_url'):
        logger.info("Missing 'target_url' in body. Responding with 400.", extra={'event': MALFORMED_TARGET})
        return response_400(message="missing 'target_url' in JSON body", error_code=MALFORMED_TARGET)

    # 2- Normalize target into its canonical (decoded) form
    encoding = request_body.get('encoding')
    if encoding is None:
        encoding = 'plain'
    try:
        target_url = normalize_target(request_body['target_url'], encoding=encoding)
    except MalformedInputError as e:
        logger.info('Malformed target URL. Responding with 400.', extra={'event': MALFORMED_TARGET, 'reason': str(e)})
        return response_400(message=str(e), error_code=MALFORMED_TARGET)

    # 3- Create or fetch the short link
    try:
        service = get_service()
        result = service.shorten(target_url)
    except MalformedInputError as e:
        return response_400(message=str(e), error_code=MALFORMED_TARGET)
    except TokenCollisionError as e:
        logger.error('Token collision. Responding with 409.', extra={'token': e.token, 'event': TOKEN_COLLISION})
        return response_409(message=f"token '{e.token}' already belongs to another URL", error_code=TOKEN_COLLISION)
    except (StoreUnavailableError, DataStoreError):
        logger.exception('Persistent store unavailable. Responding with 503.', extra={'event': STORE_UNAVAILABLE})
        return response_503(retry_after=STORE_UNAVAILABLE_RETRY_AFTER, error_code=STORE_UNAVAILABLE)
    except (ConfigurationError, KeyError, FileNotFoundError):
        logger.exception('Failed to configure shorten URL function. Responding with 500.', extra={'event': CONFIGURATION_ERROR})
        return response_500()

    # 4- Return successful response to user
    short_url = get_short_url(result.token, event)
    logger.info(
        'Shortened target URL.',
        extra={'token': result.token, 'event': LINK_CREATED if result.created else LINK_EXISTS},
    )
    return response_json(
        201 if result.created else 200,
        {
            'message': f'Successfully shortened {result.target} to {short_url}',
            'target_url': result.target,
            'short_url': short_url,
            'token': result.token,
            'created': result.created,
        },
    )
