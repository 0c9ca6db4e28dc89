"""Unit tests for the redirect_url AWS Lambda handler.

Test coverage includes:

1. Successful redirect
   - Known tokens answer 307 with a Location header.

2. Client errors
   - Missing tokens answer 400 MISSING_TOKEN.
   - Malformed tokens answer 400 MALFORMED_TOKEN without touching the store.
   - Unknown tokens answer 404 LINK_NOT_FOUND.

3. Server errors
   - Store failures answer 503 with Retry-After.
   - Configuration failures answer 500.
   - Unexpected exceptions answer 500 via guarantee_500_response.

4. Service construction
   - get_service() loads the redirect_url config once per container.
"""

import json

import pytest

from shortlink.dao.exceptions import DataStoreError
from shortlink.exceptions import ConfigurationError, StoreUnavailableError
from shortlink.lambdas.redirect_url import app


_get_service = app.get_service


# -------------------------------
# Fixtures
# -------------------------------


def _event(token=None):
    event = {
        'resource': '/{token}',
        'path': f'/{token}',
        'httpMethod': 'GET',
        'headers': {'User-Agent': 'pytest'},
        'requestContext': {'resourcePath': '/{token}', 'httpMethod': 'GET', 'domainName': 'sho.rt', 'stage': 'test'},
        'pathParameters': None,
    }
    if token is not None:
        event['pathParameters'] = {'token': token}
    return event


@pytest.fixture(autouse=True)
def _patch_service(monkeypatch, service):
    monkeypatch.setattr(app, 'get_service', lambda: service)


# -------------------------------
# 1. Successful redirect
# -------------------------------


def test_redirect_known_token(service, context):
    token = service.shorten('https://example.com/blog/chuck-norris-is-awesome').token

    response = app.lambda_handler(_event(token), context)

    assert response['statusCode'] == 307
    assert response['headers']['Location'] == 'https://example.com/blog/chuck-norris-is-awesome'


def test_redirect_uses_cache_on_repeat(service, context):
    token = service.shorten('https://example.com/a').token

    app.lambda_handler(_event(token), context)

    assert token in service.cache
    assert app.lambda_handler(_event(token), context)['statusCode'] == 307


# -------------------------------
# 2. Client errors
# -------------------------------


def test_missing_token(context):
    response = app.lambda_handler(_event(), context)

    assert response['statusCode'] == 400
    assert json.loads(response['body'])['errorCode'] == 'MISSING_TOKEN'


@pytest.mark.parametrize('token', ['short', 'waytoolongtoken123', 'abc-def_ghi!'])
def test_malformed_token(monkeypatch, service, context, token):
    monkeypatch.setattr(service.dao, 'get', lambda *args, **kwargs: pytest.fail('store must not be called'))

    response = app.lambda_handler(_event(token), context)

    assert response['statusCode'] == 400
    assert json.loads(response['body'])['errorCode'] == 'MALFORMED_TOKEN'


def test_unknown_token(context):
    response = app.lambda_handler(_event('unknown1234x'), context)

    assert response['statusCode'] == 404
    body = json.loads(response['body'])
    assert body['errorCode'] == 'LINK_NOT_FOUND'
    assert 'https://sho.rt/unknown1234x' in body['message']


# -------------------------------
# 3. Server errors
# -------------------------------


@pytest.mark.parametrize('error', [StoreUnavailableError('down'), DataStoreError('down')])
def test_store_unavailable(monkeypatch, failing_service, context, error):
    failing_service.resolve.side_effect = error
    monkeypatch.setattr(app, 'get_service', lambda: failing_service)

    response = app.lambda_handler(_event('Gh71WPTaq0Zx'), context)

    assert response['statusCode'] == 503
    assert response['headers']['Retry-After'] == '5'
    assert json.loads(response['body'])['errorCode'] == 'STORE_UNAVAILABLE'


@pytest.mark.parametrize('error', [ConfigurationError('bad backend'), KeyError('APPCONFIG_APP_ID'), FileNotFoundError('missing')])
def test_configuration_error(monkeypatch, context, error):
    def _raise():
        raise error

    monkeypatch.setattr(app, 'get_service', _raise)

    response = app.lambda_handler(_event('Gh71WPTaq0Zx'), context)

    assert response['statusCode'] == 500


def test_unexpected_error(monkeypatch, failing_service, context):
    failing_service.resolve.side_effect = RuntimeError('boom')
    monkeypatch.setattr(app, 'get_service', lambda: failing_service)

    response = app.lambda_handler(_event('Gh71WPTaq0Zx'), context)

    assert response['statusCode'] == 500
    assert json.loads(response['body'])['errorCode'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'


# -------------------------------
# 4. Service construction
# -------------------------------


def test_get_service_is_built_once(monkeypatch, sqlite_config):
    calls = []

    def _load_config(function_name):
        calls.append(function_name)
        return sqlite_config

    monkeypatch.setattr(app, 'load_config', _load_config)
    _get_service.cache_clear()
    try:
        first = _get_service()
        second = _get_service()
    finally:
        _get_service.cache_clear()

    assert first is second
    assert calls == ['redirect_url']
    first.dao.close()
