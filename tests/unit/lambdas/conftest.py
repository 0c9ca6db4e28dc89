from unittest.mock import MagicMock

import pytest

from shortlink.cache import ResolutionCache
from shortlink.service import ShortenerService


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    """Run handlers as if deployed so unexpected errors become 500 responses."""
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)


@pytest.fixture()
def context():
    return MagicMock()


@pytest.fixture()
def sqlite_config(tmp_path):
    return {
        'active_backend': 'sqlite',
        'sqlite': {'path': str(tmp_path / 'links.db')},
        'cache': {'capacity': 32},
    }


@pytest.fixture()
def service(sqlite_config):
    _service = ShortenerService.from_config(sqlite_config)
    yield _service
    _service.dao.close()


@pytest.fixture()
def failing_service():
    """Service whose store raises on every call."""
    return MagicMock(spec=ShortenerService, cache=ResolutionCache(capacity=1))
