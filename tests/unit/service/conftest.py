import threading
from collections import Counter

import pytest

from shortlink.cache import ResolutionCache
from shortlink.dao.base import ShortLinkBaseDAO
from shortlink.dao.exceptions import ShortLinkNotFoundError
from shortlink.models import ShortLinkModel
from shortlink.service import ShortenerService


class InMemoryShortLinkDAO(ShortLinkBaseDAO):
    """Dict-backed DAO that counts every call it serves."""

    def __init__(self):
        self.rows: dict[str, str] = {}
        self.calls: Counter = Counter()
        self._lock = threading.Lock()

    def get(self, token, **kwargs):
        with self._lock:
            self.calls['get'] += 1
            if token not in self.rows:
                raise ShortLinkNotFoundError(f"Short link with token '{token}' not found.")
            return ShortLinkModel(target=self.rows[token], token=token)

    def create_if_absent(self, token, target, **kwargs):
        with self._lock:
            self.calls['create_if_absent'] += 1
            if token in self.rows:
                return self.rows[token], False
            self.rows[token] = target
            return target, True

    def update_target(self, token, target, **kwargs):
        with self._lock:
            self.calls['update_target'] += 1
            if token not in self.rows:
                raise ShortLinkNotFoundError(f"Short link with token '{token}' not found.")
            self.rows[token] = target
            return self

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())


@pytest.fixture
def dao() -> InMemoryShortLinkDAO:
    return InMemoryShortLinkDAO()


@pytest.fixture
def cache() -> ResolutionCache:
    return ResolutionCache(capacity=4)


@pytest.fixture
def service(dao, cache) -> ShortenerService:
    return ShortenerService(dao=dao, cache=cache)
