"""Shortener service: create and resolve short links

The service orchestrates the token codec, the persistent store (DAO) and the
in-memory resolution cache.

    shorten(target):  token = generate_token(target)
                      -> dao.create_if_absent(token, target)
                      -> reconcile legacy Base64 rows / detect collisions

    resolve(token):   validate token shape
                      -> cache.get(token)
                      -> on miss dao.get(token) and cache.put(token, target)

Per-token state machine:

    Unknown --shorten--> Created(Uncached) --resolve miss--> Created(Cached)
    Created(Cached) --LRU eviction--> Created(Uncached)
    Created(*) --reconciliation--> Created(Cached, canonical target)

The cache is owned by the service instance. It is authoritative only within
this process: there is no cross-process invalidation.

Reconciliation writes the canonical target into the cache right after the
store update. A resolve in this process that read the legacy row before the
update and finishes after it can still put the legacy value back; that entry
stays until LRU eviction.

Classes:
    ShortenerService:
        Create-or-fetch and read-through resolution of short links.

Example:
    >>> from shortlink.dao.sqlite import ShortLinkSQLiteDAO
    >>> service = ShortenerService(dao=ShortLinkSQLiteDAO(sqlite_path='/tmp/links.db'))
    >>> result = service.shorten('https://example.com/a')
    >>> result.created, len(result.token)
    (True, 12)
    >>> service.resolve(result.token)
    'https://example.com/a'
"""

import logging
import contextlib
from collections.abc import Iterator
from typing import Any

from shortlink.cache import ResolutionCache
from shortlink.dao.base import ShortLinkBaseDAO
from shortlink.dao.exceptions import DataStoreError, ShortLinkNotFoundError
from shortlink.exceptions import (
    ConfigurationError,
    LinkNotFoundError,
    MalformedInputError,
    StoreUnavailableError,
    TokenCollisionError,
)
from shortlink.models import ShortenResult
from shortlink.utils.constants import DEFAULT_CACHE_CAPACITY, SUPPORTED_BACKENDS, TOKEN_LENGTH
from shortlink.utils.encoding import is_transport_form
from shortlink.utils.shortener import generate_token, is_valid_token


logger = logging.getLogger(__name__)


@contextlib.contextmanager
def _classify_store_errors(token: str) -> Iterator[None]:
    """Translate DAO exceptions into the service's error taxonomy."""
    try:
        yield
    except ShortLinkNotFoundError as e:
        raise LinkNotFoundError(f"Short link with token '{token}' not found.") from e
    except DataStoreError as e:
        logger.error('Persistent store unavailable.', extra={'token': token, 'reason': str(e)})
        raise StoreUnavailableError(str(e)) from e


class ShortenerService:
    """Create and resolve short links on top of a DAO and a resolution cache

    Attributes:
        dao (ShortLinkBaseDAO):
            Persistent store of token -> target rows.
        cache (ResolutionCache):
            In-memory LRU cache owned by this service.

    Methods:
        shorten(target: str) -> ShortenResult
        resolve(token: str) -> str
        from_config(config: dict, prefix: str | None = None) -> ShortenerService
    """

    def __init__(self, dao: ShortLinkBaseDAO, cache: ResolutionCache | None = None):
        self.dao = dao
        self.cache = cache if cache is not None else ResolutionCache(capacity=DEFAULT_CACHE_CAPACITY)

    @classmethod
    def from_config(cls, config: dict[str, Any], prefix: str | None = None) -> 'ShortenerService':
        """Build a service from a Lambda configuration section

        Args:
            config (dict[str, Any]):
                Output of load_config(): {"active_backend": ..., <backend>: {...}, "cache": {...}}.
            prefix (str | None):
                Namespace prefix for Redis keys.

        Returns:
            ShortenerService: a service with its own DAO and cache.

        Raises:
            ConfigurationError:
                If the backend is unsupported or the cache capacity is invalid.
            DataStoreError:
                If the store cannot be reached while constructing the DAO.
        """
        backend = config.get('active_backend')
        if backend not in SUPPORTED_BACKENDS:
            raise ConfigurationError(f"Unsupported persistent store backend '{backend}'.")
        backend_config = config.get(backend) or {}

        if backend == 'redis':
            from shortlink.dao.redis import ShortLinkRedisDAO

            dao = ShortLinkRedisDAO(**{f'redis_{k}': v for k, v in backend_config.items()}, prefix=prefix)
        else:
            from shortlink.dao.sqlite import ShortLinkSQLiteDAO

            dao = ShortLinkSQLiteDAO(**{f'sqlite_{k}': v for k, v in backend_config.items()})

        capacity = (config.get('cache') or {}).get('capacity', DEFAULT_CACHE_CAPACITY)
        try:
            cache = ResolutionCache(capacity=capacity)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f'Invalid resolution cache capacity: {capacity!r}.') from e

        logger.debug('Built shortener service.', extra={'backend': backend, 'cacheCapacity': capacity})
        return cls(dao=dao, cache=cache)

    def shorten(self, target: str) -> ShortenResult:
        """Create (or fetch) the short link for a target URL

        Args:
            target (str):
                Target URL in canonical (decoded) form.

        Returns:
            ShortenResult: created flag, token and canonical stored target.

        Raises:
            MalformedInputError:
                If target is not a non-blank string.
            TokenCollisionError:
                If the token already maps to an unrelated target.
            StoreUnavailableError:
                If the store fails.
        """
        if not isinstance(target, str) or not target.strip():
            raise MalformedInputError('Target must be a non-empty string.')

        token = generate_token(target)
        with _classify_store_errors(token):
            existing, created = self.dao.create_if_absent(token, target)

        if created:
            logger.info('Created short link.', extra={'token': token})
            return ShortenResult(created=True, token=token, target=target)

        if existing == target:
            logger.debug('Short link already exists.', extra={'token': token})
            return ShortenResult(created=False, token=token, target=target)

        if is_transport_form(existing, target):
            # Legacy row stored in Base64 transport form: rewrite it canonically
            # and overwrite any cached copy of the old value.
            with _classify_store_errors(token):
                self.dao.update_target(token, target)
            self.cache.put(token, target)
            logger.warning('Reconciled short link stored in transport encoding.', extra={'token': token})
            return ShortenResult(created=False, token=token, target=target)

        logger.error('Token collision detected.', extra={'token': token, 'event': TokenCollisionError.error_code})
        raise TokenCollisionError(token=token, existing_target=existing, target=target)

    def resolve(self, token: str) -> str:
        """Resolve a token to its target URL (read-through cache)

        Args:
            token (str):
                Token of exactly TOKEN_LENGTH Base62 characters.

        Returns:
            str: the target URL.

        Raises:
            MalformedInputError:
                If the token has the wrong length or alphabet (no store access).
            LinkNotFoundError:
                If the token is not in the store.
            StoreUnavailableError:
                If the store fails.
        """
        if not is_valid_token(token):
            raise MalformedInputError(f'Token must be {TOKEN_LENGTH} alphanumeric characters.')

        target = self.cache.get(token)
        if target is not None:
            logger.debug('Resolution cache hit.', extra={'token': token})
            return target

        with _classify_store_errors(token):
            link = self.dao.get(token)

        self.cache.put(token, link.target)
        logger.debug('Resolution cache miss, populated from store.', extra={'token': token})
        return link.target
