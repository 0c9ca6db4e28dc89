"""Data Access Object (DAO) implementation for managing short links in Redis

This module provides a Redis-based implementation of ShortLinkBaseDAO.

Responsibilities:
    - Atomically create-or-fetch token -> target mappings;
    - Retrieve short links by token;
    - Rewrite targets of existing links (encoding reconciliation only);
    - Raise appropriate DAO exceptions on Redis failures.

Key layout:
    <prefix>:links:<token>:url -> target URL (no TTL, links never expire)

Classes:
    ShortLinkRedisDAO:
        DAO for storing and retrieving ShortLinkModel in a Redis datastore.

Example:
    >>> from shortlink.dao.redis import ShortLinkRedisDAO

    >>> dao = ShortLinkRedisDAO(prefix="app:dev")

    >>> dao.create_if_absent('Gh71WPTaq0Zx', 'https://example.com/page')
    ('https://example.com/page', True)

    >>> dao.get('Gh71WPTaq0Zx').target
    'https://example.com/page'
"""

from beartype import beartype

from shortlink.models import ShortLinkModel
from shortlink.dao.base import ShortLinkBaseDAO
from shortlink.dao.redis.mixins import RedisClientMixin
from shortlink.dao.redis.helpers import handle_redis_errors
from shortlink.dao.exceptions import DataStoreError, ShortLinkNotFoundError


class ShortLinkRedisDAO(RedisClientMixin, ShortLinkBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short link mappings

    This class implements the ShortLinkBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        get(token: str, **kwargs) -> ShortLinkModel:
            Retrieve a short link mapping by token.
            Raises ShortLinkNotFoundError when the token doesn't exist.
            Raises DataStoreError on Redis failures.

        create_if_absent(token: str, target: str, **kwargs) -> tuple[str, bool]:
            Atomically insert a mapping unless the token exists (SET NX + GET in MULTI).
            Raises DataStoreError on Redis failures.

        update_target(token: str, target: str, **kwargs) -> ShortLinkRedisDAO:
            Overwrite the target of an existing mapping (SET XX).
            Raises ShortLinkNotFoundError when the token doesn't exist.
            Raises DataStoreError on Redis failures.
    """

    @handle_redis_errors
    @beartype
    def get(self, token: str, **kwargs) -> ShortLinkModel:
        """Retrieve a stored short link mapping by token

        Args:
            token (str):
                The token identifier of the short link.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortLinkModel:
                The retrieved ShortLinkModel instance if found.

        Raises:
            ShortLinkNotFoundError:
                If the token does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('Gh71WPTaq0Zx')
            ShortLinkModel(target='https://example.com', token='Gh71WPTaq0Zx')
        """
        target = self.redis.get(self.keys.link_url_key(token))
        if target is None:
            raise ShortLinkNotFoundError(f"Short link with token '{token}' not found.")

        return ShortLinkModel(target=self._as_text(target), token=token)

    @handle_redis_errors
    @beartype
    def create_if_absent(self, token: str, target: str, **kwargs) -> tuple[str, bool]:
        """Insert a token -> target mapping unless the token already exists

        Args:
            token (str):
                The token to insert.
            target (str):
                The target URL to associate with the token.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            tuple[str, bool]:
                (stored target, created)

        Raises:
            DataStoreError:
                If a Redis failure occurs during the transaction.

        Example:
            >>> dao.create_if_absent('Gh71WPTaq0Zx', 'https://example.com')
            ('https://example.com', True)
        """
        link_url_key = self.keys.link_url_key(token)

        # NOTE: SET NX and GET run inside one MULTI/EXEC block. Redis is the
        #       only arbiter of which caller creates the key, and the GET
        #       returns the winner's target to every racing caller:
        #
        #       (lambda 1): SET <app>:links:<token>:url <target> NX  => OK
        #       (lambda 2): SET <app>:links:<token>:url <target> NX  => nil
        #       (lambda 2): GET <app>:links:<token>:url               => <target of lambda 1>
        #
        #       A separate EXISTS check followed by SET would let both callers
        #       observe a missing key and both report created=True.
        with self.redis.pipeline(transaction=True) as pipe:
            pipe.set(link_url_key, target, nx=True)
            pipe.get(link_url_key)
            created, stored_target = pipe.execute()

        if stored_target is None:
            raise DataStoreError(f"Redis returned no target for token '{token}' right after SET NX.")

        return self._as_text(stored_target), bool(created)

    @handle_redis_errors
    @beartype
    def update_target(self, token: str, target: str, **kwargs) -> 'ShortLinkRedisDAO':
        """Overwrite the target of an existing mapping

        Args:
            token (str):
                The token of the mapping to update.
            target (str):
                The new target URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortLinkRedisDAO: self (for method chaining)

        Raises:
            ShortLinkNotFoundError:
                If the token does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        updated = self.redis.set(self.keys.link_url_key(token), target, xx=True)
        if not updated:
            raise ShortLinkNotFoundError(f"Short link with token '{token}' not found.")
        return self

    @staticmethod
    def _as_text(value: str | bytes) -> str:
        # Clients created with decode_responses=False return bytes
        return value.decode('utf-8') if isinstance(value, bytes) else value
