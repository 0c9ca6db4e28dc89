"""Abstract base class for short link data access objects (DAOs).

This class establishes a consistent contract for all short link DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, SQLite).

Responsibilities:
    - Provide an interface for atomically creating and retrieving ShortLinkModel objects.
    - Standardize error handling across multiple data store implementations.
    - Enforce a consistent API for use by the shortener service.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shortlink.dao.redis import ShortLinkRedisDAO

        >>> dao = ShortLinkRedisDAO(...)

        >>> dao.create_if_absent('Gh71WPTaq0Zx', 'https://example.com/blog/article-123')
        ('https://example.com/blog/article-123', True)

        >>> dao.create_if_absent('Gh71WPTaq0Zx', 'https://example.com/blog/article-123')
        ('https://example.com/blog/article-123', False)

        >>> dao.get('Gh71WPTaq0Zx').target
        'https://example.com/blog/article-123'
"""

from abc import ABC, abstractmethod

from shortlink.models import ShortLinkModel


class ShortLinkBaseDAO(ABC):
    """Interface for short link data access objects (DAOs).

    Methods:
        get(token: str, **kwargs) -> ShortLinkModel:
            Retrieve a ShortLinkModel from the data store by token.
            Raises ShortLinkNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

        create_if_absent(token: str, target: str, **kwargs) -> tuple[str, bool]:
            Atomically insert a token -> target row unless the token exists.
            Returns the stored target and whether this call created it.
            Raises DataStoreError on connection or write failure.

        update_target(token: str, target: str, **kwargs) -> ShortLinkBaseDAO:
            Overwrite the target of an existing row.
            Raises ShortLinkNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or write failure.

    Subclassing:
        Datastore-specific implementations (e.g., ShortLinkRedisDAO or
        ShortLinkSQLiteDAO) must extend this class and implement all
        abstract methods. create_if_absent() must be a single atomic store
        operation: the store's uniqueness on the token decides which of
        several racing callers creates the row.

    NOTE:
        - Links never expire. The DAO does not provide an interface to delete entries.
    """

    @abstractmethod
    def get(self, token: str, **kwargs) -> ShortLinkModel:
        """Retrieve a ShortLinkModel from the data store by its token.

        Args:
            token (str):
                The token of the ShortLinkModel to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortLinkModel: The ShortLinkModel instance.

        Raises:
            ShortLinkNotFoundError:
                If no ShortLinkModel with the given token exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def create_if_absent(self, token: str, target: str, **kwargs) -> tuple[str, bool]:
        """Create a token -> target row unless one already exists.

        Args:
            token (str):
                The token to insert.

            target (str):
                The target URL to associate with the token.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            tuple[str, bool]:
                (stored target, created). When the row already existed its
                target is returned unchanged and created is False.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def update_target(self, token: str, target: str, **kwargs) -> 'ShortLinkBaseDAO':
        """Overwrite the target of an existing row.

        Only meant for reconciling rows stored in a non-canonical encoding.

        Args:
            token (str):
                The token of the row to update.

            target (str):
                The new target URL.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortLinkBaseDAO: self (for method chaining)

        Raises:
            ShortLinkNotFoundError:
                If no row with the given token exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass
