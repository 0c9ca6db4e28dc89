import functools
import sqlite3
from typing import TypeVar, Any
from collections.abc import Callable

from shortlink.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_sqlite_errors[F](method: F) -> F:
    """Wrap SQLite-interacting DAO methods to translate database failures

    Args:
        method (Callable[..., Any]):
            DAO method performing SQLite operations which may raise sqlite3.Error.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on locked databases,
            busy timeouts, disk I/O errors, or unexpected constraint violations.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except sqlite3.Error as e:
            raise DataStoreError(f'SQLite database at {self.path} failed: {e}') from e

    return wrapper
