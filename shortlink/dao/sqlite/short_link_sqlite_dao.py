"""Data Access Object (DAO) implementation for managing short links in SQLite

Persisted layout (one table):

    CREATE TABLE short_links (token TEXT NOT NULL, target TEXT NOT NULL);
    CREATE UNIQUE INDEX idx_short_links_token ON short_links (token);

Every thread gets its own connection. Writers wait at most `timeout` seconds
for the database lock before the call fails with DataStoreError.

Classes:
    ShortLinkSQLiteDAO:
        DAO for storing and retrieving ShortLinkModel in a SQLite database file.

Example:
    >>> dao = ShortLinkSQLiteDAO(sqlite_path='/var/lib/shortlink/links.db')
    >>> dao.create_if_absent('Gh71WPTaq0Zx', 'https://example.com/page')
    ('https://example.com/page', True)
    >>> dao.get('Gh71WPTaq0Zx').target
    'https://example.com/page'
"""

import sqlite3
import threading
from pathlib import Path
from typing import Optional

from beartype import beartype

from shortlink.models import ShortLinkModel
from shortlink.dao.base import ShortLinkBaseDAO
from shortlink.dao.sqlite.helpers import handle_sqlite_errors
from shortlink.dao.exceptions import ShortLinkNotFoundError
from shortlink.utils.config import project_root
from shortlink.utils.constants import DEFAULT_SQLITE_TIMEOUT


class ShortLinkSQLiteDAO(ShortLinkBaseDAO):
    """SQLite-based Data Access Object (DAO) for managing short link mappings

    Attributes:
        path (Path):
            Location of the SQLite database file.
        table (str):
            Name of the short links table.
        timeout (float):
            Seconds to wait for a locked database.

    Methods:
        get(token: str, **kwargs) -> ShortLinkModel
        create_if_absent(token: str, target: str, **kwargs) -> tuple[str, bool]
        update_target(token: str, target: str, **kwargs) -> ShortLinkSQLiteDAO
        close() -> None
    """

    def __init__(
        self,
        sqlite_path: str | Path = 'shortlink.db',
        sqlite_timeout: Optional[float] = DEFAULT_SQLITE_TIMEOUT,
        sqlite_table: str = 'short_links',
    ):
        """Initialize a SQLite-based DAO and create the schema if missing

        Args:
            sqlite_path (str | Path):
                Database file. Relative paths are resolved against project_root().
            sqlite_timeout (Optional[float]):
                Seconds to wait for a locked database. Defaults to 5.0, also
                when None is given.
            sqlite_table (str):
                Table name. Defaults to 'short_links'.

        Raises:
            ValueError:
                If the table name is not a plain identifier.
            DataStoreError:
                If the database cannot be opened or the schema cannot be created.
        """
        if not sqlite_table.isidentifier():
            raise ValueError(f'Table name must be a plain identifier (given value: {sqlite_table!r}).')

        path = Path(sqlite_path)
        self.path = path if path.is_absolute() else project_root() / path
        self.table = sqlite_table
        self.timeout = float(DEFAULT_SQLITE_TIMEOUT if sqlite_timeout is None else sqlite_timeout)
        self._local = threading.local()

        self._create_schema()

    @property
    def connection(self) -> sqlite3.Connection:
        """Connection owned by the calling thread (opened lazily)."""
        conn = getattr(self._local, 'connection', None)
        if conn is None:
            conn = sqlite3.connect(self.path, timeout=self.timeout)
            self._local.connection = conn
        return conn

    def close(self) -> None:
        """Close the calling thread's connection, if any."""
        conn = getattr(self._local, 'connection', None)
        if conn is not None:
            conn.close()
            self._local.connection = None

    @handle_sqlite_errors
    def _create_schema(self) -> None:
        with self.connection as conn:
            conn.execute(f'CREATE TABLE IF NOT EXISTS {self.table} (token TEXT NOT NULL, target TEXT NOT NULL)')
            conn.execute(f'CREATE UNIQUE INDEX IF NOT EXISTS idx_{self.table}_token ON {self.table} (token)')

    @handle_sqlite_errors
    @beartype
    def get(self, token: str, **kwargs) -> ShortLinkModel:
        """Retrieve a stored short link mapping by token

        Raises:
            ShortLinkNotFoundError:
                If no row with the token exists.
            DataStoreError:
                If the database fails.
        """
        row = self.connection.execute(f'SELECT target FROM {self.table} WHERE token = ?', (token,)).fetchone()
        if row is None:
            raise ShortLinkNotFoundError(f"Short link with token '{token}' not found.")
        return ShortLinkModel(target=row[0], token=token)

    @handle_sqlite_errors
    @beartype
    def create_if_absent(self, token: str, target: str, **kwargs) -> tuple[str, bool]:
        """Insert a token -> target row unless the token already exists

        The conditional INSERT and the SELECT share one transaction, and the
        unique index on `token` decides the winner of concurrent inserts.

        Returns:
            tuple[str, bool]:
                (stored target, created)

        Raises:
            DataStoreError:
                If the database fails.
        """
        with self.connection as conn:
            cursor = conn.execute(
                f'INSERT INTO {self.table} (token, target) VALUES (?, ?) ON CONFLICT (token) DO NOTHING',
                (token, target),
            )
            created = cursor.rowcount == 1
            (stored_target,) = conn.execute(f'SELECT target FROM {self.table} WHERE token = ?', (token,)).fetchone()
        return stored_target, created

    @handle_sqlite_errors
    @beartype
    def update_target(self, token: str, target: str, **kwargs) -> 'ShortLinkSQLiteDAO':
        """Overwrite the target of an existing row

        Raises:
            ShortLinkNotFoundError:
                If no row with the token exists.
            DataStoreError:
                If the database fails.
        """
        with self.connection as conn:
            cursor = conn.execute(f'UPDATE {self.table} SET target = ? WHERE token = ?', (target, token))
        if cursor.rowcount == 0:
            raise ShortLinkNotFoundError(f"Short link with token '{token}' not found.")
        return self
