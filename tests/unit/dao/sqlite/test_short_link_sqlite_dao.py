"""Unit tests for the ShortLinkSQLiteDAO

Test coverage includes:

1. Initialization and schema
   - Creates the table and a unique index on the token.
   - Relative paths resolve against project_root().
   - Rejects non-identifier table names.
   - A None timeout falls back to the 5 second default.

2. Create-if-absent behavior
   - First insert reports created=True, later ones return the stored target.
   - Concurrent inserts of the same token produce exactly one creator.

3. Retrieval and updates
   - get() returns ShortLinkModel or raises ShortLinkNotFoundError.
   - update_target() rewrites existing rows and rejects unknown tokens.

4. Failure handling
   - sqlite3 errors surface as DataStoreError.
"""

import sqlite3
import threading

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from shortlink.models import ShortLinkModel
from shortlink.dao.exceptions import DataStoreError, ShortLinkNotFoundError
from shortlink.dao.sqlite import ShortLinkSQLiteDAO


TOKEN = 'Gh71WPTaq0Zx'


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / 'links.db'


@pytest.fixture
def dao(db_path):
    _dao = ShortLinkSQLiteDAO(sqlite_path=db_path)
    yield _dao
    _dao.close()


# -------------------------------
# 1. Initialization and schema
# -------------------------------


def test_schema_is_created(dao, db_path):
    with sqlite3.connect(db_path) as conn:
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
        indexes = {row[1]: row[2] for row in conn.execute('PRAGMA index_list(short_links)')}

    assert 'short_links' in tables
    assert indexes['idx_short_links_token'] == 1  # unique


def test_relative_path_resolves_against_project_root(monkeypatch, tmp_path):
    monkeypatch.setenv('PROJECT_ROOT', str(tmp_path))

    dao = ShortLinkSQLiteDAO(sqlite_path='data.db')

    assert dao.path == tmp_path / 'data.db'
    assert (tmp_path / 'data.db').exists()
    dao.close()


def test_invalid_table_name(db_path):
    with pytest.raises(ValueError):
        ShortLinkSQLiteDAO(sqlite_path=db_path, sqlite_table='links; DROP TABLE x')


def test_reopening_keeps_rows(db_path):
    first = ShortLinkSQLiteDAO(sqlite_path=db_path)
    first.create_if_absent(TOKEN, 'https://example.com/a')
    first.close()

    second = ShortLinkSQLiteDAO(sqlite_path=db_path)
    assert second.get(TOKEN).target == 'https://example.com/a'
    second.close()


@pytest.mark.parametrize('timeout, expected', [(None, 5.0), (0.5, 0.5), (2, 2.0)])
def test_timeout_defaults_when_unset(db_path, timeout, expected):
    dao = ShortLinkSQLiteDAO(sqlite_path=db_path, sqlite_timeout=timeout)

    assert dao.timeout == expected
    dao.create_if_absent(TOKEN, 'https://example.com/a')
    dao.close()


# -------------------------------
# 2. Create-if-absent behavior
# -------------------------------


def test_create_if_absent_creates_link(dao):
    assert dao.create_if_absent(TOKEN, 'https://example.com/a') == ('https://example.com/a', True)


def test_create_if_absent_returns_existing_target(dao):
    dao.create_if_absent(TOKEN, 'https://example.com/a')

    assert dao.create_if_absent(TOKEN, 'https://example.com/other') == ('https://example.com/a', False)
    assert dao.get(TOKEN).target == 'https://example.com/a'


def test_create_if_absent_with_invalid_types(dao):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.create_if_absent(TOKEN, None)


def test_concurrent_create_if_absent_has_one_creator(dao):
    results = []
    lock = threading.Lock()
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        outcome = dao.create_if_absent(TOKEN, 'https://example.com/a')
        with lock:
            results.append(outcome)
        dao.close()

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 8
    assert sum(created for _, created in results) == 1
    assert {stored for stored, _ in results} == {'https://example.com/a'}


# -------------------------------
# 3. Retrieval and updates
# -------------------------------


def test_get_link(dao):
    dao.create_if_absent(TOKEN, 'https://example.com/a')
    assert dao.get(TOKEN) == ShortLinkModel(target='https://example.com/a', token=TOKEN)


def test_get_missing_link(dao):
    with pytest.raises(ShortLinkNotFoundError):
        dao.get('unknown1234x')


def test_update_target(dao):
    dao.create_if_absent(TOKEN, 'aHR0cHM6Ly9leGFtcGxlLmNvbS9h')

    assert dao.update_target(TOKEN, 'https://example.com/a') is dao
    assert dao.get(TOKEN).target == 'https://example.com/a'


def test_update_target_missing_link(dao):
    with pytest.raises(ShortLinkNotFoundError):
        dao.update_target(TOKEN, 'https://example.com/a')


# -------------------------------
# 4. Failure handling
# -------------------------------


def test_unopenable_database_raises(tmp_path):
    with pytest.raises(DataStoreError, match='SQLite database at'):
        ShortLinkSQLiteDAO(sqlite_path=tmp_path / 'missing-dir' / 'links.db')


def test_dropped_table_raises(dao):
    with dao.connection as conn:
        conn.execute('DROP TABLE short_links')

    with pytest.raises(DataStoreError):
        dao.get(TOKEN)
