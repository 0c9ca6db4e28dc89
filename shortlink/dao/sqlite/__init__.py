from shortlink.dao.sqlite.short_link_sqlite_dao import ShortLinkSQLiteDAO


__all__ = [
    'ShortLinkSQLiteDAO',
]
