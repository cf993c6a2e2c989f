"""Driver SQLite."""
import logging
import os
import sqlite3

from .base import DatabaseDriver, DriverError, Statement

logger = logging.getLogger(__name__)


class _BindNameCollector(dict):
    """Records every named parameter sqlite3 asks for while compiling."""

    def __init__(self):
        super().__init__()
        self.names = []

    def __missing__(self, key):
        self.names.append(key)
        return None


class SQLiteDriver(DatabaseDriver):
    name = "sqlite"
    errors = DatabaseDriver.errors + (sqlite3.Error,)

    def connect(self, username: str, password: str, connection_string=None, character_set=None):
        # connection_string = path of the database file, credentials are not used
        # Empty or ":memory:" opens an in-memory database
        if not connection_string or connection_string == ':memory:':
            return sqlite3.connect(':memory:')

        db_path = os.path.normpath(connection_string)

        if not os.path.exists(db_path):
            raise DriverError(f"Database not found: {db_path}")

        if character_set:
            logger.debug(f"SQLite stores text as UTF-8, character set {character_set} ignored")
        return sqlite3.connect(db_path)

    def parse(self, connection, sql: str) -> Statement:
        # EXPLAIN compiles the statement without running it
        collector = _BindNameCollector()
        connection.execute(f"EXPLAIN {sql}", collector).close()
        return Statement(connection.cursor(), sql, collector.names)

    def describe_error(self, exc):
        error = super().describe_error(exc)
        if error is not None and isinstance(exc, sqlite3.Error):
            error['code'] = getattr(exc, 'sqlite_errorcode', None)
        return error
