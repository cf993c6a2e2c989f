"""Driver Oracle (thin mode, thick mode when an Instant Client is configured)."""
import logging
import os

import oracledb
from .base import DatabaseDriver, Statement

logger = logging.getLogger(__name__)

_client_initialized = False

UTF8_CHARSETS = ('AL32UTF8', 'UTF8')


def _init_client(lib_dir, character_set=None):
    """Switch to thick mode once per process."""
    global _client_initialized
    if _client_initialized:
        return

    # NLS_LANG is only read when the client library is loaded
    if character_set:
        os.environ['NLS_LANG'] = f".{character_set}"

    try:
        oracledb.init_oracle_client(lib_dir=lib_dir)
        logger.info(f"Oracle Instant Client initialized from {lib_dir}")
    except oracledb.Error as e:
        logger.warning(f"Failed to initialize Thick mode: {e}. Falling back to Thin mode.")
    _client_initialized = True


class OracleDriver(DatabaseDriver):
    name = "oracle"
    errors = DatabaseDriver.errors + (oracledb.Error,)
    illegal_bind_code = 1036

    @property
    def lib_dir(self):
        return self.options.get('lib_dir')

    def connect(self, username: str, password: str, connection_string=None, character_set=None):
        if self.lib_dir and os.path.isdir(self.lib_dir):
            _init_client(self.lib_dir, character_set)
        elif character_set and character_set.upper() not in UTF8_CHARSETS:
            logger.warning(f"Thin mode always uses UTF-8, character set {character_set} ignored")

        params = {'user': username, 'password': password}
        if connection_string is not None:
            params['dsn'] = connection_string
        return oracledb.connect(**params)

    def parse(self, connection, sql: str) -> Statement:
        # DDL is executed by the server as soon as it is parsed
        cursor = connection.cursor()
        try:
            cursor.parse(sql)
            bind_names = cursor.bindnames()
        except oracledb.Error:
            cursor.close()
            raise
        return Statement(cursor, sql, bind_names)

    def normalize_bind_name(self, name: str) -> str:
        if name.startswith('"'):
            return name.strip('"')
        return name.upper()

    def execute(self, statement: Statement):
        statement.cursor.execute(None, statement.bindings)

    def describe_error(self, exc):
        if isinstance(exc, oracledb.Error):
            detail = exc.args[0] if exc.args else None
            if hasattr(detail, 'code') and hasattr(detail, 'message'):
                return {
                    'code': detail.code,
                    'message': detail.message,
                    'offset': getattr(detail, 'offset', 0),
                }
        return super().describe_error(exc)

    def _convert_value(self, value):
        if isinstance(value, oracledb.LOB):
            return value.read()
        return value
