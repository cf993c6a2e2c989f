"""
OracleClient - a blocking database session over a native driver.

Statements never outlive the call that created them (or the RowStream
returned by yield_all): they are released on success and before any error
is raised. Nothing is retried and nothing is committed implicitly.
"""
import logging
import os
import weakref

from config import config, configure_logging
from db_drivers import DatabaseDriver, get_driver
from errors import (BindError, CommitError, ConnectionClosedError,
                    ConnectionError, ExecuteError, FetchError, ParseError,
                    error_context)

logger = logging.getLogger(__name__)


class RowStream:
    """
    Lazy, single-pass sequence of rows.

    Each step performs one blocking fetch. The statement is released once:
    at the end of the results, on a fetch failure, or when the stream is
    closed (explicitly, by a with block or by garbage collection).
    """

    def __init__(self, driver: DatabaseDriver, statement, bindings=None):
        self._driver = driver
        self._statement = statement
        self._bindings = bindings

    @property
    def closed(self) -> bool:
        return self._statement is None

    def __iter__(self):
        return self

    def __next__(self) -> dict:
        if self._statement is None:
            raise StopIteration

        try:
            row = self._driver.fetch_one(self._statement)
        except self._driver.errors as e:
            context = error_context(self._driver, e, sql=self._statement.sql,
                                    bindings=self._bindings)
            try:
                self.close()
            except self._driver.errors:
                logger.warning("Could not release the statement after a fetch failure", exc_info=True)
            raise FetchError('Could not fetch the next row.', context) from e

        if row is None:
            self.close()
            raise StopIteration
        return row

    def close(self):
        if self._statement is not None:
            statement, self._statement = self._statement, None
            self._driver.free_statement(statement)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __del__(self):
        if getattr(self, '_statement', None) is not None:
            self.close()


class OracleClient:
    """
    Session on a single connection.

    Args:
        username: Username
        password: Password
        connection_string: Connect descriptor, Easy Connect string or alias
        character_set: Client character set
        driver: Registered driver name or a DatabaseDriver instance
    """

    def __init__(self, username: str, password: str, connection_string=None,
                 character_set=None, driver='oracle'):
        self.conn = None
        self._streams = weakref.WeakSet()
        self.driver = get_driver(driver) if isinstance(driver, str) else driver

        try:
            self.conn = self.driver.connect(username, password, connection_string, character_set)
        except self.driver.errors as e:
            # The password is reported as supplied
            context = error_context(
                self.driver, e,
                username=username,
                password=password,
                connection_string=connection_string,
                character_set=character_set,
            )
            logger.warning(f"Connection failed | driver={self.driver.name} user={username} "
                           f"target={connection_string}")
            raise ConnectionError('Could not connect.', context) from e

        logger.info(f"Connected | driver={self.driver.name} user={username} target={connection_string}")

    @classmethod
    def from_config(cls, config_name=None):
        """Opens a client with the credentials of the selected configuration."""
        if config_name is None:
            config_name = os.environ.get('ORACLE_CLIENT_ENV', 'default')

        cfg = config[config_name]
        configure_logging(cfg.LOG_LEVEL)

        options = {}
        if cfg.DB_DRIVER == 'oracle':
            options['lib_dir'] = cfg.ORACLE_CLIENT_LIB_DIR

        return cls(
            cfg.ORACLE_USERNAME,
            cfg.ORACLE_PASSWORD,
            cfg.ORACLE_CONNECTION_STRING,
            cfg.ORACLE_CHARACTER_SET,
            driver=get_driver(cfg.DB_DRIVER, **options),
        )

    @property
    def is_open(self) -> bool:
        return self.conn is not None

    def close(self):
        """Releases the connection. Does nothing when it is already closed."""
        if self.conn is None:
            return
        conn, self.conn = self.conn, None
        try:
            # Open streams hold statements on this connection
            for stream in list(self._streams):
                stream.close()
        finally:
            self.driver.close(conn)
        logger.debug("Connection closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __del__(self):
        if getattr(self, 'conn', None) is not None:
            self.close()

    def all(self, sql: str, bindings: dict = None) -> list:
        """
        Gets the rows as a list.

        Args:
            sql: SQL query
            bindings: Bindings by name

        Returns:
            list: rows as dicts, in fetch order
        """
        statement = self._prepare_and_execute(sql, bindings)
        try:
            rows = self.driver.fetch_all(statement)
        except self.driver.errors as e:
            context = error_context(self.driver, e, sql=sql, bindings=bindings)
            raise FetchError('Could not fetch all the rows.', context) from e
        finally:
            self.driver.free_statement(statement)
        return rows

    def yield_all(self, sql: str, bindings: dict = None) -> RowStream:
        """
        Yields the rows one fetch at a time.

        Parse, bind and execute errors are raised by this call; fetch errors
        while iterating.
        """
        statement = self._prepare_and_execute(sql, bindings)
        stream = RowStream(self.driver, statement, bindings)
        self._streams.add(stream)
        return stream

    def execute(self, sql: str, bindings: dict = None) -> int:
        """
        Executes an INSERT, UPDATE or DELETE.

        Returns:
            int: affected rows
        """
        statement = self._prepare_and_execute(sql, bindings)
        try:
            affected = self.driver.num_rows(statement)
        except self.driver.errors as e:
            context = error_context(self.driver, e, sql=sql, bindings=bindings)
            raise ExecuteError('Could not count the affected rows.', context) from e
        finally:
            self.driver.free_statement(statement)
        logger.debug(f"Affected rows | {affected}")
        return affected

    def commit(self):
        """Commits the outstanding transaction of the connection."""
        self._check_open()
        try:
            self.driver.commit(self.conn)
        except self.driver.errors as e:
            raise CommitError('Could not commit.', error_context(self.driver, e)) from e
        logger.debug("Transaction committed")

    def _check_open(self, **context):
        if self.conn is None:
            raise ConnectionClosedError('Connection is closed.', context)

    def _prepare_and_execute(self, sql: str, bindings):
        self._check_open(sql=sql)
        logger.debug(f"Execute | {sql}")

        try:
            statement = self.driver.parse(self.conn, sql)
        except self.driver.errors as e:
            raise ParseError('Could not parse.', error_context(self.driver, e, sql=sql)) from e

        try:
            if bindings is not None:
                self._bind_parameters(statement, bindings)

            try:
                self.driver.execute(statement)
            except self.driver.errors as e:
                context = error_context(self.driver, e, sql=sql, bindings=bindings)
                raise ExecuteError('Could not execute.', context) from e
        except BaseException:
            self.driver.free_statement(statement)
            raise

        return statement

    def _bind_parameters(self, statement, bindings: dict):
        # Bindings already applied are dropped together with the statement
        for key, value in bindings.items():
            try:
                self.driver.bind_by_name(statement, key, value)
            except self.driver.errors as e:
                context = error_context(self.driver, e, key=key, value=value)
                raise BindError('Could not bind parameter by name.', context) from e
