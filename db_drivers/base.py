"""Base class for the native drivers wrapped by OracleClient."""
from abc import ABC, abstractmethod
import logging

logger = logging.getLogger(__name__)


class DriverError(Exception):
    """Failure detected by the driver layer itself rather than the native library."""

    def __init__(self, message: str, code=None):
        super().__init__(message)
        self.message = message
        self.code = code


class Statement:
    """A prepared statement scoped to a single operation."""

    def __init__(self, cursor, sql: str, bind_names=()):
        self.cursor = cursor
        self.sql = sql
        self.bind_names = list(bind_names)
        self.bindings = {}
        self.freed = False


class DatabaseDriver(ABC):
    """
    Minimal contract a blocking SQL client library must satisfy.

    Every method lets the native exception propagate; OracleClient converts
    anything listed in `errors` into its own error types and asks
    `describe_error` for the detail of the call that just failed.
    """

    name = "base"
    errors = (DriverError,)
    illegal_bind_code = None

    def __init__(self, **options):
        self.options = options

    @abstractmethod
    def connect(self, username: str, password: str, connection_string=None, character_set=None):
        """Opens and returns a native connection."""
        pass

    @abstractmethod
    def parse(self, connection, sql: str) -> Statement:
        """Prepares `sql` without executing it."""
        pass

    def close(self, connection):
        connection.close()

    def normalize_bind_name(self, name: str) -> str:
        return name

    def bind_by_name(self, statement: Statement, key, value):
        """Binds one value by name; unknown names are rejected before execution."""
        name = str(key).lstrip(':')
        if self.normalize_bind_name(name) not in statement.bind_names:
            raise DriverError(f"illegal variable name/number: {key}", code=self.illegal_bind_code)
        statement.bindings[name] = value

    def execute(self, statement: Statement):
        statement.cursor.execute(statement.sql, statement.bindings)

    def fetch_all(self, statement: Statement) -> list:
        columns = self._columns(statement)
        return [self._make_row(columns, row) for row in statement.cursor.fetchall()]

    def fetch_one(self, statement: Statement):
        """Returns the next row, or None once the results are exhausted."""
        row = statement.cursor.fetchone()
        if row is None:
            return None
        return self._make_row(self._columns(statement), row)

    def num_rows(self, statement: Statement) -> int:
        return statement.cursor.rowcount

    def free_statement(self, statement: Statement):
        if statement.freed:
            return
        statement.freed = True
        statement.cursor.close()

    def commit(self, connection):
        connection.commit()

    def describe_error(self, exc):
        """
        Returns the error reported by the failing native call as a dict,
        or None when the library gave no detail.
        """
        if isinstance(exc, DriverError):
            return {'code': exc.code, 'message': exc.message}
        message = str(exc)
        if not message:
            return None
        return {'code': None, 'message': message}

    def _columns(self, statement: Statement) -> list:
        description = statement.cursor.description
        return [desc[0] for desc in description] if description else []

    def _make_row(self, columns, row) -> dict:
        return {col: self._convert_value(row[i]) for i, col in enumerate(columns)}

    def _convert_value(self, value):
        """Hook for drivers returning values that need materializing."""
        return value
