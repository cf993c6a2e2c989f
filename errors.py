"""
Exceptions raised by OracleClient.

Every exception carries a context dict with the inputs of the failed call
and the error reported by the native driver ('Unknown error' when the driver
signalled a failure without any detail).
"""
import builtins
import json

UNKNOWN_ERROR = 'Unknown error'


def error_context(driver, exc, **inputs) -> dict:
    """Builds the context of a failed call, reading the driver error right away."""
    context = dict(inputs)
    error = driver.describe_error(exc)
    context['error'] = UNKNOWN_ERROR if error is None else error
    return context


class OracleClientError(Exception):
    """Base class for all the client errors."""

    def __init__(self, message: str, context: dict = None):
        self.message = message
        self.context = context or {}
        super().__init__(f"{message} {json.dumps(self.context, default=str)}")

    @property
    def error(self):
        return self.context.get('error')


class ConnectionError(OracleClientError, builtins.ConnectionError):
    """
    The connection could not be opened.

    Note: the context holds the password exactly as supplied, and so does
    str(exc). Do not log these exceptions where credentials must not appear.
    """


class ConnectionClosedError(OracleClientError):
    """An operation was attempted on a closed client."""


class CommitError(OracleClientError):
    pass


class QueryError(OracleClientError):
    """Base class for the failures of all/yield_all/execute."""


class ParseError(QueryError):
    pass


class BindError(QueryError):
    pass


class ExecuteError(QueryError):
    pass


class FetchError(QueryError):
    pass
