"""
Statement runner: execute one SQL statement and hand its result to a continuation.

Two ways in:
- execute_on_new_connection(): open a connection, run one statement, close it.
- StatementRunner: hold a connection open across several statements (use it in a `with` block).

A query containing "select" anywhere (case-insensitive) is treated as producing a result set;
pass producing=True/False to override. The statement cursor and, for producing queries, the
TabularResult are released on every exit path, result first.
"""
import logging
from contextlib import contextmanager
from typing import Any, Callable

from src.runner.continuations import discard
from src.runner.result import TabularResult
from src.utils.db_connector import close_connection, get_connection, open_connection
from src.utils.db_helpers import affected_rows, open_statement, run_sql
from src.utils.errors import DatabaseConnectionError

Continuation = Callable[[TabularResult | None], Any]

logger = logging.getLogger("runner.statements")


def is_producing(query: str) -> bool:
    """Loose classifier: any "select" substring counts, even inside identifiers or literals."""
    return "select" in query.lower()


@contextmanager
def _result_scope(cursor, query: str):
    result = TabularResult(cursor, query)
    try:
        yield result
    finally:
        result.close()


def execute_on_connection(
    connection,
    query: str,
    continuation: Continuation = discard,
    producing: bool | None = None,
) -> Any:
    """
    Run query on an open connection and call continuation exactly once.
    The continuation gets a TabularResult for producing queries and None otherwise;
    its return value is returned. The connection is left open.
    """
    if producing is None:
        producing = is_producing(query)
    logger.debug("Executing %s statement: %s", "producing" if producing else "non-producing", query)

    with open_statement(connection) as cursor:
        run_sql(cursor, query)
        if not producing:
            logger.debug("%d row(s) affected", affected_rows(cursor))
            return continuation(None)
        with _result_scope(cursor, query) as result:
            return continuation(result)


def execute_on_new_connection(
    query: str,
    continuation: Continuation = discard,
    address: str | None = None,
    user: str | None = None,
    password: str | None = None,
    producing: bool | None = None,
) -> Any:
    """Open a connection (configured defaults unless given), run one statement, close the connection."""
    with get_connection(address, user, password) as conn:
        return execute_on_connection(conn, query, continuation, producing)


class StatementRunner:
    """
    Keeps one connection open for several sequential statements.

    Example:
        with StatementRunner() as runner:
            runner.execute("INSERT INTO artistas (nombre) VALUES ('Queen')")
            runner.execute("SELECT * FROM artistas", print_table)

    Not safe for concurrent use.
    """

    def __init__(self, address: str | None = None, user: str | None = None, password: str | None = None):
        self._connection = open_connection(address, user, password)

    @property
    def closed(self) -> bool:
        return self._connection is None

    def execute(self, query: str, continuation: Continuation = discard, producing: bool | None = None) -> Any:
        """Run query on the held connection; see execute_on_connection."""
        if self._connection is None:
            raise DatabaseConnectionError("Runner is closed")
        return execute_on_connection(self._connection, query, continuation, producing)

    def close(self) -> None:
        """Close the connection. Further calls do nothing."""
        if self._connection is None:
            return
        conn, self._connection = self._connection, None
        close_connection(conn)

    def __enter__(self) -> "StatementRunner":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
