"""
TabularResult: forward-only view over the result set of one executed statement.
Only valid while the continuation that received it is running.
"""
import re
from typing import Any, Iterator

from src.utils.db_helpers import column_names, fetch_next
from src.utils.errors import StatementExecutionError

# DB-API exposes no table name; take the first relation named after FROM.
_FROM_TABLE = re.compile(r"\bfrom\s+([`\"\[]?[\w.$]+[`\"\]]?)", re.IGNORECASE)


def table_name_from_query(query: str) -> str:
    """Best-effort table name for display; empty string when the query has no FROM clause."""
    match = _FROM_TABLE.search(query)
    if not match:
        return ""
    return match.group(1).strip('`"[]')


class TabularResult:
    """Rows of a result set plus its table name and ordered column names."""

    def __init__(self, cursor, query: str):
        self._cursor = cursor
        self.table_name = table_name_from_query(query)
        self.columns = column_names(cursor)
        self.closed = False

    def __iter__(self) -> Iterator[tuple[Any, ...]]:
        return self

    def __next__(self) -> tuple[Any, ...]:
        row = self.fetchone()
        if row is None:
            raise StopIteration
        return row

    def fetchone(self) -> tuple[Any, ...] | None:
        """Advance the cursor; None once the rows are exhausted."""
        if self.closed:
            raise StatementExecutionError("Result is closed; it is only readable inside its continuation")
        if not self.columns:
            return None
        return fetch_next(self._cursor)

    def close(self) -> None:
        self.closed = True
        self._cursor = None

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<TabularResult table={self.table_name!r} columns={self.columns!r} {state}>"
