"""
Database execution helpers on top of a DB-API connection.
Every driver call goes through here so driver faults surface as StatementExecutionError.
"""
from contextlib import contextmanager
from typing import Any

from src.utils.errors import StatementExecutionError


@contextmanager
def open_statement(conn):
    """Yield a cursor from conn and close it on every exit path, including a failing close."""
    try:
        h = conn.cursor()
    except Exception as e:
        raise StatementExecutionError(f"Could not create statement: {e}") from e
    try:
        yield h
    finally:
        try:
            h.close()
        except Exception as e:
            raise StatementExecutionError(f"Could not close statement: {e}") from e


def run_sql(h, sql: str) -> None:
    """Execute a single statement on cursor h."""
    try:
        h.execute(sql)
    except Exception as e:
        raise StatementExecutionError(f"Statement failed: {e}") from e


def affected_rows(h) -> int:
    """Row count reported by the driver; -1 when it does not know."""
    count = getattr(h, "rowcount", -1)
    return count if isinstance(count, int) else -1


def column_names(h) -> list[str]:
    """Ordered column names of the current result set; empty when there is none."""
    try:
        description = h.description
    except Exception as e:
        raise StatementExecutionError(f"Could not read result metadata: {e}") from e
    return [col[0] for col in description] if description else []


def fetch_next(h) -> tuple[Any, ...] | None:
    """Return the next row of the current result set as a tuple, or None when exhausted."""
    try:
        row = h.fetchone()
    except Exception as e:
        raise StatementExecutionError(f"Could not read next row: {e}") from e
    return tuple(row) if row is not None else None
