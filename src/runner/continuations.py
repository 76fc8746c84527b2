"""
Ready-made continuations for execute calls.
Each one receives the TabularResult of a producing statement, or None for any other statement.
"""
from typing import Any, Callable

import pandas as pd

from src.runner.result import TabularResult

NULL_OUTPUT = "query output is null"


def _cell(value: Any) -> str:
    return "null" if value is None else str(value)


def print_table(result: TabularResult | None) -> None:
    """Print the result as a tab-separated table, consuming every row."""
    if result is None:
        print(NULL_OUTPUT)
        return
    lines = [f"Tabla '{result.table_name}':", "\t".join(result.columns)]
    for row in result:
        lines.append("\t".join(_cell(v) for v in row))
    print("\n".join(lines))


def discard(result: TabularResult | None) -> None:
    """Do nothing with the result."""


def action(f: Callable[[], Any]) -> Callable[[TabularResult | None], Any]:
    """Turn a zero-argument callable into a continuation that ignores the result."""
    def run(result: TabularResult | None) -> Any:
        return f()
    return run


def print_message(message: str) -> Callable[[TabularResult | None], None]:
    """Continuation that prints a fixed message once the statement has run."""
    return action(lambda: print(message))


def to_dataframe(result: TabularResult | None) -> pd.DataFrame | None:
    """Collect the remaining rows into a DataFrame; None for statements without a result set."""
    if result is None:
        return None
    return pd.DataFrame(list(result), columns=result.columns)
