"""Errors raised by the statement runner. Driver faults are attached as __cause__."""


class RunnerError(RuntimeError):
    """Base class for statement runner failures."""


class DatabaseConnectionError(RunnerError):
    """Opening or closing a connection failed, or the runner is already closed."""


class StatementExecutionError(RunnerError):
    """Executing a statement, reading its result or closing its cursor failed."""
