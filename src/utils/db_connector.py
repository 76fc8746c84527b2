"""Database connection helper - address, user and password come from args, env vars or config.
Supports: PostgreSQL (psycopg2), SQL Server (pyodbc), DuckDB (file-based).
The driver is picked from the address scheme; the address itself is passed through.
"""
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from urllib.parse import urlsplit

from src.utils.errors import DatabaseConnectionError

try:
    import pyodbc
    HAS_PYODBC = True
except ImportError:
    HAS_PYODBC = False

try:
    import psycopg2
    HAS_PSYCOPG2 = True
except ImportError:
    HAS_PSYCOPG2 = False

try:
    import duckdb
    HAS_DUCKDB = True
except ImportError:
    HAS_DUCKDB = False

DEFAULT_ADDRESS = "postgresql://localhost:5432/musicadb2"
DEFAULT_USER = "root"
DEFAULT_PASSWORD = "1234"

_PROJECT_ROOT = Path(__file__).resolve().parents[2]

logger = logging.getLogger("runner.connector")


def load_config() -> dict:
    """Read src/config/config.yaml; an absent file means built-in defaults."""
    import yaml
    config_path = Path(os.getenv("PROJECT_ROOT") or _PROJECT_ROOT) / "src" / "config" / "config.yaml"
    if not config_path.exists():
        return {}
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_connection_params(
    address: str | None = None,
    user: str | None = None,
    password: str | None = None,
    config: dict | None = None,
) -> tuple[str, str, str]:
    """Resolve (address, user, password): explicit value, then env, then config.yaml, then defaults.
    config.yaml is only read when some value is missing.
    """
    if address and user is not None and password is not None:
        return address, user, password
    cfg = (config if config is not None else load_config()).get("connection", {}) or {}
    cfg_password = cfg.get("password")
    return (
        address or os.getenv("DB_ADDRESS") or cfg.get("address") or DEFAULT_ADDRESS,
        user if user is not None else os.getenv("DB_USER", cfg.get("user") or DEFAULT_USER),
        password if password is not None else os.getenv(
            "DB_PASSWORD", DEFAULT_PASSWORD if cfg_password is None else str(cfg_password)
        ),
    )


def _odbc_connection_string(address: str, user: str, password: str) -> str:
    """Build an ODBC string from mssql://host:port/db, or extend a raw ODBC string with credentials."""
    if "DRIVER=" in address.upper():
        return f"{address.rstrip(';')};UID={user};PWD={password}"
    parts = urlsplit(address)
    driver = os.getenv("DB_DRIVER", "ODBC Driver 17 for SQL Server")
    return (
        f"DRIVER={{{driver}}};"
        f"SERVER={parts.hostname or 'localhost'},{parts.port or 1433};"
        f"DATABASE={parts.path.lstrip('/')};"
        f"UID={user};"
        f"PWD={password}"
    )


def _connect(address: str, user: str, password: str):
    scheme = address.split(":", 1)[0].lower() if "://" in address else ""
    if scheme in ("postgresql", "postgres"):
        if not HAS_PSYCOPG2:
            raise DatabaseConnectionError("PostgreSQL address given but psycopg2 is not installed: pip install psycopg2-binary")
        conn = psycopg2.connect(address, user=user, password=password)
        conn.autocommit = True
        return conn
    if scheme == "duckdb":
        if not HAS_DUCKDB:
            raise DatabaseConnectionError("DuckDB address given but duckdb is not installed: pip install duckdb")
        db_path = address[len("duckdb://"):]
        if db_path.startswith("/"):
            db_path = db_path[1:]
        if db_path != ":memory:":
            os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)
        return duckdb.connect(db_path)
    if scheme == "mssql" or "DRIVER=" in address.upper():
        if not HAS_PYODBC:
            raise DatabaseConnectionError("SQL Server address given but pyodbc is not installed: pip install pyodbc")
        return pyodbc.connect(_odbc_connection_string(address, user, password), autocommit=True)
    raise DatabaseConnectionError(
        f"Unsupported connection address {address!r}. "
        "Use postgresql://, mssql://, duckdb:/// or an ODBC connection string."
    )


def open_connection(address: str | None = None, user: str | None = None, password: str | None = None):
    """Open an autocommit DB-API connection. Config and driver faults are raised as DatabaseConnectionError."""
    try:
        address, user, password = get_connection_params(address, user, password)
        logger.debug("Opening connection to %s as %s", address, user)
        return _connect(address, user, password)
    except DatabaseConnectionError:
        raise
    except Exception as e:
        raise DatabaseConnectionError(f"Could not connect to {address or 'the configured database'}: {e}") from e


def close_connection(conn) -> None:
    """Close a connection; a failing close is raised as DatabaseConnectionError."""
    try:
        conn.close()
    except Exception as e:
        raise DatabaseConnectionError(f"Could not close connection: {e}") from e
    logger.debug("Connection closed")


@contextmanager
def get_connection(address: str | None = None, user: str | None = None, password: str | None = None):
    """Yield a database connection and close it on every exit path."""
    conn = open_connection(address, user, password)
    try:
        yield conn
    finally:
        close_connection(conn)
