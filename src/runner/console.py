"""
Console entry point: run one SQL statement against the configured database and print its table.

    python -m src.runner.console "SELECT * FROM canciones"

Connection settings come from DB_ADDRESS / DB_USER / DB_PASSWORD or src/config/config.yaml.
"""
import os
import sys
from pathlib import Path

# Ensure project root is on path when running as script
_PROJECT_ROOT = os.getenv("PROJECT_ROOT") or Path(__file__).resolve().parents[2]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from src.runner.continuations import print_table
from src.runner.statement_runner import execute_on_new_connection
from src.utils.db_connector import get_connection_params, load_config
from src.utils.logger import get_logger, logger_from_config


def run(query: str, config: dict | None = None) -> bool:
    """Execute query one-shot and print the result. Returns False if it failed."""
    logger = None
    try:
        cfg = config if config is not None else load_config()
        logger = logger_from_config(cfg, _PROJECT_ROOT)
        address, user, password = get_connection_params(config=cfg)
        execute_on_new_connection(query, print_table, address=address, user=user, password=password)
    except Exception as e:
        (logger or get_logger("runner")).exception("Statement failed: %s", e)
        return False

    logger.info("Statement finished successfully")
    return True


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print('Usage: python -m src.runner.console "<sql statement>"', file=sys.stderr)
        return 2
    return 0 if run(args[0]) else 1


if __name__ == "__main__":
    sys.exit(main())
