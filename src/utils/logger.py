"""Centralized logging for the statement runner.
Library modules log under "runner.*" without handlers; entry points configure "runner" once.
"""
import logging
import sys
from datetime import date
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def log_file_path(log_dir: str | Path, day: date | None = None) -> Path:
    """Daily log file: <log_dir>/runner_execution_YYYYMMDD.log."""
    day = day or date.today()
    return Path(log_dir) / f"runner_execution_{day:%Y%m%d}.log"


def _stdout_handler(formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    return handler


def _daily_file_handler(log_dir: str | Path, formatter: logging.Formatter) -> logging.Handler:
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file_path(log_dir), encoding="utf-8")
    handler.setFormatter(formatter)
    return handler


def get_logger(
    name: str = "runner",
    log_dir: str | Path | None = None,
    level: int | str = logging.INFO,
) -> logging.Logger:
    """Return logger `name`, attaching stdout and optional daily-file handlers the first time only."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    # setLevel accepts "info" only once upper-cased
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    logger.addHandler(_stdout_handler(formatter))
    if log_dir:
        logger.addHandler(_daily_file_handler(log_dir, formatter))
    return logger


def logger_from_config(config: dict, project_root: str | Path) -> logging.Logger:
    """Configure the "runner" logger from the `logging.level` and `paths.logs_dir` config keys."""
    logs_dir = (config.get("paths") or {}).get("logs_dir")
    level = (config.get("logging") or {}).get("level", "INFO")
    return get_logger("runner", log_dir=Path(project_root) / logs_dir if logs_dir else None, level=level)
