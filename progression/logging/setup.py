"""
Logging configuration for Progression.

Provides:
- Rich console output with colors and formatting
- Optional rotating file logs, human-readable or JSON

The library only emits records; applications opt in by calling
setup_logging().
"""
import logging
import json
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from ..core.config import get_config


ROOT_LOGGER = "progression"

# Console shared with the rich progress reporter
console = Console(stderr=True)


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Task context passed through `extra=`
        if hasattr(record, "task_key"):
            log_data["task_key"] = record.task_key
        if hasattr(record, "depth"):
            log_data["depth"] = record.depth
        if hasattr(record, "step"):
            log_data["step"] = record.step

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


class HumanFormatter(logging.Formatter):
    """Human-readable formatter for file logs."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s | %(name)-30s | %(levelname)-8s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    json_format: bool = False,
) -> logging.Logger:
    """
    Initialize logging for the progression namespace.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR); config default if None
        log_file: Rotating log file path; config value if None, no file if both unset
        json_format: Use JSON format for file logs

    Returns:
        The configured root logger
    """
    config = get_config()
    level = (level or config.log.level).upper()

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(getattr(logging, level))

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        markup=False,
    )
    console_handler.setLevel(getattr(logging, level))
    root_logger.addHandler(console_handler)

    log_path = log_file or config.log.log_file
    if log_path:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=config.log.max_file_size,
            backupCount=config.log.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)  # File captures everything

        if json_format:
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(HumanFormatter())

        root_logger.addHandler(file_handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Module name (will be prefixed with 'progression.')

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
