"""
Centralized logging for the PixEvo system.

Console output is human readable; the rotating log file holds one JSON
record per line. Records are stamped with the run context kept by
`RunContextFilter`: the correlation ID of the evolution run and the
generation being processed when the record was emitted.
"""

import logging
import logging.handlers
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
import json


class RunContextFilter(logging.Filter):
    """Adds the current run's correlation ID and generation to log records."""

    def __init__(self):
        super().__init__()
        self.correlation_id: Optional[str] = None
        self.generation: Optional[int] = None

    def filter(self, record):
        if self.correlation_id:
            record.correlation_id = self.correlation_id
        if self.generation is not None:
            record.generation = self.generation
        return True


# One context for the process; setup_logging attaches it to every handler
_run_context = RunContextFilter()


class StructuredFormatter(logging.Formatter):
    """Formats log records as JSON lines."""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key in ("correlation_id", "generation"):
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        if hasattr(record, 'extra_fields'):
            log_entry.update(record.extra_fields)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))
    return handler


def _file_handler(log_file: Path, max_file_size: int, backup_count: int) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=max_file_size,
        backupCount=backup_count
    )
    handler.setFormatter(StructuredFormatter())
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    enable_console: bool = True,
    enable_file: bool = True,
    max_file_size: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5
) -> logging.Logger:
    """
    Set up logging for PixEvo.

    Calling it again replaces the handlers of the previous call.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (defaults to logs/pixevo.log)
        enable_console: Whether to log to stdout
        enable_file: Whether to log to the rotating JSON file
        max_file_size: Maximum size of log file before rotation
        backup_count: Number of rotated files to keep

    Returns:
        Configured root logger
    """
    log_file = Path(log_file) if log_file is not None else Path("logs") / "pixevo.log"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    handlers = []
    if enable_console:
        handlers.append(_console_handler())
    if enable_file:
        handlers.append(_file_handler(log_file, max_file_size, backup_count))

    # Handler filters also see records propagated from child loggers
    for handler in handlers:
        handler.addFilter(_run_context)
        root_logger.addHandler(handler)

    get_logger(__name__).info("PixEvo logging initialized", extra={
        "extra_fields": {
            "log_level": level,
            "log_file": str(log_file) if enable_file else None,
            "enable_console": enable_console,
        }
    })

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name (usually __name__)."""
    return logging.getLogger(name)


def set_correlation_id(correlation_id: Optional[str]):
    """Tag subsequent records with a run's correlation ID."""
    _run_context.correlation_id = correlation_id


def set_generation(generation: Optional[int]):
    """Tag subsequent records with the generation being processed; None clears it."""
    _run_context.generation = generation


def generate_correlation_id() -> str:
    return str(uuid.uuid4())
