"""
Logging Configuration for the Range Picker

Provides the logging setup used by applications embedding the picker:
- Rotating file handlers (prevents unbounded log growth)
- Colored console output
- Module-specific loggers for granular control (e.g. DEBUG only for the
  drag state machine while diagnosing a gesture problem)

Usage Example:
    from range_picker.logging_config import setup_logging, get_logger

    setup_logging(level="INFO", log_dir="logs", enable_console=True, enable_file=False)

    logger = get_logger(__name__)
    logger.info("Picker created")

Log Files Created (when enable_file=True):
- logs/range_picker.log: Main log (INFO+)
- logs/range_picker_debug.log: Debug log (DEBUG+), includes every state transition

Each file rotates at 10MB with 5 backup files.
"""

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional


# Log format templates
DETAILED_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - "
    "[%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
)

SIMPLE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

CONSOLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

PACKAGE_LOGGER = "range_picker"


class ColoredFormatter(logging.Formatter):
    """
    Colored formatter for console output.

    Adds ANSI color codes to log levels for better readability.
    """

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        """Add color to levelname without leaking it into other handlers."""
        original = record.levelname
        if original in self.COLORS:
            record.levelname = f"{self.COLORS[original]}{original}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(
    level: str = "INFO",
    log_dir: str = "logs",
    enable_console: bool = True,
    enable_file: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
    format_style: str = "detailed"
) -> None:
    """
    Setup application-wide logging configuration.

    Call once at application startup.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files
        enable_console: Whether to log to console
        enable_file: Whether to log to file
        max_bytes: Maximum size per log file before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)
        format_style: "detailed" or "simple" format
    """
    if enable_file:
        Path(log_dir).mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    log_format = DETAILED_FORMAT if format_style == "detailed" else SIMPLE_FORMAT

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, level.upper()))
        console_handler.setFormatter(ColoredFormatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(console_handler)

    if enable_file:
        main_handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(log_dir, "range_picker.log"),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        main_handler.setLevel(logging.INFO)
        main_handler.setFormatter(logging.Formatter(log_format, datefmt=DATE_FORMAT))
        root_logger.addHandler(main_handler)

        debug_handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(log_dir, "range_picker_debug.log"),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        debug_handler.setLevel(logging.DEBUG)
        debug_handler.setFormatter(logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(debug_handler)

    root_logger.info(
        f"Logging initialized - Level: {level}, "
        f"Console: {enable_console}, File: {enable_file}"
    )


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module (typically ``__name__``)."""
    return logging.getLogger(name)


def log_exception(
    logger: logging.Logger,
    exception: Exception,
    context: Optional[dict] = None,
    level: str = "ERROR"
) -> None:
    """
    Log an exception with full traceback and context.

    Args:
        logger: Logger instance
        exception: Exception to log
        context: Additional context dict (range key, day, etc.)
        level: Log level (default: ERROR)
    """
    log_level = getattr(logging, level.upper())

    context_str = ""
    if context:
        context_items = [f"{k}={v}" for k, v in context.items()]
        context_str = f" [{', '.join(context_items)}]"

    logger.log(
        log_level,
        f"Exception occurred{context_str}: {type(exception).__name__}: {str(exception)}",
        exc_info=True
    )


def configure_module_logger(
    module_name: str,
    level: Optional[str] = None,
    propagate: bool = True
) -> logging.Logger:
    """
    Configure logging for a specific module.

    Args:
        module_name: Module name (e.g., "range_picker.drag_selection")
        level: Log level for this module (None = inherit from root)
        propagate: Whether to propagate to parent loggers

    Returns:
        Configured logger
    """
    logger = logging.getLogger(module_name)

    if level:
        logger.setLevel(getattr(logging, level.upper()))

    logger.propagate = propagate

    return logger


def setup_selection_logging(level: str = "DEBUG") -> None:
    """Trace the selection engine (drag transitions, commits, previews)."""
    configure_module_logger(f"{PACKAGE_LOGGER}.drag_selection", level=level)
    configure_module_logger(f"{PACKAGE_LOGGER}.coordinator", level=level)
    configure_module_logger(f"{PACKAGE_LOGGER}.scheduling", level=level)


class LogContext:
    """
    Context manager for temporary log level changes.

    Example:
        >>> logger = get_logger("range_picker.drag_selection")
        >>> with LogContext(logger, "DEBUG"):
        ...     coordinator.press(day)
    """

    def __init__(self, logger: logging.Logger, level: str):
        self.logger = logger
        self.new_level = getattr(logging, level.upper())
        self.original_level = logger.level

    def __enter__(self):
        """Set temporary level"""
        self.logger.setLevel(self.new_level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Restore original level"""
        self.logger.setLevel(self.original_level)
