"""
Tests for the logging configuration helpers.
"""

import logging
import logging.handlers
import pytest

from range_picker.logging_config import (
    ColoredFormatter, LogContext, PACKAGE_LOGGER, configure_module_logger,
    get_logger, log_exception, setup_logging, setup_selection_logging
)


@pytest.fixture
def restore_logging():
    """Drop handlers installed by setup_logging and restore levels."""
    root = logging.getLogger()
    level = root.level
    touched = [f"{PACKAGE_LOGGER}.{name}" for name in ("drag_selection", "coordinator", "scheduling")]
    levels = {name: logging.getLogger(name).level for name in touched}
    yield
    for handler in list(root.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler) or \
                isinstance(handler.formatter, ColoredFormatter):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    for name, original in levels.items():
        logging.getLogger(name).setLevel(original)


class TestSetupLogging:

    def test_file_handlers_created(self, tmp_path, restore_logging):
        setup_logging(level="DEBUG", log_dir=str(tmp_path / "logs"), enable_console=False)
        get_logger("range_picker.test").debug("debug line")

        for handler in logging.getLogger().handlers:
            handler.flush()

        assert (tmp_path / "logs" / "range_picker.log").exists()
        debug_log = (tmp_path / "logs" / "range_picker_debug.log").read_text(encoding="utf-8")
        assert "debug line" in debug_log

    def test_console_only(self, tmp_path, restore_logging):
        setup_logging(level="WARNING", log_dir=str(tmp_path), enable_file=False)
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, ColoredFormatter)


class TestColoredFormatter:

    def test_levelname_restored_after_format(self):
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "hello", None, None)
        text = ColoredFormatter("%(levelname)s %(message)s").format(record)
        assert "\033[32mINFO\033[0m hello" == text
        assert record.levelname == "INFO"


class TestModuleLoggers:

    def test_configure_module_logger(self, restore_logging):
        logger = configure_module_logger(f"{PACKAGE_LOGGER}.coordinator", level="ERROR")
        assert logger.level == logging.ERROR
        assert logger.propagate

    def test_setup_selection_logging(self, restore_logging):
        setup_selection_logging()
        assert logging.getLogger(f"{PACKAGE_LOGGER}.drag_selection").level == logging.DEBUG
        assert logging.getLogger(f"{PACKAGE_LOGGER}.scheduling").level == logging.DEBUG

    def test_log_context_restores_level(self):
        logger = get_logger("range_picker.context_test")
        logger.setLevel(logging.WARNING)
        with LogContext(logger, "DEBUG") as active:
            assert active.level == logging.DEBUG
        assert logger.level == logging.WARNING

    def test_log_exception_includes_context(self, caplog):
        logger = get_logger("range_picker.exception_test")
        try:
            raise ValueError("bad day")
        except ValueError as exc:
            with caplog.at_level(logging.ERROR, logger="range_picker.exception_test"):
                log_exception(logger, exc, {"day": "2024-01-10"})

        assert "[day=2024-01-10]: ValueError: bad day" in caplog.text
        assert caplog.records[0].exc_info is not None
