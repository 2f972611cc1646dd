# tests/test_logging_config.py

import logging

import pytest
from pathlib import Path
from rich.logging import RichHandler

from sylburst.config.models import SylburstConfig
from sylburst.utils.logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_handlers():
    logger = logging.getLogger("sylburst")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.mark.parametrize("verbosity, level", [
    (0, logging.WARNING),
    (1, logging.INFO),
    (2, logging.DEBUG),
    (5, logging.DEBUG),
])
def test_console_level_follows_verbosity(verbosity, level):
    assert setup_logging(SylburstConfig(), verbosity) is None
    handlers = logging.getLogger("sylburst").handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], RichHandler)
    assert handlers[0].level == level


def test_quiet_has_no_console_handler():
    setup_logging(SylburstConfig(), -1)
    assert logging.getLogger("sylburst").handlers == []


def test_file_logging(tmp_path: Path):
    config = SylburstConfig(
        paths={"log_directory": tmp_path / "logs"},
        logging={"log_file_enabled": True, "log_filename_template": "run.log"},
    )
    log_file = setup_logging(config, 0)
    assert log_file == (tmp_path / "logs" / "run.log").resolve()
    logging.getLogger("sylburst.test").debug("hello from the test")
    for handler in logging.getLogger("sylburst").handlers:
        handler.flush()
    text = log_file.read_text()
    assert "Log Start" in text
    assert "hello from the test" in text
