import logging

import pytest

from notetui.logging_setup import setup_logging


@pytest.fixture()
def app_logger():
    logger = logging.getLogger("notetui")
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def test_writes_to_log_file(tmp_path, app_logger):
    log_file = tmp_path / "logs" / "notetui.log"
    logger = setup_logging(log_file)
    logging.getLogger("notetui.repository").error("Error saving note %s", "x.md")
    for handler in logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "Logging initialized" in text
    assert "ERROR | notetui.repository | Error saving note x.md" in text


def test_second_call_adds_no_handler(tmp_path, app_logger):
    setup_logging(tmp_path / "notetui.log")
    setup_logging(tmp_path / "notetui.log")
    assert len(app_logger.handlers) == 1
    assert not app_logger.propagate
