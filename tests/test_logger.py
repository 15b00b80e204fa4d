import logging

import pytest

from core import logger as catalog_logger


@pytest.fixture
def fresh_logging():
    catalog_logger.reset_logging()
    yield
    catalog_logger.reset_logging()


def test_file_logging_writes_project_records(tmp_path, monkeypatch, fresh_logging):
    log_file = tmp_path / "logs" / "catalog.log"
    monkeypatch.setenv("LOG_TO_FILE", "true")
    monkeypatch.setenv("LOG_TO_STDOUT", "false")
    monkeypatch.setenv("LOG_FILE", str(log_file))
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    catalog_logger.get_logger("core.saved").debug("saved %s", "toy-1")
    for h in logging.getLogger("core").handlers:
        h.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "DEBUG [core.saved] saved toy-1" in text


def test_setup_is_idempotent_and_leaves_root_alone(monkeypatch, fresh_logging):
    monkeypatch.setenv("LOG_TO_FILE", "false")
    monkeypatch.setenv("LOG_TO_STDOUT", "true")
    root_handlers = list(logging.getLogger().handlers)

    catalog_logger.setup_logging()
    catalog_logger.setup_logging()

    assert len(logging.getLogger("fetchers").handlers) == 1
    assert logging.getLogger().handlers == root_handlers


def test_unwritable_log_file_falls_back_to_stdout(tmp_path, monkeypatch, fresh_logging):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    monkeypatch.setenv("LOG_TO_FILE", "true")
    monkeypatch.setenv("LOG_TO_STDOUT", "true")
    monkeypatch.setenv("LOG_FILE", str(blocker / "catalog.log"))

    catalog_logger.setup_logging()

    handlers = logging.getLogger("app").handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)
