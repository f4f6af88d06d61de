import logging

from moodtune.core.logging import setup_logging


def test_existing_root_configuration_is_left_alone(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [logging.NullHandler()])
    monkeypatch.setattr(root, "level", logging.WARNING)

    setup_logging("DEBUG")

    assert root.level == logging.WARNING


def test_sql_echo_is_quieted_outside_debug(monkeypatch):
    engine_logger = logging.getLogger("sqlalchemy.engine")
    monkeypatch.setattr(engine_logger, "level", logging.NOTSET)

    setup_logging("INFO")

    assert engine_logger.level == logging.WARNING
