import logging

from explainshadow.utils import (
    configure_logging,
    get_correlation_id,
    get_logger,
    set_correlation_id,
    statement_logger,
    time_call,
)


def test_correlation_id_round_trip():
    token = set_correlation_id("test-token")
    assert token == "test-token"
    assert get_correlation_id() == "test-token"


def test_loggers_live_under_package_root():
    assert get_logger("executor").name == "explainshadow.executor"
    assert statement_logger("users.select").name == "explainshadow.statements.users.select"


def test_statement_debug_is_off_by_default():
    configure_logging()
    root = logging.getLogger("explainshadow")
    assert len(root.handlers) == 1
    assert root.level == logging.INFO
    assert not statement_logger("quiet.select").isEnabledFor(logging.DEBUG)


def test_time_call_logs_duration(caplog):
    logger = get_logger("tests.logging")
    caplog.set_level(logging.DEBUG, logger=logger.name)
    with time_call("unit-test", logger, threshold_ms=0):
        pass
    records = [record for record in caplog.records if record.name == logger.name]
    assert any("unit-test took" in record.getMessage() for record in records)
    assert records[-1].levelno == logging.WARNING


def test_level_set_before_first_use_is_kept():
    root = logging.getLogger("explainshadow")
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers.clear()
    root.setLevel(logging.DEBUG)
    try:
        configure_logging()
        assert root.level == logging.DEBUG
        assert statement_logger("early.debug").isEnabledFor(logging.DEBUG)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
