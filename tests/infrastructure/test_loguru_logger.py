from __future__ import annotations

from loguru import logger as loguru_logger

from infrastructure.logging.log_setup import setup_console_logging
from infrastructure.logging.loguru_logger import LoguruLogger


def test_loguru_logger_forwards_level_and_bound_fields() -> None:
    records = []
    sink_id = loguru_logger.add(lambda msg: records.append(msg.record), level="DEBUG")
    try:
        LoguruLogger().bind(service="update_post").error("try.caught", exception="KeyError")
    finally:
        loguru_logger.remove(sink_id)

    assert len(records) == 1
    record = records[0]
    assert record["level"].name == "ERROR"
    assert record["message"] == "try.caught"
    assert record["extra"]["service"] == "update_post"
    assert record["extra"]["exception"] == "KeyError"


def test_bind_does_not_mutate_original() -> None:
    base = LoguruLogger()
    bound = base.bind(run_id="r1")
    assert base.bound == {}
    assert bound.bound == {"run_id": "r1"}


def test_setup_console_logging_prints_messages(capsys) -> None:
    setup_console_logging(level="INFO")
    try:
        LoguruLogger().debug("hidden")
        LoguruLogger().info("runner.dispatch.unmatched", succeeded=False)
    finally:
        loguru_logger.remove()

    out = capsys.readouterr().out
    assert "runner.dispatch.unmatched" in out
    assert "hidden" not in out
