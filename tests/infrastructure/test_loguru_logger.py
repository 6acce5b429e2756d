from __future__ import annotations

import pytest
from loguru import logger as loguru_logger

from infrastructure.logging.loguru_logger import LoguruLogger


@pytest.fixture
def records():
    captured = []
    handler_id = loguru_logger.add(lambda message: captured.append(message.record), level="DEBUG")
    yield captured
    loguru_logger.remove(handler_id)


def test_loguru_logger_forwards_event_and_extra(records) -> None:
    LoguruLogger().bind(flow="todos").info("flow.start", steps=2)

    record = records[-1]
    assert record["level"].name == "INFO"
    assert record["message"].startswith("flow.start ")
    assert record["extra"]["flow"] == "todos"
    assert record["extra"]["steps"] == 2


def test_loguru_logger_levels(records) -> None:
    log = LoguruLogger()
    log.debug("a")
    log.warning("b")
    log.error("c")

    assert [r["level"].name for r in records[-3:]] == ["DEBUG", "WARNING", "ERROR"]
