import json
import logging
import uuid

import pytest

from balsa.stopwatch import HierarchicalStopwatch, hierarchical_stopwatch


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def captured():
    logger = logging.getLogger(f"balsa-sw-{uuid.uuid4().hex}")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = _ListHandler()
    logger.addHandler(handler)
    yield logger, handler
    logger.removeHandler(handler)


def _messages(handler):
    return [json.loads(r.getMessage()) for r in handler.records]


def test_start_message(captured):
    logger, handler = captured
    with hierarchical_stopwatch("outer", logger) as sw:
        first = _messages(handler)[0]
        assert first["type"] == "stopwatch_start"
        assert first["name"] == "outer"
        assert first["id"] == sw.id
        assert first["id_hierarchy"] == []


def test_end_message_and_duration(captured):
    logger, handler = captured
    with hierarchical_stopwatch("work", logger) as sw:
        pass
    end = _messages(handler)[-1]
    assert end["type"] == "stopwatch_end"
    assert end["id"] == sw.id
    assert end["duration"] == pytest.approx(sw.duration_ms, rel=1e-3, abs=1e-3)
    assert sw.duration_ms >= 0


def test_nesting_and_logger_inheritance(captured):
    logger, handler = captured
    with hierarchical_stopwatch("outer", logger) as outer:
        with hierarchical_stopwatch("inner") as inner:
            assert inner.parent is outer
            assert inner.logger is logger
            assert inner.parent_ids() == [outer.id]
            assert inner.hierarchy_ids() == [outer.id, inner.id]
            assert inner.hierarchy_names() == ["outer", "inner"]
            assert inner.hierarchical_name == "outer:inner"
    start_inner = _messages(handler)[1]
    assert start_inner["id_hierarchy"] == [str(outer.id)]


def test_siblings_share_parent_after_stop(captured):
    logger, _ = captured
    with hierarchical_stopwatch("root", logger) as root:
        with hierarchical_stopwatch("a") as a:
            pass
        with hierarchical_stopwatch("b") as b:
            pass
    assert a.parent is root
    assert b.parent is root
    assert a.id < b.id
    with hierarchical_stopwatch("after", logger) as after:
        assert after.parent is None


def test_level_is_used(captured):
    logger, handler = captured
    with HierarchicalStopwatch("lvl", logger, logging.WARNING):
        pass
    assert [r.levelno for r in handler.records] == [logging.WARNING, logging.WARNING]


def test_stop_is_idempotent(captured):
    logger, handler = captured
    sw = hierarchical_stopwatch("once", logger)
    first = sw.stop()
    second = sw.stop()
    assert first == second
    assert sw.stopped
    assert len(handler.records) == 2


def test_exception_still_stops(captured):
    logger, handler = captured
    with pytest.raises(RuntimeError):
        with hierarchical_stopwatch("boom", logger) as sw:
            raise RuntimeError("fail")
    assert sw.stopped
    assert _messages(handler)[-1]["type"] == "stopwatch_end"