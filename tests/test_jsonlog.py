import datetime
import io
import json
import logging
import os
import uuid

import pytest

from balsa.jsonlog import make_json_file_logger, set_json_format


def _fresh_name():
    return f"balsa-test-{uuid.uuid4().hex}"


def _close(logger):
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


@pytest.fixture
def stream_logger():
    logger = logging.getLogger(_fresh_name())
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    stream = io.StringIO()
    logger.addHandler(logging.StreamHandler(stream))
    yield logger, stream
    _close(logger)


def test_plain_messages_are_quoted(stream_logger):
    logger, stream = stream_logger
    set_json_format(logger, False)
    logger.info('hello "world"')
    entry = json.loads(stream.getvalue().strip())
    assert entry["message"] == 'hello "world"'
    assert entry["name"] == logger.name
    assert entry["level"] == "info"
    assert entry["process"] == os.getpid()


def test_json_messages_are_embedded(stream_logger):
    logger, stream = stream_logger
    set_json_format(logger, True)
    logger.warning(json.dumps({"a": 1, "b": [1, 2]}))
    entry = json.loads(stream.getvalue().strip())
    assert entry["message"] == {"a": 1, "b": [1, 2]}
    assert entry["level"] == "warning"


def test_time_fields_come_from_the_record(stream_logger):
    logger, _ = stream_logger
    set_json_format(logger, False)
    formatter = logger.handlers[0].formatter
    record = logger.makeRecord(
        logger.name, logging.INFO, __file__, 1, "tick", None, None
    )
    record.created = 1700000000.5
    record.msecs = 500.0
    line = formatter.format(record)
    entry = json.loads(line)
    assert entry["epoch_secs"] == 1700000000
    assert entry["epoch_ms"] == 500
    assert entry["level"] == "info"
    assert entry["name"] == logger.name
    local_prefix = datetime.datetime.fromtimestamp(1700000000).strftime(
        "%Y-%m-%dT%H:%M:%S"
    )
    assert entry["time"].startswith(local_prefix)


def test_file_logger_writes_lines(tmp_path):
    path = tmp_path / "logs" / "run.jsonl"
    logger = make_json_file_logger(_fresh_name(), path, False)
    try:
        logger.info("first")
        logger.info("second")
    finally:
        _close(logger)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["message"] for line in lines] == ["first", "second"]


def test_file_logger_duplicate_name_raises(tmp_path):
    name = _fresh_name()
    logger = make_json_file_logger(name, tmp_path / "a.jsonl", True)
    try:
        with pytest.raises(ValueError, match="already exists"):
            make_json_file_logger(name, tmp_path / "b.jsonl", True)
    finally:
        _close(logger)