"""Unit tests for logging setup."""
import json
import logging
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from logger import JSONFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestJSONFormatter:

    def test_formats_record_as_json(self):
        record = logging.LogRecord(
            name="services.chunking_engine", level=logging.INFO, pathname=__file__,
            lineno=1, msg="Created %d chunks", args=(3,), exc_info=None
        )

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "services.chunking_engine"
        assert data["message"] == "Created 3 chunks"
        assert data["timestamp"].endswith("Z")

    def test_includes_extra_fields(self):
        record = logging.makeLogRecord({
            "name": "services.llm_client",
            "levelno": logging.ERROR,
            "levelname": "ERROR",
            "msg": "failed",
            "error_code": "API_ERROR",
        })

        data = json.loads(JSONFormatter().format(record))

        assert data["error_code"] == "API_ERROR"
        assert "args" not in data

    def test_includes_exception(self):
        try:
            raise ValueError("bad overlap")
        except ValueError:
            record = logging.makeLogRecord({"msg": "oops", "exc_info": sys.exc_info()})

        data = json.loads(JSONFormatter().format(record))
        assert "bad overlap" in data["exception"]


class TestSetupLogging:

    def test_json_format(self, restore_root_logger):
        setup_logging("DEBUG", "json")
        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)

    def test_repeated_setup_does_not_duplicate_handlers(self, restore_root_logger):
        setup_logging("INFO")
        setup_logging("WARNING")
        assert len(restore_root_logger.handlers) == 1
        assert restore_root_logger.level == logging.WARNING
        assert not isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)
