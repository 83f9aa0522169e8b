"""Unit tests for logging setup."""

import json
import logging
import sys

from filestore.core.logging import get_logger, setup_logging


class TestSetupLogging:
    """Level, handler and renderer selection."""

    def test_level_from_logging_yaml(self):
        setup_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_level_override(self):
        setup_logging(level="debug")
        assert logging.getLogger().level == logging.DEBUG

    def test_single_handler_on_stderr(self, capsys):
        setup_logging()
        setup_logging()
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert handlers[0].stream is sys.stderr

    def test_quietens_http_libraries(self):
        setup_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING


class TestRendering:
    """What ends up on stderr."""

    def test_json_records(self, capsys):
        setup_logging(level="INFO", format_type="json")

        get_logger("filestore.tests.json").info("Store created", source="cli", store="fileSearchStores/a")

        out, err = capsys.readouterr()
        record = json.loads(err.strip().splitlines()[-1])
        assert out == ""
        assert record["event"] == "Store created"
        assert record["source"] == "cli"
        assert record["store"] == "fileSearchStores/a"
        assert record["level"] == "info"
        assert record["logger"] == "filestore.tests.json"
        assert "timestamp" in record

    def test_stdlib_records_share_the_renderer(self, capsys):
        setup_logging(level="INFO", format_type="json")

        logging.getLogger("filestore.tests.stdlib").warning("plain record")

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "plain record"
        assert record["level"] == "warning"

    def test_console_records(self, capsys):
        setup_logging(level="DEBUG", format_type="console")

        get_logger("filestore.tests.console").debug("Menu choice", source="shell", choice="1")

        err = capsys.readouterr().err
        assert "Menu choice" in err
        assert "source=shell" in err

    def test_records_below_level_dropped(self, capsys):
        setup_logging()

        get_logger("filestore.tests.quiet").info("not shown")

        assert capsys.readouterr().err == ""
