"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from valify.config.logging import configure_logging
from valify.errors import MissingTemplateError
from valify.locale.catalog import LocaleCatalog


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    valify = logging.getLogger("valify")
    valify_level = valify.level
    messages = logging.getLogger("valify.messages")
    messages_level = messages.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    valify.setLevel(valify_level)
    messages.setLevel(messages_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("valify").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger("valify").level == logging.WARNING

    def test_json_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        structlog.get_logger("valify.test").warning("json test", answer=42)
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "valify.test"
        assert "timestamp" in parsed

    def test_stdlib_valify_logger_gets_structured_fields(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        logging.getLogger("valify.schema.compiler").debug("Compiled field email")
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "Compiled field email"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "valify.schema.compiler"

    def test_fallback_message_is_logged(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=False, log_json=True, stream=stream)
        LocaleCatalog({}, name="empty").render_or_fallback("email_invalid", {"field": "e"})
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "valify.messages"
        assert str(MissingTemplateError("email_invalid", "empty")) in parsed["event"]

    def test_fallback_warnings_can_be_silenced(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream, fallback_warnings=False)
        LocaleCatalog({}, name="empty").render_or_fallback("email_invalid", {"field": "e"})
        logging.getLogger("valify.model").warning("still here")
        lines = stream.getvalue().strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["still here"]

    def test_fallback_warnings_reenabled(self) -> None:
        configure_logging(fallback_warnings=False)
        assert logging.getLogger("valify.messages").level == logging.ERROR
        configure_logging(fallback_warnings=True)
        assert logging.getLogger("valify.messages").level == logging.NOTSET

    def test_debug_suppressed_when_not_verbose(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=False, log_json=True, stream=stream)
        logging.getLogger("valify.model").debug("noise")
        assert stream.getvalue() == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger().handlers) == 1
