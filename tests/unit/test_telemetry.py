"""Tests for structured logging."""

import io
import json
import logging

import pytest

from ollama_rerank.telemetry import (
    JsonFormatter,
    LogContext,
    LogLevel,
    RerankLogger,
    SensitiveDataMasker,
    TextFormatter,
    clear_log_context,
    get_log_context,
    log_context,
    set_log_context,
)


def make_record(msg: str, **fields) -> logging.LogRecord:
    record = logging.LogRecord("ollama_rerank.test", logging.INFO, __file__, 1, msg, None, None)
    if fields:
        record.extra_fields = fields
    return record


class TestSensitiveDataMasker:
    """Tests for SensitiveDataMasker."""

    def test_masks_bearer_token(self) -> None:
        """Test bearer tokens are redacted."""
        masked = SensitiveDataMasker().mask("Authorization: Bearer abc123")
        assert "abc123" not in masked

    def test_masks_env_key(self) -> None:
        """Test environment style keys are redacted."""
        masked = SensitiveDataMasker().mask("OLLAMA_API_KEY=supersecret")
        assert masked == "OLLAMA_API_KEY=***REDACTED***"

    def test_mask_dict(self) -> None:
        """Test credential-looking keys are redacted in dicts."""
        masked = SensitiveDataMasker().mask_dict(
            {"api_key": "k", "model": "qwen3", "nested": {"token": "t"}}
        )
        assert masked == {
            "api_key": "***REDACTED***",
            "model": "qwen3",
            "nested": {"token": "***REDACTED***"},
        }


class TestLogContext:
    """Tests for request-scoped context."""

    def test_round_trip(self) -> None:
        """Test context set and read back, including extras."""
        set_log_context(LogContext(variant="ollama-chat", item_index=0).with_extra(run="r1"))
        try:
            context = get_log_context()
            assert context.variant == "ollama-chat"
            assert context.item_index == 0
            assert context.extra == {"run": "r1"}
        finally:
            clear_log_context()
        assert get_log_context().to_dict() == {}

    def test_scoped_context_restores_outer(self) -> None:
        """Test a scoped context is undone on exit, even after an error."""
        set_log_context(LogContext(variant="outer"))
        try:
            with pytest.raises(RuntimeError):
                with log_context(LogContext(variant="inner", item_index=2)):
                    assert get_log_context().to_dict() == {"variant": "inner", "item_index": 2}
                    raise RuntimeError("boom")
            assert get_log_context().variant == "outer"
        finally:
            clear_log_context()


class TestFormatters:
    """Tests for log formatters."""

    def test_json_formatter(self) -> None:
        """Test JSON output carries fields and masks secrets."""
        formatter = JsonFormatter(include_timestamp=False)
        output = json.loads(formatter.format(make_record("Bearer xyz sent", documents=3)))
        assert output["level"] == "INFO"
        assert output["documents"] == 3
        assert "xyz" not in output["message"]

    def test_text_formatter_appends_fields(self) -> None:
        """Test text output lists structured fields."""
        formatter = TextFormatter(include_context=False)
        line = formatter.format(make_record("Listed models", total=2, kept=1))
        assert line.endswith("| Listed models | total=2 kept=1")


class TestRerankLogger:
    """Tests for RerankLogger."""

    def test_configure_json(self) -> None:
        """Test configured loggers write JSON lines."""
        stream = io.StringIO()
        RerankLogger.configure(level=LogLevel.DEBUG, format="json", stream=stream)
        try:
            RerankLogger.get_logger("ollama_rerank.test").debug("Reranking documents", top_n=3)
            line = json.loads(stream.getvalue().strip().splitlines()[-1])
            assert line["message"] == "Reranking documents"
            assert line["top_n"] == 3
        finally:
            RerankLogger.configure(level=LogLevel.INFO, format="text")
