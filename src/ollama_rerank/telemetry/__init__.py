"""
Telemetry module for ollama-rerank.

Provides structured logging with request-scoped context and masking of
credentials.
"""

from ollama_rerank.telemetry.logger import (
    JsonFormatter,
    LogContext,
    LogLevel,
    RerankLogger,
    SensitiveDataMasker,
    TextFormatter,
    clear_log_context,
    get_log_context,
    get_logger,
    log_context,
    set_log_context,
)

__all__ = [
    "JsonFormatter",
    "LogContext",
    "LogLevel",
    "RerankLogger",
    "SensitiveDataMasker",
    "TextFormatter",
    "clear_log_context",
    "get_log_context",
    "get_logger",
    "log_context",
    "set_log_context",
]
