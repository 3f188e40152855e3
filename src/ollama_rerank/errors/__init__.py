"""错误体系：为 Ollama 重排序节点提供结构化错误类型。

Error hierarchy for ollama-rerank.
"""

from ollama_rerank.errors.base import (
    ConfigurationError,
    ErrorContext,
    HttpStatusError,
    ManifestError,
    NetworkError,
    ParseError,
    RerankError,
    SchemaError,
)

__all__ = [
    "ConfigurationError",
    "ErrorContext",
    "HttpStatusError",
    "ManifestError",
    "NetworkError",
    "ParseError",
    "RerankError",
    "SchemaError",
]
