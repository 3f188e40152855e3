"""
Type definitions for ollama-rerank.

Provides the host-facing document types and the per-endpoint wire models.
"""

from ollama_rerank.types.document import Document, DocumentLike, ModelOption, RerankResult
from ollama_rerank.types.wire import (
    ChatMessage,
    ChatOptions,
    ChatRequest,
    ChatResponse,
    GenerateRequest,
    GenerateResponse,
    OllamaModel,
    OllamaTagsResponse,
    OpenAIModel,
    OpenAIModelsResponse,
    RankedEntry,
)

__all__ = [
    "ChatMessage",
    "ChatOptions",
    "ChatRequest",
    "ChatResponse",
    "Document",
    "DocumentLike",
    "GenerateRequest",
    "GenerateResponse",
    "ModelOption",
    "OllamaModel",
    "OllamaTagsResponse",
    "OpenAIModel",
    "OpenAIModelsResponse",
    "RankedEntry",
    "RerankResult",
]
