"""Ollama 重排序节点：使用本地 Ollama 模型按查询相关性对检索文档重新排序。

ollama-rerank: reorder retrieved documents by relevance with a local Ollama model.

A workflow node in three variants (chat grading, completion ranking and
OpenAI-compatible model listing), all described by YAML manifests.
"""
from __future__ import annotations

from ollama_rerank.catalog import ModelLister
from ollama_rerank.errors import (
    ConfigurationError,
    HttpStatusError,
    ManifestError,
    NetworkError,
    ParseError,
    RerankError,
    SchemaError,
)
from ollama_rerank.node import NodeHost, RerankerNode, StaticHost, SupplyData
from ollama_rerank.protocol import RerankMode, VariantLoader, VariantManifest
from ollama_rerank.rerank import DocumentCompressor, RerankerClient, RerankOptions
from ollama_rerank.transport import HttpTransport, OllamaCredentials
from ollama_rerank.types import Document, ModelOption, RerankResult

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ConfigurationError",
    # Types
    "Document",
    # Rerank
    "DocumentCompressor",
    "HttpStatusError",
    # Transport
    "HttpTransport",
    "ManifestError",
    # Catalog
    "ModelLister",
    "ModelOption",
    "NetworkError",
    # Node
    "NodeHost",
    "OllamaCredentials",
    "ParseError",
    "RerankError",
    # Variants
    "RerankMode",
    "RerankOptions",
    "RerankResult",
    "RerankerClient",
    "RerankerNode",
    "SchemaError",
    "StaticHost",
    "SupplyData",
    "VariantLoader",
    "VariantManifest",
    # Version
    "__version__",
]
