"""
Variant layer - manifest models and loading.

This module handles:
- Loading variant manifests from YAML/JSON files
- Validating manifests with pydantic
- Typed manifest models for runtime use
"""

from ollama_rerank.protocol.loader import BUILTIN_VARIANTS_DIR, DEFAULT_VARIANT, VariantLoader
from ollama_rerank.protocol.manifest import (
    ModelsEndpointConfig,
    RerankEndpointConfig,
    RerankMode,
    VariantManifest,
)

__all__ = [
    "BUILTIN_VARIANTS_DIR",
    "DEFAULT_VARIANT",
    "ModelsEndpointConfig",
    "RerankEndpointConfig",
    "RerankMode",
    "VariantLoader",
    "VariantManifest",
]
