"""
Model catalog - lists the models available on an Ollama server.
"""

from ollama_rerank.catalog.lister import (
    ModelLister,
    apply_whitelist,
    format_modified,
    format_size,
    parse_models,
)

__all__ = [
    "ModelLister",
    "apply_whitelist",
    "format_modified",
    "format_size",
    "parse_models",
]
