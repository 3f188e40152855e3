"""
Transport layer - HTTP client for the Ollama API.

Provides httpx-based transport with:
- JSON helpers
- Proxy configuration
- Timeout management
- Credential normalization
"""

from ollama_rerank.transport.auth import (
    DEFAULT_BASE_URL,
    OllamaCredentials,
    get_auth_header,
    normalize_base_url,
)
from ollama_rerank.transport.http import HttpTransport

__all__ = [
    "DEFAULT_BASE_URL",
    "HttpTransport",
    "OllamaCredentials",
    "get_auth_header",
    "normalize_base_url",
]
