"""
Credential handling for the Ollama model server.

Credentials come from the host's credential store as a mapping with
``baseUrl`` and an optional ``apiKey``. They can also be read from the
environment for scripts and tests.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "http://localhost:11434"


def normalize_base_url(base_url: str | None) -> str:
    """Strip trailing slashes, falling back to the local Ollama default."""
    return (base_url or "").strip().rstrip("/") or DEFAULT_BASE_URL


class OllamaCredentials(BaseModel):
    """Connection credentials for an Ollama server."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    base_url: str = Field(default=DEFAULT_BASE_URL, alias="baseUrl")
    api_key: str | None = Field(default=None, alias="apiKey")

    @field_validator("base_url", mode="before")
    @classmethod
    def validate_base_url(cls, value: Any) -> str:
        return normalize_base_url(value)

    @field_validator("api_key", mode="before")
    @classmethod
    def validate_api_key(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_env(cls) -> OllamaCredentials:
        """Build credentials from OLLAMA_BASE_URL/OLLAMA_HOST and OLLAMA_API_KEY."""
        return cls(
            base_url=os.getenv("OLLAMA_BASE_URL") or os.getenv("OLLAMA_HOST"),
            api_key=os.getenv("OLLAMA_API_KEY"),
        )

    def auth_header(self) -> dict[str, str]:
        """Get the authentication header for these credentials."""
        return get_auth_header(self.api_key)


def get_auth_header(api_key: str | None) -> dict[str, str]:
    """Get a bearer authentication header, or nothing when no key is set."""
    if not api_key:
        return {}
    return {"Authorization": f"Bearer {api_key}"}
