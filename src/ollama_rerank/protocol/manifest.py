"""
Variant manifest models.

A variant manifest describes one flavour of the reranker node: where its
model list comes from, which endpoint scores documents, the prompt sent
to the model and the optional model-name whitelist.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RerankMode(str, Enum):
    """How a variant turns model output into scores."""

    CLASSIFY = "classify"
    """One chat call per document, yes/no verdict"""

    LIST_RANK = "list_rank"
    """One completion call for all documents, JSON ranking array"""


_REQUIRED_PLACEHOLDERS: dict[RerankMode, tuple[str, ...]] = {
    RerankMode.CLASSIFY: ("query", "document"),
    RerankMode.LIST_RANK: ("query", "documents"),
}


def _has_placeholder(template: str, name: str) -> bool:
    return re.search(rf"\$(?:{name}\b|\{{{name}\}})", template) is not None


def _ensure_leading_slash(path: str) -> str:
    return path if path.startswith("/") else f"/{path}"


class ModelsEndpointConfig(BaseModel):
    """Model listing endpoint configuration."""

    model_config = ConfigDict(extra="forbid")

    path: str = Field(default="/api/tags", description="Listing path relative to base URL")
    format: Literal["ollama_tags", "openai_models"] = Field(
        default="ollama_tags",
        description="Response shape: {models:[...]} or {data:[...]}",
    )
    whitelist: list[str] = Field(
        default_factory=list,
        description="Keep only models whose name contains one of these substrings",
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, value: str) -> str:
        return _ensure_leading_slash(value)

    @field_validator("whitelist")
    @classmethod
    def validate_whitelist(cls, value: list[str]) -> list[str]:
        return [entry.lower() for entry in value if entry]


class RerankEndpointConfig(BaseModel):
    """Scoring endpoint configuration."""

    model_config = ConfigDict(extra="forbid")

    mode: RerankMode
    path: str = Field(description="Scoring path relative to base URL")
    prompt: str = Field(description="string.Template prompt with $query and $document(s)")
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Sampling options sent with chat requests",
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, value: str) -> str:
        return _ensure_leading_slash(value)

    @model_validator(mode="after")
    def check_placeholders(self) -> RerankEndpointConfig:
        missing = [
            name
            for name in _REQUIRED_PLACEHOLDERS[self.mode]
            if not _has_placeholder(self.prompt, name)
        ]
        if missing:
            raise ValueError(
                f"prompt for mode '{self.mode.value}' is missing placeholders: "
                + ", ".join(f"${name}" for name in missing)
            )
        return self


class VariantManifest(BaseModel):
    """Complete description of one reranker node variant."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(description="Variant identifier, e.g. 'ollama-chat'")
    display_name: str
    description: str = ""
    credential: str = Field(default="ollamaApi", description="Host credential name")
    default_model: str
    default_top_n: int = Field(default=3, ge=1)
    models: ModelsEndpointConfig = Field(default_factory=ModelsEndpointConfig)
    rerank: RerankEndpointConfig

    @property
    def mode(self) -> RerankMode:
        return self.rerank.mode
