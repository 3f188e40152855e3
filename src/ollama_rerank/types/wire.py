"""
Request and response bodies for the Ollama endpoints.

Each endpoint gets its own pydantic model so payloads are validated at the
boundary instead of being read from untyped dictionaries. Unknown fields
are allowed; servers add fields between releases.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class OllamaModel(BaseModel):
    """An entry of ``GET /api/tags``."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(description="Model tag, e.g. 'qwen3:8b'")
    size: int | None = Field(default=None, description="Size on disk in bytes")
    modified_at: str | None = Field(default=None, description="ISO 8601 timestamp")


class OllamaTagsResponse(BaseModel):
    """Body of ``GET /api/tags``."""

    model_config = ConfigDict(extra="allow")

    models: list[OllamaModel]


class OpenAIModel(BaseModel):
    """An entry of an OpenAI-compatible ``GET /models``."""

    model_config = ConfigDict(extra="allow")

    id: str
    owned_by: str | None = None


class OpenAIModelsResponse(BaseModel):
    """Body of an OpenAI-compatible ``GET /models``."""

    model_config = ConfigDict(extra="allow")

    data: list[OpenAIModel]


class ChatMessage(BaseModel):
    """A single chat message."""

    model_config = ConfigDict(extra="allow")

    role: str = "user"
    content: str


class ChatOptions(BaseModel):
    """Sampling options for ``POST /api/chat``."""

    model_config = ConfigDict(extra="allow")

    temperature: float = 0.0
    num_predict: int = 200


class ChatRequest(BaseModel):
    """Body of ``POST /api/chat``."""

    model: str
    messages: list[ChatMessage]
    options: ChatOptions = Field(default_factory=ChatOptions)
    stream: bool = False

    @classmethod
    def single_user_message(
        cls, model: str, content: str, options: dict[str, Any] | None = None
    ) -> ChatRequest:
        """Build a request with one user message."""
        return cls(
            model=model,
            messages=[ChatMessage(role="user", content=content)],
            options=ChatOptions(**(options or {})),
        )


class ChatResponse(BaseModel):
    """Body of a non-streaming ``POST /api/chat`` reply."""

    model_config = ConfigDict(extra="allow")

    message: ChatMessage


class GenerateRequest(BaseModel):
    """Body of ``POST /api/generate``."""

    model: str
    prompt: str
    stream: bool = False


class GenerateResponse(BaseModel):
    """Body of a non-streaming ``POST /api/generate`` reply."""

    model_config = ConfigDict(extra="allow")

    response: str


class RankedEntry(BaseModel):
    """One element of the ranking array produced by the model."""

    model_config = ConfigDict(extra="allow")

    index: int = Field(ge=1, description="1-based document label")
    score: float = Field(allow_inf_nan=False)
