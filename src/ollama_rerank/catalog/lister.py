"""模型列表：从 Ollama 服务获取可用模型并转换为节点选项。

Model lister.

Fetches the models available on the server and maps them to options for
the host's model selection list.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ollama_rerank.errors import SchemaError
from ollama_rerank.telemetry import get_logger
from ollama_rerank.types.document import ModelOption
from ollama_rerank.types.wire import (
    OllamaModel,
    OllamaTagsResponse,
    OpenAIModel,
    OpenAIModelsResponse,
)

if TYPE_CHECKING:
    from ollama_rerank.protocol.manifest import ModelsEndpointConfig
    from ollama_rerank.transport import HttpTransport

logger = get_logger("ollama_rerank.catalog")

_BYTES_PER_GB = 1_073_741_824

# Ollama reports nanosecond precision; datetime accepts microseconds
_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


def format_size(size: int | None) -> str:
    """Render a byte count as gigabytes with one decimal."""
    if not size:
        return "Unknown size"
    return f"{size / _BYTES_PER_GB:.1f} GB"


def format_modified(modified_at: str | None) -> str:
    """Render an ISO 8601 timestamp, or 'Unknown date' when unusable."""
    if not modified_at:
        return "Unknown date"
    text = _EXCESS_FRACTION.sub(r"\1", modified_at.strip())
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return "Unknown date"
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


def apply_whitelist(options: list[ModelOption], whitelist: list[str]) -> list[ModelOption]:
    """Keep options whose lowercased value contains any whitelist entry.

    An empty whitelist keeps everything.
    """
    if not whitelist:
        return options
    allowed = [entry.lower() for entry in whitelist]
    return [
        option
        for option in options
        if any(entry in option.value.lower() for entry in allowed)
    ]


def _ollama_option(model: OllamaModel) -> ModelOption:
    return ModelOption(
        name=f"{model.name} ({format_size(model.size)})",
        value=model.name,
        description=f"Last updated: {format_modified(model.modified_at)}",
    )


def _openai_option(model: OpenAIModel) -> ModelOption:
    return ModelOption(
        name=model.id,
        value=model.id,
        description=f"Owned by: {model.owned_by}" if model.owned_by else "Unknown owner",
    )


def _require_array(data: Any, field: str) -> None:
    if not isinstance(data, dict) or field not in data:
        raise SchemaError(
            f'Unexpected response: missing "{field}" array from Ollama API.',
            field=field,
        )
    if not isinstance(data[field], list):
        raise SchemaError(
            f'Unexpected response: "{field}" is not an array.',
            field=field,
        )
    if not data[field]:
        raise SchemaError(
            f'Unexpected response: "{field}" array is empty.',
            field=field,
        ).with_hint("pull a model on the server first")


def parse_models(data: Any, response_format: str) -> list[ModelOption]:
    """Map a listing response body to model options.

    Args:
        data: Decoded JSON body
        response_format: "ollama_tags" or "openai_models"

    Raises:
        SchemaError: If the expected array is missing, empty or malformed
    """
    field = "models" if response_format == "ollama_tags" else "data"
    _require_array(data, field)

    try:
        if response_format == "ollama_tags":
            tags = OllamaTagsResponse.model_validate(data)
            return [_ollama_option(model) for model in tags.models]
        listing = OpenAIModelsResponse.model_validate(data)
        return [_openai_option(model) for model in listing.data]
    except ValidationError as e:
        raise SchemaError(
            f"Unexpected response: malformed entries in \"{field}\": {e}",
            field=field,
        ) from e


class ModelLister:
    """Lists the models a variant can use.

    Example:
        >>> async with HttpTransport("http://localhost:11434") as transport:
        ...     lister = ModelLister(transport, manifest.models)
        ...     options = await lister.list_models()
    """

    def __init__(self, transport: HttpTransport, config: ModelsEndpointConfig) -> None:
        self._transport = transport
        self._config = config

    async def list_models(self) -> list[ModelOption]:
        """Fetch, map and filter the server's models.

        Raises:
            NetworkError: If the server cannot be reached
            HttpStatusError: If the server answers with a non-2xx status
            SchemaError: If the body lacks the expected model array
        """
        data = await self._transport.get_json(
            self._config.path, action="fetch Ollama models"
        )
        options = parse_models(data, self._config.format)
        filtered = apply_whitelist(options, self._config.whitelist)
        logger.debug(
            "Listed models",
            path=self._config.path,
            total=len(options),
            kept=len(filtered),
        )
        return filtered
