"""
Host capability interface.

The workflow host owns credential storage and node parameters; the node
only reaches them through these two calls.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from ollama_rerank.errors import ConfigurationError


@runtime_checkable
class NodeHost(Protocol):
    """What the node needs from the workflow host."""

    async def get_credentials(self, name: str) -> Mapping[str, Any]:
        """Return the stored credential mapping (e.g. ``{baseUrl, apiKey}``)."""
        ...

    def get_node_parameter(self, name: str, item_index: int, default: Any = None) -> Any:
        """Return a node parameter value for a workflow item."""
        ...


class StaticHost:
    """In-memory host for scripts and tests.

    Args:
        credentials: Credential mappings keyed by credential name
        parameters: One mapping shared by every item, or one mapping per item

    Example:
        >>> host = StaticHost(
        ...     credentials={"ollamaApi": {"baseUrl": "http://gpu-box:11434"}},
        ...     parameters={"model": "qwen3-reranker:4b", "topN": 5},
        ... )
    """

    def __init__(
        self,
        credentials: Mapping[str, Mapping[str, Any]] | None = None,
        parameters: Mapping[str, Any] | Sequence[Mapping[str, Any]] | None = None,
    ) -> None:
        self._credentials = dict(credentials or {})
        self._parameters = parameters if parameters is not None else {}

    async def get_credentials(self, name: str) -> Mapping[str, Any]:
        try:
            return self._credentials[name]
        except KeyError:
            raise ConfigurationError(
                f"Credentials '{name}' are not configured",
                parameter=name,
            ) from None

    def get_node_parameter(self, name: str, item_index: int, default: Any = None) -> Any:
        if isinstance(self._parameters, Mapping):
            params = self._parameters
        elif 0 <= item_index < len(self._parameters):
            params = self._parameters[item_index]
        else:
            raise ConfigurationError(
                f"No parameters for item {item_index}",
                parameter=name,
                item_index=item_index,
            )
        return params.get(name, default)
