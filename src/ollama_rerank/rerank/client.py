"""重排序客户端：调用本地 Ollama 模型对文档进行相关性评分。

Rerank client for document relevance scoring with a local Ollama model.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ollama_rerank.errors import ConfigurationError
from ollama_rerank.protocol import DEFAULT_VARIANT, VariantLoader, VariantManifest
from ollama_rerank.rerank.strategies import create_strategy
from ollama_rerank.telemetry import get_logger
from ollama_rerank.transport import HttpTransport, OllamaCredentials

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx

    from ollama_rerank.types.document import RerankResult

logger = get_logger("ollama_rerank.rerank")


@dataclass
class RerankOptions:
    """Per-call options for reranking."""

    top_n: int | None = None


def validate_top_n(top_n: object) -> int:
    """Check that top-N is a non-negative integer; 0 returns nothing."""
    if isinstance(top_n, bool) or not isinstance(top_n, (int, float)):
        raise ConfigurationError(
            f"Top N must be a number, got {type(top_n).__name__}",
            parameter="topN",
        )
    if not math.isfinite(top_n):
        raise ConfigurationError(
            f"Top N must be a finite number, got {top_n}",
            parameter="topN",
        )
    if int(top_n) != top_n or top_n < 0:
        raise ConfigurationError(
            f"Top N must be a non-negative integer, got {top_n}",
            parameter="topN",
        )
    return int(top_n)


class RerankerClient:
    """Client for document reranking against an Ollama server.

    Example:
        >>> client = await (
        ...     RerankerClient.builder()
        ...     .variant("ollama-generate")
        ...     .model("qwen3:8b")
        ...     .top_n(5)
        ...     .build()
        ... )
        >>> results = await client.rerank("what is ollama?", ["doc one", "doc two"])
    """

    def __init__(
        self,
        *,
        manifest: VariantManifest,
        credentials: OllamaCredentials,
        model: str,
        top_n: int = 3,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not model:
            raise ConfigurationError("Model must be specified", parameter="model")
        self._manifest = manifest
        self._credentials = credentials
        self._model = model
        self._top_n = validate_top_n(top_n)
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def builder(cls) -> RerankerClientBuilder:
        """Get a builder for creating Reranker clients."""
        return RerankerClientBuilder()

    async def rerank(
        self,
        query: str,
        documents: Sequence[str],
        options: RerankOptions | None = None,
    ) -> list[RerankResult]:
        """Rerank documents by relevance to query.

        Args:
            query: The search query
            documents: Document texts, in retrieval order
            options: Per-call overrides

        Returns:
            At most top-N results, most relevant first, with 0-based indices
            into ``documents``
        """
        opts = options or RerankOptions()
        top_n = self._top_n if opts.top_n is None else validate_top_n(opts.top_n)
        if not documents or top_n == 0:
            return []

        logger.debug(
            "Reranking documents",
            variant=self._manifest.id,
            model=self._model,
            documents=len(documents),
            top_n=top_n,
        )
        async with HttpTransport.from_credentials(
            self._credentials, timeout=self._timeout, transport=self._transport
        ) as transport:
            strategy = create_strategy(transport, self._manifest.rerank, self._model)
            results = await strategy.score(query, list(documents))

        return results[:top_n]

    @property
    def model(self) -> str:
        return self._model

    @property
    def base_url(self) -> str:
        return self._credentials.base_url

    @property
    def top_n(self) -> int:
        return self._top_n

    @property
    def manifest(self) -> VariantManifest:
        return self._manifest


class RerankerClientBuilder:
    """Builder for RerankerClient."""

    def __init__(self) -> None:
        self._variant: str | VariantManifest = DEFAULT_VARIANT
        self._loader: VariantLoader | None = None
        self._model: str | None = None
        self._credentials: OllamaCredentials | None = None
        self._base_url: str | None = None
        self._api_key: str | None = None
        self._top_n: int | None = None
        self._timeout: float | None = None
        self._transport: httpx.AsyncBaseTransport | None = None

    def variant(self, variant: str | VariantManifest) -> RerankerClientBuilder:
        self._variant = variant
        return self

    def loader(self, loader: VariantLoader) -> RerankerClientBuilder:
        self._loader = loader
        return self

    def model(self, model: str) -> RerankerClientBuilder:
        self._model = model
        return self

    def credentials(self, credentials: OllamaCredentials) -> RerankerClientBuilder:
        self._credentials = credentials
        return self

    def base_url(self, url: str | None) -> RerankerClientBuilder:
        self._base_url = url
        return self

    def api_key(self, api_key: str | None) -> RerankerClientBuilder:
        self._api_key = api_key
        return self

    def top_n(self, top_n: int) -> RerankerClientBuilder:
        self._top_n = top_n
        return self

    def timeout(self, timeout: float | None) -> RerankerClientBuilder:
        self._timeout = timeout
        return self

    def transport(self, transport: httpx.AsyncBaseTransport | None) -> RerankerClientBuilder:
        self._transport = transport
        return self

    async def build(self) -> RerankerClient:
        if isinstance(self._variant, VariantManifest):
            manifest = self._variant
        else:
            manifest = (self._loader or VariantLoader()).load(self._variant)

        credentials = self._credentials
        if credentials is None:
            env = OllamaCredentials.from_env()
            credentials = OllamaCredentials(
                base_url=self._base_url or env.base_url,
                api_key=self._api_key or env.api_key,
            )

        return RerankerClient(
            manifest=manifest,
            credentials=credentials,
            model=self._model or manifest.default_model,
            top_n=self._top_n if self._top_n is not None else manifest.default_top_n,
            timeout=self._timeout,
            transport=self._transport,
        )
