"""
Reranker node.

Binds host credentials and node parameters to a variant manifest and
exposes the two entry points the host calls: dynamic model options and
the document compressor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from ollama_rerank.catalog import ModelLister
from ollama_rerank.errors import ConfigurationError, RerankError
from ollama_rerank.protocol import DEFAULT_VARIANT, VariantLoader, VariantManifest
from ollama_rerank.rerank import DocumentCompressor, RerankerClient, validate_top_n
from ollama_rerank.telemetry import LogContext, get_logger, log_context
from ollama_rerank.transport import HttpTransport, OllamaCredentials

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx

    from ollama_rerank.node.host import NodeHost
    from ollama_rerank.types.document import ModelOption, RerankResult

logger = get_logger("ollama_rerank.node")


@dataclass
class SupplyData:
    """What the node hands back to the host."""

    response: DocumentCompressor


class RerankerNode:
    """A reranker node for one variant.

    Example:
        >>> node = RerankerNode("ollama-chat")
        >>> options = await node.get_models(host)
        >>> supplied = await node.supply_data(host, item_index=0)
        >>> top = await supplied.response.compress_documents(documents, query)
    """

    def __init__(
        self,
        variant: str | VariantManifest = DEFAULT_VARIANT,
        *,
        loader: VariantLoader | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the node.

        Args:
            variant: Variant id or an already loaded manifest
            loader: Loader used to resolve a variant id
            timeout: Read timeout for model server requests
            transport: Custom httpx transport for all requests
        """
        if isinstance(variant, VariantManifest):
            self._manifest = variant
        else:
            self._manifest = (loader or VariantLoader()).load(variant)
        self._timeout = timeout
        self._transport = transport

    @property
    def manifest(self) -> VariantManifest:
        return self._manifest

    def default_parameters(self) -> dict[str, Any]:
        """Parameter defaults shown by the host."""
        return {
            "model": self._manifest.default_model,
            "topN": self._manifest.default_top_n,
        }

    async def _credentials(self, host: NodeHost) -> OllamaCredentials:
        raw = await host.get_credentials(self._manifest.credential)
        try:
            return OllamaCredentials.model_validate(dict(raw or {}))
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid '{self._manifest.credential}' credentials: {e}",
                parameter=self._manifest.credential,
            ) from e

    def _parameters(self, host: NodeHost, item_index: int) -> tuple[str, int]:
        defaults = self.default_parameters()
        model = host.get_node_parameter("model", item_index, defaults["model"])
        if not isinstance(model, str) or not model.strip():
            raise ConfigurationError(
                "Model must be a non-empty string",
                parameter="model",
                item_index=item_index,
            )
        top_n = host.get_node_parameter("topN", item_index, defaults["topN"])
        try:
            return model.strip(), validate_top_n(top_n)
        except RerankError as e:
            raise e.for_item(item_index) from None

    async def get_models(self, host: NodeHost) -> list[ModelOption]:
        """Load the model options for the host's selection list."""
        credentials = await self._credentials(host)
        context = LogContext(variant=self._manifest.id, base_url=credentials.base_url)
        with log_context(context):
            async with HttpTransport.from_credentials(
                credentials, timeout=self._timeout, transport=self._transport
            ) as transport:
                lister = ModelLister(transport, self._manifest.models)
                try:
                    return await lister.list_models()
                except RerankError as e:
                    logger.error("Failed to load models", error=e.message)
                    raise

    async def client_for(self, host: NodeHost, item_index: int) -> RerankerClient:
        """Build a client from the host's current credentials and parameters."""
        credentials = await self._credentials(host)
        model, top_n = self._parameters(host, item_index)
        return RerankerClient(
            manifest=self._manifest,
            credentials=credentials,
            model=model,
            top_n=top_n,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def supply_data(self, host: NodeHost, item_index: int) -> SupplyData:
        """Supply the document compressor for a workflow item.

        Credentials and parameters are resolved on every call, not here.
        """
        logger.debug(
            "Supply data for reranking Ollama",
            variant=self._manifest.id,
            item_index=item_index,
        )

        async def rerank(query: str, documents: Sequence[str]) -> list[RerankResult]:
            context = LogContext(variant=self._manifest.id, item_index=item_index)
            with log_context(context):
                try:
                    client = await self.client_for(host, item_index)
                    context.model = client.model
                    context.base_url = client.base_url
                    with log_context(context):
                        return await client.rerank(query, documents)
                except RerankError as e:
                    e.for_item(item_index)
                    logger.error("Reranking failed", error=e.message)
                    raise

        return SupplyData(response=DocumentCompressor(rerank))
