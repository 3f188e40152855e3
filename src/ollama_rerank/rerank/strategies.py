"""
Scoring strategies.

A strategy turns (query, documents) into a full relevance ordering using
one Ollama endpoint. Truncation to top-N happens in the client.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from string import Template
from typing import TYPE_CHECKING

from pydantic import ValidationError

from ollama_rerank.errors import ConfigurationError, RerankError, SchemaError
from ollama_rerank.protocol.manifest import RerankMode
from ollama_rerank.rerank.parser import parse_ranking, parse_verdict
from ollama_rerank.telemetry import get_logger
from ollama_rerank.types.document import RerankResult
from ollama_rerank.types.wire import (
    ChatRequest,
    ChatResponse,
    GenerateRequest,
    GenerateResponse,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ollama_rerank.protocol.manifest import RerankEndpointConfig
    from ollama_rerank.transport import HttpTransport

logger = get_logger("ollama_rerank.rerank")


class RerankStrategy(ABC):
    """Base class for scoring strategies."""

    mode: RerankMode

    def __init__(
        self,
        transport: HttpTransport,
        config: RerankEndpointConfig,
        model: str,
    ) -> None:
        self._transport = transport
        self._config = config
        self._model = model
        self._template = Template(config.prompt)

    @abstractmethod
    async def score(self, query: str, documents: Sequence[str]) -> list[RerankResult]:
        """Score every document, most relevant first."""


class ClassificationStrategy(RerankStrategy):
    """Grades each document with a yes/no chat call.

    All calls run concurrently; the first failure aborts the whole batch.
    """

    mode = RerankMode.CLASSIFY

    def build_prompt(self, query: str, document: str) -> str:
        return self._template.substitute(query=query, document=document)

    async def _grade(self, index: int, query: str, document: str) -> RerankResult:
        request = ChatRequest.single_user_message(
            self._model,
            self.build_prompt(query, document),
            self._config.options,
        )
        try:
            data = await self._transport.post_json(
                self._config.path,
                request.model_dump(),
                action="grade document relevance",
            )
            try:
                reply = ChatResponse.model_validate(data)
            except ValidationError as e:
                raise SchemaError(
                    "Unexpected chat response: missing message.content",
                    field="message.content",
                ) from e
        except RerankError as e:
            e.context.details["document_index"] = index
            raise

        return RerankResult(index=index, relevance_score=parse_verdict(reply.message.content))

    async def score(self, query: str, documents: Sequence[str]) -> list[RerankResult]:
        results = await asyncio.gather(
            *(self._grade(index, query, document) for index, document in enumerate(documents))
        )
        logger.debug(
            "Collected relevance grades",
            results=[result.to_dict() for result in results],
        )
        return sorted(results, key=lambda result: result.relevance_score, reverse=True)


class ListRankingStrategy(RerankStrategy):
    """Ranks all documents with a single completion call."""

    mode = RerankMode.LIST_RANK

    def build_prompt(self, query: str, documents: Sequence[str]) -> str:
        listing = "\n\n".join(
            f"[{number}] {document}" for number, document in enumerate(documents, start=1)
        )
        return self._template.substitute(query=query, documents=listing)

    async def score(self, query: str, documents: Sequence[str]) -> list[RerankResult]:
        request = GenerateRequest(model=self._model, prompt=self.build_prompt(query, documents))
        data = await self._transport.post_json(
            self._config.path,
            request.model_dump(),
            action="rank documents",
        )
        try:
            reply = GenerateResponse.model_validate(data)
        except ValidationError as e:
            raise SchemaError(
                "Unexpected generate response: missing response text",
                field="response",
            ) from e

        results = parse_ranking(reply.response, len(documents))
        logger.debug(
            "Parsed ranking",
            results=[result.to_dict() for result in results],
        )
        return results


_STRATEGIES: dict[RerankMode, type[RerankStrategy]] = {
    RerankMode.CLASSIFY: ClassificationStrategy,
    RerankMode.LIST_RANK: ListRankingStrategy,
}


def create_strategy(
    transport: HttpTransport,
    config: RerankEndpointConfig,
    model: str,
) -> RerankStrategy:
    """Instantiate the strategy for a variant's rerank mode."""
    strategy_cls = _STRATEGIES.get(config.mode)
    if strategy_cls is None:
        raise ConfigurationError(f"Unsupported rerank mode: {config.mode}")
    return strategy_cls(transport, config, model)
