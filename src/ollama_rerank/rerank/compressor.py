"""
Document compressor.

Implements the host's reranker capability: reorder documents by relevance,
keep the top-N and record each kept document's score in its metadata.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from ollama_rerank.types.document import DocumentLike

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from ollama_rerank.types.document import RerankResult

    RerankFn = Callable[[str, Sequence[str]], Awaitable[list[RerankResult]]]

D = TypeVar("D", bound=DocumentLike)

RELEVANCE_SCORE_KEY = "relevanceScore"


class DocumentCompressor:
    """Reranks and truncates retrieved documents.

    Args:
        rerank: Async callable ``(query, texts) -> results`` such as
            ``RerankerClient.rerank``; results are already truncated

    Example:
        >>> compressor = DocumentCompressor(client.rerank)
        >>> top = await compressor.compress_documents(documents, "what is ollama?")
        >>> top[0].metadata["relevanceScore"]
        1
    """

    def __init__(self, rerank: RerankFn) -> None:
        self._rerank = rerank

    async def compress_documents(
        self,
        documents: Sequence[D] | None,
        query: str,
    ) -> list[D]:
        """Return the most relevant documents, each tagged with its score.

        Documents are mutated in place: ``metadata["relevanceScore"]`` is set
        (and ``metadata`` created if missing). An empty input returns an
        empty list without contacting the server.
        """
        if not documents:
            return []

        results = await self._rerank(query, [doc.page_content for doc in documents])

        compressed: list[D] = []
        for result in results:
            doc = documents[result.index]
            if getattr(doc, "metadata", None) is None:
                doc.metadata = {}
            doc.metadata[RELEVANCE_SCORE_KEY] = result.relevance_score
            compressed.append(doc)
        return compressed
