"""
Document and result types exchanged with the host.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DocumentLike(Protocol):
    """Anything shaped like a retrieved document.

    LangChain-style documents satisfy this protocol, so hosts can pass
    their own document objects straight through.
    """

    page_content: str
    metadata: dict[str, Any] | None


@dataclass
class Document:
    """A retrieved text document.

    Attributes:
        page_content: The document text
        metadata: Arbitrary metadata; reranking adds ``relevanceScore``
    """

    page_content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def relevance_score(self) -> float | None:
        """Score attached by the last rerank, if any."""
        return self.metadata.get("relevanceScore")


@dataclass
class RerankResult:
    """A single rerank result.

    Attributes:
        index: 0-based position in the input document list
        relevance_score: Finite relevance score
    """

    index: int
    relevance_score: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to the host's camelCase shape."""
        return {"index": self.index, "relevanceScore": self.relevance_score}


@dataclass
class ModelOption:
    """An entry for the host's model selection list."""

    name: str
    value: str
    description: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "value": self.value, "description": self.description}
