"""
Parsers for unstructured model output.

- Yes/no verdicts from the relevance grading prompt
- JSON ranking arrays embedded in free-form completions
"""

from __future__ import annotations

import json
import re

from pydantic import ValidationError

from ollama_rerank.errors import ErrorContext, ParseError
from ollama_rerank.types.document import RerankResult
from ollama_rerank.types.wire import RankedEntry

# Spans the first "[" to the last "]"; nested or coincidental brackets are not repaired
_ARRAY_PATTERN = re.compile(r"\[.*\]", re.DOTALL)


def parse_verdict(answer: str | None) -> int:
    """Score a grading reply: 1 when it contains "yes", otherwise 0."""
    if not answer:
        return 0
    return 1 if "yes" in answer.strip().lower() else 0


def extract_json_array(text: str) -> list[object]:
    """Extract and decode the bracketed JSON array in a completion.

    Raises:
        ParseError: If no bracketed substring exists, it is not valid JSON,
            or it decodes to something other than an array
    """
    match = _ARRAY_PATTERN.search(text)
    if match is None:
        raise ParseError(
            "Model reply does not contain a JSON array",
            ErrorContext(source="parser", details={"reply": text[:500]}),
            raw_text=text,
        )

    candidate = match.group(0)
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ParseError(
            f"Model reply contains an invalid JSON array: {e.msg}",
            ErrorContext(source="parser", details={"array": candidate[:500]}),
            raw_text=text,
        ) from e

    if not isinstance(data, list):
        raise ParseError(
            "Model reply JSON is not an array",
            raw_text=text,
        )
    return data


def parse_ranking(text: str, document_count: int) -> list[RerankResult]:
    """Turn a list-ranking completion into 0-based rerank results.

    The model labels documents from 1; entries keep the model's order.

    Args:
        text: Raw completion text
        document_count: Number of documents that were ranked

    Raises:
        ParseError: On a missing/invalid array, malformed entries,
            out-of-range or duplicate indices
    """
    entries = extract_json_array(text)

    results: list[RerankResult] = []
    seen: set[int] = set()
    for position, raw in enumerate(entries):
        try:
            entry = RankedEntry.model_validate(raw)
        except ValidationError as e:
            raise ParseError(
                f"Ranking entry {position} is malformed: {e.errors()[0]['msg']}",
                ErrorContext(source="parser", field_path=f"[{position}]"),
                raw_text=text,
            ) from e

        if entry.index > document_count:
            raise ParseError(
                f"Ranking entry {position} refers to document {entry.index}, "
                f"but only {document_count} were provided",
                ErrorContext(source="parser", field_path=f"[{position}].index"),
                raw_text=text,
            )
        if entry.index in seen:
            raise ParseError(
                f"Ranking entry {position} repeats document {entry.index}",
                ErrorContext(source="parser", field_path=f"[{position}].index"),
                raw_text=text,
            )
        seen.add(entry.index)
        results.append(RerankResult(index=entry.index - 1, relevance_score=entry.score))

    return results
