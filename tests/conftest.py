"""Root pytest fixtures for ollama-rerank tests."""

from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from ollama_rerank.node import StaticHost
from ollama_rerank.types import Document

BASE_URL = "http://ollama.test:11434"


@pytest.fixture
def base_url() -> str:
    """Base URL of the mocked Ollama server."""
    return BASE_URL


@pytest.fixture
def documents() -> list[Document]:
    """Three retrieved documents, the second one clearly relevant."""
    return [
        Document(page_content="Bananas are rich in potassium.", metadata={"source": "a"}),
        Document(page_content="Ollama serves local language models over HTTP.", metadata={"source": "b"}),
        Document(page_content="The Eiffel Tower is in Paris.", metadata={"source": "c"}),
    ]


@pytest.fixture
def host(base_url: str) -> StaticHost:
    """Host with credentials for the mocked server and default parameters."""
    return StaticHost(
        credentials={"ollamaApi": {"baseUrl": f"{base_url}/", "apiKey": "secret-token"}},
        parameters={"model": "dengcao/Qwen3-Reranker-4B:Q5_K_M", "topN": 3},
    )


@pytest.fixture
def grading_callback() -> Callable[[dict[str, str]], Callable[[httpx.Request], httpx.Response]]:
    """Build a /api/chat callback answering per document.

    The mapping goes from a substring of the document text to the reply the
    model should give; unmatched documents get "No.".
    """

    def factory(replies: dict[str, str]) -> Callable[[httpx.Request], httpx.Response]:
        def callback(request: httpx.Request) -> httpx.Response:
            payload = json.loads(request.content)
            prompt = payload["messages"][0]["content"]
            document = prompt.split("Document: ", 1)[1]
            for needle, reply in replies.items():
                if needle in document:
                    break
            else:
                reply = "No."
            return httpx.Response(
                200,
                json={
                    "model": payload["model"],
                    "message": {"role": "assistant", "content": reply},
                    "done": True,
                },
            )

        return callback

    return factory


def generate_body(text: str, model: str = "qwen3:8b") -> dict:
    """A non-streaming /api/generate reply."""
    return {"model": model, "response": text, "done": True}


@pytest.fixture
def generate_reply() -> Callable[..., dict]:
    """Factory for /api/generate reply bodies."""
    return generate_body


@pytest.fixture
def tags_body() -> dict:
    """A /api/tags listing with one reranker and one chat model."""
    return {
        "models": [
            {
                "name": "dengcao/Qwen3-Reranker-4B:Q5_K_M",
                "size": 2_899_102_924,
                "modified_at": "2025-06-10T08:15:30.123456789+02:00",
            },
            {
                "name": "llama3.2:3b",
                "size": 2_019_393_189,
                "modified_at": "2025-05-01T12:00:00Z",
            },
        ]
    }
