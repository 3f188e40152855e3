#!/usr/bin/env python3
"""
Basic reranking example.

This example shows the two ways to rerank retrieved documents with a
local Ollama server: directly through RerankerClient, and through the
node's document compressor as a workflow host would.

Usage:
    ollama pull dengcao/Qwen3-Reranker-4B:Q5_K_M
    export OLLAMA_BASE_URL="http://localhost:11434"
    python examples/rerank_documents.py
"""

import asyncio

from ollama_rerank import Document, RerankerClient, RerankerNode, StaticHost

QUERY = "How can I run a language model on my own machine?"

DOCUMENTS = [
    Document(page_content="Bananas are a good source of potassium.", metadata={"id": 1}),
    Document(page_content="Ollama runs open models locally behind an HTTP API.", metadata={"id": 2}),
    Document(page_content="The Eiffel Tower was completed in 1889.", metadata={"id": 3}),
    Document(page_content="llama.cpp executes quantized models on a laptop CPU.", metadata={"id": 4}),
]


async def main() -> None:
    """Run basic rerank example."""
    # Method 1: client built from environment and variant defaults
    client = await RerankerClient.builder().variant("ollama-chat").top_n(2).build()
    results = await client.rerank(QUERY, [doc.page_content for doc in DOCUMENTS])
    for result in results:
        print(f"[{result.relevance_score}] {DOCUMENTS[result.index].page_content}")
    print()

    # Method 2: the node's compressor, with parameters from a host
    host = StaticHost(
        credentials={"ollamaApi": {"baseUrl": "http://localhost:11434"}},
        parameters={"model": client.model, "topN": 3},
    )
    node = RerankerNode("ollama-generate")
    supplied = await node.supply_data(host, item_index=0)
    top = await supplied.response.compress_documents(DOCUMENTS, QUERY)
    for doc in top:
        print(f"{doc.metadata['relevanceScore']:.2f}  {doc.page_content}")


if __name__ == "__main__":
    asyncio.run(main())
