#!/usr/bin/env python3
"""
Model listing example.

Lists the models each shipped variant would offer for selection, using the
same server for all of them.

Usage:
    export OLLAMA_BASE_URL="http://localhost:11434"
    python examples/list_models.py
"""

import asyncio
import os

from ollama_rerank import RerankError, RerankerNode, StaticHost, VariantLoader


async def list_variant(variant: str, host: StaticHost) -> tuple[str, list[str] | str]:
    """List models for a single variant."""
    try:
        options = await RerankerNode(variant).get_models(host)
        return variant, [option.name for option in options]
    except RerankError as e:
        return variant, f"Error: {e}"


async def main() -> None:
    """List models for all variants."""
    host = StaticHost(
        credentials={
            "ollamaApi": {
                "baseUrl": os.getenv("OLLAMA_BASE_URL", "http://localhost:11434"),
                "apiKey": os.getenv("OLLAMA_API_KEY"),
            }
        }
    )

    variants = VariantLoader().available()
    results = await asyncio.gather(*(list_variant(v, host) for v in variants))

    for variant, models in results:
        print(f"[{variant}]")
        if isinstance(models, str):
            print(f"  {models}")
            continue
        for name in models:
            print(f"  {name}")
        print()


if __name__ == "__main__":
    asyncio.run(main())
