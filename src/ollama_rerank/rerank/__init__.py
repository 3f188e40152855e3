"""重排序模块：调用本地 Ollama 模型对检索结果重新排序。

Rerank module.

Provides document reranking by relevance through an Ollama server, either
by grading each document (classification) or by asking for a ranked list
(list ranking).
"""

from ollama_rerank.rerank.client import (
    RerankerClient,
    RerankerClientBuilder,
    RerankOptions,
    validate_top_n,
)
from ollama_rerank.rerank.compressor import RELEVANCE_SCORE_KEY, DocumentCompressor
from ollama_rerank.rerank.parser import extract_json_array, parse_ranking, parse_verdict
from ollama_rerank.rerank.strategies import (
    ClassificationStrategy,
    ListRankingStrategy,
    RerankStrategy,
    create_strategy,
)

__all__ = [
    "ClassificationStrategy",
    "DocumentCompressor",
    "ListRankingStrategy",
    "RELEVANCE_SCORE_KEY",
    "RerankOptions",
    "RerankStrategy",
    "RerankerClient",
    "RerankerClientBuilder",
    "create_strategy",
    "extract_json_array",
    "parse_ranking",
    "parse_verdict",
    "validate_top_n",
]
