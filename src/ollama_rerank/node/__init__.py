"""
Node layer - the reranker as the workflow host sees it.
"""

from ollama_rerank.node.host import NodeHost, StaticHost
from ollama_rerank.node.reranker_node import RerankerNode, SupplyData

__all__ = [
    "NodeHost",
    "RerankerNode",
    "StaticHost",
    "SupplyData",
]
