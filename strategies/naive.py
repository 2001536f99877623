"""
Last-node strategy - The naive baseline.
末节点策略 —— 朴素基线。

Always nominates the most recently inserted node still in the graph. It uses
no structural information, so it is kept only as a reference point for
step-count regression comparisons against the balanced strategy.
总是提名图中最后插入且仍存在的节点，不利用任何结构信息，
仅作为与均衡策略比较步数的回归基线。
"""

from __future__ import annotations

from dag.graph import Graph, Node
from strategies.base import BaseStrategy


class LastNodeStrategy(BaseStrategy):
    """Nominates the last node in adjacency insertion order."""

    @property
    def name(self) -> str:
        return "last"

    def step(self, graph: Graph) -> Node:
        self._require_nodes(graph)
        return next(reversed(graph.adjacency_list()))
