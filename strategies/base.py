"""
Base Strategy - Abstract interface for every node-nominating strategy.
BaseStrategy —— 所有节点提名策略的抽象接口。

Each strategy exposes:
  - name for logs, reports and the CLI registry
  - step() to nominate the next candidate node

每个策略暴露：
  - name：用于日志、报告和命令行注册表
  - step()：提名下一个候选节点

Contract for step():
  - returns a node currently in the graph
  - depends only on the graph's structure (no hidden state), so a game is
    reproducible under a fixed seed
  - raises EmptyGraphError on a graph with no nodes
  - treats the graph as read-only and keeps no reference to it

step() 的约定：
  - 返回当前图中存在的节点
  - 仅依赖图结构（无隐藏状态），保证固定种子下游戏可复现
  - 空图时抛出 EmptyGraphError
  - 只读使用传入的图，且调用结束后不保留其引用
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from dag.graph import Graph, Node
from errors import EmptyGraphError


class BaseStrategy(ABC):
    """
    Abstract base class for all strategies.
    所有提名策略的抽象基类。
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Unique strategy name used by the registry and in reports.
        策略唯一名称，用于注册表查找与报告展示。
        """

    @abstractmethod
    def step(self, graph: Graph) -> Node:
        """
        Nominate the next candidate node.
        提名下一个候选节点。
        """

    def _require_nodes(self, graph: Graph) -> None:
        if len(graph) == 0:
            raise EmptyGraphError(self.name)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
