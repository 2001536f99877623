"""
Errors - Exception taxonomy shared by the graph, generator, strategies and driver.
错误体系 —— 图结构、生成器、策略与驱动器共用的异常体系。

Every failure in this project is a logic/invariant violation, never a
transient resource error, so none of these are retried.
本项目中的所有失败都源于逻辑/不变量违例，而非外部资源的瞬时错误，因此均不重试。
"""

from __future__ import annotations

from typing import Hashable


class GraphError(Exception):
    """
    Base class for every error raised by the dag/strategies/game packages.
    所有图相关异常的基类，CLI 层统一捕获此类型。
    """
    pass


class DuplicateNodeError(GraphError):
    """Raised by add_node() when the label already exists. / 节点已存在。"""

    def __init__(self, node: Hashable):
        self.node = node
        super().__init__(f"attempted to add node {node!r} to graph, but it already exists")


class DuplicateEdgeError(GraphError):
    """Raised by add_edge() when u -> v already exists. / 边已存在。"""

    def __init__(self, source: Hashable, target: Hashable):
        self.source = source
        self.target = target
        super().__init__(f"{source!r} -> {target!r} already exists")


class CycleDetectedError(GraphError):
    """
    Raised by add_edge() when a path target -> ... -> source already exists.
    当已存在 target -> ... -> source 的路径时，添加 source -> target 会成环。
    """

    def __init__(self, source: Hashable, target: Hashable):
        self.source = source
        self.target = target
        super().__init__(f"a cycle was detected when adding {source!r} -> {target!r}")


class NodeNotFoundError(GraphError):
    """Raised when an operation requires a node that is not in the graph. / 节点不存在。"""

    def __init__(self, node: Hashable, operation: str = "access"):
        self.node = node
        self.operation = operation
        super().__init__(f"attempted to {operation} node {node!r}, but it does not exist")


class EmptyGraphError(GraphError):
    """Raised by a strategy asked to nominate from a graph with no nodes. / 空图无法提名。"""

    def __init__(self, strategy: str = "strategy"):
        self.strategy = strategy
        super().__init__(f"{strategy} cannot nominate a node from an empty graph")


class InvalidConfigError(GraphError):
    """Raised when generator options violate their range constraints. / 生成器配置非法。"""
    pass
