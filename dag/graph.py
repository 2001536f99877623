"""
Graph - Mutable directed acyclic graph backing the guess-the-node game.
Graph —— 猜节点游戏所使用的可变有向无环图。

The Graph holds:
  - an adjacency mapping: node -> ordered list of direct successors
  - nothing else; ancestors/descendants are derived on demand

Graph 包含：
  - 邻接表映射：节点 -> 直接后继的有序列表（按插入顺序）
  - 祖先/后代关系均按需遍历得出，不做缓存

Key operations:
  - add_edge():             insert u -> v, rejecting duplicates and cycles
  - remove_node():          delete a node and every edge touching it
  - breadth_first_search(): forward BFS with early-stop visitor
  - children() / parents(): transitive descendants / ancestors
  - topological_sort():     Kahn's algorithm

核心操作：
  - add_edge():             插入 u -> v，拒绝重复边与成环边
  - remove_node():          删除节点及其所有关联边
  - breadth_first_search(): 正向 BFS，访问器可提前终止
  - children() / parents(): 传递后代 / 传递祖先
  - topological_sort():     Kahn 算法拓扑排序
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Hashable, Iterable, Mapping

from errors import (
    CycleDetectedError,
    DuplicateEdgeError,
    DuplicateNodeError,
    NodeNotFoundError,
)

logger = logging.getLogger(__name__)

Node = Hashable


class Graph:
    """
    Owned, single-writer DAG keyed by opaque node labels.
    单写者持有的有向无环图，以不透明的节点标签为键。

    Acyclicity is enforced when an edge is inserted, never on removal:
    removing nodes can only delete paths, so it cannot create a cycle.
    无环性在插入边时强制校验；删除节点只会减少路径，不可能引入环。
    """

    def __init__(self) -> None:
        self._adjacency: dict[Node, list[Node]] = {}  # 节点 -> 直接后继列表

    @classmethod
    def from_adjacency(cls, adjacency: Mapping[Node, Iterable[Node]]) -> Graph:
        """
        Build a Graph from a mapping of node -> successors.
        Keys are inserted first, in mapping order; successors that are not keys
        are created by add_edge().
        从「节点 -> 后继」映射构建图，所有边都经过 add_edge() 的重复/成环校验。
        """
        graph = cls()
        for node in adjacency:
            graph.add_node(node)
        for node, successors in adjacency.items():
            for successor in successors:
                graph.add_edge(node, successor)
        return graph

    # ------------------------------------------------------------------
    # Node queries
    # 节点查询
    # ------------------------------------------------------------------

    def nodes(self) -> set[Node]:
        """Return the nodes in the graph in no particular order."""
        return set(self._adjacency)

    def adjacency_list(self) -> dict[Node, list[Node]]:
        """
        Return a deep copy of the adjacency mapping.
        返回邻接表的深拷贝，调用方修改返回值不会影响图本身。
        """
        return {node: list(successors) for node, successors in self._adjacency.items()}

    def successors(self, node: Node) -> list[Node]:
        """Direct successors of `node`, in insertion order."""
        if node not in self._adjacency:
            raise NodeNotFoundError(node, "read successors of")
        return list(self._adjacency[node])

    def has_edge(self, source: Node, target: Node) -> bool:
        return target in self._adjacency.get(source, ())

    def edge_count(self) -> int:
        return sum(len(successors) for successors in self._adjacency.values())

    def __contains__(self, node: object) -> bool:
        return node in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    # ------------------------------------------------------------------
    # Mutations
    # 图变更
    # ------------------------------------------------------------------

    def add_node(self, node: Node) -> None:
        """
        Add `node` with no edges.
        添加一个没有任何边的节点；节点已存在时抛出 DuplicateNodeError。
        """
        if node in self._adjacency:
            logger.warning("[Graph] Cannot add node %r: already exists", node)
            raise DuplicateNodeError(node)
        self._adjacency[node] = []

    def add_edge(self, source: Node, target: Node) -> None:
        """
        Add a directed edge source -> target.
        添加有向边 source -> target。

        Missing endpoints are created. Raises DuplicateEdgeError if the edge
        already exists, and CycleDetectedError if target already reaches
        source (the BFS from target stops as soon as it visits source).

        缺失的端点会被自动创建。边已存在时抛出 DuplicateEdgeError；
        若 target 已能到达 source（从 target 出发 BFS，一旦访问到 source 立即停止），
        则抛出 CycleDetectedError。
        """
        if source not in self._adjacency:
            self._adjacency[source] = []
        if target not in self._adjacency:
            # target is new, so target -> ... -> source is impossible
            # target 是新节点，不可能存在 target -> ... -> source 的路径
            self._adjacency[target] = []
        else:
            cycle = self.breadth_first_search(
                target,
                lambda node: CycleDetectedError(source, target) if node == source else None,
            )
            if cycle is not None:
                logger.warning("[Graph] Rejected edge %r -> %r: would close a cycle", source, target)
                raise cycle

        if target in self._adjacency[source]:
            logger.warning("[Graph] Rejected edge %r -> %r: already exists", source, target)
            raise DuplicateEdgeError(source, target)

        self._adjacency[source].append(target)

    def remove_node(self, node: Node) -> None:
        """
        Remove `node` and every edge into or out of it.
        删除节点及其所有入边与出边（需扫描全部边，O(E)）。
        """
        if node not in self._adjacency:
            logger.warning("[Graph] Cannot remove node %r: not found", node)
            raise NodeNotFoundError(node, "remove")

        del self._adjacency[node]
        for successors in self._adjacency.values():
            # at most one edge per ordered pair
            if node in successors:
                successors.remove(node)

    # ------------------------------------------------------------------
    # Traversal
    # 遍历算法
    # ------------------------------------------------------------------

    def breadth_first_search(self, start: Node, visit: Callable[[Node], Any]) -> Any:
        """
        Breadth-first walk along successor edges, starting at (and visiting) `start`.
        从 `start` 出发沿后继边做广度优先遍历，`start` 自身最先被访问。

        If `visit` returns anything other than None, the walk stops and that
        value is returned. Each node is visited at most once. An absent
        `start` visits nothing and returns None.

        Visitors must return None to continue: falsy values such as False or 0
        also stop the walk, so `lambda n: n == x` stops at `start`.

        若 `visit` 返回非 None 值，遍历立即停止并返回该值。每个节点至多访问一次。
        `start` 不存在时不访问任何节点，直接返回 None。
        访问器须返回 None 才会继续；False、0 等假值同样会终止遍历。
        """
        if start not in self._adjacency:
            logger.debug("[Graph] BFS from absent node %r is a no-op", start)
            return None

        visited: set[Node] = {start}
        queue: deque[Node] = deque([start])
        while queue:
            current = queue.popleft()
            signal = visit(current)
            if signal is not None:
                return signal
            for successor in self._adjacency[current]:
                if successor not in visited:
                    visited.add(successor)
                    queue.append(successor)
        return None

    def children(self, of: Node) -> set[Node]:
        """
        Return every node reachable from `of`, excluding `of` itself.
        返回从 `of` 出发可达的所有节点（传递后代），不包含 `of` 本身。
        """
        if of not in self._adjacency:
            raise NodeNotFoundError(of, "walk children of")

        found: set[Node] = set()

        def collect(node: Node) -> None:
            if node != of:
                found.add(node)

        self.breadth_first_search(of, collect)
        return found

    def parents(self, of: Node) -> set[Node]:
        """
        Return every node from which `of` is reachable, excluding `of` itself.
        返回所有能到达 `of` 的节点（传递祖先），不包含 `of` 本身。

        Reverse-edge BFS: the frontier is expanded with every node that has a
        direct edge into it, until no new predecessor turns up.
        反向 BFS：不断把「有边直接指向前沿节点」的节点加入前沿，直到没有新的前驱出现。
        """
        if of not in self._adjacency:
            raise NodeNotFoundError(of, "walk parents of")

        predecessors: dict[Node, list[Node]] = {node: [] for node in self._adjacency}
        for node, successors in self._adjacency.items():
            for successor in successors:
                predecessors[successor].append(node)

        found: set[Node] = set()
        queue: deque[Node] = deque([of])
        while queue:
            current = queue.popleft()
            for predecessor in predecessors[current]:
                if predecessor not in found:
                    found.add(predecessor)
                    queue.append(predecessor)
        # acyclic, so `of` can never be its own predecessor
        return found

    def topological_sort(self) -> list[Node]:
        """
        Kahn's algorithm: for every edge u -> v, u comes before v.
        Kahn 算法：对每条边 u -> v，保证 u 排在 v 之前。空图返回空列表。
        """
        in_degree: dict[Node, int] = {node: 0 for node in self._adjacency}
        for successors in self._adjacency.values():
            for successor in successors:
                in_degree[successor] += 1

        queue: deque[Node] = deque(node for node, degree in in_degree.items() if degree == 0)
        order: list[Node] = []
        while queue:
            node = queue.popleft()
            order.append(node)
            for successor in self._adjacency[node]:
                in_degree[successor] -= 1
                if in_degree[successor] == 0:
                    queue.append(successor)

        # add_edge() rejects cycles, so every node is always emitted
        return order

    # ------------------------------------------------------------------
    # Display helpers
    # 展示辅助方法
    # ------------------------------------------------------------------

    def summary(self) -> str:
        """One-line summary for logging, e.g. Graph[12 nodes, 17 edges]."""
        return f"Graph[{len(self)} nodes, {self.edge_count()} edges]"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(nodes={len(self)}, edges={self.edge_count()})"
