"""
Balanced-partition strategy - The reference nominating strategy.
均衡划分策略 —— 默认的参考提名策略。

Each nomination splits the remaining nodes into three disjoint sets relative
to the nominee: its ancestors, its descendants, and the nodes unrelated to
it. Whichever set holds the target decides what the driver can prune, so the
best nominee is the one whose largest set is smallest. This is the partial
order analogue of picking the median in binary search.

每次提名都会把剩余节点相对于被提名节点划分为三个互不相交的集合：
祖先、后代、无关节点。目标落在哪个集合决定了驱动器能剪掉什么，
因此最优提名是「最大集合最小」的节点——相当于偏序上的二分查找取中位数。

Selection key (smallest wins):
  1. max(|ancestors|, |descendants|, |unrelated|)
  2. expected remaining node count for a uniformly random target
  3. str(node), for determinism

选择键（越小越优）：
  1. max(|祖先|, |后代|, |无关|)
  2. 目标均匀随机时，下一步剩余节点数的期望
  3. str(node)，保证结果确定

On well-balanced orders this bounds a game to O(log N) steps; on a total
order or an edgeless graph no pruning information exists and it degrades to
O(N).
在结构均衡的偏序上步数为 O(log N)；在全序或无边图上退化为 O(N)。
"""

from __future__ import annotations

import logging

from dag.graph import Graph, Node
from strategies.base import BaseStrategy

logger = logging.getLogger(__name__)


def reachability(graph: Graph) -> tuple[dict[Node, set[Node]], dict[Node, set[Node]]]:
    """
    Compute (descendants, ancestors) for every node in one pass each.
    分别一次遍历计算所有节点的后代集合与祖先集合。

    Descendants accumulate in reverse topological order, ancestors in
    topological order, so every set is complete before it is merged.
    后代按逆拓扑序累积，祖先按拓扑序累积，保证合并时被合并的集合已完整。
    """
    adjacency = graph.adjacency_list()
    order = graph.topological_sort()

    descendants: dict[Node, set[Node]] = {node: set() for node in order}
    for node in reversed(order):
        for successor in adjacency[node]:
            descendants[node].add(successor)
            descendants[node] |= descendants[successor]

    ancestors: dict[Node, set[Node]] = {node: set() for node in order}
    for node in order:
        for successor in adjacency[node]:
            ancestors[successor].add(node)
            ancestors[successor] |= ancestors[node]

    return descendants, ancestors


class BalancedPartitionStrategy(BaseStrategy):
    """
    Nominates the node that minimizes the largest of its three partitions.
    提名使三个划分中最大者最小的节点。
    """

    @property
    def name(self) -> str:
        return "balanced"

    def step(self, graph: Graph) -> Node:
        self._require_nodes(graph)

        descendants, ancestors = reachability(graph)
        total = len(graph)

        def score(node: Node) -> tuple[int, int, str]:
            above = len(ancestors[node])
            below = len(descendants[node])
            unrelated = total - 1 - above - below
            # target below -> ancestors pruned; target above -> descendants pruned;
            # unrelated -> only the nominee goes
            expected = below * (total - 1 - above) + above * (total - 1 - below) + unrelated * (total - 1)
            return max(above, below, unrelated), expected, str(node)

        nominee = min(descendants, key=score)
        logger.debug("[Balanced] Nominating %r (score=%s) out of %d nodes", nominee, score(nominee), total)
        return nominee
