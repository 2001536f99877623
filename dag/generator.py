"""
Random DAG generator - Builds layered random DAGs for the game.
随机 DAG 生成器 —— 为游戏构建随机分层有向无环图。

Algorithm (layer-forward wiring):
  1. Draw the number of ranks (layers)
  2. For each rank, draw its size and create freshly labelled nodes
  3. For every node created in an earlier rank and every node in the new
     rank, add earlier -> new with probability `percent`

算法（逐层前向连边）：
  1. 抽取层数
  2. 每层抽取节点数并创建新标签的节点
  3. 对「所有更早创建的节点 × 新层节点」的每一对，以概率 `percent` 添加 早 -> 新 的边

Edges only ever point from older labels to newer ones, so the graph's cycle
check can never fire here; it still runs on every insertion.
边只会从更早的标签指向更新的标签，因此 Graph 的成环校验在此处永远不会触发，但每次插边仍会执行。
"""

from __future__ import annotations

import logging
import random

import config
from dag.graph import Graph
from schema import RandomOptions

logger = logging.getLogger(__name__)


def default_options() -> RandomOptions:
    """RandomOptions populated from config (DAG_* settings). / 使用 config 中的 DAG_* 配置。"""
    return RandomOptions(
        min_per_rank=config.DAG_MIN_PER_RANK,
        max_per_rank=config.DAG_MAX_PER_RANK,
        min_ranks=config.DAG_MIN_RANKS,
        max_ranks=config.DAG_MAX_RANKS,
        percent=config.DAG_EDGE_PERCENT,
    )


def random_dag(
    options: RandomOptions | None = None,
    *,
    rng: random.Random | None = None,
    seed: int | None = None,
) -> Graph:
    """
    Generate a random layered DAG.
    生成一个随机分层 DAG。

    Args:
        options: graph shape; defaults to default_options()
        rng:     injected entropy source; takes precedence over `seed`
        seed:    used to build a private random.Random when `rng` is None

    参数：
        options: 图形状参数，默认取 default_options()
        rng:     注入的随机源，优先于 `seed`
        seed:    未提供 rng 时用于构造私有 random.Random

    Raises InvalidConfigError for bad options. Any graph error raised while
    wiring edges propagates and no graph is returned.
    配置非法时抛出 InvalidConfigError；连边过程中的任何图错误都会直接向上抛出，不返回残缺图。
    """
    opts = options or default_options()
    opts.validate_ranges()
    rng = rng or random.Random(seed)

    graph = Graph()
    ranks = rng.randint(opts.min_ranks, opts.max_ranks)
    created = 0  # 已创建节点数，同时是下一个节点的标签
    for rank in range(ranks):
        width = rng.randint(opts.min_per_rank, opts.max_per_rank)
        fresh = [str(created + k) for k in range(width)]
        for node in fresh:
            graph.add_node(node)

        for j in range(created):
            for node in fresh:
                if rng.random() < opts.percent:
                    graph.add_edge(str(j), node)

        logger.debug("[Generator] Rank %d: %d new nodes (%d total)", rank, width, created + width)
        created += width

    logger.info("[Generator] Built %s across %d ranks", graph.summary(), ranks)
    return graph
