"""
Game sessions - Seeded single games and multi-game benchmarks.
游戏会话 —— 带种子的单局游戏与多局基准测试。

A single random.Random drives everything (graph shape, edge draws, target
choice), so a seed fully determines a session's outcome.
所有随机性（图形状、连边、目标选择）都来自同一个 random.Random，因此种子完全决定会话结果。
"""

from __future__ import annotations

import logging
import random
from typing import Any, Callable

import config
from dag.generator import random_dag
from game.driver import GameDriver
from schema import BenchmarkReport, GameResult, RandomOptions
from strategies.base import BaseStrategy

logger = logging.getLogger(__name__)

# Guarantees a graph has at least one node to hide the target in
# 保证图中至少有一个节点可作为目标
SENTINEL_NODE = "A"


def benchmark_options(rng: random.Random) -> RandomOptions:
    """
    Benchmark graph shape from config (BENCH_* settings).
    基准测试图形状取自 config；BENCH_EDGE_PERCENT 为空时每局随机抽取边概率。
    """
    percent = config.BENCH_EDGE_PERCENT
    if percent is None:
        percent = rng.random()
    return RandomOptions(
        min_per_rank=config.BENCH_MIN_PER_RANK,
        max_per_rank=config.BENCH_MAX_PER_RANK,
        min_ranks=config.BENCH_MIN_RANKS,
        max_ranks=config.BENCH_MAX_RANKS,
        percent=percent,
    )


def play_random_game(
    options: RandomOptions | None,
    strategy: BaseStrategy,
    *,
    rng: random.Random,
    on_event: Callable[[str, Any], None] | None = None,
) -> GameResult:
    """
    Generate a graph, hide a random target in it and play one game.
    生成随机图、随机隐藏目标并进行一局游戏。
    """
    graph = random_dag(options, rng=rng)
    if len(graph) == 0:
        graph.add_node(SENTINEL_NODE)

    target = rng.choice(sorted(graph.nodes(), key=str))
    logger.debug("[Session] Hidden target chosen among %d nodes", len(graph))
    return GameDriver(graph, target, strategy, on_event=on_event).run()


def run_benchmark(
    runs: int,
    strategy: BaseStrategy,
    *,
    seed: int | None = None,
    options: RandomOptions | None = None,
) -> BenchmarkReport:
    """
    Play `runs` seeded games and aggregate the step counts.
    进行 `runs` 局带种子游戏并汇总步数统计。

    When `options` is None each game draws its shape via benchmark_options().
    未提供 `options` 时，每局通过 benchmark_options() 抽取图形状。
    """
    if runs < 1:
        raise ValueError(f"runs must be positive, got {runs}")

    rng = random.Random(seed)
    steps: list[int] = []
    nodes: list[int] = []
    for run in range(runs):
        result = play_random_game(options or benchmark_options(rng), strategy, rng=rng)
        steps.append(result.steps)
        nodes.append(result.initial_nodes)
        logger.debug("[Benchmark] Run %d: %d steps on %d nodes", run, result.steps, result.initial_nodes)

    report = BenchmarkReport(
        runs=runs,
        strategy=strategy.name,
        seed=seed,
        steps=steps,
        mean_steps=sum(steps) / runs,
        min_steps=min(steps),
        max_steps=max(steps),
        mean_nodes=sum(nodes) / runs,
    )
    logger.info(
        "[Benchmark] %s: %.2f steps/op over %d runs (min=%d, max=%d)",
        strategy.name, report.mean_steps, runs, report.min_steps, report.max_steps,
    )
    return report
