"""
find-node - Command-line entry point.
find-node —— 命令行入口。

Plays one guess-the-node game on a random DAG (default), or a benchmark of
many seeded games, and prints the result with a rich console UI.
在随机 DAG 上进行一局猜节点游戏（默认），或进行多局带种子的基准测试，并用 Rich 控制台展示结果。

Usage:
    python main.py [--seed N] [--strategy balanced|last] [--runs N | --bench] [-v]
"""

from __future__ import annotations

import logging
import random
import sys
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

import config
from errors import GraphError
from game.session import benchmark_options, play_random_game, run_benchmark
from schema import BenchmarkReport, GameResult, StepRecord
from strategies import get_strategy

console = Console()

# Relation -> Rich style mapping
# 提名关系 -> Rich 样式映射
_RELATION_STYLES = {
    "target": "bold green",
    "ancestor": "cyan",
    "descendant": "magenta",
    "unrelated": "dim",
}


# ======================================================================
# UI Event Handler
# UI 事件处理器
# ======================================================================

def on_event(event: str, data: Any) -> None:
    """
    Handle events from the GameDriver and display them.
    处理来自 GameDriver 的事件并在控制台展示。
    """
    if event == "game_start":
        console.print(f"[bold cyan]>>> {data['graph']}[/bold cyan] strategy=[bold]{data['strategy']}[/bold]")

    elif event == "pruned":
        record: StepRecord = data
        style = _RELATION_STYLES[record.relation.value]
        console.print(
            f"    [yellow]>> Step {record.step}:[/yellow] {record.nomination} "
            f"[{style}]({record.relation.value})[/{style}] "
            f"[dim]removed {len(record.removed)}, {record.remaining} left[/dim]"
        )

    elif event in ("nomination", "status", "game_done"):
        pass  # 由 pruned 事件和最终面板展示


def _history_table(result: GameResult) -> Table:
    table = Table(title=f"Game history (target {result.target})", border_style="cyan")
    table.add_column("Step", style="cyan", width=6)
    table.add_column("Nomination", style="white")
    table.add_column("Relation")
    table.add_column("Removed", justify="right")
    table.add_column("Remaining", justify="right", style="dim")
    for record in result.history:
        style = _RELATION_STYLES[record.relation.value]
        table.add_row(
            str(record.step),
            str(record.nomination),
            f"[{style}]{record.relation.value}[/{style}]",
            str(len(record.removed)),
            str(record.remaining),
        )
    return table


def _benchmark_table(report: BenchmarkReport) -> Table:
    table = Table(title="Benchmark", border_style="magenta", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("strategy", report.strategy)
    table.add_row("seed", str(report.seed))
    table.add_row("runs", str(report.runs))
    table.add_row("steps/op", f"{report.mean_steps:.2f}")
    table.add_row("min steps", str(report.min_steps))
    table.add_row("max steps", str(report.max_steps))
    table.add_row("nodes/op", f"{report.mean_nodes:.1f}")
    return table


# ======================================================================
# Main
# 主函数
# ======================================================================

def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging with rich handler.
    使用 Rich 处理器配置日志系统。
    verbose=True 时启用 DEBUG 级别，显示每一步的剪枝细节。
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, rich_tracebacks=True)],
    )


def _option(args: list[str], flag: str, default: str | None) -> str | None:
    """Value following `flag` in args, or `default` if the flag is absent."""
    if flag not in args:
        return default
    index = args.index(flag)
    if index + 1 >= len(args):
        raise SystemExit(f"{flag} expects a value")
    return args[index + 1]


def _run_count(args: list[str]) -> int:
    """
    Number of games to play: --runs N wins, --bench falls back to BENCH_RUNS, else one game.
    对局数：优先 --runs N；仅给出 --bench 时取 config.BENCH_RUNS；否则单局。
    """
    runs = _option(args, "--runs", None)
    if runs is not None:
        return int(runs)
    if "--bench" in args:
        return config.BENCH_RUNS
    return 1


def main() -> None:
    """
    程序入口：解析命令行参数，决定运行模式。
    - --runs N > 1 或 --bench：基准测试模式（--bench 默认 BENCH_RUNS 局）
    - 否则：单局模式
    - -v / --verbose：启用调试日志
    """
    args = sys.argv[1:]
    verbose = "--verbose" in args or "-v" in args
    setup_logging(verbose)

    try:
        seed_arg = _option(args, "--seed", None)
        seed = int(seed_arg) if seed_arg is not None else config.GAME_SEED
        if seed is None:
            seed = random.SystemRandom().randrange(2**32)  # 未指定种子时从系统熵源取一个，并打印以便复现
        runs = _run_count(args)
        strategy = get_strategy(_option(args, "--strategy", config.GAME_STRATEGY))
        if runs > 1:
            report = run_benchmark(runs, strategy, seed=seed)
            console.print(_benchmark_table(report))
        else:
            rng = random.Random(seed)
            result = play_random_game(benchmark_options(rng), strategy, rng=rng, on_event=on_event)
            console.print(_history_table(result))
            console.print(Panel(
                f"Found target node in [bold]{result.steps}[/bold] steps!",
                title=f"[bold green]Done[/bold green] [dim]seed={seed}[/dim]",
                border_style="green",
            ))
    except (GraphError, ValueError) as exc:
        console.print(f"\n[red]Error: {exc}[/red]")
        logging.exception("Game aborted")
        sys.exit(1)


if __name__ == "__main__":
    main()
