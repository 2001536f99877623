"""
Game module - The elimination game and its seeded sessions.
游戏模块 —— 淘汰式猜节点游戏及其带种子的会话。

Components:
  - driver.py:  GameDriver, the RUNNING/DONE elimination loop
  - session.py: single random games and multi-game benchmarks

模块组成：
  - driver.py:  GameDriver，RUNNING/DONE 淘汰循环
  - session.py: 单局随机游戏与多局基准测试
"""

from game.driver import GameDriver
from game.session import SENTINEL_NODE, benchmark_options, play_random_game, run_benchmark

__all__ = ["GameDriver", "SENTINEL_NODE", "benchmark_options", "play_random_game", "run_benchmark"]
