"""
DAG module - Graph data structure, random generator and game state machine.
DAG 模块 —— 图数据结构、随机生成器与游戏状态机。

Components:
  - graph.py:         Graph data structure and traversal (BFS, children, parents, topo sort)
  - generator.py:     Random layered DAG generator
  - state_machine.py: Game lifecycle state machine

模块组成：
  - graph.py:         Graph 数据结构与遍历算法（BFS、后代、祖先、拓扑排序）
  - generator.py:     随机分层 DAG 生成器
  - state_machine.py: 游戏生命周期状态机（强制合法状态转移）
"""

from dag.graph import Graph, Node                     # 有向无环图
from dag.generator import random_dag, default_options  # 随机图生成
from dag.state_machine import GameStateMachine, InvalidTransitionError  # 游戏状态机

__all__ = [
    "Graph",
    "Node",
    "random_dag",
    "default_options",
    "GameStateMachine",
    "InvalidTransitionError",
]
