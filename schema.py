"""
Pydantic data models for find-node.
Defines the configuration and result structures shared by the generator,
the game driver, the benchmark and the CLI.
find-node 的 Pydantic 数据模型。
定义了生成器、游戏驱动器、基准测试与命令行共用的配置与结果结构。
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from errors import InvalidConfigError


# ======================================================================
# Generator configuration
# 随机图生成配置
# ======================================================================

class RandomOptions(BaseModel):
    """
    Shape of a random layered DAG.
    随机分层 DAG 的形状参数。

    Layer sizes and layer counts are drawn inclusively from [min, max].
    每层节点数与层数均在闭区间 [min, max] 内均匀抽取。
    """
    min_per_rank: int = Field(default=1, description="How fat the DAG is (lower bound)")     # 每层最少节点数
    max_per_rank: int = Field(default=5, description="How fat the DAG is (upper bound)")     # 每层最多节点数
    min_ranks: int = Field(default=3, description="How tall the DAG is (lower bound)")       # 最少层数
    max_ranks: int = Field(default=5, description="How tall the DAG is (upper bound)")       # 最多层数
    percent: float = Field(default=0.3, description="Chance of each forward edge existing")  # 每条候选边的生成概率

    def validate_ranges(self) -> None:
        """
        Raise InvalidConfigError unless every count is positive, each min <= max,
        and percent lies in [0, 1].
        校验配置：所有计数为正、min <= max、percent 位于 [0, 1]，否则抛出 InvalidConfigError。
        """
        for name in ("min_per_rank", "max_per_rank", "min_ranks", "max_ranks"):
            if getattr(self, name) < 1:
                raise InvalidConfigError(f"{name} must be a positive integer, got {getattr(self, name)}")
        if self.min_per_rank > self.max_per_rank:
            raise InvalidConfigError(
                f"min_per_rank ({self.min_per_rank}) exceeds max_per_rank ({self.max_per_rank})"
            )
        if self.min_ranks > self.max_ranks:
            raise InvalidConfigError(
                f"min_ranks ({self.min_ranks}) exceeds max_ranks ({self.max_ranks})"
            )
        if not 0.0 <= self.percent <= 1.0:
            raise InvalidConfigError(f"percent must lie in [0, 1], got {self.percent}")


# ======================================================================
# Game models
# 游戏模型
# ======================================================================

class GameStatus(str, Enum):
    """
    Game lifecycle states, managed by GameStateMachine.
    游戏生命周期状态，由 GameStateMachine 强制管理合法转移。

    Transition graph:
    转移图：
        RUNNING -> RUNNING   (wrong nomination / 提名错误，继续)
        RUNNING -> DONE      (nomination == target / 命中目标，终态)
    """
    RUNNING = "running"
    DONE = "done"


class Relation(str, Enum):
    """
    How a nomination relates to the hidden target.
    提名节点与隐藏目标之间的关系。
    """
    TARGET = "target"           # 提名即目标
    ANCESTOR = "ancestor"       # 提名是目标的祖先（目标在其下方）
    DESCENDANT = "descendant"   # 提名是目标的后代（目标在其上方）
    UNRELATED = "unrelated"     # 两者在偏序中不可比较


class StepRecord(BaseModel):
    """
    What happened during a single driver step.
    单步游戏的记录。
    """
    step: int = Field(description="Zero-based step index")                                   # 从 0 开始的步序号
    nomination: Any = Field(description="Node nominated by the strategy")                    # 策略提名的节点
    relation: Relation                                                                         # 与目标的关系
    removed: list[Any] = Field(default_factory=list, description="Nodes eliminated this step")  # 本步被淘汰的节点
    remaining: int = Field(description="Node count after this step")                          # 本步结束后剩余节点数


class GameResult(BaseModel):
    """
    Outcome of one complete game.
    一局完整游戏的结果。
    """
    target: Any = Field(description="The hidden target node")       # 隐藏目标
    strategy: str = Field(description="Name of the strategy used")  # 使用的策略名
    steps: int = Field(default=0, ge=0, description="Wrong nominations before the target was found")  # 找到目标前的步数
    status: GameStatus = GameStatus.RUNNING
    initial_nodes: int = Field(default=0, description="Node count when the game started")  # 开局节点数
    history: list[StepRecord] = Field(default_factory=list)


class BenchmarkReport(BaseModel):
    """
    Aggregate over many seeded games.
    多局带种子游戏的汇总统计。
    """
    runs: int
    strategy: str
    seed: int | None = None
    steps: list[int] = Field(default_factory=list)   # 每局步数
    mean_steps: float = 0.0
    min_steps: int = 0
    max_steps: int = 0
    mean_nodes: float = 0.0                          # 平均开局节点数
