"""
Strategies module - Pluggable node-nominating strategies.
策略模块 —— 可插拔的节点提名策略。

Components:
  - base.py:     BaseStrategy abstract interface (one method: step)
  - balanced.py: BalancedPartitionStrategy, the default
  - naive.py:    LastNodeStrategy, the regression baseline

模块组成：
  - base.py:     BaseStrategy 抽象接口（仅 step 一个方法）
  - balanced.py: 均衡划分策略（默认）
  - naive.py:    末节点策略（回归基线）
"""

from .base import BaseStrategy
from .balanced import BalancedPartitionStrategy
from .naive import LastNodeStrategy

STRATEGIES: dict[str, type[BaseStrategy]] = {
    "balanced": BalancedPartitionStrategy,
    "last": LastNodeStrategy,
}


def get_strategy(name: str) -> BaseStrategy:
    """
    Instantiate a strategy by registry name.
    按注册名实例化策略；名称未知时抛出 ValueError。
    """
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown strategy {name!r}. Available: {sorted(STRATEGIES)}"
        ) from None


__all__ = ["BaseStrategy", "BalancedPartitionStrategy", "LastNodeStrategy", "STRATEGIES", "get_strategy"]
