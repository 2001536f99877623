"""
Game State Machine - Validates and enforces game lifecycle transitions.
游戏状态机 —— 校验并强制执行游戏生命周期的合法状态转移。

The transition table is the single source of truth for what state changes
are legal. Any invalid transition raises InvalidTransitionError, so a driver
can never keep stepping a finished game.
转移表是合法状态变化的唯一权威来源。
任何非法转移都会抛出 InvalidTransitionError，保证驱动器不会在已结束的游戏上继续执行。

Transition graph:
转移图：
    RUNNING ──> RUNNING   (wrong nomination / 提名错误，继续下一步)
            ──> DONE      (nomination == target / 命中目标)
    DONE                  (terminal / 终态)
"""

from __future__ import annotations

import logging
from typing import Callable

from errors import GraphError
from schema import GameStatus

logger = logging.getLogger(__name__)


class InvalidTransitionError(GraphError):
    """
    Raised when an illegal state transition is attempted.
    当尝试非法状态转移时抛出此异常。
    """
    pass


VALID_TRANSITIONS: dict[GameStatus, set[GameStatus]] = {
    GameStatus.RUNNING: {GameStatus.RUNNING, GameStatus.DONE},
    # Terminal state — no further transitions allowed
    # 终态——不允许任何进一步转移
    GameStatus.DONE: set(),
}


class GameStateMachine:
    """
    Holds the current game status and applies validated transitions.
    持有当前游戏状态并应用经过校验的状态转移。

    Provides a single `transition()` method that:
      1. Checks the VALID_TRANSITIONS table
      2. Applies the change
      3. Fires an optional callback (GameDriver forwards it as a "status" event)

    提供唯一的 `transition()` 方法，该方法：
      1. 查询 VALID_TRANSITIONS 表校验合法性
      2. 应用状态变更
      3. 触发可选回调函数（GameDriver 将其转发为 "status" 事件）
    """

    def __init__(self, on_transition: Callable[[GameStatus, GameStatus], None] | None = None):
        """
        Every game starts RUNNING.
        每局游戏均从 RUNNING 开始。

        Args:
            on_transition: Optional callback(old_status, new_status)
            on_transition: 可选回调 callback(旧状态, 新状态)
        """
        self.status = GameStatus.RUNNING
        self._on_transition = on_transition

    @property
    def is_done(self) -> bool:
        return self.status == GameStatus.DONE

    def can_transition(self, new_status: GameStatus) -> bool:
        """
        Check whether moving to `new_status` is legal.
        检查转移到 `new_status` 是否合法。
        """
        return new_status in VALID_TRANSITIONS.get(self.status, set())

    def transition(self, new_status: GameStatus) -> None:
        """
        Apply a state transition. Raises InvalidTransitionError if illegal.
        应用状态转移。若转移非法则抛出 InvalidTransitionError。
        """
        if not self.can_transition(new_status):
            raise InvalidTransitionError(
                f"Game: cannot transition from {self.status.value} to {new_status.value}. "
                f"Valid targets: {sorted(s.value for s in VALID_TRANSITIONS.get(self.status, set()))}"
            )

        old_status = self.status
        self.status = new_status

        logger.debug("[SM] game: %s -> %s", old_status.value, new_status.value)

        if self._on_transition:
            self._on_transition(old_status, new_status)
