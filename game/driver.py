"""
Game Driver - Runs the guess-the-node elimination loop.
游戏驱动器 —— 运行猜节点的淘汰循环。

Each iteration of the loop is one step:
  1. Ask the strategy for a nomination
  2. If it is the target: DONE
  3. Otherwise locate the target relative to the nomination and prune:
     - target below the nomination  -> remove the nomination's parents
     - target above the nomination  -> remove the nomination's children
     - unrelated                    -> no bulk pruning
  4. Remove the nomination itself
  5. Count the step and continue

循环的每次迭代是一步：
  1. 向策略请求提名
  2. 若提名即目标：进入 DONE
  3. 否则判断目标相对提名的位置并剪枝：
     - 目标在提名下方（是其后代）-> 删除提名的所有祖先
     - 目标在提名上方（是其祖先）-> 删除提名的所有后代
     - 两者无关                   -> 不做批量剪枝（合法的零信息步）
  4. 删除提名节点本身
  5. 步数加一，继续

The node count strictly decreases every step, so a game on N nodes ends
within N steps. Any strategy or graph error ends the game and propagates.
每一步节点数严格减少，因此 N 个节点的游戏至多 N 步结束。策略或图的任何错误都会终止本局并向上抛出。
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from dag.graph import Graph, Node
from dag.state_machine import GameStateMachine, InvalidTransitionError
from errors import NodeNotFoundError
from schema import GameResult, GameStatus, Relation, StepRecord
from strategies.base import BaseStrategy

logger = logging.getLogger(__name__)


class GameDriver:
    """
    Owns the graph for one game and drives it to completion.
    持有单局游戏的图，并驱动游戏直至结束。

    The graph is mutated in place; callers that need the original must pass
    a fresh Graph per game.
    图会被原地修改；需要保留原图的调用方应为每局游戏传入独立的 Graph。
    """

    def __init__(
        self,
        graph: Graph,
        target: Node,
        strategy: BaseStrategy,
        on_event: Callable[[str, Any], None] | None = None,
    ):
        if target not in graph:
            raise NodeNotFoundError(target, "hide target")

        self._graph = graph
        self._target = target
        self._strategy = strategy
        self._emit = on_event or (lambda *_: None)  # 事件回调（用于 UI 实时更新）
        self._sm = GameStateMachine(
            on_transition=lambda old, new: self._emit("status", {"from": old, "to": new}),
        )
        self._result = GameResult(
            target=target,
            strategy=strategy.name,
            initial_nodes=len(graph),
        )
        self._emit("game_start", {"graph": graph.summary(), "strategy": strategy.name})

    @property
    def status(self) -> GameStatus:
        return self._sm.status

    @property
    def steps(self) -> int:
        return self._result.steps

    # ------------------------------------------------------------------
    # Main loop
    # 主循环
    # ------------------------------------------------------------------

    def run(self) -> GameResult:
        """
        Step until the target is nominated, then return the result.
        持续执行 step() 直到目标被提名，返回本局结果。
        """
        while not self._sm.is_done:
            self.step()
        return self._result

    def step(self) -> StepRecord:
        """
        Perform a single transition out of RUNNING.
        执行一次从 RUNNING 出发的状态转移。

        A finished game raises InvalidTransitionError before the strategy is
        consulted, leaving the graph and result untouched.
        已结束的游戏在调用策略之前即抛出 InvalidTransitionError，图与结果保持不变。
        """
        if self._sm.is_done:
            raise InvalidTransitionError(
                f"Game: already {self._sm.status.value} after {self._result.steps} steps, cannot step again"
            )

        nomination = self._strategy.step(self._graph)
        if nomination not in self._graph:
            logger.warning("[Driver] %s nominated %r, which is not in the graph", self._strategy.name, nomination)
            raise NodeNotFoundError(nomination, "nominate")
        self._emit("nomination", {"step": self._result.steps, "node": nomination})

        if nomination == self._target:
            self._sm.transition(GameStatus.DONE)
            record = StepRecord(
                step=self._result.steps,
                nomination=nomination,
                relation=Relation.TARGET,
                remaining=len(self._graph),
            )
            self._result.history.append(record)
            self._result.status = GameStatus.DONE
            logger.info("[Driver] Found target node %r in %d steps", nomination, self._result.steps)
            self._emit("game_done", self._result)
            return record

        relation, removed = self._prune(nomination)
        self._graph.remove_node(nomination)
        removed.append(nomination)

        record = StepRecord(
            step=self._result.steps,
            nomination=nomination,
            relation=relation,
            removed=removed,
            remaining=len(self._graph),
        )
        self._result.history.append(record)
        self._result.steps += 1
        self._sm.transition(GameStatus.RUNNING)

        logger.debug(
            "[Driver] Step %d: %r is %s, removed %d, %s",
            record.step, nomination, relation.value, len(removed), self._graph.summary(),
        )
        self._emit("pruned", record)
        return record

    # ------------------------------------------------------------------
    # Pruning
    # 剪枝
    # ------------------------------------------------------------------

    def _prune(self, nomination: Node) -> tuple[Relation, list[Node]]:
        """
        Probe children then parents of the nomination for the target and
        remove the side that cannot hold it.
        依次在提名的后代、祖先中查找目标，并删除不可能包含目标的一侧。
        """
        if self._target in self._graph.children(nomination):
            doomed = self._graph.parents(nomination)
            relation = Relation.ANCESTOR
        elif self._target in self._graph.parents(nomination):
            doomed = self._graph.children(nomination)
            relation = Relation.DESCENDANT
        else:
            return Relation.UNRELATED, []

        removed = sorted(doomed, key=str)
        for node in removed:
            self._graph.remove_node(node)
        return relation, removed
