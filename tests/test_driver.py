"""
游戏驱动器与状态机测试 — 验证:
  1. 三种剪枝分支 (目标在下方 / 目标在上方 / 无关)
  2. 终止性: N 个节点的图至多 N 步结束，最后一次提名即目标
  3. 错误传播: 目标不存在、策略提名非法节点、策略抛错
  4. 状态机: RUNNING -> DONE 后不可再转移

运行方式:
    pytest tests/test_driver.py -v
"""

from __future__ import annotations

import random
from unittest.mock import MagicMock

import pytest

from dag.generator import random_dag
from dag.graph import Graph
from dag.state_machine import GameStateMachine, InvalidTransitionError
from errors import EmptyGraphError, NodeNotFoundError
from game.driver import GameDriver
from schema import GameStatus, RandomOptions, Relation
from strategies import BalancedPartitionStrategy, LastNodeStrategy
from strategies.base import BaseStrategy


# ======================================================================
# Helpers
# ======================================================================


class ScriptedStrategy(BaseStrategy):
    """按预设顺序提名，用于精确控制每一步。"""

    def __init__(self, *nominations: str):
        self._nominations = list(nominations)

    @property
    def name(self) -> str:
        return "scripted"

    def step(self, graph: Graph) -> str:
        return self._nominations.pop(0)


def _build_layers() -> Graph:
    """
        P ──> N ──> C1 ──> T
          │     └─> C2
          └─> S
        U (isolated)
    """
    return Graph.from_adjacency({"P": ["N", "S"], "N": ["C1", "C2"], "C1": ["T"], "U": []})


# ======================================================================
# Test 1: 剪枝分支
# ======================================================================


class TestPruning:

    def test_target_below_nomination_removes_parents(self):
        graph = _build_layers()
        driver = GameDriver(graph, "T", ScriptedStrategy("N", "T"))
        record = driver.step()

        assert record.relation == Relation.ANCESTOR
        assert record.removed == ["P", "N"]
        assert graph.nodes() == {"C1", "C2", "S", "T", "U"}
        assert record.remaining == 5
        assert driver.status == GameStatus.RUNNING
        assert driver.steps == 1

    def test_target_above_nomination_removes_children(self):
        graph = _build_layers()
        driver = GameDriver(graph, "P", ScriptedStrategy("N"))
        record = driver.step()

        assert record.relation == Relation.DESCENDANT
        assert sorted(record.removed) == ["C1", "C2", "N", "T"]
        assert graph.nodes() == {"P", "S", "U"}

    def test_unrelated_removes_only_nomination(self):
        """无关分支是合法的零信息步，不是错误。"""
        graph = _build_layers()
        driver = GameDriver(graph, "T", ScriptedStrategy("U"))
        record = driver.step()

        assert record.relation == Relation.UNRELATED
        assert record.removed == ["U"]
        assert len(graph) == 6
        assert driver.status == GameStatus.RUNNING

    def test_sibling_is_unrelated(self):
        graph = _build_layers()
        record = GameDriver(graph, "T", ScriptedStrategy("S")).step()
        assert record.relation == Relation.UNRELATED
        assert "P" in graph, "兄弟分支提名不应删除共同祖先"

    def test_hit_on_first_step(self):
        graph = _build_layers()
        result = GameDriver(graph, "S", ScriptedStrategy("S")).run()
        assert result.steps == 0
        assert result.status == GameStatus.DONE
        assert result.history[-1].relation == Relation.TARGET
        assert len(graph) == 7, "命中目标时不修改图"


# ======================================================================
# Test 2: 终止性与完整对局
# ======================================================================


class TestTermination:

    @pytest.mark.parametrize("strategy", [BalancedPartitionStrategy(), LastNodeStrategy()], ids=lambda s: s.name)
    def test_every_target_terminates_within_node_count(self, strategy):
        rng = random.Random(5)
        for _ in range(10):
            opts = RandomOptions(percent=rng.random())
            seed = rng.randrange(2**32)
            labels = sorted(random_dag(opts, seed=seed).nodes())
            for target in labels:
                graph = random_dag(opts, seed=seed)
                result = GameDriver(graph, target, strategy).run()
                assert result.steps <= len(labels)
                assert result.history[-1].nomination == target
                assert target in graph
                counts = [record.remaining for record in result.history[:-1]]
                assert all(a > b for a, b in zip([len(labels)] + counts, counts)), "每步节点数严格减少"

    def test_chain_is_binary_search_for_balanced(self):
        """全序链上均衡策略退化为二分查找。"""
        graph = Graph()
        graph.add_node("0")
        for i in range(1, 15):
            graph.add_edge(str(i - 1), str(i))
        for target in graph.nodes():
            result = GameDriver(Graph.from_adjacency(graph.adjacency_list()), target, BalancedPartitionStrategy()).run()
            assert result.steps <= 4

    def test_events_emitted(self):
        events: list[str] = []
        GameDriver(
            _build_layers(), "T", ScriptedStrategy("U", "N", "T"),
            on_event=lambda event, data: events.append(event),
        ).run()
        assert events[0] == "game_start"
        assert events.count("nomination") == 3
        assert events.count("pruned") == 2
        assert events[-1] == "game_done"

    def test_result_fields(self):
        result = GameDriver(_build_layers(), "T", ScriptedStrategy("U", "N", "T")).run()
        assert result.target == "T"
        assert result.strategy == "scripted"
        assert result.initial_nodes == 7
        assert [r.step for r in result.history] == [0, 1, 2]
        assert result.steps == 2


# ======================================================================
# Test 3: 错误传播
# ======================================================================


class TestErrors:

    def test_target_must_exist(self):
        with pytest.raises(NodeNotFoundError):
            GameDriver(_build_layers(), "missing", ScriptedStrategy())

    def test_absent_nomination(self):
        driver = GameDriver(_build_layers(), "T", ScriptedStrategy("ghost"))
        with pytest.raises(NodeNotFoundError) as excinfo:
            driver.step()
        assert excinfo.value.node == "ghost"

    def test_strategy_error_propagates(self):
        strategy = MagicMock(spec=BaseStrategy)
        strategy.name = "broken"
        strategy.step.side_effect = EmptyGraphError("broken")
        driver = GameDriver(_build_layers(), "T", strategy)
        with pytest.raises(EmptyGraphError):
            driver.run()
        assert driver.status == GameStatus.RUNNING

    def test_cannot_step_after_done(self):
        driver = GameDriver(_build_layers(), "T", ScriptedStrategy("T", "T"))
        driver.run()
        with pytest.raises(InvalidTransitionError):
            driver.step()

    def test_step_after_done_leaves_game_untouched(self):
        """结束后的 step() 必须在调用策略前被拒绝：图、步数、历史均不变。"""
        graph = _build_layers()
        strategy = ScriptedStrategy("T", "U")
        driver = GameDriver(graph, "T", strategy)
        result = driver.run()
        before = graph.adjacency_list()
        history = list(result.history)

        with pytest.raises(InvalidTransitionError):
            driver.step()

        assert graph.adjacency_list() == before
        assert driver.steps == 0
        assert result.history == history
        assert strategy._nominations == ["U"], "策略不应被再次调用"
        assert driver.status == GameStatus.DONE


# ======================================================================
# Test 4: 状态机
# ======================================================================


class TestGameStateMachine:

    def test_transitions(self):
        seen: list[tuple[GameStatus, GameStatus]] = []
        sm = GameStateMachine(on_transition=lambda old, new: seen.append((old, new)))
        assert sm.can_transition(GameStatus.RUNNING)
        sm.transition(GameStatus.RUNNING)
        sm.transition(GameStatus.DONE)
        assert sm.is_done
        assert seen == [
            (GameStatus.RUNNING, GameStatus.RUNNING),
            (GameStatus.RUNNING, GameStatus.DONE),
        ]

    def test_done_is_terminal(self):
        sm = GameStateMachine()
        sm.transition(GameStatus.DONE)
        assert not sm.can_transition(GameStatus.RUNNING)
        with pytest.raises(InvalidTransitionError):
            sm.transition(GameStatus.DONE)

    def test_driver_forwards_transitions_as_events(self):
        transitions: list[tuple[GameStatus, GameStatus]] = []

        def on_event(event, data):
            if event == "status":
                transitions.append((data["from"], data["to"]))

        GameDriver(_build_layers(), "T", ScriptedStrategy("U", "T"), on_event=on_event).run()
        assert transitions == [
            (GameStatus.RUNNING, GameStatus.RUNNING),
            (GameStatus.RUNNING, GameStatus.DONE),
        ]
