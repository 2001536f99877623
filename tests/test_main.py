"""
命令行入口测试 — 验证:
  1. 对局数解析: --runs 优先，--bench 使用 BENCH_RUNS，默认单局
  2. 模式分派: 多局走基准测试，单局走单局游戏
  3. 错误输入以退出码 1 结束

运行方式:
    pytest tests/test_main.py -v
"""

from __future__ import annotations

import sys

import pytest

import config
import main
from schema import BenchmarkReport


class TestRunCount:

    def test_default_is_single_game(self):
        assert main._run_count([]) == 1

    def test_explicit_runs(self):
        assert main._run_count(["--runs", "7"]) == 7

    def test_bench_uses_config(self, monkeypatch):
        monkeypatch.setattr(config, "BENCH_RUNS", 42)
        assert main._run_count(["--bench"]) == 42

    def test_runs_overrides_bench(self, monkeypatch):
        monkeypatch.setattr(config, "BENCH_RUNS", 42)
        assert main._run_count(["--bench", "--runs", "3"]) == 3


class TestMain:

    def test_bench_runs_benchmark_with_config_runs(self, monkeypatch):
        calls: list[tuple[int, str, int]] = []

        def fake_benchmark(runs, strategy, *, seed=None, options=None):
            calls.append((runs, strategy.name, seed))
            return BenchmarkReport(
                runs=runs, strategy=strategy.name, seed=seed, steps=[1] * runs,
                mean_steps=1.0, min_steps=1, max_steps=1, mean_nodes=10.0,
            )

        monkeypatch.setattr(config, "BENCH_RUNS", 5)
        monkeypatch.setattr(main, "run_benchmark", fake_benchmark)
        monkeypatch.setattr(sys, "argv", ["main.py", "--bench", "--seed", "11", "--strategy", "last"])
        main.main()
        assert calls == [(5, "last", 11)]

    def test_single_game(self, monkeypatch):
        monkeypatch.setattr(main, "run_benchmark", lambda *a, **k: pytest.fail("单局模式不应运行基准测试"))
        monkeypatch.setattr(sys, "argv", ["main.py", "--seed", "3"])
        main.main()

    def test_unknown_strategy_exits(self, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["main.py", "--seed", "3", "--strategy", "oracle"])
        with pytest.raises(SystemExit) as excinfo:
            main.main()
        assert excinfo.value.code == 1
