"""
Configuration module for find-node.
Loads settings from environment variables or .env file.
find-node 配置模块。
从环境变量或 .env 文件加载所有配置项。
"""

import os
from dotenv import load_dotenv

load_dotenv()  # 自动读取项目根目录的 .env 文件（若存在），优先级低于系统环境变量


def _optional_int(name: str) -> int | None:
    value = os.getenv(name, "").strip()
    return int(value) if value else None


def _optional_float(name: str) -> float | None:
    value = os.getenv(name, "").strip()
    return float(value) if value else None


# --- Random DAG (library defaults) ---
# --- 随机 DAG 默认形状 ---
DAG_MIN_PER_RANK = int(os.getenv("DAG_MIN_PER_RANK", "1"))      # 每层最少节点数
DAG_MAX_PER_RANK = int(os.getenv("DAG_MAX_PER_RANK", "5"))      # 每层最多节点数
DAG_MIN_RANKS = int(os.getenv("DAG_MIN_RANKS", "3"))            # 最少层数
DAG_MAX_RANKS = int(os.getenv("DAG_MAX_RANKS", "5"))            # 最多层数
DAG_EDGE_PERCENT = float(os.getenv("DAG_EDGE_PERCENT", "0.3"))  # 每条候选前向边的生成概率

# --- Benchmark profile ---
# --- 基准测试使用的图形状（更大的图）---
BENCH_MIN_PER_RANK = int(os.getenv("BENCH_MIN_PER_RANK", "15"))
BENCH_MAX_PER_RANK = int(os.getenv("BENCH_MAX_PER_RANK", "20"))
BENCH_MIN_RANKS = int(os.getenv("BENCH_MIN_RANKS", "8"))
BENCH_MAX_RANKS = int(os.getenv("BENCH_MAX_RANKS", "10"))
BENCH_EDGE_PERCENT = _optional_float("BENCH_EDGE_PERCENT")  # 留空 = 每局随机抽取边概率
BENCH_RUNS = int(os.getenv("BENCH_RUNS", "100"))            # 基准测试局数

# --- Game ---
# --- 游戏参数 ---
GAME_SEED = _optional_int("GAME_SEED")                   # 留空 = 从系统熵源取种子
GAME_STRATEGY = os.getenv("GAME_STRATEGY", "balanced")   # "balanced"=均衡划分策略 | "last"=朴素基线策略
