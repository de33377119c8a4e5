"""
Performance Benchmark
=====================

Measures how many simulation ticks per second the core, a single Gym
environment, and synchronous vector environments sustain under random
hold/release input.

Usage:
    python -m tools.benchmark_speed [--steps S] [--envs N ...] [--quick]
"""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass
from typing import Callable, List
import numpy as np

from gravity_worm.worm_core.game import CoreGame
from gravity_worm.worm_core.env_gym import WormEnv
from gravity_worm.worm_core.async_vector_env import make_sync_vec_env
from gravity_worm.worm_core.rules import Button


@dataclass
class BenchmarkResult:
    mode: str
    num_envs: int
    num_steps: int
    elapsed_seconds: float

    @property
    def total_ticks(self) -> int:
        return self.num_steps * self.num_envs

    @property
    def ticks_per_second(self) -> float:
        return self.total_ticks / self.elapsed_seconds

    @property
    def ms_per_step(self) -> float:
        return self.elapsed_seconds * 1000 / self.num_steps


def _timed(loop: Callable[[], None]) -> float:
    start = time.perf_counter()
    loop()
    return time.perf_counter() - start


def benchmark_core_game(num_steps: int = 1000, seed: int = 42) -> BenchmarkResult:
    """Raw ``CoreGame.tick`` throughput, restarting after every death."""
    game = CoreGame(seed=seed)
    holds = np.random.default_rng(seed).random(num_steps) < 0.5
    game.start()

    def loop():
        for hold in holds:
            if hold:
                game.press_btn(Button.ACTION)
            else:
                game.release_btn(Button.ACTION)
            if game.tick().died:
                game.reset()
                game.start()

    return BenchmarkResult("core_game", 1, num_steps, _timed(loop))


def benchmark_single_env(num_steps: int = 1000, seed: int = 42) -> BenchmarkResult:
    """One ``WormEnv`` including observation building."""
    env = WormEnv()
    actions = np.random.default_rng(seed).integers(0, 2, size=num_steps)
    env.reset(seed=seed)

    def loop():
        for action in actions:
            _, _, terminated, truncated, _ = env.step(int(action))
            if terminated or truncated:
                env.reset()

    try:
        return BenchmarkResult("single_env", 1, num_steps, _timed(loop))
    finally:
        env.close()


def benchmark_vector_env(num_envs: int = 16, num_steps: int = 1000, seed: int = 42) -> BenchmarkResult:
    """``SyncVectorEnv`` of *num_envs* worms stepped in lockstep (autoreset)."""
    vec_env = make_sync_vec_env(num_envs=num_envs, seed=seed)
    actions = np.random.default_rng(seed).integers(0, 2, size=(num_steps, num_envs))
    vec_env.reset(seed=seed)

    def loop():
        for batch in actions:
            vec_env.step(batch)

    try:
        return BenchmarkResult("sync_vector", num_envs, num_steps, _timed(loop))
    finally:
        vec_env.close()


def run_all_benchmarks(vector_env_sizes: List[int], steps: int = 1000) -> List[BenchmarkResult]:
    """Run every benchmark and print a summary table."""
    print("=" * 60)
    print("GRAVITY WORM PERFORMANCE BENCHMARK")
    print("=" * 60)

    runs: List[Callable[[], BenchmarkResult]] = [
        lambda: benchmark_core_game(num_steps=steps),
        lambda: benchmark_single_env(num_steps=steps),
    ]
    runs += [
        (lambda n=n: benchmark_vector_env(num_envs=n, num_steps=steps))
        for n in vector_env_sizes
    ]

    results = []
    for run in runs:
        result = run()
        results.append(result)
        print(f"{result.mode} (n={result.num_envs}): "
              f"{result.ticks_per_second:,.0f} ticks/s, {result.ms_per_step:.3f} ms/step")

    print()
    print(f"{'Mode':<14} {'Envs':>5} {'Ticks/s':>12} {'ms/step':>9}")
    print("-" * 43)
    for r in results:
        print(f"{r.mode:<14} {r.num_envs:>5} {r.ticks_per_second:>12.1f} {r.ms_per_step:>9.3f}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark gravity worm tick throughput")
    parser.add_argument("--steps", type=int, default=1000, help="Steps per benchmark")
    parser.add_argument("--envs", type=int, nargs="+", default=[1, 4, 16],
                        help="Vector env sizes to test")
    parser.add_argument("--quick", action="store_true", help="Run 100 steps per benchmark")

    args = parser.parse_args()
    run_all_benchmarks(args.envs, steps=100 if args.quick else args.steps)
    return 0


if __name__ == "__main__":
    sys.exit(main())
