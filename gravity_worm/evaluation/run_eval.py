"""
Evaluation Harness
==================

Plays an agent through one episode per seed in the seed bank and reports
how long the worm survived and what it scored.

Usage:
    python -m gravity_worm.evaluation.run_eval --agent contestants/baseline_hover
    python -m gravity_worm.evaluation.run_eval --agent my_agent.py --max-ticks 2000 --output out.json
"""

from __future__ import annotations

import argparse
import dataclasses
import importlib.util
import json
import os
import sys
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
import numpy as np

from gravity_worm.worm_core.config_loader import GameConfig, load_config
from gravity_worm.worm_core.env_gym import WormEnv


AgentFn = Callable[[Dict[str, np.ndarray]], int]

DEFAULT_SEED_BANK = os.path.join(os.path.dirname(__file__), "seed_bank.json")
TRUNCATED_REASON = "max_ticks"


@dataclass
class EvalResult:
    """One episode on one seed."""
    seed: int
    final_score: int
    ticks: int
    prizes_collected: int
    termination_reason: str
    elapsed_time: float
    actions: Optional[List[int]] = None

    @property
    def survived(self) -> bool:
        """True if the episode hit the tick cap instead of a wall."""
        return self.termination_reason == TRUNCATED_REASON

    def to_dict(self) -> Dict[str, Any]:
        data = dataclasses.asdict(self)
        if self.actions is None:
            del data["actions"]
        return data


@dataclass
class EvalSummary:
    """Aggregate statistics over every evaluated seed."""
    mean_score: float
    std_score: float
    min_score: int
    max_score: int
    median_score: float
    mean_ticks: float
    survival_rate: float
    total_time: float
    results: List[EvalResult] = field(default_factory=list)

    @classmethod
    def from_results(cls, results: List[EvalResult], total_time: float) -> "EvalSummary":
        if not results:
            raise ValueError("Cannot summarize an empty evaluation")

        scores = np.array([r.final_score for r in results])
        ticks = np.array([r.ticks for r in results])
        return cls(
            mean_score=float(scores.mean()),
            std_score=float(scores.std()),
            min_score=int(scores.min()),
            max_score=int(scores.max()),
            median_score=float(np.median(scores)),
            mean_ticks=float(ticks.mean()),
            survival_rate=sum(r.survived for r in results) / len(results),
            total_time=total_time,
            results=list(results),
        )

    def print_report(self) -> None:
        print()
        print("=" * 50)
        print("EVALUATION SUMMARY")
        print("=" * 50)
        print(f"Seeds evaluated: {len(self.results)}")
        print(f"Score:           {self.mean_score:.2f} +/- {self.std_score:.2f}")
        print(f"Min / median / max: {self.min_score} / {self.median_score:.1f} / {self.max_score}")
        print(f"Mean ticks:      {self.mean_ticks:.1f}")
        print(f"Reached cap:     {self.survival_rate:.0%}")
        print(f"Total time:      {self.total_time:.2f}s")
        print("=" * 50)


def load_seed_bank(path: Optional[str] = None) -> List[int]:
    """
    Load the evaluation seed bank.

    Args:
        path: Path to a seed bank JSON file. Uses the bundled one if None.

    Returns:
        List of integer seeds.
    """
    with open(path or DEFAULT_SEED_BANK, "r") as f:
        data = json.load(f)
    return [int(s) for s in data["seeds"]]


def _resolve_agent_file(agent_path: str) -> Path:
    path = Path(agent_path)
    agent_file = path / "agent.py" if path.is_dir() else path
    if not agent_file.exists():
        raise FileNotFoundError(f"Agent file not found: {agent_file}")
    return agent_file


def load_agent(agent_path: str) -> AgentFn:
    """
    Import an agent and return its act callable.

    The module may provide a ``create_agent()`` factory, a ``WormAgent``
    class, or a plain ``act(obs)`` function, checked in that order.

    Args:
        agent_path: Agent directory (containing agent.py) or a .py file.

    Returns:
        Callable mapping an observation dict to 0 or 1.
    """
    agent_file = _resolve_agent_file(agent_path)

    module_spec = importlib.util.spec_from_file_location("worm_agent", agent_file)
    if module_spec is None or module_spec.loader is None:
        raise ImportError(f"Failed to load agent module from {agent_file}")
    module = importlib.util.module_from_spec(module_spec)
    sys.modules["worm_agent"] = module
    module_spec.loader.exec_module(module)

    if hasattr(module, "create_agent"):
        agent = module.create_agent()
    elif hasattr(module, "WormAgent"):
        agent = module.WormAgent()
    elif hasattr(module, "act"):
        return module.act
    else:
        raise AttributeError(
            f"{agent_file} defines none of create_agent(), WormAgent or act()"
        )

    if not callable(getattr(agent, "act", None)):
        raise AttributeError(f"Agent from {agent_file} has no act() method")
    return agent.act


def evaluate_single_seed(
    agent_fn: AgentFn,
    seed: int,
    config: Optional[GameConfig] = None,
    record_actions: bool = False,
    verbose: bool = False
) -> EvalResult:
    """
    Play one episode.

    Args:
        agent_fn: Agent act function (obs) -> action.
        seed: Prize-spawn seed.
        config: Game configuration. Uses default if None.
        record_actions: Keep the full action trace in the result.
        verbose: Print a one-line result.

    Returns:
        EvalResult for this seed.
    """
    env = WormEnv(config=config)
    actions: Optional[List[int]] = [] if record_actions else None

    try:
        obs, info = env.reset(seed=seed)
        started = time.perf_counter()
        terminated = truncated = False
        while not (terminated or truncated):
            action = int(agent_fn(obs))
            if actions is not None:
                actions.append(action)
            obs, _, terminated, truncated, info = env.step(action)
        elapsed = time.perf_counter() - started
    finally:
        env.close()

    result = EvalResult(
        seed=seed,
        final_score=int(info["score"]),
        ticks=int(info["ticks"]),
        prizes_collected=int(info["prizes_collected"]),
        termination_reason=info["terminated_reason"] or TRUNCATED_REASON,
        elapsed_time=elapsed,
        actions=actions,
    )

    if verbose:
        print(f"  seed {seed:>6}: score={result.final_score:<6} ticks={result.ticks:<6} "
              f"prizes={result.prizes_collected:<3} {result.termination_reason} ({elapsed:.2f}s)")

    return result


def evaluate_agent(
    agent_fn: AgentFn,
    seeds: Optional[List[int]] = None,
    config: Optional[GameConfig] = None,
    record_actions: bool = False,
    verbose: bool = True
) -> EvalSummary:
    """
    Evaluate an agent on every seed.

    Args:
        agent_fn: Agent act function (obs) -> action.
        seeds: Seeds to play. Uses the bundled seed bank if None.
        config: Game configuration. Uses default if None.
        record_actions: Keep action traces.
        verbose: Print per-seed lines and the final report.

    Returns:
        EvalSummary with aggregate statistics.
    """
    seeds = load_seed_bank() if seeds is None else seeds
    if verbose:
        print(f"Evaluating on {len(seeds)} seeds...")

    started = time.perf_counter()
    results = [
        evaluate_single_seed(agent_fn, seed, config=config,
                             record_actions=record_actions, verbose=verbose)
        for seed in seeds
    ]
    summary = EvalSummary.from_results(results, time.perf_counter() - started)

    if verbose:
        summary.print_report()
    return summary


def save_results(summary: EvalSummary, agent_name: str, output_path: str) -> None:
    """Write the summary and per-seed results as JSON."""
    data = dataclasses.asdict(summary)
    data["results"] = [r.to_dict() for r in summary.results]
    data["agent"] = agent_name
    data["timestamp"] = time.strftime("%Y-%m-%d %H:%M:%S")

    with open(output_path, "w") as f:
        json.dump(data, f, indent=2)

    print(f"Results saved to {output_path}")


def main():
    parser = argparse.ArgumentParser(description="Evaluate a gravity worm agent")
    parser.add_argument("--agent", required=True,
                        help="Agent directory (with agent.py) or agent .py file")
    parser.add_argument("--seeds", default=None,
                        help="Seed bank JSON (default: bundled seed_bank.json)")
    parser.add_argument("--config", default=None, help="Path to game_config.yaml")
    parser.add_argument("--max-ticks", type=int, default=None,
                        help="Override the per-episode tick cap")
    parser.add_argument("--output", default=None, help="Write results JSON here")
    parser.add_argument("--record", action="store_true", help="Record action traces")
    parser.add_argument("--quiet", action="store_true", help="Only print errors")

    args = parser.parse_args()
    if args.max_ticks is not None and args.max_ticks <= 0:
        parser.error("--max-ticks must be positive")

    try:
        agent_fn = load_agent(args.agent)
        config = load_config(args.config)
        seeds = load_seed_bank(args.seeds) if args.seeds else None
    except (FileNotFoundError, ImportError, AttributeError, ValueError) as e:
        print(f"Error loading evaluation inputs: {e}")
        return 1

    if args.max_ticks is not None:
        config = dataclasses.replace(
            config, caps=dataclasses.replace(config.caps, max_ticks=args.max_ticks)
        )

    summary = evaluate_agent(
        agent_fn,
        seeds=seeds,
        config=config,
        record_actions=args.record,
        verbose=not args.quiet
    )

    if args.output:
        save_results(summary, Path(args.agent).stem, args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
