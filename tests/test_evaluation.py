"""
Tests for the evaluation harness and the bundled agents.
"""

import dataclasses
import json
import os

import pytest

from gravity_worm.evaluation import evaluate_agent, load_seed_bank
from gravity_worm.evaluation.run_eval import load_agent, save_results


ROOT = os.path.join(os.path.dirname(__file__), "..")


@pytest.fixture
def short_config(config):
    return dataclasses.replace(config, caps=dataclasses.replace(config.caps, max_ticks=200))


def test_seed_bank():
    seeds = load_seed_bank()
    assert len(seeds) == 20
    assert len(set(seeds)) == 20


def test_always_hold_agent(short_config):
    summary = evaluate_agent(lambda obs: 1, seeds=[1, 2], config=short_config,
                             record_actions=True, verbose=False)
    assert [r.final_score for r in summary.results] == [23, 23]
    assert all(r.termination_reason == "hit_top_wall" for r in summary.results)
    assert summary.results[0].actions == [1] * 24
    assert summary.mean_score == 23.0


def test_truncated_episode_reason(short_config):
    """An agent still alive at the tick cap is recorded as max_ticks."""
    agent = load_agent(os.path.join(ROOT, "contestants", "baseline_hover"))
    summary = evaluate_agent(agent, seeds=[3], config=short_config, verbose=False)
    result = summary.results[0]
    assert result.ticks <= 200
    if result.ticks == 200:
        assert result.termination_reason == "max_ticks"


def test_load_agent_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_agent(str(tmp_path))

    (tmp_path / "agent.py").write_text("VALUE = 1\n")
    with pytest.raises(AttributeError):
        load_agent(str(tmp_path))


def test_load_standalone_act(tmp_path):
    (tmp_path / "agent.py").write_text("def act(obs):\n    return 0\n")
    assert load_agent(str(tmp_path))({}) == 0


def test_save_results(tmp_path, short_config):
    summary = evaluate_agent(lambda obs: 1, seeds=[5], config=short_config, verbose=False)
    out = tmp_path / "results.json"
    save_results(summary, "always_hold", str(out))
    data = json.loads(out.read_text())
    assert data["agent"] == "always_hold"
    assert data["results"][0]["seed"] == 5
    assert data["results"][0]["final_score"] == 23
