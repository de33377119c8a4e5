"""
Shared fixtures: default config and scripted prize random sources.
"""

import pytest

from gravity_worm.worm_core.config_loader import load_config


class ScriptedRng:
    """
    Deterministic stand-in for PrizeRng.

    Args:
        spawn: Value returned by every should_spawn() call.
        row: Callable (top, bottom) -> row. Defaults to top + 1.
    """

    def __init__(self, spawn=False, row=None):
        self.spawn = spawn
        self.row = row or (lambda top, bottom: top + 1)
        self.spawn_calls = 0
        self.resets = 0

    def should_spawn(self):
        self.spawn_calls += 1
        return self.spawn

    def row_between(self, top, bottom):
        return self.row(top, bottom)

    def reset(self, seed=None):
        self.resets += 1


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def never_spawn():
    return ScriptedRng(spawn=False)


@pytest.fixture
def always_spawn():
    return ScriptedRng(spawn=True)


@pytest.fixture
def scripted_rng():
    """The ScriptedRng class, for tests that need custom rows."""
    return ScriptedRng
