"""
Tests for the lock-guarded game wrapper.
"""

import threading

import numpy as np

from gravity_worm.worm_core.game import CoreGame
from gravity_worm.worm_core.rules import Button, Status
from gravity_worm.worm_core.shared_game import SharedGame


def test_delegates_to_game(config, never_spawn):
    shared = SharedGame(CoreGame(config=config, rng=never_spawn))
    shared.release_btn(Button.ACTION)
    assert shared.game.status is Status.DURING

    result = shared.advance(0.07)
    assert result.ticked
    assert shared.score == 1
    assert shared.snapshot().ticks == 1
    assert shared.get_render_data()["score"] == 1

    shared.press_btn(Button.ACTION)
    snap = shared.reset()
    assert snap.status == "before"
    assert snap.score == 0


def test_snapshots_consistent_under_concurrent_ticks(config):
    """A reader thread never sees a half-applied tick."""
    shared = SharedGame(CoreGame(config=config, seed=3))
    shared.release_btn(Button.ACTION)
    stop = threading.Event()
    errors = []

    def simulate():
        inputs = np.random.default_rng(3)
        while not stop.is_set():
            if inputs.random() < 0.5:
                shared.press_btn(Button.ACTION)
            else:
                shared.release_btn(Button.ACTION)
            if shared.game.status is not Status.DURING:
                shared.release_btn(Button.ACTION)
            shared.advance(0.07)

    worker = threading.Thread(target=simulate)
    worker.start()
    try:
        for _ in range(500):
            snap = shared.snapshot()
            if len(snap.cave_top) != 128 or len(snap.worm_height) != 64:
                errors.append("length")
            if not (snap.cave_top < snap.cave_bottom).all():
                errors.append("gap")
            if snap.status == "during" and snap.ticks and snap.score < snap.ticks - 1:
                errors.append("score")
    finally:
        stop.set()
        worker.join()

    assert errors == []
