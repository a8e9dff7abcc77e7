from __future__ import annotations

import os

# Headless pygame for the whole test session; must happen before pygame opens a display
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from spaceshooter import HighScoreStore, Simulation


class FixedRandom:
    """Always places enemies at the same x so they never drift into the ship."""

    def __init__(self, x: int = 0):
        self.x = x

    def randint(self, a, b):
        return self.x


@pytest.fixture()
def store(tmp_path) -> HighScoreStore:
    return HighScoreStore(str(tmp_path / "highscore.json"))


@pytest.fixture()
def sim(store) -> Simulation:
    return Simulation(store, FixedRandom(0))


@pytest.fixture()
def make_sim(store):
    def _make(enemy_x: int = 0) -> Simulation:
        return Simulation(store, FixedRandom(enemy_x))
    return _make


@pytest.fixture()
def game(store):
    from spaceshooter import Game
    import pygame

    g = Game(store, rng=FixedRandom(0))
    yield g
    pygame.quit()
