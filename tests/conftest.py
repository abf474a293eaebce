from __future__ import annotations

import pytest

from strategy import GameConfig


@pytest.fixture
def words() -> tuple[str, ...]:
    return tuple(sorted([
        "abbey", "bears", "belle", "cools", "crane", "erase", "horse",
        "hoses", "house", "level", "louse", "mouse", "raise", "roate",
        "scoop", "speed", "spoon", "stare", "tears", "trace",
    ]))


@pytest.fixture
def config(words) -> GameConfig:
    return GameConfig(allowed=words, solutions=words)


@pytest.fixture
def ladder_config() -> GameConfig:
    """Words differing only in the last letter: each guess rules out one."""
    ladder = tuple(f"aaaa{c}" for c in "bcdefghij")
    return GameConfig(allowed=ladder, solutions=ladder)
