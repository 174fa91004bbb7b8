from __future__ import annotations

import random
from typing import Iterable

import pytest

from hoops_sim.models import Player


class FixedRandom(random.Random):
    """Random source whose every draw returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value
        self.draws = 0

    def random(self) -> float:
        self.draws += 1
        return self.value


class SequenceRandom(random.Random):
    def __init__(self, values: Iterable[float]) -> None:
        super().__init__(0)
        self.values = list(values)

    def random(self) -> float:
        if not self.values:
            raise AssertionError("Random source exhausted")
        return self.values.pop(0)


class NoDrawRandom(random.Random):
    def random(self) -> float:
        raise AssertionError("Unexpected random draw")


@pytest.fixture
def fixed_rng():
    return FixedRandom


@pytest.fixture
def sequence_rng():
    return SequenceRandom


@pytest.fixture
def no_draw_rng() -> random.Random:
    return NoDrawRandom(0)


@pytest.fixture
def star_player() -> Player:
    return Player(
        name="Franchise Star",
        position="SF",
        shooting=90,
        playmaking=85,
        defense=80,
        athleticism=88,
        basketball_iq=92,
        work_ethic=95,
        injury_prone=10,
        age=27,
    )
