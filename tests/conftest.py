from __future__ import annotations

import random

import pytest

# Import project primitives
from numstr import (
    LocaleNumberParser,
    PureNumberParser,
)


# -----------------------------
# Test helpers (pure functions)
# -----------------------------


class FixedRandom:
    """Deterministic random source returning a constant.

    - value < 0.5 makes RANDOMLY round a tie up; value >= 0.5 rounds it down.
    - calls counts how often the source was consulted.
    """

    def __init__(self, value: float) -> None:
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def pure_parser() -> PureNumberParser:
    return PureNumberParser(".")


@pytest.fixture()
def us_parser() -> LocaleNumberParser:
    return LocaleNumberParser.united_states()



@pytest.fixture()
def seeded_rng() -> random.Random:
    return random.Random(20240501)


@pytest.fixture()
def rng_up() -> FixedRandom:
    return FixedRandom(0.25)


@pytest.fixture()
def rng_down() -> FixedRandom:
    return FixedRandom(0.75)
