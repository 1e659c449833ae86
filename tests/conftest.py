"""Pytest configuration to ensure the `src` package layout is importable.

This adds the `src/` directory to `sys.path` so tests can import the
`riskystrats` package without requiring an editable install in CI.
"""

import sys
from pathlib import Path

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

import random  # noqa: E402

import pytest  # noqa: E402


class MidpointRandom(random.Random):
    """Random source whose every draw is 0.5, making loss multipliers exactly 1."""

    def random(self) -> float:
        return 0.5


@pytest.fixture
def fixed_rng() -> random.Random:
    return MidpointRandom()
