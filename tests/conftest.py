import sys
from pathlib import Path

import pytest

# Flat modules live in the repository root
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from editor import GraphEditor  # noqa: E402


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def editor(clock):
    return GraphEditor(clock=clock, width=800, height=600)
