import random

import pytest


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, t=0.0):
        self.t = t

    def __call__(self):
        return self.t

    def advance(self, dt):
        self.t += dt


class Recorder:
    """Collects everything the scheduler publishes."""

    def __init__(self):
        self.frames = []
        self.tones  = []

    def render(self, snapshot):
        self.frames.append(list(snapshot))

    def emit_tone(self, frequency):
        self.tones.append(frequency)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def three():
    """[3, 1, 2] scaled into [0, 1)."""
    return [0.3, 0.1, 0.2]


@pytest.fixture
def rng():
    return random.Random(1234)
