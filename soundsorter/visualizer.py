import logging
import random
import time

from .engines import sort
from .playback import PlaybackScheduler
from .settings import ARRAY_SIZE, STEP_DELAY

log = logging.getLogger(__name__)


def generate_array(n: int, rng=None) -> list:
    """n independent uniform values in [0, 1)."""
    rng = rng or random
    return [rng.random() for _ in range(n)]


class Visualizer:
    """
    Holds the array that is "on screen" and ties sorting to playback.

    A sort always starts from what is currently displayed: if a previous
    replay is mid-way, its partially sorted array is the new input and the
    old replay is cancelled.
    """

    def __init__(self, render, emit_tone, size=ARRAY_SIZE, step_delay=STEP_DELAY,
                 rng=None, clock=time.monotonic):
        self.size   = size
        self.rng    = rng or random.Random()
        self.render = render
        self.scheduler = PlaybackScheduler(render, emit_tone, step_delay, clock)
        self._array = generate_array(size, self.rng)
        self.algorithm = None

    def snapshot(self) -> list:
        pb = self.scheduler.current
        return pb.snapshot() if pb is not None else list(self._array)

    @property
    def playing(self):
        return self.scheduler.busy

    def progress(self):
        pb = self.scheduler.current
        return (pb.step, pb.total) if pb is not None else (0, 0)

    def reset(self):
        self.scheduler.clear()
        self.algorithm = None
        self._array = generate_array(self.size, self.rng)
        self.render(list(self._array))

    def start(self, key):
        """Sort the on-screen array with `key` and begin replaying it."""
        seed = self.snapshot()
        # an unknown key raises here, before the running replay is touched
        moves = sort(key, seed)
        log.debug("sort %r requested (replacing=%s)", key, self.playing)
        self._array = seed
        self.algorithm = key
        return self.scheduler.play(seed, moves, label=key)

    def update(self):
        return self.scheduler.update()
