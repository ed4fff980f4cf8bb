"""Timed, cancellable replay of a MoveLog.

The scheduler never sleeps: the host loop calls update() once per frame and
at most one move is applied per call, once STEP_DELAY has elapsed since the
previous one.
"""

import logging
import time
from dataclasses import dataclass

from .moves import MoveLog, apply_move, check_length, touched
from .settings import STEP_DELAY
from .tone import tone_frequency

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaybackEvent:
    """What one replayed move produced: the new array and the tones it asks for."""
    step: int
    snapshot: tuple
    frequencies: tuple
    active: tuple = ()


class Playback:
    """
    One replay session: a lazy cursor into a MoveLog plus the array it mutates.

    The array is a private copy of `initial`; nothing else writes to it.
    """

    def __init__(self, initial, moves: MoveLog, mapper=tone_frequency, label=""):
        self.array = list(initial)
        check_length(self.array, moves)
        self.label     = label
        self.total     = len(moves)
        self.step      = 0
        self.cancelled = False
        self.finished  = False
        self.tone_failed = False
        self._mapper   = mapper
        self._cursor   = self._events(iter(moves))

    @property
    def active(self):
        return not (self.cancelled or self.finished)

    def cancel(self):
        if self.active:
            log.debug("playback %r cancelled at %d/%d", self.label, self.step, self.total)
        self.cancelled = True

    def snapshot(self):
        return list(self.array)

    def _events(self, moves):
        for move in moves:
            apply_move(self.array, move)
            self.step += 1
            idx = touched(move)
            yield PlaybackEvent(
                step=self.step,
                snapshot=tuple(self.array),
                frequencies=tuple(self._mapper(self.array[i]) for i in idx),
                active=idx,
            )

    def advance(self):
        """Apply the next move; None once the log is used up or cancelled."""
        if not self.active:
            return None
        event = next(self._cursor, None)
        if event is None:
            self.finished = True
            log.debug("playback %r finished after %d moves", self.label, self.step)
        return event


class PlaybackScheduler:
    """
    Owns at most one Playback and advances it from the host frame loop.

    render(snapshot) and emit_tone(frequency) are the injected collaborators.
    `clock` returns seconds and defaults to time.monotonic.
    """

    def __init__(self, render, emit_tone, step_delay=STEP_DELAY, clock=time.monotonic,
                 mapper=tone_frequency):
        self.render     = render
        self.emit_tone  = emit_tone
        self.step_delay = step_delay
        self.clock      = clock
        self.mapper     = mapper
        self.current    = None
        self._due       = 0.0

    @property
    def busy(self):
        return self.current is not None and self.current.active

    def play(self, initial, moves: MoveLog, label="") -> Playback:
        """Cancel whatever is playing and start replaying `moves` from `initial`."""
        self.cancel()
        self.current = Playback(initial, moves, self.mapper, label)
        self._due = self.clock()
        log.debug("playback %r started: %d moves", label, len(moves))
        return self.current

    def cancel(self):
        if self.current is not None:
            self.current.cancel()

    def clear(self):
        self.cancel()
        self.current = None

    def update(self):
        """
        Run at most one step if it is due. Returns the PlaybackEvent that was
        applied, or None if nothing happened this tick.
        """
        pb = self.current
        if pb is None or not pb.active:
            return None
        now = self.clock()
        if now < self._due:
            return None
        self._due = now + self.step_delay

        event = pb.advance()
        if event is None:
            if pb.finished:
                self.render(pb.snapshot())
            return None

        self.render(list(event.snapshot))
        for freq in event.frequencies:
            try:
                self.emit_tone(freq)
            except Exception:
                # audio is a side effect; the replay carries on without it
                if not pb.tone_failed:
                    log.exception("tone failed at %.1f Hz, continuing %r without audio",
                                  freq, pb.label)
                    pb.tone_failed = True
        return event
