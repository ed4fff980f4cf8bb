import logging
import math
import threading
import time

import numpy as np
import pygame

from .settings import (
    CHUNK_SIZE, HARMONIC_BLEND, MAX_VOICES, SAMPLE_RATE, SOUND_ATTACK,
    SOUND_RELEASE, TONE_DURATION, TONE_GAIN, VOICE_STEAL_FADE,
)

log = logging.getLogger(__name__)

# ============================================================
# ====================== SOUND ENGINE ========================
# ============================================================
#
# Each emitted tone creates an _Osc. Per chunk, every live oscillator
# is rendered and summed into one buffer:
#
#   wave[t] = sin(2pi * phase[t]) + HARMONIC_BLEND * sin(4pi * phase[t])
#
# ENVELOPE — raised-cosine attack, flat hold, raised-cosine release:
#   Attack:  env[t] = 0.5 * (1 - cos(pi * t / A))         t in [0, A)
#   Release: env[t] = 0.5 * (1 + cos(pi * (t-start) / R))  t in [max_age-R, max_age)
#
# Every voice lives exactly TONE_DURATION seconds unless it is stolen:
# past MAX_VOICES the oldest voice gets VOICE_STEAL_FADE samples to fade out.
#
# The sum is divided by sqrt(n_voices) so loudness stays roughly even
# between a lone overwrite and a burst of swaps.

TWO_PI = 2.0 * math.pi


class _Osc:
    __slots__ = ('freq', 'phase', 'age', 'max_age', 'attack', 'release')

    def __init__(self, freq, max_age, attack, release):
        self.freq    = freq
        self.phase   = 0.0
        self.age     = 0
        self.max_age = max_age
        self.attack  = attack
        self.release = release


class ToneSynth:
    """
    Mixer-independent oscillator bank.

    trigger() may be called from any thread; render_chunk() is called by
    whoever feeds the audio output.
    """

    def __init__(self, sample_rate=SAMPLE_RATE, chunk_size=CHUNK_SIZE,
                 duration=TONE_DURATION, max_voices=MAX_VOICES):
        self.sample_rate = sample_rate
        self.chunk_size  = chunk_size
        self.max_voices  = max_voices
        self.life_smp    = max(1, int(duration * sample_rate))
        self.attack_smp  = max(1, min(int(SOUND_ATTACK * sample_rate), self.life_smp))
        self.release_smp = max(1, min(int(SOUND_RELEASE * sample_rate), self.life_smp))
        self._oscs       = []
        self._lock       = threading.Lock()

    @property
    def voices(self):
        with self._lock:
            return len(self._oscs)

    def trigger(self, freq: float):
        osc = _Osc(freq, self.life_smp, self.attack_smp, self.release_smp)
        with self._lock:
            if len(self._oscs) >= self.max_voices:
                oldest = self._oscs[0]
                steal = min(VOICE_STEAL_FADE, oldest.release)
                oldest.max_age = min(oldest.max_age, oldest.age + steal)
                oldest.release = steal
            self._oscs.append(osc)
            # stolen voices that already ran out are dropped here
            # so the list cannot grow while nobody renders
            if len(self._oscs) > self.max_voices:
                self._oscs = [o for o in self._oscs if o.age < o.max_age][-self.max_voices:]

    def render_chunk(self) -> np.ndarray:
        """Synthesise one chunk of mono float64 audio in [-1, 1]."""
        buf = np.zeros(self.chunk_size, dtype=np.float64)
        idx = np.arange(self.chunk_size, dtype=np.float64)

        with self._lock:
            alive = []
            for o in self._oscs:
                abs_age = idx + o.age
                phases = (o.phase + idx * (o.freq / self.sample_rate)) % 1.0
                wave = np.sin(TWO_PI * phases)
                if HARMONIC_BLEND > 0.0:
                    wave += HARMONIC_BLEND * np.sin(TWO_PI * 2.0 * phases)

                env = np.ones(self.chunk_size, dtype=np.float64)
                a_mask = abs_age < o.attack
                if np.any(a_mask):
                    env[a_mask] = 0.5 * (1.0 - np.cos(math.pi * abs_age[a_mask] / o.attack))
                rel_start = o.max_age - o.release
                r_mask = abs_age >= rel_start
                if np.any(r_mask):
                    env[r_mask] = np.maximum(0.0, 0.5 * (1.0 + np.cos(
                        math.pi * (abs_age[r_mask] - rel_start) / o.release
                    )))
                env[abs_age >= o.max_age] = 0.0

                buf += wave * env

                o.phase = (o.phase + self.chunk_size * (o.freq / self.sample_rate)) % 1.0
                o.age  += self.chunk_size
                if o.age < o.max_age:
                    alive.append(o)

            self._oscs = alive
            n_voices = max(1, len(alive))

        buf /= math.sqrt(n_voices) * (1.0 + HARMONIC_BLEND)
        return np.clip(buf * TONE_GAIN, -1.0, 1.0)


def to_pcm_stereo(mono: np.ndarray) -> np.ndarray:
    """float [-1, 1] mono -> interleaved int16 stereo at 85% headroom."""
    pcm = (np.clip(mono, -1.0, 1.0) * 32767 * 0.85).astype(np.int16)
    return np.column_stack((pcm, pcm))


# ============================================================
# ====================== AUDIO DEVICE ========================
# ============================================================

class AudioDevice:
    """
    The one pygame mixer output for the process.

    open() acquires the mixer and starts the feeder thread, close() releases
    both. If the mixer cannot be opened the device stays unavailable and
    emit_tone() does nothing, so playback carries on silently.
    """

    def __init__(self, synth=None, enabled=True):
        self.synth     = synth or ToneSynth()
        self.enabled   = enabled
        self._channel  = None
        self._thread   = None
        self._running  = False
        self._failed   = False

    @property
    def available(self):
        return self._running

    def open(self):
        if self._running:
            return self
        try:
            pygame.mixer.pre_init(self.synth.sample_rate, -16, 2, self.synth.chunk_size)
            pygame.mixer.init()
            self._channel = pygame.mixer.Channel(0)
        except pygame.error as e:
            log.warning("audio unavailable, continuing without sound: %s", e)
            self._channel = None
            return self
        self._running = True
        self._thread  = threading.Thread(target=self._loop, name="soundsorter-audio", daemon=True)
        self._thread.start()
        log.debug("audio device opened at %d Hz", self.synth.sample_rate)
        return self

    def close(self):
        was_running = self._running
        self._running = False
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None
        # pygame.quit() may already have shut the mixer down
        mixer_up = pygame.mixer.get_init() is not None
        if self._channel is not None and mixer_up:
            self._channel.stop()
        self._channel = None
        if was_running:
            if mixer_up:
                pygame.mixer.quit()
            log.debug("audio device closed")

    def __enter__(self):
        return self.open()

    def __exit__(self, *exc):
        self.close()

    def emit_tone(self, frequency: float):
        """Queue one tone. Never raises; failures are logged and the tone is dropped."""
        if not (self.enabled and self._running):
            return
        try:
            self.synth.trigger(frequency)
        except Exception:
            # log the first failure only, a broken synth would flood the log
            if not self._failed:
                log.exception("tone emission failed at %.1f Hz", frequency)
                self._failed = True

    def _loop(self):
        chunk_secs = self.synth.chunk_size / self.synth.sample_rate
        while self._running:
            stereo = to_pcm_stereo(self.synth.render_chunk())
            try:
                snd = pygame.mixer.Sound(buffer=stereo.tobytes())
                deadline = time.monotonic() + chunk_secs * 4
                while self._channel.get_queue() is not None and self._running:
                    time.sleep(0.001)
                    if time.monotonic() > deadline:
                        break
                if self._running:
                    self._channel.queue(snd)
            except pygame.error as e:
                log.warning("audio output lost, continuing without sound: %s", e)
                self._running = False
                return
            time.sleep(chunk_secs * 0.75)
