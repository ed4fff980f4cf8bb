import argparse
import logging
import random
import sys
from dataclasses import dataclass

import pygame

from .engines import ALGORITHMS
from .render import BarView
from .settings import (
    ARRAY_SIZE, BTN_GAP, BTN_H, ENABLE_SOUND, FPS, PAD, STEP_DELAY, UI_ACCENT,
    UI_BG, UI_BORDER, UI_GREEN, UI_HOVER, UI_PANEL2, UI_SEL_BG, UI_SUBTEXT,
    UI_TEXT, WINDOW_HEIGHT, WINDOW_WIDTH,
)
from .sound import AudioDevice
from .visualizer import Visualizer

NEW_ARRAY = "new"


@dataclass(frozen=True)
class Options:
    size: int = ARRAY_SIZE
    step_delay: float = STEP_DELAY
    seed: int | None = None
    sound: bool = ENABLE_SOUND
    fps: int = FPS
    verbose: bool = False


def build_parser():
    p = argparse.ArgumentParser(prog="soundsorter",
                                description="Watch and listen to six sorting algorithms.")
    p.add_argument("--size", type=int, default=ARRAY_SIZE, help="number of bars (default %(default)s)")
    p.add_argument("--delay", type=float, default=STEP_DELAY * 1000.0,
                   help="minimum milliseconds between moves (default %(default)s)")
    p.add_argument("--seed", type=int, default=None, help="seed for array generation")
    p.add_argument("--mute", action="store_true", help="start with sound off")
    p.add_argument("--fps", type=int, default=FPS, help="frame rate cap (default %(default)s)")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p


def parse_options(argv=None) -> Options:
    parser = build_parser()
    a = parser.parse_args(argv)
    if a.size < 0:
        parser.error("--size must be >= 0")
    if a.delay < 0:
        parser.error("--delay must be >= 0")
    if a.fps <= 0:
        parser.error("--fps must be > 0")
    return Options(size=a.size, step_delay=a.delay / 1000.0, seed=a.seed,
                   sound=ENABLE_SOUND and not a.mute, fps=a.fps, verbose=a.verbose)

# ============================================================
# ========================= UI WIDGETS =======================
# ============================================================

class Btn:
    def __init__(self, x, y, w, h, label, key):
        self.rect = pygame.Rect(x, y, w, h); self.label = label; self.key = key

    def draw(self, s, fonts, sel=False, hov=False):
        bg = UI_SEL_BG if sel else (UI_HOVER if hov else UI_PANEL2)
        br = UI_ACCENT if sel else UI_BORDER
        pygame.draw.rect(s, bg, self.rect, border_radius=5)
        pygame.draw.rect(s, br, self.rect, 1, border_radius=5)
        t = fonts['small'].render(self.label, True, UI_TEXT)
        s.blit(t, t.get_rect(center=self.rect.center))


def build_buttons():
    entries = [("New Array", NEW_ARRAY)] + list(ALGORITHMS)
    w = (WINDOW_WIDTH - 2*PAD - (len(entries)-1)*BTN_GAP) / len(entries)
    return [Btn(int(PAD + i*(w+BTN_GAP)), PAD, int(w), BTN_H, nm, ky)
            for i, (nm, ky) in enumerate(entries)]


def build_fonts():
    def tf(names, sz):
        for n in names:
            try: return pygame.font.SysFont(n, sz)
            except Exception: pass
        return pygame.font.SysFont(None, sz)
    mono = ["Consolas", "Courier New", "Lucida Console"]
    sans = ["Segoe UI", "Tahoma", "Arial"]
    return dict(small=tf(sans, 14), mono_sm=tf(mono, 13))

# ============================================================
# ========================= MAIN =============================
# ============================================================

class App:
    def __init__(self, screen, audio, opts: Options):
        self.screen = screen
        self.audio  = audio
        self.opts   = opts
        self.fonts  = build_fonts()
        self.btns   = build_buttons()
        top = PAD + BTN_H + 36
        self.view = BarView((0, top, WINDOW_WIDTH, WINDOW_HEIGHT - top))
        self.vis  = Visualizer(self.view, audio.emit_tone, size=opts.size,
                               step_delay=opts.step_delay, rng=random.Random(opts.seed))
        self.view(self.vis.snapshot())

    def handle(self, ev):
        if ev.type == pygame.QUIT:
            return False
        if ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_ESCAPE: return False
            if ev.key == pygame.K_m: self.audio.enabled = not self.audio.enabled
            if ev.key == pygame.K_n: self.vis.reset()
        if ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for b in self.btns:
                if b.rect.collidepoint(ev.pos):
                    if b.key == NEW_ARRAY: self.vis.reset()
                    else: self.vis.start(b.key)
        return True

    def draw(self):
        s = self.screen
        mp = pygame.mouse.get_pos()
        s.fill(UI_BG)
        for b in self.btns:
            b.draw(s, self.fonts, b.key == self.vis.algorithm, b.rect.collidepoint(mp))

        step, total = self.vis.progress()
        name = dict((k, n) for n, k in ALGORITHMS).get(self.vis.algorithm, "")
        done = self.vis.algorithm and not self.vis.playing
        status = (f"{name}  {step}/{total}" + ("  [SORTED]" if done else "")) if name else "Pick an algorithm"
        s.blit(self.fonts['mono_sm'].render(status, True, UI_GREEN if done else UI_SUBTEXT),
               (PAD, PAD + BTN_H + 10))
        snd = "Sound: ON" if self.audio.enabled and self.audio.available else "Sound: OFF"
        t = self.fonts['mono_sm'].render(f"{snd}   [M] mute  [N] new  [ESC] quit", True, UI_SUBTEXT)
        s.blit(t, (WINDOW_WIDTH - PAD - t.get_width(), PAD + BTN_H + 10))

        self.view.draw(s)
        pygame.display.flip()

    def run(self):
        clock = pygame.time.Clock()
        while True:
            clock.tick(self.opts.fps)
            for ev in pygame.event.get():
                if not self.handle(ev):
                    return
            event = self.vis.update()
            self.view.active = event.active if event else ()
            self.draw()


def main(argv=None):
    opts = parse_options(argv)
    logging.basicConfig(level=logging.DEBUG if opts.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s")
    try:
        # the mixer is opened first so pygame.init() does not pick its own format
        with AudioDevice(enabled=opts.sound) as audio:
            pygame.init()
            screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
            pygame.display.set_caption("SoundSorter")
            App(screen, audio, opts).run()
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
