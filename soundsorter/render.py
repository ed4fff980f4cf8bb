import pygame

from .settings import (
    ACTIVE_COLOR, BACKGROUND_COLOR, BAR_SPACING, BAR_TOP_MARGIN,
)

# ============================================================
# ======================= COLOR / DRAW =======================
# ============================================================

def value_to_color(r):
    """Blue -> cyan -> green -> yellow -> red across [0, 1)."""
    r = min(max(r, 0.0), 1.0)
    if r < 0.25: return (0, int(255 * r * 4), 255)
    if r < 0.5:  return (0, 255, int(255 * (1 - (r - 0.25) * 4)))
    if r < 0.75: return (int(255 * (r - 0.5) * 4), 255, 0)
    return (255, int(255 * (1 - (r - 0.75) * 4)), 0)


class BarView:
    """
    Render collaborator: remembers the last published snapshot and draws it
    as a bar chart under the button row.
    """

    def __init__(self, rect):
        self.rect   = pygame.Rect(rect)
        self.array  = []
        self.active = ()

    def __call__(self, snapshot):
        self.array = list(snapshot)

    def draw(self, screen):
        pygame.draw.rect(screen, BACKGROUND_COLOR, self.rect)
        n = len(self.array)
        if not n:
            return
        bw = self.rect.width / n
        usable = self.rect.height - BAR_TOP_MARGIN
        for i, v in enumerate(self.array):
            h = max(1, int(v * usable))
            c = ACTIVE_COLOR if i in self.active else value_to_color(v)
            pygame.draw.rect(screen, c, (self.rect.x + i * bw, self.rect.bottom - h,
                                         max(1, bw - BAR_SPACING), h))
