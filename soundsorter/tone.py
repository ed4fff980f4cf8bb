from .settings import TONE_BASE, TONE_SPAN


def tone_frequency(value: float, base: float = TONE_BASE, span: float = TONE_SPAN) -> float:
    """Map an array value in [0, 1) linearly onto [base, base + span) Hz."""
    return base + value * span
