# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

WINDOW_WIDTH  = 1100
WINDOW_HEIGHT = 680
FPS           = 240

ARRAY_SIZE = 30

# STEP_DELAY — minimum time between two replayed moves, in seconds.
#   The scheduler never runs more than one move per frame, so at 240 FPS
#   anything below ~0.004 is effectively "as fast as the window redraws".
STEP_DELAY = 0.001

BACKGROUND_COLOR = (5, 5, 10)
ACTIVE_COLOR     = (255, 60, 60)
BAR_SPACING      = 1
BAR_TOP_MARGIN   = 90

# ============================================================
# ======================= TONE MAPPING =======================
# ============================================================
#
# frequency = TONE_BASE + value * TONE_SPAN
#   value is in [0, 1) so tones land in [200, 700) Hz.
TONE_BASE = 200.0
TONE_SPAN = 500.0

# ============================================================
# ====================== SOUND SETTINGS ======================
# ============================================================

ENABLE_SOUND = True
SAMPLE_RATE  = 44100
CHUNK_SIZE   = 512
#
# TONE_DURATION — total lifetime of one tone, in seconds (attack + release
#   included). Every tone has the same length regardless of frequency.
TONE_DURATION = 0.10
#
# TONE_GAIN — output level of the mixed voices before int16 conversion.
TONE_GAIN = 0.35
#
# SOUND_ATTACK — fade-in time in seconds.
#   Raised-cosine (Hann) window: env[t] = 0.5 * (1 - cos(pi * t / A))
SOUND_ATTACK = 0.006
#
# SOUND_RELEASE — fade-out time in seconds, same shape mirrored.
#   Long release relative to TONE_DURATION gives the short "pluck" decay.
SOUND_RELEASE = 0.070
#
# HARMONIC_BLEND — amount of 2nd harmonic (octave above) mixed in.
#   wave = sin(2pi*f*t) + HARMONIC_BLEND * sin(4pi*f*t)
HARMONIC_BLEND = 0.08
#
# MAX_VOICES — maximum simultaneous oscillators before oldest are culled.
#   A swap fires two tones per step, so this fills up fast at 1 ms steps.
MAX_VOICES = 24
#
# VOICE_STEAL_FADE — samples a stolen voice gets to fade to zero.
VOICE_STEAL_FADE = 64

# ============================================================
# ========================= UI THEME =========================
# ============================================================

UI_BG         = (8,   8,  14)
UI_PANEL2     = (22, 22,  36)
UI_ACCENT     = (255, 55,  55)
UI_TEXT       = (215, 215, 228)
UI_SUBTEXT    = (105, 105, 130)
UI_HOVER      = (30,  22,  38)
UI_SEL_BG     = (50,  12,  12)
UI_BORDER     = (38,  38,  58)
UI_GREEN      = (60, 200, 100)

PAD     = 16
BTN_H   = 34
BTN_GAP = 6
