from pathlib import Path

# --- Display ---
WIDTH = 960
HEIGHT = 480
ASPECT = 2                  # width : height
MIN_WIDTH = 400
MAX_WIDTH = 1440
MAX_PIXEL_RATIO = 2.0
FPS = 60

# --- Design baseline ---
BASE_HEIGHT = 480           # physics constants are tuned for this height
BASE_GRAVITY = 0.5          # px/tick^2 at BASE_HEIGHT
BASE_FLAP = -9.0            # px/tick, negative = up
BASE_GAP = 120
GAP_FRAC = 0.28
GAP_FACTORS = {"easy": 1.35, "normal": 1.0, "hard": 0.85}
SPEEDS = {"easy": 2.4, "normal": 3.0, "hard": 3.4}

# --- Obstacles ---
OBSTACLE_MIN_W = 54
OBSTACLE_W_FRAC = 0.06
SPACING_MIN = 260
SPACING_FRAC = 0.32
MARGIN_FRAC = 0.06          # top margin and margin above the ground
INITIAL_OBSTACLES = 6
INITIAL_OFFSET_FRAC = 0.6   # first obstacle sits this many spacings past the right edge
OFFSCREEN_PAD = 10          # recycle once x + width < -OFFSCREEN_PAD

# --- Ground ---
GROUND_MIN_H = 36
GROUND_FRAC = 0.08

# --- Entity ---
ENTITY_X_FRAC = 0.18
ENTITY_Y_FRAC = 0.5
ENTITY_MIN_R = 14
ENTITY_BASE_R = 16
WING_FLAP_ANGLE = -0.8
WING_RELAX = 0.2
TILT_MIN = -0.6
TILT_MAX = 0.8

# --- Parallax clouds: (rate, step, y_frac, r_base, count) ---
CLOUD_LAYERS = (
    (0.20, 240, 0.14, 16, 9),
    (0.35, 300, 0.22, 20, 8),
    (0.50, 380, 0.30, 24, 7),
)

# --- Colors (RGB) ---
AMBIENT_COLORS = {
    "easy": (255, 247, 191),
    "normal": (135, 206, 235),
    "hard": (156, 163, 175),
}
COLOR_SKY_TOP = (186, 230, 253)
COLOR_SKY_BOTTOM = (96, 165, 250)
COLOR_CLOUD = (255, 255, 255)
COLOR_GROUND = (222, 184, 135)
COLOR_PIPE = (46, 204, 113)
COLOR_PIPE_EDGE = (39, 174, 96)
COLOR_BODY = (241, 196, 15)
COLOR_WING = (243, 156, 18)
COLOR_EYE = (255, 255, 255)
COLOR_PUPIL = (44, 62, 80)
COLOR_BEAK = (230, 126, 34)
COLOR_TEXT_LIGHT = (255, 255, 255)
COLOR_TEXT_DARK = (31, 41, 55)
COLOR_SHADOW = (0, 0, 0)

# --- Audio: name -> (freq Hz, duration s, waveform, gain) ---
SAMPLE_RATE = 44100
TONES = {
    "flap": (760.0, 0.06, "square", 0.06),
    "score": (520.0, 0.09, "triangle", 0.06),
    "terminal": (180.0, 0.25, "sawtooth", 0.07),
}

# --- Persistence ---
BEST_SCORE_KEY = "flappy_best"
BEST_SCORE_PATH = Path.home() / ".flappy_modes" / "best.json"

# --- HUD ---
FONT_NAME = "pressstart2p"
HUD_FONT_SIZE = 16
HINT_FONT_SIZE = 14
TITLE_FONT_SIZE = 48
SEED_DEFAULT = None         # None -> random layout each launch
