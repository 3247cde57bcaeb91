from pathlib import Path

# --- Display ---
WIDTH = 400
HEIGHT = 600
FPS = 60

# --- Bird / Physics (per frame, not per second) ---
BIRD_X = 80                 # bird's fixed x (world scrolls left)
BIRD_START_Y = 250
BIRD_W = 30
BIRD_H = 30
GRAVITY = 0.5               # px/frame^2, positive = down
JUMP_VY = -5.0              # velocity set by a flap (negative = up)
ROTATION_PER_VY = 3.0       # display angle (deg) per unit of vy
ROTATION_MIN = -30.0
ROTATION_MAX = 90.0

# --- Pipes ---
PIPE_W = 60
PIPE_GAP = 150
PIPE_SPEED = 3              # px/frame
PIPE_SPAWN_FRAMES = 90      # one pair every N frames
PIPE_MIN_H = 50
PIPE_CAP_OVERHANG = 5       # cosmetic only
PIPE_CAP_H = 30
GROUND_H = 50
SEED_DEFAULT = None         # None = new random layout each launch

# --- Persistence ---
HIGH_SCORE_FILE = Path.home() / ".flappy_highscore.json"
HIGH_SCORE_KEY = "best_score"

# --- Observation (headless env) ---
OBS_MAX_VY = 15.0           # |vy| used to scale velocity into [-1, 1]

# --- Colors (RGB) ---
COLOR_SKY_TOP = (135, 206, 235)
COLOR_SKY_BOTTOM = (152, 251, 152)
COLOR_BIRD = (255, 215, 0)
COLOR_BIRD_OUTLINE = (255, 165, 0)
COLOR_PIPE = (34, 139, 34)
COLOR_PIPE_OUTLINE = (0, 100, 0)
COLOR_GROUND = (139, 69, 19)
COLOR_FG = (255, 255, 255)
COLOR_SHADOW = (20, 20, 20)
COLOR_PANEL = (0, 0, 0, 140)
COLOR_DANGER = (255, 86, 110)
