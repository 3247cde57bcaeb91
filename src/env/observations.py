# src/env/observations.py
from __future__ import annotations

import numpy as np

from src.flappy.config import WIDTH, HEIGHT, GROUND_H, OBS_MAX_VY

OBS_SIZE = 5
OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0], dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0, 1.0, 1.0], dtype=np.float32)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _norm_vy(vy: float, vy_max: float = OBS_MAX_VY) -> float:
    """Clip vy to [-vy_max, vy_max] and scale to [-1,1]."""
    vy_max = float(max(1.0, vy_max))
    return max(-vy_max, min(vy, vy_max)) / vy_max


def build_observation(bird, pipes, height: int = HEIGHT, width: int = WIDTH,
                      ground_h: int = GROUND_H) -> np.ndarray:
    """
    Returns a fixed (5,) float32 vector:
      [ y_top_norm, vy_norm, dx_next, gap_top, gap_bottom ]
    - y_top_norm  in [0,1] (bird top over the flyable height)
    - vy_norm     in [-1,1]
    - dx_next     distance from the bird to the next pipe's trailing edge / width
    - gap_top/gap_bottom: the next gap's edges / height
    Sentinels with no pipe ahead: dx_next=1.0, gap = whole sky above the ground.
    """
    flyable = max(1.0, float(height - ground_h - bird.h))
    y_top_norm = _clamp01(float(bird.y) / flyable)
    vy_norm = _norm_vy(float(bird.vy))

    nxt = pipes.next_ahead(bird.x) if pipes is not None else None
    if nxt is None:
        dx_next = 1.0
        gap_top = 0.0
        gap_bottom = _clamp01((height - ground_h) / float(height))
    else:
        dx_next = _clamp01((nxt.trailing_edge(pipes.pipe_w) - bird.x) / float(width))
        gap_top = _clamp01(nxt.top_height / float(height))
        gap_bottom = _clamp01(nxt.bottom_y / float(height))

    return np.asarray([y_top_norm, vy_norm, dx_next, gap_top, gap_bottom], dtype=np.float32)
