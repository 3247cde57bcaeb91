# src/flappy/bird.py
from __future__ import annotations
from dataclasses import dataclass

from .collision import Box
from .config import (
    BIRD_X, BIRD_START_Y, BIRD_W, BIRD_H, GRAVITY, JUMP_VY,
    ROTATION_PER_VY, ROTATION_MIN, ROTATION_MAX
)


def _clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))


@dataclass
class Bird:
    """
    The player's avatar. x never changes (the world scrolls left);
    y is the TOP edge, vy > 0 means falling.
    """
    x: float = float(BIRD_X)
    y: float = float(BIRD_START_Y)
    vy: float = 0.0
    rotation: float = 0.0     # display only, degrees
    w: int = BIRD_W
    h: int = BIRD_H

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.w, self.h)

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def flap(self, jump_vy: float = JUMP_VY):
        """Upward impulse: velocity is set, not added."""
        self.vy = jump_vy

    def update_physics(self, gravity: float = GRAVITY):
        """One fixed step of semi-implicit Euler: velocity first, then position."""
        self.vy += gravity
        self.y += self.vy
        self.rotation = _clamp(self.vy * ROTATION_PER_VY, ROTATION_MIN, ROTATION_MAX)
