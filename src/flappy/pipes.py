# src/flappy/pipes.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import List, Optional

from .config import (
    WIDTH, HEIGHT, GROUND_H, PIPE_W, PIPE_GAP, PIPE_MIN_H
)

logger = logging.getLogger(__name__)


@dataclass
class PipePair:
    """A top + bottom segment with a vertical gap between them."""
    x: float
    top_height: float
    bottom_y: float           # top edge of the bottom segment
    bottom_height: float
    scored: bool = False

    def trailing_edge(self, pipe_w: float = PIPE_W) -> float:
        return self.x + pipe_w


class PipeField:
    """
    Spawns pipe pairs at the right edge, scrolls them left, scores and
    retires them. Pairs stay in spawn order (FIFO).
    """
    def __init__(self,
                 rng: Optional[random.Random] = None,
                 width: int = WIDTH,
                 height: int = HEIGHT,
                 ground_h: int = GROUND_H,
                 pipe_w: int = PIPE_W,
                 gap: int = PIPE_GAP,
                 min_h: int = PIPE_MIN_H):
        self.rng = rng if rng is not None else random.Random()
        self.width = width
        self.height = height
        self.ground_h = ground_h
        self.pipe_w = pipe_w
        self.gap = gap
        self.min_h = min_h
        self.pipes: List[PipePair] = []

    def __len__(self) -> int:
        return len(self.pipes)

    def __iter__(self):
        return iter(self.pipes)

    def top_height_range(self):
        """
        Legal [lo, hi] for the top segment height. Clamped so the bottom
        segment never goes negative and never covers the ground strip.
        """
        top_max = max(0, self.height - self.ground_h - self.gap)
        lo = min(self.min_h, top_max)
        hi = self.height - self.gap - self.ground_h - self.min_h
        hi = max(lo, min(hi, top_max))
        return lo, hi

    def spawn(self) -> PipePair:
        lo, hi = self.top_height_range()
        top_h = self.rng.uniform(lo, hi)
        bottom_y = top_h + self.gap
        bottom_h = max(0.0, self.height - self.ground_h - bottom_y)
        pipe = PipePair(x=float(self.width), top_height=top_h,
                        bottom_y=bottom_y, bottom_height=bottom_h)
        self.pipes.append(pipe)
        logger.debug(f"Pipe spawned: top={top_h:.1f} bottom_y={bottom_y:.1f} live={len(self.pipes)}")
        return pipe

    def advance(self, speed: float, bird_x: float) -> int:
        """
        Scroll every pair left by `speed`. Returns how many pairs the bird
        passed this frame (each pair counts exactly once).
        """
        passed = 0
        for pipe in self.pipes:
            pipe.x -= speed
            if not pipe.scored and pipe.trailing_edge(self.pipe_w) < bird_x:
                pipe.scored = True
                passed += 1

        before = len(self.pipes)
        self.pipes = [p for p in self.pipes if p.trailing_edge(self.pipe_w) >= 0]
        if len(self.pipes) != before:
            logger.debug(f"Retired {before - len(self.pipes)} pipe(s), live={len(self.pipes)}")
        return passed

    def next_ahead(self, bird_x: float) -> Optional[PipePair]:
        """Nearest pair whose trailing edge is still at or right of bird_x."""
        for pipe in self.pipes:
            if pipe.trailing_edge(self.pipe_w) >= bird_x:
                return pipe
        return None
