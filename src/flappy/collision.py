# src/flappy/collision.py
from __future__ import annotations
from typing import Iterable, NamedTuple, Optional, Tuple

from .config import PIPE_W


class Box(NamedTuple):
    """Axis-aligned box in screen space (y grows downwards)."""
    x: float
    y: float
    w: float
    h: float


def overlaps(a: Box, b: Box) -> bool:
    """
    AABB intersection with open intervals: boxes that only share an edge
    do NOT collide.
    """
    return (a.x < b.x + b.w and
            a.x + a.w > b.x and
            a.y < b.y + b.h and
            a.y + a.h > b.y)


def pipe_boxes(pipe, pipe_w: float = PIPE_W) -> Tuple[Box, Box]:
    """(top, bottom) collision boxes of a pipe pair. Caps are not included."""
    top = Box(pipe.x, 0.0, pipe_w, pipe.top_height)
    bottom = Box(pipe.x, pipe.bottom_y, pipe_w, pipe.bottom_height)
    return top, bottom


def first_hit(bird_box: Box, pipes: Iterable, pipe_w: float = PIPE_W) -> Optional[Box]:
    """Return the first pipe segment the bird overlaps, or None."""
    for pipe in pipes:
        for seg in pipe_boxes(pipe, pipe_w):
            if overlaps(bird_box, seg):
                return seg
    return None
