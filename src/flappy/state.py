"""
Session state and phase machine.

Phases:
    START: title screen, nothing moves
    PLAYING: simulation advances once per frame
    ENDED: the bird hit a pipe or left the playfield; waits for input

A flap while ENDED is handled by the engine as a RESTART.

Every phase change goes through `next_phase`, so an invalid transition is
impossible to perform silently.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, Tuple

from .bird import Bird
from .pipes import PipeField


class Phase(Enum):
    START = auto()
    PLAYING = auto()
    ENDED = auto()


class Trigger(Enum):
    """What caused a phase change."""
    FLAP = auto()       # primary action (key, click, touch)
    CRASH = auto()      # pipe hit or out of bounds
    RESTART = auto()    # explicit restart control


class TransitionError(ValueError):
    """Raised when a trigger is not valid in the current phase."""


TRANSITIONS: Dict[Tuple[Phase, Trigger], Phase] = {
    (Phase.START, Trigger.FLAP): Phase.PLAYING,
    (Phase.START, Trigger.RESTART): Phase.PLAYING,
    (Phase.PLAYING, Trigger.FLAP): Phase.PLAYING,
    (Phase.PLAYING, Trigger.CRASH): Phase.ENDED,
    (Phase.PLAYING, Trigger.RESTART): Phase.PLAYING,
    (Phase.ENDED, Trigger.RESTART): Phase.PLAYING,
}


def next_phase(phase: Phase, trigger: Trigger) -> Phase:
    try:
        return TRANSITIONS[(phase, trigger)]
    except KeyError:
        raise TransitionError(f"{trigger.name} is not valid in phase {phase.name}") from None


@dataclass
class Session:
    """Everything that belongs to one play-through. Never reused across restarts."""
    bird: Bird
    pipes: PipeField
    score: int = 0
    frame: int = 0

    @classmethod
    def new(cls, rng: Optional[random.Random] = None, **pipe_kwargs) -> "Session":
        return cls(bird=Bird(), pipes=PipeField(rng=rng, **pipe_kwargs))


@dataclass
class SessionSummary:
    """Result of a finished session, handed to score sinks."""
    score: int
    best: int
    frames: int
    new_best: bool = False
    cause: str = ""
