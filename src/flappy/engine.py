# src/flappy/engine.py
from __future__ import annotations
import logging
import random
from typing import List, Optional, Protocol

from .collision import first_hit
from .config import (
    WIDTH, HEIGHT, GROUND_H, GRAVITY, JUMP_VY, PIPE_SPEED, PIPE_SPAWN_FRAMES, PIPE_GAP
)
from .state import Phase, Trigger, Session, SessionSummary, next_phase
from .storage import HighScoreStore

logger = logging.getLogger(__name__)


class ScoreSink(Protocol):
    """Anything that displays scores (HUD, overlays, tests)."""
    def score_changed(self, score: int) -> None: ...
    def high_score_changed(self, best: int) -> None: ...
    def game_over(self, summary: SessionSummary) -> None: ...


class FlappyEngine:
    """
    Fixed-step simulation: one `update()` per displayed frame.

    The step is frame-count based on purpose: gravity, flap strength and pipe
    speed are tuned per frame, so a faster display makes the game faster.
    """
    def __init__(self,
                 seed: Optional[int] = None,
                 store: Optional[HighScoreStore] = None,
                 gravity: float = GRAVITY,
                 jump_vy: float = JUMP_VY,
                 pipe_speed: float = PIPE_SPEED,
                 spawn_frames: int = PIPE_SPAWN_FRAMES,
                 pipe_gap: int = PIPE_GAP,
                 width: int = WIDTH,
                 height: int = HEIGHT,
                 ground_h: int = GROUND_H):
        if spawn_frames < 1:
            raise ValueError(f"spawn_frames must be >= 1, got {spawn_frames}")
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)

        self.store = store
        self.gravity = gravity
        self.jump_vy = jump_vy
        self.pipe_speed = pipe_speed
        self.spawn_frames = spawn_frames
        self.pipe_gap = pipe_gap
        self.width = width
        self.height = height
        self.ground_h = ground_h

        self.high_score = store.load() if store is not None else 0
        self._sinks: List[ScoreSink] = []
        self._phase = Phase.START
        self._session = self._new_session()
        self.last_summary: Optional[SessionSummary] = None
        logger.info(f"Engine ready: seed={self.seed} best={self.high_score}")

    # -------------------- Accessors --------------------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def session(self) -> Session:
        return self._session

    @property
    def score(self) -> int:
        return self._session.score

    @property
    def ground_y(self) -> int:
        return self.height - self.ground_h

    def add_sink(self, sink: ScoreSink):
        self._sinks.append(sink)
        sink.score_changed(self.score)
        sink.high_score_changed(self.high_score)

    # -------------------- Input --------------------

    def primary_action(self):
        """Key press, click or touch. Meaning depends on the phase."""
        if self._phase is Phase.ENDED:
            self.restart()
            return
        self._transition(Trigger.FLAP)
        self._session.bird.flap(self.jump_vy)

    def request_restart(self):
        """Explicit restart control."""
        self.restart()

    def restart(self):
        """Throw the old session away and start playing a fresh one (no initial flap)."""
        if self._phase is Phase.PLAYING:
            # Abandoned mid-game; its score still counts towards the best.
            self._commit_high_score(self._session.score)
        self._session = self._new_session()
        self._transition(Trigger.RESTART)
        self._notify_score()

    # -------------------- Simulation --------------------

    def update(self):
        if self._phase is not Phase.PLAYING:
            return

        s = self._session
        s.frame += 1
        s.bird.update_physics(self.gravity)

        if s.frame % self.spawn_frames == 0:
            s.pipes.spawn()

        passed = s.pipes.advance(self.pipe_speed, s.bird.x)
        if passed:
            s.score += passed
            self._notify_score()

        if first_hit(s.bird.box, s.pipes, s.pipes.pipe_w) is not None:
            self._end("pipe")
            return

        if s.bird.bottom > self.ground_y or s.bird.y < 0:
            self._end("bounds")

    # -------------------- Helpers --------------------

    def _new_session(self) -> Session:
        return Session.new(rng=self.rng, width=self.width, height=self.height,
                           ground_h=self.ground_h, gap=self.pipe_gap)

    def _transition(self, trigger: Trigger):
        old = self._phase
        self._phase = next_phase(old, trigger)
        if old is not self._phase:
            logger.info(f"Phase transition: {old.name} -> {self._phase.name} ({trigger.name})")

    def _end(self, cause: str):
        s = self._session
        self._transition(Trigger.CRASH)

        new_best = self._commit_high_score(s.score)

        summary = SessionSummary(score=s.score, best=self.high_score, frames=s.frame,
                                 new_best=new_best, cause=cause)
        self.last_summary = summary
        logger.info(f"Session ended ({cause}): score={s.score} best={self.high_score} frames={s.frame}")
        for sink in self._sinks:
            sink.game_over(summary)

    def _commit_high_score(self, score: int) -> bool:
        """Raise and persist the best score if `score` beats it. Returns True when it did."""
        if score <= self.high_score:
            return False
        self.high_score = score
        if self.store is not None:
            self.store.save(self.high_score)
        for sink in self._sinks:
            sink.high_score_changed(self.high_score)
        return True

    def _notify_score(self):
        for sink in self._sinks:
            sink.score_changed(self._session.score)
