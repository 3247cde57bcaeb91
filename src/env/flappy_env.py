# src/env/flappy_env.py
from __future__ import annotations
from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
import pygame

from src.flappy.config import WIDTH, HEIGHT, FPS
from src.flappy.engine import FlappyEngine
from src.flappy.render import Renderer
from src.flappy.state import Phase
from src.env.observations import build_observation, OBS_LOW, OBS_HIGH


class FlappyEnv(gym.Env):
    """
    Flappy Gymnasium environment (vector observations).
    - One engine update per simulated frame (60 frames = 1 s of play).
    - Agent acts every `frame_skip` frames (default 2) -> 30 decisions/sec.
    - Observation: shape (5,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    SURVIVE_REWARD = 0.1
    PIPE_REWARD = 1.0
    DEATH_REWARD = -1.0

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 2,
                 max_decisions: Optional[int] = 5000):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Invalid render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.max_decisions = max_decisions

        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.engine: Optional[FlappyEngine] = None
        self.timestep: int = 0                   # number of *decision* steps elapsed
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None
        self.renderer: Optional[Renderer] = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # A given seed is used directly for the pipe layout; None -> random layout.
        self.engine = FlappyEngine(seed=int(seed) if seed is not None else None)
        self.engine.restart()   # straight into PLAYING, no initial flap

        self.timestep = 0
        self.current_seed = self.engine.seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0, "frame": 0}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.engine is not None, "Call reset() first."
        engine = self.engine

        # A flap while ENDED would restart the engine; the episode is over instead.
        if action == 1 and engine.phase is Phase.PLAYING:
            engine.primary_action()

        score_before = engine.score
        for _ in range(self.frame_skip):
            engine.update()
            if engine.phase is not Phase.PLAYING:
                break

        passed = engine.score - score_before
        terminated = engine.phase is Phase.ENDED
        if terminated:
            reward = self.DEATH_REWARD
        else:
            reward = self.SURVIVE_REWARD
        reward += self.PIPE_REWARD * passed

        self.timestep += 1
        truncated = False
        if (self.max_decisions is not None) and (self.timestep >= self.max_decisions) and not terminated:
            truncated = True

        obs = self._get_obs()
        info = {
            "seed": self.current_seed,
            "score": engine.score,
            "frame": engine.session.frame,
            "timestep": self.timestep,
            "pipes_passed": passed,
        }

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), bool(terminated), bool(truncated), info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.engine is not None
        s = self.engine.session
        return build_observation(s.bird, s.pipes)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.engine is None:
            return None

        if self.renderer is None:
            pygame.init()
            self.renderer = Renderer()
        if self.screen is None:
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Flappy — Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))

        self.renderer.render(self.screen, self.engine)

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata["render_fps"])
            return None

        # (W, H, 3) -> (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.renderer = None
