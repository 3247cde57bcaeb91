"""
Tests for FlappyEnv (Gymnasium environment).

Usage (from repo root):
  pytest src/tests/test_flappy_env.py
  python -m src.tests.test_flappy_env
  python -m src.tests.test_flappy_env --render
  python -m src.tests.test_flappy_env --no-api-check --no-determinism
"""

from __future__ import annotations
import argparse
import os
import sys
from typing import List, Tuple

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
from gymnasium.utils.env_checker import check_env

from src.env.flappy_env import FlappyEnv
from src.flappy.config import HEIGHT, WIDTH

SEED = 123
STEPS = 300
FRAME_SKIP = 2


def api_check(frame_skip: int = FRAME_SKIP) -> None:
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = FlappyEnv(frame_skip=frame_skip)
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()


def smoke_test(steps: int = STEPS, seed: int = SEED, frame_skip: int = FRAME_SKIP) -> None:
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = FlappyEnv(frame_skip=frame_skip)
    try:
        obs, info = env.reset(seed=seed)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert info["seed"] == seed

        env.action_space.seed(seed)
        for t in range(steps):
            obs, r, term, trunc, info = env.step(env.action_space.sample())
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term or trunc:
                break
    finally:
        env.close()


def determinism_test(steps: int = STEPS, seed: int = SEED, frame_skip: int = FRAME_SKIP) -> None:
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = FlappyEnv(frame_skip=frame_skip)
        traj: List[Tuple[np.ndarray, float, bool, bool]] = []
        try:
            env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    # Fixed action sequence using a local RNG (not numpy global)
    rng = np.random.RandomState(42)
    action_seq = [int(rng.rand() < 0.1) for _ in range(steps)]

    t1 = rollout(seed, action_seq)
    t2 = rollout(seed, action_seq)

    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        assert np.array_equal(o1, o2), f"Determinism: obs mismatch at step {i}"
        assert (r1, te1, tr1) == (r2, te2, tr2), f"Determinism: transition mismatch at step {i}"


def render_demo(steps: int = 120, seed: int = SEED, frame_skip: int = FRAME_SKIP) -> None:
    """Open a window and run a short NOOP demo so you can visually verify behavior."""
    env = FlappyEnv(render_mode="human", frame_skip=frame_skip)
    try:
        env.reset(seed=seed)
        for _ in range(steps):
            _, _, term, trunc, _ = env.step(0)
            if term or trunc:
                break
    finally:
        env.close()


# -------------------- pytest entry points --------------------

def test_api_check():
    api_check()


def test_smoke():
    smoke_test()


def test_determinism():
    determinism_test()


def test_noop_falls_to_the_ground():
    env = FlappyEnv(frame_skip=1)
    try:
        env.reset(seed=SEED)
        rewards = []
        term = False
        while not term:
            _, r, term, trunc, info = env.step(0)
            rewards.append(r)
            assert not trunc
        # Falls from y=250 and hits the ground on frame 33 (no pipe before frame 90)
        assert info["frame"] == 33
        assert rewards[-1] == FlappyEnv.DEATH_REWARD
        assert all(r == FlappyEnv.SURVIVE_REWARD for r in rewards[:-1])
    finally:
        env.close()


def test_flap_after_termination_does_not_restart():
    env = FlappyEnv(frame_skip=4)
    try:
        env.reset(seed=SEED)
        term = False
        while not term:
            _, _, term, _, info = env.step(0)
        frame = info["frame"]
        _, _, term, _, info = env.step(1)
        assert term
        assert info["frame"] == frame
    finally:
        env.close()


def test_truncation_on_decision_limit():
    env = FlappyEnv(frame_skip=1, max_decisions=3)
    try:
        env.reset(seed=SEED)
        flags = [env.step(0)[3] for _ in range(3)]
        assert flags == [False, False, True]
    finally:
        env.close()


def test_rgb_array_render():
    env = FlappyEnv(render_mode="rgb_array")
    try:
        env.reset(seed=SEED)
        env.step(1)
        frame = env.render()
        assert frame.shape == (HEIGHT, WIDTH, 3)
        assert frame.dtype == np.uint8
    finally:
        env.close()


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=SEED, help="Episode seed for tests")
    ap.add_argument("--steps", type=int, default=STEPS, help="Max decision steps per test")
    ap.add_argument("--frame-skip", type=int, default=FRAME_SKIP, help="Sim frames per decision step")
    ap.add_argument("--render", action="store_true", help="Run a short visual demo")
    ap.add_argument("--no-api-check", action="store_true", help="Skip Gym API compliance check")
    ap.add_argument("--no-smoke", action="store_true", help="Skip smoke test")
    ap.add_argument("--no-determinism", action="store_true", help="Skip determinism test")
    args = ap.parse_args()

    try:
        if not args.no_api_check:
            api_check(frame_skip=args.frame_skip)
            print("✓ API check ok")
        if not args.no_smoke:
            smoke_test(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
            print("✓ Smoke test ok")
        if not args.no_determinism:
            determinism_test(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
            print("✓ Determinism ok")
        if args.render:
            os.environ.pop("SDL_VIDEODRIVER", None)
            render_demo(steps=min(args.steps, 600), seed=args.seed, frame_skip=args.frame_skip)
            print("✓ Render demo finished")
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
