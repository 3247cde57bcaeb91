"""
Replay tool for FlappyEnv — quick command cheat sheet

# Typical usage (run from REPO ROOT so `src/...` imports work)

# Replay a HEURISTIC episode by seed (uses experiments/runs/traces/heuristic/<seed>_actions.npy)
python -m experiments.replay --policy heuristic --seed 105

# Replay by pointing directly to a specific actions file
python -m experiments.replay --trace experiments/runs/traces/random/112_actions.npy --frame-skip 2

# Slow the display to the decision rate for readability
python -m experiments.replay --policy heuristic --seed 105 --slow

# Controls during replay
SPACE = pause/resume
N     = single step (when paused)
R     = restart episode
ESC   = quit

# Notes
- Deterministic: same seed, frame_skip and action sequence -> same run.
- With --trace the meta sidecar is not read; pass --frame-skip if it differs from 2.
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import Optional, List

import numpy as np
import pygame

from src.env.flappy_env import FlappyEnv
from src.flappy.config import WIDTH, BIRD_X, HEIGHT

DEFAULT_OUT_DIR = "experiments/runs"
DEFAULT_FRAME_SKIP = 2

def _find_trace(out_dir: Path, policy: str, seed: int) -> Path:
    p = out_dir / "traces" / policy / f"{seed}_actions.npy"
    if not p.exists():
        raise FileNotFoundError(f"Trace not found: {p}")
    return p

def _read_meta(out_dir: Path, policy: str, seed: int) -> dict:
    meta_path = out_dir / "traces" / policy / f"{seed}_meta.txt"
    meta = {}
    if meta_path.exists():
        for line in meta_path.read_text(encoding="utf-8").splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                meta[k.strip()] = v.strip()
    return meta

def _draw_overlay(env: FlappyEnv, step_idx: int, action: Optional[int]):
    surf = pygame.display.get_surface()
    if surf is None or env.engine is None:
        return
    font = pygame.font.Font(None, 20)
    obs = env._get_obs()

    # Lookahead guide to the next pipe's trailing edge
    guide_x = int(BIRD_X + float(obs[2]) * WIDTH)
    pygame.draw.line(surf, (90, 180, 255), (guide_x, 0), (guide_x, HEIGHT), 1)

    lines: List[str] = [
        f"Step={step_idx}  Action={'NOOP' if action == 0 else ('FLAP' if action == 1 else '-')}",
        f"Score={env.engine.score}  Frame={env.engine.session.frame}  Phase={env.engine.phase.name}",
        f"y={obs[0]:.2f}  vy={obs[1]:.2f}  dx={obs[2]:.2f}",
        f"gap=[{obs[3]:.2f}, {obs[4]:.2f}]",
    ]

    panel = pygame.Surface((WIDTH - 24, 20 * (len(lines) + 1)), pygame.SRCALPHA)
    panel.fill((10, 20, 35, 160))
    surf.blit(panel, (12, HEIGHT - panel.get_height() - 60))

    y0 = HEIGHT - panel.get_height() - 54
    for i, txt in enumerate(lines):
        surf.blit(font.render(txt, True, (210, 230, 255)), (20, y0 + i * 20))

    pygame.display.flip()

def replay_episode(seed: int, actions: np.ndarray, frame_skip: int, slow: bool = False):
    """
    Replays an episode deterministically with on-screen overlay.
    Controls:
      SPACE: pause/resume   N: single-step when paused
      R: restart episode    ESC: quit
    """
    env = FlappyEnv(render_mode="human", frame_skip=frame_skip)
    env.reset(seed=seed)

    paused = False
    single = False
    step_idx = 0
    action: Optional[int] = None
    clock = pygame.time.Clock()
    decision_fps = max(1, env.metadata["render_fps"] // frame_skip)

    try:
        running = True
        while running and step_idx < len(actions):
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        paused = not paused
                    elif event.key == pygame.K_n and paused:
                        single = True
                    elif event.key == pygame.K_r:
                        env.reset(seed=seed)
                        step_idx = 0
                        paused = False

            if paused and not single:
                env.render()
                _draw_overlay(env, step_idx, action=None)
                clock.tick(30)
                continue
            single = False

            action = int(actions[step_idx])
            obs, r, term, trunc, info = env.step(action)
            _draw_overlay(env, step_idx, action)
            step_idx += 1

            if slow:
                clock.tick(decision_fps)

            if term or trunc:
                pygame.time.delay(600)
                break
    finally:
        env.close()

def main(argv=None):
    ap = argparse.ArgumentParser(description="Replay a recorded FlappyEnv episode with overlay.")
    ap.add_argument("--seed", type=int, help="Episode seed")
    ap.add_argument("--policy", type=str, default="random",
                    help="Trace subfolder name, e.g. random / heuristic")
    ap.add_argument("--trace", type=str, default="",
                    help="Optional explicit path to a .npy action file")
    ap.add_argument("--out-dir", type=str, default=DEFAULT_OUT_DIR,
                    help="Base directory where experiments/runs live")
    ap.add_argument("--frame-skip", type=int, default=-1,
                    help=f"Override frame_skip. If <0, use meta or default={DEFAULT_FRAME_SKIP}")
    ap.add_argument("--slow", action="store_true", help="Slow display to the decision rate")
    args = ap.parse_args(argv)

    out_dir = Path(args.out_dir)

    if args.trace:
        trace_path = Path(args.trace)
        if not trace_path.exists():
            raise FileNotFoundError(f"Trace file not found: {trace_path}")
        if args.seed is None:
            try:
                args.seed = int(trace_path.stem.split("_")[0])
            except ValueError:
                raise SystemExit(f"Cannot infer seed from {trace_path.name}; pass --seed")
    else:
        if args.seed is None:
            raise SystemExit("Please provide --seed or --trace")
        trace_path = _find_trace(out_dir, args.policy, args.seed)

    actions = np.load(trace_path)
    if actions.ndim != 1:
        raise ValueError(f"Expected 1D action array, got shape {actions.shape}")

    fs = args.frame_skip
    if fs < 0:
        fs = DEFAULT_FRAME_SKIP
        if not args.trace:
            meta = _read_meta(out_dir, args.policy, args.seed)
            if "frame_skip" in meta:
                fs = int(meta["frame_skip"])

    print(f"Replaying seed={args.seed}  policy={args.policy}  steps={len(actions)}  frame_skip={fs}")
    print("Controls: SPACE pause/resume | N step (when paused) | R restart | ESC quit")

    replay_episode(seed=args.seed, actions=actions, frame_skip=fs, slow=args.slow)

if __name__ == "__main__":
    main()
