# src/flappy/render.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

import pygame

from .config import (
    WIDTH, HEIGHT, GROUND_H, PIPE_W, PIPE_CAP_OVERHANG, PIPE_CAP_H,
    COLOR_SKY_TOP, COLOR_SKY_BOTTOM, COLOR_BIRD, COLOR_BIRD_OUTLINE,
    COLOR_PIPE, COLOR_PIPE_OUTLINE, COLOR_GROUND, COLOR_FG, COLOR_SHADOW,
    COLOR_PANEL, COLOR_DANGER
)
from .state import Phase, SessionSummary


@dataclass
class Scoreboard:
    """
    The three numeric displays: current score, best score and the final
    score of the last session. Registered on the engine as a score sink.
    """
    score: int = 0
    best: int = 0
    final: Optional[int] = None

    def score_changed(self, score: int) -> None:
        self.score = score

    def high_score_changed(self, best: int) -> None:
        self.best = best

    def game_over(self, summary: SessionSummary) -> None:
        self.final = summary.score
        self.best = summary.best


def _lerp_color(a: Tuple[int, int, int], b: Tuple[int, int, int], t: float) -> Tuple[int, int, int]:
    return tuple(int(a[i] + (b[i] - a[i]) * t) for i in range(3))


class Renderer:
    """Draws an engine snapshot onto a pygame Surface. Never touches the simulation."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT, ground_h: int = GROUND_H,
                 pipe_w: int = PIPE_W):
        self.width = width
        self.height = height
        self.ground_h = ground_h
        self.pipe_w = pipe_w
        self._sky = self._make_sky()
        self._bird_sprites = {}

        pygame.font.init()
        self.font_big = pygame.font.Font(None, 56)
        self.font = pygame.font.Font(None, 28)

    def _make_sky(self) -> pygame.Surface:
        sky = pygame.Surface((self.width, self.height))
        for y in range(self.height):
            t = y / max(1, self.height - 1)
            pygame.draw.line(sky, _lerp_color(COLOR_SKY_TOP, COLOR_SKY_BOTTOM, t), (0, y), (self.width, y))
        return sky

    def _bird_sprite(self, w: int, h: int) -> pygame.Surface:
        sprite = self._bird_sprites.get((w, h))
        if sprite is None:
            sprite = pygame.Surface((w, h), pygame.SRCALPHA)
            sprite.fill(COLOR_BIRD)
            pygame.draw.rect(sprite, COLOR_BIRD_OUTLINE, sprite.get_rect(), width=2)
            cx, cy = w // 2, h // 2
            pygame.draw.rect(sprite, (255, 255, 255), (cx - 5, cy - 8, 8, 8))
            pygame.draw.rect(sprite, (0, 0, 0), (cx - 3, cy - 6, 4, 4))
            self._bird_sprites[(w, h)] = sprite
        return sprite

    # -------------------- Layers --------------------

    def draw_pipes(self, surf: pygame.Surface, pipes):
        w = self.pipe_w
        for pipe in pipes:
            x = int(pipe.x)
            top = pygame.Rect(x, 0, w, int(pipe.top_height))
            bottom = pygame.Rect(x, int(pipe.bottom_y), w, int(pipe.bottom_height))
            for r in (top, bottom):
                pygame.draw.rect(surf, COLOR_PIPE, r)
                pygame.draw.rect(surf, COLOR_PIPE_OUTLINE, r, width=3)

            # Caps overhang the collision box; drawing only.
            cap_w = w + 2 * PIPE_CAP_OVERHANG
            pygame.draw.rect(surf, COLOR_PIPE,
                             (x - PIPE_CAP_OVERHANG, int(pipe.top_height) - PIPE_CAP_H, cap_w, PIPE_CAP_H))
            pygame.draw.rect(surf, COLOR_PIPE,
                             (x - PIPE_CAP_OVERHANG, int(pipe.bottom_y), cap_w, PIPE_CAP_H))

    def draw_bird(self, surf: pygame.Surface, bird):
        sprite = self._bird_sprite(int(bird.w), int(bird.h))
        # pygame rotates counter-clockwise; positive rotation means nose down.
        rotated = pygame.transform.rotate(sprite, -bird.rotation)
        center = (int(bird.x + bird.w / 2), int(bird.y + bird.h / 2))
        surf.blit(rotated, rotated.get_rect(center=center))

    def draw_ground(self, surf: pygame.Surface):
        pygame.draw.rect(surf, COLOR_GROUND, (0, self.height - self.ground_h, self.width, self.ground_h))

    def _text(self, surf, font, msg: str, y: int, color=COLOR_FG):
        shadow = font.render(msg, True, COLOR_SHADOW)
        img = font.render(msg, True, color)
        x = (self.width - img.get_width()) // 2
        surf.blit(shadow, (x + 2, y + 2))
        surf.blit(img, (x, y))

    def _panel(self, surf, h: int):
        panel = pygame.Surface((self.width - 60, h), pygame.SRCALPHA)
        panel.fill(COLOR_PANEL)
        surf.blit(panel, (30, (self.height - h) // 2 - 40))

    def draw_hud(self, surf: pygame.Surface, phase: Phase, board: Scoreboard):
        mid = self.height // 2
        if phase is Phase.PLAYING:
            self._text(surf, self.font_big, str(board.score), 30)
        elif phase is Phase.START:
            self._panel(surf, 200)
            self._text(surf, self.font_big, "FLAPPY", mid - 120)
            self._text(surf, self.font, "SPACE / click / tap to flap", mid - 60)
            self._text(surf, self.font, f"Best: {board.best}", mid - 25)
        else:
            final = board.final if board.final is not None else board.score
            self._panel(surf, 220)
            self._text(surf, self.font_big, "GAME OVER", mid - 125, COLOR_DANGER)
            self._text(surf, self.font, f"Score: {final}", mid - 70)
            self._text(surf, self.font, f"Best: {board.best}", mid - 40)
            self._text(surf, self.font, "SPACE / R to restart", mid)

    # -------------------- Frame --------------------

    def render(self, surf: pygame.Surface, engine, board: Optional[Scoreboard] = None):
        """Draw one frame. Without a scoreboard the HUD reads the engine directly."""
        if board is None:
            summary = engine.last_summary
            board = Scoreboard(score=engine.score, best=engine.high_score,
                               final=summary.score if summary is not None else None)

        surf.blit(self._sky, (0, 0))
        self.draw_pipes(surf, engine.session.pipes)
        self.draw_bird(surf, engine.session.bird)
        self.draw_ground(surf)
        self.draw_hud(surf, engine.phase, board)
