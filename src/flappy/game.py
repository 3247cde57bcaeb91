# src/flappy/game.py
import sys, argparse, logging
import pygame
from pygame import K_SPACE, K_ESCAPE, K_r
from .config import WIDTH, HEIGHT, FPS, SEED_DEFAULT, HIGH_SCORE_FILE
from .engine import FlappyEngine
from .render import Renderer, Scoreboard
from .storage import HighScoreStore

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Flappy: pass the bird through the pipes.")
    p.add_argument("--seed", type=int, default=SEED_DEFAULT,
                   help="Pipe layout seed. Omit for a random layout each launch.")
    p.add_argument("--fps", type=int, default=FPS,
                   help="Frames per second. The simulation steps once per frame, "
                        "so this also sets the game speed.")
    p.add_argument("--scores-file", type=str, default=str(HIGH_SCORE_FILE),
                   help="Where the best score is kept.")
    p.add_argument("--log-level", type=str, default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def handle_event(engine: FlappyEngine, event) -> bool:
    """Translate one pygame event into engine input. Returns False when the player quits."""
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN:
        if event.key == K_ESCAPE:
            return False
        if event.key == K_SPACE:
            engine.primary_action()
        elif event.key == K_r:
            engine.request_restart()
    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        engine.primary_action()
    elif event.type == pygame.FINGERDOWN:
        engine.primary_action()
    return True


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    pygame.display.set_caption("Flappy")
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    clock = pygame.time.Clock()

    engine = FlappyEngine(seed=args.seed, store=HighScoreStore(args.scores_file))
    board = Scoreboard()
    engine.add_sink(board)
    renderer = Renderer()
    logger.info(f"Starting at {args.fps} fps, seed={engine.seed}")

    running = True
    while running:
        clock.tick(args.fps)

        # Input first so a press is visible to this frame's step.
        for event in pygame.event.get():
            if not handle_event(engine, event):
                running = False
                break

        engine.update()
        renderer.render(screen, engine, board)
        pygame.display.flip()

    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(run())
