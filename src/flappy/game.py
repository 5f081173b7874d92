# src/flappy/game.py
import sys, argparse, logging
import pygame
from pygame import K_ESCAPE

from .config import WIDTH, FPS, SEED_DEFAULT, BEST_SCORE_PATH
from .audio import SoundBoard
from .controller import GameController
from .difficulty import Mode, clamp_pixel_ratio
from .persistence import JsonBestScoreStore


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Flappy Modes: pass through the gaps.")
    p.add_argument("--mode", type=Mode.parse, default=Mode.NORMAL,
                   help="Difficulty: easy, normal or hard (1/2/3 in game).")
    p.add_argument("--seed", type=int, default=SEED_DEFAULT,
                   help="Obstacle layout seed. Omit for a random layout each launch.")
    p.add_argument("--width", type=int, default=WIDTH,
                   help="Initial window width in logical pixels (clamped to 400..1440, height = width/2).")
    p.add_argument("--pixel-ratio", type=float, default=1.0,
                   help="Backing resolution multiplier, clamped to 1..2.")
    p.add_argument("--best-file", type=str, default=str(BEST_SCORE_PATH),
                   help="Where the best score is kept.")
    p.add_argument("--mute", action="store_true", help="Disable sound effects.")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    pygame.display.set_caption("Flappy Modes")

    game = GameController(
        mode=args.mode,
        window_width=args.width,
        store=JsonBestScoreStore(args.best_file),
        sounds=SoundBoard(enabled=not args.mute),
        seed=args.seed,
        pixel_ratio=clamp_pixel_ratio(args.pixel_ratio),
    )
    screen = pygame.display.set_mode(game.backing_size, pygame.RESIZABLE)
    clock = pygame.time.Clock()

    try:
        while True:
            clock.tick(FPS)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN and event.key == K_ESCAPE:
                    return
                if event.type == pygame.VIDEORESIZE:
                    game.handle_event(event)
                    # keep the window at 2:1 whatever the user dragged it to
                    if screen.get_size() != game.backing_size:
                        screen = pygame.display.set_mode(game.backing_size, pygame.RESIZABLE)
                    continue
                game.handle_event(event)

            game.frame(screen)
            pygame.display.flip()
    finally:
        game.shutdown()
        pygame.quit()


def main():
    run()
    sys.exit(0)


if __name__ == "__main__":
    main()
