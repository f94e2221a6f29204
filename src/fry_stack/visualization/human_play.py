from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from fry_stack.game import ClearPolicy, Command, GameConfig, GameScheduler, GameSession, GameState
from fry_stack.game.clock import DIFFICULTIES
from fry_stack.persistence import HighScoreStore
from .audio import SoundBoard
from .keyrepeat import KeyRepeater
from .renderer import Renderer


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_UP: Command.ROTATE,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_p: Command.TOGGLE_PAUSE,
}

KEY_TO_DIFFICULTY: Dict[int, str] = {
    pygame.K_1: "easy",
    pygame.K_2: "normal",
    pygame.K_3: "hard",
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Fry Stack with the keyboard.")
    p.add_argument("--difficulty", choices=sorted(DIFFICULTIES), default="normal")
    p.add_argument("--policy", choices=[c.value for c in ClearPolicy], default=ClearPolicy.CLASSIC.value)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--theme", choices=["dark", "light"], default="dark")
    p.add_argument("--mute", action="store_true")
    p.add_argument("--highscore", type=str, default=None, help="Path of the high score file")
    p.add_argument("--verbose", action="store_true")
    return p


def run(
    config: Optional[GameConfig] = None,
    theme: str = "dark",
    muted: bool = False,
    store: Optional[HighScoreStore] = None,
) -> None:
    pygame.init()
    try:
        session = GameSession(config)
        scheduler = GameScheduler(session)
        renderer = Renderer(theme=theme)
        sounds = SoundBoard(muted=muted)
        repeater = KeyRepeater()
        store = store or HighScoreStore()
        high_score = store.load()

        screen = pygame.display.set_mode(renderer.window_size(session.grid.width, session.grid.height))
        pygame.display.set_caption("Fry Stack")
        clock = pygame.time.Clock()

        running = True
        while running:
            elapsed = clock.tick(60)

            # Input handling
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_m:
                        sounds.toggle_mute()
                    elif event.key == pygame.K_t:
                        renderer.toggle_theme()
                    elif event.key in KEY_TO_DIFFICULTY:
                        session.select_difficulty(KEY_TO_DIFFICULTY[event.key])
                    elif event.key == pygame.K_RETURN:
                        if session.start():
                            repeater.clear()
                    elif event.key in KEY_TO_COMMAND:
                        command = repeater.press(KEY_TO_COMMAND[event.key])
                        session.on_input(command)
                elif event.type == pygame.KEYUP and event.key in KEY_TO_COMMAND:
                    repeater.release(KEY_TO_COMMAND[event.key])

            if session.state is GameState.PLAYING:
                for command in repeater.update(elapsed):
                    session.on_input(command)
            scheduler.advance(elapsed)

            sounds.play(session.pop_events())
            if session.score > high_score:
                high_score = store.record(session.score)

            renderer.draw(screen, session.snapshot(high_score))
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    config = GameConfig(
        random_seed=args.seed,
        difficulty=args.difficulty,
        clear_policy=ClearPolicy(args.policy),
    )
    store = HighScoreStore(args.highscore) if args.highscore else None
    run(config, theme=args.theme, muted=args.mute, store=store)


if __name__ == "__main__":  # pragma: no cover
    main()
