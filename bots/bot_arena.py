"""Simple bot arena for Crazy Eights."""

from __future__ import annotations

import argparse
import logging
from random import Random
from typing import Dict, Iterable, Optional

from eights.config import configure_logging
from eights.rules import Intent, transition
from eights.state import GameState, GameStatus, Side

from .base import BotStrategy
from .baseline_eights_last import EightsLastBot
from .random_bot import RandomBot

logger = logging.getLogger(__name__)

MAX_TURNS = 1000

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "eights-last": EightsLastBot,
    "random": RandomBot,
}


def play_game(
    bot_player: BotStrategy,
    bot_opponent: BotStrategy,
    *,
    rng: Random,
    max_turns: int = MAX_TURNS,
    state: Optional[GameState] = None,
) -> GameState:
    """Play one game with a bot in each seat and return the final state.

    A fresh game is dealt unless a ``state`` to continue from is given.

    Both hands can end up holding every card with nothing playable, so games
    stop after ``max_turns`` turns and are returned still in progress.
    """
    if state is None:
        state = transition(GameState(), Intent.start(), rng).state
    bots = {Side.PLAYER: bot_player, Side.OPPONENT: bot_opponent}
    turns = 0
    while state.status is GameStatus.PLAYING and turns < max_turns:
        side = state.turn
        for intent in bots[side].intents_for(state, side):
            state = transition(state, intent, rng).state
            if state.status.is_terminal:
                break
        turns += 1
    if state.status is GameStatus.PLAYING:
        logger.info("Game stopped unfinished after %d turns", turns)
    return state


def run_match(
    bot_a: BotStrategy,
    bot_b: BotStrategy,
    *,
    n_games: int = 10,
    seed: Optional[int] = None,
) -> dict:
    rng = Random(seed)
    wins = [0, 0]
    unfinished = 0
    history = []
    for _ in range(n_games):
        state = play_game(bot_a, bot_b, rng=rng)
        if state.status is GameStatus.WON:
            wins[0] += 1
        elif state.status is GameStatus.LOST:
            wins[1] += 1
        else:
            unfinished += 1
        history.append(
            {
                "status": str(state.status),
                "remaining_cards": state.remaining_cards(),
                "generation": state.generation,
            }
        )
    return {"wins": wins, "unfinished": unfinished, "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a bot match.")
    parser.add_argument("--bot-a", default="eights-last", choices=BOT_REGISTRY.keys())
    parser.add_argument("--bot-b", default="random", choices=BOT_REGISTRY.keys())
    parser.add_argument("--n", type=int, default=10, help="Number of games to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    bot_a = BOT_REGISTRY[args.bot_a]()
    bot_b = BOT_REGISTRY[args.bot_b]()
    results = run_match(bot_a, bot_b, n_games=args.n, seed=args.seed)

    print(f"Wins after {args.n} games: {bot_a.name} {results['wins'][0]}, {bot_b.name} {results['wins'][1]}")
    print(f"Unfinished games: {results['unfinished']}")


if __name__ == "__main__":
    main()
