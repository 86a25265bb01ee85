#!/usr/bin/env python3
"""Interactive CLI to play Crazy Eights against the computer."""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from bots.baseline_eights_last import EightsLastBot
from eights.cards import SUIT_PRECEDENCE, Suit, deserialize_card
from eights.config import GameConfig, configure_logging
from eights.service import GameService, GameView


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Crazy Eights against the computer.")
    parser.add_argument("--games", type=int, default=1, help="Number of games to play.")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--delay", type=float, default=1.0, help="Seconds the computer thinks.")
    parser.add_argument("--config", type=str, default=None, help="JSON file with GameConfig fields.")
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser.parse_args()


def describe_card(payload: Optional[dict]) -> str:
    if payload is None:
        return "-"
    return str(deserialize_card(payload))


def print_state(view: GameView) -> None:
    print("\n============================")
    print(f"Computer holds {view.opponent_card_count} cards | Draw pile: {view.draw_pile_size}")
    print(f"Top card: {describe_card(view.top_discard)}  Active suit: {view.active_suit}")
    print("Your hand: " + " ".join(describe_card(card) for card in view.hand))
    if view.message:
        print(f">> {view.message}")


def list_options(view: GameView) -> List[Tuple[str, str]]:
    if view.pending_suit_selection:
        options = [("suit", str(suit)) for suit in SUIT_PRECEDENCE]
        options.append(("cancel", "Take the 8 back"))
        return options
    options = [("play", card_id) for card_id in view.legal_cards]
    options.append(("draw", "Draw a card"))
    return options


def choose_option(view: GameView) -> Tuple[str, str]:
    options = list_options(view)
    for index, (kind, label) in enumerate(options):
        text = str(deserialize_card({"id": label})) if kind == "play" else label
        print(f"[{index}] {text}")
    while True:
        choice = input("Select option (q to quit): ").strip()
        if choice.lower() == "q":
            raise KeyboardInterrupt
        if not choice.isdigit():
            print("Please enter a number.")
            continue
        index = int(choice)
        if 0 <= index < len(options):
            return options[index]
        print("Invalid choice. Try again.")


def apply_option(service: GameService, kind: str, value: str) -> GameView:
    if kind == "play":
        return service.play_card(value)
    if kind == "suit":
        return service.select_suit(Suit[value.upper()])
    if kind == "cancel":
        return service.cancel_suit_selection()
    return service.draw_card()


def wait_for_turn(service: GameService) -> GameView:
    view = service.get_view()
    while view.status == "playing" and view.turn != "player":
        time.sleep(0.05)
        view = service.get_view()
    return view


def play_game(service: GameService) -> str:
    view = service.start_game()
    while view.status == "playing":
        view = wait_for_turn(service)
        if view.status != "playing":
            break
        print_state(view)
        kind, value = choose_option(view)
        view = apply_option(service, kind, value)
    print_state(view)
    return view.status


def main() -> None:
    args = parse_args()
    if args.config:
        config = GameConfig.from_file(args.config)
    else:
        config = GameConfig(seed=args.seed, opponent_delay=args.delay, log_level=args.log_level)
    configure_logging(config.log_level)
    service = GameService.from_config(config, strategy=EightsLastBot())
    wins = 0
    try:
        for game_idx in range(1, args.games + 1):
            print(f"\n===== Game {game_idx} =====")
            if play_game(service) == "won":
                wins += 1
                print("Congratulations, you won!")
            else:
                print("The computer wins this game.")
    except KeyboardInterrupt:
        print("\nExiting early.")
    finally:
        service.close()
    print(f"You won {wins} game(s).")


if __name__ == "__main__":
    main()
