"""Game state value for Crazy Eights."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Optional, Tuple

from .cards import Card, Suit


class Side(Enum):
    PLAYER = auto()
    OPPONENT = auto()

    @property
    def other(self) -> "Side":
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER

    def __str__(self) -> str:
        return self.name.lower()


class GameStatus(Enum):
    START = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.WON, GameStatus.LOST)

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a game.

    ``suit_history`` holds the active suit in effect before each 8 was played,
    most recent last. ``generation`` increases with every committed transition.
    """

    draw_pile: Tuple[Card, ...] = ()
    discard_pile: Tuple[Card, ...] = ()
    player_hand: Tuple[Card, ...] = ()
    opponent_hand: Tuple[Card, ...] = ()
    turn: Side = Side.PLAYER
    active_suit: Optional[Suit] = None
    status: GameStatus = GameStatus.START
    pending_suit_selection: bool = False
    suit_history: Tuple[Suit, ...] = ()
    generation: int = 0

    def hand(self, side: Side) -> Tuple[Card, ...]:
        return self.player_hand if side is Side.PLAYER else self.opponent_hand

    def with_hand(self, side: Side, cards: Tuple[Card, ...]) -> "GameState":
        if side is Side.PLAYER:
            return replace(self, player_hand=cards)
        return replace(self, opponent_hand=cards)

    @property
    def top_discard(self) -> Optional[Card]:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def is_over(self) -> bool:
        return self.status.is_terminal

    @property
    def winner(self) -> Optional[Side]:
        if self.status is GameStatus.WON:
            return Side.PLAYER
        if self.status is GameStatus.LOST:
            return Side.OPPONENT
        return None

    def all_cards(self) -> Tuple[Card, ...]:
        return self.draw_pile + self.discard_pile + self.player_hand + self.opponent_hand

    def remaining_cards(self) -> Tuple[int, int]:
        return len(self.player_hand), len(self.opponent_hand)


def conservation_errors(state: GameState, expected: int = 52) -> list[str]:
    """Return a list of problems with card conservation; empty when sound."""
    if state.status is GameStatus.START:
        return []
    cards = state.all_cards()
    problems: list[str] = []
    if len(cards) != expected:
        problems.append(f"expected {expected} cards, found {len(cards)}")
    duplicates = [card.id for card, count in Counter(cards).items() if count > 1]
    if duplicates:
        problems.append(f"duplicate cards: {', '.join(sorted(duplicates))}")
    if not state.discard_pile:
        problems.append("discard pile is empty")
    if state.active_suit is None:
        problems.append("active suit is unset")
    return problems
