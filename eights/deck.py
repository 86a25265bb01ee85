"""Deck creation, shuffling and dealing for Crazy Eights."""

from __future__ import annotations

import logging
from random import Random
from typing import List, Optional, Sequence, Tuple, TypeVar

from .cards import Card, RANK_ORDER, SUIT_PRECEDENCE
from .state import GameState, GameStatus, Side

logger = logging.getLogger(__name__)

T = TypeVar("T")

DECK_SIZE = 52
HAND_SIZE = 8


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck."""
    return [Card(rank, suit) for suit in SUIT_PRECEDENCE for rank in RANK_ORDER]


def shuffle(cards: Sequence[T], rng: Random) -> List[T]:
    """Return a uniformly shuffled copy of ``cards``; the input is left untouched."""
    shuffled = list(cards)
    rng.shuffle(shuffled)
    return shuffled


def deal(cards: Sequence[Card], count: int) -> Tuple[List[Card], List[Card]]:
    """Split ``cards`` into the first ``count`` cards and the ordered remainder."""
    if count < 0 or count > len(cards):
        raise ValueError(f"Cannot deal {count} cards from a pile of {len(cards)}.")
    return list(cards[:count]), list(cards[count:])


def deal_new_game(
    *,
    rng: Optional[Random] = None,
    deck: Optional[Sequence[Card]] = None,
    generation: int = 0,
) -> GameState:
    """Shuffle, deal two hands, seed the discard pile and return a playing state.

    When ``deck`` is given it is used in the given order without shuffling,
    which lets tests force a specific deal.
    """
    if deck is not None:
        cards = list(deck)
    else:
        if rng is None:
            rng = Random()
        cards = shuffle(build_deck(), rng)
    if len(cards) != DECK_SIZE:
        raise ValueError(f"Deck must contain exactly {DECK_SIZE} cards.")

    player_hand, rest = deal(cards, HAND_SIZE)
    opponent_hand, rest = deal(rest, HAND_SIZE)
    first_discard, draw_pile = rest[0], rest[1:]
    logger.debug("Dealt new game; first discard %s", first_discard)

    return GameState(
        draw_pile=tuple(draw_pile),
        discard_pile=(first_discard,),
        player_hand=tuple(player_hand),
        opponent_hand=tuple(opponent_hand),
        turn=Side.PLAYER,
        active_suit=first_discard.suit,
        status=GameStatus.PLAYING,
        generation=generation,
    )
