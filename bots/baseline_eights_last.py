"""Baseline opponent: shed matching cards first, keep 8s for when nothing else fits."""

from __future__ import annotations

from typing import Optional, Sequence

from eights.cards import SUIT_PRECEDENCE, Card, Suit, count_suits
from eights.rules import legal_moves

from .base import DRAW, BotMove, BotStrategy


def best_suit(cards: Sequence[Card]) -> Suit:
    """Return the suit held most often, ties broken by suit precedence.

    Hearts is returned for an empty hand.
    """
    counts = count_suits(cards)
    best = SUIT_PRECEDENCE[0]
    for suit in SUIT_PRECEDENCE[1:]:
        if counts[suit] > counts[best]:
            best = suit
    return best


def eights_last_move(
    hand: Sequence[Card],
    top_discard: Card,
    active_suit: Optional[Suit],
) -> BotMove:
    """Pick a move without randomness or side effects."""
    legal = legal_moves(hand, top_discard, active_suit)
    non_eights = [card for card in legal if not card.is_eight]
    if non_eights:
        return BotMove(card=non_eights[0])

    eights = [card for card in legal if card.is_eight]
    if eights:
        chosen = eights[0]
        remaining = [card for card in hand if card != chosen]
        return BotMove(card=chosen, suit=best_suit(remaining))

    return DRAW


class EightsLastBot(BotStrategy):
    name = "EightsLast"

    def choose_move(
        self,
        hand: Sequence[Card],
        top_discard: Card,
        active_suit: Optional[Suit],
    ) -> BotMove:
        return eights_last_move(hand, top_discard, active_suit)
