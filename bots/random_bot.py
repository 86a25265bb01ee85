"""Random baseline bot for arena matches."""

from __future__ import annotations

import random
from typing import Optional, Sequence

from eights.cards import Card, Suit
from eights.rules import legal_moves

from .base import DRAW, BotMove, BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def choose_move(
        self,
        hand: Sequence[Card],
        top_discard: Card,
        active_suit: Optional[Suit],
    ) -> BotMove:
        legal = legal_moves(hand, top_discard, active_suit)
        if not legal:
            return DRAW
        choice = self._rng.choice(legal)
        suit = self._rng.choice(list(Suit)) if choice.is_eight else None
        return BotMove(card=choice, suit=suit)
