"""Common bot strategy interfaces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from eights.cards import Card, Suit
from eights.rules import Intent
from eights.state import GameState, GameStatus, Side


@dataclass(frozen=True)
class BotMove:
    """A single decision: play ``card`` (naming ``suit`` for an 8) or draw."""

    card: Optional[Card] = None
    suit: Optional[Suit] = None

    @property
    def is_draw(self) -> bool:
        return self.card is None

    def intents(self, side: Side, *, last_card: bool = False) -> List[Intent]:
        """Expand the move into intents.

        An 8 that is the last card ends the game, so no suit is named.
        """
        if self.card is None:
            return [Intent.draw(side)]
        intents = [Intent.play(self.card.id, side)]
        if self.card.is_eight and not last_card:
            if self.suit is None:
                raise ValueError("A played 8 must name a suit.")
            intents.append(Intent.select_suit(self.suit, side))
        return intents


DRAW = BotMove()


class BotStrategy:
    """Base class for bot policies."""

    name: str = "BaseBot"

    def choose_move(
        self,
        hand: Sequence[Card],
        top_discard: Card,
        active_suit: Optional[Suit],
    ) -> BotMove:
        """Return the move to make from the observable position."""
        return DRAW

    def intents_for(self, state: GameState, side: Side) -> List[Intent]:
        """Return the intents that carry out this bot's move for ``side``."""
        if state.status is not GameStatus.PLAYING or state.turn is not side:
            return []
        top = state.top_discard
        if top is None:
            return []
        hand = state.hand(side)
        move = self.choose_move(hand, top, state.active_suit)
        return move.intents(side, last_card=len(hand) == 1)
