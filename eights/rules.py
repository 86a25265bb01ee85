"""Move legality and the state transition function for Crazy Eights.

``transition`` is the only place a new ``GameState`` is produced. It either
returns a committed ``Transition`` or raises a ``RuleViolation`` and leaves the
input state untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum, auto
from random import Random
from typing import Callable, Dict, Iterable, List, Optional

from .cards import Card, Suit
from .deck import deal_new_game, shuffle
from .state import GameState, GameStatus, Side

logger = logging.getLogger(__name__)


class RuleViolation(RuntimeError):
    """Base class for rejected intents. State is never changed by these."""


class InvalidMove(RuleViolation):
    """Raised when a play breaks the suit, rank and eight rules."""


class CardNotInHand(RuleViolation):
    """Raised when the referenced card is not in the acting hand."""


class IllegalIntent(RuleViolation):
    """Raised when the intent is not valid in the current state."""


class IntentType(Enum):
    START_GAME = auto()
    PLAY_CARD = auto()
    SELECT_SUIT = auto()
    CANCEL_SUIT_SELECTION = auto()
    DRAW_CARD = auto()


@dataclass(frozen=True)
class Intent:
    kind: IntentType
    by: Optional[Side] = None
    card_id: Optional[str] = None
    suit: Optional[Suit] = None

    @classmethod
    def start(cls) -> "Intent":
        return cls(IntentType.START_GAME)

    @classmethod
    def play(cls, card_id: str, by: Side) -> "Intent":
        return cls(IntentType.PLAY_CARD, by=by, card_id=card_id)

    @classmethod
    def select_suit(cls, suit: Suit, by: Side) -> "Intent":
        return cls(IntentType.SELECT_SUIT, by=by, suit=suit)

    @classmethod
    def cancel(cls, by: Side) -> "Intent":
        return cls(IntentType.CANCEL_SUIT_SELECTION, by=by)

    @classmethod
    def draw(cls, by: Side) -> "Intent":
        return cls(IntentType.DRAW_CARD, by=by)


class Outcome(Enum):
    STARTED = auto()
    CARD_PLAYED = auto()
    EIGHT_PLAYED = auto()
    SUIT_SELECTED = auto()
    SELECTION_CANCELLED = auto()
    CARD_DRAWN = auto()
    DECK_RESHUFFLED = auto()
    # Not a failure: nothing left to draw, so the turn passes.
    DECK_EXHAUSTION_SKIP = auto()
    GAME_WON = auto()
    GAME_LOST = auto()
    REJECTED = auto()


@dataclass(frozen=True)
class Transition:
    state: GameState
    outcome: Outcome
    message: str
    by: Optional[Side] = None
    card: Optional[Card] = None
    error: Optional[RuleViolation] = None

    @property
    def accepted(self) -> bool:
        return self.error is None


def is_valid_move(card: Card, top_discard: Card, active_suit: Optional[Suit]) -> bool:
    """Return True if ``card`` may be played onto ``top_discard``.

    The suit test uses ``active_suit`` and not the top card's suit because an
    8 may have named a different suit.
    """
    if card.is_eight:
        return True
    if card.suit is active_suit:
        return True
    return card.rank is top_discard.rank


def legal_moves(hand: Iterable[Card], top_discard: Card, active_suit: Optional[Suit]) -> List[Card]:
    """Return the playable cards of ``hand`` in hand order."""
    return [card for card in hand if is_valid_move(card, top_discard, active_suit)]


def legal_card_ids(state: GameState) -> List[str]:
    """Return ids of the cards the side to move may play right now."""
    if state.status is not GameStatus.PLAYING or state.pending_suit_selection:
        return []
    top = state.top_discard
    if top is None:
        return []
    return [card.id for card in legal_moves(state.hand(state.turn), top, state.active_suit)]


def describe(outcome: Outcome, by: Optional[Side], *, card: Optional[Card] = None, suit: Optional[Suit] = None) -> str:
    """Short advisory message written from the human player's point of view."""
    human = by is Side.PLAYER
    if outcome is Outcome.STARTED:
        return "Your turn!"
    if outcome is Outcome.CARD_PLAYED:
        return "Computer's turn..." if human else f"Computer played {card}. Your turn!"
    if outcome is Outcome.EIGHT_PLAYED:
        return "Choose a suit for your 8." if human else f"Computer played {card}."
    if outcome is Outcome.SUIT_SELECTED:
        if human:
            return f"Suit changed to {suit}. Computer's turn..."
        return f"Computer chose {suit}. Your turn!"
    if outcome is Outcome.SELECTION_CANCELLED:
        return "8 returned to your hand. Your turn!" if human else "Computer took back its 8."
    if outcome is Outcome.CARD_DRAWN:
        return f"You drew {card}. Computer's turn..." if human else "Computer drew a card. Your turn!"
    if outcome is Outcome.DECK_RESHUFFLED:
        return "Deck reshuffled! " + describe(Outcome.CARD_DRAWN, by, card=card)
    if outcome is Outcome.DECK_EXHAUSTION_SKIP:
        return "You skipped a turn (no cards)." if human else "Computer skipped a turn (no cards). Your turn!"
    if outcome is Outcome.GAME_WON:
        return "You won!"
    if outcome is Outcome.GAME_LOST:
        return "Computer won!"
    raise ValueError(f"No message for outcome {outcome}.")


def transition(state: GameState, intent: Intent, rng: Optional[Random] = None) -> Transition:
    """Apply ``intent`` to ``state`` and return the committed transition.

    Raises:
        IllegalIntent: the intent is not accepted in the current state.
        CardNotInHand: the played card is not in the acting hand.
        InvalidMove: the played card does not match suit, rank or eight.
    """
    if rng is None:
        rng = Random()
    if intent.kind is IntentType.START_GAME:
        new_state = deal_new_game(rng=rng, generation=state.generation + 1)
        return Transition(new_state, Outcome.STARTED, describe(Outcome.STARTED, Side.PLAYER))

    _check_acceptance(state, intent)
    handler = _HANDLERS.get(intent.kind)
    if handler is None:
        raise ValueError(f"Unknown intent kind {intent.kind}.")
    result = handler(state, intent, rng)
    logger.debug(
        "Committed %s by %s: %s (generation %d)",
        intent.kind.name,
        intent.by,
        result.outcome.name,
        result.state.generation,
    )
    return result


def _check_acceptance(state: GameState, intent: Intent) -> None:
    if state.status is GameStatus.START:
        raise IllegalIntent("Start a game first.")
    if state.status.is_terminal:
        raise IllegalIntent("The game is over. Start a new game.")
    if intent.by is None:
        raise ValueError("Intent must name the acting side.")

    selecting = intent.kind in (IntentType.SELECT_SUIT, IntentType.CANCEL_SUIT_SELECTION)
    if state.pending_suit_selection and not selecting:
        raise IllegalIntent("Choose a suit for the 8 first.")
    if selecting and not state.pending_suit_selection:
        raise IllegalIntent("No suit selection is pending.")
    if intent.by is not state.turn:
        raise IllegalIntent("It is not your turn." if intent.by is Side.PLAYER else "It is not the computer's turn.")


def _commit(state: GameState, **changes) -> GameState:
    return replace(state, generation=state.generation + 1, **changes)


def _play_card(state: GameState, intent: Intent, rng: Random) -> Transition:
    side = intent.by
    assert side is not None
    hand = state.hand(side)
    card = next((c for c in hand if c.id == intent.card_id), None)
    if card is None:
        raise CardNotInHand(f"Card {intent.card_id} is not in hand.")
    top = state.top_discard
    assert top is not None
    if not is_valid_move(card, top, state.active_suit):
        raise InvalidMove("Invalid move!")

    remaining = tuple(c for c in hand if c != card)
    played = state.with_hand(side, remaining)
    discard_pile = state.discard_pile + (card,)

    if card.is_eight:
        assert state.active_suit is not None
        new_state = _commit(
            played,
            discard_pile=discard_pile,
            suit_history=state.suit_history + (state.active_suit,),
            active_suit=card.suit,
            pending_suit_selection=True,
        )
        outcome = Outcome.EIGHT_PLAYED
    else:
        new_state = _commit(
            played,
            discard_pile=discard_pile,
            active_suit=card.suit,
            turn=side.other,
        )
        outcome = Outcome.CARD_PLAYED

    if not remaining:
        return _finish(new_state, side, card)
    return Transition(new_state, outcome, describe(outcome, side, card=card), by=side, card=card)


def _finish(state: GameState, side: Side, card: Card) -> Transition:
    status = GameStatus.WON if side is Side.PLAYER else GameStatus.LOST
    outcome = Outcome.GAME_WON if side is Side.PLAYER else Outcome.GAME_LOST
    final = replace(state, status=status, pending_suit_selection=False)
    logger.info("Game over: %s emptied their hand", side)
    return Transition(final, outcome, describe(outcome, side), by=side, card=card)


def _select_suit(state: GameState, intent: Intent, rng: Random) -> Transition:
    if not isinstance(intent.suit, Suit):
        raise ValueError(f"Suit selection requires a Suit, got {intent.suit!r}.")
    side = intent.by
    assert side is not None
    new_state = _commit(
        state,
        active_suit=intent.suit,
        pending_suit_selection=False,
        turn=side.other,
    )
    return Transition(
        new_state,
        Outcome.SUIT_SELECTED,
        describe(Outcome.SUIT_SELECTED, side, suit=intent.suit),
        by=side,
        card=state.top_discard,
    )


def _cancel_suit_selection(state: GameState, intent: Intent, rng: Random) -> Transition:
    side = intent.by
    assert side is not None
    eight = state.top_discard
    if eight is None or not eight.is_eight or not state.suit_history:
        raise IllegalIntent("There is no 8 to take back.")
    new_state = _commit(
        state.with_hand(side, state.hand(side) + (eight,)),
        discard_pile=state.discard_pile[:-1],
        active_suit=state.suit_history[-1],
        suit_history=state.suit_history[:-1],
        pending_suit_selection=False,
    )
    return Transition(
        new_state,
        Outcome.SELECTION_CANCELLED,
        describe(Outcome.SELECTION_CANCELLED, side),
        by=side,
        card=eight,
    )


def _draw_card(state: GameState, intent: Intent, rng: Random) -> Transition:
    side = intent.by
    assert side is not None
    draw_pile = state.draw_pile
    discard_pile = state.discard_pile
    outcome = Outcome.CARD_DRAWN

    if not draw_pile:
        if len(discard_pile) <= 1:
            logger.info("Nothing to draw; %s skips a turn", side)
            skipped = _commit(state, turn=side.other)
            return Transition(
                skipped,
                Outcome.DECK_EXHAUSTION_SKIP,
                describe(Outcome.DECK_EXHAUSTION_SKIP, side),
                by=side,
            )
        top = discard_pile[-1]
        draw_pile = tuple(shuffle(discard_pile[:-1], rng))
        discard_pile = (top,)
        outcome = Outcome.DECK_RESHUFFLED
        logger.info("Deck reshuffled from %d discarded cards", len(draw_pile))

    card, draw_pile = draw_pile[0], draw_pile[1:]
    new_state = _commit(
        state.with_hand(side, state.hand(side) + (card,)),
        draw_pile=draw_pile,
        discard_pile=discard_pile,
        turn=side.other,
    )
    return Transition(new_state, outcome, describe(outcome, side, card=card), by=side, card=card)


_HANDLERS: Dict[IntentType, Callable[[GameState, Intent, Random], Transition]] = {
    IntentType.PLAY_CARD: _play_card,
    IntentType.SELECT_SUIT: _select_suit,
    IntentType.CANCEL_SUIT_SELECTION: _cancel_suit_selection,
    IntentType.DRAW_CARD: _draw_card,
}
