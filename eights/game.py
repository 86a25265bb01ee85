"""Session orchestration for Crazy Eights.

``GameSession`` owns the current ``GameState`` and feeds every intent through
``rules.transition`` one at a time under a lock. Rejected intents leave the
state untouched and produce a rejected ``Transition`` carrying the advisory
message.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from random import Random
from typing import Callable, List, Optional, Sequence

from .cards import Card, Suit
from .deck import deal_new_game
from .rules import (
    IllegalIntent,
    Intent,
    IntentType,
    Outcome,
    RuleViolation,
    Transition,
    describe,
    legal_card_ids,
    transition,
)
from .state import GameState, Side

logger = logging.getLogger(__name__)

Listener = Callable[[Transition], None]
Decider = Callable[[GameState], Sequence[Intent]]


@dataclass
class GameSession:
    """Serialized owner of a single game's state."""

    seed: Optional[int] = None
    state: GameState = field(default_factory=GameState)
    message: str = "Press start to play."
    rng: Random = field(init=False)
    _listeners: List[Listener] = field(default_factory=list, init=False, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.rng = Random(self.seed)

    # Listeners ---------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    # Intents -----------------------------------------------------------

    def dispatch(self, intent: Intent) -> Transition:
        """Apply one intent; never raises for rule violations."""
        with self._lock:
            try:
                result = transition(self.state, intent, self.rng)
            except RuleViolation as exc:
                logger.info("Rejected %s by %s: %s", intent.kind.name, intent.by, exc)
                result = Transition(self.state, Outcome.REJECTED, str(exc), by=intent.by, error=exc)
            else:
                self.state = result.state
            self.message = result.message
            self._notify(result)
            return result

    def start_game(self, deck: Optional[Sequence[Card]] = None) -> Transition:
        """Start a new game, optionally from a fixed, unshuffled deck order."""
        if deck is None:
            return self.dispatch(Intent.start())
        with self._lock:
            new_state = deal_new_game(deck=deck, generation=self.state.generation + 1)
            result = Transition(new_state, Outcome.STARTED, describe(Outcome.STARTED, Side.PLAYER))
            self.state = new_state
            self.message = result.message
            self._notify(result)
            return result

    def play_card(self, card_id: str, by: Side = Side.PLAYER) -> Transition:
        return self.dispatch(Intent.play(card_id, by))

    def select_suit(self, suit: Suit, by: Side = Side.PLAYER) -> Transition:
        return self.dispatch(Intent.select_suit(suit, by))

    def cancel_suit_selection(self, by: Side = Side.PLAYER) -> Transition:
        return self.dispatch(Intent.cancel(by))

    def draw_card(self, by: Side = Side.PLAYER) -> Transition:
        return self.dispatch(Intent.draw(by))

    def take_turn(self, decide: Decider, expected_generation: int) -> List[Transition]:
        """Run a computed turn if the state has not moved on since it was scheduled.

        Returns the applied transitions, or an empty list when the turn is stale.
        """
        with self._lock:
            if self.state.generation != expected_generation:
                logger.debug(
                    "Discarding stale turn scheduled at generation %d (now %d)",
                    expected_generation,
                    self.state.generation,
                )
                return []
            results: List[Transition] = []
            for intent in decide(self.state):
                if intent.kind is IntentType.START_GAME:
                    raise IllegalIntent("A computed turn may not restart the game.")
                result = self.dispatch(intent)
                results.append(result)
                if not result.accepted or result.state.status.is_terminal:
                    break
            return results

    # Views -------------------------------------------------------------

    def snapshot(self) -> GameState:
        with self._lock:
            return self.state

    def legal_card_ids(self) -> List[str]:
        with self._lock:
            return legal_card_ids(self.state)

    @property
    def generation(self) -> int:
        return self.state.generation

    def _notify(self, result: Transition) -> None:
        for listener in list(self._listeners):
            listener(result)
