"""Convenience service layer for UI hosts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Union

from .cards import Card, Suit, card_label, parse_suit, serialize_card
from .config import GameConfig
from .game import GameSession
from .rules import Transition, legal_card_ids
from .scheduler import Timer, TurnScheduler
from .state import GameState, Side


@dataclass
class GameView:
    status: str
    turn: str
    active_suit: Optional[str]
    pending_suit_selection: bool
    hand: list[dict]
    hand_labels: list[str]
    legal_cards: list[str]
    top_discard: Optional[dict]
    draw_pile_size: int
    discard_pile_size: int
    opponent_card_count: int
    winner: Optional[str]
    message: str
    rejected: Optional[str]
    generation: int


class GameService:
    """Facade around GameSession for UI consumers.

    When a ``strategy`` is given, a ``TurnScheduler`` plays the computer's
    turns after ``delay`` seconds.
    """

    def __init__(
        self,
        session: Optional[GameSession] = None,
        *,
        strategy=None,
        delay: float = 1.0,
        timer: Optional[Timer] = None,
    ) -> None:
        self.session = session or GameSession()
        self.scheduler: Optional[TurnScheduler] = None
        if strategy is not None:
            self.scheduler = TurnScheduler(self.session, strategy, delay=delay, timer=timer)
        self._last: Optional[Transition] = None

    @classmethod
    def from_config(cls, config: GameConfig, *, strategy=None, timer: Optional[Timer] = None) -> "GameService":
        return cls(
            GameSession(seed=config.seed),
            strategy=strategy,
            delay=config.opponent_delay,
            timer=timer,
        )

    # Commands ----------------------------------------------------------

    def start_game(self) -> GameView:
        return self._record(self.session.start_game())

    def play_card(self, card_id: str) -> GameView:
        return self._record(self.session.play_card(card_id, Side.PLAYER))

    def select_suit(self, suit: Union[Suit, str]) -> GameView:
        chosen = suit if isinstance(suit, Suit) else parse_suit(suit)
        return self._record(self.session.select_suit(chosen, Side.PLAYER))

    def cancel_suit_selection(self) -> GameView:
        return self._record(self.session.cancel_suit_selection(Side.PLAYER))

    def draw_card(self) -> GameView:
        return self._record(self.session.draw_card(Side.PLAYER))

    def close(self) -> None:
        if self.scheduler is not None:
            self.scheduler.close()

    # Views -------------------------------------------------------------

    def legal_card_ids(self) -> List[str]:
        """Ids playable by the side to move."""
        return self.session.legal_card_ids()

    def get_view(self) -> GameView:
        state = self.session.snapshot()
        rejected = None
        last = self._last
        if last is not None and not last.accepted and last.state.generation == state.generation:
            rejected = type(last.error).__name__
        return build_view(state, self.session.message, rejected)

    def _record(self, result: Transition) -> GameView:
        self._last = result
        return self.get_view()


def build_view(state: GameState, message: str, rejected: Optional[str] = None) -> GameView:
    hand: List[Card] = list(state.player_hand)
    top = state.top_discard
    legal = legal_card_ids(state) if state.turn is Side.PLAYER else []
    winner = state.winner
    return GameView(
        status=str(state.status),
        turn=str(state.turn),
        active_suit=str(state.active_suit) if state.active_suit else None,
        pending_suit_selection=state.pending_suit_selection,
        hand=[serialize_card(card) for card in hand],
        hand_labels=[card_label(card) for card in hand],
        legal_cards=legal,
        top_discard=serialize_card(top) if top else None,
        draw_pile_size=len(state.draw_pile),
        discard_pile_size=len(state.discard_pile),
        opponent_card_count=len(state.opponent_hand),
        winner=str(winner) if winner else None,
        message=message,
        rejected=rejected,
        generation=state.generation,
    )
