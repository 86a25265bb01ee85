"""Delayed, cancellable computer turns.

The scheduler listens to a ``GameSession``. Whenever a committed transition
hands the turn to the computer, it asks the timer primitive to call back after
``delay`` seconds, tagging the callback with the state generation at that
moment. When the callback fires, ``GameSession.take_turn`` drops it if any
transition has happened since.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Callable, Optional, Protocol

from .game import GameSession
from .rules import Transition
from .state import GameState, GameStatus, Side

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


Timer = Callable[[float, Callable[[], None]], TimerHandle]


def thread_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    """Run ``callback`` on a daemon thread after ``delay`` seconds."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


def loop_timer(loop: asyncio.AbstractEventLoop) -> Timer:
    """Return a timer that schedules callbacks on ``loop``."""

    def schedule(delay: float, callback: Callable[[], None]) -> TimerHandle:
        return loop.call_later(delay, callback)

    return schedule


class TurnScheduler:
    """Invoke a bot strategy for ``side`` a fixed delay after it gets the turn."""

    def __init__(
        self,
        session: GameSession,
        strategy,
        *,
        delay: float = 1.0,
        timer: Optional[Timer] = None,
        side: Side = Side.OPPONENT,
    ) -> None:
        if delay < 0:
            raise ValueError("Delay must be non-negative.")
        self.session = session
        self.strategy = strategy
        self.delay = delay
        self.side = side
        self._timer = timer or thread_timer
        self._handle: Optional[TimerHandle] = None
        self._scheduled_generation: Optional[int] = None
        self._lock = threading.RLock()
        session.subscribe(self._on_transition)

    @property
    def scheduled_generation(self) -> Optional[int]:
        return self._scheduled_generation

    def sync(self) -> None:
        """Schedule a turn if the current state is already waiting on ``side``."""
        self._reschedule(self.session.snapshot())

    def close(self) -> None:
        self._cancel()
        self.session.unsubscribe(self._on_transition)

    def _on_transition(self, result: Transition) -> None:
        # Rejected intents leave the generation alone, so any pending turn stays valid.
        if not result.accepted:
            return
        self._reschedule(result.state)

    def _reschedule(self, state: GameState) -> None:
        with self._lock:
            self._cancel()
            if not self._should_move(state):
                return
            generation = state.generation
            self._scheduled_generation = generation
            logger.debug("Scheduling %s turn for generation %d in %.2fs", self.side, generation, self.delay)
            self._handle = self._timer(self.delay, lambda: self._fire(generation))

    def _should_move(self, state: GameState) -> bool:
        return (
            state.status is GameStatus.PLAYING
            and state.turn is self.side
            and not state.pending_suit_selection
        )

    def _fire(self, generation: int) -> None:
        # Released before take_turn: the session lock is always taken first.
        with self._lock:
            if self._scheduled_generation == generation:
                self._handle = None
                self._scheduled_generation = None
        self.session.take_turn(lambda state: self.strategy.intents_for(state, self.side), generation)

    def _cancel(self) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            self._handle = None
            self._scheduled_generation = None
