from __future__ import annotations

import logging
import random
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence

from .card import Card, CardId
from .deck import generate, is_valid_grid_size
from .rules import TapOutcome, TapResult, conceal, new_game, tap as apply_tap
from .scheduler import DEFAULT_REVEAL_DELAY_MS, ManualScheduler, RevealScheduler, ScheduledReveal
from .state import GameState

logger = logging.getLogger(__name__)

DEFAULT_GRID_SIZE = 4

DeckFactory = Callable[[int], Sequence[Card]]
Listener = Callable[[GameState], None]


class MemoryGame:
    """
    Owns the current GameState and is the only thing that replaces it.

    Every inbound event (tap, resize, reset, reveal timer) runs under one lock and
    to completion before the next one. Each new game gets a fresh generation
    number; a reveal callback only applies to the generation it was scheduled in.
    """

    def __init__(
        self,
        grid_size: int = DEFAULT_GRID_SIZE,
        scheduler: Optional[RevealScheduler] = None,
        reveal_delay_ms: float = DEFAULT_REVEAL_DELAY_MS,
        seed: Optional[int] = None,
        deck_factory: Optional[DeckFactory] = None,
    ):
        if reveal_delay_ms < 0:
            raise ValueError('reveal delay must be non-negative')
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.reveal_delay_ms = reveal_delay_ms
        self._rng = random.Random(seed)
        self._deck_factory = deck_factory
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._pending: Optional[ScheduledReveal] = None
        self._generation = 0
        self._state = self._deal(grid_size)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def reveal_pending(self) -> bool:
        return self._pending is not None and self._pending.pending

    def _deal(self, grid_size: int) -> GameState:
        if self._deck_factory is not None:
            return new_game(grid_size, cards=self._deck_factory(grid_size))
        return new_game(grid_size, cards=generate(grid_size, rng=self._rng))

    def _commit(self, state: GameState) -> None:
        if state is self._state:
            return
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Registers a callback receiving every new state. Returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)
        return _unsubscribe

    def reset(self, grid_size: Optional[int] = None) -> GameState:
        """Starts a new game, at the current size unless one is given."""
        with self._lock:
            size = self._state.grid_size if grid_size is None else grid_size
            fresh = self._deal(size)
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
            self._generation += 1
            logger.info("new game: %dx%d, generation %d", size, size, self._generation)
            self._commit(fresh)
            return fresh

    def request_reset(self) -> GameState:
        return self.reset()

    def resize(self, grid_size: Any) -> Optional[GameState]:
        """Like set_grid_size, but returns the new game (None when the size was ignored)."""
        if not is_valid_grid_size(grid_size):
            logger.debug("ignoring grid size %r", grid_size)
            return None
        return self.reset(grid_size)

    def set_grid_size(self, grid_size: Any) -> bool:
        """Resets to a new grid size. Sizes outside the allowed range are ignored."""
        return self.resize(grid_size) is not None

    def tap_card(self, card_id: CardId) -> TapOutcome:
        return self.tap(card_id).outcome

    def tap(self, card_id: CardId) -> TapResult:
        """Applies a tap and returns the transition, including the state it produced."""
        with self._lock:
            result = apply_tap(self._state, card_id)
            if result.outcome is TapOutcome.MISMATCHED:
                self._schedule_conceal()
            elif result.outcome is TapOutcome.MATCHED:
                logger.debug("pair matched (move %d)", result.state.move_count)
            self._commit(result.state)
            if result.state.won and result.outcome is TapOutcome.MATCHED:
                logger.info(
                    "game won in %d moves (best possible %d, perfect=%s)",
                    result.state.move_count, result.state.best_possible_moves, result.state.is_perfect,
                )
            return result

    def _schedule_conceal(self) -> None:
        generation = self._generation

        def _conceal() -> None:
            with self._lock:
                if generation != self._generation:
                    logger.debug("dropping stale reveal from generation %d", generation)
                    return
                self._pending = None
                self._commit(conceal(self._state))

        self._pending = self.scheduler.schedule(_conceal, self.reveal_delay_ms)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return self._state.snapshot()

    def close(self) -> None:
        """Cancels any pending reveal; the game stays readable."""
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
