from __future__ import annotations

# Facade module that re-exports the memory match core.
# Kept for the Flask app, the tools and the tests.
# Single-responsibility modules live under memory_core/*.

from memory_core.card import Card, CardId
from memory_core.deck import (
    FILLER_VALUE,
    MAX_GRID_SIZE,
    MIN_GRID_SIZE,
    deal,
    generate,
    is_valid_grid_size,
    pair_count,
)
from memory_core.state import FACE_DOWN, GameState
from memory_core.rules import (
    TapOutcome,
    TapResult,
    can_tap,
    conceal,
    new_game,
    tap,
    tappable_ids,
)
from memory_core.scheduler import (
    DEFAULT_REVEAL_DELAY_MS,
    ManualScheduler,
    RevealScheduler,
    ScheduledReveal,
    ThreadingScheduler,
)
from memory_core.controller import DEFAULT_GRID_SIZE, MemoryGame
from memory_core.bot import RememberingPlayer, play_out

__all__ = [
    "Card",
    "CardId",
    "FILLER_VALUE",
    "MAX_GRID_SIZE",
    "MIN_GRID_SIZE",
    "deal",
    "generate",
    "is_valid_grid_size",
    "pair_count",
    "FACE_DOWN",
    "GameState",
    "TapOutcome",
    "TapResult",
    "can_tap",
    "conceal",
    "new_game",
    "tap",
    "tappable_ids",
    "DEFAULT_REVEAL_DELAY_MS",
    "ManualScheduler",
    "RevealScheduler",
    "ScheduledReveal",
    "ThreadingScheduler",
    "DEFAULT_GRID_SIZE",
    "MemoryGame",
    "RememberingPlayer",
    "play_out",
]
