from __future__ import annotations

import enum
import random
from dataclasses import dataclass
from typing import Optional, Sequence

from .card import Card, CardId
from .deck import generate, is_valid_grid_size, pair_count
from .state import GameState


class TapOutcome(enum.Enum):
    IGNORED = "ignored"
    FLIPPED = "flipped"        # first card of a pair, waiting for the second
    MATCHED = "matched"
    MISMATCHED = "mismatched"  # both cards stay up until the reveal delay elapses


@dataclass(frozen=True)
class TapResult:
    state: GameState
    outcome: TapOutcome


def new_game(
    grid_size: int,
    cards: Optional[Sequence[Card]] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Deals a fresh game. A prepared `cards` sequence skips the shuffle."""
    if not is_valid_grid_size(grid_size):
        raise ValueError(f'invalid grid size: {grid_size!r}')
    if cards is None:
        deck = generate(grid_size, seed=seed, rng=rng)
    else:
        deck = tuple(cards)
        if len(deck) != grid_size * grid_size:
            raise ValueError(f'expected {grid_size * grid_size} cards, got {len(deck)}')
        if [c.id for c in deck] != list(range(len(deck))):
            raise ValueError('card ids must be their positions 0..n-1')
    return GameState(
        grid_size=grid_size,
        cards=deck,
        best_possible_moves=pair_count(grid_size),
    )


def can_tap(state: GameState, card_id: CardId) -> bool:
    """Whether a tap on card_id would flip it rather than be ignored."""
    if state.input_locked or state.won:
        return False
    return not state.is_face_up(card_id)


def _check_win(state: GameState) -> GameState:
    if state.won or len(state.solved) != len(state.cards):
        return state
    return state.evolve(won=True, worst_observed_moves=state.move_count)


def tap(state: GameState, card_id: CardId) -> TapResult:
    """Applies a card tap and returns the next state with what happened."""
    state.card(card_id)  # unknown ids are a caller error
    if not can_tap(state, card_id):
        return TapResult(state, TapOutcome.IGNORED)

    flipped = state.flipped + (card_id,)
    if len(flipped) < 2:
        return TapResult(state.evolve(flipped=flipped), TapOutcome.FLIPPED)

    first, second = flipped
    moves = state.move_count + 1
    if state.cards[first].value == state.cards[second].value:
        solved = state.solved | {first, second}
        nxt = state.evolve(flipped=(), solved=solved, move_count=moves, input_locked=False)
        return TapResult(_check_win(nxt), TapOutcome.MATCHED)

    nxt = state.evolve(flipped=flipped, move_count=moves, input_locked=True)
    return TapResult(nxt, TapOutcome.MISMATCHED)


def conceal(state: GameState) -> GameState:
    """Turns a mismatched pair back face-down and re-enables input."""
    return state.evolve(flipped=(), input_locked=False)


def tappable_ids(state: GameState) -> Sequence[CardId]:
    return [c.id for c in state.cards if can_tap(state, c.id)]
