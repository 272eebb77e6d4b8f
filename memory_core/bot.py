from __future__ import annotations

import random
from typing import Dict, List, Optional, Set

from .card import CardId
from .controller import MemoryGame
from .rules import TapOutcome, can_tap
from .scheduler import ManualScheduler
from .state import GameState


class RememberingPlayer:
    """A player with perfect memory: every card it has seen face-up is remembered."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)
        self.seen: Dict[CardId, int] = {}

    def observe(self, state: GameState) -> None:
        for card_id in state.flipped:
            self.seen[card_id] = state.cards[card_id].value

    def _known_partner(self, state: GameState, card_id: CardId) -> Optional[CardId]:
        value = state.cards[card_id].value
        for other, v in self.seen.items():
            if other != card_id and v == value and can_tap(state, other):
                return other
        return None

    def _known_pair(self, state: GameState) -> Optional[CardId]:
        by_value: Dict[int, List[CardId]] = {}
        for card_id, value in sorted(self.seen.items()):
            if can_tap(state, card_id):
                by_value.setdefault(value, []).append(card_id)
        for ids in by_value.values():
            if len(ids) >= 2:
                return ids[0]
        return None

    def pick(self, state: GameState) -> Optional[CardId]:
        """Chooses the next card to tap, or None when no tap can make progress."""
        if state.flipped:
            partner = self._known_partner(state, state.flipped[0])
            if partner is not None:
                return partner
        else:
            known = self._known_pair(state)
            if known is not None:
                return known
        unseen: List[CardId] = [c.id for c in state.cards if c.id not in self.seen and can_tap(state, c.id)]
        if unseen:
            return self._rng.choice(unseen)
        candidates: Set[CardId] = {c.id for c in state.cards if can_tap(state, c.id)}
        if not candidates or (not state.flipped and len(candidates) < 2):
            return None
        return min(candidates)


def play_out(game: MemoryGame, player: Optional[RememberingPlayer] = None, max_taps: int = 10_000) -> GameState:
    """
    Drives a game with a ManualScheduler until it is won or stuck.
    An odd grid always ends stuck on its unmatched filler card.
    """
    if not isinstance(game.scheduler, ManualScheduler):
        raise ValueError('play_out needs a game driven by a ManualScheduler')
    player = player or RememberingPlayer()
    for _ in range(max_taps):
        state = game.state
        if state.won:
            break
        card_id = player.pick(state)
        if card_id is None:
            break
        outcome = game.tap_card(card_id)
        if outcome is TapOutcome.IGNORED:
            break
        if outcome is TapOutcome.MISMATCHED:
            player.observe(game.state)
            game.scheduler.run_pending()
        elif outcome is TapOutcome.FLIPPED:
            player.observe(game.state)
    return game.state
