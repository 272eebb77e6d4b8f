from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, FrozenSet, List, Tuple

from .card import Card, CardId

FACE_DOWN = "?"


@dataclass(frozen=True)
class GameState:
    """Represents one game: the dealt cards plus the flip/solve progress and move counters."""
    grid_size: int
    cards: Tuple[Card, ...]  # index == card id
    flipped: Tuple[CardId, ...] = ()  # tap order, at most 2
    solved: FrozenSet[CardId] = frozenset()
    input_locked: bool = False
    won: bool = False
    move_count: int = 0
    best_possible_moves: int = 0
    worst_observed_moves: int = 0

    def has_card(self, card_id: CardId) -> bool:
        return isinstance(card_id, int) and not isinstance(card_id, bool) and 0 <= card_id < len(self.cards)

    def card(self, card_id: CardId) -> Card:
        if not self.has_card(card_id):
            raise ValueError(f'unknown card id {card_id!r}')
        return self.cards[card_id]

    def is_flipped(self, card_id: CardId) -> bool:
        return card_id in self.flipped

    def is_solved(self, card_id: CardId) -> bool:
        return card_id in self.solved

    def is_face_up(self, card_id: CardId) -> bool:
        return self.is_flipped(card_id) or self.is_solved(card_id)

    def face(self, card_id: CardId) -> str:
        """What a player sees on the card: its value once face-up, '?' otherwise."""
        if self.is_face_up(card_id):
            return str(self.card(card_id).value)
        return FACE_DOWN

    @property
    def pairs_found(self) -> int:
        return len(self.solved) // 2

    @property
    def pairs_remaining(self) -> int:
        return self.best_possible_moves - self.pairs_found

    @property
    def is_perfect(self) -> bool:
        return self.won and self.move_count == self.best_possible_moves

    def evolve(self, **changes: Any) -> 'GameState':
        return replace(self, **changes)

    def pretty(self) -> str:
        """Generates a human-readable grid; solved cards are bracketed, flipped ones bare."""
        width = max(len(str(c.value)) for c in self.cards) + 2
        lines: List[str] = []
        for r in range(self.grid_size):
            row: List[str] = []
            for c in range(self.grid_size):
                card_id = r * self.grid_size + c
                if self.is_solved(card_id):
                    cell = f"[{self.cards[card_id].value}]"
                else:
                    cell = self.face(card_id)
                row.append(cell.center(width))
            lines.append(" ".join(row))
        return "\n".join(lines)

    def snapshot(self) -> Dict[str, Any]:
        """Read-only view for front ends, keyed the way the browser client expects."""
        return {
            "gridSize": int(self.grid_size),
            "cards": [c.to_json() for c in self.cards],
            "flippedIds": [int(i) for i in self.flipped],
            "solvedIds": sorted(int(i) for i in self.solved),
            "inputLocked": bool(self.input_locked),
            "won": bool(self.won),
            "moveCount": int(self.move_count),
            "bestPossibleMoves": int(self.best_possible_moves),
            "worstObservedMoves": int(self.worst_observed_moves),
        }
