from __future__ import annotations

from dataclasses import dataclass

CardId = int  # position in the dealt deck, 0-based


@dataclass(frozen=True)
class Card:
    """A single card on the grid: its stable id and the value naming its pair."""
    id: CardId
    value: int

    def to_json(self) -> dict:
        return {"id": int(self.id), "value": int(self.value)}
