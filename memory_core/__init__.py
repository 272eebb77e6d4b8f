"""
Memory match core Python package.

Pure game logic for a single-player tile-matching memory game, kept separate
from the Flask API and the terminal client so it can be tested on a fake clock.
Modules:
- card.py: Card, CardId
- deck.py: deck generation and shuffle
- state.py: GameState
- rules.py: tap/match/mismatch transitions and win detection
- scheduler.py: reveal delay (manual clock and threading timers)
- controller.py: MemoryGame, the owner of the current GameState
- bot.py: perfect-memory autoplayer
"""
