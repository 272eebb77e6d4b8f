from __future__ import annotations

import argparse
import time
from typing import Optional

from .bot import RememberingPlayer, play_out
from .config import DEBUG, DEFAULT_GRID_SIZE, REVEAL_DELAY_MS, configure_logging
from .controller import MemoryGame
from .deck import MAX_GRID_SIZE, MIN_GRID_SIZE
from .rules import TapOutcome
from .scheduler import ManualScheduler
from .state import GameState


def print_status(state: GameState) -> None:
    print(state.pretty())
    line = f"Moves: {state.move_count}   Perfect game: {state.best_possible_moves}"
    if state.won:
        line += f"   Final moves: {state.worst_observed_moves}"
    print(line)


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description='Memory match: flip two cards at a time and find every pair')
    parser.add_argument('--size', type=int, default=DEFAULT_GRID_SIZE,
                        help=f'Grid size (NxN), {MIN_GRID_SIZE} to {MAX_GRID_SIZE}')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for the shuffle')
    parser.add_argument('--delay', type=int, default=REVEAL_DELAY_MS,
                        help='How long a mismatched pair stays face-up, in milliseconds')
    parser.add_argument('--autoplay', action='store_true', help='Let a perfect-memory bot play the game')
    parser.add_argument('--debug', action='store_true', default=DEBUG, help='Verbose logging')
    args = parser.parse_args(argv)

    if not MIN_GRID_SIZE <= args.size <= MAX_GRID_SIZE:
        parser.error(f'--size must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}')
    if args.delay < 0:
        parser.error('--delay must be non-negative')
    configure_logging(args.debug)

    scheduler = ManualScheduler()
    game = MemoryGame(grid_size=args.size, scheduler=scheduler, reveal_delay_ms=args.delay, seed=args.seed)

    if args.autoplay:
        final = play_out(game, RememberingPlayer(seed=args.seed))
        print_status(final)
        if final.won:
            print(f"Bot won in {final.move_count} moves.")
        else:
            print(f"Bot stopped after {final.move_count} moves with {len(final.cards) - len(final.solved)} card(s) unmatched.")
        return

    print_status(game.state)
    print("Enter a card id (0-based, row by row), 'r' to reset, 's N' to resize, 'q' to quit.")
    while True:
        try:
            text = input('> ').strip().lower()
        except EOFError:
            return
        if not text:
            continue
        if text == 'q':
            return
        if text == 'r':
            print_status(game.request_reset())
            continue
        if text.startswith('s'):
            try:
                size = int(text[1:].strip())
            except ValueError:
                print('Usage: s N')
                continue
            if not game.set_grid_size(size):
                print(f'Grid size must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}.')
                continue
            print_status(game.state)
            continue
        try:
            card_id = int(text)
        except ValueError:
            print('Could not parse. Try again.')
            continue
        if not game.state.has_card(card_id):
            print(f'No card {card_id}. Ids run 0 to {len(game.state.cards) - 1}.')
            continue

        outcome = game.tap_card(card_id)
        if outcome is TapOutcome.IGNORED:
            print('That card is already face-up.')
            continue
        print_status(game.state)
        if outcome is TapOutcome.MISMATCHED:
            print('No match.')
            time.sleep(args.delay / 1000.0)
            scheduler.advance(args.delay)
            print_status(game.state)
        elif outcome is TapOutcome.MATCHED and game.state.won:
            print('Congratulations! You won!')
            if game.state.is_perfect:
                print('A perfect game.')
        elif outcome is TapOutcome.MATCHED and len(game.state.cards) - len(game.state.solved) == 1:
            print('Only the unmatched filler card is left. Reset or resize to play again.')


if __name__ == '__main__':
    main()
