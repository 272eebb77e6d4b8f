import unittest

from game import (
    ManualScheduler,
    MemoryGame,
    TapOutcome,
    deal,
    generate,
)


def fixed_deck(values):
    return lambda size: deal(values)


class TestMemoryBasics(unittest.TestCase):
    def test_two_by_two_perfect_game(self):
        game = MemoryGame(grid_size=2, scheduler=ManualScheduler(), deck_factory=fixed_deck([7, 7, 3, 3]))
        state = game.state
        self.assertEqual(len(state.cards), 4)
        self.assertEqual(state.best_possible_moves, 2)

        game.tap_card(0)
        game.tap_card(1)
        self.assertEqual(game.state.solved, frozenset({0, 1}))
        self.assertEqual(game.state.move_count, 1)

        game.tap_card(2)
        game.tap_card(3)
        self.assertEqual(game.state.move_count, 2)
        self.assertTrue(game.state.won)
        self.assertEqual(game.state.worst_observed_moves, 2)

    def test_mismatch_then_match(self):
        sched = ManualScheduler()
        game = MemoryGame(grid_size=2, scheduler=sched, deck_factory=fixed_deck([1, 2, 2, 1]))
        self.assertIs(game.tap_card(0), TapOutcome.FLIPPED)
        self.assertIs(game.tap_card(1), TapOutcome.MISMATCHED)
        sched.advance(1000)
        self.assertIs(game.tap_card(0), TapOutcome.FLIPPED)
        self.assertIs(game.tap_card(3), TapOutcome.MATCHED)
        self.assertEqual(game.state.move_count, 2)
        self.assertFalse(game.state.won)

    def test_reset_keeps_size(self):
        game = MemoryGame(grid_size=5, scheduler=ManualScheduler(), seed=1)
        game.tap_card(0)
        fresh = game.reset()
        self.assertEqual(fresh.grid_size, 5)
        self.assertEqual(fresh.flipped, ())
        self.assertEqual(len(fresh.cards), 25)

    def test_generate_filler_on_odd_grid(self):
        values = [c.value for c in generate(3, seed=9)]
        self.assertEqual(values.count(1), 3)


if __name__ == "__main__":
    unittest.main(verbosity=2)
