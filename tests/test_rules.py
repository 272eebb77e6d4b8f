import unittest

from game import (
    GameState,
    TapOutcome,
    can_tap,
    conceal,
    deal,
    new_game,
    tap,
    tappable_ids,
)


def _game(values, size=2):
    return new_game(size, cards=deal(values))


def _tap_all(state, ids):
    outcomes = []
    for card_id in ids:
        res = tap(state, card_id)
        state = res.state
        outcomes.append(res.outcome)
    return state, outcomes


class TestTapTransitions(unittest.TestCase):
    def test_given_new_game_when_created_then_counters_start_clean(self):
        s = _game([1, 1, 2, 2])
        self.assertEqual(s.grid_size, 2)
        self.assertEqual(s.flipped, ())
        self.assertEqual(s.solved, frozenset())
        self.assertFalse(s.input_locked)
        self.assertFalse(s.won)
        self.assertEqual(s.move_count, 0)
        self.assertEqual(s.best_possible_moves, 2)
        self.assertEqual(s.worst_observed_moves, 0)

    def test_given_bad_deck_when_creating_game_then_value_error(self):
        with self.assertRaises(ValueError):
            new_game(2, cards=deal([1, 1, 2]))
        with self.assertRaises(ValueError):
            new_game(11)

    def test_given_one_tap_when_applied_then_card_flipped_and_no_move_counted(self):
        res = tap(_game([1, 1, 2, 2]), 2)
        self.assertIs(res.outcome, TapOutcome.FLIPPED)
        self.assertEqual(res.state.flipped, (2,))
        self.assertEqual(res.state.move_count, 0)
        self.assertFalse(res.state.input_locked)

    def test_given_flipped_card_when_tapped_again_then_ignored_and_state_unchanged(self):
        s = tap(_game([1, 1, 2, 2]), 0).state
        res = tap(s, 0)
        self.assertIs(res.outcome, TapOutcome.IGNORED)
        self.assertIs(res.state, s)

    def test_given_unknown_id_when_tapped_then_value_error(self):
        s = _game([1, 1, 2, 2])
        for bad in (-1, 4, 99):
            with self.assertRaises(ValueError):
                tap(s, bad)

    def test_given_equal_values_when_second_tap_then_solved_in_same_step(self):
        s, outcomes = _tap_all(_game([1, 2, 1, 2]), [0, 2])
        self.assertEqual(outcomes, [TapOutcome.FLIPPED, TapOutcome.MATCHED])
        self.assertEqual(s.solved, frozenset({0, 2}))
        self.assertEqual(s.flipped, ())
        self.assertFalse(s.input_locked)
        self.assertEqual(s.move_count, 1)
        self.assertTrue(can_tap(s, 1))

    def test_given_solved_card_when_tapped_then_moves_and_flipped_unchanged(self):
        s, _ = _tap_all(_game([1, 2, 1, 2]), [0, 2])
        res = tap(s, 0)
        self.assertIs(res.outcome, TapOutcome.IGNORED)
        self.assertEqual(res.state.move_count, 1)
        self.assertEqual(res.state.flipped, ())

    def test_given_unequal_values_when_second_tap_then_locked_until_concealed(self):
        s, outcomes = _tap_all(_game([1, 2, 1, 2]), [0, 1])
        self.assertEqual(outcomes[-1], TapOutcome.MISMATCHED)
        self.assertTrue(s.input_locked)
        self.assertEqual(s.flipped, (0, 1))
        self.assertEqual(s.move_count, 1)
        self.assertEqual(tappable_ids(s), [])

        blocked = tap(s, 2)
        self.assertIs(blocked.outcome, TapOutcome.IGNORED)
        self.assertEqual(blocked.state.move_count, 1)

        s = conceal(s)
        self.assertEqual(s.flipped, ())
        self.assertFalse(s.input_locked)
        self.assertEqual(s.move_count, 1)

    def test_given_pair_attempts_when_repeated_then_one_move_per_attempt(self):
        s = _game([1, 2, 1, 2])
        s, _ = _tap_all(s, [0, 1])
        s = conceal(s)
        s, _ = _tap_all(s, [1, 0])
        s = conceal(s)
        self.assertEqual(s.move_count, 2)

    def test_given_all_pairs_found_when_last_match_then_won_and_worst_moves_frozen(self):
        s = _game([1, 2, 1, 2])
        s, _ = _tap_all(s, [0, 1])
        s = conceal(s)
        s, _ = _tap_all(s, [0, 2])
        self.assertFalse(s.won)
        s, _ = _tap_all(s, [1, 3])
        self.assertTrue(s.won)
        self.assertEqual(s.move_count, 3)
        self.assertEqual(s.worst_observed_moves, 3)
        self.assertFalse(s.is_perfect)

        after = tap(s, 0)
        self.assertIs(after.outcome, TapOutcome.IGNORED)
        self.assertEqual(after.state.worst_observed_moves, 3)

    def test_given_odd_grid_when_every_pair_found_then_filler_keeps_game_open(self):
        s = _game([1, 1, 1, 2, 2, 3, 3, 4, 4], size=3)
        s, _ = _tap_all(s, [0, 1, 3, 4, 5, 6, 7, 8])
        self.assertEqual(len(s.solved), 8)
        self.assertFalse(s.won)
        self.assertEqual(s.pairs_remaining, 0)
        self.assertEqual(tappable_ids(s), [2])


class TestStateViews(unittest.TestCase):
    def test_given_mixed_state_when_rendering_then_faces_and_brackets(self):
        s = _game([1, 2, 1, 2])
        s, _ = _tap_all(s, [0, 2, 1])
        self.assertEqual(s.face(0), "1")
        self.assertEqual(s.face(1), "2")
        self.assertEqual(s.face(3), "?")
        txt = s.pretty()
        self.assertEqual(len(txt.splitlines()), 2)
        self.assertIn("[1]", txt)
        self.assertIn("?", txt)
        self.assertNotIn("[2]", txt)

    def test_given_state_when_snapshotted_then_outbound_keys_present(self):
        s = tap(_game([1, 1, 2, 2]), 3).state
        snap = s.snapshot()
        self.assertEqual(snap["gridSize"], 2)
        self.assertEqual(snap["cards"][3], {"id": 3, "value": 2})
        self.assertEqual(snap["flippedIds"], [3])
        self.assertEqual(snap["solvedIds"], [])
        self.assertFalse(snap["inputLocked"])
        self.assertFalse(snap["won"])
        self.assertEqual(snap["moveCount"], 0)
        self.assertEqual(snap["bestPossibleMoves"], 2)
        self.assertEqual(snap["worstObservedMoves"], 0)

    def test_given_state_when_card_out_of_range_then_value_error(self):
        s = _game([1, 1, 2, 2])
        self.assertIsInstance(s, GameState)
        self.assertFalse(s.has_card(4))
        self.assertFalse(s.has_card(True))
        with self.assertRaises(ValueError):
            s.card(4)


if __name__ == "__main__":
    unittest.main(verbosity=2)
