import unittest

import numpy as np

from fry_stack.game import (
    CellType,
    ClearEngine,
    ClearPolicy,
    Command,
    GameConfig,
    GameEvent,
    GameGrid,
    GameSession,
    Piece,
    PieceShape,
    ScoringRules,
)
from fry_stack.game.rules import find_item_run, hybrid_item_kind

F = CellType.FRY
E = CellType.EMPTY
B = CellType.BURGER
P = CellType.POTATO
K = CellType.KETCHUP
O = CellType.ONION


def row(values):
    return np.array(values, dtype=np.int8)


class TestLineRules(unittest.TestCase):
    def test_given_three_identical_items_when_scanning_then_kind_found(self):
        self.assertEqual(find_item_run(row([F, B, B, B, E])), B)

    def test_given_broken_or_mixed_runs_when_scanning_then_no_match(self):
        self.assertIsNone(find_item_run(row([B, B, K, B, B, E])))
        self.assertIsNone(find_item_run(row([F, F, F, E, E])))
        self.assertIsNone(find_item_run(row([E, E, E, E])))

    def test_given_two_runs_when_scanning_then_leftmost_wins(self):
        self.assertEqual(find_item_run(row([K, K, K, B, B, B])), K)

    def test_given_hybrid_rows_when_checking_then_only_full_single_kind_rows_match(self):
        self.assertEqual(hybrid_item_kind(row([F, F, B, F, B, F, B, F])), B)
        self.assertIsNone(hybrid_item_kind(row([F, F, B, F, B, F, F, F])))
        self.assertIsNone(hybrid_item_kind(row([B, B, B, K, F, F, F, F])))
        self.assertIsNone(hybrid_item_kind(row([B, B, B, E, F, F, F, F])))


class TestScoringRules(unittest.TestCase):
    def test_given_line_counts_when_scoring_then_quadratic(self):
        rules = ScoringRules()
        self.assertEqual(rules.score_for_lines(0), 0)
        self.assertEqual(rules.score_for_lines(1), 100)
        self.assertEqual(rules.score_for_lines(2), 400)
        self.assertEqual(rules.score_for_lines(4), 1600)

    def test_given_item_kinds_when_scoring_bonus_then_burger_pays_most(self):
        rules = ScoringRules()
        self.assertEqual(rules.bonus_for_item(None), 0)
        self.assertEqual(rules.bonus_for_item(B), 150)
        self.assertEqual(rules.bonus_for_item(O), 50)


class TestClassicClear(unittest.TestCase):
    def setUp(self):
        self.grid = GameGrid()
        self.engine = ClearEngine()

    def test_given_no_complete_line_when_clearing_then_nothing_changes(self):
        self.grid.grid[19, :9] = F
        before = self.grid.clone_state()
        result = self.engine.clear(self.grid)
        self.assertEqual(result.lines, 0)
        self.assertEqual(result.points, 0)
        self.assertTrue(np.array_equal(self.grid.grid, before))

    def test_given_burger_triplet_row_when_clearing_then_250_and_only_that_row(self):
        self.grid.grid[10, :] = row([B, B, B, F, P, K, F, P, K, F])
        self.grid.grid[11, :] = row([P, K, P, K, P, K, P, K, P, K])
        result = self.engine.clear(self.grid)
        self.assertEqual(result.row_indices, (10,))
        self.assertEqual(result.rows[0].item, B)
        self.assertEqual(result.points, 250)
        self.assertFalse(np.any(self.grid.grid[:11, :]))
        self.assertEqual(self.grid.grid[11, 0], P)

    def test_given_other_item_triplet_when_clearing_then_150(self):
        self.grid.grid[19, 4:7] = K
        result = self.engine.clear(self.grid)
        self.assertEqual(result.points, 150)
        self.assertTrue(self.grid.is_empty())

    def test_given_full_fry_row_with_no_items_when_clearing_then_no_bonus(self):
        self.grid.grid[19, :] = F
        result = self.engine.clear(self.grid)
        self.assertEqual(result.points, 100)
        self.assertIsNone(result.rows[0].item)

    def test_given_three_full_rows_when_clearing_then_900_and_stack_shifts_by_three(self):
        self.grid.grid[17:20, :] = F
        self.grid.grid[16, 2] = O
        result = self.engine.clear(self.grid)
        self.assertEqual(result.points, 900)
        self.assertEqual(result.row_indices, (17, 18, 19))
        self.assertEqual(self.grid.grid[19, 2], O)
        self.assertEqual(int(np.count_nonzero(self.grid.grid)), 1)
        self.assertEqual(self.grid.grid.shape, (20, 10))

    def test_given_fry_row_and_burger_row_when_clearing_then_quadratic_base_plus_bonus(self):
        self.grid.grid[19, :] = F
        self.grid.grid[12, 0:3] = B
        result = self.engine.clear(self.grid)
        self.assertEqual(result.lines, 2)
        self.assertEqual(result.points, 400 + 150)

    def test_given_classic_policy_when_column_complete_then_columns_ignored(self):
        self.grid.grid[:, 0] = F
        result = self.engine.clear(self.grid)
        self.assertEqual(result.lines, 0)


class TestHybridClear(unittest.TestCase):
    def setUp(self):
        self.grid = GameGrid()
        self.engine = ClearEngine(ClearPolicy.HYBRID)

    def test_given_fries_plus_three_burgers_filling_row_when_clearing_then_item_combo(self):
        self.grid.grid[19, :] = row([F, B, F, F, B, F, F, B, F, F])
        result = self.engine.clear(self.grid)
        self.assertEqual(result.rows[0].item, B)
        self.assertEqual(result.points, 250)

    def test_given_bare_triplet_in_partial_row_when_clearing_then_not_cleared(self):
        self.grid.grid[19, 0:3] = B
        result = self.engine.clear(self.grid)
        self.assertEqual(result.lines, 0)


class TestRowsAndColumnsClear(unittest.TestCase):
    def setUp(self):
        self.grid = GameGrid()
        self.engine = ClearEngine(ClearPolicy.ROWS_AND_COLUMNS)

    def test_given_full_fry_column_when_clearing_then_column_removed_and_left_side_shifts(self):
        self.grid.grid[:, 3] = F
        self.grid.grid[19, 1] = B
        result = self.engine.clear(self.grid)
        self.assertEqual(result.column_indices, (3,))
        self.assertEqual(result.points, 100)
        self.assertEqual(self.grid.grid[19, 2], B)
        self.assertFalse(np.any(self.grid.grid[:, 0]))

    def test_given_vertical_onion_triplet_when_clearing_then_column_combo(self):
        self.grid.grid[17:20, 4] = O
        result = self.engine.clear(self.grid)
        self.assertEqual(result.column_indices, (4,))
        self.assertEqual(result.columns[0].item, O)
        self.assertEqual(result.points, 150)
        self.assertTrue(self.grid.is_empty())

    def test_given_full_row_and_full_column_when_clearing_then_both_count(self):
        self.grid.grid[19, :] = F
        self.grid.grid[:, 0] = F
        result = self.engine.clear(self.grid)
        self.assertEqual(result.lines, 2)
        self.assertEqual(result.points, 400)
        self.assertTrue(self.grid.is_empty())


class TestLockAndClear(unittest.TestCase):
    def _session(self, active):
        session = GameSession(GameConfig(random_seed=5))
        session.start()
        session.grid.reset()
        session.active = active
        session.next_piece = Piece(PieceShape([[F]]), F, 0, 5)
        session.pop_events()
        return session

    def test_given_row_missing_one_cell_when_fry_locks_into_gap_then_100_and_row_empty(self):
        session = self._session(Piece(PieceShape([[F]]), F, 19, 5))
        session.grid.grid[19, :] = F
        session.grid.grid[19, 5] = E
        session.on_drop_tick()
        self.assertEqual(session.score, 100)
        self.assertFalse(np.any(session.grid.grid[19, :]))
        self.assertEqual(session.grid.grid.shape, (20, 10))
        self.assertEqual(session.pop_events(), [GameEvent.LOCKED, GameEvent.CLEARED])
        self.assertEqual(session.lines_cleared_total, 1)

    def test_given_lock_completing_nothing_when_locked_then_score_same_and_no_clear_event(self):
        session = self._session(Piece(PieceShape([[B]]), B, 19, 0))
        session.score = 40
        session.on_drop_tick()
        self.assertEqual(session.score, 40)
        self.assertEqual(session.pop_events(), [GameEvent.LOCKED])
        self.assertEqual(session.last_clear.lines, 0)

    def test_given_burger_completing_triplet_when_hard_dropped_then_250(self):
        session = self._session(Piece(PieceShape([[B]]), B, 0, 2))
        session.grid.grid[19, 0:2] = B
        session.grid.grid[19, 3:] = row([P, K, P, K, P, K, P])
        self.assertFalse(session.on_input(Command.ROTATE))
        session.on_input(Command.HARD_DROP)
        self.assertEqual(session.score, 250)


if __name__ == "__main__":
    unittest.main()
