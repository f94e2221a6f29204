import unittest

from fry_stack.game import CellType, GameConfig, GameEvent, GameSession, Piece, PieceShape
from fry_stack.game import controller
from fry_stack.game.controller import find_rotation, kick_offsets

F = CellType.FRY
E = CellType.EMPTY
B = CellType.BURGER

I_HORIZONTAL = PieceShape([[F, F, F, F]])
I_VERTICAL = PieceShape([[F], [F], [F], [F]])
O_SHAPE = PieceShape([[F, F], [F, F]])
T_SHAPE = PieceShape([[E, F, E], [F, F, F]])


def playing_session(active):
    session = GameSession(GameConfig(random_seed=11))
    session.start()
    session.grid.reset()
    session.active = active
    session.next_piece = Piece(PieceShape([[F]]), F, 0, 5)
    session.pop_events()
    return session


class TestKickOffsets(unittest.TestCase):
    def test_given_width_when_listing_offsets_then_alternating_outward_within_bound(self):
        self.assertEqual(list(kick_offsets(3)), [1, -1, 2, -2, 3, -3, 4, -4])
        self.assertEqual(list(kick_offsets(1)), [1, -1, 2, -2])


class TestTranslate(unittest.TestCase):
    def test_given_free_space_when_moving_then_piece_shifts(self):
        session = playing_session(Piece(T_SHAPE, F, 5, 3))
        self.assertTrue(controller.translate(session, 1))
        self.assertEqual(session.active.col, 4)
        self.assertTrue(controller.translate(session, -1))
        self.assertEqual(session.active.col, 3)

    def test_given_wall_when_moving_into_it_then_no_op(self):
        session = playing_session(Piece(T_SHAPE, F, 5, 0))
        before = session.active
        self.assertFalse(controller.translate(session, -1))
        self.assertEqual(session.active, before)

    def test_given_blocking_cell_when_moving_then_no_op(self):
        session = playing_session(Piece(PieceShape([[B]]), B, 10, 4))
        session.grid.grid[10, 5] = F
        self.assertFalse(controller.translate(session, 1))
        self.assertEqual(session.active.col, 4)


class TestDrops(unittest.TestCase):
    def test_given_room_below_when_soft_dropping_then_advances_one_row(self):
        session = playing_session(Piece(T_SHAPE, F, 3, 3))
        self.assertTrue(controller.soft_drop_step(session))
        self.assertEqual(session.active.row, 4)
        self.assertEqual(session.pop_events(), [])

    def test_given_piece_on_floor_when_soft_dropping_then_locks_and_next_promoted(self):
        session = playing_session(Piece(PieceShape([[B]]), B, 19, 2))
        upcoming = session.next_piece
        self.assertFalse(controller.soft_drop_step(session))
        self.assertEqual(session.grid.grid[19, 2], B)
        self.assertEqual(session.active, upcoming)
        self.assertIsNotNone(session.next_piece)
        self.assertEqual(session.pop_events(), [GameEvent.LOCKED])

    def test_given_empty_board_when_hard_dropping_then_piece_lands_on_floor_and_locks(self):
        session = playing_session(Piece(I_HORIZONTAL, F, 0, 3))
        rows = controller.hard_drop(session)
        self.assertEqual(rows, 19)
        self.assertEqual(session.grid.grid[19, 3:7].tolist(), [F, F, F, F])
        self.assertEqual(int((session.grid.grid != 0).sum()), 4)
        self.assertIn(GameEvent.LOCKED, session.pop_events())

    def test_given_stack_when_hard_dropping_then_rests_on_top_of_it(self):
        session = playing_session(Piece(O_SHAPE, F, 0, 4))
        session.grid.grid[15, 5] = B
        controller.hard_drop(session)
        self.assertEqual(session.grid.grid[13:15, 4:6].tolist(), [[F, F], [F, F]])


class TestRotate(unittest.TestCase):
    def test_given_single_cell_or_uniform_square_when_rotating_then_unchanged_and_silent(self):
        for piece in (Piece(PieceShape([[B]]), B, 5, 5), Piece(O_SHAPE, F, 5, 4)):
            session = playing_session(piece)
            self.assertFalse(controller.rotate(session))
            self.assertEqual(session.active, piece)
            self.assertEqual(session.pop_events(), [])

    def test_given_free_space_when_rotating_then_clockwise_in_place(self):
        session = playing_session(Piece(I_HORIZONTAL, F, 5, 3))
        self.assertTrue(controller.rotate(session))
        self.assertEqual(session.active.shape, I_VERTICAL)
        self.assertEqual((session.active.row, session.active.col), (5, 3))
        self.assertEqual(session.pop_events(), [GameEvent.ROTATED])

    def test_given_right_wall_when_rotating_then_kicked_left_to_nearest_fit(self):
        session = playing_session(Piece(I_VERTICAL, F, 5, 9))
        self.assertTrue(controller.rotate(session))
        self.assertEqual(session.active.shape, I_HORIZONTAL)
        self.assertEqual(session.active.col, 6)

    def test_given_left_wall_and_block_when_rotating_then_kicked_right_past_block(self):
        session = playing_session(Piece(I_VERTICAL, F, 5, 0))
        session.grid.grid[5, 3] = B
        self.assertTrue(controller.rotate(session))
        self.assertEqual(session.active.col, 4)

    def test_given_blocked_neighbour_when_rotating_then_prefers_smallest_displacement(self):
        session = playing_session(Piece(I_VERTICAL, F, 5, 3))
        session.grid.grid[5, 6] = B
        self.assertTrue(controller.rotate(session))
        # +1 still covers col 6, -1 fits
        self.assertEqual(session.active.col, 2)

    def test_given_no_fit_within_bound_when_rotating_then_piece_unchanged(self):
        piece = Piece(I_VERTICAL, F, 5, 4)
        session = playing_session(piece)
        for row in range(5, 9):
            session.grid.grid[row, :] = F
            session.grid.grid[row, 4] = E
        self.assertFalse(controller.rotate(session))
        self.assertEqual(session.active, piece)
        self.assertEqual(session.pop_events(), [])

    def test_given_piece_above_top_edge_when_rotating_then_allowed(self):
        piece = Piece(I_VERTICAL, F, -2, 4)
        rotated = find_rotation(playing_session(piece).grid, piece)
        self.assertIsNotNone(rotated)
        self.assertEqual(rotated.row, -2)

    def test_given_multi_cell_item_piece_when_rotating_then_rotates(self):
        piece = Piece(PieceShape([[B, B]]), B, 5, 4)
        session = playing_session(piece)
        self.assertTrue(controller.rotate(session))
        self.assertEqual(session.active.shape, PieceShape([[B], [B]]))


if __name__ == "__main__":
    unittest.main()
