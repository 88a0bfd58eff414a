import unittest

import numpy as np

from tetris_core.game.board import Board, PlaceResult
from tetris_core.game.exceptions import BoardStateError
from tetris_core.game.pieces import SQUARE_STR, STICK_STR, Piece
from tetris_core.search import Brain, Move, best_move, enumerate_placements


class TestEnumeratePlacements(unittest.TestCase):

    def setUp(self):
        self.board = Board(10, 20)
        self.stick = Piece(STICK_STR)

    def test_stick_on_empty_board(self):
        placements = enumerate_placements(self.board, self.stick)
        # Vertical at 10 columns, horizontal at 7
        self.assertEqual(len(placements), 17)
        self.assertTrue(all(p.y == 0 for p in placements))
        self.assertTrue(all(p.result == PlaceResult.OK for p in placements))
        self.assertEqual(placements[0].max_height, 4)
        self.assertEqual(placements[-1].max_height, 1)

    def test_square_has_one_rotation(self):
        placements = enumerate_placements(self.board, Piece(SQUARE_STR))
        self.assertEqual([p.x for p in placements], list(range(9)))

    def test_board_left_unchanged(self):
        self.board.place(Piece(SQUARE_STR), 3, 0)
        self.board.commit()
        before = self.board.get_grid()

        enumerate_placements(self.board, self.stick)
        self.assertTrue(self.board.committed)
        self.assertTrue(np.array_equal(self.board.get_grid(), before))
        self.assertTrue(self.board.summaries_consistent())
        self.assertEqual(self.board.max_height(), 2)

    def test_limit_height_skips_tall_placements(self):
        board = Board(10, 3)
        placements = enumerate_placements(board, self.stick)
        self.assertEqual(len(placements), 7)
        self.assertTrue(all(p.piece.height == 1 for p in placements))

        placements = enumerate_placements(self.board, self.stick, limit_height=3)
        self.assertEqual(len(placements), 7)

    def test_uncommitted_board_rejected(self):
        self.board.place(self.stick, 0, 0)
        with self.assertRaises(BoardStateError):
            enumerate_placements(self.board, self.stick)

    def test_rows_cleared_reported(self):
        board = Board(4, 6)
        board.place(Piece("0 0 1 0 2 0"), 0, 0)
        board.commit()

        placements = enumerate_placements(board, self.stick)
        clearing = [p for p in placements if p.rows_cleared]
        # Vertical stick in the last column, and the horizontal stick
        # resting on row 0 which fills row 1
        self.assertEqual([(p.piece.height, p.x, p.y) for p in clearing], [(4, 3, 0), (1, 0, 1)])
        self.assertTrue(all(p.result == PlaceResult.ROW_FILLED for p in clearing))
        self.assertEqual([p.max_height for p in clearing], [3, 1])
        self.assertEqual(sum(p.rows_cleared for p in placements), 2)
        self.assertEqual(board.row_width(0), 3)


class TestBestMove(unittest.TestCase):

    def test_lowest_score_wins(self):
        board = Board(4, 6)
        board.place(Piece("0 0 1 0 2 0"), 0, 0)
        board.commit()

        move = best_move(board, Piece(STICK_STR), lambda b: b.max_height())
        self.assertEqual(move, Move(Piece("0 0 1 0 2 0 3 0"), 0, 1, 1))
        self.assertEqual(board.max_height(), 1)
        self.assertTrue(board.committed)

    def test_score_sees_placed_piece(self):
        seen = []
        board = Board(4, 6)
        best_move(board, Piece(SQUARE_STR), lambda b: seen.append(b.row_width(0)) or 0.0)
        self.assertEqual(seen, [2, 2, 2])

    def test_nothing_fits(self):
        board = Board(2, 2)
        self.assertIsNone(best_move(board, Piece(STICK_STR), lambda b: 0.0))

    def test_brain_protocol(self):
        class MaxHeightBrain:
            def best_move(self, board, piece, limit_height):
                return best_move(board, piece, lambda b: b.max_height(), limit_height)

        brain: Brain = MaxHeightBrain()
        move = brain.best_move(Board(10, 20), Piece(STICK_STR), 16)
        self.assertEqual(move.piece.height, 1)
        self.assertEqual((move.x, move.y, move.score), (0, 0, 1))


if __name__ == '__main__':
    unittest.main()
