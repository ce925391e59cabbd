import unittest
from engine.core.board import Board
from engine.core.constants import ROWS, COLS, SIDE_1, SIDE_2, WIN_SCORE, WIN_THRESHOLD
from engine.core.evaluator import (
    Decided, Draw, Ongoing, assess, evaluate, terminal_test, windows,
)

# Full board with no four anywhere: rows come in pairs, each pair flips the pattern.
DRAW_MATRIX = [[1 if (r // 2 + c) % 2 == 0 else -1 for c in range(COLS)] for r in range(ROWS)]


def direct_window_sum(matrix, side):
    """Straightforward re-statement of the heuristic, used as an oracle."""
    rows, cols = len(matrix), len(matrix[0])
    total = 0
    for dr, dc in [(0, 1), (1, 0), (1, 1), (-1, 1)]:
        for r in range(rows):
            for c in range(cols):
                cells = []
                for i in range(4):
                    rr, cc = r + dr * i, c + dc * i
                    if 0 <= rr < rows and 0 <= cc < cols:
                        cells.append(matrix[rr][cc])
                if len(cells) < 4:
                    continue
                own = cells.count(side)
                opp = cells.count(-side)
                if own and not opp:
                    total += {1: 1, 2: 10, 3: 100}[own]
                elif opp and not own:
                    total -= {1: 1, 2: 10, 3: 100}[opp]
    return total


class TestWindows(unittest.TestCase):
    def test_standard_board_has_69_windows(self):
        # 24 horizontal + 21 vertical + 12 + 12 diagonal
        self.assertEqual(len(windows(6, 7)), 69)

    def test_non_square_coverage(self):
        """Every diagonal that fits must be scanned, also on tall boards."""
        # 4x9: 6*4 horizontal, 9*1 vertical, 6 + 6 diagonal
        self.assertEqual(len(windows(4, 9)), 24 + 9 + 12)
        # 9x4: 9 horizontal, 4*6 vertical, 6 + 6 diagonal
        self.assertEqual(len(windows(9, 4)), 9 + 24 + 12)

    def test_small_board_has_none(self):
        self.assertEqual(windows(3, 3), ())

    def test_windows_are_distinct(self):
        found = windows(6, 7)
        self.assertEqual(len(set(found)), len(found))


class TestHeuristic(unittest.TestCase):
    def test_empty_board_scores_zero(self):
        self.assertEqual(assess(Board.empty(), SIDE_1), Ongoing(0))

    def test_single_center_token(self):
        """Scenario: one token at the bottom center touches 7 windows."""
        board = Board.empty().apply(3, SIDE_1)
        # 4 horizontal + 1 vertical + 1 per diagonal
        self.assertEqual(evaluate(board, SIDE_1), 7)
        self.assertEqual(evaluate(board, SIDE_2), -7)

    def test_matches_direct_sum(self):
        matrix = [[0] * COLS for _ in range(ROWS)]
        matrix[5][0] = 1; matrix[5][1] = 1; matrix[5][3] = -1
        matrix[4][1] = -1; matrix[5][4] = 1; matrix[4][4] = 1
        board = Board.from_rows(matrix)
        self.assertEqual(evaluate(board, SIDE_1), direct_window_sum(matrix, SIDE_1))
        self.assertEqual(evaluate(board, SIDE_2), direct_window_sum(matrix, SIDE_2))

    def test_single_move_leaves_match_direct_sum(self):
        """Scenario: every one-move result from the empty board scores like the oracle."""
        board = Board.empty()
        for col in board.legal_columns():
            child = board.apply(col, SIDE_1)
            self.assertEqual(evaluate(child, SIDE_1), direct_window_sum(child.to_rows(), SIDE_1))

    def test_mixed_window_is_dead(self):
        matrix = [[0] * 4 for _ in range(4)]
        matrix[3] = [1, -1, 1, 1]
        board = Board.from_rows(matrix)
        # Bottom row is mixed: verticals +1 -1 +1 +1, both diagonals +1
        self.assertEqual(evaluate(board, SIDE_1), 4)


class TestTerminal(unittest.TestCase):
    def _board_with(self, cells, side):
        matrix = [[0] * COLS for _ in range(ROWS)]
        for r, c in cells:
            matrix[r][c] = side
        return Board.from_rows(matrix)

    def test_wins_in_every_direction(self):
        lines = {
            "horizontal": [(5, 1), (5, 2), (5, 3), (5, 4)],
            "vertical": [(5, 0), (4, 0), (3, 0), (2, 0)],
            "descending": [(2, 0), (3, 1), (4, 2), (5, 3)],
            "ascending": [(5, 3), (4, 4), (3, 5), (2, 6)],
        }
        for name, cells in lines.items():
            with self.subTest(direction=name):
                board = self._board_with(cells, SIDE_2)
                self.assertTrue(terminal_test(board))
                self.assertEqual(assess(board, SIDE_2), Decided(winner=SIDE_2, side=SIDE_2))
                # Correct sign from both perspectives
                self.assertGreater(evaluate(board, SIDE_2), WIN_THRESHOLD)
                self.assertLess(evaluate(board, SIDE_1), -WIN_THRESHOLD)

    def test_decided_rank_dominates(self):
        win = Decided(winner=SIDE_1, side=SIDE_1)
        loss = Decided(winner=SIDE_2, side=SIDE_1)
        self.assertGreater(win.rank, Ongoing(10 ** 9).rank)
        self.assertLess(loss.rank, Ongoing(-10 ** 9).rank)
        self.assertEqual(win.score, WIN_SCORE)
        self.assertEqual(loss.score, -WIN_SCORE)

    def test_full_board_is_draw(self):
        board = Board.from_rows(DRAW_MATRIX)
        outcome = assess(board, SIDE_1)
        self.assertIsInstance(outcome, Draw)
        self.assertTrue(terminal_test(board))
        self.assertLess(abs(evaluate(board, SIDE_1)), WIN_THRESHOLD)

    def test_ongoing_is_not_terminal(self):
        board = self._board_with([(5, 0), (5, 1), (5, 2)], SIDE_1)
        self.assertFalse(terminal_test(board))
        self.assertEqual(evaluate(board, SIDE_1), direct_window_sum(board.to_rows(), SIDE_1))

    def test_unknown_side_rejected(self):
        with self.assertRaises(ValueError):
            assess(Board.empty(), 0)


if __name__ == '__main__':
    unittest.main()
