# engine/core/evaluator.py
"""
Window based position scoring.

Every run of four consecutive cells that fits on the board (in any of the
four directions) is a window. A window holding tokens of only one side is
worth 1/10/100 points for 1/2/3 tokens, positive for the scoring side and
negative for its opponent. A window with four tokens of one side decides
the game and stops the scan.
"""
from dataclasses import dataclass
from functools import lru_cache
from typing import Tuple, Union

from .board import Board
from .constants import (
    CONNECT, EMPTY, SIDE_1, SIDE_2, WINDOW_SCORES, WIN_SCORE, Direction, DIRECTION_STEPS,
)

# Scan order matters only when a board holds more than one four.
SCAN_ORDER = (Direction.HORIZONTAL, Direction.VERTICAL, Direction.DESCENDING, Direction.ASCENDING)


@dataclass(frozen=True)
class Ongoing:
    score: int

    @property
    def rank(self) -> Tuple[int, int]:
        return (0, self.score)


@dataclass(frozen=True)
class Draw:
    score: int = 0

    @property
    def rank(self) -> Tuple[int, int]:
        return (0, self.score)


@dataclass(frozen=True)
class Decided:
    winner: int
    # Perspective the position was scored from.
    side: int

    @property
    def score(self) -> int:
        return WIN_SCORE if self.winner == self.side else -WIN_SCORE

    @property
    def rank(self) -> Tuple[int, int]:
        # Tier first: any win beats any heuristic sum, any loss is worse.
        return (1, 0) if self.winner == self.side else (-1, 0)


Outcome = Union[Ongoing, Draw, Decided]


@lru_cache(maxsize=None)
def windows(rows: int, columns: int) -> Tuple[Tuple[int, ...], ...]:
    """All length-4 windows of a rows x columns grid, as flat cell indices."""
    found = []
    for direction in SCAN_ORDER:
        dr, dc = DIRECTION_STEPS[direction]
        for r in range(rows):
            for c in range(columns):
                end_r = r + dr * (CONNECT - 1)
                end_c = c + dc * (CONNECT - 1)
                if not (0 <= end_r < rows and 0 <= end_c < columns):
                    continue
                found.append(tuple((r + dr * i) * columns + (c + dc * i) for i in range(CONNECT)))
    return tuple(found)


def assess(board: Board, side: int) -> Outcome:
    """Scores `board` from `side`'s perspective."""
    if side not in (SIDE_1, SIDE_2):
        raise ValueError(f"Unknown side {side!r}")

    cells = board.cells
    score = 0
    for window in windows(board.rows, board.columns):
        own = 0
        opp = 0
        for index in window:
            value = cells[index]
            if value == side:
                own += 1
            elif value != EMPTY:
                opp += 1

        if own == CONNECT:
            return Decided(winner=side, side=side)
        if opp == CONNECT:
            return Decided(winner=-side, side=side)
        if opp == 0:
            score += WINDOW_SCORES[own]
        elif own == 0:
            score -= WINDOW_SCORES[opp]
        # Mixed windows are dead for both sides.

    if board.is_full():
        return Draw(score)
    return Ongoing(score)


def evaluate(board: Board, side: int) -> int:
    """Numeric view of `assess`: +/-WIN_SCORE for decided positions."""
    return assess(board, side).score


def is_terminal(outcome: Outcome) -> bool:
    return isinstance(outcome, (Decided, Draw))


def terminal_test(board: Board, side: int = SIDE_1) -> bool:
    """True if somebody has four in a row or the board is full."""
    return is_terminal(assess(board, side))
