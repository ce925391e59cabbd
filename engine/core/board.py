# engine/core/board.py
from typing import FrozenSet, List, Sequence, Tuple

from .constants import ROWS, COLS, CONNECT, EMPTY, SIDE_1, SIDE_2, Direction, DIRECTION_STEPS


class IllegalMove(ValueError):
    """Raised when a token is dropped into a full or non-existent column."""

    def __init__(self, column: int, reason: str):
        super().__init__(f"Illegal move in column {column}: {reason}")
        self.column = column


class Board:
    """
    Immutable grid snapshot.
    Row 0 is the TOP of the board, column 0 the leftmost.
    Cells are stored row-major in a single flat tuple.
    Values: 0=Empty, 1=Side 1, -1=Side 2
    """

    __slots__ = ("rows", "columns", "cells")

    def __init__(self, rows: int, columns: int, cells: Tuple[int, ...]):
        if len(cells) != rows * columns:
            raise ValueError(f"Expected {rows * columns} cells, got {len(cells)}")
        object.__setattr__(self, "rows", rows)
        object.__setattr__(self, "columns", columns)
        object.__setattr__(self, "cells", cells)

    def __setattr__(self, name, value):
        raise AttributeError("Board is immutable")

    @classmethod
    def empty(cls, rows: int = ROWS, columns: int = COLS) -> "Board":
        if rows < 1 or columns < 1:
            raise ValueError(f"Board dimensions must be positive, got {rows}x{columns}")
        return cls(rows, columns, (EMPTY,) * (rows * columns))

    @classmethod
    def from_rows(cls, matrix: Sequence[Sequence[int]]) -> "Board":
        """
        Converts a 2D snapshot (Row 0=Top) into a Board.
        Rejects ragged rows and cell values outside {-1, 0, 1}.
        """
        if not matrix or not matrix[0]:
            raise ValueError("Board snapshot must have at least one row and one column")
        width = len(matrix[0])
        cells = []
        for r, row in enumerate(matrix):
            if len(row) != width:
                raise ValueError(f"Row {r} has {len(row)} cells, expected {width}")
            for value in row:
                if value not in (EMPTY, SIDE_1, SIDE_2):
                    raise ValueError(f"Invalid cell value {value!r} in row {r}")
                cells.append(int(value))
        return cls(len(matrix), width, tuple(cells))

    def to_rows(self) -> List[List[int]]:
        """Returns a fresh 2D copy, safe to hand to anyone."""
        return [list(self.cells[r * self.columns:(r + 1) * self.columns]) for r in range(self.rows)]

    # --- Accessors ---

    def in_bounds(self, row: int, column: int) -> bool:
        return 0 <= row < self.rows and 0 <= column < self.columns

    def __getitem__(self, position: Tuple[int, int]) -> int:
        row, column = position
        if not self.in_bounds(row, column):
            raise IndexError(f"Cell ({row}, {column}) is outside a {self.rows}x{self.columns} board")
        return self.cells[row * self.columns + column]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.rows, self.columns, self.cells) == (other.rows, other.columns, other.cells)

    def __hash__(self) -> int:
        return hash((self.rows, self.columns, self.cells))

    def __repr__(self) -> str:
        return f"Board({self.rows}x{self.columns}, tokens={self.token_count()})"

    # --- Queries ---

    def is_playable(self, column: int) -> bool:
        """A column is playable iff its top cell is empty."""
        return 0 <= column < self.columns and self.cells[column] == EMPTY

    def legal_columns(self) -> List[int]:
        """Returns the playable column indices in ascending order."""
        return [c for c in range(self.columns) if self.cells[c] == EMPTY]

    def is_full(self) -> bool:
        return EMPTY not in self.cells[:self.columns]

    def token_count(self) -> int:
        return sum(1 for value in self.cells if value != EMPTY)

    def drop_row(self, column: int) -> int:
        """Gravity: the lowest empty row of the column."""
        if not 0 <= column < self.columns:
            raise IllegalMove(column, f"out of range [0, {self.columns})")
        for r in range(self.rows - 1, -1, -1):
            if self.cells[r * self.columns + column] == EMPTY:
                return r
        raise IllegalMove(column, "column is full")

    # --- Transition ---

    def apply(self, column: int, side: int) -> "Board":
        """
        Returns a NEW Board with `side` dropped into `column`.
        The receiver is left untouched.
        """
        if side not in (SIDE_1, SIDE_2):
            raise IllegalMove(column, f"unknown side {side!r}")
        row = self.drop_row(column)
        index = row * self.columns + column
        cells = self.cells[:index] + (int(side),) + self.cells[index + 1:]
        return Board(self.rows, self.columns, cells)

    def alignment_at(self, row: int, column: int) -> FrozenSet[Direction]:
        """
        Directions in which the token at (row, column) is part of a run of
        at least four contiguous same-side tokens. Empty set if none.
        """
        side = self[row, column]
        if side == EMPTY:
            return frozenset()

        found = set()
        for direction, (dr, dc) in DIRECTION_STEPS.items():
            count = 1
            # Positive direction
            r, c = row + dr, column + dc
            while self.in_bounds(r, c) and self.cells[r * self.columns + c] == side:
                count += 1
                r, c = r + dr, c + dc
            # Negative direction
            r, c = row - dr, column - dc
            while self.in_bounds(r, c) and self.cells[r * self.columns + c] == side:
                count += 1
                r, c = r - dr, c - dc

            if count >= CONNECT:
                found.add(direction)
        return frozenset(found)

    # --- Formatting ---

    def render(self) -> str:
        """Generates an ASCII grid representation."""
        symbols = {EMPTY: ".", SIDE_1: "X", SIDE_2: "O"}
        header = " " + " ".join(str(c) for c in range(self.columns))
        rows_str = []
        for r in range(self.rows):
            row_cells = [symbols[self.cells[r * self.columns + c]] for c in range(self.columns)]
            rows_str.append("|" + "|".join(row_cells) + "|")
        return header + "\n" + "\n".join(rows_str)
