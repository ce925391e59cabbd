import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from engine.core.board import Board
from engine.core.constants import SIDE_1, SIDE_2
from engine.core.search import Decision, Minimax, SearchLimits

logger = logging.getLogger(__name__)


class Player(ABC):
    """Anything that can pick a column for a board snapshot."""

    def __init__(self, side: int):
        if side not in (SIDE_1, SIDE_2):
            raise ValueError(f"side must be {SIDE_1} or {SIDE_2}, got {side!r}")
        self.side = int(side)

    @abstractmethod
    def get_move(self, snapshot: List[List[int]]) -> int:
        """Given the current board (row 0 = top), which column should be played?"""

    def __call__(self, snapshot: List[List[int]]) -> int:
        return self.get_move(snapshot)


class ComputerPlayer(Player):
    """Plays the column picked by a fixed-depth minimax search."""

    def __init__(self, side: int, depth: int, limits: Optional[SearchLimits] = None):
        super().__init__(side)
        self.depth = depth
        # Minimax validates depth and limits
        self.search = Minimax(side=self.side, depth=depth, limits=limits)
        self.last_decision: Optional[Decision] = None

    def get_move(self, snapshot: List[List[int]]) -> int:
        return self.decide(Board.from_rows(snapshot)).column

    def decide(self, board: Board) -> Decision:
        decision = self.search.search(board)
        self.last_decision = decision
        logger.info(
            "Computer (side %d, depth %d) plays column %d [score %d, %d nodes]",
            self.side, self.depth, decision.column, decision.score, decision.nodes,
        )
        return decision

    def __repr__(self) -> str:
        return f"ComputerPlayer(side={self.side}, depth={self.depth})"


class ConsolePlayer(Player):
    """Human at a terminal. Keeps asking until a playable column is typed."""

    def __init__(
        self,
        side: int,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        super().__init__(side)
        self.input_fn = input_fn
        self.output_fn = output_fn

    def get_move(self, snapshot: List[List[int]]) -> int:
        valid_moves = Board.from_rows(snapshot).legal_columns()
        while True:
            user_input = self.input_fn(f"\nYour Move (Columns {valid_moves}): ")
            try:
                col = int(user_input)
            except ValueError:
                self.output_fn("Please enter a valid number.")
                continue
            if col not in valid_moves:
                self.output_fn("Invalid column. Try again.")
                continue
            return col

    def __repr__(self) -> str:
        return f"ConsolePlayer(side={self.side})"
