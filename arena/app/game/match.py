import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional

from engine.core.board import Board
from engine.core.constants import ROWS, COLS, SIDE_1, SIDE_2, Direction
from arena.app.game.players import Player
from arena.app.models.enums import GameStatus

# Logger setup
logger = logging.getLogger(__name__)


class IllegalStateError(RuntimeError):
    """A player handed back a column the authoritative board cannot take."""


@dataclass
class MatchResult:
    status: GameStatus
    winner: Optional[int]
    alignment: FrozenSet[Direction]
    history: List[Dict[str, Any]]
    board: Board


@dataclass
class Match:
    """
    Headless game loop. Owns the authoritative board, hands each player a
    fresh snapshot, validates the answer and applies it.
    Side 1 always moves first.
    """
    player_1: Player
    player_2: Player
    rows: int = ROWS
    columns: int = COLS
    board: Board = field(init=False)
    current_side: int = field(init=False, default=SIDE_1)
    winner: Optional[int] = field(init=False, default=None)
    alignment: FrozenSet[Direction] = field(init=False, default=frozenset())
    history: List[Dict[str, Any]] = field(init=False, default_factory=list)

    def __post_init__(self):
        if self.player_1.side != SIDE_1 or self.player_2.side != SIDE_2:
            raise ValueError(
                f"player_1 must play side {SIDE_1} and player_2 side {SIDE_2}, "
                f"got {self.player_1.side} and {self.player_2.side}"
            )
        self.board = Board.empty(self.rows, self.columns)

    @property
    def status(self) -> GameStatus:
        if self.winner is not None:
            return GameStatus.COMPLETED
        if self.board.is_full():
            return GameStatus.DRAW
        return GameStatus.IN_PROGRESS

    @property
    def active_player(self) -> Player:
        return self.player_1 if self.current_side == SIDE_1 else self.player_2

    def play_turn(self) -> Dict[str, Any]:
        """Asks the active player for a column and applies it."""
        if self.status != GameStatus.IN_PROGRESS:
            raise IllegalStateError(f"Game is already over ({self.status})")

        player = self.active_player
        col = player.get_move(self.board.to_rows())

        if isinstance(col, bool) or not isinstance(col, int) or not 0 <= col < self.board.columns:
            raise IllegalStateError(f"Player chose invalid column {col}!")
        if not self.board.is_playable(col):
            raise IllegalStateError(f"Column {col} is already full!")

        row = self.board.drop_row(col)
        self.board = self.board.apply(col, self.current_side)
        move = {"side": self.current_side, "column": col, "row": row}
        self.history.append(move)
        logger.info("Side %d plays column %d (row %d)", self.current_side, col, row)

        alignment = self.board.alignment_at(row, col)
        if alignment:
            self.winner = self.current_side
            self.alignment = alignment
            logger.info("Side %d wins with %s", self.winner, sorted(alignment))
        else:
            self.current_side = -self.current_side
        return move

    def play(self) -> MatchResult:
        """Plays until someone connects four or the board fills up."""
        while self.status == GameStatus.IN_PROGRESS:
            self.play_turn()

        if self.status == GameStatus.DRAW:
            logger.info("Tie game after %d moves", len(self.history))
        return MatchResult(
            status=self.status,
            winner=self.winner,
            alignment=self.alignment,
            history=list(self.history),
            board=self.board,
        )
