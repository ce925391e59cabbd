from fastapi import APIRouter, HTTPException
from typing import List

from engine.core.board import Board, IllegalMove
from engine.core.evaluator import Decided, Draw, assess, is_terminal
from engine.core.search import NoLegalMoveError, SearchLimits
from arena.app.core.preset_registry import registry
from arena.app.core.settings import settings
from arena.app.game.players import ComputerPlayer
from arena.app.models.enums import OutcomeKind
from arena.app.schemas.move_schema import (
    BoardRequest, EvaluationResponse, MoveRequest, MoveResponse, PlayRequest, PlayResponse,
    PresetEntry,
)

router = APIRouter()


def _parse_board(rows: List[List[int]]) -> Board:
    try:
        return Board.from_rows(rows)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _outcome_kind(outcome) -> OutcomeKind:
    if isinstance(outcome, Decided):
        return OutcomeKind.DECIDED
    if isinstance(outcome, Draw):
        return OutcomeKind.DRAW
    return OutcomeKind.ONGOING


@router.get("/presets", response_model=List[PresetEntry])
def list_presets():
    """Returns the configured difficulty presets."""
    return [
        PresetEntry(id=key, **preset.model_dump())
        for key, preset in registry.list_all().items()
    ]


@router.post("/move", response_model=MoveResponse)
def choose_move(request: MoveRequest):
    """
    Runs the minimax search for `side` on the given board.
    Depth comes from the request, then the preset, then the server default.
    """
    board = _parse_board(request.board)

    depth = settings.default_depth
    limits = settings.search_limits()
    if request.preset is not None:
        preset = registry.get(request.preset)
        if preset is None:
            raise HTTPException(status_code=404, detail=f"Unknown preset: {request.preset}")
        depth = preset.depth
        limits = preset.search_limits() or limits
    if request.depth is not None:
        depth = request.depth
    if request.node_budget is not None or request.time_limit_ms is not None:
        limits = SearchLimits(node_budget=request.node_budget, time_limit_ms=request.time_limit_ms)

    player = ComputerPlayer(side=request.side, depth=depth, limits=limits)
    try:
        decision = player.decide(board)
    except NoLegalMoveError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return MoveResponse(
        column=decision.column,
        score=decision.score,
        outcome=_outcome_kind(decision.outcome),
        nodes=decision.nodes,
        truncated=decision.truncated,
    )


@router.post("/evaluate", response_model=EvaluationResponse)
def evaluate_board(request: BoardRequest):
    """Static evaluation of the board from `side`'s perspective."""
    board = _parse_board(request.board)
    outcome = assess(board, request.side)
    return EvaluationResponse(
        score=outcome.score,
        outcome=_outcome_kind(outcome),
        winner=outcome.winner if isinstance(outcome, Decided) else None,
        terminal=is_terminal(outcome),
        legal_columns=board.legal_columns(),
    )


@router.post("/play", response_model=PlayResponse)
def play_column(request: PlayRequest):
    """Drops a token for `side` and reports any four it completes."""
    board = _parse_board(request.board)
    try:
        row = board.drop_row(request.column)
        new_board = board.apply(request.column, request.side)
    except IllegalMove as e:
        raise HTTPException(status_code=400, detail=str(e))

    return PlayResponse(
        board=new_board.to_rows(),
        row=row,
        column=request.column,
        alignment=sorted(new_board.alignment_at(row, request.column)),
    )
