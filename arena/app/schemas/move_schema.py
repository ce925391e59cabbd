from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from engine.core.constants import SIDE_1, SIDE_2


class BoardRequest(BaseModel):
    # Row 0 is the TOP of the board. 0=Empty, 1=Side 1, -1=Side 2
    board: List[List[int]]
    side: int

    @field_validator("side")
    @classmethod
    def check_side(cls, value: int) -> int:
        if value not in (SIDE_1, SIDE_2):
            raise ValueError(f"side must be {SIDE_1} or {SIDE_2}")
        return value


class MoveRequest(BoardRequest):
    depth: Optional[int] = Field(default=None, ge=0)
    preset: Optional[str] = None
    node_budget: Optional[int] = Field(default=None, ge=1)
    time_limit_ms: Optional[int] = Field(default=None, ge=1)


class MoveResponse(BaseModel):
    column: int
    score: int
    outcome: str
    nodes: int
    truncated: bool = False


class EvaluationResponse(BaseModel):
    score: int
    outcome: str
    winner: Optional[int] = None
    terminal: bool
    legal_columns: List[int]


class PlayRequest(BoardRequest):
    column: int


class PlayResponse(BaseModel):
    board: List[List[int]]
    row: int
    column: int
    alignment: List[str]


class PresetEntry(BaseModel):
    id: str
    label: str
    depth: int
    node_budget: Optional[int] = None
    time_limit_ms: Optional[int] = None
