"""Requests and Response models"""

from typing import Any, Optional, Self

from pydantic import BaseModel, StrictBool, field_validator, model_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import (
    BOARD_DIMENSIONS,
    CELL_COUNT,
    MoveBodyFormat,
    Player,
    StatusTag,
)


# --- REQUEST MODELS ---
class MoveRequest(BaseModel):
    x: int
    y: int

    @field_validator("x", "y")
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        if not 0 <= value < BOARD_DIMENSIONS[0]:
            raise InvalidRequestError(
                f"Coordinate {value!r} is outside the board (0..{BOARD_DIMENSIONS[0] - 1})."
            )
        return value

    def to_body(self, body_format: MoveBodyFormat) -> Any:
        """JSON body of POST /api/game/move, in the format the server revision expects."""
        if body_format == MoveBodyFormat.NAMED:
            return {"x": self.x, "y": self.y}
        return [self.x, self.y]


# --- RESPONSE MODELS ---
class StatusPayload(BaseModel):
    status: StatusTag
    player: Optional[Player] = None

    @model_validator(mode="before")
    @classmethod
    def ignore_player_on_draw(cls, data: Any) -> Any:
        """A draw has no player, whatever the server puts in that field."""
        if isinstance(data, dict) and data.get("status") == StatusTag.DRAW:
            return {**data, "player": None}
        return data

    @model_validator(mode="after")
    def player_required_unless_draw(self) -> Self:
        if self.status != StatusTag.DRAW and self.player is None:
            raise ValueError(f"Status {self.status!r} must name a player.")
        return self


class GameStateResponse(BaseModel):
    """Every endpoint answers with the complete state. There are no partial/delta responses."""

    board: list[Optional[Player]]
    valid_moves: Optional[list[StrictBool]] = None  # only sent by later server revisions
    status: StatusPayload

    @field_validator("board", "valid_moves")
    @classmethod
    def validate_cell_count(cls, value: Optional[list[Any]]) -> Optional[list[Any]]:
        if value is not None and len(value) != CELL_COUNT:
            raise ValueError(f"Expected {CELL_COUNT} cells, got {len(value)}.")
        return value


class ErrorDetail(BaseModel):
    code: str = "UNKNOWN"
    message: str


class ErrorResponse(BaseModel):
    """Structured error body, ex. {"type": "MatchError", "detail": {"code": "CELL_OCCUPIED", "message": "..."}}"""

    type: str
    detail: ErrorDetail
