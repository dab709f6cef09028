"""
Reconciliation: the pure transform from a raw server response to the ViewModel the presentation layer renders.

The client holds no move-application logic: the board shown is always the board the server sent last.
"""

from typing import Any

from pydantic import ValidationError

from src.api.models import GameStateResponse
from src.core.exceptions import ProtocolError
from src.core.models import Draw, InProgress, ViewModel, Won, turn_message
from src.core.shared_types import StatusTag

DRAW_MESSAGE = "It's a Draw!"
STATUS_TAG_LOCATION = ("status", "status")


def parse_state(payload: Any) -> GameStateResponse:
    """Validate a decoded JSON body against the game state contract."""
    if not isinstance(payload, dict):
        raise ProtocolError(
            f"Expected a JSON object as game state, got {type(payload).__name__}."
        )

    try:
        return GameStateResponse.model_validate(payload)
    except ValidationError as e:
        # an unknown status tag gets its own message
        for error in e.errors():
            if error["loc"] == STATUS_TAG_LOCATION and error["type"] == "enum":
                raise ProtocolError(
                    f"Unrecognized status: {error['input']!r}. Expected one of {','.join(StatusTag)}"
                ) from e
        raise ProtocolError(f"Malformed game state: {e}") from e


def reconcile(payload: Any) -> ViewModel:
    """
    Build the complete ViewModel from one server response.
    Raises ProtocolError (and builds nothing) if the response is malformed.
    """
    state = parse_state(payload)
    board = tuple(state.board)
    valid_moves = tuple(state.valid_moves) if state.valid_moves is not None else None
    player = state.status.player

    match state.status.status:
        case StatusTag.DRAW:
            return ViewModel(board, valid_moves, None, Draw(), DRAW_MESSAGE)
        case StatusTag.WON:
            return ViewModel(board, valid_moves, None, Won(player), f"Player {player} won!")
        case StatusTag.IN_PROGRESS:
            return ViewModel(board, valid_moves, player, InProgress(player), turn_message(player))
        case _:
            raise ProtocolError(f"Unrecognized status: {state.status.status!r}")
