"""
Boundary layer data model(s).

The ViewModel is what the session client hands to the presentation layer.
It is derived in full from a single server response, and never patched field by field.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.shared_types import CELL_COUNT, Player, StatusTag

# Type aliases to make the ViewModel easier to read
Cell = Optional[Player]
BoardCells = tuple[Cell, ...]
LegalityMask = tuple[bool, ...]


@dataclass(frozen=True)
class InProgress:
    player: Player
    tag = StatusTag.IN_PROGRESS

    @property
    def is_terminal(self) -> bool:
        return False


@dataclass(frozen=True)
class Won:
    player: Player
    tag = StatusTag.WON

    @property
    def is_terminal(self) -> bool:
        return True


@dataclass(frozen=True)
class Draw:
    tag = StatusTag.DRAW

    @property
    def is_terminal(self) -> bool:
        return True


MatchStatus = InProgress | Won | Draw


@dataclass(frozen=True)
class ViewModel:
    """Render-ready mirror of the authoritative game state."""

    board: BoardCells
    valid_moves: Optional[LegalityMask]  # None when the server does not send a legality mask
    current_player: Optional[Player]  # None once the match is over
    match_status: MatchStatus
    message: str


def turn_message(player: Player) -> str:
    return f"Player {player}'s turn"


def initial_view_model(all_legal: Optional[bool] = None) -> ViewModel:
    """
    State shown before the first server response arrives: empty board, X to move.

    `all_legal` selects the legality mask: None means no mask (legality inferred from empty cells),
    True/False fills the mask with that value.
    """
    valid_moves = None if all_legal is None else (all_legal,) * CELL_COUNT
    return ViewModel(
        board=(None,) * CELL_COUNT,
        valid_moves=valid_moves,
        current_player=Player.X,
        match_status=InProgress(Player.X),
        message=turn_message(Player.X),
    )
