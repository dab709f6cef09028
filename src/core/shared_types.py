"""
Type definitions used across layers
"""

from enum import StrEnum

# Tic-tac-toe board is always 3x3. Cells are indexed x + 3 * y
BOARD_DIMENSIONS = (3, 3)
CELL_COUNT = BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]


class Player(StrEnum):
    X = "X"
    O = "O"  # noqa: E741


class StatusTag(StrEnum):
    """Value of `status.status` in a game state response."""

    IN_PROGRESS = "InProgress"
    WON = "Won"
    DRAW = "Draw"


class MoveBodyFormat(StrEnum):
    """Revisions of the server disagree on how a move is sent."""

    POSITIONAL = "positional"  # [x, y]
    NAMED = "named"  # {"x": x, "y": y}
