"""Plain text rendering of the board"""

from src.core.models import BoardCells
from src.core.shared_types import BOARD_DIMENSIONS
from src.tictactoe.position import Position

ROW_SEPARATOR = "-" * 10


def format_board(board: BoardCells) -> str:
    """
    ex. after X played [0, 0] and O played [1, 1]:
     X |   |   
    ----------
       | O |   
    ----------
       |   |   
    """
    rows: list[str] = []
    for y in range(BOARD_DIMENSIONS[1]):
        cells = [board[Position(x, y).index] for x in range(BOARD_DIMENSIONS[0])]
        rows.append("|".join(f" {cell or ' '} " for cell in cells))
    return f"\n{ROW_SEPARATOR}\n".join(rows)
