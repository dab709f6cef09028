"""Move gating: decides which cells accept a click right now."""

from src.core.models import ViewModel
from src.tictactoe.position import Position, all_positions


def is_legal_cell(view: ViewModel, position: Position) -> bool:
    """Legality mask when the server sends one, otherwise the best guess: the cell is empty."""
    if view.valid_moves is not None:
        return view.valid_moves[position.index]
    return view.board[position.index] is None


def is_clickable(view: ViewModel, position: Position, awaiting_move: bool) -> bool:
    """
    A cell is clickable when:
    * the match is still in progress (terminal states leave only 'new game' available)
    * the cell is legal according to the server
    * no move request is in flight
    """
    if awaiting_move or view.match_status.is_terminal:
        return False
    if not position.is_within_bounds():
        return False
    return is_legal_cell(view, position)


def clickable_positions(view: ViewModel, awaiting_move: bool) -> list[Position]:
    return [p for p in all_positions() if is_clickable(view, p, awaiting_move)]
