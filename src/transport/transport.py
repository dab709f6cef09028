"""Protocol transport (the HTTP implementation lives in http_transport.py, tests supply in-memory ones)"""

from typing import Any, Protocol


class GameTransport(Protocol):
    """Network layer orchestration. Every call returns the decoded JSON body of the response."""

    async def get_state(self) -> Any:
        """GET /api/game: current state."""
        ...

    async def post_move(self, x: int, y: int) -> Any:
        """POST /api/game/move: state after the move attempt."""
        ...

    async def new_game(self) -> Any:
        """GET /api/game/new: fresh state."""
        ...

    async def aclose(self) -> None:
        """Release connections."""
        ...
