"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import asyncio
from typing import Any, Callable, Iterator, Optional

import pytest

EMPTY_BOARD: list[Optional[str]] = [None] * 9

StateFactory = Callable[..., dict[str, Any]]


def game_state(
    board: Optional[list[Optional[str]]] = None,
    status: str = "InProgress",
    player: Optional[str] = "X",
    valid_moves: Optional[list[bool]] = None,
) -> dict[str, Any]:
    """JSON body as the server sends it. The legality mask is only included when given."""
    state: dict[str, Any] = {
        "board": list(board) if board is not None else list(EMPTY_BOARD),
        "status": {"status": status},
    }
    if player is not None:
        state["status"]["player"] = player
    if valid_moves is not None:
        state["valid_moves"] = valid_moves
    return state


class MockTransport:
    """
    Mock the GameTransport.

    By default every call answers with the next entry of `responses` (an Exception entry is raised instead).
    With `hold = True` every call waits until the test resolves its future in `pending`, which lets tests decide
    in which order responses arrive.
    """

    def __init__(self) -> None:
        self.responses: list[Any] = []
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.pending: list[asyncio.Future[Any]] = []
        self.hold = False
        self.closed = False

    async def get_state(self) -> Any:
        return await self._respond("get_state")

    async def post_move(self, x: int, y: int) -> Any:
        return await self._respond("post_move", x, y)

    async def new_game(self) -> Any:
        return await self._respond("new_game")

    async def aclose(self) -> None:
        self.closed = True

    async def _respond(self, call: str, *args: Any) -> Any:
        self.calls.append((call, args))
        if self.hold:
            future = asyncio.get_running_loop().create_future()
            self.pending.append(future)
            return await future
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def state_factory() -> StateFactory:
    return game_state


@pytest.fixture
def mock_transport() -> Iterator[MockTransport]:
    """Fresh transport per test; checks no scripted response was left unused."""
    transport = MockTransport()
    yield transport
    assert transport.responses == [], "unused scripted responses"
