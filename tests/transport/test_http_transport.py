"""Unit tests for src/transport/http_transport.py (the server is replaced by httpx.MockTransport)"""

import json
from typing import Any, Callable

import httpx
import pytest

from src.core.config import Settings
from src.core.exceptions import (
    InvalidRequestError,
    ProtocolError,
    ServerRejectedError,
    TransportError,
)
from src.core.shared_types import MoveBodyFormat
from src.transport.http_transport import HttpGameTransport

BASE_URL = "http://game.test"

Handler = Callable[[httpx.Request], httpx.Response]


def make_transport(
    handler: Handler, move_format: MoveBodyFormat = MoveBodyFormat.POSITIONAL
) -> HttpGameTransport:
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return HttpGameTransport(BASE_URL, move_format=move_format, client=client)


class RecordingServer:
    """Answers every request with the same state and remembers what it got."""

    def __init__(self, state: dict[str, Any]) -> None:
        self.state = state
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(200, json=self.state)


# --- ENDPOINTS ---
@pytest.mark.asyncio
async def test_get_state(state_factory: Any) -> None:
    server = RecordingServer(state_factory())
    transport = make_transport(server)

    assert await transport.get_state() == server.state
    assert server.requests[0].method == "GET"
    assert server.requests[0].url.path == "/api/game"
    await transport.aclose()


@pytest.mark.asyncio
async def test_new_game(state_factory: Any) -> None:
    server = RecordingServer(state_factory())
    transport = make_transport(server)

    assert await transport.new_game() == server.state
    assert server.requests[0].method == "GET"
    assert server.requests[0].url.path == "/api/game/new"
    await transport.aclose()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "move_format, expected_body",
    [
        (MoveBodyFormat.POSITIONAL, [2, 1]),
        (MoveBodyFormat.NAMED, {"x": 2, "y": 1}),
    ],
)
async def test_post_move_body(
    move_format: MoveBodyFormat, expected_body: Any, state_factory: Any
) -> None:
    server = RecordingServer(state_factory(player="O"))
    transport = make_transport(server, move_format)

    assert await transport.post_move(2, 1) == server.state
    request = server.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/api/game/move"
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == expected_body
    await transport.aclose()


@pytest.mark.asyncio
async def test_move_outside_board_is_never_sent(state_factory: Any) -> None:
    server = RecordingServer(state_factory())
    transport = make_transport(server)

    with pytest.raises(InvalidRequestError):
        await transport.post_move(3, 3)
    assert server.requests == []
    await transport.aclose()


# --- FAILURES ---
@pytest.mark.asyncio
async def test_network_failure_is_transport_error() -> None:
    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = make_transport(unreachable)
    with pytest.raises(TransportError):
        await transport.get_state()
    await transport.aclose()


@pytest.mark.asyncio
async def test_structured_error_body_is_server_rejection() -> None:
    def occupied(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={
                "type": "MatchError",
                "detail": {
                    "code": "CELL_OCCUPIED",
                    "message": "The selected cell is already occupied",
                },
            },
        )

    transport = make_transport(occupied)
    with pytest.raises(ServerRejectedError) as excinfo:
        await transport.post_move(0, 0)

    assert excinfo.value.code == "CELL_OCCUPIED"
    assert excinfo.value.message == "The selected cell is already occupied"
    assert excinfo.value.status_code == 400
    await transport.aclose()


@pytest.mark.asyncio
async def test_unstructured_error_status() -> None:
    def crashed(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="Internal Server Error")

    transport = make_transport(crashed)
    with pytest.raises(TransportError) as excinfo:
        await transport.get_state()

    assert not isinstance(excinfo.value, ServerRejectedError)
    assert "500" in str(excinfo.value)
    await transport.aclose()


@pytest.mark.asyncio
async def test_body_that_is_not_json() -> None:
    def html(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>not json</html>")

    transport = make_transport(html)
    with pytest.raises(ProtocolError):
        await transport.get_state()
    await transport.aclose()


# --- CONSTRUCTION ---
@pytest.mark.asyncio
async def test_from_settings() -> None:
    settings = Settings(
        api_url="http://localhost:4000",
        move_format=MoveBodyFormat.NAMED,
        request_timeout=3.0,
    )
    transport = HttpGameTransport.from_settings(settings)

    assert transport.move_format == MoveBodyFormat.NAMED
    assert str(transport.client.base_url).rstrip("/") == "http://localhost:4000"
    assert transport.client.timeout.read == 3.0
    await transport.aclose()
