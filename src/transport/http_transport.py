"""Implementation of GameTransport using httpx"""

import logging
from typing import Any, Optional, Self

import httpx
from pydantic import ValidationError

from src.api.models import ErrorResponse, MoveRequest
from src.core.config import Settings
from src.core.exceptions import ProtocolError, ServerRejectedError, TransportError
from src.core.shared_types import MoveBodyFormat

log = logging.getLogger(__name__)

STATE_PATH = "/api/game"
MOVE_PATH = "/api/game/move"
NEW_GAME_PATH = "/api/game/new"


class HttpGameTransport:
    """Talks JSON over HTTP to the game server"""

    def __init__(
        self,
        base_url: str,
        move_format: MoveBodyFormat = MoveBodyFormat.POSITIONAL,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.move_format = move_format
        self.client = client or httpx.AsyncClient(
            base_url=base_url, timeout=httpx.Timeout(timeout)
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        return cls(
            base_url=settings.api_url,
            move_format=settings.move_format,
            timeout=settings.request_timeout,
        )

    async def get_state(self) -> Any:
        return await self._request("GET", STATE_PATH)

    async def post_move(self, x: int, y: int) -> Any:
        body = MoveRequest(x=x, y=y).to_body(self.move_format)
        return await self._request("POST", MOVE_PATH, json=body)

    async def new_game(self) -> Any:
        return await self._request("GET", NEW_GAME_PATH)

    async def aclose(self) -> None:
        await self.client.aclose()

    # -- Internal helpers --
    async def _request(self, method: str, path: str, json: Any = None) -> Any:
        """Send the request and decode the body. Failures are translated into the client's exceptions."""
        try:
            response = await self.client.request(method, path, json=json)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e!r}") from e

        if response.is_error:
            raise self._error_from_response(method, path, response)

        try:
            return response.json()
        except ValueError as e:
            raise ProtocolError(f"{method} {path} returned a body that is not JSON.") from e

    def _error_from_response(
        self, method: str, path: str, response: httpx.Response
    ) -> TransportError:
        """Use the server's structured error body when there is one."""
        try:
            error = ErrorResponse.model_validate(response.json())
        except (ValueError, ValidationError):
            log.debug("Unstructured error body from %s %s: %r", method, path, response.text)
            return TransportError(
                f"{method} {path} returned HTTP {response.status_code}."
            )
        return ServerRejectedError(
            code=error.detail.code,
            message=error.detail.message,
            status_code=response.status_code,
        )
