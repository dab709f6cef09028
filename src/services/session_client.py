"""
Orchestration of one game session: from user intents (presentation layer) to the transport, and from server responses back to the ViewModel.

Concurrency model: single event loop, the three network calls are the only suspension points.
* every request is tagged with a sequence number when issued; a response is only applied if it is newer than the
  last applied one (completion order of requests is not guaranteed to match issue order)
* at most one move is in flight, further move intents are ignored (not queued) until it settles
* closing the session discards whatever is still in flight
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Self

from src.core.exceptions import (
    GameClientError,
    InvalidRequestError,
    ProtocolError,
    StaleResponseDiscarded,
    TransportError,
)
from src.core.models import ViewModel, initial_view_model
from src.tictactoe.gating import clickable_positions, is_clickable
from src.tictactoe.position import Position
from src.tictactoe.reconcile import reconcile
from src.transport.transport import GameTransport

log = logging.getLogger(__name__)

ChangeListener = Callable[[ViewModel], None]
ErrorSink = Callable[[GameClientError], None]


def log_error(error: GameClientError) -> None:
    """Default observability sink."""
    log.warning("%s: %s", type(error).__name__, error)


class GameSessionClient:
    """Local mirror of the server's game state, for one game."""

    def __init__(
        self,
        transport: GameTransport,
        *,
        on_change: Optional[ChangeListener] = None,
        on_error: Optional[ErrorSink] = None,
        initial_view: Optional[ViewModel] = None,
    ) -> None:
        self.transport = transport
        self.on_change = on_change
        self.on_error = on_error or log_error
        self.awaiting_move = False
        self.closed = False
        self.last_error: Optional[GameClientError] = None
        self._view = initial_view or initial_view_model()
        self._issued_sequence = 0
        self._applied_sequence = 0

    @property
    def view(self) -> ViewModel:
        return self._view

    @property
    def applied_sequence(self) -> int:
        return self._applied_sequence

    # -- Gating (always derived from the current ViewModel) --
    def is_clickable(self, x: int, y: int) -> bool:
        if self.closed:
            return False
        return is_clickable(self._view, Position(x, y), self.awaiting_move)

    def clickable_positions(self) -> list[Position]:
        if self.closed:
            return []
        return clickable_positions(self._view, self.awaiting_move)

    # -- Operations --
    async def start(self) -> None:
        """Fetch the state once when the session opens."""
        await self.refresh()

    async def refresh(self) -> None:
        """
        Replace the ViewModel with the server's current state. Failures leave it untouched.
        Skipped while a move is in flight: the move response already carries the newer state.
        """
        if self.closed:
            return
        if self.awaiting_move:
            log.debug("Refresh skipped: move in flight")
            return
        await self._exchange("refresh", self.transport.get_state)

    async def submit_move(self, x: int, y: int) -> bool:
        """
        Ask the server to play the cell [x, y] for the player to move.
        Returns False (without sending anything) when the gating policy does not allow the move right now.
        """
        position = Position(x, y)
        if not position.is_within_bounds():
            raise InvalidRequestError(f"{position} is outside the board.")
        if not self.is_clickable(x, y):
            log.debug(
                "Move %s ignored (awaiting_move=%s, status=%s)",
                position,
                self.awaiting_move,
                self._view.match_status.tag,
            )
            return False

        self.awaiting_move = True
        try:
            await self._exchange(
                f"move {position}", lambda: self.transport.post_move(x, y)
            )
        finally:
            self.awaiting_move = False
        return True

    async def start_new_game(self) -> None:
        """Always allowed: it is how a finished game is left."""
        if self.closed:
            return
        await self._exchange("new game", self.transport.new_game)

    async def poll(self, interval: float) -> None:
        """Refresh every `interval` seconds until the session is closed. Skips a tick while a move is in flight."""
        while not self.closed:
            await asyncio.sleep(interval)
            if self.closed:
                break
            await self.refresh()

    async def close(self) -> None:
        """Abandon the session. Responses still in flight will not be applied."""
        if self.closed:
            return
        self.closed = True
        await self.transport.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # -- Internal helpers --
    async def _exchange(
        self, operation: str, request: Callable[[], Awaitable[Any]]
    ) -> None:
        """Issue one request and reconcile its response, if it is still the newest by the time it arrives."""
        self._issued_sequence += 1
        sequence = self._issued_sequence
        log.debug("Request #%d: %s", sequence, operation)

        try:
            payload = await request()
            self._ensure_fresh(sequence)
            self._apply(sequence, reconcile(payload))
        except StaleResponseDiscarded as e:
            log.debug("%s (%s)", e, operation)
        except (TransportError, ProtocolError) as e:
            if self.closed:
                log.debug("Request #%d failed after close: %r", sequence, e)
                return
            self.last_error = e
            self.on_error(e)

    def _ensure_fresh(self, sequence: int) -> None:
        if self.closed or sequence <= self._applied_sequence:
            raise StaleResponseDiscarded(sequence, self._applied_sequence)

    def _apply(self, sequence: int, view: ViewModel) -> None:
        """Single assignment point of the ViewModel."""
        self._view = view
        self._applied_sequence = sequence
        self.last_error = None
        log.info("Applied response #%d: %s", sequence, view.message)
        if self.on_change is not None:
            self.on_change(view)
