"""
Custom exceptions raised by the game client.

None of them derive from ValueError, so that raising one inside a pydantic validator
propagates the exception as-is instead of wrapping it in a ValidationError.
"""

from typing import Optional


class GameClientError(Exception):
    """Top-level exception of the game client."""


class ConfigError(GameClientError):
    """A configuration value could not be interpreted."""


class InvalidRequestError(GameClientError):
    """The caller asked for something that can never be sent (ex. a cell outside the board)."""


class TransportError(GameClientError):
    """Request could not be completed: network failure or an HTTP error status."""


class ServerRejectedError(TransportError):
    """The server answered with its structured error body (ex. CELL_OCCUPIED)."""

    def __init__(
        self, code: str, message: str, status_code: Optional[int] = None
    ) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message
        self.status_code = status_code


class ProtocolError(GameClientError):
    """Response does not follow the game state contract."""


class StaleResponseDiscarded(GameClientError):
    """
    Control flow only: a response arrived after a newer one was applied, or after the session was closed.
    Never leaves the session client.
    """

    def __init__(self, sequence: int, applied_sequence: int) -> None:
        super().__init__(
            f"Response #{sequence} discarded (applied sequence is #{applied_sequence})."
        )
        self.sequence = sequence
        self.applied_sequence = applied_sequence
