"""
A cell on the board

(placed in its own module as reconciliation, gating and display all need it)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import BOARD_DIMENSIONS, CELL_COUNT

# "1,2" / "1 2" / "[1, 2]"
POSITION_PATTERN = re.compile(r"^\[?\s*(-?\d+)\s*[,\s]\s*(-?\d+)\s*\]?$")


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    @classmethod
    def from_index(cls, index: int) -> Position:
        if not 0 <= index < CELL_COUNT:
            raise InvalidRequestError(f"Cell index {index} is outside the board.")
        return cls(index % BOARD_DIMENSIONS[0], index // BOARD_DIMENSIONS[0])

    @classmethod
    def parse(cls, text: str) -> Position:
        """Read a position typed as 'x,y'. Raises InvalidRequestError if unreadable or off the board."""
        match = POSITION_PATTERN.match(text.strip())
        if match is None:
            raise InvalidRequestError(
                f"Cannot interpret {text!r} as a position. Please use format 'x,y'"
            )
        position = cls(int(match.group(1)), int(match.group(2)))
        if not position.is_within_bounds():
            raise InvalidRequestError(f"{position} is outside the board.")
        return position

    @property
    def index(self) -> int:
        return self.x + BOARD_DIMENSIONS[0] * self.y

    def is_within_bounds(self) -> bool:
        return (0 <= self.x < BOARD_DIMENSIONS[0]) and (0 <= self.y < BOARD_DIMENSIONS[1])

    def __str__(self) -> str:
        return f"[{self.x}, {self.y}]"


def all_positions() -> Iterator[Position]:
    """Row by row, in board index order."""
    for index in range(CELL_COUNT):
        yield Position.from_index(index)
