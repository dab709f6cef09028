"""
Terminal presentation layer.

Renders the ViewModel as a text grid plus status line, and turns typed commands into session operations:
* 'x,y'      play the cell [x, y]
* 'new'      start a new game
* 'refresh'  fetch the current state again
* 'quit'     leave
"""

import argparse
import asyncio
import contextlib
import dataclasses
import logging
from typing import Any, Awaitable, Callable, Optional, Sequence

from src.core.config import (
    Settings,
    api_url,
    load_settings,
    log_level,
    move_format,
    optional_seconds,
)
from src.core.exceptions import ConfigError, InvalidRequestError
from src.core.models import ViewModel
from src.services.session_client import GameSessionClient
from src.tictactoe.board_display import format_board
from src.tictactoe.position import Position
from src.transport.http_transport import HttpGameTransport

PROMPT = "Choose next move: [ x, y ] ('new', 'refresh', 'quit') > "
QUIT_COMMANDS = ("quit", "exit", "q")

Writer = Callable[[str], None]
LineReader = Callable[[], Awaitable[str]]


def render(view: ViewModel, clickable: Sequence[Position] = ()) -> str:
    lines = [format_board(view.board), "", view.message]
    if clickable:
        lines.append("Open cells: " + " ".join(str(p) for p in clickable))
    return "\n".join(lines)


class TerminalClient:
    """Binds one session to a terminal."""

    def __init__(self, session: GameSessionClient, write: Writer = print) -> None:
        self.session = session
        self.write = write
        session.on_change = self.show

    def show(self, view: Optional[ViewModel] = None) -> None:
        self.write(render(view or self.session.view, self.session.clickable_positions()))

    async def handle_command(self, line: str) -> bool:
        """Run one typed command. Returns False when the user wants to leave."""
        command = line.strip().lower()
        if not command:
            return True
        if command in QUIT_COMMANDS:
            return False

        if command == "new":
            await self.session.start_new_game()
        elif command == "refresh":
            await self.session.refresh()
        else:
            try:
                position = Position.parse(command)
            except InvalidRequestError as e:
                self.write(f"Invalid input: {e}")
                return True
            if not await self.session.submit_move(position.x, position.y):
                self.write(f"Cell {position} is not available.")

        if self.session.last_error is not None:
            self.write(f"Error: {self.session.last_error}")
        return True

    async def run(self, read_line: LineReader, poll_interval: Optional[float] = None) -> None:
        await self.session.start()
        if self.session.last_error is not None:
            self.write(f"Error: {self.session.last_error}")
            self.show()

        poller = (
            asyncio.create_task(self.session.poll(poll_interval))
            if poll_interval is not None
            else None
        )
        try:
            while True:
                try:
                    line = await read_line()
                except EOFError:
                    break
                if not await self.handle_command(line):
                    break
        finally:
            if poller is not None:
                poller.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await poller
            await self.session.close()


async def read_stdin() -> str:
    return await asyncio.to_thread(input, PROMPT)


async def play(settings: Settings) -> None:
    session = GameSessionClient(HttpGameTransport.from_settings(settings))
    await TerminalClient(session).run(read_stdin, settings.poll_interval)


def _flag(cast: Callable[[str], Any]) -> Callable[[str], Any]:
    """argparse only reports ArgumentTypeError (and ValueError/TypeError) as usage errors."""

    def convert(value: str) -> Any:
        try:
            return cast(value)
        except ConfigError as e:
            raise argparse.ArgumentTypeError(str(e))

    return convert


def build_parser() -> argparse.ArgumentParser:
    # Flags that are not given stay out of the namespace, so they do not override the environment
    parser = argparse.ArgumentParser(
        prog="tictactoe-client",
        description="Play tic-tac-toe against a game server.",
        argument_default=argparse.SUPPRESS,
    )
    parser.add_argument("--api-url", type=_flag(api_url), help="Base URL of the game server")
    parser.add_argument(
        "--move-format",
        type=_flag(move_format),
        help="Move body: positional ([x, y]) or named ({x, y})",
    )
    parser.add_argument(
        "--timeout",
        dest="request_timeout",
        type=_flag(optional_seconds),
        help="Request timeout in seconds, or 'none'",
    )
    parser.add_argument(
        "--poll-interval",
        type=_flag(optional_seconds),
        help="Refresh the state every N seconds, or 'none' to fetch once",
    )
    parser.add_argument("--log-level", type=_flag(log_level))
    return parser


def settings_from_args(settings: Settings, args: argparse.Namespace) -> Settings:
    """Command line flags take precedence over the environment."""
    return dataclasses.replace(settings, **vars(args))


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = settings_from_args(load_settings(), args)
    except ConfigError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(play(settings))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
