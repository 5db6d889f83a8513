"""Command models: free text typed in the console -> validated request the session can act on"""

import re
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, ValidationError, field_validator

from src.chess.position import Position
from src.core.exceptions import ParseError

SQUARE_PATTERN = re.compile(r"^[a-hA-H][1-8]$")


class Command(StrEnum):
    START = "start"
    MOVE = "move"
    STATUS = "status"
    END = "end"


# --- REQUEST MODELS ---
class CommandRequest(BaseModel):
    command: Command
    from_square: Optional[str] = None
    to_square: Optional[str] = None

    @field_validator("from_square", "to_square")
    @classmethod
    def validate_square(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not SQUARE_PATTERN.match(value):
            raise ValueError(f"Cannot interpret {value!r} as a valid square name.")
        return value.lower()

    def positions(self) -> tuple[Position, Position]:
        """Only meaningful for a move command"""
        if self.from_square is None or self.to_square is None:
            raise ParseError("A move needs a square to move from and a square to move to.")
        return Position.from_algebraic(self.from_square), Position.from_algebraic(self.to_square)


def parse_command(text: str) -> CommandRequest:
    """
    start                -> begin / restart
    move <from> <to>     -> e.g. move a2 a4
    status               -> material score
    end                  -> stop the game
    """
    words = text.strip().split()
    if not words:
        raise ParseError("Please type a command: start, move <from> <to>, status or end.")

    name, *arguments = words
    try:
        command = Command(name.lower())
    except ValueError:
        raise ParseError(f"Unknown command: {name!r}.") from None

    if command == Command.MOVE:
        if len(arguments) != 2:
            raise ParseError("Usage: move <from> <to>, for example 'move a2 a4'.")
        from_square, to_square = arguments
    elif arguments:
        raise ParseError(f"'{command.value}' does not take any arguments.")
    else:
        from_square = to_square = None

    try:
        return CommandRequest(command=command, from_square=from_square, to_square=to_square)
    except ValidationError as e:
        messages = "; ".join(error["msg"].removeprefix("Value error, ") for error in e.errors())
        raise ParseError(messages) from e


def parse_restart_answer(text: str) -> bool:
    answer = text.strip().lower()
    if answer in ("y", "yes"):
        return True
    if answer in ("n", "no"):
        return False
    raise ParseError("Please answer 'y' or 'n'.")
