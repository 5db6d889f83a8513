"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Both the console/persistence layers and the domain layer use the model defined here to send to/receive from the Service
(decouples the storage encoding from the rules engine: the engine only knows how to read and write a GameModel)
"""

from dataclasses import dataclass, field

# Type aliases to make GameModel easier to read
SquareName = str
PieceLetter = str


@dataclass
class GameModel:
    """Transport-safe snapshot of a chess game used between Service, DB, and console layers.

    * squares: all 64 squares ("a1" - "h8"). Value is the FEN letter of the piece (upper case: light, lower case: dark) or None.
    * side_to_move: "light" / "dark"
    * phase: "not started" / "running" / "ended"
    * end_reason: only set once the game ended
    """

    squares: dict[SquareName, PieceLetter | None]
    side_to_move: str
    phase: str
    end_reason: str | None = field(default=None)
