from dataclasses import dataclass
from typing import Union

from .coord_utils import parse_coord


class CommandParseError(Exception):
    """Raised when a line cannot be parsed as a valid command."""


@dataclass(frozen=True)
class TargetCommand:
    x: int
    y: int


@dataclass(frozen=True)
class FireCommand:
    pass


@dataclass(frozen=True)
class ClearCommand:
    pass


@dataclass(frozen=True)
class QuitCommand:
    pass


Command = Union[TargetCommand, FireCommand, ClearCommand, QuitCommand]

_BARE = {"FIRE": FireCommand, "F": FireCommand, "CLEAR": ClearCommand, "QUIT": QuitCommand, "Q": QuitCommand}


def parse_command(line: str, size: int = 10) -> Command:
    """Parse one line of player input for a *size* x *size* board."""
    if line is None:
        raise CommandParseError("No command to parse")
    raw = line.strip()
    if not raw:
        raise CommandParseError("Empty command")
    parts = raw.split(maxsplit=1)
    verb = parts[0].upper()
    if verb in ("TARGET", "T"):
        if len(parts) < 2 or not parts[1].strip():
            raise CommandParseError("TARGET requires a coordinate")
        xy = parse_coord(parts[1], size)
        if xy is None:
            raise CommandParseError(f"Invalid coordinate: {parts[1].strip().upper()}")
        return TargetCommand(*xy)
    elif verb in _BARE and len(parts) == 1:
        return _BARE[verb]()
    else:
        raise CommandParseError(f"Unknown command: {raw}")
