from __future__ import annotations

import re
from functools import lru_cache
from typing import Tuple

from .ship_catalog import MAX_BOARD_SIZE


@lru_cache(maxsize=None)
def coord_pattern(size: int) -> re.Pattern[str]:
    """Regex accepting exactly the coordinates of a *size* x *size* board."""
    last = chr(ord("A") + min(size, MAX_BOARD_SIZE) - 1)
    return re.compile(rf"^[A-{last}]([1-9][0-9]?)$")


def coord_to_xy(coord: str) -> Tuple[int, int]:
    """
    Convert a coordinate like 'C7' to a zero-based (x, y) tuple.
    The letter selects the column, the number the row.
    """
    x = ord(coord[0]) - ord("A")
    y = int(coord[1:]) - 1
    return x, y


def parse_coord(text: str, size: int) -> Tuple[int, int] | None:
    """Parse *text* for a board of *size*; ``None`` when malformed or off the board."""
    coord = text.strip().upper()
    if not coord_pattern(size).match(coord):
        return None
    x, y = coord_to_xy(coord)
    if not 0 <= y < size:
        return None
    return x, y


def format_coord(x: int, y: int) -> str:
    """
    Convert zero-based (x, y) to a coordinate string like 'A1'.
    """
    return f"{chr(ord('A') + x)}{y + 1}"
