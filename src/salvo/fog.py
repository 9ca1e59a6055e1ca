"""Attacker-side view of the opposing board (fog of war).

Only shot results are ever recorded here; untouched squares stay
``UNKNOWN`` whether or not a ship sits underneath.
"""

from __future__ import annotations

import enum
from collections import deque
from typing import Iterable

from .board import Coord, Outcome


class FogCell(str, enum.Enum):
    UNKNOWN = " "
    MISS = "o"
    HIT = "X"
    SUNK = "#"


class FogBoard:
    """Hit/miss/sunk knowledge about an opponent's grid."""

    def __init__(self, size: int) -> None:
        self.size = size
        self.grid: list[list[FogCell]] = [[FogCell.UNKNOWN] * size for _ in range(size)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def cell(self, x: int, y: int) -> FogCell:
        return self.grid[y][x]

    def is_revealed(self, x: int, y: int) -> bool:
        return self.grid[y][x] is not FogCell.UNKNOWN

    def record(self, x: int, y: int, outcome: Outcome, sunk_cells: Iterable[Coord] | None = None) -> list[Coord]:
        """Record one shot result and return the squares that changed.

        For a ``SUNK`` outcome, *sunk_cells* (when the ship geometry is known)
        are all marked sunk; otherwise the sunk ship is recovered by flooding
        through the connected ``HIT`` squares around (*x*, *y*).
        """
        if outcome is Outcome.MISS:
            self.grid[y][x] = FogCell.MISS
            return [(x, y)]
        if outcome is Outcome.HIT:
            self.grid[y][x] = FogCell.HIT
            return [(x, y)]
        if sunk_cells is not None:
            changed = list(sunk_cells)
            for cx, cy in changed:
                self.grid[cy][cx] = FogCell.SUNK
            if (x, y) not in changed:
                self.grid[y][x] = FogCell.SUNK
                changed.append((x, y))
            return changed
        return self.flood_sunk(x, y)

    def flood_sunk(self, x: int, y: int) -> list[Coord]:
        """Mark (*x*, *y*) and every orthogonally connected ``HIT`` square sunk."""
        self.grid[y][x] = FogCell.SUNK
        changed = [(x, y)]
        queue: deque[Coord] = deque([(x, y)])
        while queue:
            cx, cy = queue.popleft()
            for nx, ny in ((cx, cy - 1), (cx, cy + 1), (cx - 1, cy), (cx + 1, cy)):
                if self.in_bounds(nx, ny) and self.grid[ny][nx] is FogCell.HIT:
                    self.grid[ny][nx] = FogCell.SUNK
                    changed.append((nx, ny))
                    queue.append((nx, ny))
        return changed

    def count(self, state: FogCell) -> int:
        return sum(row.count(state) for row in self.grid)

    def rows(self) -> list[str]:
        return [" ".join("." if cell is FogCell.UNKNOWN else cell.value for cell in row) for row in self.grid]
