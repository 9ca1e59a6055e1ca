"""Board state: one player's grid, fleet registry and shot resolution.

Each grid square holds exactly one :class:`Cell`. Ship identity is kept in
the ship registry; an ``OCCUPIED`` cell only carries the owning ship's id.
Shot resolution re-derives which ship covers a square from the stored
geometry instead of maintaining a separate square-to-ship index.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

Coord = tuple[int, int]


class Orientation(str, enum.Enum):
    """Ship orientation: ``H`` grows along x, ``V`` grows along y."""

    HORIZONTAL = "H"
    VERTICAL = "V"


class CellState(enum.Enum):
    WATER = "water"
    MISS = "miss"
    HIT = "hit"
    SUNK = "sunk"
    OCCUPIED = "occupied"


class Outcome(str, enum.Enum):
    """Result of a single shot as seen by the attacker."""

    MISS = "miss"
    HIT = "hit"
    SUNK = "sunk"


@dataclass(frozen=True, slots=True)
class Cell:
    """Tagged grid square; *ship_id* is set only for ``OCCUPIED``."""

    state: CellState
    ship_id: int | None = None

    @classmethod
    def occupied(cls, ship_id: int) -> "Cell":
        return cls(CellState.OCCUPIED, ship_id)


WATER = Cell(CellState.WATER)
MISS = Cell(CellState.MISS)
HIT = Cell(CellState.HIT)
SUNK = Cell(CellState.SUNK)

# Text glyphs used by Board.rows(); ship squares show the ship symbol when revealed.
GLYPHS = {
    CellState.WATER: ".",
    CellState.MISS: "o",
    CellState.HIT: "X",
    CellState.SUNK: "#",
}


def ship_cells(x: int, y: int, orientation: Orientation, length: int) -> list[Coord]:
    """Squares covered by a ship with origin (*x*, *y*)."""
    if orientation is Orientation.HORIZONTAL:
        return [(x + i, y) for i in range(length)]
    return [(x, y + i) for i in range(length)]


@dataclass(slots=True)
class Ship:
    """A placed ship. Geometry is fixed; only *hit_count* changes."""

    id: int
    symbol: str
    length: int
    origin_x: int
    origin_y: int
    orientation: Orientation
    hit_count: int = 0

    @property
    def sunk(self) -> bool:
        return self.hit_count >= self.length

    def cells(self) -> list[Coord]:
        return ship_cells(self.origin_x, self.origin_y, self.orientation, self.length)

    def covers(self, x: int, y: int) -> bool:
        if self.orientation is Orientation.HORIZONTAL:
            return y == self.origin_y and self.origin_x <= x < self.origin_x + self.length
        return x == self.origin_x and self.origin_y <= y < self.origin_y + self.length


class Board:
    """
    Represents a single player's board.

    We store:
      - self.grid: ``size`` rows of :class:`Cell` values, indexed ``grid[y][x]``
      - self.ships: every placed :class:`Ship`, in placement order
      - self.miss_count: shots that landed in open water

    *is_host* only selects how random placement seeds its generator; it has
    no effect on the rules.
    """

    def __init__(self, size: int = 10, *, is_host: bool = True) -> None:
        self.size = size
        self.is_host = is_host
        self.grid: list[list[Cell]] = [[WATER] * size for _ in range(size)]
        self.ships: list[Ship] = []
        self.miss_count = 0

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    def clear(self) -> None:
        """Return to an empty all-water board."""
        self.grid = [[WATER] * self.size for _ in range(self.size)]
        self.ships.clear()
        self.miss_count = 0

    def add_ship(self, x: int, y: int, orientation: Orientation, length: int, symbol: str) -> Ship:
        """Write a ship into the grid without validating it (see ``placement.place``)."""
        ship = Ship(
            id=len(self.ships),
            symbol=symbol,
            length=length,
            origin_x=x,
            origin_y=y,
            orientation=orientation,
        )
        for cx, cy in ship.cells():
            self.grid[cy][cx] = Cell.occupied(ship.id)
        self.ships.append(ship)
        return ship

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def cell(self, x: int, y: int) -> Cell:
        return self.grid[y][x]

    def ship_at(self, x: int, y: int) -> Ship | None:
        """Ship whose geometry covers (*x*, *y*), if any."""
        for ship in self.ships:
            if ship.covers(x, y):
                return ship
        return None

    def occupied_cells_of_ship_at(self, x: int, y: int) -> list[Coord]:
        """Every square of the ship covering (*x*, *y*); empty when none does."""
        ship = self.ship_at(x, y)
        return ship.cells() if ship is not None else []

    def remaining_ships(self) -> int:
        return sum(1 for ship in self.ships if not ship.sunk)

    def wounded_cell_count(self) -> int:
        """Hit squares belonging to ships that are still afloat."""
        return sum(ship.hit_count for ship in self.ships if ship.hit_count > 0 and not ship.sunk)

    def sunk_ship_count(self) -> int:
        return sum(1 for ship in self.ships if ship.sunk)

    def total_ship_cells(self) -> int:
        return sum(ship.length for ship in self.ships)

    # ------------------------------------------------------------------ #
    # Shot resolution
    # ------------------------------------------------------------------ #
    def apply_shot(self, x: int, y: int) -> Outcome:
        """Resolve a shot at (*x*, *y*).

        Out-of-bounds shots and shots at an already resolved square report
        ``MISS`` and change nothing, so a repeat is indistinguishable from a
        real miss to the caller.
        """
        if not self.in_bounds(x, y):
            return Outcome.MISS

        cell = self.grid[y][x]
        if cell.state is CellState.WATER:
            self.grid[y][x] = MISS
            self.miss_count += 1
            return Outcome.MISS
        if cell.state is not CellState.OCCUPIED:
            return Outcome.MISS

        for ship in self.ships:
            if ship.sunk or not ship.covers(x, y):
                continue
            ship.hit_count += 1
            if ship.sunk:
                for cx, cy in ship.cells():
                    self.grid[cy][cx] = SUNK
                logger.debug("ship %s (len %d) sunk at (%d,%d)", ship.symbol, ship.length, x, y)
                return Outcome.SUNK
            self.grid[y][x] = HIT
            return Outcome.HIT

        logger.debug("occupied square (%d,%d) has no registered ship", x, y)
        self.grid[y][x] = HIT
        return Outcome.HIT

    # ------------------------------------------------------------------ #
    # Connected-ship counting
    # ------------------------------------------------------------------ #
    def count_intact_ships(self) -> int:
        """Count connected groups of squares that still hold ship parts.

        Uses an explicit stack so 26x26 boards never approach the recursion
        limit. Touching ships count as one group.
        """
        alive = {CellState.OCCUPIED, CellState.HIT}
        visited = [[False] * self.size for _ in range(self.size)]
        groups = 0
        for y in range(self.size):
            for x in range(self.size):
                if visited[y][x] or self.grid[y][x].state not in alive:
                    continue
                groups += 1
                stack = [(x, y)]
                visited[y][x] = True
                while stack:
                    cx, cy = stack.pop()
                    for nx, ny in _neighbours(cx, cy):
                        if not self.in_bounds(nx, ny) or visited[ny][nx]:
                            continue
                        if self.grid[ny][nx].state in alive:
                            visited[ny][nx] = True
                            stack.append((nx, ny))
        return groups

    # ------------------------------------------------------------------ #
    # Rendering snapshot
    # ------------------------------------------------------------------ #
    def rows(self, *, reveal: bool = True) -> list[str]:
        """Board as text rows; unrevealed ship squares look like water."""
        symbols = {ship.id: ship.symbol for ship in self.ships}
        out: list[str] = []
        for row in self.grid:
            glyphs = []
            for cell in row:
                if cell.state is CellState.OCCUPIED:
                    glyphs.append(symbols.get(cell.ship_id, "?") if reveal else GLYPHS[CellState.WATER])
                else:
                    glyphs.append(GLYPHS[cell.state])
            out.append(" ".join(glyphs))
        return out


def _neighbours(x: int, y: int) -> tuple[Coord, Coord, Coord, Coord]:
    return ((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y))
