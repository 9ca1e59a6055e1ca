"""Ship placement: validation, committing ships, random and manual fleets."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field

from .board import Board, CellState, Orientation, ship_cells
from .ship_catalog import fleet_configuration, ship_symbol

logger = logging.getLogger(__name__)

# Failed attempts for a single ship before the whole board is restarted.
MAX_ATTEMPTS = 1000

# Host and client boards draw from differently seeded generators.
HOST_SEED_OFFSET = 3000


def validate(board: Board, x: int, y: int, orientation: Orientation, length: int) -> bool:
    """Return ``True`` if a ship of *length* fits at (*x*, *y*) on open water."""
    for cx, cy in ship_cells(x, y, orientation, length):
        if not board.in_bounds(cx, cy):
            return False
        if board.grid[cy][cx].state is not CellState.WATER:
            return False
    return True


def place(board: Board, x: int, y: int, orientation: Orientation, length: int, symbol: str) -> bool:
    """Validate and commit a ship; on failure the board is left untouched."""
    if not validate(board, x, y, orientation, length):
        return False
    board.add_ship(x, y, orientation, length, symbol)
    return True


def fleet_pieces(board_size: int) -> list[tuple[int, str]]:
    """``(length, symbol)`` for every ship of the fleet, longest first."""
    return [(length, ship_symbol(i)) for i, length in enumerate(fleet_configuration(board_size).lengths())]


def placement_rng(is_host: bool, seed: int | None = None) -> random.Random:
    """Generator for random placement; host and client never share a stream."""
    base = seed if seed is not None else time.time_ns()
    return random.Random(base + HOST_SEED_OFFSET if is_host else base)


def randomize_fleet(
    board: Board,
    pieces: list[tuple[int, str]] | None = None,
    rng: random.Random | None = None,
) -> int:
    """Clear *board* and place *pieces* at random positions.

    Ships are placed longest first. A ship that cannot be placed within
    ``MAX_ATTEMPTS`` tries makes the whole board start over from empty.
    Returns the number of such restarts.
    """
    if pieces is None:
        pieces = fleet_pieces(board.size)
    if rng is None:
        rng = placement_rng(board.is_host)
    ordered = sorted(pieces, key=lambda piece: piece[0], reverse=True)

    restarts = 0
    while True:
        board.clear()
        if all(_place_randomly(board, length, symbol, rng) for length, symbol in ordered):
            if restarts:
                logger.debug("fleet placed after %d restart(s)", restarts)
            return restarts
        restarts += 1
        logger.warning("placement stalled on a %dx%d board – restarting (%d)", board.size, board.size, restarts)


def _place_randomly(board: Board, length: int, symbol: str, rng: random.Random) -> bool:
    for _ in range(MAX_ATTEMPTS):
        x = rng.randrange(board.size)
        y = rng.randrange(board.size)
        orientation = rng.choice((Orientation.HORIZONTAL, Orientation.VERTICAL))
        if place(board, x, y, orientation, length, symbol):
            return True
    return False


@dataclass(slots=True)
class PlacementCursor:
    """Walk a fleet's pieces one at a time for manual placement."""

    board: Board
    pieces: list[tuple[int, str]] = field(default_factory=list)
    index: int = 0

    def __post_init__(self) -> None:
        if not self.pieces:
            self.pieces = fleet_pieces(self.board.size)

    @property
    def done(self) -> bool:
        return self.index >= len(self.pieces)

    @property
    def current(self) -> tuple[int, str] | None:
        """``(length, symbol)`` of the piece waiting to be placed."""
        return None if self.done else self.pieces[self.index]

    def place_current(self, x: int, y: int, orientation: Orientation) -> bool:
        """Place the current piece; advance only when it fits."""
        if self.done:
            return False
        length, symbol = self.pieces[self.index]
        if not place(self.board, x, y, orientation, length, symbol):
            return False
        self.index += 1
        return True

    def restart(self) -> None:
        self.board.clear()
        self.index = 0
