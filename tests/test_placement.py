"""Placement validation, random fleets and the manual placement cursor."""

from __future__ import annotations

import random

import pytest

from salvo.board import Board, CellState, Orientation
from salvo.placement import (
    HOST_SEED_OFFSET,
    PlacementCursor,
    fleet_pieces,
    place,
    placement_rng,
    randomize_fleet,
    validate,
)
from salvo.ship_catalog import fleet_configuration


def _occupied(board: Board) -> int:
    return sum(1 for row in board.grid for cell in row if cell.state is CellState.OCCUPIED)


@pytest.mark.parametrize(
    "x,y,orientation,length,ok",
    [
        (0, 0, Orientation.HORIZONTAL, 4, True),
        (6, 0, Orientation.HORIZONTAL, 4, True),
        (7, 0, Orientation.HORIZONTAL, 4, False),
        (0, 6, Orientation.VERTICAL, 4, True),
        (0, 7, Orientation.VERTICAL, 4, False),
        (-1, 0, Orientation.HORIZONTAL, 1, False),
        (9, 9, Orientation.VERTICAL, 1, True),
    ],
)
def test_validate_bounds(x, y, orientation, length, ok) -> None:
    assert validate(Board(10), x, y, orientation, length) is ok


def test_place_rejects_overlap_without_mutation() -> None:
    board = Board(10)
    assert place(board, 2, 2, Orientation.HORIZONTAL, 3, "A")
    snapshot = [list(row) for row in board.grid]
    assert not place(board, 3, 0, Orientation.VERTICAL, 3, "B")
    assert board.grid == snapshot
    assert len(board.ships) == 1


def test_fleet_pieces_longest_first() -> None:
    pieces = fleet_pieces(10)
    assert [length for length, _ in pieces] == [4, 3, 3, 2, 2, 2, 1, 1, 1, 1]
    assert [symbol for _, symbol in pieces] == list("ABCDEFGHIJ")


def test_randomize_fleet_places_every_cell(rng: random.Random) -> None:
    board = Board(10)
    randomize_fleet(board, rng=rng)
    assert _occupied(board) == fleet_configuration(10).total_ship_cells
    assert len(board.ships) == fleet_configuration(10).total_ships


def test_randomize_fleet_repeatable(rng: random.Random) -> None:
    board = Board(10)
    expected = fleet_configuration(10).total_ship_cells
    for _ in range(10):
        restarts = randomize_fleet(board, rng=rng)
        assert restarts == 0
        assert _occupied(board) == expected


@pytest.mark.parametrize("size", [10, 17, 26])
def test_randomize_fleet_every_size(size: int, rng: random.Random) -> None:
    board = Board(size)
    randomize_fleet(board, rng=rng)
    assert _occupied(board) == fleet_configuration(size).total_ship_cells


def test_randomize_fleet_same_seed_same_layout() -> None:
    a, b = Board(10), Board(10)
    randomize_fleet(a, rng=random.Random(7))
    randomize_fleet(b, rng=random.Random(7))
    assert a.grid == b.grid


def test_placement_rng_host_offset() -> None:
    host = placement_rng(True, seed=42)
    client = placement_rng(False, seed=42)
    assert host.random() == random.Random(42 + HOST_SEED_OFFSET).random()
    assert client.random() == random.Random(42).random()


def test_cursor_walks_pieces() -> None:
    board = Board(10)
    cursor = PlacementCursor(board, pieces=[(3, "A"), (2, "B")])
    assert cursor.current == (3, "A")

    assert not cursor.place_current(8, 0, Orientation.HORIZONTAL)
    assert cursor.index == 0

    assert cursor.place_current(0, 0, Orientation.VERTICAL)
    assert cursor.current == (2, "B")
    assert not cursor.place_current(0, 1, Orientation.HORIZONTAL)
    assert cursor.place_current(1, 1, Orientation.HORIZONTAL)
    assert cursor.done
    assert cursor.current is None
    assert not cursor.place_current(5, 5, Orientation.HORIZONTAL)

    cursor.restart()
    assert cursor.index == 0
    assert board.ships == []


def test_cursor_defaults_to_catalog_fleet() -> None:
    cursor = PlacementCursor(Board(12))
    assert len(cursor.pieces) == fleet_configuration(12).total_ships
