import pytest

from salvo.ship_catalog import (
    DEFAULT_CONFIGURATION,
    MAX_BOARD_SIZE,
    MIN_BOARD_SIZE,
    fleet_configuration,
    fleet_lengths,
    ship_symbol,
    total_ship_cells,
    total_ships,
)


def test_classic_fleet() -> None:
    cfg = fleet_configuration(10)
    assert (cfg.four_deck, cfg.three_deck, cfg.two_deck, cfg.one_deck) == (1, 2, 3, 4)
    assert cfg.shots_per_turn == 5
    assert total_ships(10) == 10
    assert total_ship_cells(10) == 20


def test_largest_board() -> None:
    cfg = fleet_configuration(26)
    assert cfg.board_size == 26
    assert total_ship_cells(26) == cfg.four_deck * 4 + cfg.three_deck * 3 + cfg.two_deck * 2 + cfg.one_deck


@pytest.mark.parametrize("size", [0, 9, 27, 100])
def test_unknown_size_falls_back(size: int) -> None:
    assert fleet_configuration(size) == DEFAULT_CONFIGURATION


def test_table_grows_monotonically() -> None:
    cells = [total_ship_cells(size) for size in range(MIN_BOARD_SIZE, MAX_BOARD_SIZE + 1)]
    assert cells == sorted(cells)


def test_fleet_lengths_descending() -> None:
    lengths = fleet_lengths(14)
    assert lengths == sorted(lengths, reverse=True)
    assert sum(lengths) == total_ship_cells(14)


def test_ship_symbols() -> None:
    assert ship_symbol(0) == "A"
    assert ship_symbol(25) == "Z"
    assert ship_symbol(26) == "A"
