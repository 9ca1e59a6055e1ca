"""Static fleet table keyed by board size.

Larger boards carry proportionally larger fleets and salvos. Sizes outside
the table fall back to the classic 10x10 layout.
"""

from __future__ import annotations

from dataclasses import dataclass

MIN_BOARD_SIZE = 10
MAX_BOARD_SIZE = 26


@dataclass(frozen=True, slots=True)
class FleetConfiguration:
    """Ship counts per length plus the recommended salvo size."""

    board_size: int
    four_deck: int
    three_deck: int
    two_deck: int
    one_deck: int
    shots_per_turn: int

    @property
    def total_ships(self) -> int:
        return self.four_deck + self.three_deck + self.two_deck + self.one_deck

    @property
    def total_ship_cells(self) -> int:
        return self.four_deck * 4 + self.three_deck * 3 + self.two_deck * 2 + self.one_deck

    def lengths(self) -> list[int]:
        """Every ship length of the fleet, longest first."""
        return (
            [4] * self.four_deck
            + [3] * self.three_deck
            + [2] * self.two_deck
            + [1] * self.one_deck
        )


# (size, 4-deck, 3-deck, 2-deck, 1-deck, shots)
_TABLE: tuple[tuple[int, int, int, int, int, int], ...] = (
    (10, 1, 2, 3, 4, 5),
    (11, 1, 2, 4, 5, 5),
    (12, 1, 3, 4, 6, 5),
    (13, 1, 3, 5, 6, 5),
    (14, 2, 3, 5, 7, 6),
    (15, 2, 4, 6, 8, 6),
    (16, 2, 4, 6, 9, 6),
    (17, 2, 4, 7, 9, 6),
    (18, 2, 5, 7, 10, 7),
    (19, 3, 5, 8, 11, 7),
    (20, 3, 5, 8, 12, 7),
    (21, 3, 6, 9, 13, 7),
    (22, 3, 6, 9, 14, 7),
    (23, 4, 6, 10, 15, 8),
    (24, 4, 7, 10, 16, 8),
    (25, 4, 7, 11, 17, 8),
    (26, 4, 7, 11, 18, 9),
)

FLEET_TABLE: dict[int, FleetConfiguration] = {row[0]: FleetConfiguration(*row) for row in _TABLE}

DEFAULT_CONFIGURATION = FLEET_TABLE[MIN_BOARD_SIZE]


def fleet_configuration(board_size: int) -> FleetConfiguration:
    """Return the fleet for *board_size*, or the 10x10 fleet for unknown sizes."""
    return FLEET_TABLE.get(board_size, DEFAULT_CONFIGURATION)


def total_ships(board_size: int) -> int:
    return fleet_configuration(board_size).total_ships


def total_ship_cells(board_size: int) -> int:
    """Number of hits needed to destroy a whole fleet of this size."""
    return fleet_configuration(board_size).total_ship_cells


def fleet_lengths(board_size: int) -> list[int]:
    return fleet_configuration(board_size).lengths()


def ship_symbol(index: int) -> str:
    """Display letter for the *index*-th ship of a fleet (``A``..``Z``, cycling)."""
    return chr(ord("A") + index % 26)
