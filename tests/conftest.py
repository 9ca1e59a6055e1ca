import logging
import random
import socket
import sys
from pathlib import Path

import pytest

# Ensure local `src` directory is importable before project is installed.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from salvo.board import Board, Orientation  # noqa: E402
from salvo.placement import place  # noqa: E402

# Keep per-shot DEBUG traces out of the test output.
logging.basicConfig(level=logging.WARNING)


@pytest.fixture
def rng() -> random.Random:
    """Deterministic generator so placement and targeting are repeatable."""
    return random.Random(1234)


@pytest.fixture
def socket_pair():
    """Connected stream sockets standing in for host and client."""
    a, b = socket.socketpair()
    yield a, b
    a.close()
    b.close()


@pytest.fixture
def small_fleet_board() -> Board:
    """10x10 board with three hand-placed ships (lengths 3, 2, 1)."""
    board = Board(10)
    assert place(board, 5, 5, Orientation.VERTICAL, 3, "A")
    assert place(board, 0, 0, Orientation.HORIZONTAL, 2, "B")
    assert place(board, 9, 9, Orientation.HORIZONTAL, 1, "C")
    return board
