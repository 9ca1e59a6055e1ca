"""Central configuration for runtime-tunable parameters.

All constants can be overridden via environment variables so that a local
game runs with sensible defaults while tests and scripted matches can pin
ports, timeouts and seeds.

Game settings themselves are never global: a :class:`GameConfig` value is
built once at game start and handed to the engine and boards explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .ship_catalog import MAX_BOARD_SIZE, MIN_BOARD_SIZE, fleet_configuration

# ===========================================================================
# Network Defaults
# ===========================================================================
# SALVO_HOST: Default address the host binds to and the client connects to.
#   Defaults to "127.0.0.1".
#   Example: export SALVO_HOST=0.0.0.0
DEFAULT_HOST: str = os.getenv("SALVO_HOST", "127.0.0.1")

# SALVO_PORT: Default port for peer games.
#   Defaults to 12345.
#   Example: export SALVO_PORT=12400
DEFAULT_PORT: int = int(os.getenv("SALVO_PORT", "12345"))


# ===========================================================================
# Peer Receive Timeout
# ===========================================================================
# SALVO_TIMEOUT: seconds a blocking receive may wait before the peer is
# considered gone. Defaults to 60 seconds. Example: export SALVO_TIMEOUT=15
TIMEOUT: float = float(os.getenv("SALVO_TIMEOUT", "60"))


# ===========================================================================
# Game Defaults
# ===========================================================================
# SALVO_BOARD_SIZE: Width and height of the board used when none is given.
#   Clamped to [10, 26]. Defaults to 10.
#   Example: export SALVO_BOARD_SIZE=14
BOARD_SIZE: int = int(os.getenv("SALVO_BOARD_SIZE", "10"))

# SALVO_SHOTS: Shots per turn used when none is given.
#   Unset means "use the catalog recommendation for the board size".
#   Example: export SALVO_SHOTS=3
SHOTS_PER_TURN: int | None = int(os.environ["SALVO_SHOTS"]) if os.getenv("SALVO_SHOTS") else None

# SALVO_SEED: Seed for ship placement and AI targeting.
#   Unset means nondeterministic. Handy for replaying a scripted match.
#   Example: export SALVO_SEED=1234
SEED: int | None = int(os.environ["SALVO_SEED"]) if os.getenv("SALVO_SEED") else None

# Upper bound on a salvo the players may configure.
MAX_SHOTS_PER_TURN = 26


# ===========================================================================
# Debugging and Logging
# ===========================================================================
# SALVO_DEBUG: If "1", enables detailed debug logging across modules.
#   Defaults to "0" (disabled).
#   Example: export SALVO_DEBUG=1
DEBUG: bool = os.getenv("SALVO_DEBUG", "0") == "1"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def clamp_board_size(size: int) -> int:
    """Clamp *size* into the supported board range."""
    return max(MIN_BOARD_SIZE, min(MAX_BOARD_SIZE, size))


def clamp_shots(shots: int) -> int:
    """Clamp a salvo size into ``[1, MAX_SHOTS_PER_TURN]``."""
    return max(1, min(MAX_SHOTS_PER_TURN, shots))


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Validated ``(board_size, shots_per_turn)`` pair for one game."""

    board_size: int = 10
    shots_per_turn: int = 5

    @classmethod
    def create(cls, board_size: int | None = None, shots_per_turn: int | None = None) -> "GameConfig":
        """Build a config, clamping out-of-range values instead of rejecting them.

        A missing *shots_per_turn* falls back to the catalog recommendation
        for the (clamped) board size.
        """
        size = clamp_board_size(BOARD_SIZE if board_size is None else board_size)
        if shots_per_turn is None:
            shots_per_turn = SHOTS_PER_TURN
        if shots_per_turn is None:
            shots_per_turn = fleet_configuration(size).shots_per_turn
        return cls(board_size=size, shots_per_turn=clamp_shots(shots_per_turn))
