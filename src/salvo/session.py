"""Game setup for the three ways a match can start.

Each function returns a ready :class:`TurnEngine` with a randomly placed
local fleet. Networked setups perform the settings handshake before the
engine exists, so a failing handshake never leaves a half-built game.
"""

from __future__ import annotations

import logging
import socket

from . import config as _cfg
from .board import Board
from .config import GameConfig
from .engine import TurnEngine
from .opponent import AIOpponent, RemoteOpponent
from .peer_sync import ConnectionLost, PeerSync
from .placement import placement_rng, randomize_fleet
from .targeting import Difficulty

logger = logging.getLogger(__name__)


def _local_board(size: int, *, is_host: bool, seed: int | None) -> Board:
    board = Board(size, is_host=is_host)
    randomize_fleet(board, rng=placement_rng(is_host, seed))
    return board


def start_ai_session(
    config: GameConfig | None = None,
    difficulty: Difficulty = Difficulty.EASY,
    *,
    seed: int | None = None,
) -> TurnEngine:
    """Local player against the scripted opponent; the local side moves first."""
    config = config or GameConfig.create()
    seed = _cfg.SEED if seed is None else seed
    board = _local_board(config.board_size, is_host=True, seed=seed)
    opponent = AIOpponent(config.board_size, difficulty, rng=placement_rng(False, seed))
    logger.info(
        "AI game – %dx%d board, %d shots per turn, %s opponent",
        config.board_size,
        config.board_size,
        config.shots_per_turn,
        difficulty.value,
    )
    return TurnEngine(config, board, opponent, local_first=True)


def host_session(
    sock: socket.socket,
    config: GameConfig | None = None,
    *,
    seed: int | None = None,
    timeout: float | None = None,
) -> TurnEngine:
    """Send the settings to the connected client; the host moves first."""
    config = config or GameConfig.create()
    peer = PeerSync(sock, timeout=timeout)
    try:
        peer.send_settings(config.board_size, config.shots_per_turn)
    except ConnectionLost:
        peer.close()
        raise
    board = _local_board(config.board_size, is_host=True, seed=_cfg.SEED if seed is None else seed)
    logger.info("hosting game – %dx%d board, %d shots per turn", config.board_size, config.board_size, config.shots_per_turn)
    return TurnEngine(config, board, RemoteOpponent(peer), local_first=True)


def join_session(
    sock: socket.socket,
    *,
    seed: int | None = None,
    timeout: float | None = None,
) -> TurnEngine:
    """Adopt the host's settings (clamped to the supported range); the host moves first."""
    peer = PeerSync(sock, timeout=timeout)
    try:
        board_size, shots = peer.recv_settings()
    except ConnectionLost:
        peer.close()
        raise
    config = GameConfig.create(board_size, shots)
    if (config.board_size, config.shots_per_turn) != (board_size, shots):
        logger.warning(
            "host sent size=%d shots=%d – clamped to size=%d shots=%d",
            board_size,
            shots,
            config.board_size,
            config.shots_per_turn,
        )
    board = _local_board(config.board_size, is_host=False, seed=_cfg.SEED if seed is None else seed)
    logger.info("joined game – %dx%d board, %d shots per turn", config.board_size, config.board_size, config.shots_per_turn)
    return TurnEngine(config, board, RemoteOpponent(peer), local_first=False)
