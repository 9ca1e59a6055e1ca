"""The side the local player fights: a scripted AI or a remote peer.

Both kinds expose the same capability surface, so the turn engine never
needs to know which one it is talking to.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, Iterator

from .board import Board, Coord, Outcome
from .peer_sync import PeerSync
from .placement import placement_rng, randomize_fleet
from .targeting import Difficulty, Targeting, make_targeting

logger = logging.getLogger(__name__)


class Opponent:
    """Capability interface used by :class:`salvo.engine.TurnEngine`."""

    remote = False

    # -- our salvo against them ------------------------------------------
    def begin_salvo(self, count: int) -> None:
        """Announce how many shots the local side is about to fire."""

    def receive_shot(self, x: int, y: int) -> Outcome:
        raise NotImplementedError

    def sunk_cells(self, x: int, y: int) -> list[Coord] | None:
        """Squares of the ship just sunk at (*x*, *y*), when the geometry is known."""
        return None

    # -- their salvo against us ------------------------------------------
    def select_shots(self, n: int) -> Iterable[Coord]:
        raise NotImplementedError

    def apply_outcome(self, x: int, y: int, outcome: Outcome) -> None:
        raise NotImplementedError

    # -- misc --------------------------------------------------------------
    def fleet_board(self) -> Board | None:
        return None

    def close(self) -> None:
        pass


class AIOpponent(Opponent):
    """Scripted adversary with its own randomly placed fleet."""

    def __init__(
        self,
        size: int = 10,
        difficulty: Difficulty = Difficulty.EASY,
        *,
        rng: random.Random | None = None,
        board: Board | None = None,
    ) -> None:
        self.size = size
        self.difficulty = difficulty
        self.board = board if board is not None else Board(size, is_host=False)
        if board is None:
            randomize_fleet(self.board, rng=rng if rng is not None else placement_rng(is_host=False))
        self.targeting: Targeting = make_targeting(difficulty, size, rng=rng)
        logger.debug("AI opponent ready – difficulty=%s ships=%d", difficulty.value, len(self.board.ships))

    def receive_shot(self, x: int, y: int) -> Outcome:
        return self.board.apply_shot(x, y)

    def sunk_cells(self, x: int, y: int) -> list[Coord] | None:
        return self.board.occupied_cells_of_ship_at(x, y)

    def select_shots(self, n: int) -> list[Coord]:
        """Up to *n* squares chosen before any of them is resolved."""
        shots: list[Coord] = []
        for _ in range(n):
            target = self.targeting.select_target()
            if target is None:
                break
            shots.append(target)
        return shots

    def apply_outcome(self, x: int, y: int, outcome: Outcome) -> None:
        self.targeting.record_outcome(x, y, hit=outcome is not Outcome.MISS, sunk=outcome is Outcome.SUNK)

    def fleet_board(self) -> Board:
        return self.board


class RemoteOpponent(Opponent):
    """Adversary on the other end of a :class:`PeerSync` channel."""

    remote = True

    def __init__(self, peer: PeerSync) -> None:
        self.peer = peer

    def begin_salvo(self, count: int) -> None:
        self.peer.send_shot_count(count)

    def receive_shot(self, x: int, y: int) -> Outcome:
        self.peer.send_shot(x, y)
        return self.peer.recv_outcome()

    def select_shots(self, n: int) -> Iterator[Coord]:
        """Shots as the peer sends them; *n* is ignored, the peer sets the count.

        Each coordinate must be answered through :meth:`apply_outcome`
        before the next one is read.
        """
        count = self.peer.recv_shot_count()
        for _ in range(count):
            yield self.peer.recv_shot()

    def apply_outcome(self, x: int, y: int, outcome: Outcome) -> None:
        self.peer.send_outcome(outcome)

    def close(self) -> None:
        self.peer.close()
