from __future__ import annotations

import enum
import random
from collections import deque
from typing import Deque, Optional, Set

from .board import Coord


class Difficulty(str, enum.Enum):
    EASY = "easy"
    SMART = "smart"


class Knowledge(enum.Enum):
    """What the attacker has learned about one square of the adversary's board."""

    UNKNOWN = "?"
    CONFIRMED_MISS = "O"
    CONFIRMED_HIT = "X"


class Targeting:
    """
    Shared bookkeeping for the scripted opponent's shot selection.

    A square is *untried* until it has either been handed out by
    :meth:`select_target` or reported through :meth:`record_outcome`.
    Both shuffled pools shrink lazily: entries that became tried through
    another path are skipped when drawn.
    """

    difficulty: Difficulty

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #
    def __init__(self, size: int = 10, *, rng: Optional[random.Random] = None) -> None:
        self.size = size
        self._rng = rng if rng is not None else random.Random()
        self.reset()

    def reset(self) -> None:
        """Forget everything learned and rebuild the shuffled pools."""
        size = self.size
        self.grid: list[list[Knowledge]] = [[Knowledge.UNKNOWN] * size for _ in range(size)]

        all_sq = [(x, y) for y in range(size) for x in range(size)]
        self.untried: Set[Coord] = set(all_sq)
        self.available: list[Coord] = list(all_sq)
        self.parity: list[Coord] = [(x, y) for x, y in all_sq if (x + y) % 2 == 0]
        self._rng.shuffle(self.available)
        self._rng.shuffle(self.parity)

        self.follow_up: Deque[Coord] = deque()
        self.hunting = False
        self.last_hit: Optional[Coord] = None

    # ------------------------------------------------------------------ #
    # Helper utilities
    # ------------------------------------------------------------------ #
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def knowledge(self, x: int, y: int) -> Knowledge:
        return self.grid[y][x]

    def _draw(self, pool: list[Coord]) -> Optional[Coord]:
        """Pop from *pool* until an untried square turns up."""
        while pool:
            rc = pool.pop()
            if rc in self.untried:
                self.untried.discard(rc)
                return rc
        return None

    # ------------------------------------------------------------------ #
    # Shot selection / result handling
    # ------------------------------------------------------------------ #
    def select_target(self) -> Optional[Coord]:
        """Next square to fire at, or ``None`` once every square was tried."""
        raise NotImplementedError

    def record_outcome(self, x: int, y: int, hit: bool, sunk: bool) -> None:
        """Remember the result of a shot at (*x*, *y*); out-of-bounds reports are ignored."""
        if not self.in_bounds(x, y):
            return
        self.grid[y][x] = Knowledge.CONFIRMED_HIT if hit else Knowledge.CONFIRMED_MISS
        self.untried.discard((x, y))
        if hit:
            self.last_hit = (x, y)
            self.hunting = True


class EasyTargeting(Targeting):
    """Uniformly random squares, drawn without replacement. Never adapts."""

    difficulty = Difficulty.EASY

    def select_target(self) -> Optional[Coord]:
        return self._draw(self.available)


class SmartTargeting(Targeting):
    """
    Parity hunt with neighbour follow-up.

    1. Follow-up queue: orthogonal neighbours of every hit that did not sink
       a ship, oldest first. Re-queuing the neighbours of each new hit keeps
       the chase running along the ship without tracking a direction.
    2. Parity pool: shuffled squares with ``(x + y)`` even; every ship of
       length two or more covers at least one of them.
    3. Any remaining untried square.
    """

    difficulty = Difficulty.SMART

    def select_target(self) -> Optional[Coord]:
        while self.follow_up:
            rc = self.follow_up.popleft()
            if rc in self.untried:
                self.untried.discard(rc)
                return rc

        rc = self._draw(self.parity)
        if rc is not None:
            return rc
        return self._draw(self.available)

    def record_outcome(self, x: int, y: int, hit: bool, sunk: bool) -> None:
        if not self.in_bounds(x, y):
            return
        super().record_outcome(x, y, hit, sunk)

        if hit and not sunk:
            self._enqueue_neighbours(x, y)
        if sunk:
            # Stale queue entries from the sunk ship are filtered on pop.
            self.hunting = False
            self.last_hit = None

    def _enqueue_neighbours(self, x: int, y: int) -> None:
        for dx, dy in ((0, -1), (0, 1), (-1, 0), (1, 0)):
            nbr = (x + dx, y + dy)
            if self.in_bounds(*nbr) and nbr in self.untried:
                self.follow_up.append(nbr)


def make_targeting(difficulty: Difficulty, size: int = 10, *, rng: Optional[random.Random] = None) -> Targeting:
    """Build the targeting tier for *difficulty*."""
    if difficulty is Difficulty.SMART:
        return SmartTargeting(size, rng=rng)
    return EasyTargeting(size, rng=rng)
