"""Gymnasium wrapper exposing the targeting problem to learning agents.

Observation
===========
3-channel (3, N, N) float32 array where
  chan 0 = 1.0 at squares fired at that hold a wounded ship part
  chan 1 = 1.0 at squares fired at that were water
  chan 2 = 1.0 at every square of a sunk ship
All zeros elsewhere.

Action space
============
Discrete(N*N) – flattened ``y * N + x`` coordinate.

Reward (dense)
==============
Taken from ``DEFAULT_REWARDS`` and overridable per instance via
*reward_dict*. An episode terminates once the whole fleet is sunk.
"""

from __future__ import annotations

import random

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, CellState, Outcome
from .placement import randomize_fleet

_HIT, _MISS, _SUNK = 0, 1, 2


class SalvoTargetEnv(gym.Env):
    metadata = {"render_modes": ["ansi"]}

    DEFAULT_REWARDS = {
        "hit": 5.0,
        "sink": 20.0,
        "miss": -1.0,
        "repeat": -10.0,
        "win": 200.0,
    }

    def __init__(self, size: int = 10, *, reward_dict: dict | None = None, render_mode: str | None = None):
        super().__init__()
        self.size = size
        self.render_mode = render_mode
        self.board: Board | None = None
        self.action_space = spaces.Discrete(size * size)
        self.observation_space = spaces.Box(0.0, 1.0, shape=(3, size, size), dtype=np.float32)
        self._rewards = self.DEFAULT_REWARDS.copy()
        if reward_dict is not None:
            self._rewards.update(reward_dict)
        self._obs: np.ndarray | None = None

    # ------------------------------------------------------------------
    def reset(self, *, seed: int | None = None, options: dict | None = None):  # type: ignore[override]
        super().reset(seed=seed)
        self.board = Board(self.size)
        # Placement draws from a stdlib generator seeded off the env's numpy stream.
        randomize_fleet(self.board, rng=random.Random(int(self.np_random.integers(2**31))))
        self._obs = np.zeros((3, self.size, self.size), dtype=np.float32)
        return self._obs.copy(), {}

    # ------------------------------------------------------------------
    def step(self, action: int):  # type: ignore[override]
        if self.board is None or self._obs is None:
            raise RuntimeError("Env must be reset before step")
        y, x = divmod(int(action), self.size)
        before = self.board.cell(x, y).state
        outcome = self.board.apply_shot(x, y)
        terminated = False

        if before not in (CellState.WATER, CellState.OCCUPIED):
            reward = self._rewards["repeat"]
        elif outcome is Outcome.MISS:
            self._obs[_MISS, y, x] = 1.0
            reward = self._rewards["miss"]
        elif outcome is Outcome.HIT:
            self._obs[_HIT, y, x] = 1.0
            reward = self._rewards["hit"]
        else:
            for cx, cy in self.board.occupied_cells_of_ship_at(x, y):
                self._obs[_HIT, cy, cx] = 0.0
                self._obs[_SUNK, cy, cx] = 1.0
            if self.board.remaining_ships() == 0:
                reward = self._rewards["win"]
                terminated = True
            else:
                reward = self._rewards["hit"] + self._rewards["sink"]

        info = {"outcome": outcome.value, "remaining_ships": self.board.remaining_ships()}
        return self._obs.copy(), reward, terminated, False, info

    # ------------------------------------------------------------------
    def action_masks(self) -> np.ndarray:
        """``True`` for squares not fired at yet."""
        if self._obs is None:
            return np.ones(self.size * self.size, dtype=bool)
        return (self._obs.sum(axis=0) == 0).reshape(-1)

    def render(self):
        if self.board is None:
            return None
        return "\n".join(self.board.rows(reveal=False))
