"""Turn engine: salvo selection, resolution and the win check.

One engine instance drives a whole game from the local player's point of
view. The opponent is reached only through :class:`salvo.opponent.Opponent`,
so AI and networked games run through identical code.
"""

from __future__ import annotations

import enum
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator

from .board import Board, CellState, Outcome
from .config import GameConfig
from .coord_utils import format_coord
from .events import Category, Event, EventBus
from .fog import FogBoard, FogCell
from .opponent import Opponent
from .peer_sync import ConnectionLost
from .ship_catalog import fleet_configuration

logger = logging.getLogger(__name__)


class Phase(str, enum.Enum):
    SELECTING = "selecting"
    FIRING = "firing"
    GAME_OVER = "game_over"


class Side(str, enum.Enum):
    LOCAL = "local"
    OPPONENT = "opponent"

    @property
    def other(self) -> "Side":
        return Side.OPPONENT if self is Side.LOCAL else Side.LOCAL


@dataclass(frozen=True, slots=True)
class ShotRecord:
    x: int
    y: int
    outcome: Outcome

    @property
    def label(self) -> str:
        return format_coord(self.x, self.y)


@dataclass(slots=True)
class VolleyReport:
    """Result of one salvo.

    *wounded* counts shots of this salvo that hit a ship which was still
    afloat once the salvo ended.
    """

    side: Side
    shots: list[ShotRecord] = field(default_factory=list)
    wounded: int = 0

    @property
    def sunk(self) -> int:
        return sum(1 for s in self.shots if s.outcome is Outcome.SUNK)

    @property
    def misses(self) -> int:
        return sum(1 for s in self.shots if s.outcome is Outcome.MISS)

    def summary(self) -> str:
        """One-line digest, e.g. ``"A5,B6,C1 - 1 wounded, 1 sunk, 1 miss"``."""
        coords = ",".join(s.label for s in self.shots)
        stats = []
        if self.wounded:
            stats.append(f"{self.wounded} wounded")
        if self.sunk:
            stats.append(f"{self.sunk} sunk")
        if self.misses:
            stats.append(f"{self.misses} miss")
        return f"{coords} - {', '.join(stats)}" if stats else coords


@dataclass(frozen=True, slots=True)
class Scoreboard:
    """Read-only snapshot for renderers."""

    turn: int
    phase: Phase
    to_move: Side
    local_ships_remaining: int
    opponent_ships_remaining: int
    local_hits: int
    opponent_hits: int
    winner: Side | None
    aborted: bool


class TurnEngine:
    """Alternating salvo game between the local board and an :class:`Opponent`."""

    def __init__(
        self,
        config: GameConfig,
        local_board: Board,
        opponent: Opponent,
        *,
        local_first: bool = True,
    ) -> None:
        self.config = config
        self.local_board = local_board
        self.opponent = opponent
        self.fog = FogBoard(config.board_size)

        fleet = fleet_configuration(config.board_size)
        self.total_ships = fleet.total_ships
        self.total_ship_cells = fleet.total_ship_cells

        self.phase = Phase.SELECTING
        self.to_move = Side.LOCAL if local_first else Side.OPPONENT
        self.turn = 1
        self.selection: list[tuple[int, int]] = []
        self.hits = {Side.LOCAL: 0, Side.OPPONENT: 0}
        self.sunk = {Side.LOCAL: 0, Side.OPPONENT: 0}
        self.winner: Side | None = None
        self.aborted = False
        self._bus = EventBus()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def subscribe(self, callback: Callable[[Event], None]) -> Callable[[], None]:
        return self._bus.subscribe(callback)

    def _emit(self, category: Category, type_: str, **payload) -> None:
        self._bus.emit(Event(category, type_, payload))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def over(self) -> bool:
        return self.phase is Phase.GAME_OVER

    def opponent_ships_remaining(self) -> int:
        board = self.opponent.fleet_board()
        if board is not None:
            return board.remaining_ships()
        return self.total_ships - self.sunk[Side.LOCAL]

    def local_ships_remaining(self) -> int:
        return self.local_board.remaining_ships()

    def scoreboard(self) -> Scoreboard:
        return Scoreboard(
            turn=self.turn,
            phase=self.phase,
            to_move=self.to_move,
            local_ships_remaining=self.local_ships_remaining(),
            opponent_ships_remaining=self.opponent_ships_remaining(),
            local_hits=self.hits[Side.LOCAL],
            opponent_hits=self.hits[Side.OPPONENT],
            winner=self.winner,
            aborted=self.aborted,
        )

    # ------------------------------------------------------------------
    # Local selection
    # ------------------------------------------------------------------
    def _selecting_locally(self) -> bool:
        return self.phase is Phase.SELECTING and self.to_move is Side.LOCAL

    def select_target(self, x: int, y: int) -> bool:
        """Queue (*x*, *y*) for the next salvo; ``False`` leaves the selection unchanged."""
        if not self._selecting_locally():
            return False
        if not self.fog.in_bounds(x, y) or self.fog.is_revealed(x, y):
            return False
        if (x, y) in self.selection or len(self.selection) >= self.config.shots_per_turn:
            return False
        self.selection.append((x, y))
        return True

    def clear_selection(self) -> None:
        if self._selecting_locally():
            self.selection.clear()

    def confirm_salvo(self) -> bool:
        if not self._selecting_locally() or not self.selection:
            return False
        self.phase = Phase.FIRING
        return True

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    @contextmanager
    def _network_guard(self) -> Iterator[None]:
        try:
            yield
        except ConnectionLost as exc:
            self.aborted = True
            self.phase = Phase.GAME_OVER
            logger.warning("connection lost on turn %d: %s", self.turn, exc)
            self._emit(Category.SYSTEM, "connection_lost", reason=str(exc))
            self.opponent.close()
            raise

    def _has_won(self, side: Side) -> bool:
        if self.hits[side] >= self.total_ship_cells:
            return True
        if side is Side.LOCAL:
            return self.opponent_ships_remaining() <= 0
        return self.local_ships_remaining() <= 0

    def fire(self) -> VolleyReport | None:
        """Resolve the confirmed salvo against the opponent, in selection order."""
        if self.phase is not Phase.FIRING:
            return None
        report = VolleyReport(Side.LOCAL)
        shots = list(self.selection)
        self.selection.clear()

        with self._network_guard():
            self.opponent.begin_salvo(len(shots))
            for x, y in shots:
                outcome = self.opponent.receive_shot(x, y)
                sunk_cells = self.opponent.sunk_cells(x, y) if outcome is Outcome.SUNK else None
                self.fog.record(x, y, outcome, sunk_cells)
                self._tally(Side.LOCAL, outcome)
                report.shots.append(ShotRecord(x, y, outcome))
                self._emit(Category.TURN, "shot", side=Side.LOCAL, x=x, y=y, outcome=outcome)
                if self._has_won(Side.LOCAL):
                    break

        report.wounded = sum(
            1 for s in report.shots if s.outcome is Outcome.HIT and self.fog.cell(s.x, s.y) is FogCell.HIT
        )
        self._finish_volley(report)
        return report

    def play_opponent_turn(self) -> VolleyReport | None:
        """Let the opponent fire its salvo at the local board."""
        if self.phase is not Phase.SELECTING or self.to_move is not Side.OPPONENT:
            return None
        report = VolleyReport(Side.OPPONENT)
        board = self.local_board

        with self._network_guard():
            for x, y in self.opponent.select_shots(self.config.shots_per_turn):
                outcome = board.apply_shot(x, y)
                self.opponent.apply_outcome(x, y, outcome)
                self._tally(Side.OPPONENT, outcome)
                report.shots.append(ShotRecord(x, y, outcome))
                self._emit(Category.TURN, "shot", side=Side.OPPONENT, x=x, y=y, outcome=outcome)
                if self._has_won(Side.OPPONENT):
                    break

        report.wounded = sum(
            1
            for s in report.shots
            if s.outcome is Outcome.HIT and board.in_bounds(s.x, s.y) and board.cell(s.x, s.y).state is CellState.HIT
        )
        self._finish_volley(report)
        return report

    def _tally(self, side: Side, outcome: Outcome) -> None:
        if outcome is Outcome.MISS:
            return
        self.hits[side] += 1
        if outcome is Outcome.SUNK:
            self.sunk[side] += 1

    def _finish_volley(self, report: VolleyReport) -> None:
        side = report.side
        logger.debug("turn %d %s salvo: %s", self.turn, side.value, report.summary())
        self._emit(Category.TURN, "salvo", side=side, report=report, summary=report.summary())

        if self._has_won(side):
            self.winner = side
            self.phase = Phase.GAME_OVER
            logger.info("game over after %d turn(s) – %s side wins", self.turn, side.value)
            self._emit(Category.TURN, "game_over", winner=side, turn=self.turn)
            return

        self.phase = Phase.SELECTING
        self.to_move = side.other
        self.turn += 1

    # ------------------------------------------------------------------
    # Abort
    # ------------------------------------------------------------------
    def quit(self) -> None:
        """End the game without a winner and release the opponent."""
        if self.over:
            return
        self.phase = Phase.GAME_OVER
        self.winner = None
        self.selection.clear()
        logger.info("game quit on turn %d", self.turn)
        self._emit(Category.SYSTEM, "quit", turn=self.turn)
        self.opponent.close()
