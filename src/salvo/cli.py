"""Text front end: ``salvo ai``, ``salvo host`` and ``salvo join HOST``."""

from __future__ import annotations

import argparse
import logging
import sys

from . import config as _cfg
from .commands import ClearCommand, CommandParseError, FireCommand, QuitCommand, TargetCommand, parse_command
from .config import GameConfig
from .coord_utils import format_coord
from .engine import Side, TurnEngine
from .peer_sync import ConnectionLost, accept_peer, connect_peer, host_listener
from .session import host_session, join_session, start_ai_session
from .targeting import Difficulty

logger = logging.getLogger(__name__)

HELP = "Commands: T <coord> (e.g. T B7), FIRE, CLEAR, QUIT"


# ------------------------------------------------------------
# Rendering
# ------------------------------------------------------------


def render_two_grids(left_rows: list[str], right_rows: list[str], *, header_left: str, header_right: str) -> str:
    """Two boards side by side; columns are lettered, rows numbered from 1."""
    if not left_rows or not right_rows:
        return ""

    columns = len(left_rows[0].split())
    letter_header = "   " + " ".join(f"{chr(ord('A') + i):>2}" for i in range(columns))
    board_width = len(letter_header)

    lines = [
        f"{f'[{header_left}]'.center(board_width)}   {f'[{header_right}]'.center(board_width)}",
        f"{letter_header}   {letter_header}",
    ]
    for idx, (left_row, right_row) in enumerate(zip(left_rows, right_rows)):
        label = idx + 1
        left = " ".join(f"{c:>2}" for c in left_row.split())
        right = " ".join(f"{c:>2}" for c in right_row.split())
        lines.append(f"{label:>2} {left}   {label:>2} {right}")
    return "\n".join(lines)


def render_engine(engine: TurnEngine) -> str:
    """Own fleet on the left, fog view of the opponent on the right, then the score line."""
    fog_rows = engine.fog.rows()
    if engine.selection:
        grid = [row.split() for row in fog_rows]
        for x, y in engine.selection:
            grid[y][x] = "*"
        fog_rows = [" ".join(row) for row in grid]

    score = engine.scoreboard()
    status = (
        f"Turn {score.turn} | your ships {score.local_ships_remaining} | "
        f"enemy ships {score.opponent_ships_remaining} | "
        f"salvo {len(engine.selection)}/{engine.config.shots_per_turn}"
    )
    grids = render_two_grids(
        engine.local_board.rows(reveal=True),
        fog_rows,
        header_left="Your Fleet",
        header_right="Enemy Waters",
    )
    return f"{grids}\n{status}"


def outcome_banner(engine: TurnEngine) -> str:
    if engine.aborted:
        return "Connection to the other player was lost. Game aborted."
    if engine.winner is Side.LOCAL:
        return "Victory! The enemy fleet is destroyed."
    if engine.winner is Side.OPPONENT:
        return "Defeat. Your fleet has been sunk."
    return "Game ended."


# ------------------------------------------------------------
# Interactive loop
# ------------------------------------------------------------


def _handle_line(engine: TurnEngine, line: str) -> None:  # pragma: no cover - interactive
    try:
        cmd = parse_command(line, engine.config.board_size)
    except CommandParseError as exc:
        print(f"ERR {exc}. {HELP}")
        return

    if isinstance(cmd, TargetCommand):
        if not engine.select_target(cmd.x, cmd.y):
            print(f"ERR cannot target {format_coord(cmd.x, cmd.y)}")
    elif isinstance(cmd, ClearCommand):
        engine.clear_selection()
    elif isinstance(cmd, FireCommand):
        if not engine.confirm_salvo():
            print("ERR select at least one target first")
            return
        report = engine.fire()
        if report is not None:
            print(f"You fired: {report.summary()}")
    elif isinstance(cmd, QuitCommand):
        engine.quit()


def play(engine: TurnEngine) -> int:  # pragma: no cover - interactive
    """Run *engine* to completion against stdin; returns the process exit code."""
    try:
        while not engine.over:
            if engine.to_move is Side.OPPONENT:
                print("Waiting for the opponent's salvo…")
                report = engine.play_opponent_turn()
                if report is not None:
                    print(f"Opponent fired: {report.summary()}")
                continue
            print(render_engine(engine))
            print(">> ", end="", flush=True)
            line = sys.stdin.readline()
            if not line:
                engine.quit()
                break
            _handle_line(engine, line)
    except ConnectionLost:
        print(outcome_banner(engine))
        return 1
    except KeyboardInterrupt:
        engine.quit()

    print(render_engine(engine))
    print(outcome_banner(engine))
    engine.opponent.close()
    return 0


# ------------------------------------------------------------
# Entry point
# ------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="salvo", description="Salvo battleship")
    parser.add_argument("--seed", type=int, default=_cfg.SEED, help="Seed for placement and AI targeting")
    sub = parser.add_subparsers(dest="mode", required=True)

    ai = sub.add_parser("ai", help="Play against the computer")
    ai.add_argument("--smart", action="store_true", help="Use the hunting opponent instead of random fire")
    ai.add_argument("--size", type=int, default=None, help="Board size (10-26)")
    ai.add_argument("--shots", type=int, default=None, help="Shots per salvo (1-26)")

    host = sub.add_parser("host", help="Host a game for another player")
    host.add_argument("--bind", default=_cfg.DEFAULT_HOST)
    host.add_argument("--port", type=int, default=_cfg.DEFAULT_PORT)
    host.add_argument("--size", type=int, default=None, help="Board size (10-26)")
    host.add_argument("--shots", type=int, default=None, help="Shots per salvo (1-26)")

    join = sub.add_parser("join", help="Join a hosted game")
    join.add_argument("host")
    join.add_argument("--port", type=int, default=_cfg.DEFAULT_PORT)
    return parser


def main(argv: list[str] | None = None) -> int:  # pragma: no cover - CLI entry
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if _cfg.DEBUG else logging.INFO, format=_cfg.LOG_FORMAT)

    try:
        if args.mode == "ai":
            config = GameConfig.create(args.size, args.shots)
            difficulty = Difficulty.SMART if args.smart else Difficulty.EASY
            engine = start_ai_session(config, difficulty, seed=args.seed)
        elif args.mode == "host":
            config = GameConfig.create(args.size, args.shots)
            listener = host_listener(args.bind, args.port)
            try:
                print(f"Waiting for a player on {args.bind}:{args.port}…")
                conn = accept_peer(listener)
            finally:
                listener.close()
            engine = host_session(conn, config, seed=args.seed)
        else:
            engine = join_session(connect_peer(args.host, args.port), seed=args.seed)
    except ConnectionLost as exc:
        logger.error("could not start game: %s", exc)
        return 1

    print(HELP)
    return play(engine)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
