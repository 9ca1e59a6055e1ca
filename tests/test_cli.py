import random

from salvo.board import Board, Orientation
from salvo.cli import build_parser, outcome_banner, render_engine, render_two_grids
from salvo.config import GameConfig
from salvo.engine import Side, TurnEngine
from salvo.opponent import AIOpponent
from salvo.placement import place
from salvo.targeting import Difficulty


def _engine() -> TurnEngine:
    local = Board(10)
    place(local, 0, 0, Orientation.HORIZONTAL, 2, "A")
    enemy = Board(10)
    place(enemy, 3, 3, Orientation.HORIZONTAL, 1, "A")
    opponent = AIOpponent(10, Difficulty.EASY, rng=random.Random(0), board=enemy)
    return TurnEngine(GameConfig(10, 5), local, opponent)


def test_two_grids_headers_and_labels():
    rows = [" ".join("." * 10)] * 10
    text = render_two_grids(rows, rows, header_left="L", header_right="R").splitlines()
    assert "[L]" in text[0] and "[R]" in text[0]
    assert text[1].split()[:3] == ["A", "B", "C"]
    assert text[2].split()[0] == "1"
    assert text[-1].split()[0] == "10"
    assert len(text) == 12


def test_render_marks_selection_and_own_ships():
    engine = _engine()
    engine.select_target(4, 0)
    lines = render_engine(engine).splitlines()
    first_row = lines[2].split()
    # own fleet: label + 10 squares, then fog: label + 10 squares
    assert first_row[1:3] == ["A", "A"]
    assert first_row[12 + 4] == "*"
    assert "salvo 1/5" in lines[-1]


def test_outcome_banner():
    engine = _engine()
    engine.select_target(3, 3)
    engine.confirm_salvo()
    engine.fire()
    assert engine.winner is Side.LOCAL
    assert "Victory" in outcome_banner(engine)


def test_parser_modes():
    parser = build_parser()
    args = parser.parse_args(["ai", "--smart", "--size", "12"])
    assert (args.mode, args.smart, args.size, args.shots) == ("ai", True, 12, None)
    args = parser.parse_args(["join", "10.0.0.2", "--port", "4000"])
    assert (args.mode, args.host, args.port) == ("join", "10.0.0.2", 4000)
