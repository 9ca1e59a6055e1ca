from salvo.board import Outcome
from salvo.fog import FogBoard, FogCell


def test_record_miss_and_hit() -> None:
    fog = FogBoard(10)
    assert fog.record(1, 1, Outcome.MISS) == [(1, 1)]
    assert fog.record(2, 2, Outcome.HIT) == [(2, 2)]
    assert fog.cell(1, 1) is FogCell.MISS
    assert fog.cell(2, 2) is FogCell.HIT
    assert not fog.is_revealed(0, 0)


def test_sunk_with_known_cells() -> None:
    fog = FogBoard(10)
    fog.record(4, 4, Outcome.HIT)
    changed = fog.record(4, 5, Outcome.SUNK, sunk_cells=[(4, 4), (4, 5)])
    assert sorted(changed) == [(4, 4), (4, 5)]
    assert fog.count(FogCell.SUNK) == 2
    assert fog.count(FogCell.HIT) == 0


def test_sunk_flood_fills_connected_hits() -> None:
    fog = FogBoard(10)
    fog.record(3, 3, Outcome.HIT)
    fog.record(4, 3, Outcome.HIT)
    fog.record(8, 8, Outcome.HIT)  # separate, must stay a hit
    fog.record(2, 3, Outcome.MISS)
    changed = fog.record(5, 3, Outcome.SUNK)
    assert sorted(changed) == [(3, 3), (4, 3), (5, 3)]
    assert fog.cell(8, 8) is FogCell.HIT
    assert fog.cell(2, 3) is FogCell.MISS


def test_rows_render_glyphs() -> None:
    fog = FogBoard(10)
    fog.record(0, 0, Outcome.MISS)
    fog.record(1, 0, Outcome.SUNK)
    assert fog.rows()[0].split()[:3] == ["o", "#", "."]
