import pytest

from salvo.coord_utils import coord_to_xy, format_coord, parse_coord


def test_letter_is_column_number_is_row() -> None:
    assert coord_to_xy("C10") == (2, 9)
    assert format_coord(2, 9) == "C10"


@pytest.mark.parametrize("size,text,expected", [(10, "j10", (9, 9)), (12, "L12", (11, 11)), (10, " b3 ", (1, 2))])
def test_parse_valid(size, text, expected) -> None:
    assert parse_coord(text, size) == expected


@pytest.mark.parametrize("size,text", [(10, "K1"), (10, "A11"), (12, "A13"), (26, "Z27"), (10, ""), (10, "A01")])
def test_parse_rejects_off_board(size, text) -> None:
    assert parse_coord(text, size) is None
