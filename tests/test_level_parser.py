import logging

import pytest

from chainbuild.errors import ParseError
from chainbuild.utils.level_parser import load_level, parse_level


def test_parse_reference_level():
    level = parse_level("3 3\n0 0\n1.1\n.1.\n1.1\n0\n")
    assert (level.height, level.width) == (3, 3)
    assert (level.num_stars, level.num_bombs) == (0, 0)
    assert level.grid == [
        [1, None, 1],
        [None, 1, None],
        [1, None, 1],
    ]
    assert level.queue == ()


def test_parse_queue_and_ignore_blank_lines_and_padding():
    raw = "\r\n2 3\r\n  1 2 \r\n\r\n9..\r\n.5.\r\n4\r\n1 2  3 1\r\n"
    level = parse_level(raw, filename="level.in")
    assert (level.height, level.width) == (2, 3)
    assert (level.num_stars, level.num_bombs) == (1, 2)
    assert level.grid == [[9, None, None], [None, 5, None]]
    assert level.queue == (1, 2, 3, 1)
    assert level.filename == "level.in"


@pytest.mark.parametrize(
    "raw, kind",
    [
        ("", ParseError.KIND_DIMENSIONS),
        ("3\n0 0\n", ParseError.KIND_DIMENSIONS),
        ("a b\n0 0\n", ParseError.KIND_DIMENSIONS),
        ("0 3\n0 0\n0\n", ParseError.KIND_DIMENSIONS),
        ("1 1\n", ParseError.KIND_INVENTORY),
        ("1 1\n-1 0\n.\n0\n", ParseError.KIND_INVENTORY),
        ("2 2\n0 0\n..\n.\n0\n", ParseError.KIND_ROW_LENGTH),
        ("2 2\n0 0\n..\n", ParseError.KIND_ROW_LENGTH),
        ("1 2\n0 0\n.x\n0\n", ParseError.KIND_CELL),
        ("1 2\n0 0\n.0\n0\n", ParseError.KIND_CELL),
        ("1 2\n0 0\n\u00b2.\n0\n", ParseError.KIND_CELL),
        ("1 2\n0 0\n\u0663.\n0\n", ParseError.KIND_CELL),
        ("1 1\n\u0663 0\n.\n0\n", ParseError.KIND_INVENTORY),
        ("1 1\n0 0\n.\n1\n\u0663\n", ParseError.KIND_QUEUE),
        ("1_0 1\n0 0\n.\n0\n", ParseError.KIND_DIMENSIONS),
        ("1 1\n0 0\n.\n", ParseError.KIND_QUEUE),
        ("1 1\n0 0\n.\n2\n", ParseError.KIND_QUEUE),
        ("1 1\n0 0\n.\n2\n1 z\n", ParseError.KIND_QUEUE),
        ("1 1\n0 0\n.\n1\n10\n", ParseError.KIND_QUEUE),
    ],
)
def test_parse_errors_report_kind(raw, kind):
    with pytest.raises(ParseError) as info:
        parse_level(raw)
    assert info.value.kind == kind
    assert info.value.message


def test_mismatched_queue_length_is_tolerated(caplog):
    with caplog.at_level(logging.WARNING, logger="chainbuild.utils.level_parser"):
        level = parse_level("1 1\n0 0\n.\n5\n1 2\n")
    assert level.queue == (1, 2)
    assert "Queue declares 5 entries" in caplog.text


def test_load_level_reads_file(tmp_path):
    path = tmp_path / "sample.in"
    path.write_text("1 2\n1 0\n.3\n1\n2\n", encoding="utf-8")
    level = load_level(path)
    assert level.filename == "sample.in"
    assert level.grid == [[None, 3]]
    assert level.queue == (2,)


def test_load_level_missing_file_raises_oserror(tmp_path):
    with pytest.raises(OSError):
        load_level(tmp_path / "missing.in")


def test_load_level_rejects_invalid_utf8(tmp_path):
    path = tmp_path / "bad.in"
    path.write_bytes(b"1 1\n0 0\n\xff\n0\n")
    with pytest.raises(ParseError) as info:
        load_level(path)
    assert info.value.kind == ParseError.KIND_ENCODING
