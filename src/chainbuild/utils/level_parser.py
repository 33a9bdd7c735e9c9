"""Decoder for textual level descriptions.

Layout (blank lines are ignored, every line is stripped)::

    <height> <width>
    <stars> <bombers>
    <height rows of '.' or digits 1-9>
    <queue length>
    <queue tiers separated by whitespace>   (only when the length is not 0)
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from chainbuild.components.level import Level
from chainbuild.constants import MAX_TIER, MIN_TIER
from chainbuild.errors import ParseError

logger = logging.getLogger(__name__)

EMPTY_CELL = "."
# ASCII digits only.
TIER_CHARS = {str(tier): tier for tier in range(MIN_TIER, MAX_TIER + 1)}


def _to_int(token: str) -> int:
    if not token.isascii() or "_" in token:
        raise ValueError(token)
    return int(token)


def _split_ints(line: str, *, expected: int, kind: str, line_number: int, what: str) -> List[int]:
    tokens = line.split()
    if len(tokens) != expected:
        raise ParseError(kind, f"Line {line_number}: expected {expected} values for {what}.", line_number=line_number)
    try:
        values = [_to_int(token) for token in tokens]
    except ValueError:
        raise ParseError(kind, f"Line {line_number}: {what} must be integers.", line_number=line_number) from None
    if any(value < 0 for value in values):
        raise ParseError(kind, f"Line {line_number}: {what} must not be negative.", line_number=line_number)
    return values


def _parse_row(row: str, *, width: int, line_number: int) -> List[Optional[int]]:
    if len(row) != width:
        raise ParseError(
            ParseError.KIND_ROW_LENGTH,
            f"Line {line_number}: expected {width} cells, found {len(row)}.",
            line_number=line_number,
        )
    cells: List[Optional[int]] = []
    for char in row:
        if char == EMPTY_CELL:
            cells.append(None)
        elif char in TIER_CHARS:
            cells.append(TIER_CHARS[char])
        else:
            raise ParseError(
                ParseError.KIND_CELL,
                f"Line {line_number}: invalid cell character {char!r}.",
                line_number=line_number,
            )
    return cells


def _parse_queue(lines: Sequence[str], start: int) -> tuple[int, ...]:
    if start >= len(lines):
        raise ParseError(ParseError.KIND_QUEUE, "Missing build queue length.", line_number=start + 1)
    declared = _split_ints(
        lines[start], expected=1, kind=ParseError.KIND_QUEUE, line_number=start + 1, what="queue length"
    )[0]
    if declared == 0:
        return ()
    if start + 1 >= len(lines):
        raise ParseError(ParseError.KIND_QUEUE, "Missing build queue.", line_number=start + 2)
    tokens = lines[start + 1].split()
    try:
        queue = tuple(_to_int(token) for token in tokens)
    except ValueError:
        raise ParseError(
            ParseError.KIND_QUEUE, f"Line {start + 2}: queue entries must be integers.", line_number=start + 2
        ) from None
    if any(not MIN_TIER <= tier <= MAX_TIER for tier in queue):
        raise ParseError(
            ParseError.KIND_QUEUE,
            f"Line {start + 2}: queue entries must be tiers {MIN_TIER}-{MAX_TIER}.",
            line_number=start + 2,
        )
    if len(queue) != declared:
        logger.warning("Queue declares %d entries but lists %d; using the listed entries", declared, len(queue))
    return queue


def parse_level(raw: str, *, filename: str | None = None) -> Level:
    """Decode ``raw`` into a ``Level``; any structural problem raises ``ParseError``."""

    lines = [line.strip() for line in raw.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        raise ParseError(ParseError.KIND_DIMENSIONS, "The input is empty.", line_number=1)

    height, width = _split_ints(
        lines[0], expected=2, kind=ParseError.KIND_DIMENSIONS, line_number=1, what="board dimensions"
    )
    if height == 0 or width == 0:
        raise ParseError(ParseError.KIND_DIMENSIONS, "Board dimensions must be positive.", line_number=1)
    if len(lines) < 2:
        raise ParseError(ParseError.KIND_INVENTORY, "Missing star and bomber counts.", line_number=2)
    num_stars, num_bombs = _split_ints(
        lines[1], expected=2, kind=ParseError.KIND_INVENTORY, line_number=2, what="star and bomber counts"
    )

    rows = lines[2:2 + height]
    if len(rows) < height:
        raise ParseError(
            ParseError.KIND_ROW_LENGTH,
            f"Expected {height} grid rows, found {len(rows)}.",
            line_number=2 + len(rows) + 1,
        )
    grid = [_parse_row(row, width=width, line_number=3 + index) for index, row in enumerate(rows)]
    queue = _parse_queue(lines, 2 + height)

    return Level(
        width=width,
        height=height,
        num_stars=num_stars,
        num_bombs=num_bombs,
        grid=grid,
        queue=queue,
        filename=filename,
    )


def load_level(path: str | Path) -> Level:
    """Read and decode a level file.

    ``OSError`` propagates for unreadable files; undecodable bytes raise ``ParseError``.
    """

    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as handle:
            raw = handle.read()
    except UnicodeDecodeError as exc:
        raise ParseError(
            ParseError.KIND_ENCODING,
            f"Input file is not valid UTF-8 (byte {exc.start}).",
        ) from exc
    return parse_level(raw, filename=path.name)
