from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Iterable, Iterator, Tuple

from chainbuild.components.grid import Grid
from chainbuild.constants import COMMAND_TOOLS, OUTPUT_TERMINATOR
from chainbuild.errors import CommandError

# Signed decimal numbers only; no underscores or exponents.
_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)", re.ASCII)


@dataclass(frozen=True, slots=True)
class Command:
    """A parsed command line; x and y are 0-based."""
    tool: str
    x: int
    y: int
    line_number: int = 0


def _parse_coordinate(token: str) -> int:
    if not _NUMBER.fullmatch(token):
        raise CommandError("All params should be integers.")
    value = float(token)
    if not value.is_integer():
        raise CommandError("All params should be integers.")
    return int(value) - 1


def parse_command_line(line: str, grid: Grid, *, line_number: int = 0) -> Command:
    """Parse one ``PUT|STAR|BOMBER x y`` line against ``grid``."""

    keyword, *params = line.split()
    tool = COMMAND_TOOLS.get(keyword.lower())
    if tool is None:
        raise CommandError(f"Unknown command '{keyword}'.")
    if len(params) != 2:
        raise CommandError("There should be exactly 2 params for this command.")
    x, y = (_parse_coordinate(param) for param in params)
    if not grid.in_bounds(x, y):
        raise CommandError("Coordinates out of range.")
    return Command(tool=tool, x=x, y=y, line_number=line_number)


def iter_command_lines(text: str) -> Iterator[Tuple[int, str]]:
    """Yield (1-based line number, stripped line) for every non-blank line."""

    for line_number, line in enumerate(text.split("\n"), start=1):
        line = line.strip()
        if line:
            yield line_number, line


def format_output(commands: Iterable[str], *, terminate: bool = True) -> str:
    """Join exported commands one per line; saved files end with ``END``."""

    lines = list(commands)
    if terminate:
        lines.append(OUTPUT_TERMINATOR)
    lines.append("")
    return "\n".join(lines)


def output_filename(level_filename: str | None, default: str = "output.out") -> str:
    """Derive the save name from the level name: ``level.in`` -> ``level.out``."""

    if not level_filename:
        return default
    name = PurePath(level_filename).name
    if ".in" in name:
        return name.replace(".in", ".out", 1)
    return f"{name}.out"
