"""Puzzle parser: convert Binero puzzle text into a Grid.

Format:
- one grid row per line, tokens `0`, `1`, `-` (blank)
- whitespace between tokens is ignored
- blank lines and lines starting with `#` are skipped
"""

from typing import Iterable, List

from .errors import GridFormatError
from .model import Cell, Grid


def parse_lines(lines: Iterable[str]) -> Grid:
    rows: List[List[Cell]] = []
    width = 0

    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        row = [Cell.from_char(c, line=line_no) for c in line if not c.isspace()]
        if not rows:
            if len(row) % 2 != 0:
                raise GridFormatError(f"odd row width {len(row)}", line=line_no)
            width = len(row)
        elif len(row) != width:
            raise GridFormatError(
                f"row has {len(row)} cells, expected {width}", line=line_no
            )
        rows.append(row)

    if not rows:
        raise GridFormatError("empty grid")
    if len(rows) % 2 != 0:
        raise GridFormatError(f"odd number of rows ({len(rows)})")
    if len(rows) != width:
        raise GridFormatError(f"grid is {len(rows)}x{width}, expected a square grid")

    return Grid(size=width, cells=rows)


def parse_grid(text: str) -> Grid:
    return parse_lines(text.splitlines())
