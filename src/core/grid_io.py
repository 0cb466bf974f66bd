# src/core/grid_io.py
#!/usr/bin/env python3
"""
Getting docks in and out of text: JSON map files, plain-text grids, seeded
random docks, and a printable rendering of a grid with a path on it.

Map file format:
    {"rows": 3, "columns": 3, "cells": [[1, 2, 3], [4, "X", 5], [6, 7, 8]]}
"X" is a building, integers are crane counts.
"""

import json
import random
from pathlib import Path as FsPath
from typing import List, Optional, Union

from src.core.errors import InvalidGridError
from src.core.types import Grid, Path, CELL_BUILDING, CellValue


def _cell_from_token(token, where: str) -> CellValue:
    if isinstance(token, str):
        t = token.strip()
        if t.upper() == CELL_BUILDING:
            return CELL_BUILDING
        if t == ".":
            return 0
        if t.isascii() and t.isdigit():
            return int(t)
        raise InvalidGridError(f"bad cell {token!r} at {where}")
    if isinstance(token, int) and not isinstance(token, bool) and token >= 0:
        return token
    raise InvalidGridError(f"bad cell {token!r} at {where}")


def grid_from_data(data: dict) -> Grid:
    try:
        rows = int(data["rows"])
        columns = int(data["columns"])
        raw = data["cells"]
    except (KeyError, TypeError, ValueError) as ex:
        raise InvalidGridError(f"malformed map: {ex}") from ex
    if not isinstance(raw, list) or not all(isinstance(r, list) for r in raw):
        raise InvalidGridError("cells must be a list of rows")
    if len(raw) != rows or any(len(r) != columns for r in raw):
        raise InvalidGridError("cells size mismatch")
    cells = tuple(
        tuple(_cell_from_token(v, f"({r}, {c})") for c, v in enumerate(row))
        for r, row in enumerate(raw)
    )
    return Grid(rows, columns, cells)


def load_map(path: Union[str, FsPath]) -> Grid:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as ex:
            raise InvalidGridError(f"{path}: not valid JSON ({ex})") from ex
    return grid_from_data(data)


def grid_to_data(grid: Grid) -> dict:
    return {"rows": grid.rows, "columns": grid.columns,
            "cells": [list(row) for row in grid.cells]}


def parse_grid(text: str) -> Grid:
    """Whitespace-separated tokens, one row per line: 'X' building, '.' empty, N cranes."""
    rows: List[List[CellValue]] = []
    for line in text.splitlines():
        tokens = line.split()
        if not tokens:
            continue
        r = len(rows)
        rows.append([_cell_from_token(t, f"({r}, {c})") for c, t in enumerate(tokens)])
    if not rows:
        raise InvalidGridError("grid text is empty")
    if any(len(r) != len(rows[0]) for r in rows):
        raise InvalidGridError("rows have different lengths")
    return Grid.from_rows(rows)


def random_grid(rows: int, columns: int, *, building_chance: float = 0.2,
                max_cranes: int = 5, seed: Optional[int] = None) -> Grid:
    rng = random.Random(seed)
    cells = []
    for r in range(rows):
        row: List[CellValue] = []
        for c in range(columns):
            if (r, c) != (0, 0) and rng.random() < building_chance:
                row.append(CELL_BUILDING)
            else:
                row.append(rng.randint(0, max_cranes))
        cells.append(row)
    return Grid(rows, columns, tuple(tuple(r) for r in cells))


def render_grid(grid: Grid, path: Optional[Path] = None) -> str:
    on_path = set(path.positions()) if path is not None else set()
    width = max(len(str(v)) for row in grid.cells for v in row)
    lines = []
    for r in range(grid.rows):
        tokens = []
        for c in range(grid.columns):
            s = str(grid.get(r, c)).rjust(width)
            tokens.append(f"[{s}]" if (r, c) in on_path else f" {s} ")
        lines.append("".join(tokens).rstrip())
    return "\n".join(lines)


def describe_path(path: Path) -> str:
    letters = "".join(d.letter for d in path.steps) or "-"
    end = path.position
    suffix = "" if path.reaches_destination() else " (does not reach destination)"
    return (f"start (0, 0), steps {letters}, end ({end[0]}, {end[1]}), "
            f"{path.total_cranes()} cranes{suffix}")
