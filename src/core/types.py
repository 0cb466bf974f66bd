# src/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any, Sequence, Union

from src.core.errors import InvalidGridError, InvalidStepError

Coord = Tuple[int, int]  # (row, col)

CELL_BUILDING = "X"
CellValue = Union[int, str]  # crane count, or CELL_BUILDING


class StepDirection(Enum):
    EAST = (0, 1)
    SOUTH = (1, 0)

    @property
    def delta(self) -> Coord:
        return self.value

    @property
    def letter(self) -> str:
        return self.name[0]


@dataclass(frozen=True)
class Grid:
    rows: int
    columns: int
    cells: Tuple[Tuple[CellValue, ...], ...]  # [row][col]

    def __post_init__(self):
        if self.rows < 1 or self.columns < 1:
            raise InvalidGridError(f"grid must be non-empty, got {self.rows}x{self.columns}")
        cells = tuple(tuple(r) for r in self.cells)
        if len(cells) != self.rows or any(len(r) != self.columns for r in cells):
            raise InvalidGridError("cells size mismatch")
        for r, row in enumerate(cells):
            for c, v in enumerate(row):
                if v == CELL_BUILDING:
                    continue
                if isinstance(v, bool) or not isinstance(v, int) or v < 0:
                    raise InvalidGridError(f"bad cell value {v!r} at ({r}, {c})")
        object.__setattr__(self, "cells", cells)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[CellValue]]) -> "Grid":
        rows = [list(r) for r in rows]
        return cls(len(rows), len(rows[0]) if rows else 0, tuple(tuple(r) for r in rows))

    @property
    def origin(self) -> Coord:
        return (0, 0)

    @property
    def destination(self) -> Coord:
        return (self.rows - 1, self.columns - 1)

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.rows and 0 <= c < self.columns

    def get(self, r: int, c: int) -> CellValue:
        return self.cells[r][c]

    def is_building(self, r: int, c: int) -> bool:
        return self.cells[r][c] == CELL_BUILDING

    def cranes_at(self, r: int, c: int) -> int:
        v = self.cells[r][c]
        return 0 if v == CELL_BUILDING else v


class Path:
    """
    Monotone walk over a grid, built one EAST/SOUTH step at a time.

    Starts at the origin with the origin's cranes already counted. The grid is
    shared between copies; steps, position and total are not.
    """

    def __init__(self, grid: Grid):
        self.grid = grid
        self.row, self.col = grid.origin
        self.steps: List[StepDirection] = []
        self._total = grid.cranes_at(self.row, self.col)

    @property
    def position(self) -> Coord:
        return (self.row, self.col)

    def total_cranes(self) -> int:
        return self._total

    def is_step_valid(self, direction: StepDirection) -> bool:
        dr, dc = direction.delta
        r, c = self.row + dr, self.col + dc
        return self.grid.in_bounds(r, c) and not self.grid.is_building(r, c)

    def add_step(self, direction: StepDirection) -> None:
        if not self.is_step_valid(direction):
            raise InvalidStepError(f"cannot step {direction.name} from {self.position}")
        dr, dc = direction.delta
        self.row += dr
        self.col += dc
        self.steps.append(direction)
        self._total += self.grid.cranes_at(self.row, self.col)

    def copy(self) -> "Path":
        other = Path.__new__(Path)
        other.grid = self.grid
        other.row, other.col = self.row, self.col
        other.steps = list(self.steps)
        other._total = self._total
        return other

    def positions(self) -> List[Coord]:
        r, c = self.grid.origin
        out: List[Coord] = [(r, c)]
        for d in self.steps:
            dr, dc = d.delta
            r, c = r + dr, c + dc
            out.append((r, c))
        return out

    def reaches_destination(self) -> bool:
        return self.position == self.grid.destination

    def __len__(self) -> int:
        return len(self.steps)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return (self.grid == other.grid and self.steps == other.steps
                and self._total == other._total)

    def __repr__(self) -> str:
        letters = "".join(d.letter for d in self.steps)
        return f"Path(steps={letters!r}, end={self.position}, cranes={self._total})"


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    reached: List[Coord] = field(default_factory=list)
    blocked: List[Coord] = field(default_factory=list)
    current: Optional[Coord] = None
    path: Optional[Path] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
