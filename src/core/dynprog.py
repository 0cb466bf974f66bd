# src/core/dynprog.py
#!/usr/bin/env python3
"""
Dynamic-programming crane unloading: one table cell per step() for animation.

A[r][c] holds the best path ending at (r, c), or None when no path reaches it.
Each cell only depends on its north and west neighbours, so filling the table
in row-major order is enough. Equal totals prefer the path from above (SOUTH).
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from src.core.errors import UnreachableError
from src.core.types import StepResult, Grid, Path, StepDirection

log = logging.getLogger(__name__)


@dataclass
class DynProgAlgo:
    name: str = "Dynamic programming"

    grid: Optional[Grid] = None
    table: List[List[Optional[Path]]] = field(default_factory=list)
    cursor: int = 0           # row-major index of the next cell to fill
    filled_count: int = 0
    done: bool = False
    no_path: bool = False
    reason: str = ""

    def init(self, grid: Grid) -> None:
        self.grid = grid
        self.reset()

    def reset(self) -> None:
        if self.grid is None:
            return
        self.table = [[None] * self.grid.columns for _ in range(self.grid.rows)]
        self.filled_count = 0
        self.done = False
        self.no_path = False
        self.reason = ""

        if self.grid.is_building(0, 0):
            self.no_path = True
            self.reason = "origin (0, 0) is a building"
            self.cursor = 0
            return

        self.table[0][0] = Path(self.grid)
        self.filled_count = 1
        self.cursor = 1

    def _best_into(self, r: int, c: int) -> Optional[Path]:
        from_above = self.table[r - 1][c] if r > 0 else None
        from_left = self.table[r][c - 1] if c > 0 else None

        if from_above is not None and from_left is not None:
            if from_above.total_cranes() < from_left.total_cranes():
                best, direction = from_left, StepDirection.EAST
            else:
                best, direction = from_above, StepDirection.SOUTH
        elif from_above is not None:
            best, direction = from_above, StepDirection.SOUTH
        elif from_left is not None:
            best, direction = from_left, StepDirection.EAST
        else:
            return None

        path = best.copy()
        path.add_step(direction)
        return path

    @property
    def answer(self) -> Optional[Path]:
        if self.grid is None or not self.table:
            return None
        return self.table[-1][-1]

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if self.done:
            return StepResult(status="done", path=self.answer, metrics=self._metrics())

        total = self.grid.rows * self.grid.columns
        if self.cursor >= total:
            return self._finish()

        r, c = divmod(self.cursor, self.grid.columns)
        self.cursor += 1

        if self.grid.is_building(r, c):
            res = StepResult(status="running", blocked=[(r, c)], current=(r, c))
        else:
            path = self._best_into(r, c)
            self.table[r][c] = path
            if path is None:
                res = StepResult(status="running", blocked=[(r, c)], current=(r, c))
            else:
                self.filled_count += 1
                res = StepResult(status="running", reached=[(r, c)], current=(r, c),
                                 path=path)

        if self.cursor >= total:
            final = self._finish()
            final.reached, final.blocked, final.current = res.reached, res.blocked, res.current
            return final
        res.metrics = self._metrics()
        return res

    def _finish(self) -> StepResult:
        if self.answer is None:
            self.no_path = True
            self.reason = f"destination {self.grid.destination} is unreachable"
            log.debug("dynprog: %s", self.reason)
            return StepResult(status="no_path", metrics=self._metrics())
        self.done = True
        log.debug("dynprog: %d cells reached, best %r", self.filled_count, self.answer)
        return StepResult(status="done", path=self.answer, metrics=self._metrics())

    def run(self) -> StepResult:
        res = self.step()
        while res.status == "running":
            res = self.step()
        return res

    def _metrics(self) -> dict:
        answer = self.answer if self.done else None
        return {
            "algo": self.name,
            "work": min(self.cursor, self.grid.rows * self.grid.columns),
            "work_total": self.grid.rows * self.grid.columns,
            "path_len": len(answer) if answer else 0,
            "total_cranes": answer.total_cranes() if answer else None,
        }


def solve_dynprog(grid: Grid) -> Path:
    """Optimal path to the destination; raises UnreachableError if there is none."""
    algo = DynProgAlgo()
    algo.init(grid)
    res = algo.run()
    if res.status != "done":
        raise UnreachableError(algo.reason)
    return res.path
