# src/core/exhaustive.py
#!/usr/bin/env python3
"""
Exhaustive crane unloading: one candidate step sequence per step() for animation.

Every monotone path to the destination is exactly rows + columns - 2 steps, so
each integer in [0, 2**total_moves) encodes one candidate: bit k set means
SOUTH at step k, clear means EAST. A candidate is replayed until its first
invalid step; whatever prefix survives is scored.

A candidate that reaches the destination always beats one that does not;
otherwise more cranes win. So the result only stops short of the destination
when no complete path exists (best effort). Ties keep the lowest-numbered
candidate.

This ranking departs from a plain "more cranes wins" comparison: on a grid
with a crane-rich dead end, e.g. [[0, 9, X], [0, X, 0], [0, 0, 0]], ranking by
total alone would return the dead end (9) over the only complete path (0),
and the result would disagree with the dynamic-programming solver.
"""

import logging
from dataclasses import dataclass
from typing import Optional, List

from src.core.errors import GridTooLargeError
from src.core.types import StepResult, Grid, Path, StepDirection, Coord

log = logging.getLogger(__name__)

# 1 << total_moves has to fit a signed 64-bit integer
MAX_EXHAUSTIVE_MOVES = 62


def decode_candidate(bits: int, total_moves: int) -> List[StepDirection]:
    return [StepDirection.SOUTH if bits & (1 << k) else StepDirection.EAST
            for k in range(total_moves)]


def is_better(candidate: Path, best: Path) -> bool:
    if candidate.reaches_destination() != best.reaches_destination():
        return candidate.reaches_destination()
    return candidate.total_cranes() > best.total_cranes()


@dataclass
class ExhaustiveAlgo:
    name: str = "Exhaustive"

    grid: Optional[Grid] = None
    total_moves: int = 0
    candidate: int = 0
    best: Optional[Path] = None
    done: bool = False

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid) -> None:
        total_moves = grid.rows + grid.columns - 2
        if total_moves > MAX_EXHAUSTIVE_MOVES:
            raise GridTooLargeError(
                f"{grid.rows}x{grid.columns} grid needs {total_moves} moves; "
                f"exhaustive search supports at most {MAX_EXHAUSTIVE_MOVES}")
        self.grid = grid
        self.total_moves = total_moves
        self.reset()

    def reset(self) -> None:
        if self.grid is None:
            return
        self.candidate = 0
        self.best = Path(self.grid)
        self.done = False

    @property
    def candidate_count(self) -> int:
        return 1 << self.total_moves

    # -------------------- stepping --------------------

    def _replay(self, bits: int) -> Path:
        path = Path(self.grid)
        for direction in decode_candidate(bits, self.total_moves):
            if not path.is_step_valid(direction):
                break
            path.add_step(direction)
        return path

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            return StepResult(status="done", path=self.best, metrics=self._metrics())

        path = self._replay(self.candidate)
        self.candidate += 1
        if is_better(path, self.best):
            self.best = path

        covered = path.positions()
        blocked: List[Coord] = []
        if len(path) < self.total_moves:
            # the step that ended this candidate, when it lands inside the grid
            d = decode_candidate(self.candidate - 1, self.total_moves)[len(path)]
            r, c = path.row + d.delta[0], path.col + d.delta[1]
            if self.grid.in_bounds(r, c):
                blocked.append((r, c))

        if self.candidate >= self.candidate_count:
            self.done = True
            log.debug("exhaustive: %d candidates, best %r", self.candidate, self.best)
            return StepResult(status="done", reached=covered, blocked=blocked,
                              current=path.position, path=self.best,
                              metrics=self._metrics())

        return StepResult(status="running", reached=covered, blocked=blocked,
                          current=path.position, path=self.best,
                          metrics=self._metrics())

    def run(self) -> StepResult:
        res = self.step()
        while res.status == "running":
            res = self.step()
        return res

    # -------------------- metrics --------------------

    def _metrics(self) -> dict:
        return {
            "algo": self.name,
            "work": self.candidate,
            "work_total": self.candidate_count,
            "path_len": len(self.best) if self.best else 0,
            "total_cranes": self.best.total_cranes() if self.best else None,
        }


def solve_exhaustive(grid: Grid) -> Path:
    """Best path over all 2**(rows+columns-2) step sequences."""
    algo = ExhaustiveAlgo()
    algo.init(grid)
    return algo.run().path
