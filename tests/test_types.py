#!/usr/bin/env python3
"""
Grid / Path data model tests
"""

import pytest

from src.core.errors import InvalidGridError, InvalidStepError
from src.core.types import Grid, Path, StepDirection, CELL_BUILDING

X = CELL_BUILDING
E = StepDirection.EAST
S = StepDirection.SOUTH


class TestGrid:

    def test_dimensions_and_access(self, obstacle_grid):
        assert (obstacle_grid.rows, obstacle_grid.columns) == (3, 3)
        assert obstacle_grid.get(0, 2) == 3
        assert obstacle_grid.get(1, 1) == X
        assert obstacle_grid.is_building(1, 1)
        assert obstacle_grid.cranes_at(1, 1) == 0
        assert obstacle_grid.destination == (2, 2)

    def test_in_bounds(self, obstacle_grid):
        assert obstacle_grid.in_bounds(2, 2)
        assert not obstacle_grid.in_bounds(3, 0)
        assert not obstacle_grid.in_bounds(0, -1)

    @pytest.mark.parametrize("rows", [[], [[]]])
    def test_empty_grid_rejected(self, rows):
        with pytest.raises(InvalidGridError):
            Grid.from_rows(rows)

    def test_ragged_grid_rejected(self):
        with pytest.raises(InvalidGridError):
            Grid.from_rows([[1, 2], [3]])

    @pytest.mark.parametrize("bad", [-1, 1.5, "7", True, None])
    def test_bad_cell_rejected(self, bad):
        with pytest.raises(InvalidGridError):
            Grid.from_rows([[0, bad]])

    def test_grid_is_frozen(self, obstacle_grid):
        with pytest.raises(AttributeError):
            obstacle_grid.rows = 5


class TestPath:

    def test_fresh_path_counts_origin(self, obstacle_grid):
        p = Path(obstacle_grid)
        assert p.position == (0, 0)
        assert p.steps == []
        assert p.total_cranes() == 1

    def test_fresh_path_on_building_origin_is_zero(self):
        p = Path(Grid.from_rows([[X, 4]]))
        assert p.total_cranes() == 0

    def test_step_validity(self, obstacle_grid):
        p = Path(obstacle_grid)
        p.add_step(E)
        assert not p.is_step_valid(S)      # building at (1, 1)
        assert p.is_step_valid(E)
        p.add_step(E)
        assert not p.is_step_valid(E)      # off the east edge

    def test_add_step_accumulates(self, obstacle_grid):
        p = Path(obstacle_grid)
        for d in (S, S, E, E):
            p.add_step(d)
        assert p.position == (2, 2)
        assert p.total_cranes() == 1 + 4 + 6 + 7 + 8
        assert p.positions() == [(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)]
        assert p.reaches_destination()

    def test_invalid_step_raises(self, obstacle_grid):
        p = Path(obstacle_grid)
        p.add_step(S)
        with pytest.raises(InvalidStepError):
            p.add_step(E)
        assert p.position == (1, 0)
        assert p.total_cranes() == 5

    def test_copy_is_independent(self, obstacle_grid):
        a = Path(obstacle_grid)
        a.add_step(E)
        b = a.copy()
        b.add_step(E)
        assert a.steps == [E]
        assert a.total_cranes() == 3
        assert b.steps == [E, E]
        assert b.total_cranes() == 6
        assert b.grid is a.grid

    def test_equality_and_repr(self, obstacle_grid):
        a, b = Path(obstacle_grid), Path(obstacle_grid)
        a.add_step(S); b.add_step(S)
        assert a == b
        assert repr(a) == "Path(steps='S', end=(1, 0), cranes=5)"
