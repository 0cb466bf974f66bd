#!/usr/bin/env python3
"""
Map loading, text parsing, random docks and rendering
"""

import json
import pytest

from src.core.dynprog import solve_dynprog
from src.core.errors import InvalidGridError
from src.core.grid_io import (
    load_map, parse_grid, random_grid, render_grid, describe_path, grid_to_data,
)
from src.core.types import Path, CELL_BUILDING

X = CELL_BUILDING


class TestLoadMap:

    def test_bundled_maps_load(self, maps_dir):
        for f in sorted(maps_dir.glob("*.json")):
            grid = load_map(f)
            assert grid.rows >= 1 and grid.columns >= 1

    def test_small_dock_matches_fixture(self, maps_dir, obstacle_grid):
        assert load_map(maps_dir / "01_small_dock.json") == obstacle_grid

    def test_round_trip_through_json(self, tmp_path, open_grid):
        f = tmp_path / "dock.json"
        f.write_text(json.dumps(grid_to_data(open_grid)))
        assert load_map(f) == open_grid

    @pytest.mark.parametrize("data", [
        {"rows": 2, "columns": 2, "cells": [[1, 2]]},
        {"rows": 1, "columns": 2, "cells": [[1, "Q"]]},
        {"rows": 1, "columns": 1, "cells": [[-3]]},
        {"rows": 1, "columns": 1},
        {"rows": 1, "columns": 1, "cells": "1"},
    ])
    def test_malformed_maps(self, tmp_path, data):
        f = tmp_path / "bad.json"
        f.write_text(json.dumps(data))
        with pytest.raises(InvalidGridError):
            load_map(f)

    def test_invalid_utf8(self, tmp_path):
        f = tmp_path / "bad.json"
        f.write_bytes(b'{"rows": 1, "columns": 1, "cells": [[1]]}\xff')
        with pytest.raises(InvalidGridError):
            load_map(f)

    def test_superscript_cell_string(self, tmp_path):
        f = tmp_path / "bad.json"
        f.write_text(json.dumps({"rows": 1, "columns": 1, "cells": [["²"]]}))
        with pytest.raises(InvalidGridError):
            load_map(f)

    def test_not_json(self, tmp_path):
        f = tmp_path / "bad.json"
        f.write_text("rows: 3")
        with pytest.raises(InvalidGridError):
            load_map(f)


class TestParseGrid:

    def test_tokens(self):
        grid = parse_grid("""
            1 . x
            12 X 0
        """)
        assert grid.cells == ((1, 0, X), (12, X, 0))

    @pytest.mark.parametrize("token", ["²", "٣", "3.5", "-1"])
    def test_non_ascii_or_non_integer_token(self, token):
        with pytest.raises(InvalidGridError):
            parse_grid(f"1 {token}")

    def test_empty_text(self):
        with pytest.raises(InvalidGridError):
            parse_grid("   \n\n")

    def test_ragged_text(self):
        with pytest.raises(InvalidGridError):
            parse_grid("1 2\n3")


class TestRandomGrid:

    def test_seeded_is_reproducible(self):
        assert random_grid(4, 5, seed=11) == random_grid(4, 5, seed=11)

    def test_origin_never_building(self):
        for seed in range(20):
            grid = random_grid(3, 3, building_chance=1.0, seed=seed)
            assert not grid.is_building(0, 0)
            assert all(grid.is_building(r, c)
                       for r in range(3) for c in range(3) if (r, c) != (0, 0))

    def test_counts_within_range(self):
        grid = random_grid(6, 6, building_chance=0.0, max_cranes=3, seed=2)
        assert all(0 <= v <= 3 for row in grid.cells for v in row)


class TestRender:

    def test_render_with_path(self, obstacle_grid):
        out = render_grid(obstacle_grid, solve_dynprog(obstacle_grid))
        assert out.splitlines() == [
            "[1] 2  3",
            "[4] X  5",
            "[6][7][8]",
        ]

    def test_render_pads_wide_counts(self):
        out = render_grid(parse_grid("10 X\n1 2"))
        assert out.splitlines() == [" 10   X", "  1   2"]

    def test_describe(self, obstacle_grid, blocked_grid):
        assert describe_path(solve_dynprog(obstacle_grid)) == \
            "start (0, 0), steps SSEE, end (2, 2), 26 cranes"
        assert describe_path(Path(blocked_grid)) == \
            "start (0, 0), steps -, end (0, 0), 1 cranes (does not reach destination)"
