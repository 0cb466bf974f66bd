#!/usr/bin/env python3
"""
pytest configuration: repo root on sys.path, shared dock grids.
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.types import Grid, CELL_BUILDING

X = CELL_BUILDING


@pytest.fixture(scope="session")
def project_root():
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def maps_dir(project_root):
    return project_root / "maps"


@pytest.fixture
def obstacle_grid():
    """3x3 with a building in the middle; best route goes down then right for 26."""
    return Grid.from_rows([
        [1, 2, 3],
        [4, X, 5],
        [6, 7, 8],
    ])


@pytest.fixture
def blocked_grid():
    """Both neighbours of the origin are buildings."""
    return Grid.from_rows([
        [1, X],
        [X, 1],
    ])


@pytest.fixture
def open_grid():
    return Grid.from_rows([
        [0, 3, 1, 0],
        [2, 0, 0, 4],
        [1, 5, 0, 1],
    ])
