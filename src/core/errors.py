# src/core/errors.py
#!/usr/bin/env python3


class CraneError(Exception):
    """Base class for everything the crane solvers raise."""


class InvalidGridError(CraneError, ValueError):
    """Grid is empty, ragged, or holds a cell value that is not a crane count."""


class GridTooLargeError(InvalidGridError):
    """Too many moves for the exhaustive search to enumerate."""


class InvalidStepError(CraneError, ValueError):
    """add_step() called with a step that leaves the grid or hits a building."""


class UnreachableError(CraneError):
    """No monotone path connects the origin to the destination."""
