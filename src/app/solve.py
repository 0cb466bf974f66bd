# src/app/solve.py
#!/usr/bin/env python3
"""
Command-line crane unloading.

    cranes-solve maps/01_small_dock.json --algo=both
    cranes-solve --random 5x6 --seed 7 --algo=dynprog
"""

# --- bootstrap import path so `from src...` works when run as a script ---
import sys
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# -------------------------------------------------------------------------

import argparse
import logging
from typing import List, Optional, Tuple

from src.core.errors import CraneError
from src.core.exhaustive import solve_exhaustive
from src.core.dynprog import solve_dynprog
from src.core.grid_io import load_map, random_grid, render_grid, describe_path
from src.core.types import Grid

SOLVERS = {
    "exhaustive": solve_exhaustive,
    "dynprog": solve_dynprog,
}


def _parse_size(text: str) -> Tuple[int, int]:
    try:
        rows, columns = (int(v) for v in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ROWSxCOLUMNS, got {text!r}")
    return rows, columns


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cranes-solve",
                                description="Find the crane-richest east/south route across a dock.")
    p.add_argument("map", nargs="?", help="JSON map file")
    p.add_argument("--random", type=_parse_size, metavar="ROWSxCOLS",
                   help="solve a random dock of this size instead of a map file")
    p.add_argument("--seed", type=int, default=None, help="seed for --random")
    p.add_argument("--algo", choices=["exhaustive", "dynprog", "both"], default="both")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def _load(args) -> Grid:
    if args.random is not None:
        rows, columns = args.random
        return random_grid(rows, columns, seed=args.seed)
    return load_map(args.map)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if (args.map is None) == (args.random is None):
        parser.error("give either a map file or --random ROWSxCOLS")
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        grid = _load(args)
    except (OSError, CraneError) as ex:
        print(f"Failed to load grid: {ex}", file=sys.stderr)
        return 1

    names = list(SOLVERS) if args.algo == "both" else [args.algo]
    totals = {}
    for name in names:
        try:
            path = SOLVERS[name](grid)
        except CraneError as ex:
            print(f"{name}: {ex}", file=sys.stderr)
            return 1
        totals[name] = path.total_cranes()
        print(f"== {name}")
        print(render_grid(grid, path))
        print(describe_path(path))

    if len(totals) == 2:
        agree = len(set(totals.values())) == 1
        print("totals agree" if agree else f"totals differ: {totals}")
        if not agree:
            return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
