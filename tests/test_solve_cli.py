#!/usr/bin/env python3
"""
cranes-solve command-line driver
"""

import pytest

from src.app.solve import main


class TestSolveCli:

    def test_both_algorithms_agree(self, maps_dir, capsys):
        assert main([str(maps_dir / "01_small_dock.json")]) == 0
        out = capsys.readouterr().out
        assert "== exhaustive" in out
        assert "== dynprog" in out
        assert out.count("steps SSEE, end (2, 2), 26 cranes") == 2
        assert "totals agree" in out

    def test_single_algorithm(self, maps_dir, capsys):
        assert main([str(maps_dir / "02_harbour.json"), "--algo", "dynprog"]) == 0
        out = capsys.readouterr().out
        assert "== exhaustive" not in out
        assert "end (5, 7)" in out

    def test_unreachable_map_fails_dynprog(self, maps_dir, capsys):
        assert main([str(maps_dir / "03_walled_off.json"), "--algo", "dynprog"]) == 1
        assert "unreachable" in capsys.readouterr().err

    def test_unreachable_map_exhaustive_best_effort(self, maps_dir, capsys):
        assert main([str(maps_dir / "03_walled_off.json"), "--algo", "exhaustive"]) == 0
        assert "does not reach destination" in capsys.readouterr().out

    def test_random_dock(self, capsys):
        # a random dock may be walled off, in which case dynprog exits 1
        assert main(["--random", "4x5", "--seed", "3"]) in (0, 1)
        out = capsys.readouterr().out
        assert "== exhaustive" in out
        assert len([l for l in out.splitlines() if l.startswith((" ", "["))]) >= 4

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.json")]) == 1
        assert "Failed to load grid" in capsys.readouterr().err

    def test_undecodable_map_file(self, tmp_path, capsys):
        f = tmp_path / "dock.json"
        f.write_bytes(b"\xff\xfe not a map")
        assert main([str(f)]) == 1
        assert "Failed to load grid" in capsys.readouterr().err

    def test_needs_exactly_one_source(self, maps_dir):
        with pytest.raises(SystemExit):
            main([])
        with pytest.raises(SystemExit):
            main([str(maps_dir / "01_small_dock.json"), "--random", "2x2"])

    def test_bad_size(self):
        with pytest.raises(SystemExit):
            main(["--random", "three"])
