"""Unit tests for predecessor-map path reconstruction."""

from pathviz.core.paths import reconstruct_path


class TestReconstructPath:
    def test_unreached_end_gives_empty_path(self):
        assert reconstruct_path({(0, 1): (0, 0)}, (5, 5)) == []

    def test_excludes_start_includes_end(self):
        parent = {(0, 1): (0, 0), (0, 2): (0, 1), (1, 2): (0, 2)}
        assert reconstruct_path(parent, (1, 2)) == [(0, 1), (0, 2), (1, 2)]

    def test_end_adjacent_to_start(self):
        assert reconstruct_path({(1, 0): (0, 0)}, (1, 0)) == [(1, 0)]

    def test_ignores_unrelated_branches(self):
        parent = {(0, 1): (0, 0), (1, 0): (0, 0), (2, 0): (1, 0)}
        assert reconstruct_path(parent, (2, 0)) == [(1, 0), (2, 0)]
