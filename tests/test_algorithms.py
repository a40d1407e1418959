"""
Tests for the five search algorithms.

Shared properties run against every registered algorithm through the
`algo_name` fixture; exact visit orders are pinned for the small cases
where the up/down/left/right tie-break decides the outcome.
"""

import random
from math import inf

import pytest

from conftest import parse_grid
from pathviz.core.astar import astar
from pathviz.core.bfs import bfs
from pathviz.core.dfs import dfs
from pathviz.core.dijkstra import dijkstra
from pathviz.core.grid import create_grid, find_end, find_start, generate_random_walls, manhattan, new_board
from pathviz.core.greedy import greedy
from pathviz.core.registry import get_algorithm


def assert_well_formed_path(path, start, end):
    assert path[-1] == end
    assert start not in path
    assert manhattan(start, path[0]) == 1
    for a, b in zip(path, path[1:]):
        assert manhattan(a, b) == 1


class TestSharedProperties:
    @pytest.mark.parametrize("search", [dijkstra, bfs, astar, greedy])
    def test_open_grid_path_is_manhattan_length(self, search, open_5x5):
        """DFS is left out: it keeps the first route it discovers (see TestDfs)."""
        grid, start, end = open_5x5
        result = search(grid, start, end)
        assert len(result.shortest_path) == manhattan(start, end) == 8
        assert_well_formed_path(result.shortest_path, start, end)
        assert len(result.visited_in_order) <= 25

    def test_walled_off_end_gives_empty_path(self, algo_name, walled_off):
        grid, start, end = walled_off
        result = get_algorithm(algo_name)(grid, start, end)
        assert result.shortest_path == []
        assert 0 < len(result.visited_in_order) <= 3
        assert set(result.visited_in_order) <= {(0, 0), (0, 1), (0, 2)}

    def test_idempotent(self, algo_name):
        grid = generate_random_walls(new_board(12, 16), 0.3, random.Random(3))
        search = get_algorithm(algo_name)
        start, end = find_start(grid), find_end(grid)
        assert search(grid, start, end) == search(grid, start, end)

    def test_does_not_mutate_grid(self, algo_name, open_5x5):
        grid, start, end = open_5x5
        before = [[cell for cell in row] for row in grid]
        snapshot = repr(grid)
        get_algorithm(algo_name)(grid, start, end)
        assert repr(grid) == snapshot
        assert all(a is b for ra, rb in zip(before, grid) for a, b in zip(ra, rb))

    def test_no_duplicate_visits(self, algo_name):
        grid = generate_random_walls(new_board(15, 20), 0.25, random.Random(11))
        result = get_algorithm(algo_name)(grid, find_start(grid), find_end(grid))
        assert len(result.visited_in_order) == len(set(result.visited_in_order))

    def test_start_equals_end(self, algo_name):
        grid = create_grid(3, 3)
        result = get_algorithm(algo_name)(grid, (1, 1), (1, 1))
        assert result.visited_in_order == [(1, 1)]
        assert result.shortest_path == []

    def test_path_avoids_walls(self, algo_name, project_root):
        from pathviz.core.grid import load_map

        grid = load_map(project_root / "maps" / "switchback.json")
        start, end = find_start(grid), find_end(grid)
        result = get_algorithm(algo_name)(grid, start, end)
        assert result.shortest_path
        assert_well_formed_path(result.shortest_path, start, end)
        assert not any(grid[r][c].is_wall for r, c in result.shortest_path)


class TestInvalidInput:
    @pytest.mark.parametrize("search", [bfs, dfs, astar, greedy])
    def test_empty_result(self, search):
        grid = create_grid(3, 3)
        for args in (([], (0, 0), (0, 0)), (grid, None, (1, 1)), (grid, (0, 0), None),
                     (grid, (0, 0), (7, 7))):
            result = search(*args)
            assert result.visited_in_order == []
            assert result.shortest_path == []
            assert result.is_empty()

    def test_dijkstra_empty_distances(self):
        result = dijkstra([], (0, 0), (1, 1))
        assert result.distances == []
        assert result.is_empty()

    def test_ragged_grid(self):
        grid = create_grid(3, 3)
        grid[2] = grid[2][:1]
        assert dijkstra(grid, (0, 0), (1, 1)).is_empty()
        assert bfs(grid, (0, 0), (1, 1)).is_empty()


class TestOptimality:
    @pytest.mark.parametrize("seed", range(8))
    def test_dijkstra_matches_bfs_on_random_boards(self, seed):
        grid = generate_random_walls(new_board(15, 25), 0.3, random.Random(seed))
        start, end = find_start(grid), find_end(grid)
        d = dijkstra(grid, start, end)
        b = bfs(grid, start, end)
        assert len(d.shortest_path) == len(b.shortest_path)

        # every algorithm finds a route exactly when one exists
        for search in (dfs, astar, greedy):
            other = search(grid, start, end)
            assert bool(other.shortest_path) == bool(b.shortest_path)
            if b.shortest_path:
                assert len(other.shortest_path) >= len(b.shortest_path)
                assert_well_formed_path(other.shortest_path, start, end)

    def test_switchback_shortest_length(self, project_root):
        from pathviz.core.grid import load_map

        grid = load_map(project_root / "maps" / "switchback.json")
        start, end = find_start(grid), find_end(grid)
        assert len(bfs(grid, start, end).shortest_path) == 18
        assert len(dijkstra(grid, start, end).shortest_path) == 18


class TestDijkstra:
    def test_distances_table(self):
        grid = create_grid(3, 3)
        result = dijkstra(grid, (0, 0), (2, 2))
        assert len(result.distances) == 3 and len(result.distances[0]) == 3
        assert result.distances[0][0] == 0
        assert result.distances[2][2] == 4
        assert result.distances[1][0] == 1

    def test_unreached_distances_are_infinite(self, walled_off):
        grid, start, end = walled_off
        result = dijkstra(grid, start, end)
        assert result.distances[end[0]][end[1]] == inf
        assert result.distances[0][0] == 1

    def test_stops_when_end_is_finalized(self):
        grid, start, end = parse_grid(["SE...."])
        result = dijkstra(grid, start, end)
        assert result.visited_in_order == [(0, 0), (0, 1)]
        assert result.shortest_path == [(0, 1)]


class TestBfs:
    def test_visit_order(self):
        grid = create_grid(3, 3)
        result = bfs(grid, (1, 1), (0, 0))
        assert result.visited_in_order == [(1, 1), (0, 1), (2, 1), (1, 0), (1, 2), (0, 0)]
        assert result.shortest_path == [(0, 1), (0, 0)]


class TestDfs:
    def test_visit_order(self):
        """Last-pushed neighbor (right) is explored first."""
        grid = create_grid(3, 3)
        result = dfs(grid, (1, 1), (0, 0))
        assert result.visited_in_order == [(1, 1), (1, 2), (2, 2), (0, 2), (1, 0), (2, 0), (0, 0)]
        assert result.shortest_path == [(1, 0), (0, 0)]

    def test_route_can_be_longer_than_shortest(self):
        grid = create_grid(3, 3)
        result = dfs(grid, (0, 0), (2, 0))
        assert result.visited_in_order == [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2), (2, 1), (2, 0)]
        assert result.shortest_path == [(0, 1), (0, 2), (1, 2), (2, 2), (2, 1), (2, 0)]

    def test_open_grid_snakes(self, open_5x5):
        """No walls, yet the route is twice the Manhattan distance."""
        grid, start, end = open_5x5
        result = dfs(grid, start, end)
        assert len(result.visited_in_order) == 17
        assert len(result.shortest_path) == 16
        assert result.shortest_path[:5] == [(0, 1), (0, 2), (0, 3), (0, 4), (1, 4)]
        assert_well_formed_path(result.shortest_path, start, end)


class TestAStar:
    def test_end_recorded_but_not_expanded(self):
        grid, start, end = parse_grid(["S.E"])
        result = astar(grid, start, end)
        assert result.visited_in_order == [(0, 0), (0, 1), (0, 2)]
        assert result.shortest_path == [(0, 1), (0, 2)]

    def test_improved_open_cell_keeps_its_queued_priority(self):
        """
        (0,3) is first queued from (1,3) with g=5, f=9. Expanding (0,2) later
        improves it to g=3, f=7: the parent is rewired, so the path runs
        along the top row, but the queue entry stays at f=9 and (0,3) is
        only popped after (0,0), the other f=9 cell queued before it.
        """
        grid, start, end = parse_grid([
            "......",
            ".S#.#.",
            "....#E",
        ])
        result = astar(grid, start, end)
        assert result.visited_in_order == [
            (1, 1), (2, 1), (2, 2), (2, 3),
            (0, 1), (1, 0), (2, 0), (1, 3), (0, 2),
            (0, 0), (0, 3),
            (0, 4), (0, 5), (1, 5), (2, 5),
        ]
        assert result.shortest_path == [(0, 1), (0, 2), (0, 3), (0, 4), (0, 5), (1, 5), (2, 5)]

        order = result.visited_in_order
        assert order.index((0, 0)) < order.index((0, 3))
        assert len(result.shortest_path) == len(dijkstra(grid, start, end).shortest_path)

    def test_heads_towards_end(self):
        """With a clear corridor A* never explores behind the start."""
        grid, start, end = parse_grid(["...S...E"])
        result = astar(grid, start, end)
        assert result.visited_in_order == [(0, c) for c in range(3, 8)]


class TestGreedy:
    def test_visit_order_on_open_grid(self, open_5x5):
        grid, start, end = open_5x5
        result = greedy(grid, start, end)
        assert result.visited_in_order == [
            (0, 0), (1, 0), (2, 0), (3, 0), (4, 0), (4, 1), (4, 2), (4, 3), (4, 4),
        ]
        assert result.shortest_path == [
            (1, 0), (2, 0), (3, 0), (4, 0), (4, 1), (4, 2), (4, 3), (4, 4),
        ]
