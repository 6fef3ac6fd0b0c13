import unittest

from mazelab.core.astar import AStarAlgo, manhattan
from mazelab.core.bfs import BfsAlgo
from mazelab.core.dfs import DfsAlgo
from mazelab.core.generator import generate_maze
from mazelab.core.grid import Grid
from mazelab.core.search import ALGORITHMS, make_algo, run_search
from mazelab.core.types import UnknownAlgorithm

OPEN_3X3 = ["S..", "...", "..E"]
BLOCKED_3X3 = ["S#.", "###", ".#E"]


def full_path(grid, trace):
    return [grid.start] + trace.path + [grid.end]


class TestScenarios(unittest.TestCase):
    def test_two_cell_grid(self):
        g = Grid.from_rows(["SE"])
        for name in ALGORITHMS:
            t = run_search(g, name)
            self.assertTrue(t.found, name)
            self.assertEqual(t.path, [], name)
            self.assertEqual(t.visited, [], name)

    def test_separated_grid_has_no_path(self):
        g = Grid.from_rows(BLOCKED_3X3)
        for name in ALGORITHMS:
            t = run_search(g, name)
            self.assertFalse(t.found, name)
            self.assertEqual(t.path, [], name)

    def test_open_5x5(self):
        g = Grid.empty(5, 5)
        bfs = run_search(g, "bfs")
        astar = run_search(g, "astar")
        dfs = run_search(g, "dfs")
        self.assertEqual(len(bfs.path) + 1, 8)
        self.assertEqual(len(astar.path) + 1, 8)
        self.assertTrue(dfs.found)
        self.assertGreaterEqual(len(dfs.path) + 1, 8)

    def test_unknown_algorithm(self):
        with self.assertRaises(UnknownAlgorithm):
            make_algo("dijkstra")
        with self.assertRaises(ValueError):
            run_search(Grid.empty(2, 2), "greedy")


class TestExactTraces(unittest.TestCase):
    def test_bfs_open_3x3(self):
        t = run_search(Grid.from_rows(OPEN_3X3), "bfs")
        self.assertEqual(t.visited, [(1, 0), (0, 1), (2, 0), (1, 1), (0, 2), (2, 1), (1, 2)])
        self.assertEqual(t.path, [(1, 0), (2, 0), (2, 1)])

    def test_astar_open_3x3_ties_go_to_earliest_inserted(self):
        t = run_search(Grid.from_rows(OPEN_3X3), "astar")
        self.assertEqual(t.visited, [(1, 0), (0, 1), (2, 0), (1, 1), (0, 2), (2, 1), (1, 2)])
        self.assertEqual(t.path, [(1, 0), (2, 0), (2, 1)])

    def test_dfs_open_3x3_last_push_wins(self):
        t = run_search(Grid.from_rows(OPEN_3X3), "dfs")
        self.assertEqual(t.visited, [(1, 0), (2, 0), (2, 1), (1, 1), (0, 1), (0, 2), (1, 2)])
        # (2,2) was pushed from (2,1) first and from (1,2) last; the last push wins
        self.assertEqual(t.parent[(2, 2)], (1, 2))
        self.assertEqual(t.path, [(1, 0), (2, 0), (2, 1), (1, 1), (0, 1), (0, 2), (1, 2)])

    def test_astar_heuristic_prunes(self):
        g = Grid.empty(5, 5, start=(2, 0), end=(2, 4))
        astar = run_search(g, "astar")
        bfs = run_search(g, "bfs")
        self.assertEqual(astar.visited, [(2, 1), (2, 2), (2, 3)])
        self.assertEqual(astar.path, bfs.path)
        self.assertGreater(len(bfs.visited), len(astar.visited))

    def test_corridor_with_wall(self):
        g = Grid.from_rows([
            "S#E",
            "...",
        ])
        for name in ALGORITHMS:
            t = run_search(g, name)
            self.assertEqual(t.path, [(1, 0), (1, 1), (1, 2)], name)

    def test_manhattan(self):
        self.assertEqual(manhattan((0, 0), (4, 4)), 8)
        self.assertEqual(manhattan((3, 1), (1, 2)), 3)


class TestSteppers(unittest.TestCase):
    def test_terminal_result_repeats(self):
        for cls in (BfsAlgo, DfsAlgo, AStarAlgo):
            algo = cls()
            algo.init(Grid.from_rows(["S.E"]))
            statuses = [algo.step().status for _ in range(5)]
            self.assertEqual(statuses[-1], "done", cls.__name__)
            self.assertEqual(algo.step().path, [(0, 1)], cls.__name__)

    def test_no_path_repeats(self):
        for cls in (BfsAlgo, DfsAlgo, AStarAlgo):
            algo = cls()
            algo.init(Grid.from_rows(BLOCKED_3X3))
            for _ in range(3):
                res = algo.step()
            self.assertEqual(res.status, "no_path", cls.__name__)

    def test_reset_replays_identically(self):
        g = generate_maze(10, 10, 0.25, seed=4)
        for cls in (BfsAlgo, DfsAlgo, AStarAlgo):
            algo = cls()
            algo.init(g)
            first = [algo.step().visited for _ in range(30)]
            algo.reset()
            second = [algo.step().visited for _ in range(30)]
            self.assertEqual(first, second, cls.__name__)

    def test_dfs_stale_pops_report_no_visit(self):
        g = Grid.from_rows([
            "S..#E",
            "...#.",
        ])
        algo = DfsAlgo()
        algo.init(g)
        results = []
        while True:
            res = algo.step()
            results.append(res)
            if res.status != "running":
                break
        self.assertEqual(results[-1].status, "no_path")
        self.assertEqual(algo.popped_count, 8)
        self.assertEqual(algo.visited_count, 5)
        stale = [r for r in results[1:-1] if r.visited is None]
        self.assertEqual([r.current for r in stale], [(1, 2), (0, 1)])

    def test_search_does_not_mutate_grid(self):
        g = generate_maze(12, 12, 0.3, seed=8)
        before = [list(r) for r in g.cells]
        for name in ALGORITHMS:
            run_search(g, name)
        self.assertEqual(g.cells, before)


class TestProperties(unittest.TestCase):
    def test_random_mazes(self):
        for seed in range(40):
            g = generate_maze(12, 14, 0.3, seed=seed)
            traces = {name: run_search(g, name) for name in ALGORITHMS}
            found = {t.found for t in traces.values()}
            self.assertEqual(len(found), 1, f"seed {seed}: algorithms disagree on reachability")

            for name, t in traces.items():
                self.assertEqual(len(set(t.visited)), len(t.visited), f"{name} seed {seed}")
                self.assertNotIn(g.start, t.visited)
                self.assertNotIn(g.end, t.visited)
                if not t.found:
                    continue
                cells = full_path(g, t)
                for a, b in zip(cells, cells[1:]):
                    self.assertEqual(manhattan(a, b), 1, f"{name} seed {seed}: {a}->{b}")
                for c in t.path:
                    self.assertFalse(g.is_wall(c))
                    self.assertIn(c, t.visited)

            if traces["bfs"].found:
                self.assertEqual(len(traces["bfs"].path), len(traces["astar"].path), f"seed {seed}")
                self.assertLessEqual(len(traces["bfs"].path), len(traces["dfs"].path), f"seed {seed}")
                self.assertLessEqual(len(traces["astar"].visited), len(traces["bfs"].visited), f"seed {seed}")


if __name__ == '__main__':
    unittest.main()
