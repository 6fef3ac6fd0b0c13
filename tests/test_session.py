import unittest

from mazelab.core.grid import Grid
from mazelab.core.search import run_search
from mazelab.core.session import (
    FAST_BATCH_SIZE, PAUSE_POLL_S, SessionState, SolveSession, path_delay_ms, speed_to_delay_ms,
)
from mazelab.core.types import SessionStateError


class FakeSleep:
    """Records requested sleeps instead of sleeping."""

    def __init__(self, hook=None):
        self.calls = []
        self.hook = hook

    def __call__(self, seconds):
        self.calls.append(seconds)
        if self.hook is not None:
            self.hook(seconds)


class Recorder:
    def __init__(self):
        self.visited = []
        self.path = []

    def on_visited(self, cells):
        self.visited.append(cells)

    def on_path(self, cells):
        self.path.append(cells)


class TestPacing(unittest.TestCase):
    def test_speed_to_delay(self):
        self.assertEqual(speed_to_delay_ms(50), 50)
        self.assertEqual(speed_to_delay_ms(0), 100)
        self.assertEqual(speed_to_delay_ms(99), 5)
        self.assertEqual(speed_to_delay_ms(25, fast=True), 5)

    def test_path_delay(self):
        self.assertEqual(path_delay_ms(50), 75)
        self.assertEqual(path_delay_ms(100), 50)
        self.assertEqual(path_delay_ms(50, fast=True), 5)


class TestSolveSession(unittest.TestCase):
    def make(self, rows, algo="bfs", rec=None, **kw):
        rec = rec or Recorder()
        grid = rows if isinstance(rows, Grid) else Grid.from_rows(rows)
        return SolveSession(grid, algo, rec.on_visited, rec.on_path, **kw), rec

    def test_emits_one_cell_at_a_time(self):
        session, rec = self.make(["S.E"], speed=50)
        sleep = FakeSleep()
        result = session.run(sleep=sleep)

        self.assertEqual(session.state, SessionState.COMPLETED)
        self.assertEqual(rec.visited, [[(0, 1)]])
        self.assertEqual(rec.path, [[(0, 1)]])
        self.assertTrue(result.found)
        self.assertEqual(result.path, [(0, 1)])
        self.assertEqual(result.visited_count, 1)
        self.assertEqual(result.path_length, 2)
        self.assertEqual(len(sleep.calls), 2)
        self.assertAlmostEqual(sleep.calls[0], 0.050)
        self.assertAlmostEqual(sleep.calls[1], 0.075)

    def test_metrics_follow_last_step(self):
        session, _ = self.make(["S.E"])
        self.assertEqual(session.metrics, {})
        session.start()
        session.advance()
        self.assertEqual(session.metrics,
                         {"algo": "BFS", "popped": 2, "visited": 1, "frontier": 1, "path_len": 0})
        session.advance()
        m = session.metrics
        self.assertEqual((m["popped"], m["frontier"], m["path_len"]), (3, 0, 1))
        m["popped"] = 99
        self.assertEqual(session.metrics["popped"], 3)

    def test_adjacent_endpoints(self):
        for algo in ("bfs", "dfs", "astar"):
            session, rec = self.make(["SE"], algo=algo)
            result = session.run(sleep=FakeSleep())
            self.assertTrue(result.found, algo)
            self.assertEqual(result.path, [], algo)
            self.assertEqual(result.visited_count, 0, algo)
            self.assertEqual(rec.visited, [], algo)
            self.assertEqual(rec.path, [], algo)

    def test_no_path(self):
        session, rec = self.make(["S#.", "###", ".#E"], algo="astar")
        result = session.run(sleep=FakeSleep())
        self.assertFalse(result.found)
        self.assertIsNone(result.path_length)
        self.assertEqual(rec.path, [])
        self.assertEqual(session.state, SessionState.COMPLETED)

    def test_visited_count_matches_emitted_trace(self):
        grid = Grid.empty(5, 5)
        for algo in ("bfs", "dfs", "astar"):
            session, rec = self.make(grid, algo=algo)
            result = session.run(sleep=FakeSleep())
            self.assertEqual(result.visited_count, len(rec.visited[-1]), algo)
            self.assertEqual(result.visited, run_search(grid, algo).visited, algo)
            # one new cell per emission, nothing skipped or repeated
            for i, cells in enumerate(rec.visited):
                self.assertEqual(len(cells), i + 1)
            self.assertEqual(rec.path[-1], result.path, algo)

    def test_fast_mode_batches(self):
        session, rec = self.make(Grid.empty(5, 5), algo="bfs", fast=True)
        sleep = FakeSleep()
        result = session.run(sleep=sleep)
        self.assertEqual([len(c) for c in rec.visited], [FAST_BATCH_SIZE, 2 * FAST_BATCH_SIZE, 23])
        self.assertEqual(len(rec.path), 1)
        self.assertEqual(len(rec.path[0]), 7)
        self.assertEqual(result.path_length, 8)
        self.assertTrue(all(abs(s - 0.005) < 1e-9 for s in sleep.calls))

    def test_pause_resume_loses_nothing(self):
        grid = Grid.from_rows(["S..", "...", "..E"])
        polls = []

        def on_visited(cells):
            rec.visited.append(cells)
            if len(cells) == 2:
                session.pause()

        def hook(seconds):
            if session.state is SessionState.PAUSED:
                polls.append(seconds)
                if len(polls) == 3:
                    session.resume()

        rec = Recorder()
        session = SolveSession(grid, "bfs", on_visited, rec.on_path)
        result = session.run(sleep=FakeSleep(hook))

        self.assertEqual(polls, [PAUSE_POLL_S] * 3)
        self.assertEqual(rec.visited[-1], run_search(grid, "bfs").visited)
        self.assertEqual([len(c) for c in rec.visited], list(range(1, 8)))
        self.assertTrue(result.found)

    def test_paused_session_does_not_advance(self):
        session, rec = self.make(["S...E"])
        session.start()
        session.advance()
        session.pause()
        self.assertFalse(session.advance())
        self.assertEqual(len(rec.visited), 1)
        session.resume()
        self.assertTrue(session.advance())
        self.assertEqual(len(rec.visited), 2)

    def test_cancel_stops_callbacks(self):
        rec = Recorder()

        def on_visited(cells):
            rec.visited.append(cells)
            if len(cells) == 3:
                session.cancel()

        session = SolveSession(Grid.empty(5, 5), "bfs", on_visited, rec.on_path)
        result = session.run(sleep=FakeSleep())

        self.assertEqual(len(rec.visited), 3)
        self.assertEqual(rec.path, [])
        self.assertTrue(result.cancelled)
        self.assertEqual(session.state, SessionState.CANCELLED)
        self.assertFalse(session.advance())
        self.assertFalse(session.tick(1000.0))
        self.assertEqual(len(rec.visited), 3)

    def test_cancel_during_path_animation(self):
        rec = Recorder()

        def on_path(cells):
            rec.path.append(cells)
            session.cancel()

        session = SolveSession(Grid.empty(4, 4), "astar", rec.on_visited, on_path)
        result = session.run(sleep=FakeSleep())
        self.assertEqual(len(rec.path), 1)
        self.assertTrue(result.cancelled)
        self.assertTrue(result.found)

    def test_cancel_before_start(self):
        session, rec = self.make(["S.E"])
        session.cancel()
        result = session.run(sleep=FakeSleep())
        self.assertTrue(result.cancelled)
        self.assertEqual(rec.visited, [])

    def test_illegal_transitions(self):
        session, _ = self.make(["S.E"])
        with self.assertRaises(SessionStateError):
            session.pause()
        with self.assertRaises(SessionStateError):
            session.resume()
        session.start()
        with self.assertRaises(SessionStateError):
            session.start()
        with self.assertRaises(SessionStateError):
            session.resume()
        session.run(sleep=FakeSleep())
        self.assertEqual(session.state, SessionState.COMPLETED)
        with self.assertRaises(SessionStateError):
            session.pause()
        session.cancel()  # no-op once finished
        self.assertEqual(session.state, SessionState.COMPLETED)
        self.assertFalse(session.result.cancelled)

    def test_tick_respects_delay(self):
        session, rec = self.make(["S....E"], speed=50)
        session.start()
        self.assertTrue(session.tick(10.0))
        self.assertFalse(session.tick(10.01))
        self.assertTrue(session.tick(10.06))
        session.pause()
        self.assertFalse(session.tick(20.0))
        self.assertEqual(len(rec.visited), 2)

    def test_elapsed_excludes_sleep(self):
        ticks = iter(range(1000))
        session, _ = self.make(["S.E"], clock=lambda: float(next(ticks)))
        result = session.run(sleep=FakeSleep())
        # two visit-phase advances, one clock unit each
        self.assertAlmostEqual(result.elapsed_ms, 2000.0)


if __name__ == '__main__':
    unittest.main()
