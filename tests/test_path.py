import unittest

from mazelab.core.path import reconstruct_path


class TestReconstructPath(unittest.TestCase):
    def test_excludes_endpoints(self):
        parent = {(0, 1): (0, 0), (0, 2): (0, 1), (1, 2): (0, 2)}
        self.assertEqual(reconstruct_path(parent, (0, 0), (1, 2)), [(0, 1), (0, 2)])

    def test_adjacent_endpoints(self):
        self.assertEqual(reconstruct_path({(0, 1): (0, 0)}, (0, 0), (0, 1)), [])

    def test_broken_chain_returns_empty(self):
        parent = {(0, 2): (0, 1)}
        with self.assertLogs("mazelab.core.path", level="ERROR"):
            self.assertEqual(reconstruct_path(parent, (0, 0), (0, 2)), [])

    def test_cycle_returns_empty(self):
        parent = {(0, 2): (0, 1), (0, 1): (0, 2)}
        with self.assertLogs("mazelab.core.path", level="ERROR"):
            self.assertEqual(reconstruct_path(parent, (0, 0), (0, 2)), [])


if __name__ == '__main__':
    unittest.main()
