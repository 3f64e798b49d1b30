import unittest
import random
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_dfs.config import MazeConfig
from maze_dfs.core.grid import GridModel
from maze_dfs.core.events import EVT_ENTER
from maze_dfs.core import session as session_mod
from maze_dfs.core.session import MazeSession


class TestMazeSession(unittest.TestCase):
    def make_session(self, **kwargs):
        params = dict(width=9, height=7, wall_probability=0.0, seed=42, step_delay=0.0)
        params.update(kwargs)
        return MazeSession(MazeConfig(**params))

    def test_generate_uses_config(self):
        session = self.make_session(wall_probability=0.3, cell_size=12.0)
        grid = session.generate()

        self.assertIs(session.grid, grid)
        self.assertEqual((grid.width, grid.height), (9, 7))
        self.assertEqual(grid.goal, (8, 6))
        self.assertEqual(session.cell_size, 12.0)
        self.assertEqual(session.state, session_mod.IDLE)
        self.assertFalse(session.is_running)

    def test_generate_overrides_are_sanitized(self):
        session = self.make_session()
        with self.assertLogs("maze_dfs.config", level="WARNING"):
            grid = session.generate(width=1, goal=(50, 50))
        self.assertEqual(grid.width, 3)
        self.assertEqual(grid.goal, (2, 6))

    def test_run_to_completion(self):
        session = self.make_session()
        session.generate()
        self.assertTrue(session.run_to_completion())

        self.assertEqual(session.state, session_mod.SOLVED)
        self.assertFalse(session.is_running)
        self.assertEqual(session.path[0], session.start)
        self.assertEqual(session.path[-1], session.goal)
        for x, y in session.path:
            self.assertTrue(session.grid.is_on_path(x, y))

    def test_run_to_completion_generates_when_needed(self):
        session = self.make_session()
        self.assertTrue(session.run_to_completion())
        self.assertIsNotNone(session.grid)

    def test_failed_solve(self):
        session = self.make_session()
        session.grid = GridModel.from_rows([
            ".....",
            ".###.",
            ".#.#.",
            ".###.",
            ".....",
        ], goal=(2, 2))

        self.assertFalse(session.run_to_completion())
        self.assertEqual(session.state, session_mod.FAILED)
        self.assertEqual(session.path, [])
        self.assertEqual(session.grid.path_cells(), [])

    def test_step_reports_events(self):
        session = self.make_session()
        session.generate()
        session.reset_and_solve()

        event = session.step()
        self.assertEqual(event.kind, EVT_ENTER)
        self.assertEqual(event.cell, session.start)
        self.assertEqual(session.step_count, 1)
        self.assertTrue(session.grid.is_on_stack(*session.start))

        session.step(3)
        self.assertEqual(session.step_count, 4)
        self.assertIs(session.last_event, session.step(0))

    def test_step_without_solve(self):
        session = self.make_session()
        session.generate()
        self.assertIsNone(session.step())
        self.assertIsNone(session.tick(now=10.0))

    def test_cancel_mid_solve(self):
        session = self.make_session(width=30, height=30)
        session.generate()
        session.reset_and_solve()
        session.step(5)

        session.cancel()
        self.assertEqual(session.state, session_mod.CANCELLED)
        self.assertFalse(session.is_running)
        self.assertIsNone(session.step())
        # The partial search is left as it was
        self.assertEqual(session.grid.count(GridModel.VISITED), 5)

        # Cancelling twice is harmless
        session.cancel()
        self.assertEqual(session.state, session_mod.CANCELLED)

    def test_reset_and_solve_restarts(self):
        session = self.make_session(width=30, height=30)
        session.generate()
        session.reset_and_solve()
        session.step(20)
        first_solver = session.solver

        session.reset_and_solve()
        self.assertIsNot(session.solver, first_solver)
        self.assertEqual(session.step_count, 0)
        self.assertEqual(session.grid.count(GridModel.VISITED), 0)

        self.assertTrue(session.run_to_completion())

    def test_regenerate_and_solve(self):
        session = self.make_session(wall_probability=0.3)
        session.generate()
        old_grid = session.grid
        session.reset_and_solve()
        session.step(4)

        session.regenerate_and_solve(width=12)
        self.assertIsNot(session.grid, old_grid)
        self.assertEqual(session.grid.width, 12)
        self.assertEqual(session.grid.count(GridModel.SOLVER_FLAGS), 0)
        self.assertTrue(session.is_running)
        self.assertEqual(session.state, session_mod.SOLVING)

    def test_tick_respects_delay(self):
        session = self.make_session(width=30, height=30, step_delay=0.5, max_steps_per_tick=10)
        session.generate()
        session.reset_and_solve()

        self.assertIsNotNone(session.tick(now=100.0))
        self.assertEqual(session.step_count, 1)

        self.assertIsNone(session.tick(now=100.2))
        self.assertEqual(session.step_count, 1)

        session.tick(now=101.0)
        self.assertEqual(session.step_count, 3)

        # Long stalls are capped
        session.tick(now=200.0)
        self.assertEqual(session.step_count, 13)

    def test_tick_without_delay_runs_cap(self):
        session = self.make_session(width=30, height=30, step_delay=0.0, max_steps_per_tick=25)
        session.generate()
        session.reset_and_solve()
        session.tick()
        self.assertEqual(session.step_count, 25)

    def test_paused_session_does_not_tick(self):
        session = self.make_session(width=30, height=30, step_delay=0.5)
        session.generate()
        session.reset_and_solve()
        session.pause()

        self.assertIsNone(session.tick(now=100.0))
        self.assertEqual(session.step_count, 0)

        # Manual stepping still works while paused
        session.step(1)
        self.assertEqual(session.step_count, 1)

    def test_resume_does_not_catch_up(self):
        session = self.make_session(width=30, height=30, step_delay=0.05, max_steps_per_tick=100)
        session.generate()
        session.reset_and_solve()

        session.tick(now=100.0)
        session.tick(now=100.1)
        self.assertEqual(session.step_count, 2)

        session.pause()
        session.tick(now=102.0)
        session.resume()

        session.tick(now=105.017)
        self.assertEqual(session.step_count, 3)

        session.tick(now=105.08)
        self.assertEqual(session.step_count, 4)

    def test_seed_override_rebuilds_rng(self):
        s1 = MazeSession(MazeConfig(width=15, height=15, wall_probability=0.4, seed=1))
        s2 = MazeSession(MazeConfig(width=15, height=15, wall_probability=0.4, seed=2))

        g1 = s1.generate(seed=5)
        g2 = s2.generate(seed=5)
        self.assertEqual(g1.cells.tobytes(), g2.cells.tobytes())
        self.assertEqual(s1.config.seed, 5)

        s1.run_to_completion()
        s2.run_to_completion()
        self.assertEqual(s1.path, s2.path)

    def test_seed_override_keeps_injected_rng(self):
        rng = random.Random(3)
        session = MazeSession(MazeConfig(width=15, height=15, wall_probability=0.4), rng=rng)
        session.generate(seed=5)
        self.assertIs(session.rng, rng)

    def test_injected_rng_is_replayable(self):
        config = MazeConfig(width=15, height=15, wall_probability=0.3)
        s1 = MazeSession(config, rng=random.Random(7))
        s2 = MazeSession(config, rng=random.Random(7))
        s1.generate()
        s2.generate()
        s1.run_to_completion()
        s2.run_to_completion()

        self.assertEqual(s1.grid.cells.tobytes(), s2.grid.cells.tobytes())
        self.assertEqual(s1.path, s2.path)


if __name__ == '__main__':
    unittest.main()
