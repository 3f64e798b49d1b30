import logging
import random
import time
from typing import Iterator, List, Optional, Tuple

from maze_dfs.algo.dfs import RecursiveDFS
from maze_dfs.config import MazeConfig
from maze_dfs.core.events import StepEvent
from maze_dfs.core.grid import GridModel

logger = logging.getLogger(__name__)

# Session states
IDLE = "idle"
SOLVING = "solving"
SOLVED = "solved"
FAILED = "failed"
CANCELLED = "cancelled"


class MazeSession:
    """
    Owns one maze and at most one in-flight solve.
    A host loop calls tick() (time paced) or step() (manual) and reads the grid
    between calls. generate() and reset_and_solve() may be called at any time;
    both cancel the running solve first.
    """

    def __init__(self, config: MazeConfig = None, rng: random.Random = None):
        self.config = (config or MazeConfig()).sanitized()
        # Seed overrides only apply to an RNG the session built itself
        self._owns_rng = rng is None
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.grid: Optional[GridModel] = None
        self.solver: Optional[RecursiveDFS] = None
        self.state = IDLE
        self.paused = False
        self.last_event: Optional[StepEvent] = None
        self.step_count = 0

        self._iter: Optional[Iterator[StepEvent]] = None
        self._last_tick: Optional[float] = None

    @property
    def is_running(self) -> bool:
        return self._iter is not None

    @property
    def found(self) -> bool:
        return self.state == SOLVED

    @property
    def path(self) -> List[Tuple[int, int]]:
        return self.solver.path if self.solver else []

    @property
    def cell_size(self) -> float:
        return self.config.cell_size

    @property
    def start(self) -> Tuple[int, int]:
        return self.grid.start if self.grid else self.config.start

    @property
    def goal(self) -> Tuple[int, int]:
        return self.grid.goal if self.grid else self.config.resolved_goal()

    def generate(self, **params) -> GridModel:
        self.cancel()
        if params:
            self.config = self.config.replace(**params).sanitized()
            if "seed" in params and self._owns_rng:
                self.rng = random.Random(self.config.seed)
        self.grid = GridModel.from_config(self.config, self.rng)
        self.solver = None
        self.last_event = None
        self.state = IDLE
        logger.info(f"Generated {self.grid.width}x{self.grid.height} maze "
                    f"(walls={self.config.wall_probability:.2f}, start={self.grid.start}, goal={self.grid.goal})")
        return self.grid

    def reset_and_solve(self):
        self.cancel()
        if self.grid is None:
            self.generate()

        self.grid.reset()
        self.solver = RecursiveDFS(self.grid, rng=self.rng)
        self._iter = self.solver.run(self.grid.start, self.grid.goal)
        self.state = SOLVING
        self.step_count = 0
        self.last_event = None
        self._last_tick = None
        logger.info(f"Solving from {self.grid.start} to {self.grid.goal}...")

    def regenerate_and_solve(self, **params):
        self.generate(**params)
        self.reset_and_solve()

    def cancel(self):
        """Drops the in-flight search. The grid keeps whatever state it had."""
        if self._iter is None:
            return
        self._iter.close()
        self._iter = None
        self.state = CANCELLED
        logger.info(f"Solve cancelled after {self.step_count} steps")

    def pause(self):
        self.paused = True

    def resume(self):
        self.paused = False
        # Time spent paused does not count towards pacing
        self._last_tick = None

    def step(self, count: int = 1) -> Optional[StepEvent]:
        """Advances up to `count` suspension points. Returns the last event seen."""
        if self._iter is None:
            return None

        for _ in range(count):
            try:
                self.last_event = next(self._iter)
            except StopIteration:
                self._finish()
                break
            self.step_count += 1
        return self.last_event

    def tick(self, now: float = None) -> Optional[StepEvent]:
        """
        Paced stepping for host loops: one step per elapsed step_delay,
        capped at max_steps_per_tick. A zero delay runs the cap every tick.
        Does nothing while paused; step() still works for manual stepping.
        """
        if self._iter is None or self.paused:
            return None

        cap = self.config.max_steps_per_tick
        delay = self.config.step_delay
        if delay <= 0:
            return self.step(cap)

        if now is None:
            now = time.monotonic()
        if self._last_tick is None:
            # The first cell is shown straight away
            self._last_tick = now
            return self.step(1)

        due = int((now - self._last_tick) / delay)
        if due <= 0:
            return None
        self._last_tick += due * delay
        return self.step(min(due, cap))

    def run_to_completion(self) -> bool:
        """Finishes the running solve, starting a fresh one if none is in flight."""
        if self._iter is None:
            self.reset_and_solve()
        while self._iter is not None:
            self.step(self.config.max_steps_per_tick)
        return self.found

    def _finish(self):
        self._iter = None
        if self.solver.solved:
            path = self.solver.reconstruct_path(self.grid.start, self.grid.goal)
            self.state = SOLVED
            logger.info(f"Goal reached in {self.step_count} steps, path length {len(path)}")
        else:
            self.state = FAILED
            logger.info(f"No path found after {self.step_count} steps")
