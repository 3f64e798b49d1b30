import random
from abc import ABC, abstractmethod
from typing import Iterator, List, Tuple

from maze_dfs.core.events import StepEvent
from maze_dfs.core.grid import GridModel


class Solver(ABC):
    def __init__(self, grid: GridModel, rng: random.Random = None, seed: int = None):
        self.grid = grid
        # Explicit RNG so runs can be replayed
        self.rng = rng if rng is not None else random.Random(seed)
        self.path: List[Tuple[int, int]] = []
        self.solved = False
        self.visited_count = 0

    @abstractmethod
    def run(self, start: Tuple[int, int], goal: Tuple[int, int]) -> Iterator[StepEvent]:
        """
        Yields at every suspension point.
        The grid is modified in place and is stable between two yields.
        """
        pass

    def run_all(self, start: Tuple[int, int], goal: Tuple[int, int]) -> bool:
        """Helper to run the solver to completion."""
        for _ in self.run(start, goal):
            pass
        return self.solved
