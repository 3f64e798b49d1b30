import logging
from typing import Iterator, List, Tuple

from maze_dfs.algo.base import Solver
from maze_dfs.core.events import EVT_BACKTRACK, EVT_ENTER, StepEvent
from maze_dfs.core.grid import GridModel

logger = logging.getLogger(__name__)

# +x, +y, -x, -y
DIRECTIONS = ((1, 0), (0, 1), (-1, 0), (0, -1))


class ReconstructionError(RuntimeError):
    """Path reconstruction was requested without a successful solve."""


class RecursiveDFS(Solver):
    """
    Depth-first search with the step order of the recursive version, but driven
    by an explicit stack of (cell, remaining directions) frames so it can be
    suspended after every enter and every backtrack.

    When the goal is found the search unwinds without clearing ON_STACK, so the
    winning chain stays marked on the grid.
    """

    def __init__(self, grid: GridModel, rng=None, seed: int = None):
        super().__init__(grid, rng=rng, seed=seed)
        self.backtrack_count = 0
        self.max_depth = 0

    def _shuffled_directions(self) -> List[Tuple[int, int]]:
        dirs = list(DIRECTIONS)
        for i in range(len(dirs)):
            j = self.rng.randrange(i, len(dirs))
            dirs[i], dirs[j] = dirs[j], dirs[i]
        return dirs

    def _enter(self, x: int, y: int, depth: int) -> StepEvent:
        self.grid.mark_entered(x, y)
        self.visited_count += 1
        if depth > self.max_depth:
            self.max_depth = depth
        return StepEvent(EVT_ENTER, x, y, depth)

    def run(self, start: Tuple[int, int], goal: Tuple[int, int]) -> Iterator[StepEvent]:
        grid = self.grid
        start, goal = tuple(start), tuple(goal)

        self.path = []
        self.solved = False
        self.visited_count = 0
        self.backtrack_count = 0
        self.max_depth = 0

        # Out of bounds, wall or stale visited flag: nothing to explore
        if not grid.is_open(*start):
            logger.debug(f"Start {start} is not enterable, search skipped")
            return

        yield self._enter(start[0], start[1], 1)
        if start == goal:
            self.solved = True
            return

        stack = [(start, iter(self._shuffled_directions()))]

        while stack:
            (cx, cy), directions = stack[-1]

            child = None
            for dx, dy in directions:
                nx, ny = cx + dx, cy + dy
                if not grid.is_open(nx, ny):
                    continue
                if self.solved:
                    break
                # Link before descending so a deeper hit can be traced back here
                grid.set_parent((nx, ny), (cx, cy))
                child = (nx, ny)
                break

            if child is None:
                stack.pop()
                grid.mark_backtracked(cx, cy)
                self.backtrack_count += 1
                yield StepEvent(EVT_BACKTRACK, cx, cy, len(stack) + 1)
                continue

            yield self._enter(child[0], child[1], len(stack) + 1)

            if child == goal:
                self.solved = True
                break

            stack.append((child, iter(self._shuffled_directions())))

        logger.debug(f"DFS finished: solved={self.solved} visited={self.visited_count} "
                     f"backtracks={self.backtrack_count} max_depth={self.max_depth}")

    def solve(self, start: Tuple[int, int], goal: Tuple[int, int]) -> bool:
        return self.run_all(start, goal)

    def reconstruct_path(self, start: Tuple[int, int], goal: Tuple[int, int]) -> List[Tuple[int, int]]:
        if not self.solved:
            raise ReconstructionError("reconstruct_path() called before a successful solve")
        self.path = reconstruct_path(self.grid, start, goal)
        return self.path


def reconstruct_path(grid: GridModel, start: Tuple[int, int], goal: Tuple[int, int]) -> List[Tuple[int, int]]:
    """
    Follows parent links from goal back to start and flags every cell PATH.
    Returns the cells ordered start -> goal.
    """
    start, goal = tuple(start), tuple(goal)
    if not grid.in_bounds(*goal) or not grid.is_visited(*goal):
        raise ReconstructionError(f"Goal {goal} was never reached")

    path = []
    limit = grid.width * grid.height
    curr = goal
    while True:
        path.append(curr)
        if curr == start:
            break
        parent = grid.get_parent(*curr)
        if parent is None:
            raise ReconstructionError(f"Parent chain ends at {curr} before reaching start {start}")
        if len(path) > limit:
            raise ReconstructionError("Parent chain does not terminate")
        curr = parent

    for x, y in path:
        grid.mark_path(x, y)

    path.reverse()
    return path
