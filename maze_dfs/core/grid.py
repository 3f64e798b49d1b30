import logging
import random
from array import array
from typing import Iterator, List, Optional, Sequence, Tuple

from maze_dfs.config import MazeConfig, clamp_coord

logger = logging.getLogger(__name__)


class GridModel:
    # Static flag
    WALL     = 0b00000001

    # Solver flags (cleared by reset)
    VISITED  = 0b00000010
    ON_STACK = 0b00000100
    PATH     = 0b00001000

    SOLVER_FLAGS = VISITED | ON_STACK | PATH

    NO_PARENT = -1
    MIN_SIZE = MazeConfig.MIN_SIZE

    __slots__ = ('width', 'height', 'cells', 'parents', 'start', 'goal')

    def __init__(self, width: int, height: int, start: Tuple[int, int] = (0, 0),
                 goal: Optional[Tuple[int, int]] = None):
        w = max(self.MIN_SIZE, int(width))
        h = max(self.MIN_SIZE, int(height))
        if (w, h) != (width, height):
            logger.warning(f"Grid size {width}x{height} below minimum, using {w}x{h}")

        self.width = w
        self.height = h
        # 1 byte of flags per cell, all open
        self.cells = array('B', [0] * (w * h))
        # Flat index of the discovering cell, -1 = none
        self.parents = array('i', [self.NO_PARENT] * (w * h))

        self.start = clamp_coord(start, w, h)
        self.goal = clamp_coord(goal if goal is not None else (w - 1, h - 1), w, h)

    @classmethod
    def generate(cls, width: int, height: int, wall_probability: float,
                 rng: random.Random, start: Tuple[int, int] = (0, 0),
                 goal: Optional[Tuple[int, int]] = None) -> "GridModel":
        """
        Random walls, one independent draw per interior cell.
        The outer border is always walkable, start and goal are always open.
        """
        grid = cls(width, height, start, goal)

        prob = min(1.0, max(0.0, float(wall_probability)))
        if prob != wall_probability:
            logger.warning(f"Wall probability {wall_probability} clamped to {prob}")

        w, h = grid.width, grid.height
        for y in range(h):
            for x in range(w):
                if x == 0 or y == 0 or x == w - 1 or y == h - 1:
                    continue
                if rng.random() < prob:
                    grid.cells[y * w + x] |= cls.WALL

        # Hard postcondition for the solver
        for x, y in (grid.start, grid.goal):
            grid.cells[y * w + x] &= ~cls.WALL

        logger.debug(f"Generated {w}x{h} grid, {grid.count(cls.WALL)} walls, start={grid.start} goal={grid.goal}")
        return grid

    @classmethod
    def from_config(cls, config: MazeConfig, rng: random.Random) -> "GridModel":
        return cls.generate(config.width, config.height, config.wall_probability, rng,
                            start=config.start, goal=config.goal)

    @classmethod
    def from_rows(cls, rows: Sequence[str], start: Tuple[int, int] = (0, 0),
                  goal: Optional[Tuple[int, int]] = None) -> "GridModel":
        """
        Direct wall assignment. '#' is a wall, anything else is open.
        """
        if not rows:
            raise ValueError("No rows given")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("All rows must have the same length")

        grid = cls(width, len(rows), start, goal)
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if ch == '#':
                    grid.set_wall(x, y)
        return grid

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_index(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def get_coord(self, idx: int) -> Tuple[int, int]:
        return (idx % self.width, idx // self.width)

    def set_wall(self, x: int, y: int, wall: bool = True):
        idx = self.get_index(x, y)
        if wall:
            if (x, y) == self.start or (x, y) == self.goal:
                logger.debug(f"Ignoring wall on endpoint ({x}, {y})")
                return
            self.cells[idx] |= self.WALL
        else:
            self.cells[idx] &= ~self.WALL

    def reset(self):
        """Clears every solver flag and parent link. Walls are untouched."""
        keep = ~self.SOLVER_FLAGS & 0xFF
        cells = self.cells
        for i in range(len(cells)):
            cells[i] &= keep
        self.parents = array('i', [self.NO_PARENT] * (self.width * self.height))

    # --- Queries (valid at any time, including mid-solve) ---

    def is_wall(self, x: int, y: int) -> bool:
        return (self.cells[self.get_index(x, y)] & self.WALL) != 0

    def is_visited(self, x: int, y: int) -> bool:
        return (self.cells[self.get_index(x, y)] & self.VISITED) != 0

    def is_on_stack(self, x: int, y: int) -> bool:
        return (self.cells[self.get_index(x, y)] & self.ON_STACK) != 0

    def is_on_path(self, x: int, y: int) -> bool:
        return (self.cells[self.get_index(x, y)] & self.PATH) != 0

    def get_parent(self, x: int, y: int) -> Optional[Tuple[int, int]]:
        p = self.parents[self.get_index(x, y)]
        if p == self.NO_PARENT:
            return None
        return self.get_coord(p)

    def is_open(self, x: int, y: int) -> bool:
        """In bounds, not a wall and not yet visited."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return False
        return not (self.cells[y * self.width + x] & (self.WALL | self.VISITED))

    def get_neighbors(self, x: int, y: int) -> Iterator[Tuple[int, int]]:
        """
        Yields in-bounds 4-neighbours. Does NOT check walls.
        """
        if x < self.width - 1:
            yield (x + 1, y)
        if y < self.height - 1:
            yield (x, y + 1)
        if x > 0:
            yield (x - 1, y)
        if y > 0:
            yield (x, y - 1)

    def count(self, flag: int) -> int:
        return sum(1 for val in self.cells if val & flag)

    def path_cells(self) -> List[Tuple[int, int]]:
        """Cells flagged PATH, in row-major order (use the solver's path for ordering)."""
        return [self.get_coord(i) for i, val in enumerate(self.cells) if val & self.PATH]

    # --- Solver mutators ---

    def mark_entered(self, x: int, y: int):
        self.cells[y * self.width + x] |= self.VISITED | self.ON_STACK

    def mark_backtracked(self, x: int, y: int):
        self.cells[y * self.width + x] &= ~self.ON_STACK

    def set_parent(self, child: Tuple[int, int], parent: Tuple[int, int]):
        idx = self.get_index(*child)
        # First discovery wins
        if self.parents[idx] == self.NO_PARENT:
            self.parents[idx] = self.get_index(*parent)

    def mark_path(self, x: int, y: int):
        self.cells[self.get_index(x, y)] |= self.PATH
