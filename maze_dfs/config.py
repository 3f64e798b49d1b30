import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


class MazeConfig:
    """
    Parameters for building and solving one maze.
    cell_size is only used by renderers (pixels per cell), the core passes it through.
    """
    MIN_SIZE = 3

    __slots__ = ('width', 'height', 'cell_size', 'wall_probability',
                 'start', 'goal', 'step_delay', 'seed', 'max_steps_per_tick')

    def __init__(self, width: int = 21, height: int = 15, cell_size: float = 24.0,
                 wall_probability: float = 0.25, start: Tuple[int, int] = (0, 0),
                 goal: Optional[Tuple[int, int]] = None, step_delay: float = 0.05,
                 seed: int = None, max_steps_per_tick: int = 100):
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.wall_probability = wall_probability
        self.start = tuple(start)
        # None -> bottom-right corner
        self.goal = tuple(goal) if goal is not None else None
        self.step_delay = step_delay
        self.seed = seed
        self.max_steps_per_tick = max_steps_per_tick

    def __repr__(self):
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.__slots__)
        return f"MazeConfig({fields})"

    def __eq__(self, other):
        if not isinstance(other, MazeConfig):
            return NotImplemented
        return all(getattr(self, n) == getattr(other, n) for n in self.__slots__)

    def replace(self, **changes) -> "MazeConfig":
        values = {name: getattr(self, name) for name in self.__slots__}
        for key in changes:
            if key not in values:
                raise TypeError(f"Unknown config field '{key}'")
        values.update(changes)
        return MazeConfig(**values)

    def resolved_goal(self) -> Tuple[int, int]:
        if self.goal is None:
            return (self.width - 1, self.height - 1)
        return self.goal

    def sanitized(self) -> "MazeConfig":
        """
        Returns a copy with every field clamped into its valid range.
        Bad values are corrected, never rejected.
        """
        width = max(self.MIN_SIZE, int(self.width))
        height = max(self.MIN_SIZE, int(self.height))
        if (width, height) != (self.width, self.height):
            logger.warning(f"Grid size {self.width}x{self.height} below minimum, using {width}x{height}")

        prob = min(1.0, max(0.0, float(self.wall_probability)))
        if prob != self.wall_probability:
            logger.warning(f"Wall probability {self.wall_probability} clamped to {prob}")

        start = clamp_coord(self.start, width, height)
        goal = clamp_coord(self.goal, width, height) if self.goal is not None else None

        return MazeConfig(
            width=width,
            height=height,
            cell_size=max(1.0, float(self.cell_size)),
            wall_probability=prob,
            start=start,
            goal=goal,
            step_delay=max(0.0, float(self.step_delay)),
            seed=self.seed,
            max_steps_per_tick=max(1, int(self.max_steps_per_tick)),
        )

    @classmethod
    def from_args(cls, args) -> "MazeConfig":
        """Builds a config from an argparse namespace, ignoring options that were not given."""
        config = cls()
        mapping = {
            "width": "width",
            "height": "height",
            "walls": "wall_probability",
            "cell_size": "cell_size",
            "start": "start",
            "goal": "goal",
            "delay": "step_delay",
            "seed": "seed",
            "steps_per_tick": "max_steps_per_tick",
        }
        changes = {}
        for arg_name, field in mapping.items():
            value = getattr(args, arg_name, None)
            if value is not None:
                changes[field] = tuple(value) if field in ("start", "goal") else value
        return config.replace(**changes).sanitized()


def clamp_coord(coord: Tuple[int, int], width: int, height: int) -> Tuple[int, int]:
    x, y = int(coord[0]), int(coord[1])
    cx = min(max(x, 0), width - 1)
    cy = min(max(y, 0), height - 1)
    if (cx, cy) != (x, y):
        logger.warning(f"Coordinate ({x}, {y}) outside {width}x{height} grid, clamped to ({cx}, {cy})")
    return (cx, cy)
