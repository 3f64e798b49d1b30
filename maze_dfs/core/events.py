from typing import NamedTuple

# Event Types (one per solver suspension point)
EVT_ENTER = 0x01      # cell pushed on the search stack
EVT_BACKTRACK = 0x02  # cell popped after every neighbour failed

EVENT_NAMES = {
    EVT_ENTER: "enter",
    EVT_BACKTRACK: "backtrack",
}


class StepEvent(NamedTuple):
    kind: int
    x: int
    y: int
    depth: int  # stack depth, start cell = 1

    @property
    def cell(self):
        return (self.x, self.y)

    def __str__(self):
        return f"{EVENT_NAMES.get(self.kind, self.kind)} ({self.x}, {self.y}) depth={self.depth}"
