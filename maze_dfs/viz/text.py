from maze_dfs.core.grid import GridModel

# Same priority as the window renderer: wall > path > on stack > visited > open,
# start/goal drawn on top.
CHAR_WALL = "#"
CHAR_PATH = "*"
CHAR_STACK = "o"
CHAR_VISITED = "."
CHAR_OPEN = " "
CHAR_START = "S"
CHAR_GOAL = "G"


def cell_char(grid: GridModel, x: int, y: int) -> str:
    if (x, y) == grid.start:
        return CHAR_START
    if (x, y) == grid.goal:
        return CHAR_GOAL

    val = grid.cells[y * grid.width + x]
    if val & GridModel.WALL:
        return CHAR_WALL
    if val & GridModel.PATH:
        return CHAR_PATH
    if val & GridModel.ON_STACK:
        return CHAR_STACK
    if val & GridModel.VISITED:
        return CHAR_VISITED
    return CHAR_OPEN


def render_text(grid: GridModel, frame: bool = True) -> str:
    rows = []
    for y in range(grid.height):
        rows.append("".join(cell_char(grid, x, y) for x in range(grid.width)))
    if frame:
        edge = "+" + "-" * grid.width + "+"
        rows = [edge] + [f"|{row}|" for row in rows] + [edge]
    return "\n".join(rows)
