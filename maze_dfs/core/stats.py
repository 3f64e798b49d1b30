from maze_dfs.core.grid import GridModel


class MazeStats:
    @staticmethod
    def calculate_stats(grid: GridModel):
        """
        Counts cells by solver state.
        explored = visited cells that have left the stack (dead ends of the search).
        """
        walls = 0
        visited = 0
        on_stack = 0
        on_path = 0
        explored = 0

        for val in grid.cells:
            if val & GridModel.WALL:
                walls += 1
                continue
            if not (val & GridModel.VISITED):
                continue
            visited += 1
            if val & GridModel.ON_STACK:
                on_stack += 1
            if val & GridModel.PATH:
                on_path += 1
            elif not (val & GridModel.ON_STACK):
                explored += 1

        total = grid.width * grid.height
        open_cells = total - walls
        return {
            "cells": total,
            "walls": walls,
            "open": open_cells,
            "wall_percent": (walls / total) * 100 if total > 0 else 0,
            "visited": visited,
            "on_stack": on_stack,
            "explored": explored,
            "path_length": on_path,
            "coverage_percent": (visited / open_cells) * 100 if open_cells > 0 else 0,
        }

    @staticmethod
    def format_stats(stats) -> str:
        return (f"{stats['cells']} cells, {stats['walls']} walls ({stats['wall_percent']:.1f}%), "
                f"visited {stats['visited']} ({stats['coverage_percent']:.1f}% of open), "
                f"explored {stats['explored']}, on stack {stats['on_stack']}, path {stats['path_length']}")
