import logging

import pygame

from maze_dfs.core.grid import GridModel
from maze_dfs.core.session import MazeSession
from maze_dfs.viz.recorder import VideoRecorder

logger = logging.getLogger(__name__)


class Renderer:
    COLOR_BG = (10, 10, 10)
    COLOR_OPEN = (230, 230, 230)
    COLOR_WALL = (0, 0, 0)
    COLOR_VISITED = (128, 128, 128)   # explored, dead end
    COLOR_STACK = (255, 235, 4)       # on the recursion stack
    COLOR_PATH = (0, 200, 0)
    COLOR_START = (0, 0, 255)
    COLOR_GOAL = (255, 0, 0)
    COLOR_BORDER = (90, 90, 90)

    LEGEND = [
        ("Start", COLOR_START),
        ("Goal", COLOR_GOAL),
        ("Visiting (stack)", COLOR_STACK),
        ("Visited (dead end)", COLOR_VISITED),
        ("Final path", COLOR_PATH),
    ]

    def __init__(self, session: MazeSession, width=1280, height=720, record=False):
        self.session = session
        self.screen_width = width
        self.screen_height = height

        # Camera
        self.cell_size = float(session.cell_size)  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        self.recorder = VideoRecorder(active=record)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None

    def fit_to_screen(self):
        """Zooms and pans so the whole grid is visible, but never above the configured cell size."""
        grid = self.session.grid
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)

        self.cell_size = min(available_w / grid.width, available_h / grid.height, self.session.cell_size)

        self.offset_x = (self.screen_width - grid.width * self.cell_size) / 2
        self.offset_y = (self.screen_height - grid.height * self.cell_size) / 2

    def init_window(self):
        if self.session.grid is None:
            self.session.generate()

        pygame.init()
        grid = self.session.grid
        pygame.display.set_caption(f"DFS Maze - {grid.width}x{grid.height}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h
                self.fit_to_screen()

            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

            elif event.type == pygame.MOUSEWHEEL:
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(1.0, min(200.0, self.cell_size))

                # Keep the cell under the mouse in place
                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]:
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def handle_key(self, key):
        session = self.session
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_r:
            # New walls, new search
            session.regenerate_and_solve()
            self.fit_to_screen()
        elif key == pygame.K_SPACE:
            session.reset_and_solve()
        elif key == pygame.K_p:
            if session.paused:
                session.resume()
            else:
                session.pause()
        elif key == pygame.K_n and session.paused:
            session.step(1)
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            session.config = session.config.replace(step_delay=session.config.step_delay / 2)
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            session.config = session.config.replace(step_delay=max(0.001, session.config.step_delay * 2))

    def cell_color(self, grid: GridModel, x: int, y: int):
        if (x, y) == grid.start:
            return self.COLOR_START
        if (x, y) == grid.goal:
            return self.COLOR_GOAL

        val = grid.cells[y * grid.width + x]
        if val & GridModel.WALL:
            return self.COLOR_WALL
        if val & GridModel.PATH:
            return self.COLOR_PATH
        if val & GridModel.ON_STACK:
            return self.COLOR_STACK
        if val & GridModel.VISITED:
            return self.COLOR_VISITED
        return self.COLOR_OPEN

    def draw_grid(self):
        grid = self.session.grid
        self.surface.fill(self.COLOR_BG)

        # Culling: visible cell range only
        start_x = max(0, int(-self.offset_x / self.cell_size))
        start_y = max(0, int(-self.offset_y / self.cell_size))
        end_x = min(grid.width, int((self.screen_width - self.offset_x) / self.cell_size) + 1)
        end_y = min(grid.height, int((self.screen_height - self.offset_y) / self.cell_size) + 1)

        size = max(1, int(self.cell_size * 0.95))
        draw_borders = self.cell_size > 6.0

        for y in range(start_y, end_y):
            for x in range(start_x, end_x):
                px = int(x * self.cell_size + self.offset_x)
                py = int(y * self.cell_size + self.offset_y)
                rect = (px, py, size, size)
                pygame.draw.rect(self.surface, self.cell_color(grid, x, y), rect)
                if draw_borders:
                    pygame.draw.rect(self.surface, self.COLOR_BORDER, rect, 1)

    def draw_hud(self):
        session = self.session
        grid = session.grid
        visited = session.solver.visited_count if session.solver else 0
        rec_status = "REC" if self.recorder.active else ""
        paused = " (paused)" if session.paused else ""

        info = [
            "Recursive Backtracking Visualizer",
            f"Grid: {grid.width} x {grid.height}, walls={session.config.wall_probability:.2f}",
            f"Step delay: {session.config.step_delay:.3f}s",
            f"Status: {session.state}{paused}  Steps: {session.step_count}",
            f"Visited: {visited}  Path: {len(session.path)}",
            "R: regenerate  Space: re-solve  P: pause  N: step  +/-: speed",
            rec_status,
        ]

        line = 18
        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * line))

        top = 10 + len(info) * line
        for i, (name, color) in enumerate(self.LEGEND):
            y = top + i * line
            pygame.draw.rect(self.surface, color, (20, y + 3, 12, 12))
            lbl = self.font.render(name, True, (255, 255, 255))
            self.surface.blit(lbl, (38, y))

    def run_loop(self):
        if not self.session.is_running:
            self.session.reset_and_solve()

        while self.running:
            self.handle_input()

            self.session.tick()

            self.draw_grid()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(60)

        self.session.cancel()
        self.recorder.stop()
        pygame.quit()
