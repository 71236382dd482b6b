import logging
from typing import List, Optional, Tuple

import pygame

from maze_lab.core.board import Board, MazeInvariantError, MazeState
from maze_lab.core.session import MazeSession
from maze_lab.viz.recorder import VideoRecorder

logger = logging.getLogger(__name__)


class Renderer:
    """
    pygame window over a MazeSession. Reads Board.mask and the solver path,
    calls session.tick() once per frame and never touches the board itself.

    Keys: SPACE starts generation / solving, R builds a fresh maze,
    mouse wheel zooms, drag pans.
    """
    COLOR_BG = (10, 10, 10)
    COLOR_WALL = (200, 200, 200)
    COLOR_VISITED = (60, 100, 160)  # Blue tint
    COLOR_BACKTRACK = (120, 60, 160)
    COLOR_CURSOR = (230, 80, 80)
    COLOR_WEIGHT = (40, 130, 90)
    COLOR_CROSSED = (90, 30, 30)
    COLOR_ARROW = (220, 160, 40)
    COLOR_SOLUTION = (255, 215, 0)  # Gold

    def __init__(self, session: MazeSession, width=1280, height=720, record=False,
                 output_file: Optional[str] = None):
        self.session = session
        self.screen_width = width
        self.screen_height = height

        # Camera
        self.cell_size = 20.0  # Pixels per cell
        self.offset_x = 0.0
        self.offset_y = 0.0
        self.zoom_speed = 1.1

        self.recorder = VideoRecorder(active=record, output_file=output_file)

        self.font = None
        self.running = True
        self.clock = None
        self.surface = None

    @property
    def board(self) -> Board:
        return self.session.board

    def fit_to_screen(self):
        """Auto-adjust zoom and pan to fit the entire board on screen with padding."""
        padding = 40
        available_w = self.screen_width - (padding * 2)
        available_h = self.screen_height - (padding * 2)
        size = self.board.board_size

        self.cell_size = min(available_w / size, available_h / size)

        total = size * self.cell_size
        self.offset_x = (self.screen_width - total) / 2
        self.offset_y = (self.screen_height - total) / 2

    def init_window(self):
        pygame.init()
        size = self.board.board_size
        pygame.display.set_caption(f"Maze Lab - {size}x{size}")
        self.surface = pygame.display.set_mode((self.screen_width, self.screen_height), pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("Consolas", 16)
        self.fit_to_screen()

    def world_to_screen(self, wx, wy) -> Tuple[float, float]:
        sx = wx * self.cell_size + self.offset_x
        sy = wy * self.cell_size + self.offset_y
        return sx, sy

    @classmethod
    def cell_color(cls, bits: int) -> Optional[Tuple[int, int, int]]:
        """Fill color for one mask word, None for an untouched cell."""
        if bits & Board.CELL_CURSOR:
            return cls.COLOR_CURSOR
        if bits & Board.CROSSED:
            return cls.COLOR_CROSSED
        if bits & Board.CELL_BACKTRACK:
            return cls.COLOR_BACKTRACK
        if bits & Board.ARROW_BITS:
            return cls.COLOR_ARROW
        if bits & Board.CELL_WEIGHT:
            return cls.COLOR_WEIGHT
        if bits & Board.CELL_VISITED:
            return cls.COLOR_VISITED
        return None

    def path_points(self, path: List[int]) -> List[Tuple[float, float]]:
        """Screen coordinates of the cell centers along `path`."""
        half = self.cell_size / 2
        points = []
        for index in path:
            cell = self.board.cells[index]
            sx, sy = self.world_to_screen(cell.x, cell.y)
            points.append((sx + half, sy + half))
        return points

    def handle_input(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.screen_width, self.screen_height = event.w, event.h

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    state = self.session.state
                    if state == MazeState.WAIT:
                        self.session.start_generation()
                    elif state in (MazeState.GENERATION_DONE, MazeState.DONE):
                        self.session.start_solving()
                elif event.key == pygame.K_r:
                    self.session.init_maze()
                elif event.key == pygame.K_ESCAPE:
                    self.running = False

            elif event.type == pygame.MOUSEWHEEL:
                # Zoom towards mouse
                mx, my = pygame.mouse.get_pos()
                wx = (mx - self.offset_x) / self.cell_size
                wy = (my - self.offset_y) / self.cell_size

                if event.y > 0:
                    self.cell_size *= self.zoom_speed
                else:
                    self.cell_size /= self.zoom_speed
                self.cell_size = max(1.0, min(200.0, self.cell_size))

                self.offset_x = mx - wx * self.cell_size
                self.offset_y = my - wy * self.cell_size

            elif event.type == pygame.MOUSEMOTION:
                if pygame.mouse.get_pressed()[0] or pygame.mouse.get_pressed()[2]:  # Left or Right drag
                    self.offset_x += event.rel[0]
                    self.offset_y += event.rel[1]

    def draw_board(self):
        self.surface.fill(self.COLOR_BG)
        board = self.board
        size = int(self.cell_size) + 1

        # 1. Cell backgrounds
        for index, bits in enumerate(board.mask):
            color = self.cell_color(bits)
            if color is None:
                continue
            cell = board.cells[index]
            px, py = self.world_to_screen(cell.x, cell.y)
            pygame.draw.rect(self.surface, color, (int(px), int(py), size, size))

        # 2. Walls
        for index, bits in enumerate(board.mask):
            cell = board.cells[index]
            px, py = self.world_to_screen(cell.x, cell.y)
            px, py = int(px), int(py)
            if bits & Board.WALL_BOTTOM:
                pygame.draw.line(self.surface, self.COLOR_WALL, (px, py + size), (px + size, py + size), 1)
            if bits & Board.WALL_RIGHT:
                pygame.draw.line(self.surface, self.COLOR_WALL, (px + size, py), (px + size, py + size), 1)
            if cell.y == 0 and bits & Board.WALL_TOP:
                pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px + size, py), 1)
            if cell.x == 0 and bits & Board.WALL_LEFT:
                pygame.draw.line(self.surface, self.COLOR_WALL, (px, py), (px, py + size), 1)

        # 3. Solver path
        path = self.session.path
        if self.session.state in (MazeState.SOLVE, MazeState.DONE) and len(path) > 1:
            width = max(1, int(self.cell_size / 4))
            pygame.draw.lines(self.surface, self.COLOR_SOLUTION, False, self.path_points(path), width)

    def draw_hud(self):
        fps = int(self.clock.get_fps())
        size = self.board.board_size
        info = [
            f"FPS: {fps}",
            f"Size: {size}x{size}",
            f"Generator: {self.session.generator_kind}",
            f"Solver: {self.session.solver_kind}",
            f"Status: {self.session.state}",
            f"Path: {len(self.session.path)}",
            "REC" if self.recorder.active else "",
        ]
        for i, text in enumerate(info):
            lbl = self.font.render(text, True, (255, 255, 255))
            self.surface.blit(lbl, (10, 10 + i * 20))

    def run_loop(self):
        while self.running:
            self.handle_input()
            # DONE is kept on screen until the next key press
            if self.session.state != MazeState.DONE:
                try:
                    self.session.tick()
                except MazeInvariantError as e:
                    logger.error(f"Solver stopped: {e}")
                    self.session.state = MazeState.GENERATION_DONE

            self.draw_board()
            self.draw_hud()
            pygame.display.flip()

            if self.recorder.active:
                self.recorder.capture_frame(self.surface)

            self.clock.tick(60)

        self.recorder.stop()
        pygame.quit()
