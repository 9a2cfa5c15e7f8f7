from __future__ import annotations

from typing import List, Optional, Tuple
import math

import pygame

from .messages import Pose2D
from .trajectory import TrajectoryMarker


THEME = {
    "bg": (18, 22, 32),
    "grid": (28, 34, 48),
    "axis": (55, 65, 88),
    "robot_fill": (100, 220, 255),
    "robot_outline": (40, 140, 200),
    "robot_arrow": (140, 240, 255),
    "hud_bg": (28, 34, 48),
    "hud_border": (55, 65, 88),
    "hud_text": (200, 220, 255),
}


class TrajectoryRenderer:
    """Top-down view of the odometric trajectory and current pose.

    Coordinates:
    - The odometry origin is mapped to the centre of the window.
    - Y axis is flipped so that +y is up while screen y increases downward.
    - Heading follows the odometry convention: the robot drives along
      (sin(theta), cos(theta)).
    """

    def __init__(
        self,
        window_width: int,
        window_height: int,
        view_width_m: float = 4.0,
        grid_step_m: float = 0.5,
        show_hud: bool = True,
    ) -> None:
        pygame.init()
        pygame.display.set_caption("Odometric Trajectory")
        self.screen = pygame.display.set_mode((window_width, window_height))
        self.clock = pygame.time.Clock()

        self.window_width = window_width
        self.window_height = window_height
        self.view_width_m = view_width_m
        self.view_height_m = view_width_m * window_height / window_width
        self.grid_step_m = grid_step_m
        self.show_hud = show_hud

        # Pixels per meter, same on both axes
        self.scale = window_width / view_width_m

    # ------------------------------------------------------------------
    # Coordinate transforms
    # ------------------------------------------------------------------
    def _world_to_screen(self, x: float, y: float) -> Tuple[int, int]:
        sx = int(self.window_width / 2 + x * self.scale)
        sy = int(self.window_height / 2 - y * self.scale)
        return sx, sy

    def _meters_to_pixels(self, r: float) -> int:
        return int(r * self.scale)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _draw_grid(self) -> None:
        half_w = self.view_width_m / 2.0
        half_h = self.view_height_m / 2.0
        n_x = int(half_w // self.grid_step_m)
        n_y = int(half_h // self.grid_step_m)
        for i in range(-n_x, n_x + 1):
            x = i * self.grid_step_m
            color = THEME["axis"] if i == 0 else THEME["grid"]
            pygame.draw.line(
                self.screen, color, self._world_to_screen(x, -half_h), self._world_to_screen(x, half_h), 1
            )
        for j in range(-n_y, n_y + 1):
            y = j * self.grid_step_m
            color = THEME["axis"] if j == 0 else THEME["grid"]
            pygame.draw.line(
                self.screen, color, self._world_to_screen(-half_w, y), self._world_to_screen(half_w, y), 1
            )

    def draw(self, pose: Pose2D, marker: Optional[TrajectoryMarker] = None, fps: float = 0.0) -> None:
        """Render one frame."""
        self.screen.fill(THEME["bg"])
        self._draw_grid()

        if marker is not None and len(marker.points) >= 2:
            pts: List[Tuple[int, int]] = [self._world_to_screen(p.x, p.y) for p in marker.points]
            width = max(1, self._meters_to_pixels(marker.hints.scale_x))
            pygame.draw.lines(self.screen, marker.hints.color_rgb255(), False, pts, width)

        self._draw_robot(pose)

        if self.show_hud:
            n_points = len(marker.points) if marker is not None else 0
            self._draw_hud(pose, n_points, fps)
        pygame.display.flip()

    def _draw_robot(self, pose: Pose2D) -> None:
        center = self._world_to_screen(pose.x, pose.y)
        radius_px = max(3, self._meters_to_pixels(0.05))
        pygame.draw.circle(self.screen, THEME["robot_fill"], center, radius_px, 0)
        pygame.draw.circle(self.screen, THEME["robot_outline"], center, radius_px, 2)

        arrow_len = 0.15
        hx = pose.x + math.sin(pose.theta) * arrow_len
        hy = pose.y + math.cos(pose.theta) * arrow_len
        pygame.draw.line(self.screen, THEME["robot_arrow"], center, self._world_to_screen(hx, hy), 3)

    def _draw_hud(self, pose: Pose2D, n_points: int, fps: float) -> None:
        pad = 10
        font = pygame.font.SysFont("monospace", 13)
        text = f"  x={pose.x:.3f}  y={pose.y:.3f}  theta={pose.theta:.3f}  pts={n_points}  FPS={fps:.1f}  "
        surf = font.render(text, True, THEME["hud_text"])
        r = surf.get_rect(topleft=(pad, pad))
        panel = r.inflate(pad, pad)
        pygame.draw.rect(self.screen, THEME["hud_bg"], panel)
        pygame.draw.rect(self.screen, THEME["hud_border"], panel, 1)
        self.screen.blit(surf, (panel.x + 4, panel.y + 4))

    def pump_quit(self) -> bool:
        """Process window events; return True when the user asked to quit."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return True
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return True
        return False

    def tick(self, target_fps: int) -> float:
        """Cap frame rate and return achieved FPS."""
        fps = self.clock.get_fps()
        self.clock.tick(target_fps)
        return fps

    def close(self) -> None:
        pygame.quit()
