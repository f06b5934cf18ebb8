"""
Pygame Renderer for 3D spring-mass models.

Projects particle positions through an orthographic yaw/pitch camera and
draws springs (colored by strain) and particles (fixed ones highlighted).

Usage:
    from springsim.pygame_renderer import Camera, Renderer

    renderer = Renderer(window_width=1000, window_height=700)
    renderer.camera.fit(model.particle_positions(), 1000, 700)

    # In render loop:
    canvas = renderer.create_canvas()
    renderer.draw_grid(canvas)
    renderer.draw_springs(canvas, model.spring_segments(), model.normalized_strains())
    renderer.draw_particles(canvas, model.particle_positions(), model.fixed_mask())
    renderer.draw_info_text(canvas, [("Cloth", renderer.WHITE)])
"""

import math
from typing import List, Optional, Tuple

import numpy as np
import pygame


class Camera:
    """
    Orthographic camera.

    A world point p is rotated about the vertical axis by ``yaw``, then
    about the horizontal screen axis by ``pitch``, relative to ``target``.
    The rotated x/y are scaled by ``scale`` pixels per world unit; screen y
    grows downward.
    """

    def __init__(self, yaw: float = 0.0, pitch: float = 0.0, scale: float = 20.0,
                 target=(0.0, 0.0, 0.0)):
        self.yaw = yaw
        self.pitch = pitch
        self.scale = scale
        self.target = np.array(target, dtype=np.float64)

    def rotation(self) -> np.ndarray:
        cy, sy = math.cos(self.yaw), math.sin(self.yaw)
        cp, sp = math.cos(self.pitch), math.sin(self.pitch)
        r_yaw = np.array([[cy, 0.0, sy],
                          [0.0, 1.0, 0.0],
                          [-sy, 0.0, cy]])
        r_pitch = np.array([[1.0, 0.0, 0.0],
                            [0.0, cp, -sp],
                            [0.0, sp, cp]])
        return r_pitch @ r_yaw

    def project(self, positions: np.ndarray, window_width: int, window_height: int) -> np.ndarray:
        """
        Project world positions to screen pixels.

        Args:
            positions: Array of shape (N, 3)

        Returns:
            Array of shape (N, 2) with [screen_x, screen_y] float coordinates
        """
        local = (np.asarray(positions, dtype=np.float64).reshape(-1, 3) - self.target) @ self.rotation().T
        screen = np.empty((len(local), 2))
        screen[:, 0] = window_width / 2.0 + local[:, 0] * self.scale
        screen[:, 1] = window_height / 2.0 - local[:, 1] * self.scale
        return screen

    def fit(self, positions: np.ndarray, window_width: int, window_height: int, margin: float = 0.7):
        """Center on the bounding box of ``positions`` and zoom to fill ``margin`` of the window."""
        positions = np.asarray(positions, dtype=np.float64).reshape(-1, 3)
        if len(positions) == 0:
            return
        lo = positions.min(axis=0)
        hi = positions.max(axis=0)
        self.target = (lo + hi) / 2.0
        extent = max(float(np.linalg.norm(hi - lo)), 1.0)
        self.scale = margin * min(window_width, window_height) / extent

    def rotate(self, d_yaw: float = 0.0, d_pitch: float = 0.0):
        self.yaw += d_yaw
        self.pitch = float(np.clip(self.pitch + d_pitch, -math.pi / 2, math.pi / 2))


class Renderer:
    """
    Pygame renderer for spring-mass models.

    All drawing methods take world-space numpy arrays and a pygame surface.
    """

    # ========================================================================
    # COLOR CONSTANTS
    # ========================================================================

    WHITE = (255, 255, 255)
    BLACK = (0, 0, 0)
    GREY = (100, 100, 100)
    BACKGROUND = (30, 30, 38)
    GRID = (55, 55, 66)

    PARTICLE_FILL = (0, 220, 0)       # Green
    PARTICLE_OUTLINE = (0, 0, 0)
    FIXED_FILL = (255, 105, 180)      # Hot pink anchors

    # Spring: Orange (compression) -> Yellow (rest) -> Red (tension)
    SPRING_COLORS = [(255, 165, 0), (255, 255, 0), (255, 0, 0)]

    def __init__(
        self,
        window_width: int = 1000,
        window_height: int = 700,
        camera: Optional[Camera] = None,
        particle_radius: int = 4,
        particle_outline: int = 5,
        spring_min_width: int = 1,
        spring_max_width: int = 4,
        font_size: int = 24,
        font_size_small: int = 18,
    ):
        self.window_width = window_width
        self.window_height = window_height
        self.camera = camera or Camera()

        self.particle_radius = particle_radius
        self.particle_outline = particle_outline
        self.spring_min_width = spring_min_width
        self.spring_max_width = spring_max_width

        # Fonts (initialized lazily)
        self._font = None
        self._font_small = None
        self._font_size = font_size
        self._font_size_small = font_size_small

    @property
    def font(self):
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, self._font_size)
        return self._font

    @property
    def font_small(self):
        if self._font_small is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font_small = pygame.font.Font(None, self._font_size_small)
        return self._font_small

    # ========================================================================
    # COORDINATE CONVERSION
    # ========================================================================

    def world_to_screen_array(self, positions: np.ndarray) -> np.ndarray:
        """Project (N, 3) world positions to (N, 2) integer pixel coordinates."""
        screen = self.camera.project(positions, self.window_width, self.window_height)
        return np.round(screen).astype(np.int32)

    def reset_view(self, positions: np.ndarray):
        self.camera.fit(positions, self.window_width, self.window_height)

    # ========================================================================
    # DRAWING
    # ========================================================================

    def create_canvas(self, background_color=None) -> pygame.Surface:
        canvas = pygame.Surface((self.window_width, self.window_height))
        canvas.fill(background_color or self.BACKGROUND)
        return canvas

    def draw_grid(self, canvas: pygame.Surface, size: int = 20, spacing: float = 2.0, color=None):
        """Draw a horizontal ground grid below the camera target."""
        color = color or self.GRID
        half = size * spacing / 2.0
        y = self.camera.target[1] - half
        cx, cz = self.camera.target[0], self.camera.target[2]

        for k in range(size + 1):
            offset = -half + k * spacing
            lines = np.array([
                [cx + offset, y, cz - half], [cx + offset, y, cz + half],
                [cx - half, y, cz + offset], [cx + half, y, cz + offset],
            ])
            screen = self.world_to_screen_array(lines)
            pygame.draw.line(canvas, color, tuple(screen[0]), tuple(screen[1]), 1)
            pygame.draw.line(canvas, color, tuple(screen[2]), tuple(screen[3]), 1)

    def draw_springs(
        self,
        canvas: pygame.Surface,
        segments: np.ndarray,
        strains: Optional[np.ndarray] = None,
    ):
        """
        Draw springs with strain-based coloring.

        Segments that land on the same screen pixels are drawn once, which
        matters for the cube's stacked particles.

        Args:
            canvas: pygame Surface to draw on
            segments: Array of shape (S, 2, 3) with spring endpoint positions
            strains: Normalized strain values in [-1, 1] per spring, or None
        """
        if segments is None or len(segments) == 0:
            return

        num_springs = len(segments)
        if strains is not None:
            colors, thicknesses = self._compute_spring_visuals(strains)
        else:
            colors = np.full((num_springs, 3), self.SPRING_COLORS[1], dtype=np.uint8)
            thicknesses = np.full(num_springs, self.spring_min_width, dtype=np.int32)

        screen = self.world_to_screen_array(segments.reshape(-1, 3)).reshape(num_springs, 4)
        _, unique = np.unique(screen, axis=0, return_index=True)

        for s in unique:
            x0, y0, x1, y1 = screen[s]
            pygame.draw.line(canvas, tuple(int(c) for c in colors[s]), (x0, y0), (x1, y1), int(thicknesses[s]))

    def _compute_spring_visuals(self, normalized_strains: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Spring colors and line widths from normalized strains in [-1, 1].
        """
        t_values = (np.clip(normalized_strains, -1.0, 1.0) + 1.0) / 2.0
        colors = self._diverging_colors(t_values)

        width_range = self.spring_max_width - self.spring_min_width
        thicknesses = np.clip(
            self.spring_min_width + (np.abs(normalized_strains) * width_range).astype(int),
            self.spring_min_width,
            self.spring_max_width,
        )
        return colors, thicknesses

    def _diverging_colors(self, t: np.ndarray) -> np.ndarray:
        """
        Three-point gradient for t in [0, 1]:
            t=0.0 → compression, t=0.5 → rest, t=1.0 → tension
        """
        c0, c1, c2 = (np.array(c, dtype=np.float64) for c in self.SPRING_COLORS)
        t = np.asarray(t, dtype=np.float64)[:, None]
        low = c0 + (c1 - c0) * (t * 2.0)
        high = c1 + (c2 - c1) * ((t - 0.5) * 2.0)
        return np.where(t < 0.5, low, high).astype(np.uint8)

    def draw_particles(
        self,
        canvas: pygame.Surface,
        positions: np.ndarray,
        fixed: Optional[np.ndarray] = None,
    ):
        """
        Draw particles as circles; fixed particles use FIXED_FILL.

        Args:
            positions: Array of shape (N, 3)
            fixed: Boolean mask of shape (N,), or None
        """
        finite = np.all(np.isfinite(positions), axis=1)
        screen = self.world_to_screen_array(np.where(finite[:, None], positions, 0.0))

        for k in np.nonzero(finite)[0]:
            fill = self.FIXED_FILL if fixed is not None and fixed[k] else self.PARTICLE_FILL
            pos = tuple(screen[k])
            pygame.draw.circle(canvas, self.PARTICLE_OUTLINE, pos, self.particle_outline)
            pygame.draw.circle(canvas, fill, pos, self.particle_radius)

    def draw_info_text(
        self,
        canvas: pygame.Surface,
        lines: List[Tuple[str, Tuple[int, int, int]]],
        position: Tuple[int, int] = (10, 10),
        line_spacing: int = 20,
    ):
        """
        Draw multiple lines of info text.

        Args:
            lines: List of (text, color) tuples
        """
        x, y = position
        for i, (text, color) in enumerate(lines):
            text_surface = self.font_small.render(text, True, color)
            canvas.blit(text_surface, (x, y + i * line_spacing))
