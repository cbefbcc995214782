"""
Pygame renderer for a hillcar physics world.

- Smooth follow camera (damping + look-ahead offset)
- Zoom with clamping
- Grid background for debugging
- Draws polygons, circles, edges and chains

The renderer only reads bodies and fixtures from the world; it never
touches the underlying physics shapes.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import pygame

# Base screen scale at zoom=1
DEFAULT_PIXELS_PER_UNIT = 30
DEFAULT_MIN_ZOOM = 0.5
DEFAULT_MAX_ZOOM = 2.0

COLORS = {
    "background": (17, 17, 17),
    "grid": (58, 58, 58),
    "terrain": (153, 204, 255),
    "body": (255, 255, 255),
}

TERRAIN_KINDS = ("edge", "chain")

Point = Tuple[float, float]


@dataclass
class RendererConfig:
    """Camera and projection settings.

    Attributes:
        base_scale: Pixels per world unit at zoom=1
        zoom: Initial zoom
        min_zoom: Lower zoom clamp
        max_zoom: Upper zoom clamp
        damping: Camera follow factor per frame (0..1)
        offset_x: Horizontal look-ahead in world units
        offset_y: Vertical lift in world units
        horizon: Screen Y fraction (0..1 from top) where camera.y maps to
        pixel_ratio: Device pixels per logical pixel (>= 1)
    """

    base_scale: float = DEFAULT_PIXELS_PER_UNIT
    zoom: float = 1.0
    min_zoom: float = DEFAULT_MIN_ZOOM
    max_zoom: float = DEFAULT_MAX_ZOOM
    damping: float = 0.12
    offset_x: float = 4.0
    offset_y: float = 0.8
    horizon: float = 0.45
    pixel_ratio: float = 1.0

    def validate(self) -> None:
        if self.base_scale <= 0:
            raise ValueError(f"base_scale must be positive, got {self.base_scale}")
        if self.min_zoom <= 0 or self.min_zoom > self.max_zoom:
            raise ValueError(f"Invalid zoom bounds [{self.min_zoom}, {self.max_zoom}]")
        if not 0.0 <= self.damping <= 1.0:
            raise ValueError(f"damping must be in [0, 1], got {self.damping}")
        if not 0.0 <= self.horizon <= 1.0:
            raise ValueError(f"horizon must be in [0, 1], got {self.horizon}")
        if self.pixel_ratio < 1:
            raise ValueError(f"pixel_ratio must be >= 1, got {self.pixel_ratio}")


@dataclass
class Camera:
    x: float = 0.0
    y: float = 0.0


def clamp(value: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, value))


class Renderer:
    """Draws a world onto a pygame surface, following a target body."""

    def __init__(self, surface: pygame.Surface, world, target, config: Optional[RendererConfig] = None):
        """
        Args:
            surface: Surface to draw into (usually the display surface)
            world: PhysicsSimulation, read-only for the renderer
            target: Body to follow (not owned; may be None)
            config: Camera settings (defaults to RendererConfig())
        """
        self.config = config or RendererConfig()
        self.config.validate()

        self.surface = surface
        self.world = world
        self.target = target

        self.pixel_ratio = self.config.pixel_ratio
        self.zoom = clamp(self.config.zoom, self.config.min_zoom, self.config.max_zoom)
        self.min_zoom = self.config.min_zoom
        self.max_zoom = self.config.max_zoom

        tx, ty = self._target_pos()
        self.camera = Camera(tx + self.config.offset_x, ty + self.config.offset_y)
        self._shapes_logged = False

    # ---------- camera ----------

    def adjust_zoom(self, delta: float) -> None:
        """Add delta to the zoom and clamp to [min_zoom, max_zoom]."""
        self.zoom = clamp(self.zoom + delta, self.min_zoom, self.max_zoom)

    def set_zoom(self, z: float) -> None:
        """Set an absolute zoom (clamped)."""
        self.zoom = clamp(z, self.min_zoom, self.max_zoom)

    def reset_camera(self) -> None:
        """Snap the camera to target + offsets and reset zoom to 1.0."""
        tx, ty = self._target_pos()
        self.camera.x = tx + self.config.offset_x
        self.camera.y = ty + self.config.offset_y
        self.zoom = 1.0

    def set_target(self, target) -> None:
        """Follow a different body and snap the camera to it."""
        self.target = target
        self.reset_camera()

    def resize(self, surface: pygame.Surface) -> None:
        """Draw into a new surface after the window was resized."""
        self.surface = surface

    # ---------- projection ----------

    @property
    def scale(self) -> float:
        """Pixels per world unit at the current zoom."""
        return self.config.base_scale * self.zoom

    def screen_center(self) -> Point:
        w, h = self.surface.get_size()
        return (w * 0.5, h * self.config.horizon)

    def to_screen(self, point: Sequence[float]) -> Point:
        """World (units, +Y up) -> screen (pixels, origin top-left, +Y down)."""
        s = self.scale
        cx, cy = self.screen_center()
        return (
            (point[0] - self.camera.x) * s + cx,
            (self.camera.y - point[1]) * s + cy,
        )

    def to_world(self, point: Sequence[float]) -> Point:
        """Inverse of to_screen."""
        s = self.scale
        cx, cy = self.screen_center()
        return (
            self.camera.x + (point[0] - cx) / s,
            self.camera.y - (point[1] - cy) / s,
        )

    def visible_bounds(self) -> Tuple[float, float, float, float]:
        """Visible world rectangle as (left, right, bottom, top)."""
        w, h = self.surface.get_size()
        left, top = self.to_world((0, 0))
        right, bottom = self.to_world((w, h))
        return left, right, bottom, top

    # ---------- frame ----------

    def render(self) -> None:
        """
        Render one frame:
        - Move the camera towards target + offset with damping
        - Clear the surface
        - Draw the grid
        - Draw every fixture of every body
        """
        self._follow_target()

        self.surface.fill(COLORS["background"])
        self._draw_grid(COLORS["grid"])

        for body, fixture in self.world.iter_fixtures():
            self._draw_fixture(body, fixture)

    def shape_kinds(self) -> List[str]:
        """Distinct fixture kinds present in the world."""
        seen = []
        for _, fixture in self.world.iter_fixtures():
            if fixture.kind not in seen:
                seen.append(fixture.kind)
        return seen

    def log_shape_kinds(self) -> None:
        """Print the fixture kinds once (debug aid)."""
        if self._shapes_logged:
            return
        self._shapes_logged = True
        print(f"[renderer] shapes: {self.shape_kinds()}")

    # ---------- private helpers ----------

    def _target_pos(self) -> Point:
        if self.target is None:
            return (0.0, 0.0)
        p = self.target.position
        return (p[0], p[1])

    def _follow_target(self) -> None:
        if self.target is None:
            return
        tx, ty = self._target_pos()
        aim_x = tx + self.config.offset_x
        aim_y = ty + self.config.offset_y
        a = self.config.damping
        self.camera.x += (aim_x - self.camera.x) * a
        self.camera.y += (aim_y - self.camera.y) * a

    def _line_width(self, base: float) -> int:
        return max(1, int(round(base * self.pixel_ratio / self.zoom)))

    def _draw_grid(self, color) -> None:
        left, right, bottom, top = self.visible_bounds()
        width = self._line_width(1)
        step = 1  # 1 world unit

        x = math.floor(left / step) * step
        while x <= right:
            pygame.draw.line(self.surface, color, self.to_screen((x, bottom)), self.to_screen((x, top)), width)
            x += step

        y = math.floor(bottom / step) * step
        while y <= top:
            pygame.draw.line(self.surface, color, self.to_screen((left, y)), self.to_screen((right, y)), width)
            y += step

    def _project(self, body, vertices) -> List[Point]:
        return [self.to_screen(body.local_to_world(v)) for v in vertices]

    def _color_for(self, fixture):
        return COLORS["terrain"] if fixture.kind in TERRAIN_KINDS else COLORS["body"]

    def _draw_circle(self, body, fixture) -> None:
        center = self.to_screen(body.local_to_world(fixture.center))
        radius = fixture.radius * self.scale
        pygame.draw.circle(self.surface, COLORS["body"], center, radius, self._line_width(2))

    def _draw_polygon(self, body, fixture) -> None:
        if not fixture.vertices:
            return
        points = self._project(body, fixture.vertices)
        if len(points) == 1:
            points = points * 2
        pygame.draw.lines(self.surface, COLORS["body"], True, points, self._line_width(2))

    def _draw_edge(self, body, fixture) -> None:
        if len(fixture.vertices) < 2:
            return
        a, b = self._project(body, fixture.vertices[:2])
        pygame.draw.line(self.surface, COLORS["terrain"], a, b, self._line_width(2))

    def _draw_chain(self, body, fixture) -> None:
        if len(fixture.vertices) < 2:
            return
        points = self._project(body, fixture.vertices)
        pygame.draw.lines(self.surface, self._color_for(fixture), False, points, self._line_width(2))

    def _draw_fixture(self, body, fixture) -> None:
        kind = fixture.kind
        if kind == "circle":
            self._draw_circle(body, fixture)
        elif kind == "polygon":
            self._draw_polygon(body, fixture)
        elif kind == "edge":
            self._draw_edge(body, fixture)
        elif kind == "chain":
            self._draw_chain(body, fixture)
        elif fixture.vertices:
            # Fallback: draw unknown kinds with vertices as a polyline
            self._draw_chain(body, fixture)
