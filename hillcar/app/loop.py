"""
Fixed-timestep simulation loop.

Wires together world creation, rendering and keyboard controls. Physics
advances in fixed increments drained from an accumulator so stepping is
deterministic regardless of frame rate; the renderer draws once per frame.
All mutable loop state lives on a Session owned by the loop.
"""

import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import pygame

from hillcar.physics.scene_generator import create_world
from hillcar.physics.simulation import PhysicsSimulation, step_world
from hillcar.render.renderer import Renderer, RendererConfig
from hillcar.controls.keyboard import setup_controls

SceneFactory = Callable[[], Tuple[PhysicsSimulation, object]]


@dataclass
class LoopConfig:
    """Loop settings.

    Attributes:
        fixed_step: Physics timestep in seconds
        max_frame_time: Largest real-time delta credited per frame (seconds)
        zoom_step: Zoom change per zoom key press
        fps: Display frame cap
        window_size: Logical window size (width, height)
        title: Window caption
    """

    fixed_step: float = 1/60.0
    max_frame_time: float = 0.25
    zoom_step: float = 0.1
    fps: int = 60
    window_size: Tuple[int, int] = (960, 540)
    title: str = "hillcar"


@dataclass
class Session:
    """Everything replaced or mutated by the frame callback."""

    world: PhysicsSimulation
    car: object
    renderer: Renderer
    paused: bool = False
    accumulator: float = 0.0
    last_timestamp: Optional[float] = None


def open_surface(size: Tuple[int, int], title: str = "hillcar", pixel_ratio: float = 1.0) -> pygame.Surface:
    """
    Open the resizable display window.

    Raises:
        RuntimeError: If no drawing surface can be obtained
    """
    pygame.init()
    w = int(round(size[0] * pixel_ratio))
    h = int(round(size[1] * pixel_ratio))
    try:
        surface = pygame.display.set_mode((w, h), pygame.RESIZABLE)
    except pygame.error as e:
        raise RuntimeError(f"Unable to open display surface: {e}") from e
    if surface is None:
        raise RuntimeError("Unable to open display surface")
    pygame.display.set_caption(title)
    return surface


class SimulationLoop:
    """Drives stepping and rendering; exposes the keyboard actions."""

    def __init__(
        self,
        surface: pygame.Surface,
        scene_factory: SceneFactory = create_world,
        renderer_config: Optional[RendererConfig] = None,
        loop_config: Optional[LoopConfig] = None,
        stepper: Callable[[PhysicsSimulation, float], None] = step_world,
    ):
        if surface is None:
            raise RuntimeError("Unable to find a drawing surface")
        self.surface = surface
        self.scene_factory = scene_factory
        self.renderer_config = renderer_config or RendererConfig()
        self.config = loop_config or LoopConfig()
        self.stepper = stepper
        self.session = self._new_session()
        self.controls = setup_controls(self)
        self.running = False

    def _new_session(self) -> Session:
        world, car = self.scene_factory()
        renderer = Renderer(self.surface, world, car, self.renderer_config)
        return Session(world=world, car=car, renderer=renderer)

    # ---------- actions ----------

    def toggle_pause(self) -> None:
        self.session.paused = not self.session.paused

    def reset(self) -> None:
        """Replace world and renderer; clear timing state to avoid jumps."""
        self.session = self._new_session()

    def zoom_in(self) -> None:
        self.session.renderer.adjust_zoom(self.config.zoom_step)

    def zoom_out(self) -> None:
        self.session.renderer.adjust_zoom(-self.config.zoom_step)

    # ---------- frame ----------

    def frame(self, timestamp: float) -> int:
        """
        Run one display frame at timestamp (seconds).

        Returns:
            Number of physics steps taken this frame
        """
        s = self.session
        if s.last_timestamp is None:
            s.last_timestamp = timestamp
        delta = timestamp - s.last_timestamp
        s.last_timestamp = timestamp

        steps = 0
        if not s.paused:
            # Cap catch-up after long stalls
            s.accumulator += min(max(delta, 0.0), self.config.max_frame_time)
            while s.accumulator >= self.config.fixed_step:
                self.stepper(s.world, self.config.fixed_step)
                s.accumulator -= self.config.fixed_step
                steps += 1

        # Render even when paused so the frozen frame stays visible
        s.renderer.render()
        return steps

    def handle_event(self, event) -> None:
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.type == pygame.VIDEORESIZE:
            self.surface = pygame.display.get_surface()
            self.session.renderer.resize(self.surface)
        else:
            self.controls.handle_event(event)

    def run(self, max_frames: Optional[int] = None) -> None:
        """Frame loop: events, step + render, flip, wait for the next frame."""
        clock = pygame.time.Clock()
        self.running = True
        frames = 0
        while self.running:
            for event in pygame.event.get():
                self.handle_event(event)
            if not self.running:
                break
            self.frame(time.perf_counter())
            pygame.display.flip()
            clock.tick(self.config.fps)
            frames += 1
            if max_frames is not None and frames >= max_frames:
                break
        pygame.quit()
