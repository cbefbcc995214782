"""
Deterministic 2D rigid body world using Pymunk.

Critical for determinism:
- Fixed timestep (DT = 1/60.0) unless the caller passes its own dt
- NO threaded mode (space.threaded = False by default)
- Bodies and fixtures tracked in creation order

Consumers (scene builder, renderer, loop) only see PhysicsSimulation and
Fixture views; the pymunk shapes behind a fixture are an implementation detail.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

import pymunk


@dataclass
class Fixture:
    """A shape plus material properties attached to a body.

    Attributes:
        body: Owning pymunk body
        kind: "polygon", "circle", "edge" or "chain"
        vertices: Vertices in body-local coordinates
        radius: Circle radius (0 for non-circles)
        center: Circle center in body-local coordinates
        density: Material density (0 for static fixtures)
        friction: Friction coefficient
        shapes: Pymunk shapes realising this fixture
    """

    body: pymunk.Body
    kind: str
    vertices: List[Tuple[float, float]] = field(default_factory=list)
    radius: float = 0.0
    center: Tuple[float, float] = (0.0, 0.0)
    density: float = 0.0
    friction: float = 0.0
    shapes: List[pymunk.Shape] = field(default_factory=list)


@dataclass
class MotorJoint:
    """Pivot constraint plus the motor driving it."""

    pivot: pymunk.PivotJoint
    motor: pymunk.SimpleMotor

    @property
    def constraints(self) -> tuple:
        return self.pivot, self.motor


class PhysicsSimulation:
    """
    A deterministic physics world wrapper around Pymunk.

    The world keeps bodies and their fixtures in creation order so that
    iteration (and therefore rendering) is reproducible.
    """

    DT = 1/60.0  # Default fixed timestep

    def __init__(self, gravity: tuple = (0, -10)):
        """
        Initialize the physics world.

        Args:
            gravity: Gravity vector as (x, y) in world units per second squared.
        """
        self.space = pymunk.Space()
        self.space.gravity = gravity
        # DO NOT use space.threaded = True - breaks determinism
        self.frame = 0
        self.time = 0.0
        self.bodies: List[pymunk.Body] = []  # All bodies in creation order
        self.fixtures: List[Fixture] = []
        self.joints: List[MotorJoint] = []

    @property
    def gravity(self) -> Tuple[float, float]:
        g = self.space.gravity
        return (g.x, g.y)

    def add_body(self, body: pymunk.Body, fixture: Optional[Fixture] = None) -> None:
        """
        Add a body (static or dynamic) and optionally its first fixture.

        Args:
            body: The Pymunk body to add
            fixture: Fixture attached to the body
        """
        if body not in self.bodies:
            self.space.add(body)
            self.bodies.append(body)
        if fixture is not None:
            self.add_fixture(fixture)

    def add_fixture(self, fixture: Fixture) -> None:
        """Attach a fixture to a body that is already in the world."""
        if fixture.body not in self.bodies:
            raise ValueError("Fixture body must be added to the world first")
        self.space.add(*fixture.shapes)
        self.fixtures.append(fixture)

    def add_joint(self, joint: MotorJoint) -> None:
        """Add a motorized joint to the world."""
        self.space.add(*joint.constraints)
        self.joints.append(joint)

    def iter_fixtures(self) -> Iterator[Tuple[pymunk.Body, Fixture]]:
        """Yield (body, fixture) for every body, in creation order."""
        for body in self.bodies:
            for fixture in self.fixtures_of(body):
                yield body, fixture

    def fixtures_of(self, body: pymunk.Body) -> List[Fixture]:
        return [f for f in self.fixtures if f.body is body]

    def step(self, dt: Optional[float] = None) -> None:
        """
        Advance the world by dt seconds (default: one fixed timestep).
        """
        dt = self.DT if dt is None else dt
        self.space.step(dt)
        self.frame += 1
        self.time += dt

    def get_state(self) -> dict:
        """
        Get the current state of all dynamic bodies.

        Returns:
            dict with:
                - frame: Number of steps taken
                - objects: List of body states with position, velocity,
                          angle and angular_velocity
        """
        objects = []
        for i, body in enumerate(self.bodies):
            if body.body_type != pymunk.Body.DYNAMIC:
                continue
            objects.append({
                "id": i,
                "position": {"x": round(body.position.x, 4), "y": round(body.position.y, 4)},
                "velocity": {"x": round(body.velocity.x, 4), "y": round(body.velocity.y, 4)},
                "angle": round(body.angle, 6),
                "angular_velocity": round(body.angular_velocity, 6),
            })

        return {
            "frame": self.frame,
            "objects": objects
        }


def step_world(world: PhysicsSimulation, dt: float) -> None:
    """Step the physics world forward by exactly dt seconds."""
    world.step(dt)
