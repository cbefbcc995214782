"""
Factory functions for creating vehicle and terrain fixtures with validated properties.

Material property constraints:
- density: positive float (mass = density * area)
- friction: non-negative, typically 0.0-1.5
"""

import math
from typing import List, Optional, Sequence, Tuple

import pymunk

from hillcar.physics.simulation import Fixture

# Thickness of terrain segments in world units
SEGMENT_RADIUS = 0.02


def validate_material_properties(density: float, friction: float) -> None:
    """
    Validate material properties to prevent physics instability.

    Args:
        density: Density of the fixture (must be positive)
        friction: Friction coefficient (must be non-negative)

    Raises:
        ValueError: If any property is out of valid range
    """
    if density <= 0:
        raise ValueError(f"Density must be positive, got {density}")
    if friction < 0:
        raise ValueError(f"Friction must be non-negative, got {friction}")


def create_box(
    pos: Tuple[float, float],
    half_width: float,
    half_height: float,
    density: float,
    friction: float,
    shape_filter: Optional[pymunk.ShapeFilter] = None,
) -> Tuple[pymunk.Body, Fixture]:
    """
    Create a dynamic rectangular body.

    Args:
        pos: Initial position as (x, y) - center of the box
        half_width: Half of the box width
        half_height: Half of the box height
        density: Density used to derive the body mass
        friction: Friction coefficient
        shape_filter: Optional collision filter (e.g. a shared vehicle group)

    Returns:
        Tuple of (body, fixture)
    """
    validate_material_properties(density, friction)

    size = (half_width * 2, half_height * 2)
    mass = density * size[0] * size[1]
    moment = pymunk.moment_for_box(mass, size)

    body = pymunk.Body(mass, moment)
    body.position = pos

    shape = pymunk.Poly.create_box(body, size)
    shape.friction = friction
    if shape_filter is not None:
        shape.filter = shape_filter

    fixture = Fixture(
        body=body,
        kind="polygon",
        vertices=[tuple(v) for v in shape.get_vertices()],
        density=density,
        friction=friction,
        shapes=[shape],
    )
    return body, fixture


def create_circle(
    pos: Tuple[float, float],
    radius: float,
    density: float,
    friction: float,
    shape_filter: Optional[pymunk.ShapeFilter] = None,
) -> Tuple[pymunk.Body, Fixture]:
    """
    Create a dynamic circular body.

    Args:
        pos: Initial position as (x, y)
        radius: Circle radius
        density: Density used to derive the body mass
        friction: Friction coefficient
        shape_filter: Optional collision filter

    Returns:
        Tuple of (body, fixture)
    """
    validate_material_properties(density, friction)

    mass = density * math.pi * radius ** 2
    moment = pymunk.moment_for_circle(mass, 0, radius)

    body = pymunk.Body(mass, moment)
    body.position = pos

    shape = pymunk.Circle(body, radius)
    shape.friction = friction
    if shape_filter is not None:
        shape.filter = shape_filter

    fixture = Fixture(
        body=body,
        kind="circle",
        radius=radius,
        center=(0.0, 0.0),
        density=density,
        friction=friction,
        shapes=[shape],
    )
    return body, fixture


def create_static_edge(
    p1: Tuple[float, float],
    p2: Tuple[float, float],
    friction: float = 0.6,
) -> Tuple[pymunk.Body, Fixture]:
    """
    Create a static line segment (flat ground).

    Args:
        p1: Start point as (x, y)
        p2: End point as (x, y)
        friction: Friction coefficient (default 0.6)

    Returns:
        Tuple of (body, fixture)
    """
    if friction < 0:
        raise ValueError(f"Friction must be non-negative, got {friction}")

    body = pymunk.Body(body_type=pymunk.Body.STATIC)

    shape = pymunk.Segment(body, p1, p2, radius=SEGMENT_RADIUS)
    shape.friction = friction

    fixture = Fixture(
        body=body,
        kind="edge",
        vertices=[tuple(p1), tuple(p2)],
        friction=friction,
        shapes=[shape],
    )
    return body, fixture


def create_static_chain(
    points: Sequence[Tuple[float, float]],
    friction: float = 0.6,
    loop: bool = False,
) -> Tuple[pymunk.Body, Fixture]:
    """
    Create a static polyline (terrain) from consecutive points.

    Each consecutive pair becomes one segment; neighbouring segments are
    linked so bodies slide smoothly across the joins.

    Args:
        points: Chain vertices in order
        friction: Friction coefficient (default 0.6)
        loop: Close the chain back to its first point

    Returns:
        Tuple of (body, fixture)
    """
    if friction < 0:
        raise ValueError(f"Friction must be non-negative, got {friction}")
    if len(points) < 2:
        raise ValueError(f"Chain needs at least 2 points, got {len(points)}")

    body = pymunk.Body(body_type=pymunk.Body.STATIC)

    vertices: List[Tuple[float, float]] = [tuple(p) for p in points]
    pairs = list(zip(vertices[:-1], vertices[1:]))
    if loop:
        pairs.append((vertices[-1], vertices[0]))

    shapes = []
    for a, b in pairs:
        shape = pymunk.Segment(body, a, b, radius=SEGMENT_RADIUS)
        shape.friction = friction
        shapes.append(shape)

    # Smooth collisions across segment joins
    for i, shape in enumerate(shapes):
        prev_b = shapes[i - 1].a if (i > 0 or loop) else shape.a
        next_a = shapes[(i + 1) % len(shapes)].b if (i < len(shapes) - 1 or loop) else shape.b
        shape.set_neighbors(prev_b, next_a)

    fixture = Fixture(
        body=body,
        kind="chain",
        vertices=vertices + ([vertices[0]] if loop else []),
        friction=friction,
        shapes=shapes,
    )
    return body, fixture
