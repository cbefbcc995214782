"""
Deterministic scene builder for the hill-driving car.

Key determinism requirements:
1. Terrain is a pure function of the x index (no randomness)
2. Create bodies in fixed order: ground, chassis, left wheel, right wheel
3. Never use threaded mode
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
import pymunk

from .simulation import PhysicsSimulation
from .objects import create_box, create_circle, create_static_chain, create_static_edge
from .constraints import create_motor_joint

# Collision group shared by chassis and wheels
VEHICLE_GROUP = 1


@dataclass
class SceneConfig:
    """Construction constants for the terrain and the car.

    Attributes:
        gravity: Gravity vector (world units / s^2)
        terrain_x_min: First terrain x index
        terrain_x_max: Last terrain x index (inclusive)
        terrain_step: Spacing between terrain points
        terrain_friction: Friction of the ground
        chassis_pos: Start position of the chassis
        chassis_half_size: Half extents (w, h) of the chassis box
        chassis_density: Chassis density
        chassis_friction: Chassis friction
        wheel_offset: Horizontal wheel offset from the chassis center
        wheel_y: Start height of both wheels
        wheel_radius: Wheel radius
        wheel_density: Wheel density
        wheel_friction: Wheel friction (grippier than the chassis)
        motor_speed: Target wheel speed relative to chassis (rad/s, CCW positive)
        motor_torque: Maximum motor torque
        flat_half_length: Half length of the flat test-bed ground
    """

    gravity: Tuple[float, float] = (0.0, -10.0)
    terrain_x_min: int = -50
    terrain_x_max: int = 150
    terrain_step: int = 1
    terrain_friction: float = 0.6
    chassis_pos: Tuple[float, float] = (0.0, 1.0)
    chassis_half_size: Tuple[float, float] = (1.0, 0.25)
    chassis_density: float = 1.0
    chassis_friction: float = 0.3
    wheel_offset: float = 0.8
    wheel_y: float = 0.5
    wheel_radius: float = 0.4
    wheel_density: float = 1.0
    wheel_friction: float = 0.9
    motor_speed: float = -10.0
    motor_torque: float = 20.0
    flat_half_length: float = 50.0


def terrain_height(i):
    """Rolling hills: a faster sine wave plus a slower one. Accepts arrays."""
    return np.sin(i * 0.20) * 0.5 + np.sin(i * 0.05) * 0.2


def generate_terrain(x_min: int = -50, x_max: int = 150, step: int = 1) -> List[Tuple[float, float]]:
    """
    Generate terrain points for integer indices in [x_min, x_max].

    Args:
        x_min: First index
        x_max: Last index (inclusive)
        step: Index increment

    Returns:
        List of (x, y) points, ordered by x
    """
    if step <= 0:
        raise ValueError(f"Terrain step must be positive, got {step}")
    xs = np.arange(x_min, x_max + 1, step, dtype=np.float64)
    ys = terrain_height(xs)
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


def add_vehicle(sim: PhysicsSimulation, config: SceneConfig) -> pymunk.Body:
    """Add the chassis, two wheels and their motor joints. Returns the chassis."""
    vehicle_filter = pymunk.ShapeFilter(group=VEHICLE_GROUP)

    cx, cy = config.chassis_pos
    hw, hh = config.chassis_half_size
    car, car_fixture = create_box(
        (cx, cy), hw, hh,
        density=config.chassis_density,
        friction=config.chassis_friction,
        shape_filter=vehicle_filter,
    )
    sim.add_body(car, car_fixture)

    wheels = []
    for x in (cx - config.wheel_offset, cx + config.wheel_offset):
        wheel, wheel_fixture = create_circle(
            (x, config.wheel_y),
            config.wheel_radius,
            density=config.wheel_density,
            friction=config.wheel_friction,
            shape_filter=vehicle_filter,
        )
        sim.add_body(wheel, wheel_fixture)
        wheels.append(wheel)

    # Constant drive: anchored at each wheel's own position, no feedback
    for wheel in wheels:
        joint = create_motor_joint(
            car, wheel, wheel.position,
            motor_speed=config.motor_speed,
            max_torque=config.motor_torque,
        )
        sim.add_joint(joint)

    return car


def create_world(config: Optional[SceneConfig] = None) -> Tuple[PhysicsSimulation, pymunk.Body]:
    """
    Create a world populated with rolling-hill terrain and a powered car.

    Args:
        config: Scene constants (defaults to SceneConfig())

    Returns:
        (world, chassis_body). The caller owns both.
    """
    config = config or SceneConfig()
    sim = PhysicsSimulation(gravity=config.gravity)

    points = generate_terrain(config.terrain_x_min, config.terrain_x_max, config.terrain_step)
    ground, ground_fixture = create_static_chain(points, friction=config.terrain_friction, loop=False)
    sim.add_body(ground, ground_fixture)

    car = add_vehicle(sim, config)
    return sim, car


def create_flat_world(config: Optional[SceneConfig] = None) -> Tuple[PhysicsSimulation, pymunk.Body]:
    """
    Create the flat test-bed world: a single ground edge and the same car.

    Returns:
        (world, chassis_body)
    """
    config = config or SceneConfig()
    sim = PhysicsSimulation(gravity=config.gravity)

    half = config.flat_half_length
    ground, ground_fixture = create_static_edge((-half, 0.0), (half, 0.0), friction=config.terrain_friction)
    sim.add_body(ground, ground_fixture)

    car = add_vehicle(sim, config)
    return sim, car
