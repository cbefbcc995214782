"""Factory functions for creating physics constraints/joints."""

from typing import Tuple

import pymunk

from hillcar.physics.simulation import MotorJoint


def create_pivot_joint(body_a, body_b, pivot):
    """Create a pivot joint (shared rotation point) between two bodies."""
    joint = pymunk.PivotJoint(body_a, body_b, pivot)
    joint.collide_bodies = False
    return joint


def create_motor_joint(
    body_a: pymunk.Body,
    body_b: pymunk.Body,
    anchor: Tuple[float, float],
    motor_speed: float,
    max_torque: float,
) -> MotorJoint:
    """Create a motorized pivot between two bodies at a world anchor.

    motor_speed is the target angular speed of body_b relative to body_a
    (rad/s, counter-clockwise positive). Pymunk's SimpleMotor drives
    b.w - a.w towards -rate, hence the sign flip.
    """
    if max_torque < 0:
        raise ValueError(f"Max torque must be non-negative, got {max_torque}")

    pivot = create_pivot_joint(body_a, body_b, anchor)
    motor = pymunk.SimpleMotor(body_a, body_b, -motor_speed)
    motor.max_force = max_torque
    motor.collide_bodies = False
    return MotorJoint(pivot=pivot, motor=motor)
