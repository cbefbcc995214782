"""
Physics world module.

Builds and steps the hill-driving car scene using Pymunk.
"""

from .simulation import PhysicsSimulation, Fixture, MotorJoint, step_world
from .objects import create_box, create_circle, create_static_edge, create_static_chain
from .constraints import create_motor_joint
from .scene_generator import SceneConfig, create_world, create_flat_world, generate_terrain

__all__ = [
    'PhysicsSimulation',
    'Fixture',
    'MotorJoint',
    'step_world',
    'create_box',
    'create_circle',
    'create_static_edge',
    'create_static_chain',
    'create_motor_joint',
    'SceneConfig',
    'create_world',
    'create_flat_world',
    'generate_terrain',
]
