"""Simulation loop and window setup."""

from .loop import LoopConfig, Session, SimulationLoop, open_surface

__all__ = [
    'LoopConfig',
    'Session',
    'SimulationLoop',
    'open_surface',
]
