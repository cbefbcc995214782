"""
Rendering module.

Projects world coordinates to screen pixels with a damped-follow camera.
"""

from .renderer import Renderer, RendererConfig, Camera, COLORS

__all__ = [
    'Renderer',
    'RendererConfig',
    'Camera',
    'COLORS',
]
