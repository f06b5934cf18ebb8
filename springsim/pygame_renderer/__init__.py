"""
Pygame Renderer for springsim models.

Main classes:
- Camera: orthographic yaw/pitch projection of 3D positions
- Renderer: draws springs, particles, grid and info text
"""

from .renderer import Camera, Renderer

__all__ = ['Camera', 'Renderer']
