"""Camera models for primary ray generation.

Components:
    simple: Fixed camera at the origin looking down -Z
    positional: Look-at camera with field of view and thin-lens defocus blur
    base: CameraBasis, the resolved viewport geometry both models produce
    rays: Camera fields and the kernel-side get_ray

rays allocates Taichi fields and is imported directly after ti.init().
"""

from .base import CameraBasis
from .positional import PositionalCamera
from .simple import SimpleCamera

# Any camera accepted by rays.setup_camera
Camera = SimpleCamera | PositionalCamera

__all__ = [
    "Camera",
    "CameraBasis",
    "PositionalCamera",
    "SimpleCamera",
]
