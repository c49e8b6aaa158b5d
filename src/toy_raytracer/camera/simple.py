"""Fixed axis-aligned camera.

The simple camera sits at the origin looking down -Z with +Y up and a focal
length of 1. Only the viewport size is configurable.
"""

from dataclasses import dataclass

import numpy as np

from toy_raytracer.camera.base import CameraBasis


@dataclass
class SimpleCamera:
    """Configuration for the fixed axis-aligned camera.

    Attributes:
        aspect_ratio: Width divided by height of the output image.
        viewport_height: Height of the viewport at unit distance.
    """

    aspect_ratio: float = 16.0 / 9.0
    viewport_height: float = 2.0

    def __post_init__(self) -> None:
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio must be positive, got {self.aspect_ratio}")
        if self.viewport_height <= 0.0:
            raise ValueError(f"Viewport height must be positive, got {self.viewport_height}")

    def basis(self) -> CameraBasis:
        """Resolve the viewport geometry."""
        viewport_width = self.viewport_height * self.aspect_ratio
        focal_length = 1.0

        origin = np.zeros(3)
        horizontal = np.array([viewport_width, 0.0, 0.0])
        vertical = np.array([0.0, self.viewport_height, 0.0])
        lower_left = (
            origin - horizontal / 2.0 - vertical / 2.0 - np.array([0.0, 0.0, focal_length])
        )

        return CameraBasis(
            origin=origin,
            horizontal=horizontal,
            vertical=vertical,
            lower_left=lower_left,
            lens_radius=0.0,
            u=np.array([1.0, 0.0, 0.0]),
            v=np.array([0.0, 1.0, 0.0]),
        )
