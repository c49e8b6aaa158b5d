"""Positionable thin-lens camera.

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from lookat toward lookfrom (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The viewport is placed at focus_dist along -w and scaled so the vertical field
of view is preserved. With a positive aperture, ray origins are spread over a
disk of radius aperture / 2 in the (u, v) plane, so only geometry at the focus
distance is sharp.

Example:
    >>> camera = PositionalCamera(
    ...     lookfrom=(13.0, 2.0, 3.0),
    ...     lookat=(0.0, 0.0, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=20.0,
    ...     aspect_ratio=1.5,
    ...     aperture=0.1,
    ...     focus_dist=10.0,
    ... )
    >>> basis = camera.basis()
"""

import math
from dataclasses import dataclass

import numpy as np

from toy_raytracer.camera.base import CameraBasis, as_vector, unit_vector


@dataclass
class PositionalCamera:
    """Configuration for a positionable camera with defocus blur.

    Attributes:
        lookfrom: Camera position in world space (x, y, z).
        lookat: Point the camera is looking at in world space (x, y, z).
        vup: Up direction vector for camera orientation (typically (0, 1, 0)).
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
        aperture: Lens diameter. 0 gives a pinhole camera.
        focus_dist: Distance from lookfrom to the plane of perfect focus.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float
    aperture: float = 0.0
    focus_dist: float = 1.0

    def __post_init__(self) -> None:
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"Vertical field of view must be in (0, 180), got {self.vfov}")
        if self.aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio must be positive, got {self.aspect_ratio}")
        if self.aperture < 0.0:
            raise ValueError(f"Aperture must be non-negative, got {self.aperture}")
        if self.focus_dist <= 0.0:
            raise ValueError(f"Focus distance must be positive, got {self.focus_dist}")

    def basis(self) -> CameraBasis:
        """Resolve the viewport geometry.

        Raises:
            ValueError: If lookfrom equals lookat or vup is parallel to the
                view direction.
        """
        theta = math.radians(self.vfov)
        h = math.tan(theta / 2.0)
        viewport_height = 2.0 * h
        viewport_width = self.aspect_ratio * viewport_height

        lookfrom = as_vector(self.lookfrom)
        lookat = as_vector(self.lookat)
        vup = as_vector(self.vup)

        w = unit_vector(lookfrom - lookat)
        u = unit_vector(np.cross(vup, w))
        v = np.cross(w, u)

        horizontal = self.focus_dist * viewport_width * u
        vertical = self.focus_dist * viewport_height * v
        lower_left = lookfrom - horizontal / 2.0 - vertical / 2.0 - self.focus_dist * w

        return CameraBasis(
            origin=lookfrom,
            horizontal=horizontal,
            vertical=vertical,
            lower_left=lower_left,
            lens_radius=self.aperture / 2.0,
            u=u,
            v=v,
        )
