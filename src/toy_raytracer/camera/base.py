"""Viewport geometry shared by all camera models.

Every camera reduces to a CameraBasis: an origin, a viewport rectangle given
by its lower-left corner and two spanning vectors, and a lens radius. A ray
for image coordinates (s, t) starts at the origin (offset on the lens when the
radius is positive) and points at lower_left + s * horizontal + t * vertical.
"""

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

Vector = npt.NDArray[np.float64]


@dataclass(frozen=True)
class CameraBasis:
    """Resolved camera geometry in world space.

    Attributes:
        origin: Camera position.
        horizontal: Full-width viewport span (left to right).
        vertical: Full-height viewport span (bottom to top).
        lower_left: Lower-left corner of the viewport.
        lens_radius: Aperture radius; 0 disables defocus blur.
        u: Unit right vector, used to place lens samples.
        v: Unit up vector, used to place lens samples.
    """

    origin: Vector
    horizontal: Vector
    vertical: Vector
    lower_left: Vector
    lens_radius: float
    u: Vector
    v: Vector

    def viewport_point(self, s: float, t: float) -> Vector:
        """Point on the viewport for image coordinates (s, t)."""
        return self.lower_left + s * self.horizontal + t * self.vertical


def as_vector(values) -> Vector:
    """Convert three floats to a float64 NumPy vector."""
    vector = np.asarray(values, dtype=np.float64)
    if vector.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {vector.shape}")
    return vector


def unit_vector(vector: Vector) -> Vector:
    """Normalize a vector, rejecting zero length."""
    norm = np.linalg.norm(vector)
    if norm == 0.0:
        raise ValueError("Cannot normalize a zero-length vector")
    return vector / norm
