"""Lambertian (ideal diffuse) material.

Scattered directions are normal + a random unit vector, which produces a
cosine-weighted distribution about the normal. The attenuation is the albedo.

Example:
    >>> from toy_raytracer.materials.lambertian import Lambertian
    >>> red = Lambertian(albedo=(0.7, 0.3, 0.3))
    >>> # Inside a Taichi kernel:
    >>> # direction, attenuation, did_scatter, rng = scatter_lambertian(albedo, normal, rng)
"""

from dataclasses import dataclass
from typing import ClassVar

import taichi as ti
import taichi.math as tm

from toy_raytracer.core.ray import near_zero, random_unit_vector
from toy_raytracer.materials.base import MaterialType, validate_albedo

# Type alias for 3D vectors
vec3 = tm.vec3


@dataclass(frozen=True)
class Lambertian:
    """Lambertian (ideal diffuse) material description.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
    """

    albedo: tuple[float, float, float]

    material_type: ClassVar[MaterialType] = MaterialType.LAMBERTIAN

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", validate_albedo(self.albedo))


@ti.func
def scatter_lambertian(albedo: vec3, normal: vec3, rng: ti.u32):
    """Sample a scattered ray direction for a Lambertian surface.

    Args:
        albedo: The diffuse reflectance color.
        normal: The unit surface normal at the hit point.
        rng: Generator state.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter, rng).
        Lambertian surfaces always scatter.
    """
    offset, state = random_unit_vector(rng)
    scattered_direction = normal + offset

    # The unit vector can cancel the normal almost exactly
    if near_zero(scattered_direction):
        scattered_direction = normal

    attenuation = albedo
    did_scatter = 1
    return scattered_direction, attenuation, did_scatter, state
