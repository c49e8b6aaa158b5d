"""Metal (specular reflective) material.

Metals reflect the incoming direction about the normal. A fuzz parameter in
[0, 1] perturbs the reflection by a random point in a sphere of that radius:
0 gives a perfect mirror, 1 a very rough surface. Perturbed directions that
end up below the surface are absorbed.

Example:
    >>> from toy_raytracer.materials.metal import Metal
    >>> gold = Metal(albedo=(0.8, 0.6, 0.2), fuzz=0.3)
    >>> # Inside a Taichi kernel:
    >>> # direction, attenuation, did_scatter, rng = scatter_metal(
    >>> #     albedo, fuzz, incident_direction, normal, rng)
"""

from dataclasses import dataclass
from typing import ClassVar

import taichi as ti
import taichi.math as tm

from toy_raytracer.core.ray import random_in_unit_sphere, reflect, unit
from toy_raytracer.materials.base import MaterialType, validate_albedo

# Type alias for 3D vectors
vec3 = tm.vec3


@dataclass(frozen=True)
class Metal:
    """Metal material description.

    Attributes:
        albedo: The specular reflectance color (RGB, each component in [0, 1]).
        fuzz: Reflection perturbation radius. Clamped to [0, 1] on creation.
    """

    albedo: tuple[float, float, float]
    fuzz: float = 0.0

    material_type: ClassVar[MaterialType] = MaterialType.METAL

    def __post_init__(self) -> None:
        object.__setattr__(self, "albedo", validate_albedo(self.albedo))
        object.__setattr__(self, "fuzz", min(max(float(self.fuzz), 0.0), 1.0))


@ti.func
def scatter_metal(
    albedo: vec3,
    fuzz: ti.f32,
    incident_direction: vec3,
    normal: vec3,
    rng: ti.u32,
):
    """Compute the scattered direction for a metal surface.

    Args:
        albedo: The specular reflectance color.
        fuzz: Perturbation radius in [0, 1].
        incident_direction: The incoming ray direction (any length).
        normal: The unit surface normal facing against the incoming ray.
        rng: Generator state.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter, rng).
        did_scatter is 0 when the perturbed direction points into the surface.
    """
    reflected = reflect(unit(incident_direction), normal)
    perturbation, state = random_in_unit_sphere(rng)
    scattered_direction = reflected + fuzz * perturbation

    did_scatter = 1
    if tm.dot(scattered_direction, normal) <= 0.0:
        did_scatter = 0

    attenuation = albedo
    return scattered_direction, attenuation, did_scatter, state
