"""Dielectric (glass-like) material with refraction.

Dielectrics either reflect or refract every incoming ray; nothing is absorbed
and the attenuation is always white. The choice is made as follows:

1. Rays that cannot refract (Snell's law has no solution, i.e. total internal
   reflection) are reflected without consuming a random draw.
2. Otherwise one uniform draw is compared against Schlick's approximation of
   the Fresnel reflectance; the ray reflects when the draw is below it and
   refracts when it is not.

The refraction ratio is 1 / ref_idx when the ray enters through the front
face and ref_idx when it leaves the material from inside.

Example:
    >>> from toy_raytracer.materials.dielectric import Dielectric
    >>> glass = Dielectric(ref_idx=1.5)
"""

from dataclasses import dataclass
from typing import ClassVar

import taichi as ti
import taichi.math as tm

from toy_raytracer.core.ray import reflect, refract, schlick_reflectance, unit
from toy_raytracer.core.rng import random_f32
from toy_raytracer.materials.base import MaterialType

# Type alias for 3D vectors
vec3 = tm.vec3


@dataclass(frozen=True)
class Dielectric:
    """Dielectric material description.

    Attributes:
        ref_idx: Index of refraction relative to the surrounding medium.
            Common values: water 1.33, glass 1.5, diamond 2.4.
    """

    ref_idx: float = 1.5

    material_type: ClassVar[MaterialType] = MaterialType.DIELECTRIC

    def __post_init__(self) -> None:
        ref_idx = float(self.ref_idx)
        if ref_idx < 1.0:
            raise ValueError(
                f"Index of refraction = {ref_idx} is less than 1.0. "
                "IOR must be >= 1.0 for physically meaningful materials."
            )
        object.__setattr__(self, "ref_idx", ref_idx)


@ti.func
def refraction_ratio_for(ref_idx: ti.f32, front_face: ti.i32) -> ti.f32:
    """Ratio of refractive indices for a ray crossing the surface."""
    ratio = ref_idx
    if front_face == 1:
        ratio = 1.0 / ref_idx
    return ratio


@ti.func
def will_reflect(
    ref_idx: ti.f32,
    incident_direction: vec3,
    normal: vec3,
    front_face: ti.i32,
) -> ti.i32:
    """Determine if total internal reflection will occur.

    Returns:
        1 if the ray cannot refract at this interface, 0 otherwise.
    """
    refraction_ratio = refraction_ratio_for(ref_idx, front_face)
    cos_theta = tm.min(-tm.dot(unit(incident_direction), normal), 1.0)
    sin_theta = ti.sqrt(1.0 - cos_theta * cos_theta)
    return 1 if refraction_ratio * sin_theta > 1.0 else 0


@ti.func
def scatter_dielectric(
    ref_idx: ti.f32,
    incident_direction: vec3,
    normal: vec3,
    front_face: ti.i32,
    rng: ti.u32,
):
    """Compute the scattered direction for a dielectric surface.

    Args:
        ref_idx: Index of refraction of the material.
        incident_direction: The incoming ray direction (any length).
        normal: The unit surface normal facing against the incoming ray.
        front_face: 1 if the ray hit the outside of the surface, 0 if it is
            leaving the material.
        rng: Generator state.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter, rng).
        Dielectrics always scatter with white attenuation.
    """
    attenuation = vec3(1.0, 1.0, 1.0)
    refraction_ratio = refraction_ratio_for(ref_idx, front_face)

    unit_direction = unit(incident_direction)
    cos_theta = tm.min(-tm.dot(unit_direction, normal), 1.0)

    state = rng
    scattered_direction = vec3(0.0, 0.0, 0.0)

    if will_reflect(ref_idx, incident_direction, normal, front_face) == 1:
        # Total internal reflection
        scattered_direction = reflect(unit_direction, normal)
    else:
        draw, state = random_f32(state)
        if draw < schlick_reflectance(cos_theta, refraction_ratio):
            scattered_direction = reflect(unit_direction, normal)
        else:
            scattered_direction = refract(unit_direction, normal, refraction_ratio)

    did_scatter = 1
    return scattered_direction, attenuation, did_scatter, state
