"""Absorbing material that never scatters.

Used as the placeholder material for scenes rendered with the half-diffuse
integrator, which ignores materials entirely, and for surfaces that should
appear black under the scattering integrator.
"""

from dataclasses import dataclass
from typing import ClassVar

import taichi as ti
import taichi.math as tm

from toy_raytracer.materials.base import MaterialType

# Type alias for 3D vectors
vec3 = tm.vec3


@dataclass(frozen=True)
class Absorbing:
    """Material that absorbs every incoming ray."""

    material_type: ClassVar[MaterialType] = MaterialType.ABSORBING


@ti.func
def scatter_absorbing(rng: ti.u32):
    """Absorb the incoming ray.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter, rng) with
        did_scatter == 0 and the generator state untouched.
    """
    scattered_direction = vec3(0.0, 0.0, 0.0)
    attenuation = vec3(0.0, 0.0, 0.0)
    did_scatter = 0
    return scattered_direction, attenuation, did_scatter, rng
