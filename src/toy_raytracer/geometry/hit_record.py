"""Intersection records and face orientation shared by all surfaces.

Every surface reports its hits through make_hit_record so that the normal
orientation convention is applied in exactly one place: the stored normal is
unit length and always faces against the incoming ray, and ``front_face``
records whether the ray arrived from the outward-normal side.
"""

import taichi as ti
import taichi.math as tm

from toy_raytracer.core.ray import unit

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        hit: Whether the ray intersected the surface (1 if hit, 0 if miss).
        t: The ray parameter of the intersection. Only valid if hit == 1.
        point: The 3D intersection point. Only valid if hit == 1.
        normal: Unit surface normal facing against the incoming ray.
            Only valid if hit == 1.
        front_face: 1 if the ray approached from the side the outward normal
            points to, 0 otherwise. Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    front_face: ti.i32


@ti.func
def face_normal(ray_direction: vec3, outward_normal: vec3):
    """Orient an outward normal against the incoming ray.

    Args:
        ray_direction: Direction of the incoming ray.
        outward_normal: The surface's outward normal (any length).

    Returns:
        Tuple of (normal, front_face) where normal is unit length with
        dot(ray_direction, normal) <= 0.
    """
    unit_normal = unit(outward_normal)
    normal = unit_normal
    front_face = 1
    if tm.dot(ray_direction, unit_normal) >= 0.0:
        normal = -unit_normal
        front_face = 0
    return normal, front_face


@ti.func
def make_hit_record(ray_direction: vec3, t: ti.f32, point: vec3, outward_normal: vec3) -> HitRecord:
    """Build a hit record, applying the shared face orientation rule."""
    normal, front_face = face_normal(ray_direction, outward_normal)
    return HitRecord(hit=1, t=t, point=point, normal=normal, front_face=front_face)


@ti.func
def miss_record() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        front_face=0,
    )
