"""Geometry module for surface primitives.

Components:
    hit_record: HitRecord and the face orientation rule shared by all surfaces
    sphere: Sphere primitive with ray-sphere intersection

Surfaces report hits as:
    record = hit_shape(ray_origin, ray_direction, shape, t_min, t_max)
"""

from .hit_record import HitRecord, face_normal, make_hit_record, miss_record
from .sphere import Sphere, hit_sphere

__all__ = [
    "HitRecord",
    "face_normal",
    "make_hit_record",
    "miss_record",
    "Sphere",
    "hit_sphere",
]
