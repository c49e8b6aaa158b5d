"""Sphere primitive and ray-sphere intersection.

The intersection solves |origin + t * direction - center|^2 = radius^2 with the
half-b form of the quadratic and accepts the nearest root strictly inside
(t_min, t_max).

A negative radius is a valid way to model the inside of a shell: the surface
is identical but the outward normal (point - center) / radius points inward.
The hollow glass scene relies on this.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from toy_raytracer.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -1), radius=0.5)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from toy_raytracer.core.ray import Ray, ray_at
from toy_raytracer.geometry.hit_record import HitRecord, make_hit_record, miss_record

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere. Negative values flip the outward
            normal.
    """

    center: vec3
    radius: ti.f32


@ti.func
def hit_sphere(
    ray: Ray,
    sphere: Sphere,
    t_min: ti.f32,
    t_max: ti.f32,
) -> HitRecord:
    """Test for ray-sphere intersection.

    With oc = origin - center the quadratic coefficients are
        a = |direction|^2, half_b = oc . direction, c = |oc|^2 - radius^2
    and the roots are (-half_b -/+ sqrt(half_b^2 - a c)) / a. The smaller root
    is preferred; the larger one is used only when the smaller lies outside
    the interval.

    Args:
        ray: The ray to test. Its direction need not be unit length.
        sphere: The sphere to test.
        t_min: Exclusive lower bound for accepted t.
        t_max: Exclusive upper bound for accepted t.

    Returns:
        A HitRecord. hit is 0 when the ray misses or both roots fall outside
        (t_min, t_max).
    """
    oc = ray.origin - sphere.center
    a = tm.dot(ray.direction, ray.direction)
    half_b = tm.dot(oc, ray.direction)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius
    discriminant = half_b * half_b - a * c

    record = miss_record()

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)

        root = (-half_b - sqrt_d) / a
        valid = t_min < root and root < t_max
        if not valid:
            root = (-half_b + sqrt_d) / a
            valid = t_min < root and root < t_max

        if valid:
            point = ray_at(ray, root)
            outward_normal = (point - sphere.center) / sphere.radius
            record = make_hit_record(ray.direction, root, point, outward_normal)

    return record
