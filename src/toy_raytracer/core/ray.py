"""Ray data structure, vector algebra and sampling distributions.

This module provides the Ray dataclass and the vector helpers used by every
stage of the tracer: reflection and refraction, Schlick's reflectance
approximation and the random distributions that materials and cameras draw
from. All functions run inside Taichi kernels.

Random sampling functions take the caller's generator state (see
``toy_raytracer.core.rng``) as their last argument and return the advanced
state as the last element of a tuple.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 0.0)
    >>> direction = ti.math.vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction, t=0.0)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

from toy_raytracer.core.rng import random_between

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Bound on rejection sampling attempts; each attempt succeeds with p >= 0.52
MAX_REJECTION_TRIES = 100


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Not required to be
            unit length; intersection and scattering handle any scale.
        t: Reserved time parameter. Always 0.
    """

    origin: vec3
    direction: vec3
    t: ti.f32


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction with the time parameter unset."""
    return Ray(origin=origin, direction=direction, t=0.0)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return tm.length(v)


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return tm.dot(v, v)


@ti.func
def unit(v: vec3) -> vec3:
    """Scale a vector to unit length.

    Args:
        v: The input vector. Must be non-zero; a zero vector yields NaN
            components and callers guard against it (see near_zero).

    Returns:
        v / length(v).
    """
    return v / tm.length(v)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    return tm.dot(a, b)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    return tm.cross(a, b)


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (unit length).

    Returns:
        incident - 2 * dot(incident, normal) * normal.
    """
    return incident - 2.0 * tm.dot(incident, normal) * normal


@ti.func
def refract(uv: vec3, normal: vec3, etai_over_etat: ti.f32) -> vec3:
    """Refract a unit direction through a surface using Snell's law.

    The caller is responsible for detecting total internal reflection
    beforehand; this function always produces a direction.

    Args:
        uv: The incoming unit direction.
        normal: The unit surface normal facing against uv.
        etai_over_etat: Ratio of refractive indices (incident / transmitted).

    Returns:
        The refracted direction, the sum of its perpendicular and parallel
        components relative to the normal.
    """
    cos_theta = tm.min(-tm.dot(uv, normal), 1.0)
    r_out_perp = etai_over_etat * (uv + cos_theta * normal)
    r_out_parallel = -ti.sqrt(ti.abs(1.0 - length_squared(r_out_perp))) * normal
    return r_out_perp + r_out_parallel


@ti.func
def schlick_reflectance(cosine: ti.f32, ref_idx: ti.f32) -> ti.f32:
    """Compute Fresnel reflectance using Schlick's approximation.

    Args:
        cosine: Cosine of the angle between incident direction and normal.
        ref_idx: Refraction ratio in effect at the interface.

    Returns:
        R0 + (1 - R0)(1 - cosine)^5 with R0 = ((1 - ref_idx) / (1 + ref_idx))^2.
    """
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * ((1.0 - cosine) ** 5)


@ti.func
def near_zero(v: vec3) -> ti.i32:
    """Check if a vector is near zero in all components.

    Args:
        v: The vector to check.

    Returns:
        1 if every component magnitude is below 1e-8, 0 otherwise.
    """
    s = 1e-8
    return ti.abs(v.x) < s and ti.abs(v.y) < s and ti.abs(v.z) < s


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


@ti.func
def random_in_unit_sphere(rng: ti.u32):
    """Generate a uniformly distributed point strictly inside the unit sphere.

    Uses rejection sampling from the [-1, 1)^3 cube.

    Args:
        rng: Generator state.

    Returns:
        Tuple of (point, rng) with length_squared(point) < 1.
    """
    state = rng
    p = vec3(0.0, 0.0, 0.0)
    found = False
    for _ in range(MAX_REJECTION_TRIES):
        if not found:
            x, state = random_between(-1.0, 1.0, state)
            y, state = random_between(-1.0, 1.0, state)
            z, state = random_between(-1.0, 1.0, state)
            candidate = vec3(x, y, z)
            if length_squared(candidate) < 1.0:
                p = candidate
                found = True
    return p, state


@ti.func
def random_unit_vector(rng: ti.u32):
    """Generate a random unit vector uniformly distributed on the sphere.

    This is the normalized version of random_in_unit_sphere().

    Returns:
        Tuple of (direction, rng).
    """
    p, state = random_in_unit_sphere(rng)
    return unit(p), state


@ti.func
def random_in_unit_disk(rng: ti.u32):
    """Generate a random point inside the unit disk in the xy-plane.

    Used for thin lens sampling.

    Returns:
        Tuple of (point, rng) where point is (x, y, 0) with x^2 + y^2 < 1.
    """
    state = rng
    p = vec3(0.0, 0.0, 0.0)
    found = False
    for _ in range(MAX_REJECTION_TRIES):
        if not found:
            x, state = random_between(-1.0, 1.0, state)
            y, state = random_between(-1.0, 1.0, state)
            if x * x + y * y < 1.0:
                p = vec3(x, y, 0.0)
                found = True
    return p, state
