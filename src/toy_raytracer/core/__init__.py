"""Core rendering module.

Components:
    rng: Explicit per-stream random number generation
    ray: Ray data structure, vector algebra and sampling distributions
    integrator: Radiance estimation along a single camera ray
    render: Row-parallel render kernel and the Renderer driver

ray and rng allocate no Taichi fields and are re-exported here.
"""

from .ray import (
    Ray,
    cross,
    dot,
    length,
    length_squared,
    make_ray,
    near_zero,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
    ray_at,
    reflect,
    refract,
    schlick_reflectance,
    unit,
    vec3,
)
from .rng import hash_u32, normalize_seed, random_between, random_f32, seed_stream, xorshift32

# Note: integrator and render are NOT imported here; they allocate Taichi fields
# and must be imported after ti.init().

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "length_squared",
    "unit",
    "dot",
    "cross",
    "reflect",
    "refract",
    "schlick_reflectance",
    "near_zero",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_in_unit_disk",
    "hash_u32",
    "xorshift32",
    "seed_stream",
    "random_f32",
    "random_between",
    "normalize_seed",
]
