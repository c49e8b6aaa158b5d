"""Radiance estimation along camera rays.

This module implements the "ray color" recursion of a simple Monte Carlo path
tracer in iterative form. A path starts with unit throughput and, at each
bounce:

1. stops with black once the bounce budget is spent,
2. finds the nearest surface in (T_MIN, T_MAX); a miss returns the throughput
   times the sky gradient,
3. asks the surface's material to scatter; absorption returns black,
   otherwise the throughput is multiplied by the attenuation and the path
   continues along the scattered ray.

Two integrators are available. SCATTER is the material-driven one above.
HALF_DIFFUSE ignores materials and bounces every hit to
normal + random_unit_vector with attenuation 0.5, which renders any scene as
uniform grey diffuse surfaces.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from toy_raytracer.core.integrator import Integrator, ray_color
    >>> ray_color((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), max_depth=50)
    (0.5, 0.699999988079071, 1.0)
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

from toy_raytracer.core.ray import Ray, make_ray, random_unit_vector, unit
from toy_raytracer.core.rng import normalize_seed, seed_stream
from toy_raytracer.materials.absorbing import scatter_absorbing
from toy_raytracer.materials.base import MaterialType
from toy_raytracer.materials.dielectric import scatter_dielectric
from toy_raytracer.materials.lambertian import scatter_lambertian
from toy_raytracer.materials.metal import scatter_metal
from toy_raytracer.materials.registry import (
    get_material_albedo,
    get_material_fuzz,
    get_material_ref_idx,
    get_material_type,
)
from toy_raytracer.scene.intersection import intersect_scene

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Rendering Constants
# =============================================================================

# Default maximum ray bounces (path length)
MAX_DEPTH = 50

# Accepted hit interval. T_MIN keeps scattered rays from re-hitting their
# origin surface; T_MAX is the largest finite f32 and stands in for infinity.
T_MIN = 0.001
T_MAX = 3.4028234e38

# Sky gradient endpoints
HORIZON_COLOR = vec3(1.0, 1.0, 1.0)
ZENITH_COLOR = vec3(0.5, 0.7, 1.0)

# Attenuation applied per bounce by the half-diffuse integrator
HALF_DIFFUSE_ATTENUATION = 0.5


class Integrator(IntEnum):
    """Radiance integrators selectable per scene."""

    SCATTER = 0
    HALF_DIFFUSE = 1


# =============================================================================
# Background and Material Dispatch
# =============================================================================


@ti.func
def background_color(direction: vec3) -> vec3:
    """Sky gradient seen by rays that escape the scene.

    Blends white and light blue by t = 0.5 * (unit(direction).y + 1).
    """
    unit_direction = unit(direction)
    t = 0.5 * (unit_direction.y + 1.0)
    return (1.0 - t) * HORIZON_COLOR + t * ZENITH_COLOR


@ti.func
def _scatter_material(
    material_id: ti.i32,
    incident_direction: vec3,
    normal: vec3,
    front_face: ti.i32,
    rng: ti.u32,
):
    """Dispatch to the scatter function of the hit material.

    Args:
        material_id: Arena index of the material.
        incident_direction: The incoming ray direction.
        normal: The unit surface normal facing against the ray.
        front_face: 1 if hit front face, 0 if back face.
        rng: Generator state.

    Returns:
        A tuple of (scattered_direction, attenuation, did_scatter, rng).
        Unknown material IDs absorb the ray.
    """
    mat_type = get_material_type(material_id)

    scattered_direction = vec3(0.0, 0.0, 0.0)
    attenuation = vec3(0.0, 0.0, 0.0)
    did_scatter = 0
    state = rng

    if mat_type == int(MaterialType.LAMBERTIAN):
        scattered_direction, attenuation, did_scatter, state = scatter_lambertian(
            get_material_albedo(material_id), normal, state
        )

    elif mat_type == int(MaterialType.METAL):
        scattered_direction, attenuation, did_scatter, state = scatter_metal(
            get_material_albedo(material_id),
            get_material_fuzz(material_id),
            incident_direction,
            normal,
            state,
        )

    elif mat_type == int(MaterialType.DIELECTRIC):
        scattered_direction, attenuation, did_scatter, state = scatter_dielectric(
            get_material_ref_idx(material_id), incident_direction, normal, front_face, state
        )

    elif mat_type == int(MaterialType.ABSORBING):
        scattered_direction, attenuation, did_scatter, state = scatter_absorbing(state)

    return scattered_direction, attenuation, did_scatter, state


@ti.func
def _scatter_half_diffuse(normal: vec3, rng: ti.u32):
    """Bounce toward normal + random unit vector, ignoring the material."""
    offset, state = random_unit_vector(rng)
    scattered_direction = normal + offset
    attenuation = vec3(
        HALF_DIFFUSE_ATTENUATION, HALF_DIFFUSE_ATTENUATION, HALF_DIFFUSE_ATTENUATION
    )
    did_scatter = 1
    return scattered_direction, attenuation, did_scatter, state


# =============================================================================
# Path Tracing Core
# =============================================================================


@ti.func
def trace_ray(
    ray: Ray,
    max_depth: ti.i32,
    integrator: ti.i32,
    rng: ti.u32,
):
    """Estimate the radiance arriving along a ray.

    Args:
        ray: The camera ray to follow.
        max_depth: Number of surface interactions allowed. 0 yields black.
        integrator: An Integrator value.
        rng: Generator state.

    Returns:
        A tuple of (radiance, rng). Paths still alive after max_depth
        bounces contribute black.
    """
    current = make_ray(ray.origin, ray.direction)
    state = rng

    radiance = vec3(0.0, 0.0, 0.0)
    throughput = vec3(1.0, 1.0, 1.0)

    # Taichi has no break inside ti.func loops; the flag ends the path instead
    active = 1

    for _ in range(max_depth):
        if active == 1:
            hit_record = intersect_scene(current, T_MIN, T_MAX)

            if hit_record.hit == 0:
                radiance = throughput * background_color(current.direction)
                active = 0
            else:
                scattered_direction = vec3(0.0, 0.0, 0.0)
                attenuation = vec3(0.0, 0.0, 0.0)
                did_scatter = 0

                if integrator == int(Integrator.HALF_DIFFUSE):
                    scattered_direction, attenuation, did_scatter, state = _scatter_half_diffuse(
                        hit_record.normal, state
                    )
                else:
                    scattered_direction, attenuation, did_scatter, state = _scatter_material(
                        hit_record.material_id,
                        current.direction,
                        hit_record.normal,
                        hit_record.front_face,
                        state,
                    )

                if did_scatter == 0:
                    active = 0
                else:
                    throughput *= attenuation
                    current = make_ray(hit_record.point, scattered_direction)

    return radiance, state


# =============================================================================
# Python Entry Point
# =============================================================================


@ti.kernel
def _ray_color_kernel(
    ox: ti.f32,
    oy: ti.f32,
    oz: ti.f32,
    dx: ti.f32,
    dy: ti.f32,
    dz: ti.f32,
    max_depth: ti.i32,
    integrator: ti.i32,
    seed: ti.u32,
) -> vec3:
    radiance = vec3(0.0, 0.0, 0.0)
    # Single-iteration outer loop keeps the bounce loop serial
    for _ in range(1):
        rng = seed_stream(seed, 0)
        ray = make_ray(vec3(ox, oy, oz), vec3(dx, dy, dz))
        radiance, rng = trace_ray(ray, max_depth, integrator, rng)
    return radiance


def ray_color(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    max_depth: int = MAX_DEPTH,
    integrator: Integrator = Integrator.SCATTER,
    seed: int = 0,
) -> tuple[float, float, float]:
    """Trace a single ray through the currently loaded scene.

    Intended for tests and debugging; images are rendered by
    toy_raytracer.core.render.Renderer.

    Args:
        origin: Ray origin.
        direction: Ray direction (need not be unit length).
        max_depth: Bounce budget.
        integrator: Which integrator to use.
        seed: Random seed for the path.

    Returns:
        Tuple of (R, G, B) linear radiance.
    """
    color = _ray_color_kernel(
        float(origin[0]),
        float(origin[1]),
        float(origin[2]),
        float(direction[0]),
        float(direction[1]),
        float(direction[2]),
        int(max_depth),
        int(integrator),
        normalize_seed(seed),
    )
    return (float(color[0]), float(color[1]), float(color[2]))
