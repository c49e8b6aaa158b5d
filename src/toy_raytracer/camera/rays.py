"""Primary ray generation inside Taichi kernels.

setup_camera resolves a camera's basis in Python and writes it to Taichi
fields; get_ray reads those fields from kernel code.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from toy_raytracer.camera import SimpleCamera
    >>> from toy_raytracer.camera.rays import get_ray, setup_camera
    >>> setup_camera(SimpleCamera(aspect_ratio=2.0))
    >>> @ti.kernel
    ... def center() -> ti.math.vec3:
    ...     ray, rng = get_ray(0.5, 0.5, ti.cast(1, ti.u32))
    ...     return ray.direction
"""

import taichi as ti
import taichi.math as tm

from toy_raytracer.camera.base import CameraBasis
from toy_raytracer.camera.positional import PositionalCamera
from toy_raytracer.camera.simple import SimpleCamera
from toy_raytracer.core.ray import make_ray, random_in_unit_disk

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())

# Lens plane axes, used to offset ray origins for defocus blur
_camera_u = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_v = ti.Vector.field(3, dtype=ti.f32, shape=())

_viewport_horizontal = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_vertical = ti.Vector.field(3, dtype=ti.f32, shape=())
_lower_left_corner = ti.Vector.field(3, dtype=ti.f32, shape=())
_lens_radius = ti.field(dtype=ti.f32, shape=())


def setup_camera(camera: SimpleCamera | PositionalCamera | CameraBasis) -> CameraBasis:
    """Write a camera's geometry to the fields read by get_ray.

    Args:
        camera: A camera configuration, or an already resolved basis.

    Returns:
        The basis that was uploaded.
    """
    basis = camera if isinstance(camera, CameraBasis) else camera.basis()

    _camera_origin[None] = basis.origin.tolist()
    _camera_u[None] = basis.u.tolist()
    _camera_v[None] = basis.v.tolist()
    _viewport_horizontal[None] = basis.horizontal.tolist()
    _viewport_vertical[None] = basis.vertical.tolist()
    _lower_left_corner[None] = basis.lower_left.tolist()
    _lens_radius[None] = basis.lens_radius
    return basis


@ti.func
def get_ray(s: ti.f32, t: ti.f32, rng: ti.u32):
    """Generate the primary ray for image coordinates (s, t).

    s runs left to right and t bottom to top; values outside [0, 1] address
    points beyond the viewport edges and are valid.

    Args:
        s: Horizontal image coordinate.
        t: Vertical image coordinate.
        rng: Generator state. Only consumed when the lens radius is positive.

    Returns:
        A tuple of (ray, rng). The ray direction is not normalized.
    """
    state = rng
    offset = vec3(0.0, 0.0, 0.0)

    lens_radius = _lens_radius[None]
    if lens_radius > 0.0:
        lens_point, state = random_in_unit_disk(state)
        rd = lens_radius * lens_point
        offset = _camera_u[None] * rd.x + _camera_v[None] * rd.y

    origin = _camera_origin[None] + offset
    direction = (
        _lower_left_corner[None]
        + s * _viewport_horizontal[None]
        + t * _viewport_vertical[None]
        - _camera_origin[None]
        - offset
    )
    return make_ray(origin, direction), state


def get_camera_info() -> dict[str, tuple[float, float, float] | float]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with origin, u, v, horizontal, vertical, lower_left and
        lens_radius as stored in the fields.
    """

    def _triple(field) -> tuple[float, float, float]:
        value = field[None]
        return (float(value[0]), float(value[1]), float(value[2]))

    return {
        "origin": _triple(_camera_origin),
        "u": _triple(_camera_u),
        "v": _triple(_camera_v),
        "horizontal": _triple(_viewport_horizontal),
        "vertical": _triple(_viewport_vertical),
        "lower_left": _triple(_lower_left_corner),
        "lens_radius": float(_lens_radius[None]),
    }
