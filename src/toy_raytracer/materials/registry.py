"""Material arena shared by every surface in the scene.

Materials are stored once in a single table of Taichi fields and referenced
by index from any number of spheres. Each row holds the MaterialType tag and
the union of all material parameters; a row only uses the parameters its tag
needs.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from toy_raytracer.materials import Metal
    >>> from toy_raytracer.materials.registry import add_material, clear_materials
    >>> clear_materials()
    >>> mat_id = add_material(Metal(albedo=(0.8, 0.8, 0.8), fuzz=0.3))
"""

import taichi as ti
import taichi.math as tm

from toy_raytracer.materials.base import MaterialType

# Type alias for 3D vectors
vec3 = tm.vec3

# Maximum number of distinct materials in the scene
MAX_MATERIALS = 1024

# Arena storage: Structure of Arrays layout
material_types = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
material_albedos = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
material_fuzz = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
material_ref_idx = ti.field(dtype=ti.f32, shape=MAX_MATERIALS)
num_materials = ti.field(dtype=ti.i32, shape=())


def clear_materials() -> None:
    """Clear all materials.

    Resets the material count to zero. Existing data in the fields will be
    overwritten when new materials are added.
    """
    num_materials[None] = 0


def add_material(material) -> int:
    """Append a material to the arena.

    Args:
        material: A Lambertian, Metal, Dielectric or Absorbing instance.

    Returns:
        The arena index of the added material.

    Raises:
        RuntimeError: If the maximum number of materials is exceeded.
        TypeError: If the object is not a known material.
    """
    material_type = getattr(material, "material_type", None)
    if not isinstance(material_type, MaterialType):
        raise TypeError(f"Unsupported material: {material!r}")

    idx = num_materials[None]
    if idx >= MAX_MATERIALS:
        raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

    albedo = getattr(material, "albedo", (0.0, 0.0, 0.0))
    material_types[idx] = int(material_type)
    material_albedos[idx] = [albedo[0], albedo[1], albedo[2]]
    material_fuzz[idx] = getattr(material, "fuzz", 0.0)
    material_ref_idx[idx] = getattr(material, "ref_idx", 1.0)
    num_materials[None] = idx + 1
    return idx


def get_material_count() -> int:
    """Get the number of materials in the arena."""
    return int(num_materials[None])


def get_material_type_by_id(material_id: int) -> MaterialType:
    """Look up the type tag of a stored material from Python.

    Raises:
        IndexError: If material_id is not a valid arena index.
    """
    if not 0 <= material_id < get_material_count():
        raise IndexError(f"Material id {material_id} out of range")
    return MaterialType(int(material_types[material_id]))


@ti.func
def get_material_type(material_id: ti.i32) -> ti.i32:
    """Get the material type for a given material ID.

    Returns:
        The material type as an integer (see MaterialType), or -1 for an
        invalid material ID.
    """
    result = -1
    if 0 <= material_id < num_materials[None]:
        result = material_types[material_id]
    return result


@ti.func
def get_material_albedo(material_id: ti.i32) -> vec3:
    return material_albedos[material_id]


@ti.func
def get_material_fuzz(material_id: ti.i32) -> ti.f32:
    return material_fuzz[material_id]


@ti.func
def get_material_ref_idx(material_id: ti.i32) -> ti.f32:
    return material_ref_idx[material_id]
