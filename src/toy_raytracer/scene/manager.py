"""Scene builder coordinating spheres and shared materials.

A Scene is assembled in Python and uploaded to the Taichi fields read by the
render kernels just before rendering. Materials are immutable and compared by
value, so passing the same (or an equal) material for several spheres stores
it once in the material arena and every sphere references that single entry.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from toy_raytracer.materials import Dielectric, Lambertian
    >>> from toy_raytracer.scene.manager import Scene
    >>> glass = Dielectric(1.5)
    >>> scene = Scene()
    >>> scene.add_sphere((0.0, -100.5, -1.0), 100.0, Lambertian((0.8, 0.8, 0.0)))
    >>> scene.add_sphere((-1.0, 0.0, -1.0), 0.5, glass)
    >>> scene.add_sphere((-1.0, 0.0, -1.0), -0.4, glass)
    >>> scene.upload()
"""

from dataclasses import dataclass

from toy_raytracer.materials import Material, MaterialType
from toy_raytracer.materials.registry import MAX_MATERIALS, add_material, clear_materials
from toy_raytracer.scene.intersection import MAX_SPHERES, add_sphere, clear_scene


@dataclass
class MaterialInfo:
    """Information about a material registered with a scene.

    Attributes:
        material_id: Index of the material in the arena.
        material_type: The material's type tag.
        material: The material description.
    """

    material_id: int
    material_type: MaterialType
    material: Material


@dataclass
class SphereInfo:
    """Information about a sphere in the scene.

    Attributes:
        sphere_index: The index in the sphere storage arrays.
        center: The center of the sphere.
        radius: The radius of the sphere (negative flips the normals).
        material_id: Arena index of the sphere's material.
    """

    sphere_index: int
    center: tuple[float, float, float]
    radius: float
    material_id: int


class Scene:
    """An ordered collection of spheres referencing shared materials."""

    def __init__(self) -> None:
        self._materials: list[MaterialInfo] = []
        self._material_ids: dict[Material, int] = {}
        self._spheres: list[SphereInfo] = []

    @property
    def materials(self) -> list[MaterialInfo]:
        return list(self._materials)

    @property
    def spheres(self) -> list[SphereInfo]:
        return list(self._spheres)

    def __len__(self) -> int:
        return len(self._spheres)

    def add_material(self, material: Material) -> int:
        """Register a material, reusing the existing entry for equal materials.

        Args:
            material: The material description.

        Returns:
            The material's arena index.

        Raises:
            TypeError: If the object is not a known material.
            RuntimeError: If the maximum number of materials is exceeded.
        """
        if not isinstance(getattr(material, "material_type", None), MaterialType):
            raise TypeError(f"Unsupported material: {material!r}")

        material_id = self._material_ids.get(material)
        if material_id is None:
            material_id = len(self._materials)
            if material_id >= MAX_MATERIALS:
                raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")
            self._material_ids[material] = material_id
            self._materials.append(
                MaterialInfo(
                    material_id=material_id,
                    material_type=material.material_type,
                    material=material,
                )
            )
        return material_id

    def add_sphere(self, center, radius: float, material: Material) -> int:
        """Add a sphere with its material.

        Args:
            center: The center point (three floats).
            radius: The sphere radius. A negative radius models the inner
                wall of a shell.
            material: The sphere's material.

        Returns:
            The index of the added sphere.

        Raises:
            ValueError: If center does not have three components.
            RuntimeError: If the maximum number of spheres is exceeded.
        """
        center_tuple = tuple(float(c) for c in center)
        if len(center_tuple) != 3:
            raise ValueError(f"Sphere center must have 3 components, got {len(center_tuple)}")
        if len(self._spheres) >= MAX_SPHERES:
            raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")

        material_id = self.add_material(material)
        sphere_index = len(self._spheres)
        self._spheres.append(
            SphereInfo(
                sphere_index=sphere_index,
                center=center_tuple,
                radius=float(radius),
                material_id=material_id,
            )
        )
        return sphere_index

    def get_material(self, material_id: int) -> Material | None:
        """Get the material stored at an arena index, or None if out of range."""
        if 0 <= material_id < len(self._materials):
            return self._materials[material_id].material
        return None

    def upload(self) -> None:
        """Replace the contents of the scene and material fields with this scene."""
        clear_scene()
        clear_materials()
        for info in self._materials:
            add_material(info.material)
        for sphere in self._spheres:
            add_sphere(sphere.center, sphere.radius, sphere.material_id)

    def __repr__(self) -> str:
        return f"Scene(spheres={len(self._spheres)}, materials={len(self._materials)})"
