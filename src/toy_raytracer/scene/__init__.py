"""Scene management for spheres and shared materials.

Components:
    intersection: Sphere storage fields and the nearest-hit query
    manager: Scene builder that uploads spheres and materials to the fields
    presets: Built-in scenes (import toy_raytracer.scene.presets directly)

These modules allocate Taichi fields; import them after ti.init().
"""

from .intersection import (
    MAX_SPHERES,
    SceneHitRecord,
    add_sphere,
    clear_scene,
    get_sphere_count,
    intersect_scene,
)
from .manager import MaterialInfo, Scene, SphereInfo

__all__ = [
    "MAX_SPHERES",
    "SceneHitRecord",
    "add_sphere",
    "clear_scene",
    "get_sphere_count",
    "intersect_scene",
    "MaterialInfo",
    "Scene",
    "SphereInfo",
]
