"""Materials module for light scattering models.

Components:
    lambertian: Ideal diffuse reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like materials with refraction (Schlick reflectance)
    absorbing: Surfaces that absorb every ray
    registry: The material arena read by render kernels

Each material is described by an immutable dataclass that can be shared by
any number of spheres, and provides a Taichi scatter function returning
(scattered_direction, attenuation, did_scatter, rng).

The registry allocates Taichi fields and is imported directly from
toy_raytracer.materials.registry after ti.init().
"""

from .absorbing import Absorbing, scatter_absorbing
from .base import MaterialType, validate_albedo
from .dielectric import Dielectric, refraction_ratio_for, scatter_dielectric, will_reflect
from .lambertian import Lambertian, scatter_lambertian
from .metal import Metal, scatter_metal

# Any value accepted by registry.add_material and Scene.add_sphere
Material = Lambertian | Metal | Dielectric | Absorbing

__all__ = [
    "Material",
    "MaterialType",
    "validate_albedo",
    # Lambertian
    "Lambertian",
    "scatter_lambertian",
    # Metal
    "Metal",
    "scatter_metal",
    # Dielectric
    "Dielectric",
    "scatter_dielectric",
    "refraction_ratio_for",
    "will_reflect",
    # Absorbing
    "Absorbing",
    "scatter_absorbing",
]
