"""Built-in scenes.

Each preset bundles a camera, a scene and the integrator it is meant to be
rendered with:

- weekend: a field of small random spheres around three large ones (glass,
  diffuse brown, polished metal), seen through a thin-lens camera.
- diffuse-spheres: a sphere on a huge ground sphere, rendered with the
  half-diffuse integrator.
- shiny-metal / fuzzy-metal: a diffuse sphere between two metal spheres,
  polished and rough respectively.
- hollow-glass-spheres: a glass shell (a sphere with a negative-radius inner
  wall sharing its material) next to diffuse and metal spheres.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from toy_raytracer.scene.presets import create_scene
    >>> preset = create_scene("fuzzy-metal", aspect_ratio=1.5)
    >>> len(preset.scene)
    4
"""

from typing import NamedTuple

import numpy as np

from toy_raytracer.camera import Camera, PositionalCamera, SimpleCamera
from toy_raytracer.config import SceneName
from toy_raytracer.core.integrator import Integrator
from toy_raytracer.materials import Absorbing, Dielectric, Lambertian, Metal
from toy_raytracer.scene.manager import Scene

# Region around the large metal sphere kept free of small spheres
_WEEKEND_CLEARING_CENTER = np.array([4.0, 0.2, 0.0])
_WEEKEND_CLEARING_RADIUS = 0.9


class ScenePreset(NamedTuple):
    """Everything needed to render a built-in scene."""

    camera: Camera
    scene: Scene
    integrator: Integrator


def _three_sphere_scene(
    center: Lambertian,
    left: Lambertian | Metal | Dielectric,
    right: Metal,
    ground: Lambertian,
) -> Scene:
    scene = Scene()
    scene.add_sphere((0.0, -100.5, -1.0), 100.0, ground)
    scene.add_sphere((0.0, 0.0, -1.0), 0.5, center)
    scene.add_sphere((-1.0, 0.0, -1.0), 0.5, left)
    scene.add_sphere((1.0, 0.0, -1.0), 0.5, right)
    return scene


def diffuse_spheres(aspect_ratio: float) -> ScenePreset:
    """Two spheres shaded by the half-diffuse integrator."""
    placeholder = Absorbing()
    scene = Scene()
    scene.add_sphere((0.0, 0.0, -1.0), 0.5, placeholder)
    scene.add_sphere((0.0, -100.5, -1.0), 100.0, placeholder)
    return ScenePreset(SimpleCamera(aspect_ratio=aspect_ratio), scene, Integrator.HALF_DIFFUSE)


def shiny_metal(aspect_ratio: float) -> ScenePreset:
    """A diffuse sphere between two polished metal spheres."""
    scene = _three_sphere_scene(
        center=Lambertian((0.7, 0.3, 0.3)),
        left=Metal((0.8, 0.8, 0.8), fuzz=0.0),
        right=Metal((0.8, 0.6, 0.2), fuzz=0.0),
        ground=Lambertian((0.8, 0.8, 0.0)),
    )
    return ScenePreset(SimpleCamera(aspect_ratio=aspect_ratio), scene, Integrator.SCATTER)


def fuzzy_metal(aspect_ratio: float) -> ScenePreset:
    """A diffuse sphere between a slightly rough and a very rough metal sphere."""
    scene = _three_sphere_scene(
        center=Lambertian((0.7, 0.3, 0.3)),
        left=Metal((0.8, 0.8, 0.8), fuzz=0.3),
        right=Metal((0.8, 0.6, 0.2), fuzz=1.0),
        ground=Lambertian((0.8, 0.8, 0.0)),
    )
    return ScenePreset(SimpleCamera(aspect_ratio=aspect_ratio), scene, Integrator.SCATTER)


def hollow_glass_spheres(aspect_ratio: float) -> ScenePreset:
    """A hollow glass sphere next to diffuse and metal spheres."""
    glass = Dielectric(1.5)
    scene = _three_sphere_scene(
        center=Lambertian((0.1, 0.2, 0.5)),
        left=glass,
        right=Metal((0.8, 0.6, 0.2), fuzz=0.0),
        ground=Lambertian((0.8, 0.8, 0.0)),
    )
    # Inner wall of the shell; the negative radius turns its normals inward
    scene.add_sphere((-1.0, 0.0, -1.0), -0.4, glass)
    return ScenePreset(SimpleCamera(aspect_ratio=aspect_ratio), scene, Integrator.SCATTER)


def weekend(aspect_ratio: float, seed: int | None = None) -> ScenePreset:
    """Random field of small spheres around three large ones.

    Small spheres of radius 0.2 sit on a 22 x 22 grid with random jitter.
    Their materials are 80% Lambertian, 15% Metal and 5% glass.

    Args:
        aspect_ratio: Image width divided by height.
        seed: Seed for the random layout. None draws fresh entropy.
    """
    rng = np.random.default_rng(seed)
    glass = Dielectric(1.5)
    scene = Scene()

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = np.array([a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random()])

            if np.linalg.norm(center - _WEEKEND_CLEARING_CENTER) <= _WEEKEND_CLEARING_RADIUS:
                continue

            if choose_mat < 0.8:
                albedo = rng.random(3) ** 2
                material = Lambertian(tuple(albedo))
            elif choose_mat < 0.95:
                albedo = rng.uniform(0.5, 1.0, size=3)
                material = Metal(tuple(albedo), fuzz=rng.uniform(0.0, 0.5))
            else:
                material = glass

            scene.add_sphere(center, 0.2, material)

    scene.add_sphere((0.0, 1.0, 0.0), 1.0, glass)
    scene.add_sphere((-4.0, 1.0, 0.0), 1.0, Lambertian((0.4, 0.2, 0.1)))
    scene.add_sphere((4.0, 1.0, 0.0), 1.0, Metal((0.7, 0.6, 0.5), fuzz=0.1))
    scene.add_sphere((0.0, -1000.0, 0.0), 1000.0, Lambertian((0.5, 0.5, 0.5)))

    camera = PositionalCamera(
        lookfrom=(13.0, 2.0, 3.0),
        lookat=(0.0, 0.0, 0.0),
        vup=(0.0, 1.0, 0.0),
        vfov=20.0,
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=10.0,
    )
    return ScenePreset(camera, scene, Integrator.SCATTER)


def create_scene(
    name: str | SceneName,
    aspect_ratio: float,
    seed: int | None = None,
) -> ScenePreset:
    """Build a built-in scene by name.

    Args:
        name: Scene name (case-insensitive), see SceneName.
        aspect_ratio: Image width divided by height.
        seed: Seed for scenes with a random layout.

    Returns:
        The preset's camera, scene and integrator.

    Raises:
        ValueError: If the name is unknown.
    """
    scene_name = SceneName.parse(name)
    if scene_name is SceneName.WEEKEND:
        return weekend(aspect_ratio, seed)
    if scene_name is SceneName.DIFFUSE_SPHERES:
        return diffuse_spheres(aspect_ratio)
    if scene_name is SceneName.SHINY_METAL:
        return shiny_metal(aspect_ratio)
    if scene_name is SceneName.FUZZY_METAL:
        return fuzzy_metal(aspect_ratio)
    return hollow_glass_spheres(aspect_ratio)
