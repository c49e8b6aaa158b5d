"""Toy Monte Carlo ray tracer.

Renders scenes of analytic spheres with diffuse, metallic and dielectric
materials by tracing stochastic light paths from a camera. All per-ray work
runs inside Taichi kernels; rows of the image are rendered in parallel on
the CPU backend.

Subpackages:
    core: Random source, ray math, radiance integrator and render driver
    geometry: Hit records and sphere intersection
    materials: Material descriptions, scattering functions and material arena
    scene: Scene storage, nearest-hit queries and preset scenes
    camera: Simple and positional (thin lens) cameras
    output: PNG encoding

Taichi must be initialised (``ti.init``) before importing modules that
allocate fields (scene, camera, materials.registry, core.integrator,
core.render). The command line entry point handles this.
"""

__version__ = "0.1.0"
