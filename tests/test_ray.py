"""Unit tests for the ray module.

Tests cover:
- Ray dataclass and ray_at function
- Vector utility functions (dot, cross, unit, length, reflect, refract)
- Schlick reflectance
- Random sampling distributions driven by an explicit generator state
"""

import math

import numpy as np
import pytest
import taichi as ti


class TestRayBasics:
    """Tests for Ray dataclass and basic operations."""

    def test_ray_at_origin(self):
        """Test ray_at returns origin when t=0."""
        from toy_raytracer.core.ray import make_ray, ray_at, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(1.0, 2.0, 3.0), vec3(0.0, 0.0, -1.0))
            result[None] = ray_at(ray, 0.0)

        test_kernel()
        r = result[None]
        assert abs(r[0] - 1.0) < 1e-6
        assert abs(r[1] - 2.0) < 1e-6
        assert abs(r[2] - 3.0) < 1e-6

    def test_ray_at_unnormalized_direction(self):
        """Test ray_at scales by the direction's length."""
        from toy_raytracer.core.ray import Ray, ray_at, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(1.0, 0.0, 0.0), direction=vec3(0.0, 2.0, 0.0), t=0.0)
            result[None] = ray_at(ray, 2.5)

        test_kernel()
        r = result[None]
        assert abs(r[0] - 1.0) < 1e-6
        assert abs(r[1] - 5.0) < 1e-6
        assert abs(r[2] - 0.0) < 1e-6


class TestVectorAlgebra:
    """Tests for vector helper functions."""

    def test_dot_with_self_is_length_squared(self):
        """dot(v, v) equals length_squared(v)."""
        from toy_raytracer.core.ray import dot, length, length_squared, vec3

        result = ti.field(dtype=ti.f32, shape=3)

        @ti.kernel
        def test_kernel():
            v = vec3(1.0, -2.0, 3.0)
            result[0] = dot(v, v)
            result[1] = length_squared(v)
            result[2] = length(v)

        test_kernel()
        assert abs(result[0] - 14.0) < 1e-5
        assert abs(result[1] - 14.0) < 1e-5
        assert abs(result[2] - math.sqrt(14.0)) < 1e-5

    def test_dot_with_negated_vector(self):
        """dot(u, -v) equals -dot(u, v)."""
        from toy_raytracer.core.ray import dot, vec3

        result = ti.field(dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            u = vec3(0.5, 2.0, -1.0)
            v = vec3(3.0, -1.5, 4.0)
            result[0] = dot(u, -v)
            result[1] = dot(u, v)

        test_kernel()
        assert abs(result[0] + result[1]) < 1e-5

    def test_cross_product(self):
        """x cross y is z."""
        from toy_raytracer.core.ray import cross, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = cross(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        r = result[None]
        assert abs(r[0]) < 1e-6
        assert abs(r[1]) < 1e-6
        assert abs(r[2] - 1.0) < 1e-6

    def test_unit(self):
        """unit() scales to length one."""
        from toy_raytracer.core.ray import unit, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = unit(vec3(3.0, 0.0, 4.0))

        test_kernel()
        r = result[None]
        assert abs(r[0] - 0.6) < 1e-6
        assert abs(r[1]) < 1e-6
        assert abs(r[2] - 0.8) < 1e-6

    def test_near_zero(self):
        """near_zero detects vectors with all tiny components."""
        from toy_raytracer.core.ray import near_zero, vec3

        result = ti.field(dtype=ti.i32, shape=2)

        @ti.kernel
        def test_kernel():
            result[0] = near_zero(vec3(1e-9, -1e-9, 0.0))
            result[1] = near_zero(vec3(1e-9, 1e-3, 0.0))

        test_kernel()
        assert result[0] == 1
        assert result[1] == 0


class TestReflectRefract:
    """Tests for reflection and refraction."""

    def test_reflect(self):
        """reflect((1,-1,0), (0,1,0)) is (1,1,0)."""
        from toy_raytracer.core.ray import reflect, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = reflect(vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        r = result[None]
        assert abs(r[0] - 1.0) < 1e-6
        assert abs(r[1] - 1.0) < 1e-6
        assert abs(r[2]) < 1e-6

    def test_refract_straight_through(self):
        """Normal incidence passes through unchanged for ratio 1."""
        from toy_raytracer.core.ray import refract, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = refract(vec3(0.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0), 1.0)

        test_kernel()
        r = result[None]
        assert abs(r[0]) < 1e-6
        assert abs(r[1] + 1.0) < 1e-6
        assert abs(r[2]) < 1e-6

    def test_refract_obeys_snell(self):
        """Refracted direction satisfies n1 sin(theta1) = n2 sin(theta2)."""
        from toy_raytracer.core.ray import refract, vec3

        ratio = 1.0 / 1.5
        theta = math.radians(45.0)
        incident = (math.sin(theta), -math.cos(theta), 0.0)
        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel(ix: ti.f32, iy: ti.f32, eta: ti.f32):
            result[None] = refract(vec3(ix, iy, 0.0), vec3(0.0, 1.0, 0.0), eta)

        test_kernel(incident[0], incident[1], ratio)
        r = np.array(result[None].to_numpy(), dtype=np.float64)

        assert abs(np.linalg.norm(r) - 1.0) < 1e-5
        assert r[1] < 0.0
        sin_out = r[0] / np.linalg.norm(r)
        assert abs(sin_out - ratio * math.sin(theta)) < 1e-5

    def test_refract_bends_45_degrees_to_30(self):
        """At ratio sqrt(2)/2 a 45 degree ray leaves at 30 degrees from the normal."""
        from toy_raytracer.core.ray import refract, unit, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel(eta: ti.f32):
            result[None] = refract(unit(vec3(1.0, -1.0, 0.0)), vec3(0.0, 1.0, 0.0), eta)

        test_kernel(math.sqrt(2.0) / 2.0)
        np.testing.assert_allclose(
            result[None].to_numpy(), [0.5, -math.sqrt(3.0) / 2.0, 0.0], atol=1e-5
        )

    @pytest.mark.parametrize("cosine, ref_idx", [(1.0, 1.5), (0.5, 1.5), (0.0, 1.0 / 1.5)])
    def test_schlick_reflectance(self, cosine, ref_idx):
        """Schlick reflectance matches the closed form."""
        from toy_raytracer.core.ray import schlick_reflectance

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel(c: ti.f32, r: ti.f32):
            result[None] = schlick_reflectance(c, r)

        test_kernel(cosine, ref_idx)
        r0 = ((1.0 - ref_idx) / (1.0 + ref_idx)) ** 2
        expected = r0 + (1.0 - r0) * (1.0 - cosine) ** 5
        assert abs(result[None] - expected) < 1e-5

    def test_schlick_grazing_is_total(self):
        """At grazing incidence Schlick reflectance is 1."""
        from toy_raytracer.core.ray import schlick_reflectance

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = schlick_reflectance(0.0, 1.5)

        test_kernel()
        assert abs(result[None] - 1.0) < 1e-5


class TestRandomSampling:
    """Tests for sampling distributions."""

    N = 2000

    def test_random_in_unit_sphere(self):
        """Points lie strictly inside the unit ball and fill it."""
        from toy_raytracer.core.ray import length_squared, random_in_unit_sphere
        from toy_raytracer.core.rng import seed_stream

        n = self.N
        points = ti.Vector.field(3, dtype=ti.f32, shape=n)
        lengths = ti.field(dtype=ti.f32, shape=n)

        @ti.kernel
        def test_kernel():
            for _ in range(1):
                state = seed_stream(ti.cast(11, ti.u32), 0)
                for i in range(n):
                    p, state = random_in_unit_sphere(state)
                    points[i] = p
                    lengths[i] = length_squared(p)

        test_kernel()
        lengths_np = lengths.to_numpy()
        points_np = points.to_numpy()
        assert np.all(lengths_np < 1.0)
        assert lengths_np.max() > 0.9
        assert np.all(np.abs(points_np.mean(axis=0)) < 0.1)

    def test_random_unit_vector(self):
        """Unit vectors have length one and no preferred direction."""
        from toy_raytracer.core.ray import random_unit_vector
        from toy_raytracer.core.rng import seed_stream

        n = self.N
        vectors = ti.Vector.field(3, dtype=ti.f32, shape=n)

        @ti.kernel
        def test_kernel():
            for _ in range(1):
                state = seed_stream(ti.cast(12, ti.u32), 0)
                for i in range(n):
                    v, state = random_unit_vector(state)
                    vectors[i] = v

        test_kernel()
        vectors_np = vectors.to_numpy()
        norms = np.linalg.norm(vectors_np, axis=1)
        assert np.all(np.abs(norms - 1.0) < 1e-4)
        assert np.all(np.abs(vectors_np.mean(axis=0)) < 0.1)

    def test_random_in_unit_disk(self):
        """Disk samples lie in the xy-plane inside the unit circle."""
        from toy_raytracer.core.ray import random_in_unit_disk
        from toy_raytracer.core.rng import seed_stream

        n = self.N
        points = ti.Vector.field(3, dtype=ti.f32, shape=n)

        @ti.kernel
        def test_kernel():
            for _ in range(1):
                state = seed_stream(ti.cast(14, ti.u32), 0)
                for i in range(n):
                    p, state = random_in_unit_disk(state)
                    points[i] = p

        test_kernel()
        points_np = points.to_numpy()
        assert np.all(points_np[:, 2] == 0.0)
        assert np.all(points_np[:, 0] ** 2 + points_np[:, 1] ** 2 < 1.0)
        assert np.abs(points_np[:, 0]).max() > 0.9

    def test_same_state_same_samples(self):
        """Sampling is a pure function of the generator state."""
        from toy_raytracer.core.ray import random_in_unit_sphere
        from toy_raytracer.core.rng import seed_stream

        result = ti.Vector.field(3, dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            for _ in range(1):
                first, _s1 = random_in_unit_sphere(seed_stream(ti.cast(5, ti.u32), 9))
                second, _s2 = random_in_unit_sphere(seed_stream(ti.cast(5, ti.u32), 9))
                result[0] = first
                result[1] = second

        test_kernel()
        assert np.allclose(result[0].to_numpy(), result[1].to_numpy())
