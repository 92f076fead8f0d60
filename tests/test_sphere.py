"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside (near root)
- Ray missing sphere
- Ray starting inside sphere (far root, hit from inside)
- Sphere behind the ray
- Tangent rays
- Equirectangular texture coordinates
"""

import math

import numpy as np
import pytest


class TestSphereBasics:
    """Tests for Sphere construction."""

    def test_make_sphere(self):
        """Test center and radius are stored as floats."""
        from src.lumen.geometry.sphere import Sphere

        sphere = Sphere((1, 2, 3), 1)
        np.testing.assert_allclose(sphere.center, [1.0, 2.0, 3.0])
        assert sphere.radius == 1.0
        assert isinstance(sphere.radius, float)

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_non_positive_radius_rejected(self, radius):
        """Test that a degenerate sphere raises."""
        from src.lumen.geometry.sphere import Sphere

        with pytest.raises(ValueError, match="radius"):
            Sphere((0.0, 0.0, 0.0), radius)

    def test_normal_at(self):
        """Test the normal points away from the center with unit length."""
        from src.lumen.core.ray import vec3
        from src.lumen.geometry.sphere import Sphere

        sphere = Sphere(vec3(1.0, 0.0, 0.0), 2.0)
        np.testing.assert_allclose(sphere.normal_at(vec3(1.0, 2.0, 0.0)), [0.0, 1.0, 0.0])


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_hit_sphere_direct_hit(self):
        """Test ray hitting sphere head-on from outside."""
        from src.lumen.core.ray import Ray, vec3
        from src.lumen.geometry.sphere import Sphere

        sphere = Sphere(vec3(0.0, 0.0, 0.0), 1.0)
        hit = sphere.intersect(Ray(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0)))

        assert hit is not None
        # Should hit at z=1 (front of sphere), so t=4
        assert hit.t == pytest.approx(4.0)
        np.testing.assert_allclose(hit.point, [0.0, 0.0, 1.0], atol=1e-12)
        np.testing.assert_allclose(hit.normal, [0.0, 0.0, 1.0], atol=1e-12)
        assert hit.hit_from_inside is False

    @pytest.mark.parametrize("distance,radius", [(3.0, 1.0), (10.0, 2.5), (1.5, 0.25)])
    def test_distance_from_outside(self, distance, radius):
        """Test a ray aimed at the center from distance d hits at d - r."""
        from src.lumen.core.ray import Ray, normalize, vec3
        from src.lumen.geometry.sphere import Sphere

        center = vec3(1.0, -2.0, 0.5)
        offset = normalize(vec3(1.0, 2.0, -2.0)) * distance
        sphere = Sphere(center, radius)
        hit = sphere.intersect(Ray(center + offset, normalize(-offset)))

        assert hit is not None
        assert hit.t == pytest.approx(distance - radius)
        assert not hit.hit_from_inside

    def test_miss_sphere(self):
        """Test ray passing beside the sphere."""
        from src.lumen.core.ray import Ray, vec3
        from src.lumen.geometry.sphere import Sphere

        sphere = Sphere(vec3(0.0, 0.0, 0.0), 1.0)
        assert sphere.intersect(Ray(vec3(2.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0))) is None

    def test_sphere_behind_ray(self):
        """Test ray pointing away from the sphere."""
        from src.lumen.core.ray import Ray, vec3
        from src.lumen.geometry.sphere import Sphere

        sphere = Sphere(vec3(0.0, 0.0, 0.0), 1.0)
        assert sphere.intersect(Ray(vec3(0.0, 0.0, 5.0), vec3(0.0, 0.0, 1.0))) is None

    def test_ray_inside_sphere(self):
        """Test ray starting at the center takes the far root."""
        from src.lumen.core.ray import Ray, vec3
        from src.lumen.geometry.sphere import Sphere

        sphere = Sphere(vec3(0.0, 0.0, 0.0), 2.0)
        hit = sphere.intersect(Ray(vec3(0.0, 0.0, 0.0), vec3(1.0, 0.0, 0.0)))

        assert hit is not None
        assert hit.t == pytest.approx(2.0)
        assert hit.hit_from_inside is True
        # The geometric normal still points outward
        np.testing.assert_allclose(hit.normal, [1.0, 0.0, 0.0])

    def test_ray_inside_off_center(self):
        """Test an off-center origin inside the sphere picks the far side."""
        from src.lumen.core.ray import Ray, vec3
        from src.lumen.geometry.sphere import Sphere

        sphere = Sphere(vec3(0.0, 0.0, 0.0), 1.0)
        hit = sphere.intersect(Ray(vec3(0.0, 0.0, 0.5), vec3(0.0, 0.0, -1.0)))

        assert hit is not None
        assert hit.t == pytest.approx(1.5)
        np.testing.assert_allclose(hit.point, [0.0, 0.0, -1.0], atol=1e-12)
        assert hit.hit_from_inside

    def test_tangent_ray(self):
        """Test a ray grazing the sphere touches it at one point."""
        from src.lumen.core.ray import Ray, vec3
        from src.lumen.geometry.sphere import Sphere

        sphere = Sphere(vec3(0.0, 0.0, 0.0), 1.0)
        hit = sphere.intersect(Ray(vec3(1.0, 0.0, 5.0), vec3(0.0, 0.0, -1.0)))

        assert hit is not None
        assert hit.t == pytest.approx(5.0)
        np.testing.assert_allclose(hit.point, [1.0, 0.0, 0.0], atol=1e-12)


class TestEquirectangularMapping:
    """Tests for sphere texture coordinates."""

    def test_poles(self):
        """Test the north pole maps to v=0 and the south pole to v=1."""
        from src.lumen.core.ray import vec3
        from src.lumen.geometry.sphere import Sphere, equirectangular_coordinates

        sphere = Sphere(vec3(0.0, 0.0, 0.0), 2.0)
        _, v_north = equirectangular_coordinates(sphere, vec3(0.0, 2.0, 0.0))
        _, v_south = equirectangular_coordinates(sphere, vec3(0.0, -2.0, 0.0))
        assert v_north == pytest.approx(0.0)
        assert v_south == pytest.approx(1.0)

    def test_equator_longitudes(self):
        """Test points on the equator map to v=0.5 and spread u over [0, 1]."""
        from src.lumen.core.ray import vec3
        from src.lumen.geometry.sphere import Sphere, equirectangular_coordinates

        sphere = Sphere(vec3(0.0, 0.0, 0.0), 1.0)
        u_front, v_front = equirectangular_coordinates(sphere, vec3(0.0, 0.0, 1.0))
        u_right, _ = equirectangular_coordinates(sphere, vec3(1.0, 0.0, 0.0))
        assert v_front == pytest.approx(0.5)
        assert u_front == pytest.approx(0.5)
        assert u_right == pytest.approx(0.5 + 0.25)

    def test_coordinates_in_range(self, rng):
        """Test random surface points map into the unit square."""
        from src.lumen.core.ray import random_unit_vector, vec3
        from src.lumen.geometry.sphere import Sphere, equirectangular_coordinates

        sphere = Sphere(vec3(3.0, 1.0, -2.0), 0.5)
        for _ in range(100):
            point = sphere.center + 0.5 * random_unit_vector(rng)
            u, v = equirectangular_coordinates(sphere, point)
            assert 0.0 <= u <= 1.0
            assert 0.0 <= v <= 1.0
            assert not math.isnan(u)
