"""Unit tests for the SceneManager.

Tests cover:
- Material registration and lookup
- Adding spheres, patches and boxes
- Lights and ambient radiance
- Building immutable scenes
- Scene clearing
"""

import logging

import pytest


@pytest.fixture
def fresh_scene():
    """Create a fresh SceneManager for each test."""
    from src.lumen.scene.manager import SceneManager

    scene = SceneManager()
    yield scene
    scene.clear()


class TestMaterialRegistration:
    """Tests for material registration."""

    def test_add_multiple_materials(self, fresh_scene):
        """Test material IDs are assigned in insertion order."""
        id0 = fresh_scene.add_lambertian_material(albedo=(0.8, 0.3, 0.3))
        id1 = fresh_scene.add_mirror_material(weight=0.9)
        id2 = fresh_scene.add_dielectric_material(refraction_index=1.5)
        id3 = fresh_scene.add_lambertian_material(albedo=(0.1, 0.8, 0.1))

        assert (id0, id1, id2, id3) == (0, 1, 2, 3)
        assert fresh_scene.get_material_count() == 4

    def test_get_material(self, fresh_scene):
        """Test lookup returns the registered material."""
        glass = fresh_scene.add_dielectric_material(refraction_index=1.33, reflection=0.1)
        material = fresh_scene.get_material(glass)
        assert material.refraction_index == pytest.approx(1.33)
        assert material.is_transmissive
        assert material.is_reflective

    @pytest.mark.parametrize("material_id", [-1, 0, 5])
    def test_invalid_material_id(self, fresh_scene, material_id):
        """Test looking up an unknown material ID raises."""
        with pytest.raises(ValueError, match="Invalid material_id"):
            fresh_scene.get_material(material_id)

    def test_material_validation(self, fresh_scene):
        """Test invalid material parameters raise ValueError."""
        with pytest.raises(ValueError):
            fresh_scene.add_lambertian_material(albedo=(-0.1, 0.5, 0.5))
        with pytest.raises(ValueError):
            fresh_scene.add_dielectric_material(refraction_index=0.0)

    def test_shared_material(self, fresh_scene):
        """Test solids added with one material ID share the Material."""
        white = fresh_scene.add_lambertian_material(albedo=0.73)
        fresh_scene.add_sphere((0, 0, 0), 1.0, white)
        fresh_scene.add_sphere((3, 0, 0), 1.0, white)
        scene = fresh_scene.build()
        assert scene.solids[0].material is scene.solids[1].material


class TestPrimitiveAddition:
    """Tests for adding solids."""

    def test_add_sphere_and_patch(self, fresh_scene):
        """Test solid indices and bookkeeping records."""
        mat = fresh_scene.add_lambertian_material(albedo=0.5)
        sphere = fresh_scene.add_sphere(center=(0, 0, -1), radius=0.5, material_id=mat)
        patch = fresh_scene.add_patch((0, 0, 0), (1, 0, 0), (0, 0, 1), mat)

        assert (sphere, patch) == (0, 1)
        assert fresh_scene.get_solid_count() == 2
        assert [info.kind for info in fresh_scene.solid_infos] == ["sphere", "patch"]
        assert fresh_scene.solid_infos[1].material_id == mat

    def test_add_with_unknown_material(self, fresh_scene):
        """Test adding a solid with an invalid material ID raises."""
        with pytest.raises(ValueError, match="Invalid material_id"):
            fresh_scene.add_sphere((0, 0, 0), 1.0, material_id=3)
        assert fresh_scene.get_solid_count() == 0

    def test_invalid_sphere_radius(self, fresh_scene):
        """Test a non-positive radius raises."""
        mat = fresh_scene.add_lambertian_material(albedo=0.5)
        with pytest.raises(ValueError):
            fresh_scene.add_sphere((0, 0, 0), -1.0, mat)

    def test_add_box(self, fresh_scene):
        """Test a box adds six patch solids."""
        mat = fresh_scene.add_lambertian_material(albedo=0.5)
        fresh_scene.add_sphere((5, 5, 5), 1.0, mat)
        indices = fresh_scene.add_box((0, 1, 0), (0, 1, -1), (1, 1, 0), (0, 0, 0), mat)

        assert indices == (1, 2, 3, 4, 5, 6)
        assert fresh_scene.get_solid_count() == 7
        assert all(info.kind == "patch" for info in fresh_scene.solid_infos[1:])


class TestLightsAndBuild:
    """Tests for lights, ambient and build()."""

    def test_add_light(self, fresh_scene):
        """Test lights get their own index space and info record."""
        from src.lumen.core.radiance import Radiance

        index = fresh_scene.add_light((-1, 4, -1), (2, 0, 0), (0, 0, 3), intensity=10.0)
        assert index == 0
        assert fresh_scene.get_light_count() == 1
        info = fresh_scene.light_infos[0]
        assert info.area == pytest.approx(6.0)
        assert info.intensity == Radiance.gray(10.0)

    def test_build(self, fresh_scene):
        """Test build() snapshots solids, lights and ambient."""
        from src.lumen.core.radiance import Radiance

        mat = fresh_scene.add_lambertian_material(albedo=0.5)
        fresh_scene.add_sphere((0, 0, 0), 1.0, mat)
        fresh_scene.add_light((-1, 4, -1), (2, 0, 0), (0, 0, 2), intensity=(1.0, 0.5, 0.5))
        fresh_scene.set_ambient(0.05)

        scene = fresh_scene.build()
        assert len(scene.solids) == 1
        assert len(scene.lights) == 1
        assert scene.ambient == Radiance.gray(0.05)
        assert scene.lights[0].intensity == Radiance(1.0, 0.5, 0.5)

    def test_build_is_snapshot(self, fresh_scene):
        """Test later additions do not change an already built scene."""
        mat = fresh_scene.add_lambertian_material(albedo=0.5)
        fresh_scene.add_sphere((0, 0, 0), 1.0, mat)
        scene = fresh_scene.build()
        fresh_scene.add_sphere((3, 0, 0), 1.0, mat)

        assert len(scene.solids) == 1
        assert len(fresh_scene.build().solids) == 2

    def test_build_empty_scene(self, fresh_scene):
        """Test building with nothing added raises."""
        with pytest.raises(RuntimeError, match="empty scene"):
            fresh_scene.build()

    def test_build_without_lights_warns(self, fresh_scene, caplog):
        """Test a scene without lights logs a warning."""
        mat = fresh_scene.add_lambertian_material(albedo=0.5)
        fresh_scene.add_sphere((0, 0, 0), 1.0, mat)
        with caplog.at_level(logging.WARNING, logger="src.lumen.scene.manager"):
            fresh_scene.build()
        assert "no light sources" in caplog.text

    def test_clear(self, fresh_scene):
        """Test clear() resets everything."""
        from src.lumen.core.radiance import Radiance

        mat = fresh_scene.add_lambertian_material(albedo=0.5)
        fresh_scene.add_sphere((0, 0, 0), 1.0, mat)
        fresh_scene.add_light((-1, 4, -1), (2, 0, 0), (0, 0, 2), intensity=1.0)
        fresh_scene.set_ambient(0.1)
        fresh_scene.clear()

        assert fresh_scene.get_solid_count() == 0
        assert fresh_scene.get_light_count() == 0
        assert fresh_scene.get_material_count() == 0
        assert fresh_scene.ambient == Radiance.zero()
