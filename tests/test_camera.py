"""Tests for Camera class."""

import pytest
import math
from spheretracer.vec3 import Vec3, Point3
from spheretracer.camera import Camera, CameraConfig
from spheretracer.sampling import RandomSource
from spheretracer.errors import ConfigurationError


@pytest.fixture
def rng():
    return RandomSource(7)


class TestCameraConfig:
    """Test CameraConfig validation and defaults."""

    def test_focus_distance_defaults_to_look_distance(self):
        config = CameraConfig(look_from=Point3(3, 0, 4), look_at=Point3(0, 0, 0))
        assert abs(config.focus_dist - 5.0) < 1e-12

    def test_explicit_focus_distance_kept(self):
        config = CameraConfig(focus_dist=10.0)
        assert config.focus_dist == 10.0

    def test_pinhole(self):
        config = CameraConfig.pinhole(2.0)
        assert config.aspect_ratio == 2.0
        assert config.aperture == 0.0
        assert config.vfov == 90.0
        assert config.focus_dist == 1.0

    @pytest.mark.parametrize("kwargs", [
        {"aspect_ratio": 0.0},
        {"aperture": -0.1},
        {"focus_dist": 0.0},
        {"vfov": 0.0},
        {"vfov": 180.0},
        {"look_from": Point3(0, 0, -1)},
    ])
    def test_invalid_config(self, kwargs):
        with pytest.raises(ConfigurationError):
            CameraConfig(**kwargs)


class TestCameraCreation:
    """Test Camera construction."""

    def test_origin(self):
        cam = Camera(CameraConfig.pinhole(16 / 9))
        assert cam.origin == Point3(0, 0, 0)

    def test_camera_basis_vectors(self):
        cam = Camera(CameraConfig.pinhole(1.0))
        assert cam.w == Vec3(0, 0, 1)
        assert cam.u == Vec3(1, 0, 0)
        assert cam.v == Vec3(0, 1, 0)

    def test_basis_is_orthonormal(self):
        cam = Camera(CameraConfig(
            look_from=Point3(13, 2, 3),
            look_at=Point3(0, 0, 0),
            vfov=20,
            aspect_ratio=1.5,
        ))
        for axis in (cam.u, cam.v, cam.w):
            assert abs(axis.length() - 1.0) < 1e-12
        assert abs(cam.u.dot(cam.v)) < 1e-12
        assert abs(cam.u.dot(cam.w)) < 1e-12
        assert abs(cam.v.dot(cam.w)) < 1e-12

    def test_pinhole_viewport(self):
        cam = Camera(CameraConfig.pinhole(2.0))
        assert cam.horizontal == Vec3(4, 0, 0)
        assert cam.vertical == Vec3(0, 2, 0)
        assert cam.lower_left_corner == Point3(-2, -1, -1)
        assert cam.lens_radius == 0.0

    def test_viewport_scales_with_focus_distance(self):
        cam = Camera(CameraConfig(aspect_ratio=1.0, focus_dist=3.0))
        assert cam.vertical == Vec3(0, 6, 0)
        assert cam.lower_left_corner == Point3(-3, -3, -3)

    def test_vup_parallel_to_view_rejected(self):
        with pytest.raises(ConfigurationError):
            Camera(CameraConfig(look_from=Point3(0, 10, 0), look_at=Point3(0, 0, 0), vup=Vec3(0, 1, 0)))


class TestCameraRays:
    """Test Camera.get_ray() method."""

    def test_center_ray(self, rng):
        cam = Camera(CameraConfig.pinhole(1.0))
        ray = cam.get_ray(0.5, 0.5, rng)
        assert ray.direction == Vec3(0, 0, -1)

    def test_corner_rays(self, rng):
        cam = Camera(CameraConfig.pinhole(1.0))

        bl = cam.get_ray(0, 0, rng)
        assert bl.direction == Vec3(-1, -1, -1)

        tr = cam.get_ray(1, 1, rng)
        assert tr.direction == Vec3(1, 1, -1)

    def test_outside_viewport_is_valid(self, rng):
        cam = Camera(CameraConfig.pinhole(1.0))
        ray = cam.get_ray(1.5, -0.5, rng)
        assert ray.direction == Vec3(2, -2, -1)

    def test_ray_origin_without_dof(self, rng):
        cam = Camera(CameraConfig(look_from=Point3(1, 2, 3), look_at=Point3(0, 0, 0), aspect_ratio=1.0))
        for _ in range(10):
            assert cam.get_ray(0.3, 0.7, rng).origin == cam.origin

    def test_angled_camera_looks_at_target(self, rng):
        cam = Camera(CameraConfig(
            look_from=Point3(5, 5, 5),
            look_at=Point3(0, 0, 0),
            vfov=60,
            aspect_ratio=1.0,
        ))
        ray = cam.get_ray(0.5, 0.5, rng)
        target = (Point3(0, 0, 0) - cam.origin).normalize()
        assert abs(ray.direction.normalize().dot(target) - 1.0) < 1e-12


class TestDepthOfField:
    """Test Camera depth of field."""

    def test_dof_varies_origin(self, rng):
        cam = Camera(CameraConfig(
            look_at=Point3(0, 0, -10),
            aspect_ratio=1.0,
            aperture=2.0,
            focus_dist=10.0,
        ))

        origins = [cam.get_ray(0.5, 0.5, rng).origin for _ in range(100)]

        xs = [o.x for o in origins]
        assert max(xs) - min(xs) > 0.1
        # Lens samples stay within the lens radius in the camera plane
        for o in origins:
            assert (o - cam.origin).length() < cam.lens_radius
            assert abs(o.z) < 1e-12

    def test_focus_plane_is_sharp(self, rng):
        cam = Camera(CameraConfig(
            look_at=Point3(0, 0, -10),
            aspect_ratio=1.0,
            aperture=2.0,
            focus_dist=10.0,
        ))
        # Every lens sample aims at the same point on the focus plane
        focus_point = cam.lower_left_corner + cam.horizontal * 0.25 + cam.vertical * 0.75
        for _ in range(20):
            ray = cam.get_ray(0.25, 0.75, rng)
            assert ray.at(1.0) == focus_point


class TestFieldOfView:
    """Test Camera field of view."""

    def test_narrow_fov(self, rng):
        cam_narrow = Camera(CameraConfig(vfov=20, aspect_ratio=1.0))
        cam_wide = Camera(CameraConfig(vfov=90, aspect_ratio=1.0))

        center = Vec3(0, 0, -1)
        narrow = cam_narrow.get_ray(1, 1, rng).direction.normalize()
        wide = cam_wide.get_ray(1, 1, rng).direction.normalize()
        assert narrow.dot(center) > wide.dot(center)
