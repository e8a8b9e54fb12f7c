"""
Camera module for generating primary rays.

Supports:
- Perspective projection
- Depth of field (thin-lens defocus blur)
- Configurable field of view
- Arbitrary positioning via look-at
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
import math

from .vec3 import Vec3, Point3
from .ray import Ray
from .sampling import RandomSource
from .errors import ConfigurationError


@dataclass
class CameraConfig:
    """Extrinsic and lens parameters of a camera.

    Attributes:
        look_from: Camera position in world space
        look_at: Point the camera is looking at
        vup: World up vector, projected onto the image plane to orient the camera
        vfov: Vertical field of view in degrees
        aspect_ratio: Width / height of the viewport
        aperture: Lens diameter for depth of field (0 = pinhole)
        focus_dist: Distance to the plane in perfect focus
            (None = distance from look_from to look_at)
    """
    look_from: Point3 = field(default_factory=lambda: Point3(0, 0, 0))
    look_at: Point3 = field(default_factory=lambda: Point3(0, 0, -1))
    vup: Vec3 = field(default_factory=lambda: Vec3(0, 1, 0))
    vfov: float = 90.0
    aspect_ratio: float = 16.0 / 9.0
    aperture: float = 0.0
    focus_dist: Optional[float] = None

    def __post_init__(self):
        if not 0 < self.vfov < 180:
            raise ConfigurationError(f"Vertical field of view must be in (0, 180) degrees, got {self.vfov}")
        if self.aspect_ratio <= 0:
            raise ConfigurationError(f"Aspect ratio must be positive, got {self.aspect_ratio}")
        if self.aperture < 0:
            raise ConfigurationError(f"Aperture must not be negative, got {self.aperture}")
        if (self.look_from - self.look_at).near_zero():
            raise ConfigurationError("look_from and look_at must be distinct points")
        if self.focus_dist is None:
            self.focus_dist = (self.look_from - self.look_at).length()
        elif self.focus_dist <= 0:
            raise ConfigurationError(f"Focus distance must be positive, got {self.focus_dist}")

    @classmethod
    def pinhole(cls, aspect_ratio: float) -> CameraConfig:
        """Pinhole camera at the origin looking down -z with a focal length of 1."""
        return cls(aspect_ratio=aspect_ratio)


class Camera:
    """A thin-lens perspective camera. Immutable once constructed."""

    def __init__(self, config: CameraConfig):
        """Derive the viewing basis and viewport from a configuration.

        Args:
            config: Camera parameters
        """
        theta = math.radians(config.vfov)
        h = math.tan(theta / 2)
        viewport_height = 2.0 * h
        viewport_width = config.aspect_ratio * viewport_height
        focus_dist = config.focus_dist

        # Compute orthonormal camera basis
        self.w = (config.look_from - config.look_at).normalize()  # Points backward from camera
        u = config.vup.cross(self.w)
        if u.near_zero():
            raise ConfigurationError("vup must not be parallel to the viewing direction")
        self.u = u.normalize()                        # Points right
        self.v = self.w.cross(self.u)                 # Points up

        self.origin = config.look_from
        self.horizontal = self.u * viewport_width * focus_dist
        self.vertical = self.v * viewport_height * focus_dist
        self.lower_left_corner = (
            self.origin
            - self.horizontal / 2
            - self.vertical / 2
            - self.w * focus_dist
        )

        self.lens_radius = config.aperture / 2
        self.aspect_ratio = config.aspect_ratio

    def get_ray(self, s: float, t: float, rng: RandomSource) -> Ray:
        """Generate a ray through the viewport point (s, t).

        Args:
            s: Horizontal coordinate, 0 = left edge, 1 = right edge
            t: Vertical coordinate, 0 = bottom edge, 1 = top edge
            rng: Random source for sampling the lens

        Coordinates outside [0, 1] address points beyond the viewport.

        Returns:
            A ray from the lens through the specified viewport point
        """
        if self.lens_radius > 0:
            rd = rng.in_unit_disk() * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y
        else:
            offset = Vec3(0, 0, 0)

        direction = (
            self.lower_left_corner
            + self.horizontal * s
            + self.vertical * t
            - self.origin
            - offset
        )
        return Ray(self.origin + offset, direction)

    def __repr__(self) -> str:
        return f"Camera(origin={self.origin}, looking_at={self.lower_left_corner + self.horizontal/2 + self.vertical/2})"
