"""
Surface materials.

Implements:
- Lambertian diffuse
- Metal (specular reflection with fuzz)
- Dielectric (glass, water - with refraction)

Materials are immutable after construction and may be shared by any
number of surfaces.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional, TYPE_CHECKING
import math

from .vec3 import Vec3, Color
from .ray import Ray
from .errors import ConfigurationError

if TYPE_CHECKING:
    from .sampling import RandomSource
    from .shapes import HitRecord


class Material(ABC):
    """Abstract base class for materials."""

    @abstractmethod
    def scatter(self, ray_in: Ray, hit: HitRecord, rng: RandomSource) -> Optional[Ray]:
        """Compute the ray leaving the surface after a hit.

        Args:
            ray_in: The incoming ray
            hit: The intersection being shaded
            rng: Random source for stochastic scattering

        Returns:
            The scattered ray, or None if the incident light is absorbed
        """
        pass

    @abstractmethod
    def attenuate(self, color: Color) -> Color:
        """Tint the color of light returning along a scattered ray."""
        pass


class _AlbedoMaterial(Material):
    """Material that tints returning light by a per-channel albedo."""

    def __init__(self, albedo: Color):
        self.albedo = albedo

    def attenuate(self, color: Color) -> Color:
        return color * self.albedo


class Lambertian(_AlbedoMaterial):
    """Diffuse material with Lambertian (ideal matte) scattering."""

    def __init__(self, albedo: Color):
        """Create a Lambertian material.

        Args:
            albedo: The base color (RGB, each component 0-1)
        """
        super().__init__(albedo)

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: RandomSource) -> Optional[Ray]:
        scatter_direction = hit.normal + rng.unit_vector()

        # Catch degenerate scatter direction
        if scatter_direction.near_zero():
            scatter_direction = hit.normal

        return Ray(hit.point, scatter_direction)

    def __repr__(self) -> str:
        return f"Lambertian(albedo={self.albedo})"


class Metal(_AlbedoMaterial):
    """Metallic material with specular reflection."""

    def __init__(self, albedo: Color, fuzz: float = 0.0):
        """Create a metal material.

        Args:
            albedo: The reflection color
            fuzz: Perturbation of the reflection (0 = mirror, 1 = very rough),
                clamped into [0, 1]
        """
        super().__init__(albedo)
        self.fuzz = max(0.0, min(fuzz, 1.0))

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: RandomSource) -> Optional[Ray]:
        reflected = ray_in.direction.normalize().reflect(hit.normal)
        if self.fuzz > 0:
            reflected = reflected + rng.in_unit_sphere() * self.fuzz

        # Fuzz can push the reflection below the surface; that light is absorbed
        if reflected.dot(hit.normal) <= 0:
            return None
        return Ray(hit.point, reflected)

    def __repr__(self) -> str:
        return f"Metal(albedo={self.albedo}, fuzz={self.fuzz})"


class Dielectric(Material):
    """Dielectric (glass-like) material with refraction."""

    def __init__(self, refractive_index: float = 1.5):
        """Create a dielectric material.

        Args:
            refractive_index: Index of refraction (1.0 = air, 1.5 = glass, 2.4 = diamond)
        """
        if refractive_index <= 0:
            raise ConfigurationError(
                f"Refractive index must be positive, got {refractive_index}"
            )
        self.refractive_index = refractive_index

    def attenuate(self, color: Color) -> Color:
        # Clear glass absorbs nothing
        return color

    def scatter(self, ray_in: Ray, hit: HitRecord, rng: RandomSource) -> Optional[Ray]:
        # Entering the medium from outside, or leaving it
        if hit.front_face:
            refraction_ratio = 1.0 / self.refractive_index
        else:
            refraction_ratio = self.refractive_index

        unit_direction = ray_in.direction.normalize()
        cos_theta = min(-unit_direction.dot(hit.normal), 1.0)
        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)

        cannot_refract = refraction_ratio * sin_theta > 1.0

        if cannot_refract or rng.random() < self.reflectance(cos_theta, refraction_ratio):
            direction = unit_direction.reflect(hit.normal)
        else:
            direction = unit_direction.refract(hit.normal, refraction_ratio)

        return Ray(hit.point, direction)

    @staticmethod
    def reflectance(cosine: float, ref_idx: float) -> float:
        """Schlick's approximation for reflectance."""
        r0 = (1 - ref_idx) / (1 + ref_idx)
        r0 = r0 * r0
        return r0 + (1 - r0) * pow(1 - cosine, 5)

    def __repr__(self) -> str:
        return f"Dielectric(refractive_index={self.refractive_index})"
