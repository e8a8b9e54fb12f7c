"""
Built-in scenes.

Each builder returns the world together with a matching camera
configuration for the requested aspect ratio.
"""

from __future__ import annotations
from typing import Tuple

from .vec3 import Vec3, Color, Point3
from .shapes import Sphere, HittableList
from .materials import Lambertian, Metal, Dielectric
from .camera import CameraConfig
from .sampling import RandomSource


def two_spheres(aspect_ratio: float = 16.0 / 9.0) -> Tuple[HittableList, CameraConfig]:
    """A single diffuse sphere resting on a large grey ground sphere."""
    world = HittableList()

    ground = Lambertian(Color(0.5, 0.5, 0.5))
    world.add(Sphere(Point3(0, -100.5, -1), 100, ground))
    world.add(Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(0.7, 0.3, 0.3))))

    return world, CameraConfig.pinhole(aspect_ratio)


def material_showcase(aspect_ratio: float = 16.0 / 9.0, aperture: float = 0.0) -> Tuple[HittableList, CameraConfig]:
    """Diffuse, hollow glass and metal spheres side by side."""
    world = HittableList()

    ground = Lambertian(Color(0.8, 0.8, 0.0))
    center = Lambertian(Color(0.1, 0.2, 0.5))
    glass = Dielectric(1.5)
    metal = Metal(Color(0.8, 0.6, 0.2), 0.0)

    world.add(Sphere(Point3(0, -100.5, -1), 100, ground))
    world.add(Sphere(Point3(0, 0, -1), 0.5, center))
    # Glass shell: the inner sphere's negative radius flips its normals
    world.add(Sphere(Point3(-1, 0, -1), 0.5, glass))
    world.add(Sphere(Point3(-1, 0, -1), -0.45, glass))
    world.add(Sphere(Point3(1, 0, -1), 0.5, metal))

    look_from = Point3(3, 3, 2)
    look_at = Point3(0, 0, -1)
    camera = CameraConfig(
        look_from=look_from,
        look_at=look_at,
        vup=Vec3(0, 1, 0),
        vfov=20,
        aspect_ratio=aspect_ratio,
        aperture=aperture,
        focus_dist=(look_from - look_at).length(),
    )
    return world, camera


def random_spheres(
    rng: RandomSource,
    aspect_ratio: float = 3.0 / 2.0,
    aperture: float = 0.1,
) -> Tuple[HittableList, CameraConfig]:
    """A field of small random spheres around three large ones."""
    world = HittableList()

    ground = Lambertian(Color(0.5, 0.5, 0.5))
    world.add(Sphere(Point3(0, -1000, 0), 1000, ground))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            # Keep clear of the large metal sphere
            if (center - Point3(4, 0.2, 0)).length() <= 0.9:
                continue

            if choose_mat < 0.8:
                albedo = rng.vector() * rng.vector()
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                albedo = rng.vector(0.5, 1.0)
                material = Metal(albedo, rng.uniform(0.0, 0.5))
            else:
                material = Dielectric(1.5)
            world.add(Sphere(center, 0.2, material))

    world.add(Sphere(Point3(0, 1, 0), 1.0, Dielectric(1.5)))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(Color(0.4, 0.2, 0.1))))
    world.add(Sphere(Point3(4, 1, 0), 1.0, Metal(Color(0.7, 0.6, 0.5), 0.0)))

    camera = CameraConfig(
        look_from=Point3(13, 2, 3),
        look_at=Point3(0, 0, 0),
        vup=Vec3(0, 1, 0),
        vfov=20,
        aspect_ratio=aspect_ratio,
        aperture=aperture,
        focus_dist=10.0,
    )
    return world, camera
