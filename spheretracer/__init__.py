"""
SphereTracer - A Python Monte-Carlo Ray Tracer

Renders static scenes of spheres with:
- Diffuse, metal and glass materials
- Multi-sample anti-aliasing
- Thin-lens depth of field
- Sky gradient lighting
- Reproducible output from a fixed seed
"""

__version__ = "0.1.0"
__author__ = "SphereTracer Team"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .errors import ConfigurationError
from .sampling import RandomSource
from .shapes import HitRecord, Hittable, Sphere, HittableList, World
from .materials import Material, Lambertian, Metal, Dielectric
from .camera import Camera, CameraConfig
from .renderer import (
    Renderer, ImageConfig, check_aspect_ratio, render, sky_color,
    correct_gamma, inverse_gamma, to_bytes
)
from .image_io import write_ppm, save_image
from .scene_parser import Scene, SceneParser, SceneParseError, load_scene, parse_scene
from .scenes import two_spheres, material_showcase, random_spheres
