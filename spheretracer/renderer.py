"""
Renderer module - the heart of the ray tracer.

Implements:
- Multi-sample anti-aliasing with per-pixel jitter
- Recursive light transport with a bounce limit
- Sky gradient background
- Gamma-2 correction and 8-bit conversion at the output boundary
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Callable
import logging
import math

import numpy as np

from .vec3 import Color
from .ray import Ray
from .camera import Camera, CameraConfig
from .shapes import Hittable
from .sampling import RandomSource
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Ignore hits this close to the ray origin to avoid shadow acne
T_MIN = 0.001

BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)


@dataclass
class ImageConfig:
    """Configuration for the renderer."""
    width: int = 400
    height: int = 225
    samples_per_pixel: int = 100
    ray_bounce_limit: int = 50

    def __post_init__(self):
        # Jitter divides by (width - 1) and (height - 1)
        if self.width < 2 or self.height < 2:
            raise ConfigurationError(
                f"Image must be at least 2x2 pixels, got {self.width}x{self.height}"
            )
        if self.samples_per_pixel < 1:
            raise ConfigurationError(
                f"samples_per_pixel must be positive, got {self.samples_per_pixel}"
            )
        if self.ray_bounce_limit < 1:
            raise ConfigurationError(
                f"ray_bounce_limit must be positive, got {self.ray_bounce_limit}"
            )

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height


def check_aspect_ratio(image_config: ImageConfig, aspect_ratio: float) -> None:
    """Fail fast if the image and the camera disagree on the aspect ratio."""
    if not math.isclose(image_config.aspect_ratio, aspect_ratio, rel_tol=1e-9):
        raise ConfigurationError(
            f"Image is {image_config.width}x{image_config.height} "
            f"(aspect ratio {image_config.aspect_ratio:.6f}) but the camera "
            f"aspect ratio is {aspect_ratio:.6f}"
        )


class Renderer:
    """Single-threaded Monte-Carlo ray tracer."""

    def __init__(self, config: Optional[ImageConfig] = None, rng: Optional[RandomSource] = None):
        """Create a renderer.

        Args:
            config: Image configuration (uses defaults if None)
            rng: Random source shared by camera, materials and jitter
                (a freshly seeded one if None)
        """
        self.config = config if config else ImageConfig()
        self.rng = rng if rng else RandomSource()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0),
                called once per finished scanline
        """
        self._progress_callback = callback

    def render(self, camera: Camera, world: Hittable) -> np.ndarray:
        """Render the scene and return the linear (not gamma corrected) image.

        Args:
            camera: The camera to render from
            world: The scene to render (any Hittable)

        Returns:
            Image as numpy array of shape (height, width, 3), top row first
        """
        check_aspect_ratio(self.config, camera.aspect_ratio)

        width = self.config.width
        height = self.config.height
        samples = self.config.samples_per_pixel
        max_depth = self.config.ray_bounce_limit
        rng = self.rng

        image = np.zeros((height, width, 3), dtype=np.float64)

        logger.debug("Generating pixels")
        # Viewport row 0 is the bottom of the image, so walk rows in reverse
        for out_row, row in enumerate(range(height - 1, -1, -1)):
            logger.debug("Scanlines remaining: %d", row)
            for col in range(width):
                pixel_color = BLACK
                for _ in range(samples):
                    s = (col + rng.random()) / (width - 1)
                    t = (row + rng.random()) / (height - 1)
                    ray = camera.get_ray(s, t, rng)
                    pixel_color = pixel_color + self.ray_color(ray, world, max_depth)

                image[out_row, col] = pixel_color.to_array() / samples

            if self._progress_callback:
                self._progress_callback((out_row + 1) / height)

        logger.debug("Done generating pixels")
        return image

    def ray_color(self, ray: Ray, world: Hittable, depth: int) -> Color:
        """Compute the color seen along a ray.

        Args:
            ray: The ray to trace
            world: The scene to trace against
            depth: Bounces remaining before the path is cut off

        Returns:
            The linear color for this ray
        """
        # Past the bounce limit, no more light is gathered
        if depth <= 0:
            return BLACK

        hit = world.hit(ray, T_MIN, math.inf)
        if hit is None:
            return sky_color(ray)

        scattered = hit.material.scatter(ray, hit, self.rng)
        if scattered is None:
            return BLACK
        return hit.material.attenuate(self.ray_color(scattered, world, depth - 1))


def sky_color(ray: Ray) -> Color:
    """Vertical white-to-blue gradient for rays that escape the scene."""
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t


def render(
    image_config: ImageConfig,
    camera_config: CameraConfig,
    world: Hittable,
    seed: Optional[int] = None,
) -> np.ndarray:
    """Render a scene and return the gamma-corrected image.

    Validates the configuration before tracing any ray.
    """
    check_aspect_ratio(image_config, camera_config.aspect_ratio)
    camera = Camera(camera_config)
    renderer = Renderer(image_config, RandomSource(seed))
    return correct_gamma(renderer.render(camera, world))


def correct_gamma(image: np.ndarray) -> np.ndarray:
    """Apply gamma-2 correction to every channel (clamped to [0, 1] first)."""
    return np.sqrt(np.clip(image, 0.0, 1.0))


def inverse_gamma(image: np.ndarray) -> np.ndarray:
    """Undo gamma-2 correction."""
    return np.square(image)


def to_bytes(image: np.ndarray) -> np.ndarray:
    """Convert a [0, 1] color image to 8-bit channels, clamping out-of-range values."""
    return (np.clip(image, 0.0, 1.0) * 255.999).astype(np.uint8)
