"""
Scene description language parser.

Supports a YAML (or JSON) scene description format with:
- Camera configuration
- Render settings
- Materials library
- Sphere objects with materials

Example scene file:
```yaml
camera:
  look_from: [13, 2, 3]
  look_at: [0, 0, 0]
  vfov: 20
  aperture: 0.1
  focus_dist: 10

render:
  width: 300
  height: 200
  samples: 100
  max_depth: 50
  seed: 42

materials:
  ground:
    type: lambertian
    albedo: [0.5, 0.5, 0.5]

  glass:
    type: dielectric
    refractive_index: 1.5

objects:
  - type: sphere
    center: [0, -1000, 0]
    radius: 1000
    material: ground

  - type: sphere
    center: [0, 1, 0]
    radius: 1
    material: glass
```
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional, Union
import json
import logging

import yaml

from .vec3 import Vec3, Point3, Color
from .camera import CameraConfig
from .shapes import Sphere, HittableList
from .materials import Material, Lambertian, Metal, Dielectric
from .renderer import ImageConfig
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


@dataclass
class Scene:
    """Everything needed to render a parsed scene file."""
    world: HittableList
    camera: CameraConfig
    image: ImageConfig
    seed: Optional[int] = None


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.objects: HittableList = HittableList()

    def parse_file(self, filepath: Union[str, Path]) -> Scene:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            The parsed scene
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        try:
            content = path.read_text()
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # YAML is a superset of JSON
                data = yaml.safe_load(content)
        except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file {filepath} must contain a mapping")

        logger.info("Loaded scene file %s", path)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Scene:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            The parsed scene
        """
        self.materials = {}
        self.objects = HittableList()

        try:
            # Parse materials first (objects reference them)
            if 'materials' in data:
                self._parse_materials(data['materials'])

            if 'objects' in data:
                self._parse_objects(data['objects'])

            image, seed = self._parse_settings(data.get('render', {}))
            camera = self._parse_camera(data.get('camera', {}), image.aspect_ratio)
        except (ConfigurationError, ValueError, TypeError, AttributeError) as e:
            # Wrong value types anywhere in the document
            raise SceneParseError(f"Invalid scene description: {e}") from e

        logger.info("Parsed scene with %d objects and %d named materials",
                    len(self.objects), len(self.materials))
        return Scene(world=self.objects, camera=camera, image=image, seed=seed)

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from a list or an x/y/z mapping."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            return Vec3(float(data[0]), float(data[1]), float(data[2]))
        elif isinstance(data, dict):
            return Vec3(
                float(data.get('x', 0)),
                float(data.get('y', 0)),
                float(data.get('z', 0))
            )
        else:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_color(self, data: Any) -> Color:
        """Parse a Color from a list, an r/g/b mapping or a hex string."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            return Color(float(data[0]), float(data[1]), float(data[2]))
        elif isinstance(data, dict):
            return Color(
                float(data.get('r', 0)),
                float(data.get('g', 0)),
                float(data.get('b', 0))
            )
        elif isinstance(data, str):
            if data.startswith('#') and len(data) == 7:
                r = int(data[1:3], 16) / 255.0
                g = int(data[3:5], 16) / 255.0
                b = int(data[5:7], 16) / 255.0
                return Color(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse Color from: {data}")

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        for name, mat_data in materials_data.items():
            self.materials[name] = self._create_material(mat_data)

    def _create_material(self, mat_data: Dict[str, Any]) -> Material:
        mat_type = mat_data.get('type', 'lambertian').lower()

        if mat_type == 'lambertian':
            return Lambertian(self._parse_color(mat_data.get('albedo', [0.5, 0.5, 0.5])))
        elif mat_type == 'metal':
            return Metal(
                self._parse_color(mat_data.get('albedo', [0.8, 0.8, 0.8])),
                float(mat_data.get('fuzz', 0.0))
            )
        elif mat_type == 'dielectric':
            return Dielectric(float(mat_data.get('refractive_index', 1.5)))
        else:
            raise SceneParseError(f"Unknown material type: {mat_type}")

    def _get_material(self, mat_ref: Any) -> Material:
        """Resolve a material name or an inline material definition."""
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._create_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        for obj_data in objects_data:
            obj_type = obj_data.get('type', 'sphere').lower()
            if obj_type != 'sphere':
                raise SceneParseError(f"Unknown object type: {obj_type}")

            material = self._get_material(obj_data.get('material', {'type': 'lambertian'}))
            self.objects.add(Sphere(
                self._parse_vec3(obj_data.get('center', [0, 0, 0])),
                float(obj_data.get('radius', 1.0)),
                material
            ))

    def _parse_camera(self, cam_data: Dict[str, Any], aspect_ratio: float) -> CameraConfig:
        """Parse camera section; the aspect ratio always comes from the image size."""
        focus_dist = cam_data.get('focus_dist')
        return CameraConfig(
            look_from=self._parse_vec3(cam_data.get('look_from', [0, 0, 0])),
            look_at=self._parse_vec3(cam_data.get('look_at', [0, 0, -1])),
            vup=self._parse_vec3(cam_data.get('vup', [0, 1, 0])),
            vfov=float(cam_data.get('vfov', 90)),
            aspect_ratio=aspect_ratio,
            aperture=float(cam_data.get('aperture', 0.0)),
            focus_dist=float(focus_dist) if focus_dist is not None else None,
        )

    def _parse_settings(self, settings_data: Dict[str, Any]) -> tuple[ImageConfig, Optional[int]]:
        """Parse render settings section."""
        image = ImageConfig(
            width=int(settings_data.get('width', 400)),
            height=int(settings_data.get('height', 225)),
            samples_per_pixel=int(settings_data.get('samples', 100)),
            ray_bounce_limit=int(settings_data.get('max_depth', 50)),
        )
        seed = settings_data.get('seed')
        return image, int(seed) if seed is not None else None


def load_scene(filepath: Union[str, Path]) -> Scene:
    """Load a scene from a YAML or JSON file."""
    return SceneParser().parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Scene:
    """Parse a scene from a dictionary."""
    return SceneParser().parse_dict(data)
