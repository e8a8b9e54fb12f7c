#!/usr/bin/env python3
"""
SphereTracer - A Python Monte-Carlo Ray Tracer

Main entry point for rendering scenes.
"""

import argparse
import dataclasses
import logging
import sys
import time
from pathlib import Path

from spheretracer.camera import Camera
from spheretracer.errors import ConfigurationError
from spheretracer.image_io import save_image, write_ppm
from spheretracer.renderer import Renderer, ImageConfig, correct_gamma
from spheretracer.sampling import RandomSource
from spheretracer.scene_parser import SceneParseError, load_scene
from spheretracer.scenes import two_spheres, material_showcase, random_spheres

logger = logging.getLogger("spheretracer")

DEFAULT_ASPECT_RATIOS = {
    'two-spheres': 16.0 / 9.0,
    'showcase': 16.0 / 9.0,
    'random': 3.0 / 2.0,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='SphereTracer - A Python Monte-Carlo Ray Tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene two-spheres > image.ppm
  python main.py --scene random --width 600 --samples 50 --output random.png
  python main.py --scene-file scenes/showcase.yaml --output showcase.ppm
        '''
    )

    parser.add_argument('--scene', type=str, default='showcase', choices=sorted(DEFAULT_ASPECT_RATIOS),
                        help='Built-in scene to render (default: showcase)')
    parser.add_argument('--scene-file', type=str, default=None,
                        help='YAML or JSON scene file (overrides --scene)')
    parser.add_argument('--width', type=int, default=None, help='Image width (default: 400)')
    parser.add_argument('--height', type=int, default=None,
                        help="Image height (default: derived from the scene's aspect ratio)")
    parser.add_argument('--samples', type=int, default=None, help='Samples per pixel (default: 100)')
    parser.add_argument('--depth', type=int, default=None, help='Ray bounce limit (default: 50)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible output')
    parser.add_argument('--aperture', type=float, default=None,
                        help='Lens aperture for depth of field (built-in scenes only)')
    parser.add_argument('--output', type=str, default='-',
                        help="Output filename, or '-' for PPM on stdout (default: -)")
    parser.add_argument('-v', '--verbose', action='store_true', help='Log per-scanline progress')
    return parser


def _image_config(args, default_width: int, default_height: int,
                  default_samples: int, default_depth: int) -> ImageConfig:
    width = args.width if args.width is not None else default_width
    if args.height is not None:
        height = args.height
    elif args.width is not None:
        height = max(2, round(width * default_height / default_width))
    else:
        height = default_height
    return ImageConfig(
        width=width,
        height=height,
        samples_per_pixel=args.samples if args.samples is not None else default_samples,
        ray_bounce_limit=args.depth if args.depth is not None else default_depth,
    )


def load(args):
    """Resolve the world, camera config, image config and seed from the arguments."""
    if args.scene_file:
        scene = load_scene(args.scene_file)
        image = _image_config(args, scene.image.width, scene.image.height,
                              scene.image.samples_per_pixel, scene.image.ray_bounce_limit)
        camera = dataclasses.replace(scene.camera, aspect_ratio=image.aspect_ratio)
        seed = args.seed if args.seed is not None else scene.seed
        return scene.world, camera, image, seed

    aspect = DEFAULT_ASPECT_RATIOS[args.scene]
    image = _image_config(args, 400, round(400 / aspect), 100, 50)
    seed = args.seed

    if args.scene == 'two-spheres':
        world, camera = two_spheres(image.aspect_ratio)
    elif args.scene == 'random':
        aperture = args.aperture if args.aperture is not None else 0.1
        world, camera = random_spheres(RandomSource(seed), image.aspect_ratio, aperture)
    else:
        aperture = args.aperture if args.aperture is not None else 0.0
        world, camera = material_showcase(image.aspect_ratio, aperture)
    return world, camera, image, seed


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    try:
        world, camera_config, image_config, seed = load(args)
        camera = Camera(camera_config)
    except (ConfigurationError, SceneParseError, OSError) as e:
        logger.error("%s", e)
        return 1

    # stdout may carry the image, so all chatter goes to stderr
    out = sys.stderr
    print("=" * 60, file=out)
    print("SphereTracer", file=out)
    print("=" * 60, file=out)
    print(f"  Resolution: {image_config.width}x{image_config.height}", file=out)
    print(f"  Samples: {image_config.samples_per_pixel}", file=out)
    print(f"  Bounce limit: {image_config.ray_bounce_limit}", file=out)
    print(f"  Seed: {seed}", file=out)
    print(f"  Objects in scene: {len(world)}", file=out)

    renderer = Renderer(image_config, RandomSource(seed))

    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', file=out, flush=True)

    if not args.verbose:
        renderer.set_progress_callback(progress_callback)

    start_time = time.time()
    try:
        image = correct_gamma(renderer.render(camera, world))
    except ConfigurationError as e:
        logger.error("%s", e)
        return 1
    elapsed = time.time() - start_time

    print(f"\nRender completed in {elapsed:.2f} seconds", file=out)
    rays = image_config.width * image_config.height * image_config.samples_per_pixel
    print(f"  Samples per second: {rays / max(elapsed, 1e-9):.0f}", file=out)

    try:
        if args.output == '-':
            write_ppm(image, sys.stdout)
        else:
            output_path = Path(args.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            save_image(image, output_path)
    except OSError as e:
        logger.error("Cannot write image: %s", e)
        return 1

    print("Done!", file=out)
    return 0


if __name__ == '__main__':
    sys.exit(main())
