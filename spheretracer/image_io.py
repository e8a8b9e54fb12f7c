"""
Image output.

Writes gamma-corrected [0, 1] images either as ASCII PPM (P3) or, for
any other file extension, through Pillow.
"""

from __future__ import annotations
from pathlib import Path
from typing import TextIO, Union
import logging

import numpy as np
from PIL import Image as PILImage

from .renderer import to_bytes

logger = logging.getLogger(__name__)


def write_ppm(image: np.ndarray, stream: TextIO) -> None:
    """Write an image as ASCII PPM.

    Args:
        image: Color image of shape (height, width, 3), values in [0, 1]
        stream: Text stream to write to
    """
    height, width = image.shape[:2]
    pixels = to_bytes(image)

    stream.write("P3\n")
    stream.write(f"{width} {height}\n")
    stream.write("255\n")
    for row in pixels:
        for r, g, b in row:
            stream.write(f"{r} {g} {b}\n")


def save_image(image: np.ndarray, filename: Union[str, Path]) -> None:
    """Save image to file.

    Args:
        image: Color image of shape (height, width, 3), values in [0, 1]
        filename: Output filename (extension determines format)
    """
    path = Path(filename)
    if path.suffix.lower() == '.ppm':
        with open(path, 'w') as f:
            write_ppm(image, f)
    else:
        pil_image = PILImage.fromarray(to_bytes(image))
        pil_image.save(path)
    logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], path)
