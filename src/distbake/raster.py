import logging
from typing import Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from distbake.postprocess import image_size

logger = logging.getLogger(__name__)


class RasterError(RuntimeError):
    """Input image could not be read"""


def open_image(filepath: str) -> Image.Image:
    try:
        img = Image.open(filepath)
        img.load()
    except (OSError, UnidentifiedImageError) as exc:
        raise RasterError(f"Cannot read {filepath}: {exc}") from exc
    return img


def aspect_ratio(img: Image.Image) -> float:
    width, height = img.size
    return width / height


def rasterize(img: Image.Image, long_edge: int, radius: int, negate: bool = False) -> Tuple[np.ndarray, Tuple[int, int]]:
    """Render `img` as a padded single channel source buffer.

    The image is scaled so its longer edge is `long_edge` pixels and padded
    by `radius` on every side by repeating the border samples, so the
    padding never introduces a boundary of its own. Returns the buffer and
    the unpadded (width, height).

    Transparent areas become background: white, or black when `negate` is
    set, since light colours are then the inside of the shape.
    """
    size = image_size(long_edge, aspect_ratio(img))
    logger.info("Rendering %s to %dx%d", img.format or "image", size[0], size[1])

    if img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info:
        fill = (0, 0, 0, 255) if negate else (255, 255, 255, 255)
        background = Image.new("RGBA", img.size, fill)
        img = Image.alpha_composite(background, img.convert("RGBA"))

    gray = img.convert("L").resize(size, resample=Image.Resampling.BILINEAR)
    source = np.pad(np.array(gray, dtype=np.uint8), radius, mode="edge")
    return source, size


def save_grayscale(buffer: np.ndarray, output_path: str):
    """Save as 8-bit grayscale PNG"""
    Image.fromarray(np.asarray(buffer, dtype=np.uint8)).save(output_path, format="PNG")
    logger.info("Saved %s (%dx%d)", output_path, buffer.shape[1], buffer.shape[0])
