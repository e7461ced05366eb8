import logging
import sys
import time
from typing import List, Optional, Tuple

import numpy as np

from distbake.config import BakeConfig, ConfigError, build_parser, load_config
from distbake.engine import generate_distance_field
from distbake.postprocess import invert, resample, target_size
from distbake.raster import RasterError, aspect_ratio, open_image, rasterize, save_grayscale

logger = logging.getLogger(__name__)


def bake(
        source: np.ndarray,
        radius: int,
        output_size: Optional[Tuple[int, int]] = None,
        threads: Optional[int] = None,
        negate: bool = False,
) -> np.ndarray:
    """Distance field of a padded source buffer, inverted and resampled.

    `output_size` is (width, height); None keeps the full resolution.
    """
    field = generate_distance_field(source, radius, threads=threads)
    invert(field, negate)
    if output_size is None:
        return field
    return resample(field, output_size)


def run(config: BakeConfig):
    img = open_image(config.input_path)
    aspect = aspect_ratio(img)
    source, size = rasterize(img, config.source_size, config.radius, negate=config.negate)

    if config.save_source:
        save_grayscale(source, config.save_source)

    output_size = target_size(size, aspect, config.target_size)

    start = time.time()
    df = bake(source, config.radius, output_size, threads=config.threads, negate=config.negate)
    elapsed_ms = int((time.time() - start) * 1000)
    logger.info("Generated distance field of size %dx%d in %dms", output_size[0], output_size[1], elapsed_ms)

    save_grayscale(df, config.output_path)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        config = load_config(argv, parser)
    except ConfigError as exc:
        parser.print_help()
        print(f"error: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Configuration: %s", config)

    try:
        run(config)
    except (RasterError, OSError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main() or 0)
