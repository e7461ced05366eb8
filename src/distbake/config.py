import argparse
from dataclasses import dataclass
from typing import List, Optional

DEFAULT_SOURCE_SIZE = 3000
DEFAULT_RADIUS = 8


class ConfigError(ValueError):
    """Invalid command line option; nothing has been computed yet"""


@dataclass(frozen=True)
class BakeConfig:
    input_path: str
    output_path: str
    source_size: int = DEFAULT_SOURCE_SIZE
    radius: int = DEFAULT_RADIUS
    target_size: Optional[int] = None
    threads: Optional[int] = None
    negate: bool = False
    save_source: Optional[str] = None
    verbose: bool = False

    def __post_init__(self):
        _require_positive("sourcesize", self.source_size)
        _require_positive("maxdist", self.radius)
        if self.target_size is not None:
            _require_positive("targetsize", self.target_size)
        if self.threads is not None:
            _require_positive("threads", self.threads)


def _require_positive(name: str, value: int):
    if value < 1:
        raise ConfigError(f"--{name} must be >= 1, got {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="distbake",
        description="distbake generates distance fields out of bilevel images",
    )
    parser.add_argument("inputfile", help="Input image file")
    parser.add_argument("outputfile", help="PNG output file")
    parser.add_argument("--sourcesize", type=int, default=DEFAULT_SOURCE_SIZE, metavar="SIZE",
                        help="Length of the longer edge of the image the input gets rasterized to, "
                             "in pixels. Larger sizes give better quality but take longer "
                             f"(default: {DEFAULT_SOURCE_SIZE})")
    parser.add_argument("--maxdist", type=int, default=DEFAULT_RADIUS, metavar="DISTANCE",
                        help="Maximum distance in source pixels the search looks for a boundary. "
                             "Output values map [-sqrt(2*maxdist^2), sqrt(2*maxdist^2)] to [0, 255]. "
                             "Scale it along with --sourcesize "
                             f"(default: {DEFAULT_RADIUS})")
    parser.add_argument("--targetsize", type=int, default=None, metavar="SIZE",
                        help="Length of the longer edge of the distance field output "
                             "(default: 1/16th of the source size)")
    parser.add_argument("--threads", "-t", type=int, default=None, metavar="COUNT",
                        help="Number of worker threads (default: hardware threads available)")
    parser.add_argument("--negate", action="store_true",
                        help="Treat light (not dark) colors as inside the shape")
    parser.add_argument("--savesource", default=None, metavar="FILENAME",
                        help="Save the padded source buffer as a PNG file for debugging")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    return parser


def load_config(argv: Optional[List[str]] = None, parser: Optional[argparse.ArgumentParser] = None) -> BakeConfig:
    """Parse and validate the command line. Raises ConfigError on bad values."""
    parser = parser or build_parser()
    args = parser.parse_args(argv)
    return BakeConfig(
        input_path=args.inputfile,
        output_path=args.outputfile,
        source_size=args.sourcesize,
        radius=args.maxdist,
        target_size=args.targetsize,
        threads=args.threads,
        negate=args.negate,
        save_source=args.savesource,
        verbose=args.verbose,
    )
