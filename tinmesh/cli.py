from __future__ import annotations
import argparse
import logging
import sys
from typing import List, Optional

from .config import BACKENDS, DEFAULT_INPUT, DEFAULT_OUTPUT, DUPLICATE_MODES, LOG_LEVELS, settings
from .errors import TriangulationError
from .logging_config import setup_logging
from .pipeline import convert_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="tinmesh",
        description="Point cloud CSV (x, y, z) -> triangulated surface in raw format "
                    "(one triangle per line: x0 y0 z0 x1 y1 z1 x2 y2 z2).",
    )
    ap.add_argument("input", nargs="?", default=DEFAULT_INPUT, help=f"CSV of points (default: {DEFAULT_INPUT})")
    ap.add_argument("-o", "--output", default=DEFAULT_OUTPUT, help=f"raw mesh to write (default: {DEFAULT_OUTPUT})")
    ap.add_argument("--delimiter", default=None, help="CSV column delimiter")
    ap.add_argument("--no-header", dest="header", action="store_false", default=None,
                    help="input has no column titles row")
    ap.add_argument("--duplicates", choices=DUPLICATE_MODES, default=None,
                    help="points sharing (x, y): drop later ones or fail")
    ap.add_argument("--backend", choices=BACKENDS, default=None)
    ap.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None)
    ap.add_argument("--log-file", default=None)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = settings.replace(
        delimiter=args.delimiter,
        header=args.header,
        duplicates=args.duplicates,
        backend=args.backend,
        log_level=args.log_level,
    )
    try:
        setup_logging(cfg.log_level, args.log_file)
    except (ValueError, OSError) as e:
        # рівень з TINMESH_LOG_LEVEL або недоступний --log-file
        print(f"tinmesh: {e}", file=sys.stderr)
        return 2

    try:
        result = convert_file(args.input, args.output, cfg)
    except (TriangulationError, OSError) as e:
        logger.error("%s", e)
        return 1

    logger.info("Done: %d vertices, %d triangles", len(result.points), len(result.triangulation))
    return 0


if __name__ == "__main__":
    sys.exit(main())
