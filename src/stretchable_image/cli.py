"""
Module: cli

Purpose:
    Command line entry point.

    stretchable-image plan SRC --size WxH     print blit ops as JSON
    stretchable-image render SRC OUT --size WxH   write the rendered image

    Sizes are logical; --dpr converts them to device pixels.

Dependencies:
    - argparse (std)
    - stretchable_image.rendering: StretchableImage
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from stretchable_image import __version__
from stretchable_image.compositor import DEFAULT_CENTER_RATIO, StretchConfig
from stretchable_image.core.models import Size
from stretchable_image.images import ImageLoadError, load_image
from stretchable_image.rendering import StretchableImage
from stretchable_image.utils.logging_utils import configure_logging, detach_handler

logger = logging.getLogger(__name__)


def parse_size(text: str) -> Size:
    """Parse 'WxH' (e.g. '300x40') into a Size."""
    parts = text.lower().split("x")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"size must be WIDTHxHEIGHT: {text!r}")
    try:
        width, height = float(parts[0]), float(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"size must be numeric: {text!r}")
    if width < 0 or height < 0:
        raise argparse.ArgumentTypeError(f"size must be non-negative: {text!r}")
    return Size(width, height)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stretchable-image",
        description="Render images with a horizontally stretchable center band",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("source", type=Path, help="Source image")
    common.add_argument(
        "--size",
        type=parse_size,
        default=None,
        help="Target size in logical pixels, WIDTHxHEIGHT (default: image size)",
    )
    common.add_argument(
        "--ratio",
        type=float,
        default=DEFAULT_CENTER_RATIO,
        help=f"Center band ratio in [0, 1) (default: {DEFAULT_CENTER_RATIO})",
    )
    common.add_argument(
        "--dpr",
        type=float,
        default=1.0,
        help="Device pixel ratio (default: 1.0)",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("plan", parents=[common], help="Print blit ops as JSON")
    render = sub.add_parser("render", parents=[common], help="Write the rendered image")
    render.add_argument("output", type=Path, help="Output image path")
    return parser


def _build_holder(args: argparse.Namespace, parser: argparse.ArgumentParser) -> StretchableImage:
    try:
        config = StretchConfig(
            center_ratio=args.ratio,
            size=args.size,
            device_pixel_ratio=args.dpr,
        )
    except ValueError as e:
        parser.error(str(e))
    holder = StretchableImage(config)
    holder.set_image(load_image(args.source))
    return holder


def _plan(holder: StretchableImage) -> int:
    physical = holder.physical_size
    payload = {
        "target": {"width": physical.width, "height": physical.height},
        "ops": [op.to_dict() for op in holder.blit_ops],
    }
    print(json.dumps(payload, indent=2))
    return 0


def _render(holder: StretchableImage, output: Path) -> int:
    rendered = holder.render()
    if rendered is None:
        logger.warning("Nothing to paint for this size; no output written")
        return 1
    output.parent.mkdir(parents=True, exist_ok=True)
    rendered.save(output)
    logger.info(f"Wrote {output} ({rendered.width}x{rendered.height})")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = configure_logging(args.verbose)
    try:
        try:
            holder = _build_holder(args, parser)
        except ImageLoadError as e:
            logger.error(str(e))
            return 1

        if args.command == "plan":
            return _plan(holder)
        return _render(holder, args.output)
    finally:
        detach_handler(handler)


if __name__ == "__main__":
    sys.exit(main())
