#!/usr/bin/env python3
"""
VectorBurn - Main Entry Point

Converts an SVG file to G-code.
Run with: python -m vectorburn.main drawing.svg -o drawing.gcode
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from . import __version__
from .io.settings_io import load_settings
from .io.svg_parser import SVGParser, SVGError
from .laser.gcode_generator import GCodeGenerator, GCodeSettings
from .laser.gcode_validator import estimate_execution_time, find_invalid_lines

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vectorburn",
        description="Convert SVG drawings to G-code for laser cutters and mills.",
    )
    parser.add_argument("input", help="SVG file to convert")
    parser.add_argument("-o", "--output", help="Output G-code file (default: stdout)")
    parser.add_argument("--settings", help="JSON settings file")
    parser.add_argument("--scale", type=float, dest="scale_factor",
                        help="Scale factor applied to every coordinate")
    parser.add_argument("--x-offset", type=float, dest="x_offset", help="X offset in mm")
    parser.add_argument("--y-offset", type=float, dest="y_offset", help="Y offset in mm")
    parser.add_argument("--feed", type=float, dest="cut_feed_rate",
                        help="Cutting feed rate in mm/min")
    parser.add_argument("--rapid", type=float, dest="rapid_feed_rate",
                        help="Rapid feed rate in mm/min")
    parser.add_argument("--power", type=int, dest="laser_power",
                        help="Laser power (S value, 0-255)")
    parser.add_argument("--decimals", type=int, dest="decimal_places",
                        help="Decimal places for coordinates")
    parser.add_argument("--spindle", action="store_true",
                        help="Spindle mode instead of laser mode")
    parser.add_argument("--no-comments", action="store_true",
                        help="Leave comments out of the output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_settings(args: argparse.Namespace) -> Optional[GCodeSettings]:
    """Start from the settings file (or defaults) and apply command line overrides."""
    settings = GCodeSettings()
    if args.settings:
        settings = load_settings(args.settings)
        if settings is None:
            return None

    overrides = {}
    for name in ("scale_factor", "x_offset", "y_offset", "cut_feed_rate",
                 "rapid_feed_rate", "laser_power", "decimal_places"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    if args.spindle:
        overrides["use_laser_mode"] = False
    if args.no_comments:
        overrides["include_comments"] = False

    return replace(settings, **overrides)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the vectorburn command."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    settings = resolve_settings(args)
    if settings is None:
        return 1

    is_valid, message = settings.validate()
    if not is_valid:
        logger.error("Invalid settings: %s", message)
        return 1

    try:
        elements = SVGParser().parse_file(args.input)
    except SVGError as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("Could not read %s: %s", args.input, e)
        return 1
    logger.info("Parsed %d elements from %s", len(elements), args.input)

    generator = GCodeGenerator(settings)
    gcode = generator.generate(elements)

    invalid = find_invalid_lines(gcode)
    if invalid:
        for number, line in invalid:
            logger.error("Invalid G-code at line %d: %s", number, line)
        return 1

    seconds = estimate_execution_time(gcode, settings)
    logger.info("Estimated run time: %.1f s", seconds)

    if args.output:
        try:
            generator.save_to_file(gcode, args.output)
        except OSError as e:
            logger.error("Could not write %s: %s", args.output, e)
            return 1
    else:
        sys.stdout.write(gcode)

    return 0


if __name__ == "__main__":
    sys.exit(main())
