"""
G-code checks for VectorBurn

Line grammar validation and a distance / feed rate run time estimate.
Neither function changes the program.
"""

import re
from typing import List, Optional, Tuple

from ..core.geometry import Point2D
from .gcode_generator import GCodeSettings

# First word of a code line
_VALID_START_PATTERN = re.compile(r'^[GMXYZFS]', re.IGNORECASE)

# G0/G1 and their zero padded forms, but not G10, G17, ...
_MOVE_PATTERN = re.compile(r'^G0*([01])(?!\d)', re.IGNORECASE)

_X_PATTERN = re.compile(r'X\s*([-+]?\d*\.?\d+)', re.IGNORECASE)
_Y_PATTERN = re.compile(r'Y\s*([-+]?\d*\.?\d+)', re.IGNORECASE)


def _is_skipped(line: str) -> bool:
    return not line or line.startswith(';') or line.startswith('(')


def find_invalid_lines(gcode: str) -> List[Tuple[int, str]]:
    """
    Return (line_number, line) for every line that is not a comment, blank,
    or a word starting with G, M, X, Y, Z, F or S. Line numbers are 1-based.
    """
    invalid = []
    for number, raw in enumerate(gcode.splitlines(), 1):
        line = raw.strip()
        if _is_skipped(line):
            continue
        if not _VALID_START_PATTERN.match(line):
            invalid.append((number, line))
    return invalid


def validate_gcode(gcode: str) -> bool:
    """True for a non-empty program in which every code line is well formed."""
    if not gcode or not gcode.strip():
        return False
    return not find_invalid_lines(gcode)


def _strip_inline_comment(line: str) -> str:
    return line.split(';', 1)[0].strip()


def _parse_position(line: str, current: Point2D) -> Point2D:
    """Read X and Y words; a missing axis keeps its current value."""
    x = current.x
    y = current.y

    match = _X_PATTERN.search(line)
    if match:
        x = float(match.group(1))

    match = _Y_PATTERN.search(line)
    if match:
        y = float(match.group(1))

    return Point2D(x, y)


def estimate_execution_time(gcode: str, settings: Optional[GCodeSettings] = None) -> float:
    """
    Estimate the run time of a program in seconds.

    Only G0 and G1 moves count. Each move takes distance / feed * 60 seconds,
    using the rapid feed rate for G0 and the cut feed rate for G1. Motion
    starts at the origin.
    """
    settings = settings or GCodeSettings()
    if not gcode or not gcode.strip():
        return 0.0

    total_time = 0.0
    current = Point2D.zero()

    for raw in gcode.splitlines():
        line = raw.strip()
        if _is_skipped(line):
            continue
        line = _strip_inline_comment(line)

        match = _MOVE_PATTERN.match(line)
        if not match:
            continue

        position = _parse_position(line[match.end():], current)
        distance = current.distance_to(position)
        feed_rate = settings.rapid_feed_rate if match.group(1) == '0' else settings.cut_feed_rate

        if feed_rate > 0:
            total_time += distance / feed_rate * 60
        current = position

    return total_time
