"""
SVG Path Data Interpreter for VectorBurn

Turns the `d` attribute mini-language into a flattened list of points.
Supports M, L, H, V, Z, A, Q and C in absolute and relative form. Curves
and arcs are sampled at a fixed number of steps.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Sequence, Tuple

import numpy as np

from .geometry import Point2D

logger = logging.getLogger(__name__)

ARC_SEGMENTS = 100
BEZIER_SEGMENTS = 100

# Any letter except e/E (exponent marker) starts a command
_COMMAND_PATTERN = re.compile(r'([A-DF-Za-df-z])([^A-DF-Za-df-z]*)')
_NUMBER_PATTERN = re.compile(r'[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?')
_SEPARATOR_PATTERN = re.compile(r'[\s,]*')
_FLAG_PATTERN = re.compile(r'[01]')


class PathDataError(ValueError):
    """Raised when path data contains something that is not a number."""


@dataclass(frozen=True)
class PathCommand:
    """One command letter with its numeric parameters."""
    letter: str
    params: Tuple[float, ...] = ()

    @property
    def is_relative(self) -> bool:
        return self.letter.islower()


@dataclass(frozen=True)
class PathState:
    """Interpreter registers: current point and start of the current subpath."""
    current: Point2D = field(default_factory=Point2D.zero)
    start: Point2D = field(default_factory=Point2D.zero)


def _parse_parameters(letter: str, text: str) -> Tuple[float, ...]:
    """Parse a parameter list (comma/whitespace separated, packed signs allowed)."""
    values = []
    pos = _SEPARATOR_PATTERN.match(text).end()
    while pos < len(text):
        match = None
        # Arc flags are single digits and may be packed: "A5 5 0 0150 0"
        if letter in 'Aa' and len(values) % 7 in (3, 4):
            match = _FLAG_PATTERN.match(text, pos)
        if match is None:
            match = _NUMBER_PATTERN.match(text, pos)
        if match is None:
            raise PathDataError(
                f"Invalid parameter for command '{letter}' near '{text[pos:pos + 10]}'"
            )
        values.append(float(match.group(0)))
        pos = _SEPARATOR_PATTERN.match(text, match.end()).end()
    return tuple(values)


def tokenize_path_data(d: str) -> List[PathCommand]:
    """Split path data into commands with their parameter lists."""
    if not d:
        return []
    return [
        PathCommand(match.group(1), _parse_parameters(match.group(1), match.group(2)))
        for match in _COMMAND_PATTERN.finditer(d)
    ]


def _groups(params: Sequence[float], size: int) -> Iterator[Sequence[float]]:
    """Yield complete parameter groups; an incomplete trailing group is dropped."""
    for i in range(0, len(params) - size + 1, size):
        yield params[i:i + size]


def _resolve(current: Point2D, x: float, y: float, relative: bool) -> Point2D:
    if relative:
        return Point2D(current.x + x, current.y + y)
    return Point2D(x, y)


def _to_points(xs: np.ndarray, ys: np.ndarray) -> List[Point2D]:
    return [Point2D(x, y) for x, y in zip(xs.tolist(), ys.tolist())]


def calculate_quadratic_bezier_points(p0: Point2D, p1: Point2D, p2: Point2D,
                                      segments: int = BEZIER_SEGMENTS) -> List[Point2D]:
    """Sample a quadratic Bezier at segments + 1 evenly spaced t values."""
    t = np.linspace(0.0, 1.0, segments + 1)
    mt = 1.0 - t
    xs = mt ** 2 * p0.x + 2 * mt * t * p1.x + t ** 2 * p2.x
    ys = mt ** 2 * p0.y + 2 * mt * t * p1.y + t ** 2 * p2.y
    return _to_points(xs, ys)


def calculate_cubic_bezier_points(p0: Point2D, p1: Point2D, p2: Point2D, p3: Point2D,
                                  segments: int = BEZIER_SEGMENTS) -> List[Point2D]:
    """
    Sample a cubic Bezier at segments + 1 evenly spaced t values.

    The first sample is exactly p0 and the last is exactly p3.
    """
    t = np.linspace(0.0, 1.0, segments + 1)
    mt = 1.0 - t
    xs = (mt ** 3 * p0.x + 3 * mt ** 2 * t * p1.x +
          3 * mt * t ** 2 * p2.x + t ** 3 * p3.x)
    ys = (mt ** 3 * p0.y + 3 * mt ** 2 * t * p1.y +
          3 * mt * t ** 2 * p2.y + t ** 3 * p3.y)
    return _to_points(xs, ys)


def calculate_arc_points(start: Point2D, end: Point2D, rx: float, ry: float,
                         x_axis_rotation: float, large_arc: bool, sweep: bool,
                         segments: int = ARC_SEGMENTS) -> List[Point2D]:
    """
    Flatten an SVG elliptical arc using endpoint-to-center conversion.

    Follows the W3C implementation notes: compute the start point in the
    rotated frame, scale the radii up if they cannot span the endpoints,
    pick the center from the large-arc/sweep flags, then sample from the
    start angle over the (sweep corrected) angular delta.

    Returns segments + 1 points. A zero radius gives a straight segment and
    identical endpoints give no points at all.
    """
    if start == end:
        return []

    rx = abs(rx)
    ry = abs(ry)
    if rx == 0 or ry == 0:
        return [start, end]

    phi = math.radians(x_axis_rotation)
    cos_phi = math.cos(phi)
    sin_phi = math.sin(phi)

    # Step 1: start point in the rotated frame
    dx = (start.x - end.x) / 2.0
    dy = (start.y - end.y) / 2.0
    x1p = cos_phi * dx + sin_phi * dy
    y1p = -sin_phi * dx + cos_phi * dy
    x1p_sq = x1p * x1p
    y1p_sq = y1p * y1p

    # Ensure radii are large enough
    radii_check = x1p_sq / (rx * rx) + y1p_sq / (ry * ry)
    if radii_check > 1:
        factor = math.sqrt(radii_check)
        rx *= factor
        ry *= factor
    rx_sq = rx * rx
    ry_sq = ry * ry

    # Step 2: center in the rotated frame, then in user space
    sq = (rx_sq * ry_sq - rx_sq * y1p_sq - ry_sq * x1p_sq) / (rx_sq * y1p_sq + ry_sq * x1p_sq)
    coef = math.sqrt(max(sq, 0.0))
    if bool(large_arc) == bool(sweep):
        coef = -coef
    cxp = coef * (rx * y1p / ry)
    cyp = -coef * (ry * x1p / rx)
    cx = cos_phi * cxp - sin_phi * cyp + (start.x + end.x) / 2.0
    cy = sin_phi * cxp + cos_phi * cyp + (start.y + end.y) / 2.0

    # Step 3: start angle and angular delta
    theta1 = math.atan2((y1p - cyp) / ry, (x1p - cxp) / rx)
    delta = math.atan2((-y1p - cyp) / ry, (-x1p - cxp) / rx) - theta1
    if not sweep and delta > 0:
        delta -= 2 * math.pi
    elif sweep and delta < 0:
        delta += 2 * math.pi

    # Step 4: sample
    angles = theta1 + np.linspace(0.0, 1.0, segments + 1) * delta
    cos_a = np.cos(angles)
    sin_a = np.sin(angles)
    xs = cos_phi * rx * cos_a - sin_phi * ry * sin_a + cx
    ys = sin_phi * rx * cos_a + cos_phi * ry * sin_a + cy
    return _to_points(xs, ys)


def _move_to(command: PathCommand, state: PathState) -> Tuple[PathState, List[Point2D]]:
    current, start = state.current, state.start
    points = []
    for index, (x, y) in enumerate(_groups(command.params, 2)):
        current = _resolve(current, x, y, command.is_relative)
        if index == 0:
            start = current
        points.append(current)
    return PathState(current, start), points


def _line_to(command: PathCommand, state: PathState) -> Tuple[PathState, List[Point2D]]:
    current = state.current
    points = []
    for x, y in _groups(command.params, 2):
        current = _resolve(current, x, y, command.is_relative)
        points.append(current)
    return PathState(current, state.start), points


def _horizontal_to(command: PathCommand, state: PathState) -> Tuple[PathState, List[Point2D]]:
    current = state.current
    points = []
    for x in command.params:
        current = Point2D(current.x + x if command.is_relative else x, current.y)
        points.append(current)
    return PathState(current, state.start), points


def _vertical_to(command: PathCommand, state: PathState) -> Tuple[PathState, List[Point2D]]:
    current = state.current
    points = []
    for y in command.params:
        current = Point2D(current.x, current.y + y if command.is_relative else y)
        points.append(current)
    return PathState(current, state.start), points


def _close_path(command: PathCommand, state: PathState) -> Tuple[PathState, List[Point2D]]:
    return PathState(state.start, state.start), [state.start]


def _arc_to(command: PathCommand, state: PathState) -> Tuple[PathState, List[Point2D]]:
    current = state.current
    points = []
    for rx, ry, rotation, large_arc, sweep, x, y in _groups(command.params, 7):
        end = _resolve(current, x, y, command.is_relative)
        points.extend(calculate_arc_points(
            current, end, rx, ry, rotation, int(large_arc) != 0, int(sweep) != 0
        ))
        current = end
    return PathState(current, state.start), points


def _quadratic_to(command: PathCommand, state: PathState) -> Tuple[PathState, List[Point2D]]:
    current = state.current
    points = []
    for cpx, cpy, x, y in _groups(command.params, 4):
        # Relative control and end points are both offsets from the segment start
        control = _resolve(current, cpx, cpy, command.is_relative)
        end = _resolve(current, x, y, command.is_relative)
        points.extend(calculate_quadratic_bezier_points(current, control, end))
        current = end
    return PathState(current, state.start), points


def _cubic_to(command: PathCommand, state: PathState) -> Tuple[PathState, List[Point2D]]:
    current = state.current
    points = []
    for cp1x, cp1y, cp2x, cp2y, x, y in _groups(command.params, 6):
        control1 = _resolve(current, cp1x, cp1y, command.is_relative)
        control2 = _resolve(current, cp2x, cp2y, command.is_relative)
        end = _resolve(current, x, y, command.is_relative)
        points.extend(calculate_cubic_bezier_points(current, control1, control2, end))
        current = end
    return PathState(current, state.start), points


CommandHandler = Callable[[PathCommand, PathState], Tuple[PathState, List[Point2D]]]

_HANDLERS: Dict[str, CommandHandler] = {
    'M': _move_to,
    'L': _line_to,
    'H': _horizontal_to,
    'V': _vertical_to,
    'Z': _close_path,
    'A': _arc_to,
    'Q': _quadratic_to,
    'C': _cubic_to,
}


def execute_command(command: PathCommand,
                    state: PathState) -> Tuple[PathState, List[Point2D]]:
    """
    Run a single command against the interpreter state.

    Returns the new state and the points the command produced. Unrecognized
    commands leave the state untouched and produce nothing.
    """
    handler = _HANDLERS.get(command.letter.upper())
    if handler is None:
        logger.debug("Skipping unsupported path command '%s'", command.letter)
        return state, []
    return handler(command, state)


def parse_path_data(d: str) -> List[Point2D]:
    """
    Flatten path data into an ordered point list.

    Returns an empty list for blank input. Raises PathDataError when a
    parameter list cannot be read as numbers.
    """
    if not d or not d.strip():
        return []

    state = PathState()
    points: List[Point2D] = []
    for command in tokenize_path_data(d):
        state, produced = execute_command(command, state)
        points.extend(produced)
    return points
