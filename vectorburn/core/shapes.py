"""
VectorBurn Core Shapes Module

Closed set of basic shape kinds and the single function that turns any of
them into an ordered point list. Shapes carry geometry only; transforms are
applied afterwards by the parser.
"""

import math
import re
from dataclasses import dataclass
from typing import List, Tuple, Union

from .geometry import Point2D
from .path_data import parse_path_data

# Circles and ellipses are sampled with this many segments (51 points)
ELLIPSE_SEGMENTS = 50

_LIST_SEPARATOR_PATTERN = re.compile(r'[\s,]+')


@dataclass(frozen=True)
class RectShape:
    """A rectangle given by its top-left corner and size."""
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class CircleShape:
    cx: float = 0.0
    cy: float = 0.0
    r: float = 0.0


@dataclass(frozen=True)
class EllipseShape:
    cx: float = 0.0
    cy: float = 0.0
    rx: float = 0.0
    ry: float = 0.0


@dataclass(frozen=True)
class LineShape:
    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0


@dataclass(frozen=True)
class PolygonShape:
    """A closed polyline; the first point is repeated at the end."""
    points: Tuple[Point2D, ...] = ()


@dataclass(frozen=True)
class PolylineShape:
    points: Tuple[Point2D, ...] = ()


@dataclass(frozen=True)
class PathShape:
    """Raw path data, flattened by the path interpreter."""
    d: str = ""


ShapeKind = Union[RectShape, CircleShape, EllipseShape, LineShape,
                  PolygonShape, PolylineShape, PathShape]


def rect_points(shape: RectShape) -> List[Point2D]:
    """Four corners clockwise from top-left, plus the first again to close."""
    x, y = shape.x, shape.y
    return [
        Point2D(x, y),
        Point2D(x + shape.width, y),
        Point2D(x + shape.width, y + shape.height),
        Point2D(x, y + shape.height),
        Point2D(x, y)
    ]


def ellipse_points(cx: float, cy: float, rx: float, ry: float,
                   segments: int = ELLIPSE_SEGMENTS) -> List[Point2D]:
    """Sample an axis-aligned ellipse over [0, 2*pi], both ends included."""
    points = []
    for i in range(segments + 1):
        angle = 2 * math.pi * i / segments
        points.append(Point2D(cx + rx * math.cos(angle), cy + ry * math.sin(angle)))
    return points


def shape_points(shape: ShapeKind) -> List[Point2D]:
    """
    Generate the point sequence for a shape.

    Raises PathDataError for a PathShape with malformed data and TypeError
    for anything that is not a known shape kind.
    """
    if isinstance(shape, RectShape):
        return rect_points(shape)
    elif isinstance(shape, CircleShape):
        return ellipse_points(shape.cx, shape.cy, shape.r, shape.r)
    elif isinstance(shape, EllipseShape):
        return ellipse_points(shape.cx, shape.cy, shape.rx, shape.ry)
    elif isinstance(shape, LineShape):
        return [Point2D(shape.x1, shape.y1), Point2D(shape.x2, shape.y2)]
    elif isinstance(shape, PolygonShape):
        points = list(shape.points)
        if points:
            points.append(points[0])
        return points
    elif isinstance(shape, PolylineShape):
        return list(shape.points)
    elif isinstance(shape, PathShape):
        return parse_path_data(shape.d)
    raise TypeError(f"Unsupported shape kind: {type(shape).__name__}")


def parse_points_list(points_str: str) -> Tuple[Point2D, ...]:
    """
    Parse an SVG points attribute ("x1,y1 x2,y2 ...").

    Values are paired in order; a pair that does not parse and a dangling
    odd value are dropped.
    """
    if not points_str:
        return ()
    values = [v for v in _LIST_SEPARATOR_PATTERN.split(points_str.strip()) if v]
    points = []
    for i in range(0, len(values) - 1, 2):
        try:
            x, y = float(values[i]), float(values[i + 1])
        except ValueError:
            continue
        if math.isfinite(x) and math.isfinite(y):
            points.append(Point2D(x, y))
    return tuple(points)
