"""
VectorBurn Geometry Primitives

Immutable 2D value types shared by the parser and the G-code generator.
"""

from dataclasses import dataclass
from typing import Iterable
import math


# Absorbs floating point round-off from curve flattening
POINT_EPSILON = 1e-10


@dataclass(frozen=True, eq=False)
class Point2D:
    """
    A 2D point. Equality is tolerant to POINT_EPSILON per axis.

    Points are unhashable and cannot be set members or dict keys.
    """
    x: float
    y: float

    @staticmethod
    def zero() -> 'Point2D':
        return Point2D(0.0, 0.0)

    def __add__(self, other: 'Point2D') -> 'Point2D':
        return Point2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Point2D') -> 'Point2D':
        return Point2D(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> 'Point2D':
        return self.scale(factor)

    __rmul__ = __mul__

    def scale(self, factor: float) -> 'Point2D':
        """Scale both coordinates by factor."""
        return Point2D(self.x * factor, self.y * factor)

    def distance_to(self, other: 'Point2D') -> float:
        """Calculate Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point2D):
            return NotImplemented
        return (abs(self.x - other.x) < POINT_EPSILON and
                abs(self.y - other.y) < POINT_EPSILON)

    # Tolerant equality is not transitive, so no hash can agree with it
    __hash__ = None

    def __repr__(self) -> str:
        return f"Point2D({self.x!r}, {self.y!r})"

    def __str__(self) -> str:
        return f"({self.x:.2f}, {self.y:.2f})"


@dataclass(frozen=True)
class Bounds2D:
    """
    Rectangular boundary given by two corners.

    The constructor does not normalize the corners. Use from_points() to
    derive bounds from geometry; it always yields (min, min)-(max, max).
    """
    top_left: Point2D
    bottom_right: Point2D

    @staticmethod
    def empty() -> 'Bounds2D':
        return Bounds2D(Point2D.zero(), Point2D.zero())

    @staticmethod
    def from_rect(x: float, y: float, width: float, height: float) -> 'Bounds2D':
        """Build bounds from an origin and a size."""
        return Bounds2D(Point2D(x, y), Point2D(x + width, y + height))

    @staticmethod
    def from_points(points: Iterable[Point2D]) -> 'Bounds2D':
        """Compute the axis-aligned bounds of points (empty bounds if none)."""
        points = list(points)
        if not points:
            return Bounds2D.empty()
        return Bounds2D(
            Point2D(min(p.x for p in points), min(p.y for p in points)),
            Point2D(max(p.x for p in points), max(p.y for p in points))
        )

    @property
    def width(self) -> float:
        return self.bottom_right.x - self.top_left.x

    @property
    def height(self) -> float:
        return self.bottom_right.y - self.top_left.y

    @property
    def center(self) -> Point2D:
        return Point2D(
            (self.top_left.x + self.bottom_right.x) / 2,
            (self.top_left.y + self.bottom_right.y) / 2
        )

    def contains(self, point: Point2D) -> bool:
        """Check if point is inside the bounds (edges included)."""
        return (self.top_left.x <= point.x <= self.bottom_right.x and
                self.top_left.y <= point.y <= self.bottom_right.y)

    def expand(self, margin: float) -> 'Bounds2D':
        """Grow the bounds by margin on every side."""
        offset = Point2D(margin, margin)
        return Bounds2D(self.top_left - offset, self.bottom_right + offset)

    def __str__(self) -> str:
        return f"Bounds[{self.top_left} - {self.bottom_right}]"
