"""
VectorBurn element records

The parsed, fully transformed result for one SVG leaf shape.
"""

from dataclasses import dataclass, field
from typing import Iterable, Tuple

from .geometry import Bounds2D, Point2D
from .style import SvgStyle


@dataclass(frozen=True)
class SvgElementData:
    """
    Points, style and tag of one leaf element after group transforms.

    Points are stored as a tuple so the record cannot change once built.
    """
    points: Tuple[Point2D, ...] = ()
    style: SvgStyle = field(default_factory=SvgStyle)
    element_type: str = "path"
    visible: bool = True

    def __post_init__(self):
        if not isinstance(self.points, tuple):
            object.__setattr__(self, 'points', tuple(self.points))

    @property
    def bounds(self) -> Bounds2D:
        return Bounds2D.from_points(self.points)

    def with_points(self, points: Iterable[Point2D]) -> 'SvgElementData':
        """Return a copy carrying new points and the same style/type."""
        return SvgElementData(
            points=tuple(points),
            style=self.style,
            element_type=self.element_type,
            visible=self.visible
        )
