"""
SVG transform attribute support for VectorBurn

Only translate(), scale() and rotate() are recognized. The first occurrence
of each function is used and they are always applied in the fixed order
scale -> rotate about center -> translate, whatever order they were written
in. Repeated or chained functions of the same kind are not composed.
"""

import math
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .geometry import Point2D

# Rotations smaller than this (degrees) are treated as none
MIN_ROTATION = 0.001

_ARG = r'([^,\s)]+)'
_SEP = r'(?:\s*,\s*|\s+)'
_TRANSLATE_PATTERN = re.compile(rf'translate\s*\(\s*{_ARG}(?:{_SEP}{_ARG})?\s*\)')
_SCALE_PATTERN = re.compile(rf'scale\s*\(\s*{_ARG}(?:{_SEP}{_ARG})?\s*\)')
_ROTATE_PATTERN = re.compile(rf'rotate\s*\(\s*{_ARG}(?:{_SEP}{_ARG}{_SEP}{_ARG})?\s*\)')


@dataclass(frozen=True)
class Transform:
    """Translate/scale/rotate record. Default constructed to identity."""
    translate_x: float = 0.0
    translate_y: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation_deg: float = 0.0
    rotation_center_x: float = 0.0
    rotation_center_y: float = 0.0

    @property
    def is_identity(self) -> bool:
        return (self.translate_x == 0 and self.translate_y == 0 and
                self.scale_x == 1 and self.scale_y == 1 and
                abs(self.rotation_deg) <= MIN_ROTATION)

    def apply_to_point(self, point: Point2D) -> Point2D:
        """Scale, then rotate about the rotation center, then translate."""
        x = point.x * self.scale_x
        y = point.y * self.scale_y

        if abs(self.rotation_deg) > MIN_ROTATION:
            radians = math.radians(self.rotation_deg)
            cos_r = math.cos(radians)
            sin_r = math.sin(radians)
            dx = x - self.rotation_center_x
            dy = y - self.rotation_center_y
            x = dx * cos_r - dy * sin_r + self.rotation_center_x
            y = dx * sin_r + dy * cos_r + self.rotation_center_y

        return Point2D(x + self.translate_x, y + self.translate_y)

    def apply(self, points: Iterable[Point2D]) -> List[Point2D]:
        """Apply the transform to every point."""
        return [self.apply_to_point(p) for p in points]


def _to_float(text: Optional[str]) -> Optional[float]:
    if text is None:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_transform(value: Optional[str]) -> Transform:
    """
    Parse a transform attribute.

    Each function is optional. Omitted arguments default to ty=0, sy=sx and
    a rotation center of (0, 0). Unparsable numbers keep their defaults.
    """
    if not value or not value.strip():
        return Transform()

    fields = {}

    match = _TRANSLATE_PATTERN.search(value)
    if match:
        tx = _to_float(match.group(1))
        ty = _to_float(match.group(2))
        if tx is not None:
            fields['translate_x'] = tx
        if ty is not None:
            fields['translate_y'] = ty

    match = _SCALE_PATTERN.search(value)
    if match:
        sx = _to_float(match.group(1))
        sy = _to_float(match.group(2))
        if sx is not None:
            fields['scale_x'] = sx
            fields['scale_y'] = sx
        if sy is not None:
            fields['scale_y'] = sy

    match = _ROTATE_PATTERN.search(value)
    if match:
        angle = _to_float(match.group(1))
        cx = _to_float(match.group(2))
        cy = _to_float(match.group(3))
        if angle is not None:
            fields['rotation_deg'] = angle
        if cx is not None and cy is not None:
            fields['rotation_center_x'] = cx
            fields['rotation_center_y'] = cy

    return Transform(**fields)


def apply_transform(points: Iterable[Point2D], transform: Transform) -> List[Point2D]:
    """Apply transform to a point list (a no-op copy for the identity)."""
    if transform.is_identity:
        return list(points)
    return transform.apply(points)
