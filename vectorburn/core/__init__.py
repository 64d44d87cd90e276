"""
VectorBurn Core Module

Contains the core data structures and geometry routines:
- Geometry: Point2D, Bounds2D
- Path data: SVG path interpreter with arc/Bezier flattening
- Shapes: basic shape kinds and their point sequences
- Style: colors and fill/stroke resolution
- Transform: translate/scale/rotate records
- Element: SvgElementData
"""

# Import order matters - geometry first, then the modules built on it
from .geometry import Point2D, Bounds2D
from .path_data import (
    PathCommand, PathState, PathDataError,
    tokenize_path_data, execute_command, parse_path_data,
    calculate_arc_points, calculate_quadratic_bezier_points,
    calculate_cubic_bezier_points
)
from .shapes import (
    RectShape, CircleShape, EllipseShape, LineShape,
    PolygonShape, PolylineShape, PathShape, ShapeKind,
    shape_points, parse_points_list
)
from .style import (
    Color, SvgStyle,
    parse_color, parse_hex_color, parse_rgb_color, parse_named_color,
    parse_stroke_width, resolve_style
)
from .transform import Transform, parse_transform, apply_transform
from .element import SvgElementData

__all__ = [
    'Point2D', 'Bounds2D',
    'PathCommand', 'PathState', 'PathDataError',
    'tokenize_path_data', 'execute_command', 'parse_path_data',
    'calculate_arc_points', 'calculate_quadratic_bezier_points',
    'calculate_cubic_bezier_points',
    'RectShape', 'CircleShape', 'EllipseShape', 'LineShape',
    'PolygonShape', 'PolylineShape', 'PathShape', 'ShapeKind',
    'shape_points', 'parse_points_list',
    'Color', 'SvgStyle',
    'parse_color', 'parse_hex_color', 'parse_rgb_color', 'parse_named_color',
    'parse_stroke_width', 'resolve_style',
    'Transform', 'parse_transform', 'apply_transform',
    'SvgElementData',
]
