"""
VectorBurn - SVG to G-code conversion

Parses SVG documents into flattened, styled point sequences and turns them
into G-code for laser cutters and mills.
"""

__version__ = "0.1.0"

from .core import Point2D, Bounds2D, Color, SvgStyle, Transform, SvgElementData
from .io import SVGParser, SVGError, SVGNotFoundError, SVGParseError, InvalidSVGError
from .laser import (
    GCodeSettings, GCodeGenerator,
    find_invalid_lines, validate_gcode, estimate_execution_time
)

__all__ = [
    '__version__',
    'Point2D', 'Bounds2D', 'Color', 'SvgStyle', 'Transform', 'SvgElementData',
    'SVGParser', 'SVGError', 'SVGNotFoundError', 'SVGParseError', 'InvalidSVGError',
    'GCodeSettings', 'GCodeGenerator',
    'find_invalid_lines', 'validate_gcode', 'estimate_execution_time',
]
