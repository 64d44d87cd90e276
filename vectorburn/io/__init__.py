"""
VectorBurn I/O Module

- SVG document parsing
- Settings persistence
"""

from .svg_parser import (
    SVGParser, SVGError, SVGNotFoundError, SVGParseError, InvalidSVGError,
    SUPPORTED_SHAPES
)
from .settings_io import (
    save_settings, load_settings, settings_to_dict, settings_from_dict
)

__all__ = [
    'SVGParser', 'SVGError', 'SVGNotFoundError', 'SVGParseError', 'InvalidSVGError',
    'SUPPORTED_SHAPES',
    'save_settings', 'load_settings', 'settings_to_dict', 'settings_from_dict',
]
