"""
Style resolution for VectorBurn

Parses fill, stroke and stroke-width into an SvgStyle record. Color values
can be hex (#RGB, #RRGGBB, #AARRGGBB), rgb()/rgba() or a CSS color name.
Nothing in here raises: bad values fall back to documented defaults.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Mapping, Optional

from PIL import ImageColor

logger = logging.getLogger(__name__)

DEFAULT_STROKE_WIDTH = 1.0

_RGB_PATTERN = re.compile(
    r'rgba?\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([\d.]+))?\s*\)',
    re.IGNORECASE
)
_UNIT_SUFFIX_PATTERN = re.compile(r'[a-zA-Z%]+$')
_HEX_DIGITS_PATTERN = re.compile(r'[0-9a-fA-F]+')


@dataclass(frozen=True)
class Color:
    """An 8-bit color with alpha first: Color(a, r, g, b)."""
    a: int
    r: int
    g: int
    b: int

    @staticmethod
    def from_rgb(r: int, g: int, b: int, a: int = 255) -> 'Color':
        return Color(a, r, g, b)

    def __str__(self) -> str:
        return f"Color[A={self.a}, R={self.r}, G={self.g}, B={self.b}]"


Color.BLACK = Color.from_rgb(0, 0, 0)
Color.WHITE = Color.from_rgb(255, 255, 255)
Color.RED = Color.from_rgb(255, 0, 0)
Color.GREEN = Color.from_rgb(0, 255, 0)
Color.BLUE = Color.from_rgb(0, 0, 255)
Color.TRANSPARENT = Color(0, 0, 0, 0)


@dataclass(frozen=True)
class SvgStyle:
    """Fill and stroke information for one element."""
    fill_color: Color = field(default_factory=lambda: Color.BLACK)
    stroke_color: Color = field(default_factory=lambda: Color.TRANSPARENT)
    stroke_width: float = DEFAULT_STROKE_WIDTH
    has_fill: bool = True
    has_stroke: bool = False


def _is_none(value: Optional[str]) -> bool:
    return value is None or value.strip().lower() in ('', 'none')


def parse_hex_color(value: str) -> Optional[Color]:
    """Parse #RGB, #RRGGBB or #AARRGGBB. Returns None if malformed."""
    digits = value.strip().lstrip('#')
    if not _HEX_DIGITS_PATTERN.fullmatch(digits):
        return None
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]

    if len(digits) == 6:
        return Color.from_rgb(*channels)
    if len(digits) == 8:
        return Color(*channels)
    return None


def parse_rgb_color(value: str) -> Optional[Color]:
    """Parse rgb(r, g, b) or rgba(r, g, b, alpha). Returns None if malformed."""
    match = _RGB_PATTERN.fullmatch(value.strip())
    if match is None:
        return None

    r, g, b = (int(match.group(i)) for i in (1, 2, 3))
    if max(r, g, b) > 255:
        return None

    if match.group(4) is None:
        return Color.from_rgb(r, g, b)
    try:
        alpha = float(match.group(4))
    except ValueError:
        return None
    if not 0.0 <= alpha <= 1.0:
        return None
    return Color.from_rgb(r, g, b, int(alpha * 255))


def parse_named_color(name: str, default: Color) -> Color:
    """Look up a CSS color name (case-insensitive), else return default."""
    key = name.strip().lower()
    if key == 'transparent':
        return Color.TRANSPARENT
    if key in ImageColor.colormap:
        r, g, b = ImageColor.getrgb(key)[:3]
        return Color.from_rgb(r, g, b)
    logger.debug("Unknown color name '%s', using default", name)
    return default


def parse_color(value: Optional[str], default: Color = Color.BLACK) -> Color:
    """
    Parse any supported color syntax.

    'none' or an empty value means transparent. A value that looks like hex
    or rgb() but does not parse returns default.
    """
    if _is_none(value):
        return Color.TRANSPARENT

    text = value.strip()
    if text.startswith('#'):
        color = parse_hex_color(text)
    elif text.lower().startswith('rgb'):
        color = parse_rgb_color(text)
    else:
        return parse_named_color(text, default)

    if color is None:
        logger.debug("Could not parse color '%s', using default", value)
        return default
    return color


def parse_stroke_width(value: Optional[str]) -> float:
    """Parse stroke-width, ignoring a unit suffix. Defaults to 1.0."""
    if value is None or not value.strip():
        return DEFAULT_STROKE_WIDTH
    numeric = _UNIT_SUFFIX_PATTERN.sub('', value.strip())
    try:
        width = float(numeric)
    except ValueError:
        return DEFAULT_STROKE_WIDTH
    return max(width, 0.0)


def get_style_value(attributes: Mapping[str, str], name: str) -> Optional[str]:
    """Get a presentation value from the attribute or the inline style attribute."""
    value = attributes.get(name)
    if value:
        return value

    # Parse style="fill:black;stroke:none"
    for part in attributes.get('style', '').split(';'):
        if ':' in part:
            key, val = part.split(':', 1)
            if key.strip() == name:
                return val.strip()
    return None


def resolve_style(attributes: Mapping[str, str]) -> SvgStyle:
    """Build the SvgStyle of an element from its attributes."""
    fill = get_style_value(attributes, 'fill')
    if fill is None:
        # SVG default: black fill
        fill_color, has_fill = Color.BLACK, True
    elif _is_none(fill):
        fill_color, has_fill = Color.TRANSPARENT, False
    else:
        fill_color, has_fill = parse_color(fill, Color.BLACK), True

    stroke = get_style_value(attributes, 'stroke')
    if _is_none(stroke):
        stroke_color, has_stroke = Color.TRANSPARENT, False
    else:
        stroke_color, has_stroke = parse_color(stroke, Color.BLACK), True

    return SvgStyle(
        fill_color=fill_color,
        stroke_color=stroke_color,
        stroke_width=parse_stroke_width(get_style_value(attributes, 'stroke-width')),
        has_fill=has_fill,
        has_stroke=has_stroke,
    )
