"""
Tests for color parsing and style resolution.
"""

import unittest

from vectorburn.core.style import (
    Color, SvgStyle,
    parse_color, parse_hex_color, parse_rgb_color, parse_named_color,
    parse_stroke_width, resolve_style
)


class TestColorParsing(unittest.TestCase):
    """Test the individual color syntaxes."""

    def test_short_and_long_hex_agree(self):
        self.assertEqual(parse_color("#F00"), parse_color("#FF0000"))
        self.assertEqual(parse_color("#F00"), Color(255, 255, 0, 0))

    def test_hex_with_alpha(self):
        self.assertEqual(parse_hex_color("#80FF0000"), Color(128, 255, 0, 0))

    def test_bad_hex(self):
        self.assertIsNone(parse_hex_color("#12345"))
        self.assertIsNone(parse_hex_color("#GGHHII"))
        self.assertEqual(parse_color("#12345"), Color.BLACK)

    def test_rgb(self):
        self.assertEqual(parse_rgb_color("rgb(10, 20, 30)"), Color(255, 10, 20, 30))
        self.assertEqual(parse_rgb_color("rgba(255,0,0,0.5)"), Color(127, 255, 0, 0))

    def test_rgb_out_of_range(self):
        self.assertIsNone(parse_rgb_color("rgb(300, 0, 0)"))
        self.assertIsNone(parse_rgb_color("rgba(0, 0, 0, 1.5)"))
        self.assertEqual(parse_color("rgb(300, 0, 0)", Color.WHITE), Color.WHITE)

    def test_named(self):
        self.assertEqual(parse_color("red"), Color.RED)
        self.assertEqual(parse_color("Blue"), Color.BLUE)
        self.assertEqual(parse_color("green"), Color.from_rgb(0, 128, 0))
        self.assertEqual(parse_color("transparent"), Color.TRANSPARENT)

    def test_unknown_name_gives_default(self):
        self.assertEqual(parse_named_color("notacolor", Color.WHITE), Color.WHITE)
        self.assertEqual(parse_color("notacolor"), Color.BLACK)

    def test_none_is_transparent(self):
        self.assertEqual(parse_color("none"), Color.TRANSPARENT)
        self.assertEqual(parse_color(""), Color.TRANSPARENT)
        self.assertEqual(parse_color(None), Color.TRANSPARENT)


class TestStrokeWidth(unittest.TestCase):
    """Test stroke-width parsing."""

    def test_plain_and_units(self):
        self.assertEqual(parse_stroke_width("2.5"), 2.5)
        self.assertEqual(parse_stroke_width("3px"), 3.0)

    def test_defaults(self):
        self.assertEqual(parse_stroke_width(None), 1.0)
        self.assertEqual(parse_stroke_width("thick"), 1.0)

    def test_negative_clamped(self):
        self.assertEqual(parse_stroke_width("-2"), 0.0)


class TestResolveStyle(unittest.TestCase):
    """Test building SvgStyle from element attributes."""

    def test_defaults(self):
        style = resolve_style({})
        self.assertEqual(style, SvgStyle())
        self.assertTrue(style.has_fill)
        self.assertEqual(style.fill_color, Color.BLACK)
        self.assertFalse(style.has_stroke)

    def test_fill_none_and_stroke(self):
        style = resolve_style({'fill': 'none', 'stroke': '#0000FF', 'stroke-width': '2'})
        self.assertFalse(style.has_fill)
        self.assertEqual(style.fill_color, Color.TRANSPARENT)
        self.assertTrue(style.has_stroke)
        self.assertEqual(style.stroke_color, Color.BLUE)
        self.assertEqual(style.stroke_width, 2.0)

    def test_inline_style(self):
        style = resolve_style({'style': 'fill: red; stroke: black; stroke-width: 0.5mm'})
        self.assertEqual(style.fill_color, Color.RED)
        self.assertEqual(style.stroke_color, Color.BLACK)
        self.assertEqual(style.stroke_width, 0.5)

    def test_attribute_wins_over_inline_style(self):
        style = resolve_style({'fill': 'blue', 'style': 'fill:red'})
        self.assertEqual(style.fill_color, Color.BLUE)


if __name__ == '__main__':
    unittest.main()
