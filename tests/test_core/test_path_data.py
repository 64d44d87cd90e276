"""
Tests for the SVG path data interpreter.

Covers tokenizing, absolute/relative command semantics and the curve and
arc flattening routines.
"""

import math
import unittest

from vectorburn.core.geometry import Point2D
from vectorburn.core.path_data import (
    PathCommand, PathState, PathDataError,
    tokenize_path_data, execute_command, parse_path_data,
    calculate_arc_points, calculate_quadratic_bezier_points,
    calculate_cubic_bezier_points
)


class TestTokenizer(unittest.TestCase):
    """Test splitting path data into commands."""

    def test_commas_and_whitespace(self):
        commands = tokenize_path_data("M 10,20 L30 40")
        self.assertEqual(commands, [
            PathCommand('M', (10.0, 20.0)),
            PathCommand('L', (30.0, 40.0)),
        ])

    def test_packed_numbers(self):
        """Signs and second decimal points start a new number."""
        self.assertEqual(tokenize_path_data("M10-5")[0].params, (10.0, -5.0))
        self.assertEqual(tokenize_path_data("l.5.5")[0].params, (0.5, 0.5))

    def test_packed_arc_flags(self):
        self.assertEqual(tokenize_path_data("A50 50 0 01100 0")[0].params,
                         (50.0, 50.0, 0.0, 0.0, 1.0, 100.0, 0.0))
        self.assertEqual(tokenize_path_data("a1 1 0 1,0.5.5 2 2 0 0 1 3 3")[0].params,
                         (1.0, 1.0, 0.0, 1.0, 0.0, 0.5, 0.5,
                          2.0, 2.0, 0.0, 0.0, 1.0, 3.0, 3.0))

    def test_flags_only_split_in_arcs(self):
        self.assertEqual(tokenize_path_data("L0 0 01")[0].params, (0.0, 0.0, 1.0))

    def test_exponent_is_not_a_command(self):
        commands = tokenize_path_data("M1e2 2.5E-1")
        self.assertEqual(len(commands), 1)
        self.assertEqual(commands[0].params, (100.0, 0.25))

    def test_no_parameters(self):
        commands = tokenize_path_data("M0 0 Z")
        self.assertEqual(commands[1], PathCommand('Z', ()))

    def test_invalid_parameter_raises(self):
        with self.assertRaises(PathDataError):
            tokenize_path_data("M 10 # 20")

    def test_path_data_error_is_value_error(self):
        self.assertTrue(issubclass(PathDataError, ValueError))

    def test_relative_flag(self):
        self.assertTrue(PathCommand('l').is_relative)
        self.assertFalse(PathCommand('L').is_relative)


class TestExecuteCommand(unittest.TestCase):
    """Test single command execution against explicit state."""

    def test_move_sets_subpath_start(self):
        state, points = execute_command(PathCommand('M', (5, 5, 10, 5)), PathState())
        self.assertEqual(points, [Point2D(5, 5), Point2D(10, 5)])
        self.assertEqual(state.start, Point2D(5, 5))
        self.assertEqual(state.current, Point2D(10, 5))

    def test_relative_line(self):
        state = PathState(Point2D(10, 10), Point2D(10, 10))
        state, points = execute_command(PathCommand('l', (5, 0, 0, 5)), state)
        self.assertEqual(points, [Point2D(15, 10), Point2D(15, 15)])
        self.assertEqual(state.current, Point2D(15, 15))

    def test_horizontal_and_vertical(self):
        state = PathState(Point2D(1, 2), Point2D.zero())
        state, points = execute_command(PathCommand('H', (7,)), state)
        self.assertEqual(points, [Point2D(7, 2)])
        state, points = execute_command(PathCommand('v', (3,)), state)
        self.assertEqual(points, [Point2D(7, 5)])

    def test_close_returns_to_start(self):
        state = PathState(Point2D(9, 9), Point2D(1, 1))
        state, points = execute_command(PathCommand('Z'), state)
        self.assertEqual(points, [Point2D(1, 1)])
        self.assertEqual(state.current, Point2D(1, 1))

    def test_unknown_command_is_skipped(self):
        state = PathState(Point2D(3, 4), Point2D(0, 0))
        new_state, points = execute_command(PathCommand('S', (1, 2, 3, 4)), state)
        self.assertEqual(points, [])
        self.assertEqual(new_state, state)

    def test_incomplete_group_is_ignored(self):
        state, points = execute_command(PathCommand('L', (1, 2, 3)), PathState())
        self.assertEqual(points, [Point2D(1, 2)])


class TestParsePathData(unittest.TestCase):
    """Test flattening whole path strings."""

    def test_blank(self):
        self.assertEqual(parse_path_data(""), [])
        self.assertEqual(parse_path_data("   "), [])

    def test_square_absolute_and_relative_agree(self):
        absolute = parse_path_data("M0 0 L10 0 L10 10 L0 10 Z")
        relative = parse_path_data("m0 0 l10 0 l0 10 l-10 0 z")
        self.assertEqual(absolute, relative)
        self.assertEqual(absolute[-1], Point2D(0, 0))

    def test_text_before_first_command_is_ignored(self):
        self.assertEqual(parse_path_data("10 20 M1 1"), [Point2D(1, 1)])

    def test_cubic_endpoints(self):
        points = parse_path_data("M0 0 C0 10 10 10 10 0")
        self.assertEqual(points[-1], Point2D(10, 0))

    def test_relative_quadratic(self):
        points = parse_path_data("M10 10 q5 10 10 0")
        self.assertEqual(points[-1], Point2D(20, 10))
        # Apex of the symmetric curve sits at the midpoint of the samples
        self.assertAlmostEqual(points[1 + 50].y, 15.0)

    def test_malformed_raises(self):
        with self.assertRaises(PathDataError):
            parse_path_data("M0 0 L1 #")


class TestCurves(unittest.TestCase):
    """Test Bezier and arc flattening."""

    def test_cubic_bezier_endpoints_exact(self):
        p0, p3 = Point2D(1.5, -2.25), Point2D(17.125, 9.75)
        points = calculate_cubic_bezier_points(p0, Point2D(3, 40), Point2D(-8, 2), p3)
        self.assertEqual(len(points), 101)
        self.assertEqual(points[0], p0)
        self.assertEqual(points[-1], p3)

    def test_quadratic_bezier_endpoints_exact(self):
        p0, p2 = Point2D(0, 0), Point2D(10, 0)
        points = calculate_quadratic_bezier_points(p0, Point2D(5, 10), p2)
        self.assertEqual(len(points), 101)
        self.assertEqual(points[0], p0)
        self.assertEqual(points[-1], p2)
        self.assertAlmostEqual(points[50].y, 5.0)

    def test_arc_sweep_direction(self):
        """Sweep 1 goes through negative y for a left-to-right semicircle."""
        points = calculate_arc_points(Point2D(0, 0), Point2D(100, 0), 50, 50, 0, False, True)
        self.assertEqual(len(points), 101)
        self.assertLess(points[50].y, 0)
        self.assertAlmostEqual(points[50].y, -50.0)
        self.assertAlmostEqual(points[50].x, 50.0)

        points = calculate_arc_points(Point2D(0, 0), Point2D(100, 0), 50, 50, 0, False, False)
        self.assertGreater(points[50].y, 0)

    def test_arc_endpoints(self):
        points = calculate_arc_points(Point2D(0, 0), Point2D(30, 40), 10, 10, 0, True, True)
        self.assertAlmostEqual(points[0].x, 0.0)
        self.assertAlmostEqual(points[0].y, 0.0)
        self.assertAlmostEqual(points[-1].x, 30.0)
        self.assertAlmostEqual(points[-1].y, 40.0)

    def test_small_radii_are_scaled_up(self):
        """Radii too small to span the endpoints become a half ellipse."""
        points = calculate_arc_points(Point2D(0, 0), Point2D(100, 0), 1, 1, 0, False, True)
        self.assertAlmostEqual(points[50].y, -50.0)

    def test_zero_radius_is_straight_line(self):
        points = calculate_arc_points(Point2D(0, 0), Point2D(10, 0), 0, 5, 0, False, True)
        self.assertEqual(points, [Point2D(0, 0), Point2D(10, 0)])

    def test_identical_endpoints_give_nothing(self):
        points = calculate_arc_points(Point2D(5, 5), Point2D(5, 5), 10, 10, 0, False, True)
        self.assertEqual(points, [])

    def test_arc_in_path(self):
        points = parse_path_data("M0 0 A50 50 0 0 1 100 0")
        self.assertEqual(points[0], Point2D(0, 0))
        self.assertEqual(len(points), 1 + 101)
        self.assertLess(points[1 + 50].y, 0)

    def test_packed_flags_arc_matches_spaced(self):
        self.assertEqual(parse_path_data("M0 0 A50 50 0 01100 0"),
                         parse_path_data("M0 0 A50 50 0 0 1 100 0"))

    def test_rotated_arc_stays_on_ellipse(self):
        points = calculate_arc_points(Point2D(0, 0), Point2D(0, 100), 50, 50, 30, False, True)
        for point in points:
            self.assertAlmostEqual(math.hypot(point.x, point.y - 50), 50.0, places=6)


if __name__ == '__main__':
    unittest.main()
