"""
G-Code Generator for VectorBurn

Converts flattened point sequences to G-code for generic laser and mill
controllers.
"""

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..core.geometry import Point2D

logger = logging.getLogger(__name__)

MAX_LASER_POWER = 255
MAX_DECIMAL_PLACES = 10


@dataclass
class GCodeSettings:
    """Settings for G-code generation."""

    # Speed settings (mm/min)
    cut_feed_rate: float = 1000.0     # G1 moves
    rapid_feed_rate: float = 3000.0   # G0 moves, used for time estimation

    # Tool settings
    laser_power: int = 255            # S value, 0-255
    safe_height: float = 5.0          # Z for travel
    work_height: float = 0.0          # Z while cutting
    use_laser_mode: bool = True       # Laser vs spindle wording, M3 S0 in header

    # Output
    include_comments: bool = True

    # Coordinate transformation: machine = raw * scale_factor + offset
    scale_factor: float = 1.0
    x_offset: float = 0.0
    y_offset: float = 0.0
    decimal_places: int = 3

    def validate(self) -> Tuple[bool, str]:
        """
        Check that the settings describe a runnable job.

        Returns:
            (is_valid, error_message)
        """
        for name in ("cut_feed_rate", "rapid_feed_rate", "laser_power", "safe_height",
                     "work_height", "scale_factor", "x_offset", "y_offset"):
            if not math.isfinite(getattr(self, name)):
                return False, f"{name} must be a finite number"
        if self.cut_feed_rate <= 0:
            return False, f"Cut feed rate must be positive (got {self.cut_feed_rate})"
        if self.rapid_feed_rate <= 0:
            return False, f"Rapid feed rate must be positive (got {self.rapid_feed_rate})"
        if self.laser_power < 0 or self.laser_power > MAX_LASER_POWER:
            return False, f"Laser power {self.laser_power} is outside 0 - {MAX_LASER_POWER}"
        if self.scale_factor <= 0:
            return False, f"Scale factor must be positive (got {self.scale_factor})"
        if self.decimal_places < 0 or self.decimal_places > MAX_DECIMAL_PLACES:
            return False, f"Decimal places {self.decimal_places} is outside 0 - {MAX_DECIMAL_PLACES}"
        if self.safe_height < self.work_height:
            return False, (f"Safe height {self.safe_height}mm is below "
                           f"work height {self.work_height}mm")
        return True, ""


def format_coordinate(value: float, decimal_places: int) -> str:
    """Fixed-point formatting with a '.' separator and no negative zero."""
    places = max(0, min(MAX_DECIMAL_PLACES, int(decimal_places)))
    text = f"{value:.{places}f}"
    if text.startswith('-') and float(text) == 0:
        text = text[1:]
    return text


def format_feed_rate(value: float) -> str:
    """Feed rates drop trailing zeros: 1000.0 -> '1000', 1500.5 -> '1500.5'."""
    text = f"{value:.6f}".rstrip('0').rstrip('.')
    if text in ('', '-0'):
        return '0'
    return text


def clamp_power(power: float) -> int:
    return int(round(max(0, min(MAX_LASER_POWER, power))))


class _ProgramWriter:
    """Line buffer and tool state for one generation run."""

    def __init__(self, settings: GCodeSettings):
        self.settings = settings
        self._gcode_lines: List[str] = []
        self._laser_on: bool = False
        self._power = clamp_power(settings.laser_power)

    def text(self) -> str:
        return '\n'.join(self._gcode_lines) + '\n'

    def add_header(self):
        """Units, positioning and feed mode, then park at safe height and home."""
        s = self.settings
        if s.include_comments:
            self._emit("; G-Code generated by VectorBurn")
            self._emit("; Settings:")
            self._emit(f";   Cut Feed Rate: {format_feed_rate(s.cut_feed_rate)} mm/min")
            self._emit(f";   Rapid Feed Rate: {format_feed_rate(s.rapid_feed_rate)} mm/min")
            self._emit(f";   Laser Power: {self._power}")
            self._emit(f";   Scale Factor: {s.scale_factor}")
            self._emit(f";   Offset: X{s.x_offset} Y{s.y_offset}")
            self._emit("")

        self._emit_code("G21", "Set units to millimeters")
        self._emit_code("G90", "Absolute positioning")
        self._emit_code("G94", "Units per minute feed rate mode")
        if s.use_laser_mode:
            self._emit_code("M3 S0", "Enable laser mode with power off")
        self._emit(f"G0 Z{self._z(s.safe_height)}")
        self._emit("G0 X0 Y0")
        self._emit("")

    def add_footer(self):
        """Always turn the tool off, raise, go home and end the program."""
        self.comment("End of program")
        self._emit_code("M5", self._off_comment())
        self._laser_on = False
        self._emit(f"G0 Z{self._z(self.settings.safe_height)}")
        self._emit("G0 X0 Y0")
        self._emit_code("M30", "Program end")

    def add_contour(self, points: Sequence[Point2D]):
        """Rapid to the start, lower, engage, cut through the rest, disengage, raise."""
        if not points:
            return

        s = self.settings
        x, y = self._xy(points[0])
        self._emit(f"G0 X{x} Y{y}")
        self._emit(f"G0 Z{self._z(s.work_height)}")
        self._laser_on_with_power()

        feed = format_feed_rate(s.cut_feed_rate)
        for point in points[1:]:
            x, y = self._xy(point)
            self._emit(f"G1 X{x} Y{y} F{feed}")

        self._laser_off()
        self._emit(f"G0 Z{self._z(s.safe_height)}")

    def comment(self, text: str):
        if self.settings.include_comments:
            self._emit(f"; {text}")

    def blank(self):
        self._emit("")

    def _emit(self, line: str):
        """Add a line to the output."""
        self._gcode_lines.append(line)

    def _emit_code(self, code: str, comment: str):
        """Add a code line, with a trailing comment when comments are enabled."""
        if self.settings.include_comments:
            self._emit(f"{code} ; {comment}")
        else:
            self._emit(code)

    def _laser_on_with_power(self):
        self._emit(f"M3 S{self._power}")
        self._laser_on = True

    def _laser_off(self):
        if self._laser_on:
            self._emit_code("M5", self._off_comment())
            self._laser_on = False

    def _off_comment(self) -> str:
        return "Turn off laser" if self.settings.use_laser_mode else "Turn off spindle"

    def _xy(self, point: Point2D) -> Tuple[str, str]:
        s = self.settings
        x = point.x * s.scale_factor + s.x_offset
        y = point.y * s.scale_factor + s.y_offset
        return (format_coordinate(x, s.decimal_places),
                format_coordinate(y, s.decimal_places))

    def _z(self, height: float) -> str:
        return format_coordinate(height, self.settings.decimal_places)


class GCodeGenerator:
    """Generate G-code from parsed SVG elements or raw point sequences."""

    def __init__(self, settings: Optional[GCodeSettings] = None):
        self.settings = settings or GCodeSettings()

    def generate(self, elements: Iterable) -> str:
        """
        Generate a program with one contour per element.

        Elements need a ``points`` sequence; ``visible`` and ``element_type``
        are read when present. Hidden elements and elements without points
        are skipped.
        """
        writer = _ProgramWriter(self.settings)
        writer.add_header()

        count = 0
        for index, element in enumerate(elements, 1):
            if not getattr(element, 'visible', True):
                logger.debug("Skipping hidden element %d", index)
                continue
            points = list(element.points)
            if not points:
                continue

            element_type = getattr(element, 'element_type', 'path')
            writer.comment(f"Element {index}: {element_type} ({len(points)} points)")
            writer.add_contour(points)
            writer.blank()
            count += 1

        writer.add_footer()
        logger.debug("Generated G-code for %d contours", count)
        return writer.text()

    def generate_from_points(self, points: Iterable[Point2D]) -> str:
        """Generate a program that cuts a single contour."""
        writer = _ProgramWriter(self.settings)
        writer.add_header()
        writer.comment("Processing point sequence")
        writer.add_contour(list(points))
        writer.add_footer()
        return writer.text()

    def generate_from_paths(self, paths: Iterable[Iterable[Point2D]]) -> str:
        """Generate a program that cuts each point sequence as its own contour."""
        writer = _ProgramWriter(self.settings)
        writer.add_header()

        for index, path in enumerate(paths, 1):
            points = list(path)
            if not points:
                continue
            writer.comment(f"Path {index} ({len(points)} points)")
            writer.add_contour(points)
            writer.blank()

        writer.add_footer()
        return writer.text()

    def save_to_file(self, gcode: str, filepath: Union[str, Path]):
        """Save G-code to file."""
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(gcode)
        logger.info("Saved G-code to %s", filepath)
