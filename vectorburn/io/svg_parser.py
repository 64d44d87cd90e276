"""
SVG Parser for VectorBurn

Walks an SVG document and turns every supported leaf shape into an
SvgElementData record with its style resolved and all transforms applied.
Supports path, rect, circle, ellipse, line, polygon, polyline and nested
groups. Anything else is skipped.
"""

import logging
import math
from pathlib import Path
from typing import List, Optional, Union
from xml.etree import ElementTree as ET

from ..core.element import SvgElementData
from ..core.geometry import Point2D
from ..core.path_data import PathDataError, parse_path_data
from ..core.shapes import (
    ShapeKind, RectShape, CircleShape, EllipseShape, LineShape,
    PolygonShape, PolylineShape, PathShape,
    shape_points, parse_points_list
)
from ..core.style import resolve_style
from ..core.transform import apply_transform, parse_transform

logger = logging.getLogger(__name__)

SUPPORTED_SHAPES = ('path', 'rect', 'circle', 'ellipse', 'line', 'polygon', 'polyline')

_LENGTH_UNITS = ('px', 'pt', 'pc', 'mm', 'cm', 'in', 'em', '%')


class SVGError(Exception):
    """Base class for document level SVG failures."""


class SVGNotFoundError(SVGError, FileNotFoundError):
    """The referenced SVG file does not exist."""


class SVGParseError(SVGError, ValueError):
    """The SVG content (XML or path data) could not be parsed."""


class InvalidSVGError(SVGParseError):
    """The document parsed as XML but its root element is not <svg>."""


def _local_name(tag) -> str:
    """Strip the namespace from an element tag."""
    if not isinstance(tag, str):
        # Comments and processing instructions
        return ''
    return tag.rsplit('}', 1)[-1]


class SVGParser:
    """Parse SVG files or strings into styled element records."""

    def parse_file(self, filepath: Union[str, Path]) -> List[SvgElementData]:
        """
        Parse an SVG file.

        Raises SVGNotFoundError if the file is missing, SVGParseError if it is
        not well-formed XML and InvalidSVGError if the root is not <svg>.
        """
        path = Path(filepath)
        if not path.is_file():
            raise SVGNotFoundError(f"SVG file not found: {filepath}")

        try:
            tree = ET.parse(path)
        except ET.ParseError as e:
            raise SVGParseError(f"Failed to parse SVG file {filepath}: {e}") from e

        logger.debug("Parsing SVG file %s", path)
        return self.parse_svg(tree.getroot())

    def parse_string(self, svg: Union[str, bytes]) -> List[SvgElementData]:
        """Parse SVG markup held in memory (text or bytes)."""
        try:
            root = ET.fromstring(svg)
        except ET.ParseError as e:
            raise SVGParseError(f"Failed to parse SVG content: {e}") from e
        return self.parse_svg(root)

    def parse_svg(self, root: ET.Element) -> List[SvgElementData]:
        """Parse the SVG root element."""
        name = _local_name(root.tag)
        if name != 'svg':
            raise InvalidSVGError(f"Root element is <{name}>, expected <svg>")

        elements = []
        for child in root:
            elements.extend(self._parse_element(child))

        logger.debug("Parsed %d elements", len(elements))
        return elements

    def parse_file_to_points(self, filepath: Union[str, Path]) -> List[Point2D]:
        """Parse a file and concatenate the points of every element."""
        return [p for element in self.parse_file(filepath) for p in element.points]

    def parse_string_to_points(self, svg: Union[str, bytes]) -> List[Point2D]:
        """Parse markup and concatenate the points of every element."""
        return [p for element in self.parse_string(svg) for p in element.points]

    def parse_path(self, path_data: str) -> List[Point2D]:
        """Flatten a path data string. Raises SVGParseError if malformed."""
        try:
            return parse_path_data(path_data)
        except PathDataError as e:
            raise SVGParseError(f"Failed to parse SVG path data: {e}") from e

    def is_valid_svg_file(self, filepath: Union[str, Path]) -> bool:
        """Check that a file exists, is well-formed XML and has an <svg> root."""
        path = Path(filepath)
        if not path.is_file():
            return False
        try:
            root = ET.parse(path).getroot()
        except (ET.ParseError, OSError):
            return False
        return _local_name(root.tag) == 'svg'

    def is_valid_svg(self, svg: Union[str, bytes]) -> bool:
        """Check that markup is well-formed XML with an <svg> root."""
        try:
            root = ET.fromstring(svg)
        except (ET.ParseError, ValueError, TypeError):
            return False
        return _local_name(root.tag) == 'svg'

    def _parse_element(self, element: ET.Element) -> List[SvgElementData]:
        """Parse one element; groups recurse, unknown tags yield nothing."""
        tag = _local_name(element.tag).lower()

        if tag == 'g':
            return self._parse_group(element)

        shape = self._build_shape(tag, element)
        if shape is None:
            if tag:
                logger.debug("Skipping unsupported element <%s>", tag)
            return []

        try:
            points = shape_points(shape)
        except PathDataError as e:
            logger.warning("Skipping <%s> with malformed path data: %s", tag, e)
            return []

        if not points:
            return []

        transform = parse_transform(element.get('transform'))
        return [SvgElementData(
            points=tuple(apply_transform(points, transform)),
            style=resolve_style(element.attrib),
            element_type=_local_name(element.tag)
        )]

    def _parse_group(self, element: ET.Element) -> List[SvgElementData]:
        """Parse a group and apply its transform to every descendant point."""
        group_transform = parse_transform(element.get('transform'))

        elements = []
        for child in element:
            for data in self._parse_element(child):
                elements.append(data.with_points(apply_transform(data.points, group_transform)))
        return elements

    def _build_shape(self, tag: str, element: ET.Element) -> Optional[ShapeKind]:
        """Map a tag to its shape kind; None for anything unsupported."""
        if tag == 'rect':
            return RectShape(
                self._parse_length(element.get('x')),
                self._parse_length(element.get('y')),
                self._parse_length(element.get('width')),
                self._parse_length(element.get('height'))
            )
        elif tag == 'circle':
            return CircleShape(
                self._parse_length(element.get('cx')),
                self._parse_length(element.get('cy')),
                self._parse_length(element.get('r'))
            )
        elif tag == 'ellipse':
            return EllipseShape(
                self._parse_length(element.get('cx')),
                self._parse_length(element.get('cy')),
                self._parse_length(element.get('rx')),
                self._parse_length(element.get('ry'))
            )
        elif tag == 'line':
            return LineShape(
                self._parse_length(element.get('x1')),
                self._parse_length(element.get('y1')),
                self._parse_length(element.get('x2')),
                self._parse_length(element.get('y2'))
            )
        elif tag == 'polygon':
            return PolygonShape(parse_points_list(element.get('points', '')))
        elif tag == 'polyline':
            return PolylineShape(parse_points_list(element.get('points', '')))
        elif tag == 'path':
            return PathShape(element.get('d', ''))
        return None

    def _parse_length(self, length_str: Optional[str], default: float = 0.0) -> float:
        """Parse an SVG length, dropping any unit. Malformed values give default."""
        if not length_str:
            return default

        value = length_str.strip()
        # Remove units
        for unit in _LENGTH_UNITS:
            if value.endswith(unit):
                value = value[:-len(unit)]
                break

        try:
            number = float(value)
        except ValueError:
            return default
        # Reject nan and inf
        return number if math.isfinite(number) else default
