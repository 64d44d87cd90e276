"""
VectorBurn Laser Module

- G-code generation
- G-code validation and run time estimation
"""

from .gcode_generator import GCodeSettings, GCodeGenerator
from .gcode_validator import find_invalid_lines, validate_gcode, estimate_execution_time

__all__ = [
    'GCodeSettings', 'GCodeGenerator',
    'find_invalid_lines', 'validate_gcode', 'estimate_execution_time',
]
