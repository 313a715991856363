"""
Utilities package for gesture recognition and processing.

This package provides the shared point type, geometry helpers and the
cast logger used across the matcher, recorder and caster.
"""

from .gesture_utils import (
    Point,
    ORIGIN,
    GeometryUtils,
    PathUtils,
    DataValidator
)
from .logger import CastLogger

__all__ = [
    'Point',
    'ORIGIN',
    'GeometryUtils',
    'PathUtils',
    'DataValidator',
    'CastLogger'
]
