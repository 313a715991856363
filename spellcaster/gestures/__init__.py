"""
Gesture recording, projection and matching.

This module provides the gesture matcher used to score a recorded path
against a stored pattern, and the camera/recorder pieces that capture it.
"""

from .gesture_matcher import (
    GestureMatcher,
    MatchResult,
    resample,
    normalize,
    score
)
from .projection import Camera, CastingPlane, PlanarProjector
from .gesture_recorder import GestureRecorder

__all__ = [
    'GestureMatcher',
    'MatchResult',
    'resample',
    'normalize',
    'score',
    'Camera',
    'CastingPlane',
    'PlanarProjector',
    'GestureRecorder'
]
