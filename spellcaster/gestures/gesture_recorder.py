"""
Records the caster's cursor movement in 3D space on a plane in front of
the camera. An external controller (the SpellCaster) starts and stops it.
"""

import logging
from typing import Any, List, Optional

import numpy as np

from ..config.settings import RecorderConfig
from .projection import EPSILON, Camera, CastingPlane

logger = logging.getLogger(__name__)


class GestureRecorder:
    """Collects the 3D points of a single gesture attempt."""

    def __init__(self, camera: Camera,
                 plane_distance: float = RecorderConfig.PLANE_DISTANCE,
                 min_point_distance: float = RecorderConfig.MIN_POINT_DISTANCE):
        """
        Args:
            camera: Camera the gesture is drawn through.
            plane_distance: Distance from the camera to the drawing plane.
            min_point_distance: Minimum travel before a new point is recorded.
        """
        self.camera = camera
        self.plane_distance = plane_distance
        self.min_point_distance = min_point_distance

        self.is_recording = False
        self.casting_plane: Optional[CastingPlane] = None
        self._path: List[np.ndarray] = []

    @property
    def recorded_path(self) -> List[np.ndarray]:
        """Copy of the points recorded so far."""
        return [p.copy() for p in self._path]

    def start_recording(self):
        """Begin a new gesture, discarding any previous path."""
        if self.is_recording:
            return
        self.is_recording = True
        self._path.clear()
        self.casting_plane = CastingPlane.in_front_of(self.camera, self.plane_distance)
        logger.debug("Gesture recording started")

    def stop_recording(self):
        """Stop recording; the recorded path stays available."""
        if not self.is_recording:
            return
        self.is_recording = False
        logger.debug(f"Gesture recording stopped with {len(self._path)} points")

    def take_path(self) -> List[np.ndarray]:
        """Hand over the recorded path and clear it, so it is used only once."""
        path, self._path = self._path, []
        return path

    def add_point(self, point: Any) -> bool:
        """
        Record a world-space point if it is far enough from the last one.

        Points that are not finite 3D vectors, or that do not lie in front
        of the camera, are ignored.

        Returns:
            True if the point was recorded
        """
        if not self.is_recording:
            return False

        try:
            point = np.asarray(point, dtype=float).reshape(-1)
        except (TypeError, ValueError):
            return False
        if point.shape != (3,) or not np.all(np.isfinite(point)):
            return False

        depth = float(np.dot(point - self.camera.position, self.camera.forward))
        if depth <= EPSILON:
            logger.debug(f"Ignoring point {point} not in front of the camera")
            return False

        if self._path and np.linalg.norm(point - self._path[-1]) <= self.min_point_distance:
            return False

        self._path.append(point)
        return True

    def add_screen_point(self, screen_point: Any) -> bool:
        """Cast a ray through a screen position and record where it hits the plane."""
        if not self.is_recording:
            return False

        origin, direction = self.camera.screen_point_to_ray(screen_point)
        hit = self.casting_plane.raycast(origin, direction)
        if hit is None:
            return False
        return self.add_point(hit)
