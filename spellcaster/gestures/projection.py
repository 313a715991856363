"""
Projection of captured 3D gesture points onto a 2D plane.

The matcher only needs an object with ``project(point3d) -> Point``. Two are
provided here: a planar projector that keeps two of the three axes, and a
pinhole camera that maps world points to screen pixels the way a game
camera does (origin at the bottom-left of the screen, y pointing up).
"""

import math
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from ..utils.gesture_utils import Point

EPSILON = 1e-9


def _as_vector(value: Any) -> np.ndarray:
    vector = np.asarray(value, dtype=float).reshape(-1)
    if vector.shape != (3,):
        raise ValueError(f"expected a 3D point, got shape {vector.shape}")
    return vector


def _unit(value: Any) -> np.ndarray:
    vector = _as_vector(value)
    norm = np.linalg.norm(vector)
    if norm < EPSILON:
        raise ValueError("direction vector has zero length")
    return vector / norm


class PlanarProjector:
    """Projects 3D points by keeping two of their axes."""

    def __init__(self, axes: Tuple[int, int] = (0, 1)):
        if len(axes) != 2 or axes[0] == axes[1] or not all(0 <= a <= 2 for a in axes):
            raise ValueError(f"invalid projection axes: {axes}")
        self.axes = axes

    def project(self, point: Any) -> Point:
        vector = _as_vector(point)
        return Point(float(vector[self.axes[0]]), float(vector[self.axes[1]]))


class Camera:
    """
    Pinhole camera used to flatten recorded gestures to screen space.

    Args:
        position: Camera position in world space.
        forward: Viewing direction.
        up: Approximate up direction, used to build the camera basis.
        fov: Vertical field of view in degrees.
        screen_width: Screen width in pixels.
        screen_height: Screen height in pixels.
    """

    def __init__(self,
                 position: Sequence[float] = (0.0, 0.0, 0.0),
                 forward: Sequence[float] = (0.0, 0.0, 1.0),
                 up: Sequence[float] = (0.0, 1.0, 0.0),
                 fov: float = 60.0,
                 screen_width: int = 1920,
                 screen_height: int = 1080):
        if not 0 < fov < 180:
            raise ValueError("fov must be between 0 and 180 degrees")
        if screen_width <= 0 or screen_height <= 0:
            raise ValueError("screen size must be positive")

        self.position = _as_vector(position)
        self.forward = _unit(forward)
        # Left-handed basis: right = up x forward
        right = np.cross(_unit(up), self.forward)
        if np.linalg.norm(right) < EPSILON:
            raise ValueError("up vector must not be parallel to forward")
        self.right = right / np.linalg.norm(right)
        self.up = np.cross(self.forward, self.right)

        self.fov = float(fov)
        self.screen_width = int(screen_width)
        self.screen_height = int(screen_height)
        self.focal_length = (self.screen_height / 2.0) / math.tan(math.radians(self.fov) / 2.0)

    def world_to_screen_point(self, point: Any) -> Point:
        """Map a world-space point to screen pixels."""
        offset = _as_vector(point) - self.position
        depth = float(np.dot(offset, self.forward))
        if abs(depth) < EPSILON:
            raise ValueError("point lies on the camera plane and cannot be projected")

        sx = self.screen_width / 2.0 + self.focal_length * float(np.dot(offset, self.right)) / depth
        sy = self.screen_height / 2.0 + self.focal_length * float(np.dot(offset, self.up)) / depth
        return Point(sx, sy)

    def screen_point_to_ray(self, screen_point: Any) -> Tuple[np.ndarray, np.ndarray]:
        """Return (origin, unit direction) of the ray through a screen pixel."""
        sx, sy = float(screen_point[0]), float(screen_point[1])
        dx = (sx - self.screen_width / 2.0) / self.focal_length
        dy = (sy - self.screen_height / 2.0) / self.focal_length
        direction = self.forward + dx * self.right + dy * self.up
        return self.position.copy(), direction / np.linalg.norm(direction)

    def project(self, point: Any) -> Point:
        return self.world_to_screen_point(point)


class CastingPlane:
    """An infinite plane that gesture rays are intersected with."""

    def __init__(self, normal: Sequence[float], point: Sequence[float]):
        self.normal = _unit(normal)
        self.point = _as_vector(point)

    @classmethod
    def in_front_of(cls, camera: Camera, distance: float) -> 'CastingPlane':
        """Plane facing the camera, ``distance`` units along its forward axis."""
        return cls(camera.forward, camera.position + camera.forward * distance)

    def raycast(self, origin: Any, direction: Any) -> Optional[np.ndarray]:
        """Intersect a ray with the plane. Returns None if it misses."""
        origin = _as_vector(origin)
        direction = _as_vector(direction)
        denom = float(np.dot(self.normal, direction))
        if abs(denom) < EPSILON:
            return None

        t = float(np.dot(self.normal, self.point - origin)) / denom
        if t < 0:
            return None
        return origin + t * direction
