"""
Shared utilities for gesture recognition and processing.

This module provides the point type and the small geometric helpers used
by the matcher, the recorder and the pattern loaders.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple


@dataclass(frozen=True)
class Point:
    """Represents an immutable 2D point."""
    x: float
    y: float

    def __repr__(self):
        return f"Point({self.x:.3f}, {self.y:.3f})"

    def distance_to(self, other: 'Point') -> float:
        """Calculate Euclidean distance to another point."""
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)

    def lerp(self, other: 'Point', t: float) -> 'Point':
        """Linearly interpolate towards another point."""
        return Point(self.x + t * (other.x - self.x), self.y + t * (other.y - self.y))


ORIGIN = Point(0.0, 0.0)


class GeometryUtils:
    """Utility class for geometric calculations."""

    @staticmethod
    def calculate_distance(p1: Point, p2: Point) -> float:
        """Calculate Euclidean distance between two points."""
        return math.sqrt((p1.x - p2.x) ** 2 + (p1.y - p2.y) ** 2)

    @staticmethod
    def calculate_path_length(points: List[Point]) -> float:
        """Calculate total path length."""
        if len(points) < 2:
            return 0.0

        length = 0.0
        for i in range(1, len(points)):
            length += GeometryUtils.calculate_distance(points[i-1], points[i])
        return length


class PathUtils:
    """Utility class for path processing."""

    @staticmethod
    def to_point(value: Any) -> Point:
        """
        Coerce a single 2D point value into a Point.

        Accepts Point instances, {'x', 'y'} dicts (the touch capture format)
        and (x, y) sequences. Extra components such as a timestamp or a z
        coordinate are ignored.
        """
        if isinstance(value, Point):
            return value
        if isinstance(value, dict):
            return Point(float(value['x']), float(value['y']))
        x, y = value[0], value[1]
        return Point(float(x), float(y))

    @staticmethod
    def to_points(path: Iterable[Any]) -> List[Point]:
        """Convert a path of mixed point values to Point objects."""
        return [PathUtils.to_point(p) for p in path]

    @staticmethod
    def convert_points_to_dict(points: List[Point]) -> List[Dict[str, float]]:
        """Convert Point objects to dict format."""
        return [{'x': p.x, 'y': p.y} for p in points]

    @staticmethod
    def get_path_bounds(points: List[Point]) -> Tuple[float, float, float, float]:
        """Get bounding box of a path as (min_x, max_x, min_y, max_y)."""
        if not points:
            return 0.0, 0.0, 0.0, 0.0

        min_x = min(p.x for p in points)
        max_x = max(p.x for p in points)
        min_y = min(p.y for p in points)
        max_y = max(p.y for p in points)

        return min_x, max_x, min_y, max_y


class DataValidator:
    """Utility class for validating stored point data."""

    @staticmethod
    def parse_point_data(point_data: Any) -> Point:
        """
        Parse one stored point, either {'x': .., 'y': ..} or [x, y].

        Raises ValueError or TypeError when the entry cannot be read.
        """
        if isinstance(point_data, dict):
            if 'x' not in point_data or 'y' not in point_data:
                raise ValueError("point is missing 'x' or 'y'")
            x, y = float(point_data['x']), float(point_data['y'])
        elif isinstance(point_data, (list, tuple)) and len(point_data) == 2:
            x, y = float(point_data[0]), float(point_data[1])
        else:
            raise TypeError(f"unsupported point entry: {point_data!r}")

        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError("point coordinates must be finite")
        return Point(x, y)
