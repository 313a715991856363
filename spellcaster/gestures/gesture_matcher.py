"""
Gesture Matcher Implementation

Scores a recorded gesture path against a stored pattern. This is a
simplified member of the $1 Unistroke Recognizer family: both sequences are
resampled by arc length, normalized to a canonical bounding box and then
compared point by point at matching indices.

There is no rotation search and no elastic alignment, so a shape drawn in
the opposite direction scores poorly against its own pattern unless the
caller opts into ``match_reversed``.

Reference: https://depts.washington.edu/acelab/proj/dollar/index.html
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from ..config.settings import MatchConfig, RecognitionConfig
from ..utils.gesture_utils import ORIGIN, GeometryUtils, PathUtils, Point
from ..utils.logger import log_points

logger = logging.getLogger(__name__)


@dataclass
class MatchResult:
    """Result of a match with score, average distance and timing."""
    score: float
    average_distance: float
    time_ms: float


def resample(points: Sequence[Point], n: int = MatchConfig.NUM_POINTS) -> List[Point]:
    """
    Resample a polyline to ``n`` points evenly spaced by arc length.

    Paths with fewer than 2 points are returned unchanged (as a new list).
    Paths with no length become ``n`` copies of their first point.
    """
    if n < 2:
        raise ValueError("resample count must be at least 2")

    points = list(points)
    if len(points) < 2:
        return points

    total_length = GeometryUtils.calculate_path_length(points)
    if total_length <= 0:
        return [points[0]] * n

    interval = total_length / (n - 1)
    covered = 0.0
    resampled = [points[0]]

    for i in range(1, len(points)):
        if len(resampled) >= n:
            break

        prev_point = points[i-1]
        curr_point = points[i]
        segment = GeometryUtils.calculate_distance(prev_point, curr_point)
        if segment > 0:
            # A long segment may hold several samples
            while covered + segment >= interval * len(resampled) and len(resampled) < n:
                t = (interval * len(resampled) - covered) / segment
                resampled.append(prev_point.lerp(curr_point, t))
        covered += segment

    # sometimes we fall a rounding-error short of the last point
    while len(resampled) < n:
        resampled.append(points[-1])

    return resampled


def normalize(points: Sequence[Point], square_size: float = MatchConfig.SQUARE_SIZE) -> List[Point]:
    """
    Scale and center points so the longer bounding-box side equals
    ``square_size`` and the box is centered on the origin.

    The aspect ratio is preserved. Zero-extent input maps every point to
    the origin.
    """
    if square_size <= 0:
        raise ValueError("square_size must be positive")

    points = list(points)
    if not points:
        return []

    min_x, max_x, min_y, max_y = PathUtils.get_path_bounds(points)
    scale = max(max_x - min_x, max_y - min_y)
    if not scale > MatchConfig.NORMALIZE_EPSILON:
        return [ORIGIN] * len(points)

    center_x = (min_x + max_x) / 2.0
    center_y = (min_y + max_y) / 2.0

    normalized = []
    for point in points:
        qx = (point.x - center_x) / scale * square_size
        qy = (point.y - center_y) / scale * square_size
        normalized.append(Point(qx, qy))

    return normalized


def average_distance(points: Sequence[Point], pattern_points: Sequence[Point]) -> float:
    """Average index-aligned Euclidean distance between two point sets."""
    if not points or len(points) != len(pattern_points):
        return float('inf')

    distance = 0.0
    for p1, p2 in zip(points, pattern_points):
        distance += math.sqrt((p1.x - p2.x) ** 2 + (p1.y - p2.y) ** 2)

    return distance / len(points)


def distance_to_score(distance: float, score_scale: float = MatchConfig.SCORE_SCALE) -> float:
    """Convert an average distance to a similarity score (0.0-1.0)."""
    if score_scale <= 0:
        raise ValueError("score_scale must be positive")
    if not math.isfinite(distance):
        return 0.0
    return min(1.0, max(1.0 - distance / score_scale, 0.0))


def score(points: Sequence[Point], pattern_points: Sequence[Point],
          score_scale: float = MatchConfig.SCORE_SCALE) -> float:
    """Score two normalized, equal-length point sequences."""
    return distance_to_score(average_distance(points, pattern_points), score_scale)


class GestureMatcher:
    """Matches captured gesture paths against stored patterns."""

    def __init__(self, config: Optional[RecognitionConfig] = None,
                 match_reversed: bool = False, debug: bool = False):
        """
        Initialize the matcher.

        Args:
            config: Resample count, square size and score scale. Defaults
                    to the values in MatchConfig.
            match_reversed: Also score the path drawn backwards and keep the
                    better score. Off by default, so direction matters.
            debug: Log normalized points and every per-index comparison.
        """
        self.config = config or RecognitionConfig()
        self.match_reversed = match_reversed
        self.debug = debug

    def recognize(self, path: Sequence[Any], pattern: Any, projector: Any = None) -> float:
        """
        Score a captured path against a pattern.

        Args:
            path: Captured points. 3D points need a projector; 2D points may
                  be Points, (x, y) tuples or {'x', 'y'} dicts.
            pattern: A GesturePattern or a plain sequence of 2D points.
            projector: Optional object with ``project(point3d) -> Point``.

        Returns:
            Similarity from 0.0 (no match) to 1.0 (identical shape)
        """
        return self.match(path, pattern, projector).score

    def match(self, path: Sequence[Any], pattern: Any, projector: Any = None) -> MatchResult:
        """Score a captured path against a pattern and return full details."""
        t0 = time.perf_counter()

        pattern_points = self._pattern_points(pattern)
        if len(path) < 2 or len(pattern_points) < 2:
            return MatchResult(0.0, float('inf'), (time.perf_counter() - t0) * 1000)

        path_points = self._project(path, projector)

        template = self._prepare(pattern_points)
        candidate = self._prepare(path_points)

        if self.debug:
            logger.debug("--- GESTURE MATCHER DEBUG ---")
            log_points("Normalized player gesture", candidate)
            log_points("Normalized pattern", template)

        distance = self._compare(candidate, template)
        if self.match_reversed:
            reversed_candidate = self._prepare(path_points[::-1])
            distance = min(distance, self._compare(reversed_candidate, template))

        result_score = distance_to_score(distance, self.config.score_scale)
        if self.debug:
            logger.debug(f"Average distance: {distance:.3f}, final score: {result_score:.3f}")

        return MatchResult(result_score, distance, (time.perf_counter() - t0) * 1000)

    def best_match(self, path: Sequence[Any], patterns: Iterable[Any],
                   projector: Any = None) -> Tuple[Optional[str], float]:
        """
        Score one path against several named patterns.

        Patterns without a ``name`` (plain point sequences) are reported
        by their index in ``patterns``.

        Returns:
            Tuple of (pattern_name, score) for the best match, or
            (None, 0.0) when no patterns are given
        """
        best_name = None
        best_score = -1.0
        path_points = self._project(path, projector) if len(path) >= 2 else list(path)

        for i, pattern in enumerate(patterns):
            pattern_score = self.recognize(path_points, pattern)
            if pattern_score > best_score:
                best_name = getattr(pattern, 'name', str(i))
                best_score = pattern_score

        if best_name is None:
            return None, 0.0

        return best_name, best_score

    def _prepare(self, points: List[Point]) -> List[Point]:
        """Resample and normalize a point sequence."""
        resampled = resample(points, self.config.num_points)
        return normalize(resampled, self.config.square_size)

    def _compare(self, points: List[Point], pattern_points: List[Point]) -> float:
        """Average per-index distance, logged point by point in debug mode."""
        if self.debug:
            total = 0.0
            for i, (p1, p2) in enumerate(zip(points, pattern_points)):
                d = p1.distance_to(p2)
                total += d
                logger.debug(f"  Compare point {i}: player({p1.x:.2f},{p1.y:.2f}) "
                             f"vs pattern({p2.x:.2f},{p2.y:.2f}), distance = {d:.3f}")
            logger.debug(f"Total distance: {total:.3f}")
        return average_distance(points, pattern_points)

    @staticmethod
    def _project(path: Sequence[Any], projector: Any) -> List[Point]:
        if projector is None:
            return PathUtils.to_points(path)
        return [PathUtils.to_point(projector.project(p)) for p in path]

    @staticmethod
    def _pattern_points(pattern: Any) -> List[Point]:
        points = getattr(pattern, 'points', pattern)
        return PathUtils.to_points(points)
