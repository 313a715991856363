"""
Stored gesture patterns and the library that loads them from JSON.
"""

import json
import logging
import os
from typing import Dict, Iterator, List, Optional, Sequence

from ..utils.gesture_utils import DataValidator, PathUtils, Point

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS_PATH = os.path.join(os.path.dirname(__file__), 'patterns.json')


class GesturePattern:
    """
    A named, ordered sequence of 2D points defining a gesture shape.

    Points are conventionally centered on (0, 0) inside a -0.5 to 0.5
    range on both axes. The matcher re-normalizes them, so this is not
    enforced.
    """

    def __init__(self, name: str, points: Sequence):
        self.name = name
        self._points = tuple(PathUtils.to_points(points))

    @property
    def points(self) -> List[Point]:
        return list(self._points)

    def __len__(self):
        return len(self._points)

    def __repr__(self):
        return f"GesturePattern({self.name!r}, {len(self._points)} points)"

    def to_dict(self) -> Dict:
        return {'name': self.name, 'points': PathUtils.convert_points_to_dict(self.points)}


class PatternLibrary:
    """Collection of gesture patterns keyed by name."""

    def __init__(self, patterns: Optional[Sequence[GesturePattern]] = None):
        self._patterns: Dict[str, GesturePattern] = {}
        for pattern in patterns or []:
            self.add_pattern(pattern)

    def __len__(self):
        return len(self._patterns)

    def __iter__(self) -> Iterator[GesturePattern]:
        return iter(self._patterns.values())

    def __contains__(self, name: str) -> bool:
        return name in self._patterns

    @property
    def names(self) -> List[str]:
        return list(self._patterns)

    def get(self, name: str) -> Optional[GesturePattern]:
        return self._patterns.get(name)

    def add_pattern(self, pattern: GesturePattern):
        """Add a pattern, replacing any existing pattern with the same name."""
        if pattern.name in self._patterns:
            logger.info(f"Replacing pattern '{pattern.name}'")
        self._patterns[pattern.name] = pattern

    def save(self, filename: str):
        """Save patterns to file."""
        data = {'patterns': [p.to_dict() for p in self._patterns.values()]}
        with open(filename, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
        logger.info(f"Saved {len(self._patterns)} patterns to '{filename}'")

    def load(self, filename: str = DEFAULT_PATTERNS_PATH) -> int:
        """
        Load patterns from a JSON file, skipping invalid entries.

        Returns:
            Number of patterns loaded
        """
        if not os.path.exists(filename):
            logger.warning(f"Pattern file '{filename}' not found")
            return 0

        try:
            with open(filename, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Error loading patterns from '{filename}': {e}")
            return 0

        # Accept both a bare list and a dict with a 'patterns' key
        patterns_data = data.get('patterns', data) if isinstance(data, dict) else data
        if not isinstance(patterns_data, list):
            logger.error(f"Invalid pattern format in '{filename}'. Expected list of patterns.")
            return 0

        loaded = 0
        for i, item in enumerate(patterns_data):
            pattern = self._parse_pattern(i, item)
            if pattern is not None:
                self.add_pattern(pattern)
                loaded += 1

        if loaded:
            logger.info(f"Loaded {loaded} patterns from '{filename}'")
        else:
            logger.warning(f"No valid patterns found in '{filename}'")
        return loaded

    @staticmethod
    def _parse_pattern(index: int, item) -> Optional[GesturePattern]:
        if not isinstance(item, dict):
            logger.warning(f"Skipping pattern {index}: not a dictionary")
            return None

        if 'name' not in item or 'points' not in item:
            logger.warning(f"Skipping pattern {index}: missing 'name' or 'points' field")
            return None

        name = str(item['name']).strip()
        if not name:
            logger.warning(f"Skipping pattern {index}: empty name")
            return None

        points_data = item['points']
        if not isinstance(points_data, list):
            logger.warning(f"Skipping pattern '{name}': 'points' must be a list")
            return None

        if len(points_data) < 2:
            logger.warning(f"Skipping pattern '{name}': need at least 2 points")
            return None

        points = []
        for j, point_data in enumerate(points_data):
            try:
                points.append(DataValidator.parse_point_data(point_data))
            except (ValueError, TypeError) as e:
                logger.warning(f"Skipping pattern '{name}': invalid point {j} ({e})")
                return None

        return GesturePattern(name, points)

    @classmethod
    def from_file(cls, filename: str = DEFAULT_PATTERNS_PATH) -> 'PatternLibrary':
        library = cls()
        library.load(filename)
        return library
