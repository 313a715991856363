"""
Logging utilities for spell casts and gesture matching.
"""

import datetime
import logging
from typing import List, Optional, TextIO

from ..config.settings import CAST, FIZZLED
from .gesture_utils import Point

logger = logging.getLogger(__name__)


def log_points(header: str, points: List[Point]):
    """Log a point sequence at debug level, one line per point."""
    lines = [header]
    for i, point in enumerate(points):
        lines.append(f"  Point {i}: ({point.x:.3f}, {point.y:.3f})")
    logger.debug("\n".join(lines))


class CastLogger:
    """Handles console output of spell cast attempts."""

    def __init__(self, debug_file: Optional[str] = None, verbose: bool = True):
        self.verbose = verbose
        self.debug_file: Optional[TextIO] = None
        if debug_file:
            try:
                self.debug_file = open(debug_file, 'w')
                self.debug_file.write(f"Debug logging started at {datetime.datetime.now()}\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not open debug file: {e}")

    def _timestamp(self) -> str:
        return datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]

    def log_cast(self, result):
        """Log the outcome of a cast attempt."""
        timestamp = self._timestamp()
        status = result.status
        incantation = result.incantation

        if status == CAST:
            line = f"[{timestamp}] ✨ CAST: '{incantation}' [score {result.score:.2f}]"
        elif status == FIZZLED:
            line = f"[{timestamp}] 💨 FIZZLED: '{incantation}' [score {result.score:.2f}]"
        else:
            line = f"[{timestamp}] ❓ UNKNOWN INCANTATION: '{incantation}'"

        if self.verbose:
            print(line)
            if result.points_recorded:
                print(f"   Gesture points: {result.points_recorded}")

        logger.info(f"{status} '{incantation}' score={result.score:.3f}")
        self._write_debug(f"[{timestamp}] {result}\n")

    def log_recording(self, started: bool, point_count: int = 0):
        """Log the start or end of a gesture recording."""
        timestamp = self._timestamp()
        if self.verbose:
            if started:
                print(f"[{timestamp}] 🪄 RECORDING GESTURE")
            else:
                print(f"[{timestamp}] ✋ RECORDING STOPPED: {point_count} point(s)")

    def _write_debug(self, message: str):
        if not self.debug_file:
            return
        try:
            self.debug_file.write(message)
            self.debug_file.flush()
        except OSError as e:
            logger.warning(f"Could not write debug file: {e}")

    def close(self):
        """Close the debug file."""
        if self.debug_file:
            self.debug_file.close()
            self.debug_file = None
