"""
Spell caster that coordinates gesture recording, matching and display.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Optional

from ..config.settings import CAST, FIZZLED, UNKNOWN_INCANTATION, RecognitionConfig
from ..data.spells import SpellData, Spellbook
from ..gestures.gesture_matcher import GestureMatcher
from ..gestures.gesture_recorder import GestureRecorder
from ..gestures.projection import Camera
from ..ui.display import SpellDisplayManager
from ..utils.logger import CastLogger

logger = logging.getLogger(__name__)


@dataclass
class CastResult:
    """Outcome of one cast attempt."""
    status: str
    incantation: str
    score: float = 0.0
    spell: Optional[SpellData] = None
    points_recorded: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status == CAST


class SpellCaster:
    """
    Runs the casting loop: record a gesture while the cast button is held,
    then validate the spoken incantation and the gesture when it is released.
    """

    def __init__(self, spellbook: Spellbook, camera: Camera,
                 config: Optional[RecognitionConfig] = None,
                 display: Optional[SpellDisplayManager] = None,
                 recorder: Optional[GestureRecorder] = None,
                 cast_logger: Optional[CastLogger] = None):
        self.spellbook = spellbook
        self.camera = camera
        self.config = config or RecognitionConfig()
        self.matcher = GestureMatcher(self.config)
        self.display = display or SpellDisplayManager()
        self.recorder = recorder or GestureRecorder(camera)
        self.cast_logger = cast_logger or CastLogger(verbose=False)

        self.state_lock = threading.Lock()

    @property
    def is_casting(self) -> bool:
        return self.recorder.is_recording

    def begin_cast(self):
        """Enter casting mode and start recording the gesture."""
        with self.state_lock:
            if self.recorder.is_recording:
                return
            self.recorder.start_recording()
        self.cast_logger.log_recording(started=True)

    def record_point(self, world_point: Any) -> bool:
        """Feed a world-space cursor position to the recorder."""
        with self.state_lock:
            return self.recorder.add_point(world_point)

    def record_screen_point(self, screen_point: Any) -> bool:
        """Feed a screen-space cursor position to the recorder."""
        with self.state_lock:
            return self.recorder.add_screen_point(screen_point)

    def end_cast(self, incantation: str, now: Optional[float] = None) -> CastResult:
        """
        Stop recording and validate the attempt.

        Args:
            incantation: Text of the spoken incantation.
            now: Timestamp for the display message; defaults to the monotonic clock.

        Returns:
            CastResult describing whether the spell was cast. Without an
            active cast the attempt fizzles with no points.
        """
        with self.state_lock:
            if not self.recorder.is_recording:
                logger.warning(f"end_cast('{incantation}') called without an active cast")
                return CastResult(FIZZLED, incantation)
            self.recorder.stop_recording()
            path = self.recorder.take_path()
        self.cast_logger.log_recording(started=False, point_count=len(path))

        spell = self.spellbook.get(incantation)
        if spell is None:
            result = CastResult(UNKNOWN_INCANTATION, incantation, points_recorded=len(path))
            self.cast_logger.log_cast(result)
            return result

        score = self.matcher.recognize(path, spell.gesture_pattern, self.camera)
        if score >= self.config.match_threshold:
            result = CastResult(CAST, incantation, score, spell, len(path))
            self.display.display(spell.primary_effect, now)
        else:
            result = CastResult(FIZZLED, incantation, score, spell, len(path))

        self.cast_logger.log_cast(result)
        return result
