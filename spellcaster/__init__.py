"""
Spellcaster Package
Voice and gesture spellcasting: records a freehand gesture, scores it
against stored patterns and casts the spell named by the incantation.
"""

from .core.caster import SpellCaster, CastResult
from .gestures.gesture_matcher import GestureMatcher, MatchResult
from .data.spells import Spellbook

__version__ = "0.1.0"
__all__ = ["SpellCaster", "CastResult", "GestureMatcher", "MatchResult", "Spellbook"]
