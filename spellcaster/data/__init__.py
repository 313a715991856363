"""
Gesture patterns, spell definitions and their JSON loaders.
"""

from .patterns import GesturePattern, PatternLibrary
from .spells import SpellData, SpellEffect, Spellbook

__all__ = ['GesturePattern', 'PatternLibrary', 'SpellData', 'SpellEffect', 'Spellbook']
