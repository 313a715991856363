"""
Spell definitions and the spellbook that indexes them by incantation.

The spellbook is an explicit context object: build one, load it, and hand
it to whichever component needs spell lookups.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..config.settings import DisplayConfig
from .patterns import DEFAULT_PATTERNS_PATH, GesturePattern, PatternLibrary

logger = logging.getLogger(__name__)

DEFAULT_SPELLS_PATH = os.path.join(os.path.dirname(__file__), 'spells.json')


@dataclass
class SpellEffect:
    """A text effect displayed on screen when a spell is cast."""
    message: str = DisplayConfig.MESSAGE
    font_size: int = DisplayConfig.FONT_SIZE
    lifetime: float = DisplayConfig.LIFETIME
    screen_position: Tuple[float, float] = DisplayConfig.SCREEN_POSITION

    @classmethod
    def from_dict(cls, data: Dict) -> 'SpellEffect':
        position = data.get('screen_position', DisplayConfig.SCREEN_POSITION)
        return cls(
            message=str(data.get('message', DisplayConfig.MESSAGE)),
            font_size=int(data.get('font_size', DisplayConfig.FONT_SIZE)),
            lifetime=float(data.get('lifetime', DisplayConfig.LIFETIME)),
            screen_position=(float(position[0]), float(position[1]))
        )

    def to_dict(self) -> Dict:
        return {
            'message': self.message,
            'font_size': self.font_size,
            'lifetime': self.lifetime,
            'screen_position': list(self.screen_position)
        }


@dataclass
class SpellData:
    """Links an incantation, its gesture pattern and the resulting effect."""
    incantation: str
    gesture_pattern: GesturePattern
    primary_effect: SpellEffect = field(default_factory=SpellEffect)


def normalize_incantation(text: str) -> str:
    """Canonical lookup key for a spoken or typed incantation."""
    return " ".join(text.split()).lower()


class Spellbook:
    """Database of spells keyed by incantation."""

    def __init__(self, patterns: Optional[PatternLibrary] = None):
        self.patterns = patterns if patterns is not None else PatternLibrary()
        self._spells: Dict[str, SpellData] = {}

    def __len__(self):
        return len(self._spells)

    def __contains__(self, incantation: str) -> bool:
        return normalize_incantation(incantation) in self._spells

    @property
    def incantations(self) -> List[str]:
        return [spell.incantation for spell in self._spells.values()]

    @property
    def spells(self) -> List[SpellData]:
        return list(self._spells.values())

    def get(self, incantation: str) -> Optional[SpellData]:
        return self._spells.get(normalize_incantation(incantation))

    def add_spell(self, spell: SpellData) -> bool:
        """
        Add a spell. The first spell registered for an incantation wins.

        Returns:
            True if the spell was added
        """
        key = normalize_incantation(spell.incantation)
        if not key:
            logger.warning("Ignoring spell with an empty incantation")
            return False
        if key in self._spells:
            logger.warning(f"Duplicate incantation found for '{spell.incantation}'. "
                           f"The later spell will be ignored.")
            return False
        self._spells[key] = spell
        return True

    def load(self, filename: str = DEFAULT_SPELLS_PATH) -> int:
        """
        Load spells from a JSON file. Pattern names are resolved against
        this spellbook's pattern library.

        Returns:
            Number of spells loaded
        """
        if not os.path.exists(filename):
            logger.warning(f"Spell file '{filename}' not found")
            return 0

        try:
            with open(filename, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Error loading spells from '{filename}': {e}")
            return 0

        spells_data = data.get('spells', data) if isinstance(data, dict) else data
        if not isinstance(spells_data, list):
            logger.error(f"Invalid spell format in '{filename}'. Expected list of spells.")
            return 0

        loaded = 0
        for i, item in enumerate(spells_data):
            spell = self._parse_spell(i, item)
            if spell is not None and self.add_spell(spell):
                loaded += 1

        logger.info(f"Loaded {loaded} spells into the spellbook")
        return loaded

    def _parse_spell(self, index: int, item) -> Optional[SpellData]:
        if not isinstance(item, dict):
            logger.warning(f"Skipping spell {index}: not a dictionary")
            return None

        incantation = str(item.get('incantation', '')).strip()
        if not incantation:
            logger.warning(f"Skipping spell {index}: missing incantation")
            return None

        pattern_name = item.get('pattern')
        if not isinstance(pattern_name, str):
            logger.warning(f"Skipping spell '{incantation}': 'pattern' must be a name")
            return None
        pattern = self.patterns.get(pattern_name)
        if pattern is None:
            logger.warning(f"Skipping spell '{incantation}': unknown pattern '{pattern_name}'")
            return None

        effect_data = item.get('effect', {})
        if not isinstance(effect_data, dict):
            logger.warning(f"Skipping spell '{incantation}': 'effect' must be a dictionary")
            return None

        try:
            effect = SpellEffect.from_dict(effect_data)
        except (ValueError, TypeError, IndexError, AttributeError) as e:
            logger.warning(f"Skipping spell '{incantation}': invalid effect ({e})")
            return None

        return SpellData(incantation, pattern, effect)

    @classmethod
    def from_files(cls, spells_file: str = DEFAULT_SPELLS_PATH,
                   patterns_file: str = DEFAULT_PATTERNS_PATH) -> 'Spellbook':
        """Build a spellbook from a spell file and a pattern file."""
        spellbook = cls(PatternLibrary.from_file(patterns_file))
        spellbook.load(spells_file)
        return spellbook
