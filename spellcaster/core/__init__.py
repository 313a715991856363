from .caster import CastResult, SpellCaster

__all__ = ['CastResult', 'SpellCaster']
