from .display import DisplayMessage, SpellDisplayManager, to_screen_coords

__all__ = ['DisplayMessage', 'SpellDisplayManager', 'to_screen_coords']
