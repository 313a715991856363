"""
Configuration for gesture matching, recording and display.
"""

from .settings import MatchConfig, RecorderConfig, DisplayConfig, RecognitionConfig

__all__ = ['MatchConfig', 'RecorderConfig', 'DisplayConfig', 'RecognitionConfig']
