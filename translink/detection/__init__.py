"""
Detection module - source language guessing

This module provides:
- LanguageDetector: remote endpoint with local fallback
- Local strategies: script ratio, diacritics, stop words
"""

from translink.detection.detector import LanguageDetector
from translink.detection.strategies import (
    DEFAULT_LANGUAGE,
    DiacriticDetector,
    LocalDetectionPipeline,
    ScriptRatioDetector,
    StopWordDetector,
)

__all__ = [
    'LanguageDetector',
    'LocalDetectionPipeline',
    'ScriptRatioDetector',
    'DiacriticDetector',
    'StopWordDetector',
    'DEFAULT_LANGUAGE',
]
