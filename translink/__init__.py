"""
translink - multi-provider translation relay

Routes text through free translation endpoints with validation, fallback
and caching. Entry point: TranslationManager.
"""

from translink.translation.manager import (
    TextExtractor,
    TranslationManager,
    TranslationRequest,
    TranslationResult,
)

__version__ = "1.0.0"

__all__ = [
    'TranslationManager',
    'TranslationRequest',
    'TranslationResult',
    'TextExtractor',
]
