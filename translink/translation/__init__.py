"""
Translation module - Core translation functionality

This module provides:
- Segmenter, validator, dictionary fallback and result cache
- Formatting reconstruction and cleanup rules
- Processing utilities for chunk-based translation
- Translation history

TranslationManager lives in translink.translation.manager and is exported
from the top-level package.
"""

from translink.translation.cache import ResultCache, make_cache_key
from translink.translation.dictionary import DictionaryFallback
from translink.translation.formatting import (
    DEFAULT_RULES,
    OCR_CLEANUP_RULES,
    postprocess,
    reconstruct,
)
from translink.translation.history import HistoryEntry, TranslationHistory
from translink.translation.segmenter import Chunk, segment, split_sentences
from translink.translation.validator import is_translation_valid
