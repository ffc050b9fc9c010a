"""
Static phrase dictionary used when every provider has failed.

Lookup is exact (case-insensitive, whitespace-collapsed, trailing
punctuation ignored) and never raises: a miss returns the text unchanged.
"""

import re
from typing import Dict, Optional

from translink.logger import get_logger
from translink.resources import load_table
import translink.language_codes as lc

logger = get_logger(__name__)

_TRAILING_PUNCTUATION = ".!?,;:…"


def normalize_phrase(text: str) -> str:
    """Lowercase, collapse whitespace, drop trailing punctuation."""
    return re.sub(r"\s+", " ", text).strip().rstrip(_TRAILING_PUNCTUATION).strip().lower()


def match_capitalization(original: str, translated: str) -> str:
    """Reapply the original's leading-character capitalization to translated."""
    if not original or not translated:
        return translated
    leading = original.lstrip()[:1]
    if leading.isupper():
        return translated[:1].upper() + translated[1:]
    if leading.islower():
        return translated[:1].lower() + translated[1:]
    return translated


class DictionaryFallback:
    """Terminal fallback of the provider chain."""

    def __init__(self, phrases: Optional[Dict[str, Dict[str, str]]] = None):
        if phrases is None:
            phrases = load_table("dictionary")
        self.phrases = {
            normalize_phrase(phrase): {lc.normalize_language_code(lang): value for lang, value in targets.items()}
            for phrase, targets in phrases.items()
        }

    def lookup(self, text: str, to_language: str) -> str:
        """
        Translate text from the static table.

        Args:
            text: Source text
            to_language: Target language code

        Returns:
            The dictionary translation with the original's capitalization,
            or text unchanged on a miss
        """
        if not text or not text.strip():
            return text

        targets = self.phrases.get(normalize_phrase(text))
        if not targets:
            logger.debug(f"Dictionary miss for '{text[:50]}'")
            return text

        target = lc.normalize_language_code(to_language)
        translated = targets.get(target)
        if translated is None and target:
            translated = targets.get(lc.extract_base_language(target))
        if translated is None:
            logger.debug(f"Dictionary has '{text[:50]}' but not for {to_language}")
            return text

        # Keep the trailing punctuation the phrase key ignored
        stripped = text.strip()
        suffix = stripped[len(stripped.rstrip(_TRAILING_PUNCTUATION)):]
        logger.info(f"Dictionary fallback hit for '{text[:50]}' -> {to_language}")
        return match_capitalization(text, translated) + suffix
