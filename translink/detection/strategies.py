"""
Local language detection strategies.

Each strategy answers `detect(text) -> Optional[str]` and returns None when
it has no opinion. LocalDetectionPipeline asks them in order:
script ratio, then diacritics, then stop-word frequency.
"""

import re
from typing import Dict, List, Optional, Sequence, Tuple

from translink.logger import get_logger
from translink.resources import load_table

logger = get_logger(__name__)

DEFAULT_LANGUAGE = "en"

# Script class -> (language, character ranges); checked in this order.
# Kana is checked before CJK ideographs: Japanese mixes both, Chinese has no kana.
SCRIPT_CLASSES: List[Tuple[str, str]] = [
    ("ru", "\u0400-\u04FF"),                          # Cyrillic
    ("ja", "\u3040-\u309F\u30A0-\u30FF"),             # Hiragana, Katakana
    ("ko", "\uAC00-\uD7AF\u1100-\u11FF"),             # Hangul
    ("zh", "\u4E00-\u9FFF\u3400-\u4DBF"),             # CJK ideographs
    ("ar", "\u0600-\u06FF"),                          # Arabic
]

SCRIPT_RATIO_THRESHOLD = 0.3
STOP_WORD_SAMPLE = 20

_WORD_PATTERN = re.compile(r"[^\W\d_]+")


class ScriptRatioDetector:
    """Guess the language from the share of characters in a writing system."""

    def __init__(self, script_classes: Sequence[Tuple[str, str]] = None,
                 threshold: float = SCRIPT_RATIO_THRESHOLD):
        self.threshold = threshold
        self.patterns = [
            (language, re.compile(f"[{ranges}]"))
            for language, ranges in (script_classes or SCRIPT_CLASSES)
        ]

    def ratios(self, text: str) -> Dict[str, float]:
        characters = [ch for ch in text if not ch.isspace()]
        if not characters:
            return {}
        total = len(characters)
        return {
            language: sum(1 for ch in characters if pattern.match(ch)) / total
            for language, pattern in self.patterns
        }

    def detect(self, text: str) -> Optional[str]:
        for language, ratio in self.ratios(text).items():
            if ratio > self.threshold:
                logger.debug(f"Script ratio detection: {language} ({ratio:.2f})")
                return language
        return None


class DiacriticDetector:
    """Guess the language from language-specific accented letters."""

    def __init__(self, table: List[Dict[str, str]] = None):
        if table is None:
            table = load_table("diacritics")
        self.patterns = [
            (entry["language"], re.compile(f"[{re.escape(entry['characters'])}]"))
            for entry in table
        ]

    def detect(self, text: str) -> Optional[str]:
        for language, pattern in self.patterns:
            if pattern.search(text):
                logger.debug(f"Diacritic detection: {language}")
                return language
        return None


class StopWordDetector:
    """Guess the language from the share of common function words."""

    def __init__(self, table: Dict[str, List[str]] = None, sample_size: int = STOP_WORD_SAMPLE):
        if table is None:
            table = load_table("stopwords")
        self.sample_size = sample_size
        self.stop_words = {language: frozenset(words) for language, words in table.items()}

    def scores(self, text: str) -> Dict[str, float]:
        words = _WORD_PATTERN.findall(text.lower())
        if not words:
            return {}
        sample = words[:self.sample_size]
        denominator = min(len(words), self.sample_size)
        return {
            language: sum(1 for word in sample if word in stop_words) / denominator
            for language, stop_words in self.stop_words.items()
        }

    def detect(self, text: str) -> Optional[str]:
        best_language = None
        best_score = 0.0
        for language, score in self.scores(text).items():
            # Strictly greater: ties keep the language checked first
            if score > best_score:
                best_language, best_score = language, score
        if best_language:
            logger.debug(f"Stop-word detection: {best_language} ({best_score:.2f})")
        return best_language


class LocalDetectionPipeline:
    """Run local strategies in order; the first opinion wins."""

    def __init__(self, strategies: Sequence = None, default_language: str = DEFAULT_LANGUAGE):
        if strategies is None:
            strategies = [ScriptRatioDetector(), DiacriticDetector(), StopWordDetector()]
        self.strategies = list(strategies)
        self.default_language = default_language

    def detect(self, text: str) -> str:
        for strategy in self.strategies:
            language = strategy.detect(text)
            if language:
                return language
        return self.default_language
