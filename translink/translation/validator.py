"""
Translation Validation Module

Contains the quality checks a provider's candidate must pass before the
fallback chain accepts it:
- Non-empty output
- No unchanged echo of substantial source text
- No repetition garbage
- No provider error notices masquerading as translations
"""

import re
from typing import List, Optional, Pattern, Tuple

from translink.logger import get_logger
import translink.language_codes as lc

logger = get_logger(__name__)

# Echoes of sources this short are plausible translations ("OK", "no", "TV")
MAX_ECHO_LENGTH = 3

# Repetition check thresholds
MIN_WORDS_FOR_REPETITION_CHECK = 4
MIN_UNIQUE_WORD_RATIO = 0.7

# Notices free endpoints return in place of a translation
PROVIDER_ERROR_PATTERNS: List[Pattern] = [
    re.compile(r"MYMEMORY WARNING", re.IGNORECASE),
    re.compile(r"YOU USED ALL AVAILABLE FREE TRANSLATIONS", re.IGNORECASE),
    re.compile(r"QUOTA\s+EXCEEDED", re.IGNORECASE),
    re.compile(r"TOO MANY REQUESTS", re.IGNORECASE),
    re.compile(r"INVALID LANGUAGE PAIR", re.IGNORECASE),
    re.compile(r"PLEASE SELECT TWO DISTINCT LANGUAGES", re.IGNORECASE),
    re.compile(r"QUERY LENGTH LIMIT EXCEEDED", re.IGNORECASE),
    re.compile(r"^\s*\[?error\]?\s*[:\]]", re.IGNORECASE),
    re.compile(r"</?error>", re.IGNORECASE),
]

_NUMERIC_PATTERN = re.compile(r"[\d\s.,:;+\-/%()]+")


def is_proper_noun(text: str) -> bool:
    """
    Check whether text looks like a proper noun: one or more capitalized words.

    Examples:
        >>> is_proper_noun("London")
        True
        >>> is_proper_noun("New York")
        True
        >>> is_proper_noun("translate this")
        False
    """
    words = text.split()
    if not words:
        return False
    for word in words:
        if not word.isalpha():
            return False
        if not word[0].isupper():
            return False
        if len(word) > 1 and not word[1:].islower():
            return False
    return True


def is_numeric(text: str) -> bool:
    """Check whether text holds only digits and number punctuation."""
    stripped = text.strip()
    return bool(stripped) and any(ch.isdigit() for ch in stripped) and bool(_NUMERIC_PATTERN.fullmatch(stripped))


def echo_allowed(source_text: str, source_lang: Optional[str] = None, target_lang: Optional[str] = None) -> bool:
    """Decide whether returning the source unchanged is an acceptable translation."""
    source = source_text.strip()
    if len(source) <= MAX_ECHO_LENGTH:
        return True
    if is_proper_noun(source):
        return True
    if is_numeric(source):
        return True
    if source_lang and target_lang and lc.languages_match(source_lang, target_lang, strict=True):
        return True
    return False


def unique_word_ratio(text: str) -> float:
    words = [w.lower() for w in text.split()]
    if not words:
        return 1.0
    return len(set(words)) / len(words)


def find_provider_error(text: str) -> Optional[str]:
    """Return the matched provider error marker, if any."""
    for pattern in PROVIDER_ERROR_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(0).strip()
    return None


def is_translation_valid(
    source_text: str,
    translated_text: str,
    source_lang: Optional[str] = None,
    target_lang: Optional[str] = None,
) -> Tuple[bool, Optional[str]]:
    """
    Unified validation for provider candidates.

    Validation philosophy: the router cannot judge linguistic quality.
    Only check for the obvious ways free endpoints fail while still answering.

    Checks:
    1. Not empty - Translation must contain actual content
    2. Not an echo - Unchanged source is only fine for short tokens,
       proper nouns, numbers, or same-language requests
    3. Not repetitive - Word loops are a known garbage pattern
    4. Not an error notice - Quota and warning texts are rejected

    Args:
        source_text: Original source text
        translated_text: Candidate translation
        source_lang: Source language code
        target_lang: Target language code

    Returns:
        Tuple of (is_valid: bool, error_reason: Optional[str])
    """
    # Check 1: Not empty
    if not translated_text or not translated_text.strip():
        return False, "empty"

    # Check 2: Echo of the source
    if translated_text.strip().lower() == (source_text or "").strip().lower():
        if not echo_allowed(source_text or "", source_lang, target_lang):
            return False, "identical_to_source"

    # Check 3: Repetition
    word_count = len(translated_text.split())
    if word_count >= MIN_WORDS_FOR_REPETITION_CHECK:
        ratio = unique_word_ratio(translated_text)
        if ratio < MIN_UNIQUE_WORD_RATIO:
            return False, f"repetitive:{ratio:.2f}"

    # Check 4: Provider error markers
    marker = find_provider_error(translated_text)
    if marker:
        return False, f"provider_error:{marker}"

    return True, None
