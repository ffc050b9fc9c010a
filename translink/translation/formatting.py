"""
Formatting reconstruction and text cleanup rules.

Cleanup is an ordered list of pure str -> str rules so each rule can be
tested and toggled on its own. DEFAULT_RULES run on every translation;
OCR_CLEANUP_RULES rewrite characters and only run when explicitly enabled.
"""

import re
from typing import Callable, List, Sequence

from translink.translation.segmenter import (
    Chunk,
    mask_abbreviations,
    period_mask_for,
    split_sentences,
    unmask_abbreviations,
)

TextRule = Callable[[str], str]

_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_LINE_SPLIT = re.compile(r"(\r?\n)")


def collapse_newlines(text: str) -> str:
    """Collapse 3 or more consecutive newlines to exactly two."""
    return _EXCESS_NEWLINES.sub("\n\n", text)


def reconstruct(chunks: Sequence[Chunk], translations: Sequence[str]) -> str:
    """
    Join translated chunks back together with their original delimiters.

    Placeholder (whitespace-only) chunks are emitted verbatim regardless of
    what translations holds for them.

    Args:
        chunks: Chunks produced by segment()
        translations: One translated text per chunk, same order

    Returns:
        Joined text with excess blank lines collapsed
    """
    if len(chunks) != len(translations):
        raise ValueError(f"Expected {len(chunks)} translations, got {len(translations)}")

    parts: List[str] = []
    for chunk, translated in zip(chunks, translations):
        parts.append(chunk.text if chunk.is_placeholder else translated)
        parts.append(chunk.delimiter)
    return collapse_newlines("".join(parts))


def split_whitespace(text: str):
    """Return (leading_whitespace, core, trailing_whitespace)."""
    core = text.strip()
    if not core:
        return text, "", ""
    leading = text[:len(text) - len(text.lstrip())]
    trailing = text[len(text.rstrip()):]
    return leading, core, trailing


def _map_lines(text: str, func: Callable[[str], str]) -> str:
    """Apply func to every line while keeping the line breaks untouched."""
    parts = _LINE_SPLIT.split(text)
    return "".join(part if _LINE_SPLIT.fullmatch(part) else func(part) for part in parts)


def _normalize_sentence(sentence: str) -> str:
    return re.sub(r"\s+", " ", sentence).strip().lower()


def remove_duplicate_sentences(text: str) -> str:
    """Drop every sentence whose normalized form was already emitted."""
    seen = set()

    def dedupe_line(line: str) -> str:
        kept: List[str] = []
        dropped = False
        for sentence, whitespace in split_sentences(line):
            normalized = _normalize_sentence(sentence)
            if normalized and normalized in seen:
                dropped = True
                continue
            if normalized:
                seen.add(normalized)
            kept.append(sentence + whitespace)
        result = "".join(kept)
        if dropped and not line[-1:].isspace():
            result = result.rstrip()
        return result

    return _map_lines(text, dedupe_line)


def capitalize_sentences(text: str) -> str:
    """Uppercase the first letter of the text and of every sentence."""
    def upper(match: re.Match) -> str:
        return match.group(1) + match.group(2).upper()

    # A line break inside a sentence does not start a new one
    mask = period_mask_for(text)
    masked = mask_abbreviations(text, mask)
    masked = re.sub(r"\A(\s*)([^\W\d_])", upper, masked)
    masked = re.sub(r"([.!?]\s+)([^\W\d_])", upper, masked)
    return unmask_abbreviations(masked, mask)


def _space_after_terminator(match: re.Match) -> str:
    if match.group(2).isupper():
        return match.group(1) + " " + match.group(2)
    return match.group(0)


def normalize_punctuation_spacing(text: str) -> str:
    """
    Fix spacing around punctuation.

    - no space before , . ; : ! ?
    - exactly one space after a sentence terminator that precedes a word
    - runs of spaces/tabs collapse to one space (line breaks are kept)
    """
    mask = period_mask_for(text)
    masked = mask_abbreviations(text, mask)
    masked = re.sub(r"[ \t]+([,.;:!?])", r"\1", masked)
    masked = re.sub(r"([.!?])[ \t]{2,}(?=\S)", r"\1 ", masked)
    # "end.Next" -> "end. Next"; lowercase after the period is left alone (example.com)
    masked = re.sub(r"([^\W\d_]{2}[.!?])([^\W\d_])", _space_after_terminator, masked)
    masked = re.sub(r"[ \t]{2,}", " ", masked)
    return unmask_abbreviations(masked, mask)


def fix_rn_as_m(text: str) -> str:
    """OCR cleanup: 'rn' inside a word ('cornputer') becomes 'm'. Corrupts words like 'turning'."""
    return re.sub(r"(?<=[a-z])rn(?=[a-z])", "m", text)


def fix_lone_zero(text: str) -> str:
    """OCR cleanup: a lone '0' between letters-only words becomes 'O'."""
    return re.sub(r"(?<=[A-Za-z] )0(?= [A-Za-z])", "O", text)


def fix_lone_one(text: str) -> str:
    """OCR cleanup: a lone '1' used as a word becomes 'I'."""
    return re.sub(r"(?<![\w.,])1(?= [a-z])", "I", text)


DEFAULT_RULES: List[TextRule] = [
    remove_duplicate_sentences,
    capitalize_sentences,
    normalize_punctuation_spacing,
]

OCR_CLEANUP_RULES: List[TextRule] = [
    fix_rn_as_m,
    fix_lone_zero,
    fix_lone_one,
]


def apply_rules(text: str, rules: Sequence[TextRule]) -> str:
    for rule in rules:
        text = rule(text)
    return text


def postprocess(text: str, rules: Sequence[TextRule] = None) -> str:
    """Run the cleanup rules over a reconstructed translation."""
    if not text:
        return text
    return apply_rules(text, DEFAULT_RULES if rules is None else rules)
