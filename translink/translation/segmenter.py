"""
Text segmentation for provider payload limits.

Free endpoints reject or truncate long queries, so text over the chunk
budget is cut at paragraph and sentence boundaries. Every chunk keeps the
whitespace that followed it, which makes segmentation lossless:

    "".join(chunk.text + chunk.delimiter for chunk in segment(text)) == text.strip()
"""

import re
from dataclasses import dataclass
from typing import List, Tuple

from translink.config import DEFAULT_CHUNK_SIZE

# Abbreviations whose periods never end a sentence
ABBREVIATIONS = [
    "Mr.", "Mrs.", "Ms.", "Dr.", "Prof.", "Sr.", "Jr.", "St.",
    "Inc.", "Ltd.", "Co.", "Corp.", "vs.", "etc.",
    "e.g.", "i.e.", "U.S.", "U.K.", "Ph.D.", "a.m.", "p.m.",
]

# Abbreviation periods are masked with one private-use character, so
# masking keeps string offsets intact
_PRIVATE_USE = range(0xE000, 0xF900)

_ABBREVIATION_PATTERNS = [
    re.compile(r"(?<![^\W\d_])" + re.escape(abbr))
    for abbr in sorted(ABBREVIATIONS, key=len, reverse=True)
]

_SENTENCE_END = re.compile(r"[.!?]+(\s+|$)")
_PARAGRAPH_BREAK = re.compile(r"[ \t]*\n[ \t]*\n\s*")


@dataclass
class Chunk:
    """A slice of the trimmed input plus the whitespace that followed it."""
    text: str
    delimiter: str = ""

    @property
    def is_placeholder(self) -> bool:
        """Whitespace-only chunks keep structure and are never translated."""
        return not self.text.strip()


def period_mask_for(text: str) -> str:
    """Pick a private-use character that does not occur in text."""
    for codepoint in _PRIVATE_USE:
        if chr(codepoint) not in text:
            return chr(codepoint)
    raise ValueError("Text uses every private-use character; cannot mask abbreviations")


def mask_abbreviations(text: str, mask: str) -> str:
    for pattern in _ABBREVIATION_PATTERNS:
        text = pattern.sub(lambda match: match.group(0).replace(".", mask), text)
    return text


def unmask_abbreviations(text: str, mask: str) -> str:
    return text.replace(mask, ".")


def split_sentences(text: str) -> List[Tuple[str, str]]:
    """
    Split text into sentences, keeping the whitespace after each one.

    A boundary is a run of [.!?] followed by whitespace and an uppercase
    letter, or by the end of the text. Periods of known abbreviations are
    masked first so "Dr. Smith" stays in one sentence.

    Args:
        text: Text to split

    Returns:
        List of (sentence, trailing_whitespace) tuples

    Example:
        >>> split_sentences("Dr. Smith went home. He was tired.")
        [('Dr. Smith went home.', ' '), ('He was tired.', '')]
    """
    if not text:
        return []

    mask = period_mask_for(text)
    masked = mask_abbreviations(text, mask)
    sentences: List[Tuple[str, str]] = []
    start = 0

    for match in _SENTENCE_END.finditer(masked):
        end_of_text = match.end() == len(masked)
        if not end_of_text and not masked[match.end()].isupper():
            continue
        punctuation_end = match.start(1)
        sentences.append((
            unmask_abbreviations(masked[start:punctuation_end], mask),
            masked[punctuation_end:match.end()],
        ))
        start = match.end()

    if start < len(masked):
        sentences.append((unmask_abbreviations(masked[start:], mask), ""))

    return sentences


def split_paragraphs(text: str) -> List[Tuple[str, str]]:
    """
    Split text on blank lines.

    Returns:
        List of (paragraph, following_break) tuples; the break keeps the
        exact original whitespace
    """
    paragraphs: List[Tuple[str, str]] = []
    start = 0
    for match in _PARAGRAPH_BREAK.finditer(text):
        paragraphs.append((text[start:match.start()], match.group(0)))
        start = match.end()
    paragraphs.append((text[start:], ""))
    return paragraphs


def pack_sentences(sentences: List[Tuple[str, str]], chunk_size: int) -> List[Chunk]:
    """
    Greedily pack sentences into chunks no longer than chunk_size.

    A sentence longer than chunk_size on its own becomes its own chunk.
    """
    chunks: List[Chunk] = []
    current = ""
    current_delimiter = ""

    for sentence, whitespace in sentences:
        if not current:
            current, current_delimiter = sentence, whitespace
            continue

        candidate = current + current_delimiter + sentence
        if len(candidate) > chunk_size:
            chunks.append(Chunk(current, current_delimiter))
            current, current_delimiter = sentence, whitespace
        else:
            current, current_delimiter = candidate, whitespace

    if current or current_delimiter:
        chunks.append(Chunk(current, current_delimiter))

    return chunks


def segment(text: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> List[Chunk]:
    """
    Split text into boundary-respecting chunks within a size budget.

    Args:
        text: Text to segment (trimmed before splitting)
        chunk_size: Character budget per chunk

    Returns:
        Ordered chunks; concatenating text + delimiter of each chunk
        reproduces the trimmed input
    """
    trimmed = text.strip()
    if len(trimmed) < chunk_size:
        return [Chunk(trimmed, "")]

    chunks: List[Chunk] = []
    for paragraph, paragraph_break in split_paragraphs(trimmed):
        if len(paragraph) <= chunk_size:
            chunks.append(Chunk(paragraph, paragraph_break))
            continue

        paragraph_chunks = pack_sentences(split_sentences(paragraph), chunk_size)
        if not paragraph_chunks:
            chunks.append(Chunk("", paragraph_break))
            continue
        last = paragraph_chunks[-1]
        last.delimiter += paragraph_break
        chunks.extend(paragraph_chunks)

    return chunks
