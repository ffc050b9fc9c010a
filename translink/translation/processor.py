"""
Translation Processing Module

Contains functions for processing translation chunks:
- Sequential chunk translation, in chunk order
- Placeholder chunks passed through untranslated
"""

from typing import List, Sequence

from translink.logger import get_logger
from translink.translation.segmenter import Chunk

logger = get_logger(__name__)


async def translate_chunks_sequential(
    chunks: Sequence[Chunk],
    source_lang: str,
    target_lang: str,
    chain,
) -> List[str]:
    """
    Translate chunks one at a time, in order.

    Returns one translated text per chunk (same order as input chunks).
    Placeholder chunks come back verbatim.

    Args:
        chunks: Chunks produced by segment()
        source_lang: Source language code
        target_lang: Target language code
        chain: ProviderChain (anything with an async translate_chunk)

    Returns:
        List of translated texts, one per chunk
    """
    results: List[str] = []
    total = len(chunks)

    for chunk_idx, chunk in enumerate(chunks):
        if chunk.is_placeholder:
            results.append(chunk.text)
            continue

        logger.debug(f"Chunk {chunk_idx + 1}/{total}: Starting translation of {len(chunk.text)} chars")
        results.append(await chain.translate_chunk(chunk.text, source_lang, target_lang))
        logger.debug(f"Chunk {chunk_idx + 1}/{total}: Translation completed")

    return results
