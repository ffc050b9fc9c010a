"""
Chunk processor tests
"""

import asyncio

from translink.translation.processor import translate_chunks_sequential
from translink.translation.segmenter import Chunk


class RecordingChain:
    """Chain stand-in that uppercases chunks and records the order of calls."""

    def __init__(self):
        self.calls = []

    async def translate_chunk(self, text, source, target):
        self.calls.append(text)
        return text.upper()


class TestTranslateChunksSequential:
    """translate_chunks_sequential tests"""

    def test_order_and_placeholders(self):
        chain = RecordingChain()
        chunks = [Chunk("first", "\n\n"), Chunk("", "\n\n"), Chunk("second", "")]

        results = asyncio.run(translate_chunks_sequential(chunks, "en", "es", chain))

        assert results == ["FIRST", "", "SECOND"]
        assert chain.calls == ["first", "second"]

    def test_empty(self):
        assert asyncio.run(translate_chunks_sequential([], "en", "es", RecordingChain())) == []
