"""
Translation Manager Module

Main TranslationManager class that coordinates the translation workflow:
- Normalize the request and short-circuit trivial ones
- Detect the source language when asked for 'auto'
- Segment, translate chunk by chunk through the provider chain
- Reconstruct, clean up and memoize the result
- Restore the caller's leading/trailing whitespace
"""

import asyncio
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, List, Optional, Protocol, Tuple

import httpx

from translink.config import DEFAULT_CACHE_SIZE, DEFAULT_CHUNK_SIZE, DEFAULT_HISTORY_SIZE, load_config
from translink.detection import LanguageDetector
from translink.logger import get_logger
from translink.providers.chain import ProviderChain
from translink.providers.exceptions import TextExtractionError, TranslationError
from translink.translation.cache import ResultCache, make_cache_key
from translink.translation.formatting import (
    OCR_CLEANUP_RULES,
    apply_rules,
    postprocess,
    reconstruct,
    split_whitespace,
)
from translink.translation.history import (
    SOURCE_IMAGE,
    SOURCE_TEXT,
    HistoryEntry,
    TranslationHistory,
)
from translink.translation.processor import translate_chunks_sequential
from translink.translation.segmenter import segment
import translink.language_codes as lc

logger = get_logger(__name__)


class TextExtractor(Protocol):
    """Image-to-text collaborator (OCR)."""

    def extract_text(self, image_bytes: bytes) -> str:
        """Return the text found in the image, raising TextExtractionError when there is none."""
        ...


@dataclass
class TranslationRequest:
    """One translate call; codes are normalized on construction."""
    text: str
    from_language: str = lc.AUTO
    to_language: str = "en"

    def __post_init__(self):
        if self.text is None:
            self.text = ""
        if not isinstance(self.text, str):
            raise TranslationError("Text must be a string", code="invalid_text")

        self.from_language = lc.normalize_language_code(self.from_language) or lc.AUTO
        self.to_language = lc.normalize_language_code(self.to_language)
        if not self.to_language or lc.is_auto(self.to_language):
            raise TranslationError(
                "Target language must be a concrete language code, not 'auto'",
                code="invalid_target_language",
                details={"to_language": self.to_language},
            )


@dataclass
class TranslationResult:
    """Outcome of a translation."""
    translated_text: str
    source_language: str     # Detected language when the request said 'auto'
    target_language: str
    from_cache: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class TranslationManager:
    """
    Translation orchestration engine.

    Features:
    - Remote language detection with a local heuristic fallback
    - Provider fallback chain with validation, circuit breaker and dictionary fallback
    - FIFO result cache shared by concurrent callers
    - History of the most recent translations
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        chain: Optional[ProviderChain] = None,
        detector: Optional[LanguageDetector] = None,
        cache: Optional[ResultCache] = None,
        history: Optional[TranslationHistory] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Configuration dict; loaded from config.json when omitted
            chain: Provider chain; built from config when omitted
            detector: Language detector; built from config when omitted
            cache: Result cache; a new one sized from config when omitted
            history: Translation history; a new one sized from config when omitted
            transport: Optional httpx transport for every outgoing request
        """
        self.config = config if config is not None else load_config()
        translation_config = self.config.get('translation', {})

        self.chunk_size = int(translation_config.get('chunk_size', DEFAULT_CHUNK_SIZE))
        self.ocr_cleanup = bool(translation_config.get('ocr_cleanup', False))

        self.chain = chain if chain is not None else ProviderChain.from_config(self.config, transport=transport)
        self.detector = detector if detector is not None else LanguageDetector.from_config(
            self.config.get('detection', {}), transport=transport)
        self.cache = cache if cache is not None else ResultCache(int(translation_config.get('cache_size', DEFAULT_CACHE_SIZE)))
        self.history = history if history is not None else TranslationHistory(
            int(translation_config.get('history_size', DEFAULT_HISTORY_SIZE)))

        logger.info(f"Translation engine ready with providers: {', '.join(self.chain.provider_names) or 'none'}")

    async def translate(
        self,
        text: str,
        from_language: str = lc.AUTO,
        to_language: str = "en",
        source_kind: str = SOURCE_TEXT,
    ) -> TranslationResult:
        """
        Translate text, never failing on provider problems.

        Args:
            text: Text to translate
            from_language: Source language code or 'auto'
            to_language: Target language code
            source_kind: Provenance recorded in history ("text" or "image")

        Returns:
            TranslationResult; translated_text carries the original
            leading/trailing whitespace

        Raises:
            TranslationError: invalid request (target 'auto' or missing)
        """
        request = TranslationRequest(text, from_language, to_language)
        leading, core, trailing = split_whitespace(request.text)

        if not core:
            return TranslationResult(request.text, request.from_language, request.to_language)

        # Regional variants (zh-CN -> zh-TW) still go to the providers
        if lc.languages_match(request.from_language, request.to_language, strict=True):
            logger.debug(f"Source and target are both {request.to_language}, returning input unchanged")
            return TranslationResult(request.text, request.from_language, request.to_language)

        computed = False

        async def compute() -> TranslationResult:
            nonlocal computed
            computed = True
            return await self._translate_core(core, request.from_language, request.to_language)

        key = make_cache_key(core, request.from_language, request.to_language)
        result = await self.cache.get_or_compute(key, compute)
        if not computed:
            logger.debug(f"Cache hit for {key[:40]}")
            result = replace(result, from_cache=True)

        self.history.add(HistoryEntry(
            source_text=core,
            translated_text=result.translated_text,
            from_language=result.source_language,
            to_language=result.target_language,
            source_kind=source_kind,
        ))

        return replace(result, translated_text=leading + result.translated_text + trailing)

    async def _translate_core(self, core: str, from_language: str, to_language: str) -> TranslationResult:
        source = from_language
        if lc.is_auto(source):
            source = await self.detector.detect(core)
            logger.info(f"Detected source language: {source}")

        if lc.languages_match(source, to_language, strict=True):
            logger.info(f"Detected language matches target {to_language}, returning input unchanged")
            return TranslationResult(core, source, to_language)

        chunks = segment(core, self.chunk_size)
        logger.debug(f"Translating {len(core)} chars in {len(chunks)} chunk(s): {source} -> {to_language}")

        translations = await translate_chunks_sequential(chunks, source, to_language, self.chain)
        translated = postprocess(reconstruct(chunks, translations))
        return TranslationResult(translated, source, to_language)

    async def translate_text(self, text: str, from_language: str = lc.AUTO, to_language: str = "en") -> str:
        """Translate text and return only the translated string."""
        result = await self.translate(text, from_language, to_language)
        return result.translated_text

    async def detect_language(self, text: str) -> str:
        """Guess the language of text; never 'auto', never raises."""
        return await self.detector.detect(text)

    async def translate_image(
        self,
        image_bytes: bytes,
        from_language: str,
        to_language: str,
        extractor: TextExtractor,
    ) -> Tuple[str, TranslationResult]:
        """
        Extract text from an image and translate it like typed text.

        Args:
            image_bytes: Raw image data
            from_language: Source language code or 'auto'
            to_language: Target language code
            extractor: OCR collaborator

        Returns:
            Tuple of (extracted_text, TranslationResult)

        Raises:
            TextExtractionError: no text found in the image
            TranslationError: invalid request
        """
        # Validate before spending time on OCR
        TranslationRequest("", from_language, to_language)

        # OCR engines are blocking; keep the event loop free
        extracted = await asyncio.to_thread(extractor.extract_text, image_bytes)
        if not extracted or not extracted.strip():
            raise TextExtractionError("No text found in image", code="no_text")

        if self.ocr_cleanup:
            extracted = apply_rules(extracted, OCR_CLEANUP_RULES)

        logger.info(f"Extracted {len(extracted)} chars from image")
        result = await self.translate(extracted, from_language, to_language, source_kind=SOURCE_IMAGE)
        return extracted, result

    def get_history(self) -> List[HistoryEntry]:
        return self.history.entries()

    def clear_history(self) -> None:
        self.history.clear()
        logger.info("Translation history cleared")

    def clear_cache(self) -> None:
        self.cache.clear()

    def get_status(self) -> Dict[str, Any]:
        """Summary of engine state for health checks."""
        return {
            'providers': self.chain.provider_names,
            'open_circuits': [
                name for name in self.chain.provider_names
                if self.chain.breaker is not None and self.chain.breaker.is_open(name)
            ],
            'cache_entries': len(self.cache),
            'cache_capacity': self.cache.capacity,
            'history_entries': len(self.history),
        }
