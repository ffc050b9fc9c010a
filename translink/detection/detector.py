"""
Language detection: remote endpoint first, local heuristics second.

detect() never raises. Any failure of the remote endpoint (network,
malformed response, low confidence) silently drops to the local pipeline.
"""

from typing import Any, Dict, Optional

import httpx

from translink.detection.strategies import LocalDetectionPipeline
from translink.logger import get_logger
from translink.providers.endpoints import request_json
from translink.providers.exceptions import MalformedResponse, TranslationError
import translink.language_codes as lc

logger = get_logger(__name__)


class LanguageDetector:
    """Language detector with a remote primary path and a local fallback."""

    def __init__(
        self,
        api_url: Optional[str] = None,
        remote_enabled: bool = True,
        sample_chars: int = 200,
        min_confidence: float = 50.0,
        timeout: Any = 10,
        local: Optional[LocalDetectionPipeline] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.remote_enabled = remote_enabled and bool(api_url)
        self.sample_chars = sample_chars
        self.min_confidence = min_confidence
        self.timeout = timeout
        self.local = local or LocalDetectionPipeline()
        self.transport = transport

    @classmethod
    def from_config(cls, detection_config: Dict[str, Any],
                    transport: Optional[httpx.AsyncBaseTransport] = None) -> "LanguageDetector":
        return cls(
            api_url=detection_config.get('api_url'),
            remote_enabled=detection_config.get('remote_enabled', True),
            sample_chars=detection_config.get('sample_chars', 200),
            min_confidence=detection_config.get('min_confidence', 50.0),
            timeout=detection_config.get('timeout', 10),
            transport=transport,
        )

    async def detect(self, text: str) -> str:
        """
        Guess the language of text.

        Args:
            text: Text to inspect

        Returns:
            Normalized language code (never 'auto')
        """
        sample = (text or "").strip()
        if not sample:
            return self.local.default_language

        if self.remote_enabled:
            try:
                language = await self.detect_remote(sample[:self.sample_chars])
                if language:
                    logger.debug(f"Remote detection: {language}")
                    return language
            except TranslationError as e:
                logger.info(f"Remote language detection failed, using local heuristics: {e}")

        language = self.local.detect(sample)
        logger.debug(f"Local detection: {language}")
        return language

    async def detect_remote(self, sample: str) -> Optional[str]:
        """
        Ask the detection endpoint.

        Returns:
            Normalized code of the most confident result above the threshold,
            or None when nothing usable came back

        Raises:
            NetworkFailure: request could not complete
            MalformedResponse: response is not a list of results
        """
        data = await request_json("detect", "POST", self.api_url, timeout=self.timeout,
                                  transport=self.transport, json={"q": sample})
        if not isinstance(data, list):
            raise MalformedResponse("Unexpected detection response format", code="bad_shape")

        candidates = []
        for item in data:
            if not isinstance(item, dict):
                continue
            language = item.get("language")
            try:
                confidence = float(item.get("confidence", 0))
            except (TypeError, ValueError):
                continue
            if not isinstance(language, str) or not language or lc.is_auto(language):
                continue
            if confidence >= self.min_confidence:
                candidates.append((confidence, language))

        if not candidates:
            logger.debug("Remote detection returned no confident result")
            return None

        _, best = max(candidates, key=lambda pair: pair[0])
        return lc.normalize_language_code(best)
