"""
Provider Fallback Chain

Tries providers in configured priority order for one chunk:
- Skip providers whose circuit is open
- Request with retries for transient network failures
- Validate the candidate; the first valid candidate wins
- When every provider fails, fall back to the static dictionary

translate_chunk() never raises.
"""

from typing import Any, Dict, List, Optional, Sequence

import httpx

from translink.config import get_provider_configs
from translink.logger import get_logger
from translink.providers.circuit import CircuitBreaker
from translink.providers.endpoints import TranslationProvider, create_provider, translate_with_retries
from translink.providers.exceptions import ProviderExhaustion, TranslationError, ValidationRejection
from translink.translation.dictionary import DictionaryFallback
from translink.translation.validator import is_translation_valid

logger = get_logger(__name__)


class ProviderChain:
    """Ordered list of providers with validation and a dictionary fallback."""

    def __init__(
        self,
        providers: Sequence[TranslationProvider],
        dictionary: Optional[DictionaryFallback] = None,
        breaker: Optional[CircuitBreaker] = None,
    ):
        self.providers: List[TranslationProvider] = list(providers)
        self.dictionary = dictionary if dictionary is not None else DictionaryFallback()
        self.breaker = breaker

    @classmethod
    def from_config(
        cls,
        config: Dict[str, Any],
        transport: Optional[httpx.AsyncBaseTransport] = None,
        dictionary: Optional[DictionaryFallback] = None,
    ) -> "ProviderChain":
        """
        Build the chain from a loaded configuration.

        Args:
            config: Full configuration dict (see translink.config)
            transport: Optional httpx transport shared by every provider
            dictionary: Optional dictionary fallback (defaults to the bundled table)

        Returns:
            Configured ProviderChain
        """
        providers = [create_provider(entry, transport=transport) for entry in get_provider_configs(config)]
        if not providers:
            logger.warning("No translation providers enabled; only the dictionary fallback is available")

        breaker = None
        breaker_config = config.get('circuit_breaker', {})
        if breaker_config.get('enabled', True):
            breaker = CircuitBreaker(
                failure_threshold=breaker_config.get('failure_threshold', 3),
                cooldown_seconds=breaker_config.get('cooldown_seconds', 60),
            )

        return cls(providers, dictionary=dictionary, breaker=breaker)

    @property
    def provider_names(self) -> List[str]:
        return [provider.name for provider in self.providers]

    async def request_validated(self, provider: TranslationProvider, text: str, source: str, target: str) -> str:
        """
        Ask one provider and validate its answer.

        Raises:
            NetworkFailure: request could not complete
            MalformedResponse: unexpected response shape
            ValidationRejection: candidate failed the quality checks
        """
        candidate = await translate_with_retries(provider, text, source, target)
        is_valid, reason = is_translation_valid(text, candidate, source, target)
        if not is_valid:
            raise ValidationRejection(
                f"{provider.name} candidate rejected: {reason}",
                code="validation_rejected",
                details={"provider": provider.name, "reason": reason},
            )
        return candidate

    async def try_providers(self, text: str, source: str, target: str) -> str:
        """
        Return the first valid candidate.

        Raises:
            ProviderExhaustion: every provider failed, was rejected or was skipped
        """
        failures: Dict[str, str] = {}

        for provider in self.providers:
            if self.breaker is not None and not self.breaker.allow(provider.name):
                logger.debug(f"Skipping {provider.name}: circuit open")
                failures[provider.name] = "circuit_open"
                continue

            try:
                candidate = await self.request_validated(provider, text, source, target)
            except ValidationRejection as e:
                logger.info(str(e))
                failures[provider.name] = e.details.get("reason") or "rejected"
                # An error notice means the endpoint is throttling us; count it against its health
                if str(e.details.get("reason", "")).startswith("provider_error"):
                    self._record_failure(provider)
                else:
                    self._record_success(provider)
                continue
            except TranslationError as e:
                logger.warning(f"{provider.name} failed: {e}")
                failures[provider.name] = e.code or "error"
                self._record_failure(provider)
                continue
            except Exception as e:
                logger.exception(f"Unexpected error from {provider.name}: {e}")
                failures[provider.name] = "unexpected"
                self._record_failure(provider)
                continue
            except BaseException:
                # Cancelled mid-request: no verdict on the provider, free its half-open slot
                if self.breaker is not None:
                    self.breaker.release_trial(provider.name)
                raise

            self._record_success(provider)
            logger.debug(f"{provider.name} translated {len(text)} chars ({source} -> {target})")
            return candidate

        raise ProviderExhaustion(
            f"All providers failed for {source} -> {target}",
            code="providers_exhausted",
            details={"failures": failures},
        )

    async def translate_chunk(self, text: str, source: str, target: str) -> str:
        """
        Translate one chunk; never raises.

        Args:
            text: Chunk text
            source: Source language code (may be 'auto')
            target: Target language code

        Returns:
            The first valid provider translation, else the dictionary
            translation, else text unchanged
        """
        if not text or not text.strip():
            return text

        try:
            return await self.try_providers(text, source, target)
        except ProviderExhaustion as e:
            logger.warning(f"{e} {e.details.get('failures')}; using dictionary fallback")
            return self.dictionary.lookup(text, target)

    def _record_success(self, provider: TranslationProvider) -> None:
        if self.breaker is not None:
            self.breaker.record_success(provider.name)

    def _record_failure(self, provider: TranslationProvider) -> None:
        if self.breaker is not None:
            self.breaker.record_failure(provider.name)
