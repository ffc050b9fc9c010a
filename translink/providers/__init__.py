"""
Providers module - remote translation endpoints

This module provides:
- TranslationProvider implementations for the free endpoints
- ProviderChain: ordered fallback with validation and dictionary fallback
- CircuitBreaker: skips providers that keep failing
"""

from translink.providers.chain import ProviderChain
from translink.providers.circuit import CircuitBreaker
from translink.providers.endpoints import (
    PROVIDER_CLASSES,
    GoogleGtxProvider,
    LibreTranslateProvider,
    MyMemoryProvider,
    TranslationProvider,
    create_provider,
)
from translink.providers.exceptions import (
    MalformedResponse,
    NetworkFailure,
    ProviderExhaustion,
    TextExtractionError,
    TranslationError,
    ValidationRejection,
)

__all__ = [
    'ProviderChain',
    'CircuitBreaker',
    'TranslationProvider',
    'GoogleGtxProvider',
    'MyMemoryProvider',
    'LibreTranslateProvider',
    'PROVIDER_CLASSES',
    'create_provider',
    'TranslationError',
    'NetworkFailure',
    'MalformedResponse',
    'ValidationRejection',
    'ProviderExhaustion',
    'TextExtractionError',
]
