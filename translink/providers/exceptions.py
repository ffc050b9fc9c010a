"""
Translation Exceptions

This module contains the exception hierarchy shared by providers, the
fallback chain and the engine. Separated to avoid circular imports between
endpoints.py, chain.py and the translation package.

Everything below TranslationError except TextExtractionError is recovered
inside the provider chain and never reaches callers of translate_text().
"""


class TranslationError(Exception):
    """Translation service error with optional code and details."""

    def __init__(self, message: str, code: str = None, details: dict = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class NetworkFailure(TranslationError):
    """The request could not complete (connection error, timeout, HTTP error status)."""


class MalformedResponse(TranslationError):
    """The endpoint answered, but not in the expected shape."""


class ValidationRejection(TranslationError):
    """A candidate translation failed the quality checks."""


class ProviderExhaustion(TranslationError):
    """Every provider failed or was rejected for a chunk."""


class TextExtractionError(TranslationError):
    """Image-to-text extraction produced no text."""
