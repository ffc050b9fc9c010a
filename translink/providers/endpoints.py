"""
Translation Provider Implementations

This module contains the request/response handling for each free endpoint:
- Google Translate unofficial bulk endpoint (client=gtx)
- MyMemory community translation memory
- LibreTranslate open self-hosted endpoint

Each provider exposes `name` and `async translate(text, source, target) -> str`.
A provider either returns the raw candidate text or raises a
TranslationError subclass; judging the candidate is the chain's job.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from translink.logger import get_logger
from translink.providers.exceptions import (
    MalformedResponse,
    NetworkFailure,
    TranslationError,
)

logger = get_logger(__name__)


def get_httpx_timeout(timeout_config: Any) -> httpx.Timeout:
    """
    Convert timeout configuration to httpx.Timeout object.

    Args:
        timeout_config: Either a number (read timeout) or a dict with
            connect, write, read, pool keys

    Returns:
        httpx.Timeout object
    """
    if isinstance(timeout_config, dict):
        return httpx.Timeout(
            connect=timeout_config.get('connect', 5.0),
            write=timeout_config.get('write', 10.0),
            read=timeout_config.get('read', 15.0),
            pool=timeout_config.get('pool', 5.0),
        )
    else:
        timeout_value = float(timeout_config) if timeout_config else 15.0
        return httpx.Timeout(
            connect=5.0,
            write=10.0,
            read=timeout_value,
            pool=5.0,
        )


def handle_http_error(e: httpx.HTTPStatusError, provider: str):
    """Raise NetworkFailure with the status code and the endpoint's error text."""
    status_code = e.response.status_code
    error_text = "Unknown error"

    try:
        error_json = e.response.json()
        if isinstance(error_json, dict) and "error" in error_json:
            error_detail = error_json["error"]
            if isinstance(error_detail, dict):
                error_text = error_detail.get("message", str(error_detail))
            else:
                error_text = str(error_detail)
    except ValueError:
        error_text = e.response.text[:500] if e.response.text else "No details"

    raise NetworkFailure(
        f"{provider} API error ({status_code}): {error_text}",
        code="http_error",
        details={"provider": provider, "status_code": status_code},
    )


async def request_json(
    provider: str,
    method: str,
    url: str,
    timeout: Any = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    **kwargs,
) -> Any:
    """
    Issue one HTTP request and decode its JSON body.

    Raises:
        NetworkFailure: connection problems, timeouts, HTTP error statuses
        MalformedResponse: body is not JSON
    """
    try:
        async with httpx.AsyncClient(timeout=get_httpx_timeout(timeout), transport=transport) as client:
            response = await client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
    except httpx.HTTPStatusError as e:
        handle_http_error(e, provider)
    except httpx.TimeoutException:
        raise NetworkFailure(f"{provider} API request timeout", code="timeout", details={"provider": provider})
    except httpx.RequestError as e:
        raise NetworkFailure(f"{provider} API request failed: {e}", code="request_error", details={"provider": provider})
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedResponse(f"{provider} returned a non-JSON body: {e}", code="not_json", details={"provider": provider})


class TranslationProvider(ABC):
    """A remote translation service queried by the fallback chain."""

    def __init__(
        self,
        name: str,
        api_url: str,
        timeout: Any = 15,
        max_retries: int = 1,
        retry_delay: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.name = name
        self.api_url = api_url
        self.timeout = timeout
        self.max_retries = max(1, int(max_retries))
        self.retry_delay = float(retry_delay)
        self.transport = transport

    @abstractmethod
    async def translate(self, text: str, source: str, target: str) -> str:
        """Translate text, raising a TranslationError subclass on failure."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, api_url={self.api_url!r})"


class GoogleGtxProvider(TranslationProvider):
    """Unofficial bulk endpoint used by the Google Translate web widgets."""

    async def translate(self, text: str, source: str, target: str) -> str:
        params = {
            "client": "gtx",
            "sl": source or "auto",
            "tl": target,
            "dt": "t",
            "q": text,
        }
        logger.debug(f"Calling {self.name} ({source} -> {target}, {len(text)} chars)")
        data = await request_json(self.name, "GET", self.api_url, timeout=self.timeout,
                                  transport=self.transport, params=params)
        return self.parse_response(data)

    def parse_response(self, data: Any) -> str:
        """Concatenate the first element of every sub-array of data[0]."""
        if not isinstance(data, list) or not data or not isinstance(data[0], list):
            raise MalformedResponse(f"Unexpected {self.name} response format", code="bad_shape",
                                    details={"provider": self.name})

        parts: List[str] = []
        for segment in data[0]:
            if isinstance(segment, list) and segment and isinstance(segment[0], str):
                parts.append(segment[0])

        if not parts:
            raise MalformedResponse(f"No translated segments in {self.name} response", code="empty",
                                    details={"provider": self.name})
        return "".join(parts)


class MyMemoryProvider(TranslationProvider):
    """MyMemory community translation memory."""

    def __init__(self, *args, contact_email: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self.contact_email = contact_email

    async def translate(self, text: str, source: str, target: str) -> str:
        params = {
            "q": text,
            "langpair": f"{source}|{target}",
        }
        if self.contact_email:
            params["de"] = self.contact_email

        logger.debug(f"Calling {self.name} ({source} -> {target}, {len(text)} chars)")
        data = await request_json(self.name, "GET", self.api_url, timeout=self.timeout,
                                  transport=self.transport, params=params)
        return self.parse_response(data)

    def parse_response(self, data: Any) -> str:
        if not isinstance(data, dict):
            raise MalformedResponse(f"Unexpected {self.name} response format", code="bad_shape",
                                    details={"provider": self.name})

        # responseStatus arrives as int or as a string depending on the error path
        status = data.get("responseStatus")
        try:
            status = int(status)
        except (TypeError, ValueError):
            status = None

        response_data = data.get("responseData") or {}
        translated = response_data.get("translatedText") if isinstance(response_data, dict) else None

        if status != 200:
            raise MalformedResponse(
                f"{self.name} responded with status {data.get('responseStatus')}: {translated or data.get('responseDetails')}",
                code="bad_status",
                details={"provider": self.name, "status": data.get("responseStatus")},
            )
        if not isinstance(translated, str) or not translated.strip():
            raise MalformedResponse(f"No translatedText in {self.name} response", code="empty",
                                    details={"provider": self.name})
        return translated


class LibreTranslateProvider(TranslationProvider):
    """LibreTranslate open self-hosted endpoint."""

    def __init__(self, *args, api_key: str = "", **kwargs):
        super().__init__(*args, **kwargs)
        self.api_key = api_key

    async def translate(self, text: str, source: str, target: str) -> str:
        body: Dict[str, Any] = {
            "q": text,
            "source": source or "auto",
            "target": target,
            "format": "text",
        }
        if self.api_key:
            body["api_key"] = self.api_key

        logger.debug(f"Calling {self.name} ({source} -> {target}, {len(text)} chars)")
        data = await request_json(self.name, "POST", self.api_url, timeout=self.timeout,
                                  transport=self.transport, json=body)
        return self.parse_response(data)

    def parse_response(self, data: Any) -> str:
        if isinstance(data, dict) and data.get("error"):
            raise MalformedResponse(f"{self.name} error: {data['error']}", code="provider_error",
                                    details={"provider": self.name})

        translated = data.get("translatedText") if isinstance(data, dict) else None
        if not isinstance(translated, str) or not translated.strip():
            raise MalformedResponse(f"No translatedText in {self.name} response", code="empty",
                                    details={"provider": self.name})
        return translated


PROVIDER_CLASSES = {
    "google_gtx": GoogleGtxProvider,
    "mymemory": MyMemoryProvider,
    "libretranslate": LibreTranslateProvider,
}


def create_provider(
    provider_config: Dict[str, Any],
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TranslationProvider:
    """
    Build a provider from one entry of the `providers` config list.

    Args:
        provider_config: Provider settings (type, name, api_url, timeout, ...)
        transport: Optional httpx transport shared by every request

    Returns:
        Configured TranslationProvider

    Raises:
        TranslationError: Unknown provider type or missing api_url
    """
    provider_type = provider_config.get('type')
    provider_class = PROVIDER_CLASSES.get(provider_type)
    if provider_class is None:
        raise TranslationError(f"Unsupported provider type: {provider_type}", code="provider_config_invalid",
                               details={"type": provider_type})

    api_url = provider_config.get('api_url')
    if not api_url:
        raise TranslationError(f"Provider '{provider_config.get('name', provider_type)}' API URL not configured",
                               code="provider_config_invalid", details={"missing_field": "api_url"})

    kwargs: Dict[str, Any] = {
        "name": provider_config.get('name', provider_type),
        "api_url": api_url,
        "timeout": provider_config.get('timeout', 15),
        "max_retries": provider_config.get('max_retries', 1),
        "retry_delay": provider_config.get('retry_delay', 1.0),
        "transport": transport,
    }
    if provider_class is MyMemoryProvider:
        kwargs["contact_email"] = provider_config.get('contact_email', '')
    elif provider_class is LibreTranslateProvider:
        kwargs["api_key"] = provider_config.get('api_key', '')

    return provider_class(**kwargs)


def categorize_error(error: Exception, attempt: int, retry_delay: float = 1.0):
    """
    Categorize a provider error and determine retry strategy.

    Returns:
        Tuple of (should_retry, wait_time_seconds)
    """
    if not isinstance(error, NetworkFailure):
        # Malformed answers do not get better by asking again
        return False, 0

    status_code = error.details.get("status_code")

    # Rate limiting (429) - longer backoff
    if status_code == 429:
        return True, min(retry_delay * 5 * (2 ** attempt), 30.0)

    # Client errors - don't retry
    if status_code is not None and 400 <= status_code < 500:
        return False, 0

    # Server errors, timeouts, connection errors - standard backoff
    return True, retry_delay * (2 ** attempt)


async def translate_with_retries(provider: TranslationProvider, text: str, source: str, target: str) -> str:
    """Call provider.translate, retrying transient network failures up to provider.max_retries attempts."""
    last_error: Optional[TranslationError] = None

    for attempt in range(provider.max_retries):
        try:
            if attempt > 0:
                logger.info(f"  {provider.name}: retry attempt {attempt + 1}/{provider.max_retries}")
            return await provider.translate(text, source, target)
        except TranslationError as e:
            last_error = e
            should_retry, wait_time = categorize_error(e, attempt, provider.retry_delay)
            if should_retry and attempt < provider.max_retries - 1:
                logger.warning(f"  {provider.name}: attempt {attempt + 1} failed: {e}. Waiting {wait_time}s before retry...")
                await asyncio.sleep(wait_time)
            else:
                break

    raise last_error
