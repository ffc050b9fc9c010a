"""
Shared test fixtures
"""

import copy
import sys
from pathlib import Path

import httpx
import pytest

# Add the project root to the import path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from translink.config import DEFAULT_CONFIG  # noqa: E402
from translink.providers.endpoints import TranslationProvider  # noqa: E402


class FakeProvider(TranslationProvider):
    """Provider answering with a fixed reply, a callable, or an exception."""

    def __init__(self, name, reply=None, error=None):
        super().__init__(name=name, api_url=f"https://{name}.invalid/translate")
        self.reply = reply
        self.error = error
        self.calls = []

    async def translate(self, text, source, target):
        self.calls.append((text, source, target))
        if self.error is not None:
            raise self.error
        if callable(self.reply):
            return self.reply(text, source, target)
        return self.reply


class FakeDetector:
    """Detector returning a fixed language and counting calls."""

    def __init__(self, language="en"):
        self.language = language
        self.calls = 0

    async def detect(self, text):
        self.calls += 1
        return self.language


class FakeExtractor:
    """OCR collaborator returning fixed text or raising."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.images = []

    def extract_text(self, image_bytes):
        self.images.append(image_bytes)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def make_provider():
    """Factory for scripted providers"""
    return FakeProvider


@pytest.fixture
def make_detector():
    """Factory for fixed-answer detectors"""
    return FakeDetector


@pytest.fixture
def make_extractor():
    """Factory for fake OCR collaborators"""
    return FakeExtractor


@pytest.fixture
def offline_config():
    """Default configuration without remote detection"""
    config = copy.deepcopy(DEFAULT_CONFIG)
    config['detection']['remote_enabled'] = False
    return config


@pytest.fixture
def unreachable_transport():
    """httpx transport where every request fails to connect"""
    def handler(request):
        raise httpx.ConnectError("network unreachable", request=request)

    return httpx.MockTransport(handler)
