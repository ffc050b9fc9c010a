"""Translation API routes."""

from __future__ import annotations

from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request

from translink.logger import get_logger
from translink.providers.exceptions import TextExtractionError, TranslationError
import translink.language_codes as lc

translation_bp = Blueprint("translation", __name__)
logger = get_logger(__name__)

MAX_TEXT_LENGTH = 20000


def _engine():
    return current_app.extensions["translink"]["engine"]


def _error(message: str, code: str, status: int = 400, details: Dict[str, Any] = None):
    error_response: Dict[str, Any] = {"error": message, "code": code}
    if details:
        error_response["details"] = details
    return jsonify(error_response), status


def _read_languages(data) -> tuple:
    from_language = data.get("from", data.get("from_language", lc.AUTO))
    to_language = data.get("to", data.get("to_language"))
    return from_language, to_language


@translation_bp.post("/translate")
async def translate():
    """Translate a piece of text."""
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    text = data.get("text")
    from_language, to_language = _read_languages(data)

    if not isinstance(text, str):
        return _error("Field 'text' must be a string", "invalid_text")
    if len(text) > MAX_TEXT_LENGTH:
        return _error(f"Text exceeds {MAX_TEXT_LENGTH} characters", "text_too_long")
    if not isinstance(to_language, str) or not to_language.strip():
        return _error("Field 'to' is required", "missing_target_language")
    if not isinstance(from_language, str):
        return _error("Field 'from' must be a string", "invalid_source_language")

    try:
        result = await _engine().translate(text, from_language, to_language)
    except TranslationError as e:
        logger.warning("Rejected translation request: %s", e)
        return _error(str(e), e.code or "translation_error", details=e.details)

    return jsonify(result.to_dict())


@translation_bp.post("/detect")
async def detect():
    """Guess the language of a piece of text."""
    data: Dict[str, Any] = request.get_json(silent=True) or {}
    text = data.get("text")
    if not isinstance(text, str):
        return _error("Field 'text' must be a string", "invalid_text")

    language = await _engine().detect_language(text)
    return jsonify({"language": language, "name": lc.get_language_name(language)})


@translation_bp.post("/translate-image")
async def translate_image():
    """Extract text from an uploaded image and translate it."""
    extractor = current_app.extensions["translink"]["text_extractor"]
    if extractor is None:
        return _error("Image translation is not configured", "ocr_unavailable", status=501)

    upload = request.files.get("image")
    if upload is None:
        return _error("Multipart field 'image' is required", "missing_image")
    image_bytes = upload.read()
    if not image_bytes:
        return _error("Uploaded image is empty", "empty_image")

    from_language, to_language = _read_languages(request.form)
    if not to_language or not to_language.strip():
        return _error("Field 'to' is required", "missing_target_language")

    try:
        extracted, result = await _engine().translate_image(image_bytes, from_language, to_language, extractor)
    except TextExtractionError as e:
        logger.info("Text extraction failed: %s", e)
        return _error(str(e), e.code or "extraction_failed", status=422)
    except TranslationError as e:
        logger.warning("Rejected image translation request: %s", e)
        return _error(str(e), e.code or "translation_error", details=e.details)

    payload = result.to_dict()
    payload["extracted_text"] = extracted
    return jsonify(payload)


@translation_bp.get("/languages")
def list_languages():
    """Return the languages offered in the language pickers."""
    include_auto = request.args.get("include_auto", "true").lower() != "false"
    return jsonify({"languages": lc.get_ui_languages(include_auto=include_auto)})


@translation_bp.get("/history")
def get_history():
    """Return the most recent translations, newest first."""
    entries = _engine().get_history()
    return jsonify({"history": [entry.to_dict() for entry in entries]})


@translation_bp.delete("/history")
def clear_history():
    _engine().clear_history()
    return jsonify({"status": "cleared"})


@translation_bp.delete("/cache")
def clear_cache():
    _engine().clear_cache()
    return jsonify({"status": "cleared"})
