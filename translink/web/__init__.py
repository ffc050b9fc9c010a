"""Web application package for translink."""

from typing import Optional

from flask import Flask

from translink.config import initialize_app


def create_app(engine=None, text_extractor=None, initialize: Optional[bool] = None) -> Flask:
    """
    Application factory for the web interface.

    Args:
        engine: TranslationManager to serve; built from config.json when omitted
        text_extractor: Optional OCR collaborator for /api/translate-image
        initialize: Write the default config file on first run
            (defaults to True when no engine is injected)
    """
    if initialize is None:
        initialize = engine is None
    if initialize:
        initialize_app()

    from .app import build_app  # Import here to avoid circular imports

    return build_app(engine=engine, text_extractor=text_extractor)


__all__ = ["create_app"]
