"""
Web API tests (Flask test client)
"""

import io

import pytest

from translink import TranslationManager
from translink.detection import LanguageDetector
from translink.providers.chain import ProviderChain
from translink.providers.exceptions import TextExtractionError
from translink.web import create_app


@pytest.fixture
def engine(offline_config, make_provider):
    return TranslationManager(
        config=offline_config,
        chain=ProviderChain([make_provider("p", reply="Hola")]),
        detector=LanguageDetector(remote_enabled=False),
    )


@pytest.fixture
def client(engine):
    app = create_app(engine=engine)
    app.testing = True
    return app.test_client()


class TestTranslateRoute:
    """POST /api/translate"""

    def test_translate(self, client):
        response = client.post("/api/translate", json={"text": "Hello", "from": "en", "to": "es"})

        assert response.status_code == 200
        data = response.get_json()
        assert data["translated_text"] == "Hola"
        assert data["source_language"] == "en"
        assert data["target_language"] == "es"
        assert data["from_cache"] is False

    def test_from_defaults_to_auto(self, client):
        response = client.post("/api/translate", json={"text": "the cat is on the table", "to": "es"})
        assert response.get_json()["source_language"] == "en"

    def test_missing_target(self, client):
        response = client.post("/api/translate", json={"text": "Hello"})
        assert response.status_code == 400
        assert response.get_json()["code"] == "missing_target_language"

    def test_auto_target(self, client):
        response = client.post("/api/translate", json={"text": "Hello", "to": "auto"})
        assert response.status_code == 400
        assert response.get_json()["code"] == "invalid_target_language"

    def test_text_must_be_string(self, client):
        response = client.post("/api/translate", json={"text": 42, "to": "es"})
        assert response.status_code == 400
        assert response.get_json()["code"] == "invalid_text"

    def test_body_not_json(self, client):
        response = client.post("/api/translate", data="text=Hello")
        assert response.status_code == 400


class TestDetectRoute:
    """POST /api/detect"""

    def test_detect(self, client):
        response = client.post("/api/detect", json={"text": "Привет, как дела?"})
        assert response.status_code == 200
        assert response.get_json() == {"language": "ru", "name": "Russian"}

    def test_missing_text(self, client):
        assert client.post("/api/detect", json={}).status_code == 400


class TestImageRoute:
    """POST /api/translate-image"""

    def _upload(self, client, **form):
        data = {"image": (io.BytesIO(b"fake-png"), "shot.png"), **form}
        return client.post("/api/translate-image", data=data, content_type="multipart/form-data")

    def test_not_configured(self, client):
        response = self._upload(client, to="es")
        assert response.status_code == 501
        assert response.get_json()["code"] == "ocr_unavailable"

    def test_translate_image(self, engine, make_extractor):
        extractor = make_extractor("Hello")
        client = create_app(engine=engine, text_extractor=extractor).test_client()

        response = self._upload(client, to="es", **{"from": "en"})

        assert response.status_code == 200
        data = response.get_json()
        assert data["extracted_text"] == "Hello"
        assert data["translated_text"] == "Hola"
        assert extractor.images == [b"fake-png"]

    def test_extraction_failure(self, engine, make_extractor):
        extractor = make_extractor(error=TextExtractionError("No text found in image", code="no_text"))
        client = create_app(engine=engine, text_extractor=extractor).test_client()

        response = self._upload(client, to="es")

        assert response.status_code == 422
        assert response.get_json()["code"] == "no_text"

    def test_missing_image(self, engine, make_extractor):
        client = create_app(engine=engine, text_extractor=make_extractor("Hello")).test_client()
        response = client.post("/api/translate-image", data={"to": "es"}, content_type="multipart/form-data")
        assert response.status_code == 400
        assert response.get_json()["code"] == "missing_image"


class TestStateRoutes:
    """Languages, history, cache and health"""

    def test_languages(self, client):
        languages = client.get("/api/languages").get_json()["languages"]
        assert languages[0]["code"] == "auto"

        without_auto = client.get("/api/languages?include_auto=false").get_json()["languages"]
        assert all(language["code"] != "auto" for language in without_auto)

    def test_history(self, client):
        client.post("/api/translate", json={"text": "Hello", "from": "en", "to": "es"})

        history = client.get("/api/history").get_json()["history"]
        assert len(history) == 1
        assert history[0]["source_text"] == "Hello"
        assert history[0]["display_text"] == "Hello"

        assert client.delete("/api/history").status_code == 200
        assert client.get("/api/history").get_json()["history"] == []

    def test_clear_cache(self, client, engine):
        client.post("/api/translate", json={"text": "Hello", "from": "en", "to": "es"})
        assert len(engine.cache) == 1

        assert client.delete("/api/cache").status_code == 200
        assert len(engine.cache) == 0

    def test_health(self, client):
        data = client.get("/health").get_json()
        assert data["status"] == "ok"
        assert data["providers"] == ["p"]
        assert data["open_circuits"] == []

    def test_unknown_route(self, client):
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.get_json()["code"] == "not_found"
