"""
Language detection tests
"""

import asyncio

import httpx

from translink.detection import (
    DiacriticDetector,
    LanguageDetector,
    LocalDetectionPipeline,
    ScriptRatioDetector,
    StopWordDetector,
)


class TestScriptRatio:
    """Writing-system detection"""

    def test_scripts(self):
        detector = ScriptRatioDetector()
        assert detector.detect("Привет, как дела?") == "ru"
        assert detector.detect("こんにちは世界") == "ja"
        assert detector.detect("你好世界") == "zh"
        assert detector.detect("안녕하세요") == "ko"
        assert detector.detect("مرحبا بالعالم") == "ar"

    def test_kana_wins_over_cjk_ideographs(self):
        # 5 kana and 3 ideographs: both scripts clear the threshold
        detector = ScriptRatioDetector()
        ratios = detector.ratios("日本語のテキスト")
        assert ratios["ja"] > detector.threshold
        assert ratios["zh"] > detector.threshold
        assert detector.detect("日本語のテキスト") == "ja"

    def test_latin_has_no_opinion(self):
        assert ScriptRatioDetector().detect("Hello world") is None

    def test_threshold(self):
        # 2 Cyrillic letters out of 12 characters stays under 30%
        assert ScriptRatioDetector().detect("Hello worldЯЯ") is None

    def test_empty(self):
        assert ScriptRatioDetector().ratios("   ") == {}


class TestDiacritics:
    """Accented-letter detection"""

    def test_priority_order(self):
        detector = DiacriticDetector()
        assert detector.detect("Die Straße ist lang") == "de"
        assert detector.detect("ça va bien") == "fr"
        assert detector.detect("¿Dónde está?") == "es"
        assert detector.detect("não sei") == "pt"
        assert detector.detect("łza") == "pl"
        assert detector.detect("doğru") == "tr"
        assert detector.detect("plain text") is None

    def test_custom_table(self):
        detector = DiacriticDetector([{"language": "xx", "characters": "q"}])
        assert detector.detect("quiet") == "xx"


class TestStopWords:
    """Stop-word frequency detection"""

    def test_english(self):
        assert StopWordDetector().detect("the cat is on the table") == "en"

    def test_spanish(self):
        assert StopWordDetector().detect("el gato y la casa") == "es"

    def test_no_match(self):
        assert StopWordDetector().detect("zzz qqq") is None

    def test_tie_keeps_first_language(self):
        detector = StopWordDetector({"aa": ["word"], "bb": ["word"]})
        assert detector.detect("word") == "aa"

    def test_score_uses_sample_size(self):
        detector = StopWordDetector({"en": ["the"]}, sample_size=2)
        assert detector.scores("the the cat cat cat") == {"en": 1.0}


class TestLocalPipeline:
    """LocalDetectionPipeline tests"""

    def test_default_language(self):
        assert LocalDetectionPipeline().detect("zzz qqq") == "en"

    def test_script_before_stop_words(self):
        assert LocalDetectionPipeline().detect("the Москва") == "ru"


def _detector(handler, **kwargs):
    return LanguageDetector(api_url="https://detect.invalid/detect", transport=httpx.MockTransport(handler), **kwargs)


class TestLanguageDetector:
    """Remote detection with local fallback"""

    def test_remote_result(self):
        seen = {}

        def handler(request):
            seen["body"] = request.content
            return httpx.Response(200, json=[{"language": "fr", "confidence": 90.0},
                                             {"language": "en", "confidence": 60.0}])

        assert asyncio.run(_detector(handler).detect("Bonjour tout le monde")) == "fr"
        assert b'"q"' in seen["body"]

    def test_sample_is_truncated(self):
        seen = {}

        def handler(request):
            seen["body"] = request.content
            return httpx.Response(200, json=[{"language": "en", "confidence": 99}])

        asyncio.run(_detector(handler, sample_chars=5).detect("abcdefghij"))
        assert b"abcde" in seen["body"]
        assert b"abcdef" not in seen["body"]

    def test_low_confidence_falls_back(self):
        detector = _detector(lambda r: httpx.Response(200, json=[{"language": "fr", "confidence": 10.0}]))
        assert asyncio.run(detector.detect("Привет мир")) == "ru"

    def test_auto_result_is_ignored(self):
        detector = _detector(lambda r: httpx.Response(200, json=[{"language": "auto", "confidence": 99.0}]))
        assert asyncio.run(detector.detect("the cat is on the table")) == "en"

    def test_http_error_falls_back(self):
        detector = _detector(lambda r: httpx.Response(500, text="down"))
        assert asyncio.run(detector.detect("Привет мир")) == "ru"

    def test_bad_shape_falls_back(self):
        detector = _detector(lambda r: httpx.Response(200, json={"language": "fr"}))
        assert asyncio.run(detector.detect("Привет мир")) == "ru"

    def test_unreachable_falls_back(self, unreachable_transport):
        detector = LanguageDetector(api_url="https://detect.invalid/detect", transport=unreachable_transport)
        assert asyncio.run(detector.detect("こんにちは")) == "ja"

    def test_remote_disabled(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(200, json=[])

        detector = _detector(handler, remote_enabled=False)
        assert asyncio.run(detector.detect("Привет мир")) == "ru"
        assert calls == []

    def test_empty_text(self):
        assert asyncio.run(LanguageDetector(remote_enabled=False).detect("   ")) == "en"

    def test_from_config(self):
        detector = LanguageDetector.from_config({"api_url": "https://d.invalid", "min_confidence": 75.0})
        assert detector.remote_enabled
        assert detector.min_confidence == 75.0
