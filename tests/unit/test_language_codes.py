"""
Language code helper tests
"""

import translink.language_codes as lc


class TestNormalize:
    """normalize_language_code tests"""

    def test_aliases(self):
        assert lc.normalize_language_code("russian") == "ru"
        assert lc.normalize_language_code("Russian") == "ru"
        assert lc.normalize_language_code("zh-hans") == "zh-CN"
        assert lc.normalize_language_code("iw") == "he"

    def test_case_and_separator(self):
        assert lc.normalize_language_code("RU") == "ru"
        assert lc.normalize_language_code("zh_cn") == "zh-CN"
        assert lc.normalize_language_code(" en ") == "en"

    def test_auto(self):
        assert lc.normalize_language_code("AUTO") == "auto"
        assert lc.is_auto("detect")
        assert not lc.is_auto("en")

    def test_unknown_passes_through(self):
        assert lc.normalize_language_code("xx-klingon") == "xx-klingon"

    def test_empty(self):
        assert lc.normalize_language_code("") == ""
        assert lc.normalize_language_code(None) is None


class TestMatching:
    """languages_match tests"""

    def test_base_language(self):
        assert lc.languages_match("en", "en-US")
        assert lc.languages_match("english", "EN")
        assert not lc.languages_match("en", "en-US", strict=True)

    def test_auto_never_matches(self):
        assert not lc.languages_match("auto", "auto")
        assert not lc.languages_match("auto", "en")


class TestLanguageLists:
    """Supported-language helpers"""

    def test_ui_languages(self):
        languages = lc.get_ui_languages()
        assert languages[0]["code"] == "auto"
        codes = [language["code"] for language in languages]
        assert "ru" in codes and "ja" in codes
        assert all(set(language) == {"code", "name", "native_name"} for language in languages)

    def test_ui_languages_without_auto(self):
        assert lc.get_ui_languages(include_auto=False)[0]["code"] != "auto"

    def test_names(self):
        assert lc.get_language_name("en") == "English"
        assert lc.is_valid_language_code("zh-CN")
        assert not lc.is_valid_language_code("invalid")
