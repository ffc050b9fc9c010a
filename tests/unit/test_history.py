"""
Translation history tests
"""

from translink.translation.history import IMAGE_MARKER, SOURCE_IMAGE, HistoryEntry, TranslationHistory


def _entry(text, kind="text"):
    return HistoryEntry(source_text=text, translated_text=text.upper(), from_language="en",
                        to_language="de", source_kind=kind)


class TestTranslationHistory:
    """TranslationHistory tests"""

    def test_newest_first(self):
        history = TranslationHistory()
        history.add(_entry("one"))
        history.add(_entry("two"))
        assert [e.source_text for e in history.entries()] == ["two", "one"]

    def test_bounded(self):
        history = TranslationHistory(max_entries=10)
        for i in range(12):
            history.add(_entry(f"text {i}"))

        entries = history.entries()
        assert len(entries) == 10
        assert entries[0].source_text == "text 11"
        assert entries[-1].source_text == "text 2"

    def test_clear(self):
        history = TranslationHistory()
        history.add(_entry("one"))
        history.clear()
        assert len(history) == 0


class TestHistoryEntry:
    """HistoryEntry tests"""

    def test_image_marker_only_in_display_text(self):
        entry = _entry("Hello", kind=SOURCE_IMAGE)
        assert entry.source_text == "Hello"
        assert entry.display_text == IMAGE_MARKER + "Hello"

    def test_to_dict(self):
        payload = _entry("Hello").to_dict()
        assert payload["display_text"] == "Hello"
        assert payload["translated_text"] == "HELLO"
        assert payload["id"]
        assert payload["timestamp"] > 0
