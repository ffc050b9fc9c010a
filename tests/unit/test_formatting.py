"""
Formatting reconstruction and cleanup rule tests
"""

import pytest

from translink.translation.formatting import (
    OCR_CLEANUP_RULES,
    apply_rules,
    capitalize_sentences,
    collapse_newlines,
    fix_lone_one,
    fix_lone_zero,
    fix_rn_as_m,
    normalize_punctuation_spacing,
    postprocess,
    reconstruct,
    remove_duplicate_sentences,
    split_whitespace,
)
from translink.translation.segmenter import Chunk


class TestReconstruct:
    """reconstruct tests"""

    def test_delimiters_are_restored(self):
        chunks = [Chunk("One.", " "), Chunk("Two.", "\n\n"), Chunk("Three.", "")]
        assert reconstruct(chunks, ["Uno.", "Dos.", "Tres."]) == "Uno. Dos.\n\nTres."

    def test_placeholder_is_verbatim(self):
        chunks = [Chunk("One.", "\n"), Chunk("  ", "\n"), Chunk("Two.", "")]
        assert reconstruct(chunks, ["Uno.", "ignored", "Dos."]) == "Uno.\n  \nDos."

    def test_excess_newlines_collapse(self):
        chunks = [Chunk("One.", "\n\n\n\n"), Chunk("Two.", "")]
        assert reconstruct(chunks, ["Uno.", "Dos."]) == "Uno.\n\nDos."

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            reconstruct([Chunk("One.", "")], [])

    def test_collapse_newlines(self):
        assert collapse_newlines("a\n\n\n\nb\n\nc") == "a\n\nb\n\nc"


class TestSplitWhitespace:
    """split_whitespace tests"""

    def test_leading_and_trailing(self):
        assert split_whitespace("  Hello.\n\nWorld.  ") == ("  ", "Hello.\n\nWorld.", "  ")

    def test_whitespace_only(self):
        assert split_whitespace("   ") == ("   ", "", "")

    def test_no_whitespace(self):
        assert split_whitespace("Hi") == ("", "Hi", "")


class TestDefaultRules:
    """Postprocessing rules applied to every translation"""

    def test_remove_duplicate_sentences(self):
        assert remove_duplicate_sentences("Hello there. Hello there. Bye.") == "Hello there. Bye."

    def test_duplicates_compare_normalized(self):
        assert remove_duplicate_sentences("Good day. Good  DAY. Fine.") == "Good day. Fine."

    def test_duplicates_across_lines(self):
        assert remove_duplicate_sentences("Hi there.\nHi there.") == "Hi there.\n"

    def test_capitalize_sentences(self):
        assert capitalize_sentences("hello. world! how are you? fine") == "Hello. World! How are you? Fine"

    def test_capitalize_skips_abbreviations(self):
        assert capitalize_sentences("Ask Dr. smith. he knows.") == "Ask Dr. smith. He knows."

    def test_private_use_characters_kept(self):
        assert capitalize_sentences("Ask Dr. smith \ue000. he knows.") == "Ask Dr. smith \ue000. He knows."
        assert normalize_punctuation_spacing("Call Dr. Who \ue000 , now") == "Call Dr. Who \ue000, now"

    def test_space_before_punctuation_removed(self):
        assert normalize_punctuation_spacing("Hello , world !") == "Hello, world!"

    def test_space_after_terminator(self):
        assert normalize_punctuation_spacing("End.Next one.") == "End. Next one."
        assert normalize_punctuation_spacing("One.   Two") == "One. Two"

    def test_urls_untouched(self):
        assert normalize_punctuation_spacing("See example.com now") == "See example.com now"

    def test_line_breaks_kept(self):
        assert normalize_punctuation_spacing("a  b\n\nc") == "a b\n\nc"

    def test_postprocess(self):
        assert postprocess("Hello , world. Hello , world.") == "Hello, world."
        assert postprocess("") == ""

    def test_postprocess_does_not_run_ocr_rules(self):
        assert postprocess("the cornputer.") == "The cornputer."


class TestOcrRules:
    """Optional OCR cleanup rules"""

    def test_rn_as_m(self):
        assert fix_rn_as_m("cornputer") == "computer"

    def test_lone_zero(self):
        assert fix_lone_zero("I saw 0 here") == "I saw O here"
        assert fix_lone_zero("room 101 here") == "room 101 here"

    def test_lone_one(self):
        assert fix_lone_one("1 am here") == "I am here"
        assert fix_lone_one("version 1.5 is out") == "version 1.5 is out"

    def test_apply_rules_in_order(self):
        assert apply_rules("1 saw the cornputer", OCR_CLEANUP_RULES) == "I saw the computer"
