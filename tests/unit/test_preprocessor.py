"""
Tests for cvmatch.nlp.preprocessor: TextCleaner normalisation.
"""

import pytest

from cvmatch.nlp.preprocessor import TextCleaner, clean_text, split_lines


@pytest.fixture
def cleaner():
    return TextCleaner()


# ── clean ────────────────────────────────────────────────────────────────────


class TestClean:
    def test_strips_control_characters(self, cleaner):
        assert cleaner.clean("Jane\x00 Smith\x07\x1f") == "Jane Smith"

    def test_strips_c1_control_characters(self, cleaner):
        assert cleaner.clean("Jane\x85 Smith\x9f\x80") == "Jane Smith"

    def test_keeps_newlines(self, cleaner):
        assert cleaner.clean("Jane Smith\nPolicy Manager") == "Jane Smith\nPolicy Manager"

    def test_tabs_become_single_spaces(self, cleaner):
        assert cleaner.clean("Name:\t\tJane") == "Name: Jane"

    def test_normalizes_crlf_and_cr(self, cleaner):
        assert cleaner.clean("a\r\nb\rc") == "a\nb\nc"

    def test_collapses_three_or_more_newlines(self, cleaner):
        assert cleaner.clean("a\n\n\n\n\nb") == "a\n\nb"

    def test_keeps_single_blank_line(self, cleaner):
        assert cleaner.clean("a\n\nb") == "a\n\nb"

    def test_blank_lines_with_spaces_collapse(self, cleaner):
        assert cleaner.clean("a\n   \n \t \n\nb") == "a\n\nb"

    def test_collapses_runs_of_spaces(self, cleaner):
        assert cleaner.clean("Policy     Manager") == "Policy Manager"

    def test_trims_ends(self, cleaner):
        assert cleaner.clean("  \n\n Jane \n\n ") == "Jane"

    def test_strips_each_line(self, cleaner):
        assert cleaner.clean("  Jane  \n   Smith  ") == "Jane\nSmith"

    @pytest.mark.parametrize("value", [None, 42, b"bytes", ["list"], ""])
    def test_non_string_returns_empty(self, cleaner, value):
        assert cleaner.clean(value) == ""

    def test_callable(self, cleaner):
        assert cleaner("  x  ") == "x"

    def test_module_shortcut(self):
        assert clean_text("a \x0b b") == "a b"


# ── idempotence ──────────────────────────────────────────────────────────────


class TestIdempotence:
    @pytest.mark.parametrize(
        "raw",
        [
            "Jane Smith\r\n\r\n\r\nPolicy\x0c Manager",
            "\t\tHeading\n\n\n\n  body   text  \n",
            "\x00\x01\x02",
            "a  b\n\n\n\nc",
            "one line",
            "line\r\r\r\rnext",
        ],
    )
    def test_clean_twice_equals_clean_once(self, cleaner, raw):
        once = cleaner.clean(raw)
        assert cleaner.clean(once) == once


# ── split_lines ──────────────────────────────────────────────────────────────


class TestSplitLines:
    def test_drops_empty_lines(self):
        assert split_lines("a\n\n b \n\nc") == ["a", "b", "c"]

    def test_empty_text(self):
        assert split_lines("") == []
