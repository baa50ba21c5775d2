"""
Verse API: Text Normalizer Unit Tests
======================================

What:  Tests for normalize_text / strip_markup.
Why:   The cleaning rule is narrow on purpose (anchors and italics survive);
       regressions would silently change what clients render.
"""

import re

import pytest

from verse_api.services.text_normalizer import normalize_text, strip_markup

SAMPLES = [
    "",
    "   ",
    "\n\t \r\n",
    "plain text",
    '<S>1</S>In the <a href="x">beginning</a>  God created',
    "Blessed <i>are</i> the peacemakers",
    "void;<pb/> and darkness",
    "<J>For God so loved</J>\n\t& more",
    "  Jesus <S>1145</S>wept.  ",
    "<<S>1</S>b>nested",
    "<span class=\"wj\">kept</span> text",
    "line one\n\n\nline two  three",
    "<br/><br/>",
    "unterminated <b and > stray",
]


class TestTagStripping:

    def test_example_from_documentation(self):
        """Verse marker removed, anchor kept, double space collapsed."""
        raw = '<S>1</S>In the <a href="x">beginning</a>  God created'
        assert normalize_text(raw) == 'In the <a href="x">beginning</a> God created'

    def test_verse_number_markers_removed(self):
        assert normalize_text("Jesus <S>1145</S>wept.") == "Jesus wept."

    def test_self_closing_tag_removed(self):
        assert normalize_text("void;<pb/> and darkness") == "void; and darkness"

    def test_paired_structural_tags_removed(self):
        assert normalize_text("<J>Follow me</J>") == "Follow me"
        assert normalize_text("<t>quoted</t>") == "quoted"

    def test_italic_tags_preserved(self):
        assert normalize_text("Blessed <i>are</i> they") == "Blessed <i>are</i> they"

    def test_tags_starting_with_a_or_i_preserved(self):
        assert normalize_text("<abbr>x</abbr> <img/>") == "<abbr>x</abbr> <img/>"

    def test_rule_is_case_sensitive(self):
        """Uppercase A/I are not part of the preserved set."""
        assert normalize_text("<I>x</I><A>y</A>") == "xy"

    def test_tag_containing_space_preserved(self):
        assert normalize_text("<b class=x>bold</b>") == "<b class=x>bold"

    def test_tag_name_containing_a_or_i_preserved(self):
        """The excluded letters apply to the whole tag body, not just its first character."""
        assert normalize_text("<span>kept</span> <div/>") == "<span>kept</span> <div/>"

    def test_ampersand_untouched(self):
        assert normalize_text("bread & wine") == "bread & wine"

    def test_nested_markup_removed_completely(self):
        """Removing an inner marker must not leave a new tag behind."""
        assert strip_markup("<<S>1</S>b>nested") == "nested"


class TestWhitespace:

    def test_empty_input(self):
        assert normalize_text("") == ""

    def test_whitespace_only_input(self):
        assert normalize_text(" \n\t ") == ""

    def test_trims_and_collapses(self):
        assert normalize_text("  a \n\n b\t\tc  ") == "a b c"

    def test_unicode_whitespace_collapsed(self):
        assert normalize_text("one\u00a0\u2003two") == "one two"

    def test_markup_only_input_becomes_empty(self):
        assert normalize_text("<br/> <S>3</S> <pb/>") == ""


class TestProperties:

    @pytest.mark.parametrize("raw", SAMPLES)
    def test_idempotent(self, raw):
        once = normalize_text(raw)
        assert normalize_text(once) == once

    @pytest.mark.parametrize("raw", SAMPLES)
    def test_whitespace_law(self, raw):
        out = normalize_text(raw)
        assert out == out.strip()
        assert re.search(r"\s\s", out) is None

    @pytest.mark.parametrize("raw", SAMPLES)
    def test_deterministic(self, raw):
        assert normalize_text(raw) == normalize_text(raw)
