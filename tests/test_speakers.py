"""Tests for speaker key normalization and template rendering."""

import pytest

from galaxy_devices.speakers import canonicalize_speaker_key, normalize_speaker_key, render_template


class TestNormalizeSpeakerKey:

    @pytest.mark.parametrize("raw", ["leo m", "LEO-M", "leoM", " Leo_M ", "LEO--M"])
    def test_leo_spellings_collapse(self, raw):
        assert normalize_speaker_key(raw) == "LEO"

    def test_separators_become_single_underscore(self):
        assert normalize_speaker_key("1100 - lfc") == "1100_LFC"

    def test_non_word_characters_removed(self):
        assert normalize_speaker_key("M3D.Sub!") == "M3DSUB"

    def test_none_and_blank(self):
        assert normalize_speaker_key(None) == ""
        assert normalize_speaker_key("   ") == ""

    def test_non_string_input(self):
        assert normalize_speaker_key(750) == "750"


class TestCanonicalizeSpeakerKey:

    def test_underscores_removed(self):
        assert canonicalize_speaker_key("1100_LFC") == "1100LFC"
        assert canonicalize_speaker_key("cq-1") == "CQ1"

    @pytest.mark.parametrize("raw", ["leo m-", "_leo_m", "LEO M!"])
    def test_alias_after_compacting(self, raw):
        assert canonicalize_speaker_key(raw) == "LEO"

    @pytest.mark.parametrize("raw", ["leo m", "LEO-M", "leoM", "leo m-", "mm-10 / 900 lfc", "Mélodie", "  x__y  "])
    def test_idempotent(self, raw):
        once = canonicalize_speaker_key(raw)
        assert canonicalize_speaker_key(once) == once
        assert normalize_speaker_key(normalize_speaker_key(raw)) == normalize_speaker_key(raw)


class TestRenderTemplate:

    def test_brace_placeholder(self):
        assert render_template("/x/{}/y", 7) == "/x/7/y"

    @pytest.mark.parametrize("template", ["/x/{ch}/y", "/x/{CH}/y", "/x/{Ch}/y"])
    def test_ch_placeholder_case_insensitive(self, template):
        assert render_template(template, 7) == "/x/7/y"

    def test_every_occurrence_replaced(self):
        assert render_template("/a/{ch}/b/{ch}", 3) == "/a/3/b/3"

    def test_no_placeholder_is_verbatim(self):
        assert render_template("/device/fixed='1'", 9) == "/device/fixed='1'"

    @pytest.mark.parametrize("template", ["", "   ", None])
    def test_empty_dropped(self, template):
        assert render_template(template, 1) is None
