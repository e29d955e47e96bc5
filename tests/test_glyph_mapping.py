# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Tests for glyph name to Unicode mapping."""

import pytest

from pdffontmodel.fonts.glyph_mapping import SYMBOL_GLYPH_TO_UNICODE, glyph_to_unicode


class TestGlyphToUnicode:
    """Tests for glyph_to_unicode."""

    @pytest.mark.parametrize(
        ("glyph", "expected"),
        [
            ("A", "A"),
            ("Adieresis", "Ä"),
            ("quoteleft", "‘"),
            ("lslash", "ł"),
            ("Euro", "€"),
            ("fi", "ﬁ"),
        ],
    )
    def test_glyph_list_names(self, glyph: str, expected: str) -> None:
        """Adobe Glyph List names map to their characters."""
        assert glyph_to_unicode(glyph) == expected

    def test_uni_name(self) -> None:
        """uniXXXX names are decoded."""
        assert glyph_to_unicode("uni20AC") == "€"

    def test_u_name_outside_bmp(self) -> None:
        """uXXXXX names reach supplementary planes."""
        assert glyph_to_unicode("u1F600") == "\U0001f600"

    def test_ligature_components(self) -> None:
        """Underscore-joined names yield several characters."""
        assert glyph_to_unicode("f_f_i") == "ffi"

    def test_suffix_is_ignored(self) -> None:
        """Text after a period is a variant suffix."""
        assert glyph_to_unicode("a.sc") == "a"

    @pytest.mark.parametrize("glyph", ["", ".notdef", ".null", "nonmarkingreturn"])
    def test_notdef_names(self, glyph: str) -> None:
        """Placeholder glyphs have no text."""
        assert glyph_to_unicode(glyph) is None

    def test_unknown_name(self) -> None:
        """Arbitrary names have no mapping."""
        assert glyph_to_unicode("g123") is None

    def test_symbol_font_names(self) -> None:
        """Symbol glyph names use the Symbol font's conventions."""
        assert glyph_to_unicode("theta1", "Symbol") == "ϑ"
        assert glyph_to_unicode("phi1", "Symbol") == "ϕ"
        assert glyph_to_unicode("alpha", "Symbol") == "α"

    def test_symbol_extension_pieces_have_no_text(self) -> None:
        """Bracket and radical extenders map to nothing."""
        assert SYMBOL_GLYPH_TO_UNICODE["radicalex"] is None
        assert glyph_to_unicode("radicalex", "Symbol") is None

    @pytest.mark.parametrize(
        ("glyph", "expected"),
        [
            ("arrowhorizex", "⎯"),
            ("theta1", "ϑ"),
            ("suchthat", "∋"),
            ("parenlefttp", "⎛"),
            ("bracerightbt", "⎭"),
            ("carriagereturn", "↵"),
        ],
    )
    def test_symbol_table_entries(self, glyph: str, expected: str) -> None:
        """Symbol-specific names resolve through the Symbol table."""
        assert glyph_to_unicode(glyph, "Symbol") == expected

    def test_zapfdingbats_names(self) -> None:
        """aNN names are dingbats only for ZapfDingbats."""
        assert glyph_to_unicode("a1", "ZapfDingbats") == "✁"
        assert glyph_to_unicode("a1") is None
