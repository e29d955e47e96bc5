# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Tests for FontDescriptor."""

from decimal import Decimal

import pytest
from conftest import new_pdf
from pikepdf import Array, Dictionary, Name, String

from pdffontmodel.exceptions import MalformedDictionaryError
from pdffontmodel.fonts.descriptor import FontDescriptor
from pdffontmodel.utils import equal_objects


def _helvetica_descriptor() -> Dictionary:
    return Dictionary(
        Type=Name.FontDescriptor,
        Ascent=718,
        CapHeight=718,
        Descent=-207,
        Flags=32,
        FontBBox=Array([-166, -225, 1000, 931]),
        FontName=Name("/PETER+Helvetica"),
        ItalicAngle=0,
        StemV=88,
        XHeight=523,
        StemH=88,
        CharSet=String("/G/O"),
    )


class TestFontDescriptor:
    """Tests for descriptor accessors and round trip."""

    def test_accessors(self) -> None:
        """Numeric and name entries are exposed."""
        descriptor = FontDescriptor.from_object(_helvetica_descriptor())
        assert descriptor.font_name == "PETER+Helvetica"
        assert descriptor.flags == 32
        assert descriptor.ascent == 718
        assert descriptor.descent == -207
        assert descriptor.cap_height == 718
        assert descriptor.x_height == 523
        assert descriptor.stem_v == 88
        assert descriptor.stem_h == 88
        assert descriptor.italic_angle == 0
        assert descriptor.bbox == (-166, -225, 1000, 931)

    def test_missing_values_read_as_zero(self) -> None:
        """Absent optional numbers are 0."""
        descriptor = FontDescriptor.from_object(Dictionary(Type=Name.FontDescriptor))
        assert descriptor.leading == 0
        assert descriptor.avg_width == 0
        assert descriptor.max_width == 0
        assert descriptor.missing_width == 0
        assert not descriptor.has_missing_width
        assert descriptor.bbox is None
        assert descriptor.font_name is None

    def test_real_values(self) -> None:
        """PDF reals are returned as floats."""
        descriptor = FontDescriptor.from_object(
            Dictionary(ItalicAngle=Decimal("-12.5"), MissingWidth=250)
        )
        assert descriptor.italic_angle == -12.5
        assert descriptor.has_missing_width
        assert descriptor.missing_width == 250

    def test_mistyped_value_reads_as_default(self) -> None:
        """A non-numeric value does not raise."""
        descriptor = FontDescriptor.from_object(Dictionary(Ascent=Name.High))
        assert descriptor.ascent == 0

    @pytest.mark.parametrize(
        ("flags", "symbolic"),
        [(4, True), (32, False), (36, False), (0, False), (4 | 64, True)],
    )
    def test_is_symbolic(self, flags: int, symbolic: bool) -> None:
        """Symbolic needs bit 3 set and bit 6 clear."""
        descriptor = FontDescriptor.from_object(Dictionary(Flags=flags))
        assert descriptor.is_symbolic is symbolic

    def test_style_flags(self) -> None:
        """Fixed pitch, serif and italic bits."""
        descriptor = FontDescriptor.from_object(Dictionary(Flags=1 | 2 | 64))
        assert descriptor.is_fixed_pitch
        assert descriptor.is_serif
        assert descriptor.is_italic

    def test_font_file(self) -> None:
        """The embedded program is found under its key."""
        pdf = new_pdf()
        program = pdf.make_stream(b"\x00\x01\x00\x00")
        descriptor = FontDescriptor.from_object(Dictionary(FontFile2=program))
        key, stream = descriptor.font_file()
        assert key == "FontFile2"
        assert stream.read_bytes() == b"\x00\x01\x00\x00"

    def test_no_font_file(self) -> None:
        """Descriptors of non-embedded fonts have no program."""
        assert FontDescriptor.from_object(_helvetica_descriptor()).font_file() is None

    def test_round_trip(self) -> None:
        """All entries, including unknown ones, are written back."""
        source = _helvetica_descriptor()
        source.Style = Dictionary(Panose=String(b"\x01\x05\x02\x02"))
        written = FontDescriptor.from_object(source).to_object()
        assert equal_objects(written, source)
        assert list(written.keys()) == list(source.keys())

    def test_not_a_dictionary(self) -> None:
        """Non-dictionaries are rejected."""
        with pytest.raises(MalformedDictionaryError) as exc_info:
            FontDescriptor.from_object(Array([1, 2]))
        assert exc_info.value.key == "FontDescriptor"
