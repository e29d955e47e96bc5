# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Simple fonts: one byte per character code.

Covers Type1, MMType1 and TrueType font dictionaries, and the standard 14
fonts used without their own widths or descriptor.
"""

import logging
from collections.abc import Mapping
from typing import Any

import pikepdf

from ..exceptions import MalformedDictionaryError
from ..utils import is_number, resolve_indirect, to_number
from .base import FontBase, get_array, get_dictionary, get_int
from .cmap import DecodeResult
from .constants import FALLBACK_WIDTH, SYMBOL_FONTS
from .descriptor import FontDescriptor
from .encodings import (
    STANDARD_ENCODING,
    SYMBOL_ENCODING,
    ZAPFDINGBATS_ENCODING,
    SimpleEncoding,
)
from .fontfile import read_builtin_encoding
from .glyph_mapping import glyph_to_unicode
from .metrics import (
    CharMetrics,
    StandardFontMetrics,
    canonical_standard14_name,
    get_standard14_metrics,
)

logger = logging.getLogger(__name__)

_SYMBOLIC_BUILTIN = {"Symbol": SYMBOL_ENCODING, "ZapfDingbats": ZAPFDINGBATS_ENCODING}


class SimpleFont(FontBase):
    """A Type1, MMType1 or TrueType font.

    Attributes:
        first_char: ``/FirstChar``, or None.
        last_char: ``/LastChar``, or None.
        widths: Numeric ``/Widths`` values, empty when absent.
        encoding: Resolved code <-> glyph table.
        descriptor: Parsed ``/FontDescriptor``, or None.
    """

    def __init__(self, obj: pikepdf.Dictionary) -> None:
        super().__init__(obj)
        obj = resolve_indirect(obj)
        self.first_char = get_int(obj, "FirstChar")
        self.last_char = get_int(obj, "LastChar")
        self._raw_widths = get_array(obj, "Widths")
        self.widths = self._parse_widths(self._raw_widths)

        descriptor = get_dictionary(obj, "FontDescriptor")
        self.descriptor = (
            FontDescriptor.from_object(descriptor) if descriptor is not None else None
        )

        self.standard_name = (
            canonical_standard14_name(self.base_font) if self.base_font else None
        )
        self.standard_metrics: StandardFontMetrics | None = (
            get_standard14_metrics(self.standard_name) if self.standard_name else None
        )

        encoding = obj.get("/Encoding")
        if encoding is not None and isinstance(resolve_indirect(encoding), pikepdf.Stream):
            raise MalformedDictionaryError("Encoding", "not a name or dictionary")
        self.encoding = SimpleEncoding.from_object(
            encoding, fallback=self._implicit_base_encoding()
        )

    @staticmethod
    def _parse_widths(array: pikepdf.Array | None) -> list[int | float]:
        if array is None:
            return []
        widths = []
        for item in array:
            item = resolve_indirect(item)
            if not is_number(item):
                raise MalformedDictionaryError("Widths", f"non-numeric width {item!r}")
            widths.append(to_number(item))
        return widths

    @property
    def symbolic_font_name(self) -> str | None:
        """``Symbol`` or ``ZapfDingbats`` when the font uses their glyph names."""
        return self.standard_name if self.standard_name in SYMBOL_FONTS else None

    @property
    def is_symbolic(self) -> bool:
        if self.descriptor is not None:
            return self.descriptor.is_symbolic
        return self.standard_name in SYMBOL_FONTS

    def _implicit_base_encoding(self) -> Mapping[int, str] | None:
        """Base encoding used when the font names none.

        In order: the embedded font program's built-in encoding (TrueType
        only when symbolic), the built-in encoding of a standard symbolic
        font, StandardEncoding for non-symbolic fonts.
        """
        if self.descriptor is not None:
            font_file = self.descriptor.font_file()
            if font_file is not None and (
                font_file[0] != "FontFile2" or self.descriptor.is_symbolic
            ):
                builtin = read_builtin_encoding(*font_file)
                if builtin:
                    return builtin
        if self.standard_name in _SYMBOLIC_BUILTIN:
            return _SYMBOLIC_BUILTIN[self.standard_name]
        if not self.is_symbolic:
            return STANDARD_ENCODING
        logger.debug("No implicit encoding for symbolic font %s", self.base_font)
        return None

    def decode(self, data: bytes) -> DecodeResult:
        """Decodes one byte per code.

        The ToUnicode map is consulted first; otherwise the code's glyph
        name is mapped to Unicode. Codes yielding no text count as misses.
        """
        parts: list[str] = []
        misses = 0
        for code in data:
            text = None
            if self.to_unicode is not None:
                text = self.to_unicode.lookup(bytes((code,)))
            if text is None:
                glyph = self.encoding.glyph_for(code)
                if glyph is not None:
                    text = glyph_to_unicode(glyph, self.symbolic_font_name)
            if text is None:
                misses += 1
            else:
                parts.append(text)
        text = "".join(parts)
        return DecodeResult(text, len(text), misses)

    def _explicit_width(self, code: int) -> int | float | None:
        if not self.widths or self.first_char is None:
            return None
        index = code - self.first_char
        last_char = self.last_char if self.last_char is not None else 255
        if 0 <= index < len(self.widths) and code <= last_char:
            return self.widths[index]
        return None

    def metrics(self, code: int) -> float:
        """Returns the advance width of a character code.

        ``/Widths``, then the standard font metrics of the code's glyph,
        then the descriptor's ``/MissingWidth``, then ``FALLBACK_WIDTH``.
        """
        width = self._explicit_width(code)
        if width is not None:
            return width
        glyph = self.encoding.glyph_for(code)
        if glyph is not None and self.standard_metrics is not None:
            char_metrics = self.standard_metrics.lookup(glyph)
            if char_metrics is not None:
                return char_metrics.wx
        if self.descriptor is not None and self.descriptor.has_missing_width:
            return self.descriptor.missing_width
        return FALLBACK_WIDTH

    def glyph_metrics(self, glyph: str) -> CharMetrics | None:
        """Returns the metrics of a glyph by name, or None if unknown."""
        code = self.encoding.code_for(glyph)
        if code is not None:
            width = self._explicit_width(code)
            if width is not None:
                return CharMetrics(width, 0)
        if self.standard_metrics is not None:
            return self.standard_metrics.lookup(glyph)
        return None

    def _serialize_entry(self, key: str, value: Any) -> Any:
        if key == "/Encoding":
            return self.encoding.to_object()
        if key == "/FontDescriptor":
            return self.descriptor.to_object()
        if key == "/Widths":
            return pikepdf.Array(
                w if isinstance(w, int) else resolve_indirect(raw)
                for w, raw in zip(self.widths, self._raw_widths)
            )
        return value


class Standard14Font(SimpleFont):
    """A standard 14 font used without ``/Widths`` or ``/FontDescriptor``.

    Widths come from the built-in metrics table.
    """

    def __init__(self, obj: pikepdf.Dictionary) -> None:
        super().__init__(obj)
        if self.standard_metrics is None:
            raise MalformedDictionaryError(
                "BaseFont", f"{self.base_font} is not a standard font"
            )

    def metrics(self, code: int) -> float:
        """Returns the advance width of a character code.

        The metrics table by glyph name, then the font's default width,
        then ``FALLBACK_WIDTH``.
        """
        glyph = self.encoding.glyph_for(code)
        if glyph is not None:
            char_metrics = self.standard_metrics.lookup(glyph)
            if char_metrics is not None:
                return char_metrics.wx
        if self.standard_metrics.default_width:
            return self.standard_metrics.default_width
        return FALLBACK_WIDTH

    def glyph_metrics(self, glyph: str) -> CharMetrics | None:
        return self.standard_metrics.lookup(glyph)
