# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Composite (Type0) fonts and their CIDFont descendants."""

import logging
from dataclasses import dataclass
from typing import Any

import pikepdf

from ..exceptions import CMapSyntaxError, MalformedDictionaryError, UnsupportedSubtypeError
from ..utils import is_number, name_str, resolve_indirect, safe_str, to_number
from .base import FontBase, get_array, get_dictionary, get_name, get_number
from .cmap import CMap, CodespaceRange, DecodeResult, parse_cmap_stream
from .constants import (
    CIDFONT_SUBTYPES,
    DEFAULT_CID_WIDTH,
    IDENTITY_ENCODING_NAMES,
    UTF16_ENCODING_NAMES,
)
from .descriptor import FontDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CIDSystemInfo:
    """Character collection of a CIDFont."""

    registry: str
    ordering: str
    supplement: int

    @classmethod
    def from_object(cls, obj: pikepdf.Dictionary) -> "CIDSystemInfo":
        registry = obj.get("/Registry")
        ordering = obj.get("/Ordering")
        supplement = obj.get("/Supplement")
        if registry is None or ordering is None or supplement is None:
            raise MalformedDictionaryError(
                "CIDSystemInfo", "requires /Registry, /Ordering and /Supplement"
            )
        if not is_number(supplement):
            raise MalformedDictionaryError("CIDSystemInfo", "/Supplement not a number")
        return cls(safe_str(registry), safe_str(ordering), int(supplement))

    def to_object(self) -> pikepdf.Dictionary:
        return pikepdf.Dictionary(
            Registry=pikepdf.String(self.registry),
            Ordering=pikepdf.String(self.ordering),
            Supplement=self.supplement,
        )


class CIDWidths:
    """CID -> width table read from a ``/W`` array.

    Entries are stored as CID ranges, so ``0 4294967295 500`` costs the
    same as a single CID. Where entries overlap, the later one wins.
    """

    def __init__(self) -> None:
        # (first, last, width or per-CID widths)
        self._segments: list[tuple[int, int, Any]] = []

    def __repr__(self) -> str:
        return f"CIDWidths({self._segments!r})"

    def __bool__(self) -> bool:
        return bool(self._segments)

    def __contains__(self, cid: int) -> bool:
        return self.get(cid) is not None

    def add_run(self, first: int, widths: list[int | float]) -> None:
        """Adds ``c [w1 ... wn]``: consecutive CIDs from ``first``."""
        if widths:
            self._segments.append((first, first + len(widths) - 1, tuple(widths)))

    def add_range(self, first: int, last: int, width: int | float) -> None:
        """Adds ``c_first c_last w``: one width for a CID range."""
        if first <= last:
            self._segments.append((first, last, width))

    def get(self, cid: int, default: int | float | None = None) -> int | float | None:
        for first, last, value in reversed(self._segments):
            if first <= cid <= last:
                if isinstance(value, tuple):
                    return value[cid - first]
                return value
        return default


def parse_cid_widths(array: pikepdf.Array) -> CIDWidths:
    """Parses a CIDFont ``/W`` array.

    Two entry forms are allowed, in any mix::

        c [w1 w2 ... wn]     CIDs c..c+n-1 get widths w1..wn
        c_first c_last w     every CID in the range gets width w

    Raises:
        MalformedDictionaryError: If the array does not follow either form.
    """
    widths = CIDWidths()
    items = [resolve_indirect(item) for item in array]
    i = 0
    while i < len(items):
        start = items[i]
        if not is_number(start) or i + 1 >= len(items):
            raise MalformedDictionaryError("W", f"bad entry at index {i}")
        following = items[i + 1]
        if isinstance(following, pikepdf.Array):
            run = []
            for width in following:
                width = resolve_indirect(width)
                if not is_number(width):
                    raise MalformedDictionaryError("W", f"non-numeric width {width!r}")
                run.append(to_number(width))
            widths.add_run(int(start), run)
            i += 2
            continue
        if i + 2 >= len(items) or not is_number(following) or not is_number(items[i + 2]):
            raise MalformedDictionaryError("W", f"bad range at index {i}")
        widths.add_range(int(start), int(following), to_number(items[i + 2]))
        i += 3
    return widths


class CIDFont:
    """Descendant CIDFont (CIDFontType0 or CIDFontType2) of a Type0 font.

    Attributes:
        subtype: ``CIDFontType0`` or ``CIDFontType2``.
        base_font: ``/BaseFont``, or None.
        cid_system_info: The character collection, or None.
        descriptor: Parsed ``/FontDescriptor``, or None.
        default_width: ``/DW``, or None when absent.
        widths: CID -> width table from ``/W``.
    """

    def __init__(self, obj: pikepdf.Dictionary) -> None:
        obj = resolve_indirect(obj)
        self._entries: dict[str, Any] = {key: obj[key] for key in obj.keys()}
        self.subtype = get_name(obj, "Subtype", required=True)
        if self.subtype not in CIDFONT_SUBTYPES:
            raise UnsupportedSubtypeError(
                self.subtype, "descendant font must be CIDFontType0 or CIDFontType2"
            )
        self.base_font = get_name(obj, "BaseFont")

        info = get_dictionary(obj, "CIDSystemInfo")
        self.cid_system_info = (
            CIDSystemInfo.from_object(info) if info is not None else None
        )
        descriptor = get_dictionary(obj, "FontDescriptor")
        self.descriptor = (
            FontDescriptor.from_object(descriptor) if descriptor is not None else None
        )
        self.default_width = get_number(obj, "DW")
        w = get_array(obj, "W")
        self.widths = parse_cid_widths(w) if w is not None else CIDWidths()

    def __repr__(self) -> str:
        return f"CIDFont({self.subtype}, {self.base_font!r})"

    def metrics(self, cid: int) -> float:
        """``/W``, then ``/DW``, then ``DEFAULT_CID_WIDTH``."""
        width = self.widths.get(cid)
        if width is not None:
            return width
        if self.default_width is not None:
            return self.default_width
        return DEFAULT_CID_WIDTH

    def to_object(self) -> pikepdf.Dictionary:
        result = pikepdf.Dictionary()
        for key, value in self._entries.items():
            if key == "/FontDescriptor":
                value = self.descriptor.to_object()
            elif key == "/CIDSystemInfo":
                value = self.cid_system_info.to_object()
            # /W, /W2, /DW2 and /CIDToGIDMap are written back as read
            result[key] = value
        return result


class CompositeFont(FontBase):
    """A Type0 font: multi-byte codes mapped to CIDs of one descendant.

    Attributes:
        encoding_name: Name of a predefined CMap, or None for an embedded
            CMap stream.
        cmap: The code -> CID map used to split strings into codes.
        descendant: The single descendant :class:`CIDFont`.
    """

    is_composite = True

    def __init__(self, obj: pikepdf.Dictionary) -> None:
        super().__init__(obj)
        obj = resolve_indirect(obj)
        self.encoding_name, self.cmap = self._parse_encoding(obj)

        descendants = obj.get("/DescendantFonts")
        if descendants is None:
            raise MalformedDictionaryError("DescendantFonts", "required key missing")
        descendants = resolve_indirect(descendants)
        if not isinstance(descendants, pikepdf.Array):
            raise MalformedDictionaryError("DescendantFonts", "not an array")
        if len(descendants) != 1:
            raise MalformedDictionaryError(
                "DescendantFonts",
                f"expected exactly one descendant font, found {len(descendants)}",
            )
        descendant = resolve_indirect(descendants[0])
        if not isinstance(descendant, pikepdf.Dictionary):
            raise MalformedDictionaryError("DescendantFonts", "element not a dictionary")
        self.descendant = CIDFont(descendant)

    @staticmethod
    def _parse_encoding(obj: pikepdf.Dictionary) -> tuple[str | None, CMap]:
        value = obj.get("/Encoding")
        if value is None:
            raise MalformedDictionaryError("Encoding", "required key missing")
        value = resolve_indirect(value)
        if isinstance(value, pikepdf.Name):
            name = name_str(value)
            if name in UTF16_ENCODING_NAMES:
                return name, CMap(
                    name=name, codespace_ranges=[CodespaceRange(b"\x00\x00", b"\xff\xff")]
                )
            if name not in IDENTITY_ENCODING_NAMES:
                logger.warning(
                    "Predefined CMap %s not supported, treating codes as 2-byte CIDs",
                    name,
                )
            return name, CMap.identity_cmap(name)
        if isinstance(value, pikepdf.Stream):
            try:
                return None, parse_cmap_stream(value)
            except CMapSyntaxError as e:
                raise MalformedDictionaryError("Encoding", f"bad CMap stream: {e}") from e
        raise MalformedDictionaryError("Encoding", "not a name or stream")

    @property
    def descriptor(self) -> FontDescriptor | None:
        return self.descendant.descriptor

    @property
    def cid_system_info(self) -> CIDSystemInfo | None:
        return self.descendant.cid_system_info

    @property
    def is_unicode_encoding(self) -> bool:
        """True for the UCS-2/UTF-16 predefined CMaps."""
        return self.encoding_name in UTF16_ENCODING_NAMES

    def cid_for(self, code: bytes) -> int | None:
        """Returns the CID selected by a character code, or None."""
        if self.is_unicode_encoding:
            # No CID table for Unicode-keyed CMaps
            return None
        return self.cmap.cid_for(code)

    def decode(self, data: bytes) -> DecodeResult:
        """Decodes a string of multi-byte codes.

        Text comes from ``/ToUnicode``. Without one, only the UCS-2/UTF-16
        encodings yield text; every other code counts as a miss.
        """
        if self.to_unicode is None and self.is_unicode_encoding:
            return _decode_utf16(data)
        parts: list[str] = []
        misses = 0
        for code, matched in self.cmap.iter_codes(data):
            text = None
            if matched and self.to_unicode is not None:
                text = self.to_unicode.lookup(code)
            if text is None:
                misses += 1
            else:
                parts.append(text)
        text = "".join(parts)
        return DecodeResult(text, len(text), misses)

    def metrics(self, cid: int) -> float:
        """Returns the advance width of a CID."""
        return self.descendant.metrics(cid)

    def _serialize_entry(self, key: str, value: Any) -> Any:
        if key == "/DescendantFonts":
            return pikepdf.Array([self.descendant.to_object()])
        if key == "/Encoding" and self.encoding_name is not None:
            return pikepdf.Name("/" + self.encoding_name)
        return value


def _decode_utf16(data: bytes) -> DecodeResult:
    """Decodes UTF-16BE code units, pairing surrogates."""
    parts: list[str] = []
    misses = 0
    i = 0
    while i < len(data):
        unit = data[i:i + 2]
        if len(unit) < 2:
            misses += 1
            break
        value = int.from_bytes(unit, "big")
        if 0xD800 <= value <= 0xDBFF and i + 4 <= len(data):
            low = int.from_bytes(data[i + 2:i + 4], "big")
            if 0xDC00 <= low <= 0xDFFF:
                parts.append(chr(0x10000 + ((value - 0xD800) << 10) + (low - 0xDC00)))
                i += 4
                continue
        if 0xD800 <= value <= 0xDFFF:
            misses += 1
        else:
            parts.append(chr(value))
        i += 2
    text = "".join(parts)
    return DecodeResult(text, len(text), misses)
