# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Font descriptor model."""

import logging
from typing import Any

import pikepdf

from ..exceptions import MalformedDictionaryError
from ..utils import name_str, resolve_indirect, to_number
from .constants import (
    FLAG_FIXED_PITCH,
    FLAG_ITALIC,
    FLAG_NONSYMBOLIC,
    FLAG_SERIF,
    FLAG_SYMBOLIC,
)

logger = logging.getLogger(__name__)

FONT_FILE_KEYS = ("/FontFile", "/FontFile2", "/FontFile3")


class FontDescriptor:
    """Metadata of a font program, parsed from a ``/FontDescriptor``.

    All source entries are retained in their original order, including
    keys this class does not interpret, so that :meth:`to_object`
    reproduces the dictionary. Numeric accessors never fail: a missing or
    mistyped optional value reads as 0 (or None for names and boxes).
    """

    def __init__(self, entries: dict[str, Any]) -> None:
        self._entries = dict(entries)

    @classmethod
    def from_object(cls, obj: pikepdf.Object) -> "FontDescriptor":
        """Parses a font descriptor dictionary.

        Raises:
            MalformedDictionaryError: If the object is not a dictionary.
        """
        obj = resolve_indirect(obj)
        if not isinstance(obj, pikepdf.Dictionary):
            raise MalformedDictionaryError("FontDescriptor", "not a dictionary")
        return cls({key: obj[key] for key in obj.keys()})

    def __contains__(self, key: str) -> bool:
        return _key(key) in self._entries

    def get(self, key: str, default: Any = None) -> Any:
        """Returns the raw value of an entry."""
        value = self._entries.get(_key(key))
        return default if value is None else resolve_indirect(value)

    def _number(self, key: str, default: int | float = 0) -> int | float:
        value = self.get(key)
        if value is None:
            return default
        try:
            return to_number(value)
        except TypeError:
            logger.debug("FontDescriptor /%s is not a number: %r", key, value)
            return default

    @property
    def font_name(self) -> str | None:
        value = self.get("FontName")
        return name_str(value) if isinstance(value, pikepdf.Name) else None

    @property
    def flags(self) -> int:
        return int(self._number("Flags"))

    @property
    def bbox(self) -> tuple[float, float, float, float] | None:
        value = self.get("FontBBox")
        if not isinstance(value, pikepdf.Array) or len(value) != 4:
            return None
        try:
            return tuple(to_number(resolve_indirect(v)) for v in value)
        except TypeError:
            logger.debug("FontDescriptor /FontBBox is not numeric: %r", value)
            return None

    @property
    def italic_angle(self) -> float:
        return self._number("ItalicAngle")

    @property
    def ascent(self) -> float:
        return self._number("Ascent")

    @property
    def descent(self) -> float:
        return self._number("Descent")

    @property
    def leading(self) -> float:
        return self._number("Leading")

    @property
    def cap_height(self) -> float:
        return self._number("CapHeight")

    @property
    def x_height(self) -> float:
        return self._number("XHeight")

    @property
    def stem_v(self) -> float:
        return self._number("StemV")

    @property
    def stem_h(self) -> float:
        return self._number("StemH")

    @property
    def avg_width(self) -> float:
        return self._number("AvgWidth")

    @property
    def max_width(self) -> float:
        return self._number("MaxWidth")

    @property
    def missing_width(self) -> float:
        return self._number("MissingWidth")

    @property
    def has_missing_width(self) -> bool:
        return "MissingWidth" in self

    @property
    def is_symbolic(self) -> bool:
        """True if the Symbolic flag is set and Nonsymbolic is not."""
        flags = self.flags
        return bool(flags & FLAG_SYMBOLIC) and not flags & FLAG_NONSYMBOLIC

    @property
    def is_fixed_pitch(self) -> bool:
        return bool(self.flags & FLAG_FIXED_PITCH)

    @property
    def is_serif(self) -> bool:
        return bool(self.flags & FLAG_SERIF)

    @property
    def is_italic(self) -> bool:
        return bool(self.flags & FLAG_ITALIC)

    def font_file(self) -> tuple[str, pikepdf.Stream] | None:
        """Returns the embedded font program as ``(key, stream)``, or None.

        The key is ``FontFile`` (Type 1), ``FontFile2`` (TrueType) or
        ``FontFile3`` (CFF/OpenType).
        """
        for key in FONT_FILE_KEYS:
            value = self.get(key)
            if isinstance(value, pikepdf.Stream):
                return key[1:], value
        return None

    def to_object(self) -> pikepdf.Dictionary:
        """Rebuilds the descriptor as a new direct dictionary."""
        return pikepdf.Dictionary(self._entries)

    def __repr__(self) -> str:
        return f"FontDescriptor({self.font_name!r}, flags={self.flags})"


def _key(key: str) -> str:
    return key if key.startswith("/") else "/" + key
