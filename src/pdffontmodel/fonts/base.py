# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Common parts of the font variants."""

import logging
from typing import Any

import pikepdf

from ..exceptions import CMapSyntaxError, MalformedDictionaryError
from ..utils import is_number, name_str, resolve_indirect, to_number
from .cmap import CMap, DecodeResult, parse_cmap_stream
from .metrics import CharMetrics

logger = logging.getLogger(__name__)


def get_name(obj: pikepdf.Dictionary, key: str, required: bool = False) -> str | None:
    """Reads a name entry without its leading slash.

    Raises:
        MalformedDictionaryError: If the entry is required and missing, or
            present with another object type.
    """
    value = obj.get("/" + key)
    if value is None:
        if required:
            raise MalformedDictionaryError(key, "required key missing")
        return None
    value = resolve_indirect(value)
    if not isinstance(value, pikepdf.Name):
        raise MalformedDictionaryError(key, "not a name")
    return name_str(value)


def get_int(obj: pikepdf.Dictionary, key: str) -> int | None:
    """Reads an optional integer entry.

    Raises:
        MalformedDictionaryError: If the entry is not an integer.
    """
    value = obj.get("/" + key)
    if value is None:
        return None
    value = resolve_indirect(value)
    if not is_number(value) or int(value) != value:
        raise MalformedDictionaryError(key, "not an integer")
    return int(value)


def get_number(obj: pikepdf.Dictionary, key: str) -> int | float | None:
    """Reads an optional numeric entry.

    Raises:
        MalformedDictionaryError: If the entry is not a number.
    """
    value = obj.get("/" + key)
    if value is None:
        return None
    value = resolve_indirect(value)
    if not is_number(value):
        raise MalformedDictionaryError(key, "not a number")
    return to_number(value)


def get_array(obj: pikepdf.Dictionary, key: str) -> pikepdf.Array | None:
    """Reads an optional array entry.

    Raises:
        MalformedDictionaryError: If the entry is not an array.
    """
    value = obj.get("/" + key)
    if value is None:
        return None
    value = resolve_indirect(value)
    if not isinstance(value, pikepdf.Array):
        raise MalformedDictionaryError(key, "not an array")
    return value


def get_dictionary(obj: pikepdf.Dictionary, key: str) -> pikepdf.Dictionary | None:
    """Reads an optional dictionary entry.

    Raises:
        MalformedDictionaryError: If the entry is not a dictionary.
    """
    value = obj.get("/" + key)
    if value is None:
        return None
    value = resolve_indirect(value)
    if not isinstance(value, pikepdf.Dictionary):
        raise MalformedDictionaryError(key, "not a dictionary")
    return value


def parse_to_unicode(obj: pikepdf.Dictionary) -> CMap | None:
    """Parses the ``/ToUnicode`` CMap of a font dictionary.

    ToUnicode only serves text extraction, so a map that cannot be parsed
    is logged and ignored rather than failing the font.
    """
    value = obj.get("/ToUnicode")
    if value is None:
        return None
    value = resolve_indirect(value)
    if isinstance(value, pikepdf.Name):
        logger.debug("Ignoring predefined ToUnicode %s", value)
        return None
    if not isinstance(value, pikepdf.Stream):
        raise MalformedDictionaryError("ToUnicode", "not a stream")
    try:
        return parse_cmap_stream(value)
    except CMapSyntaxError as e:
        logger.warning("Ignoring unparsable ToUnicode CMap: %s", e)
        return None


class FontBase:
    """State shared by every font variant.

    Keeps the source dictionary's entries in order so that serialization
    emits exactly the keys that were read. Subclasses override
    :meth:`_serialize_entry` for entries they model.
    """

    is_composite = False

    def __init__(self, obj: pikepdf.Dictionary) -> None:
        obj = resolve_indirect(obj)
        if not isinstance(obj, pikepdf.Dictionary):
            raise MalformedDictionaryError("Font", "not a dictionary")
        self._entries: dict[str, Any] = {key: obj[key] for key in obj.keys()}
        self.subtype = get_name(obj, "Subtype", required=True)
        self.base_font = get_name(obj, "BaseFont")
        self.to_unicode = parse_to_unicode(obj)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.subtype}, {self.base_font!r})"

    def decode(self, data: bytes) -> DecodeResult:
        raise NotImplementedError

    def metrics(self, code: int) -> float:
        raise NotImplementedError

    def glyph_metrics(self, glyph: str) -> CharMetrics | None:
        return None

    def _serialize_entry(self, key: str, value: Any) -> Any:
        return value

    def to_object(self) -> pikepdf.Dictionary:
        """Rebuilds the font dictionary as a new direct dictionary."""
        return pikepdf.Dictionary(
            {key: self._serialize_entry(key, value) for key, value in self._entries.items()}
        )
