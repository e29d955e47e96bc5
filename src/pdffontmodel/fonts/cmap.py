# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""CMap parsing and decoding.

Handles the two kinds of CMap streams found in PDF fonts:

- ToUnicode CMaps (``bfchar``/``bfrange``): character code -> Unicode text.
- Embedded encoding CMaps of Type0 fonts (``cidchar``/``cidrange``):
  character code -> CID.

Both share the ``codespacerange`` declarations, which define how a byte
string is split into character codes.
"""

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, NamedTuple

import pikepdf

from ..exceptions import CMapSyntaxError
from .glyph_mapping import glyph_to_unicode

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(
    rb"""
    (?P<ws>\s+)
    | (?P<comment>%[^\r\n]*)
    | (?P<dict_open><<)
    | (?P<dict_close>>>)
    | (?P<hex><[0-9A-Fa-f\s]*>)
    | (?P<array_open>\[)
    | (?P<array_close>\])
    | (?P<proc>[{}])
    | (?P<string>\((?:\\.|[^\\)])*\))
    | (?P<name>/[^\s/\[\]<>(){}%]*)
    | (?P<number>[+-]?(?:\d+\.?\d*|\.\d+)(?![^\s/\[\]<>(){}%]))
    | (?P<keyword>[^\s/\[\]<>(){}%]+)
    """,
    re.VERBOSE | re.DOTALL,
)


class DecodeResult(NamedTuple):
    """Outcome of decoding a byte string to text.

    ``num_chars`` counts the Unicode code points emitted; ``num_misses``
    counts character codes that produced no text.
    """

    text: str
    num_chars: int
    num_misses: int


class _Keyword(str):
    """Operator token of the CMap language."""


class _Name(str):
    """Name token, stored without the leading slash."""


@dataclass(frozen=True)
class CodespaceRange:
    """One ``codespacerange`` entry; bounds have the same byte length."""

    low: bytes
    high: bytes

    @property
    def width(self) -> int:
        return len(self.low)

    def contains(self, code: bytes) -> bool:
        """True if every byte of the code lies within the range's bytes."""
        if len(code) != self.width:
            return False
        return all(lo <= b <= hi for b, lo, hi in zip(code, self.low, self.high))


def tokenize(data: bytes) -> Iterator[Any]:
    """Splits CMap stream data into tokens.

    Yields bytes for hex strings and literal strings, ``_Name`` for
    names, int/float for numbers, ``_Keyword`` for operators and the
    delimiters ``"["``, ``"]"``, ``"<<"``, ``">>"`` as plain strings.

    Raises:
        CMapSyntaxError: On characters that cannot start any token.
    """
    pos = 0
    end = len(data)
    while pos < end:
        match = _TOKEN_RE.match(data, pos)
        if match is None:
            raise CMapSyntaxError(
                f"unexpected character {data[pos:pos + 1]!r} at offset {pos}"
            )
        pos = match.end()
        kind = match.lastgroup
        value = match.group()
        if kind in ("ws", "comment", "proc"):
            continue
        if kind == "hex":
            digits = re.sub(rb"\s+", b"", value[1:-1])
            if len(digits) % 2:
                digits += b"0"
            yield bytes.fromhex(digits.decode("ascii"))
        elif kind == "string":
            yield value[1:-1]
        elif kind == "name":
            yield _Name(value[1:].decode("latin-1"))
        elif kind == "number":
            text = value.decode("ascii")
            yield float(text) if "." in text else int(text)
        elif kind == "keyword":
            yield _Keyword(value.decode("latin-1"))
        else:
            yield {
                "dict_open": "<<",
                "dict_close": ">>",
                "array_open": "[",
                "array_close": "]",
            }[kind]


def _utf16_text(data: bytes) -> str | None:
    """Decodes a ToUnicode destination (UTF-16BE, surrogate pairs allowed)."""
    if len(data) % 2:
        # Some producers write single-byte destinations
        return "".join(chr(b) for b in data)
    try:
        return data.decode("utf-16-be")
    except UnicodeDecodeError:
        return None


def _destination_text(value: Any) -> str | None:
    if isinstance(value, bytes):
        return _utf16_text(value)
    if isinstance(value, _Name):
        return glyph_to_unicode(value)
    return None


class _CodeRange(NamedTuple):
    """Consecutive codes of one byte length mapped to consecutive values."""

    width: int
    start: int
    stop: int
    # First CID, or first code point of the destination text
    first: int
    # Unchanged leading text of a bfrange destination
    prefix: str = ""

    def offset(self, code: bytes) -> int | None:
        if len(code) != self.width:
            return None
        value = int.from_bytes(code, "big")
        if self.start <= value <= self.stop:
            return value - self.start
        return None


@dataclass
class CMap:
    """A parsed CMap.

    Single codes are kept in dictionaries; ``bfrange`` and ``cidrange``
    entries are kept as ranges and resolved on lookup. A single-code
    entry overrides a range covering the same code, and among ranges the
    later one wins.

    Attributes:
        name: Value of ``/CMapName``, if any.
        cid_system_info: ``/CIDSystemInfo`` as a dict of plain values.
        wmode: Writing mode (0 horizontal, 1 vertical).
        use_cmap: Name of a parent CMap referenced by ``usecmap``.
        codespace_ranges: Declared code space.
        identity: True for the predefined Identity-H/V CMaps, where the
            CID of a 2-byte code is the code itself.
    """

    name: str | None = None
    cid_system_info: dict | None = None
    wmode: int = 0
    use_cmap: str | None = None
    codespace_ranges: list[CodespaceRange] = field(default_factory=list)
    identity: bool = False
    _unicode: dict[bytes, str] = field(default_factory=dict, init=False, repr=False)
    _unicode_ranges: list[_CodeRange] = field(default_factory=list, init=False, repr=False)
    _cids: dict[bytes, int] = field(default_factory=dict, init=False, repr=False)
    _cid_ranges: list[_CodeRange] = field(default_factory=list, init=False, repr=False)
    # Byte lengths of the codes that carry a mapping
    _mapped_widths: set[int] = field(default_factory=set, init=False, repr=False)

    @classmethod
    def identity_cmap(cls, name: str = "Identity-H") -> "CMap":
        """Returns the predefined 2-byte identity CMap."""
        return cls(
            name=name,
            wmode=1 if name.endswith("-V") else 0,
            codespace_ranges=[CodespaceRange(b"\x00\x00", b"\xff\xff")],
            identity=True,
        )

    @property
    def has_unicode_mappings(self) -> bool:
        return bool(self._unicode) or bool(self._unicode_ranges)

    @property
    def has_cid_mappings(self) -> bool:
        return bool(self._cids) or bool(self._cid_ranges) or self.identity

    def add_unicode(self, code: bytes, text: str) -> None:
        self._unicode[code] = text
        self._mapped_widths.add(len(code))

    def add_unicode_range(self, low: bytes, high: bytes, text: str) -> None:
        """Maps ``low..high`` to ``text``, incrementing its last code point."""
        self._unicode_ranges.append(
            _CodeRange(
                len(low),
                int.from_bytes(low, "big"),
                int.from_bytes(high, "big"),
                ord(text[-1]),
                text[:-1],
            )
        )
        self._mapped_widths.add(len(low))

    def add_cid(self, code: bytes, cid: int) -> None:
        self._cids[code] = cid
        self._mapped_widths.add(len(code))

    def add_cid_range(self, low: bytes, high: bytes, cid: int) -> None:
        """Maps ``low..high`` to consecutive CIDs starting at ``cid``."""
        self._cid_ranges.append(
            _CodeRange(
                len(low), int.from_bytes(low, "big"), int.from_bytes(high, "big"), cid
            )
        )
        self._mapped_widths.add(len(low))

    def _unicode_for(self, code: bytes) -> str | None:
        text = self._unicode.get(code)
        if text is not None:
            return text
        for entry in reversed(self._unicode_ranges):
            offset = entry.offset(code)
            if offset is not None:
                point = entry.first + offset
                return entry.prefix + chr(point) if point <= 0x10FFFF else None
        return None

    def lookup(self, code: bytes) -> str | None:
        """Returns the Unicode text of a character code, or None.

        A code written with a different byte length than the mapping
        (``<41>`` vs ``<0041>``) still matches when no exact entry exists.
        """
        text = self._unicode_for(code)
        if text is not None:
            return text
        value = int.from_bytes(code, "big")
        for width in self._mapped_widths:
            if width != len(code) and value < 1 << (8 * width):
                text = self._unicode_for(value.to_bytes(width, "big"))
                if text is not None:
                    return text
        return None

    def cid_for(self, code: bytes) -> int | None:
        """Returns the CID of a character code, or None."""
        if self.identity:
            return int.from_bytes(code, "big")
        cid = self._cids.get(code)
        if cid is not None:
            return cid
        for entry in reversed(self._cid_ranges):
            offset = entry.offset(code)
            if offset is not None:
                return entry.first + offset
        return None

    def code_widths(self) -> list[int]:
        """Byte widths to try when splitting a string, in preference order.

        Widths that carry at least one mapping come first, longest first;
        the remaining declared widths follow, longest first.
        """
        mapped = set(self._mapped_widths)
        declared = {r.width for r in self.codespace_ranges}
        return sorted(mapped, reverse=True) + sorted(declared - mapped, reverse=True)

    def _in_codespace(self, code: bytes) -> bool:
        if not self.codespace_ranges:
            # No declared code space: any code of a mapped width is valid
            return True
        return any(r.contains(code) for r in self.codespace_ranges)

    def iter_codes(self, data: bytes) -> Iterator[tuple[bytes, bool]]:
        """Splits a byte string into character codes.

        Greedy longest match over :meth:`code_widths`. A position where no
        width yields a code inside the code space produces ``(byte, False)``
        and the scan advances by one byte.

        Yields:
            ``(code, matched)`` pairs.
        """
        widths = self.code_widths()
        pos = 0
        end = len(data)
        while pos < end:
            for width in widths:
                code = data[pos:pos + width]
                if len(code) == width and self._in_codespace(code):
                    yield code, True
                    pos += width
                    break
            else:
                yield data[pos:pos + 1], False
                pos += 1

    def decode(self, data: bytes) -> DecodeResult:
        """Decodes a byte string to Unicode text.

        Codes outside the code space, and codes without a Unicode mapping,
        are counted as misses and emit nothing.
        """
        parts: list[str] = []
        misses = 0
        for code, matched in self.iter_codes(data):
            text = self.lookup(code) if matched else None
            if text is None:
                misses += 1
            else:
                parts.append(text)
        text = "".join(parts)
        return DecodeResult(text, len(text), misses)


class _CMapParser:
    """Operand-stack interpreter for the subset of PostScript used by CMaps."""

    def __init__(self, cmap: CMap) -> None:
        self.cmap = cmap
        self.stack: list[Any] = []
        # Open arrays and dictionaries: (kind, stack depth at open)
        self.containers: list[tuple[str, int]] = []

    def feed(self, tokens: Iterator[Any]) -> None:
        for token in tokens:
            if token == "[" or token == "<<":
                self.containers.append((token, len(self.stack)))
            elif token == "]" or token == ">>":
                self._close(token)
            elif isinstance(token, _Keyword):
                self._execute(str(token))
            else:
                self.stack.append(token)

    def _close(self, token: str) -> None:
        expected = "[" if token == "]" else "<<"
        if not self.containers or self.containers[-1][0] != expected:
            raise CMapSyntaxError(f"unbalanced {token}")
        _, depth = self.containers.pop()
        items = self.stack[depth:]
        del self.stack[depth:]
        if token == "]":
            self.stack.append(items)
        else:
            self.stack.append(
                {
                    str(items[i]): items[i + 1]
                    for i in range(0, len(items) - 1, 2)
                    if isinstance(items[i], _Name)
                }
            )

    def _execute(self, op: str) -> None:
        if self.containers:
            # Operators inside arrays are operands (e.g. procedures)
            return
        handler = getattr(self, "_op_" + op, None)
        if handler is not None:
            handler()
        else:
            self.stack.clear()

    def _pop_groups(self, size: int, op: str) -> list[list[Any]]:
        operands = self.stack
        self.stack = []
        if len(operands) % size:
            logger.warning(
                "CMap %s block has %d operands, not a multiple of %d; "
                "trailing operands ignored",
                op,
                len(operands),
                size,
            )
        return [
            operands[i:i + size] for i in range(0, len(operands) - size + 1, size)
        ]

    def _op_def(self) -> None:
        if len(self.stack) >= 2 and isinstance(self.stack[-2], _Name):
            key = str(self.stack[-2])
            value = self.stack[-1]
            if key == "CMapName" and isinstance(value, _Name):
                self.cmap.name = str(value)
            elif key == "WMode" and isinstance(value, int):
                self.cmap.wmode = value
            elif key == "CIDSystemInfo" and isinstance(value, dict):
                self.cmap.cid_system_info = {
                    k: v.decode("latin-1") if isinstance(v, bytes) else v
                    for k, v in value.items()
                }
        self.stack.clear()

    def _op_usecmap(self) -> None:
        if self.stack and isinstance(self.stack[-1], _Name):
            self.cmap.use_cmap = str(self.stack[-1])
            logger.debug("CMap uses parent CMap %s", self.cmap.use_cmap)
        self.stack.clear()

    def _op_endcodespacerange(self) -> None:
        for low, high in self._pop_groups(2, "codespacerange"):
            if (
                not isinstance(low, bytes)
                or not isinstance(high, bytes)
                or len(low) != len(high)
                or not low
            ):
                logger.warning("Skipping invalid codespace range %r-%r", low, high)
                continue
            self.cmap.codespace_ranges.append(CodespaceRange(low, high))

    def _op_endbfchar(self) -> None:
        for code, dest in self._pop_groups(2, "bfchar"):
            text = _destination_text(dest)
            if not isinstance(code, bytes) or text is None:
                logger.warning("Skipping invalid bfchar entry %r %r", code, dest)
                continue
            self.cmap.add_unicode(code, text)

    def _op_endbfrange(self) -> None:
        for low, high, dest in self._pop_groups(3, "bfrange"):
            bounds = self._range_bounds(low, high, "bfrange")
            if bounds is None:
                continue
            start, stop, width = bounds
            if isinstance(dest, list):
                # One destination per code, bounded by the array length
                for offset, item in enumerate(dest[: stop - start + 1]):
                    text = _destination_text(item)
                    if text is not None:
                        self.cmap.add_unicode(
                            (start + offset).to_bytes(width, "big"), text
                        )
                continue
            text = _destination_text(dest) if isinstance(dest, bytes) else None
            if not text:
                logger.warning("Skipping bfrange with destination %r", dest)
                continue
            self.cmap.add_unicode_range(low, high, text)

    def _op_endcidchar(self) -> None:
        for code, cid in self._pop_groups(2, "cidchar"):
            if not isinstance(code, bytes) or not isinstance(cid, int):
                logger.warning("Skipping invalid cidchar entry %r %r", code, cid)
                continue
            self.cmap.add_cid(code, cid)

    def _op_endcidrange(self) -> None:
        for low, high, cid in self._pop_groups(3, "cidrange"):
            bounds = self._range_bounds(low, high, "cidrange")
            if bounds is None or not isinstance(cid, int):
                continue
            self.cmap.add_cid_range(low, high, cid)

    def _op_endnotdefchar(self) -> None:
        self.stack.clear()

    def _op_endnotdefrange(self) -> None:
        self.stack.clear()

    @staticmethod
    def _range_bounds(low: Any, high: Any, op: str) -> tuple[int, int, int] | None:
        if (
            not isinstance(low, bytes)
            or not isinstance(high, bytes)
            or len(low) != len(high)
        ):
            logger.warning("Skipping invalid %s bounds %r %r", op, low, high)
            return None
        start = int.from_bytes(low, "big")
        stop = int.from_bytes(high, "big")
        if stop < start:
            logger.warning("Skipping empty %s %r-%r", op, low, high)
            return None
        return start, stop, len(low)


def parse_cmap(data: bytes) -> CMap:
    """Parses CMap stream data.

    Malformed individual entries are skipped with a warning.

    Raises:
        CMapSyntaxError: If the data cannot be tokenized.
    """
    cmap = CMap()
    parser = _CMapParser(cmap)
    parser.feed(tokenize(data))
    if not cmap.codespace_ranges:
        logger.debug(
            "CMap %s declares no codespace range, inferring code widths", cmap.name
        )
    return cmap


def parse_cmap_stream(stream: pikepdf.Stream) -> CMap:
    """Parses a CMap from a pikepdf stream (filters applied)."""
    try:
        data = stream.read_bytes()
    except pikepdf.PdfError as e:
        raise CMapSyntaxError(f"cannot read CMap stream: {e}") from e
    return parse_cmap(bytes(data))
