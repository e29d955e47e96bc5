# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Standard simple-font encodings and the encoding resolver.

A simple font maps one-byte character codes to glyph names. The table is
built from a named base encoding (ISO 32000-1, Annex D), then updated by
the entries of a ``/Differences`` array in array order.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

import pikepdf

from ..exceptions import MalformedDictionaryError
from ..utils import is_number, name_str, resolve_indirect

logger = logging.getLogger(__name__)


def _table(runs: dict[int, str]) -> MappingProxyType:
    """Builds a read-only code -> glyph table from runs of glyph names.

    Each key is the code of the first name in its run; ``_`` marks a code
    without a glyph.
    """
    table: dict[int, str] = {}
    for start, names in runs.items():
        for offset, name in enumerate(names.split()):
            if name != "_":
                table[start + offset] = name
    return MappingProxyType(table)


_ASCII_PUNCT = (
    "space exclam quotedbl numbersign dollar percent ampersand quotesingle "
    "parenleft parenright asterisk plus comma hyphen period slash "
    "zero one two three four five six seven eight nine colon semicolon "
    "less equal greater question at"
)
_ASCII_UPPER = " ".join(chr(c) for c in range(ord("A"), ord("Z") + 1))
_ASCII_LOWER = " ".join(chr(c) for c in range(ord("a"), ord("z") + 1))
_ASCII_BRACKETS = "bracketleft backslash bracketright asciicircum underscore"
_ASCII_TAIL = "braceleft bar braceright asciitilde"

_LATIN1_UPPER_HALF = (
    "Agrave Aacute Acircumflex Atilde Adieresis Aring AE Ccedilla "
    "Egrave Eacute Ecircumflex Edieresis Igrave Iacute Icircumflex Idieresis "
    "Eth Ntilde Ograve Oacute Ocircumflex Otilde Odieresis multiply "
    "Oslash Ugrave Uacute Ucircumflex Udieresis Yacute Thorn germandbls "
    "agrave aacute acircumflex atilde adieresis aring ae ccedilla "
    "egrave eacute ecircumflex edieresis igrave iacute icircumflex idieresis "
    "eth ntilde ograve oacute ocircumflex otilde odieresis divide "
    "oslash ugrave uacute ucircumflex udieresis yacute thorn ydieresis"
)

WIN_ANSI_ENCODING = _table(
    {
        32: _ASCII_PUNCT,
        65: _ASCII_UPPER,
        91: _ASCII_BRACKETS,
        96: "grave",
        97: _ASCII_LOWER,
        123: _ASCII_TAIL,
        128: "Euro _ quotesinglbase florin quotedblbase ellipsis dagger daggerdbl "
        "circumflex perthousand Scaron guilsinglleft OE _ Zcaron _",
        144: "_ quoteleft quoteright quotedblleft quotedblright bullet endash emdash "
        "tilde trademark scaron guilsinglright oe _ zcaron Ydieresis",
        160: "space exclamdown cent sterling currency yen brokenbar section "
        "dieresis copyright ordfeminine guillemotleft logicalnot hyphen registered macron",
        176: "degree plusminus twosuperior threesuperior acute mu paragraph periodcentered "
        "cedilla onesuperior ordmasculine guillemotright onequarter onehalf "
        "threequarters questiondown",
        192: _LATIN1_UPPER_HALF,
    }
)

MAC_ROMAN_ENCODING = _table(
    {
        32: _ASCII_PUNCT,
        65: _ASCII_UPPER,
        91: _ASCII_BRACKETS,
        96: "grave",
        97: _ASCII_LOWER,
        123: _ASCII_TAIL,
        128: "Adieresis Aring Ccedilla Eacute Ntilde Odieresis Udieresis aacute "
        "agrave acircumflex adieresis atilde aring ccedilla eacute egrave",
        144: "ecircumflex edieresis iacute igrave icircumflex idieresis ntilde oacute "
        "ograve ocircumflex odieresis otilde uacute ugrave ucircumflex udieresis",
        160: "dagger degree cent sterling section bullet paragraph germandbls "
        "registered copyright trademark acute dieresis _ AE Oslash",
        176: "_ plusminus _ _ yen mu _ _ _ _ _ ordfeminine ordmasculine _ ae oslash",
        192: "questiondown exclamdown logicalnot _ florin _ _ guillemotleft "
        "guillemotright ellipsis space Agrave Atilde Otilde OE oe",
        208: "endash emdash quotedblleft quotedblright quoteleft quoteright divide _ "
        "ydieresis Ydieresis fraction currency guilsinglleft guilsinglright fi fl",
        224: "daggerdbl periodcentered quotesinglbase quotedblbase perthousand "
        "Acircumflex Ecircumflex Aacute Edieresis Egrave Iacute Icircumflex "
        "Idieresis Igrave Oacute Ocircumflex",
        240: "_ Ograve Uacute Ucircumflex Ugrave dotlessi circumflex tilde "
        "macron breve dotaccent ring cedilla hungarumlaut ogonek caron",
    }
)

STANDARD_ENCODING = _table(
    {
        32: _ASCII_PUNCT.replace("quotesingle", "quoteright"),
        65: _ASCII_UPPER,
        91: _ASCII_BRACKETS,
        96: "quoteleft",
        97: _ASCII_LOWER,
        123: _ASCII_TAIL,
        161: "exclamdown cent sterling fraction yen florin section currency "
        "quotesingle quotedblleft guillemotleft guilsinglleft guilsinglright fi fl",
        176: "_ endash dagger daggerdbl periodcentered _ paragraph bullet "
        "quotesinglbase quotedblbase quotedblright guillemotright ellipsis "
        "perthousand _ questiondown",
        192: "_ grave acute circumflex tilde macron breve dotaccent "
        "dieresis _ ring cedilla _ hungarumlaut ogonek caron",
        208: "emdash",
        225: "AE _ ordfeminine",
        232: "Lslash Oslash OE ordmasculine",
        241: "ae _ _ _ dotlessi _ _ lslash oslash oe germandbls",
    }
)

SYMBOL_ENCODING = _table(
    {
        32: "space exclam universal numbersign existential percent ampersand suchthat "
        "parenleft parenright asteriskmath plus comma minus period slash "
        "zero one two three four five six seven eight nine colon semicolon "
        "less equal greater question",
        64: "congruent Alpha Beta Chi Delta Epsilon Phi Gamma Eta Iota theta1 "
        "Kappa Lambda Mu Nu Omicron Pi Theta Rho Sigma Tau Upsilon sigma1 "
        "Omega Xi Psi Zeta bracketleft therefore bracketright perpendicular underscore",
        96: "radicalex alpha beta chi delta epsilon phi gamma eta iota phi1 "
        "kappa lambda mu nu omicron pi theta rho sigma tau upsilon omega1 "
        "omega xi psi zeta braceleft bar braceright similar",
        160: "Euro Upsilon1 minute lessequal fraction infinity florin club "
        "diamond heart spade arrowboth arrowleft arrowup arrowright arrowdown",
        176: "degree plusminus second greaterequal multiply proportional partialdiff "
        "bullet divide notequal equivalence approxequal ellipsis arrowvertex "
        "arrowhorizex carriagereturn",
        192: "aleph Ifraktur Rfraktur weierstrass circlemultiply circleplus emptyset "
        "intersection union propersuperset reflexsuperset notsubset propersubset "
        "reflexsubset element notelement",
        208: "angle gradient registerserif copyrightserif trademarkserif product "
        "radical dotmath logicalnot logicaland logicalor arrowdblboth "
        "arrowdblleft arrowdblup arrowdblright arrowdbldown",
        224: "lozenge angleleft registersans copyrightsans trademarksans summation "
        "parenlefttp parenleftex parenleftbt bracketlefttp bracketleftex "
        "bracketleftbt bracelefttp braceleftmid braceleftbt braceex",
        241: "angleright integral integraltp integralex integralbt parenrighttp "
        "parenrightex parenrightbt bracketrighttp bracketrightex bracketrightbt "
        "bracerighttp bracerightmid bracerightbt",
    }
)

ZAPFDINGBATS_ENCODING = _table(
    {
        32: "space a1 a2 a202 a3 a4 a5 a119 a118 a117 a11 a12 a13 a14 a15 a16 "
        "a105 a17 a18 a19 a20 a21 a22 a23 a24 a25 a26 a27 a28 a6 a7 a8 "
        "a9 a10 a29 a30 a31 a32 a33 a34 a35 a36 a37 a38 a39 a40 a41 a42 "
        "a43 a44 a45 a46 a47 a48 a49 a50 a51 a52 a53 a54 a55 a56 a57 a58 "
        "a59 a60 a61 a62 a63 a64 a65 a66 a67 a68 a69 a70 a71 a72 a73 a74 "
        "a203 a75 a204 a76 a77 a78 a79 a81 a82 a83 a84 a97 a98 a99 a100",
        128: "a89 a90 a93 a94 a91 a92 a205 a85 a206 a86 a87 a88 a95 a96",
        161: "a101 a102 a103 a104 a106 a107 a108 a112 a111 a110 a109 "
        "a120 a121 a122 a123 a124 a125 a126 a127 a128 a129 a130 a131 "
        "a132 a133 a134 a135 a136 a137 a138 a139 a140 a141 a142 a143 "
        "a144 a145 a146 a147 a148 a149 a150 a151 a152 a153 a154 a155 "
        "a156 a157 a158 a159 a160 a161 a163 a164 a196 a165 a192 a166 "
        "a167 a168 a169 a170 a171 a172 a173 a162 a174 a175 a176 a177 "
        "a178 a179 a193 a180 a199 a181 a200 a182",
        241: "a201 a183 a184 a197 a185 a194 a198 a186 a195 a187 a188 a189 a190 a191",
    }
)

# Encodings that may be named by /Encoding or /BaseEncoding, plus the
# built-in encodings of the two symbolic standard fonts
NAMED_ENCODINGS: Mapping[str, Mapping[int, str]] = MappingProxyType(
    {
        "WinAnsiEncoding": WIN_ANSI_ENCODING,
        "MacRomanEncoding": MAC_ROMAN_ENCODING,
        "StandardEncoding": STANDARD_ENCODING,
        "SymbolEncoding": SYMBOL_ENCODING,
        "ZapfDingbatsEncoding": ZAPFDINGBATS_ENCODING,
    }
)


def get_named_encoding(name: str) -> Mapping[int, str] | None:
    """Returns the code -> glyph table of a named encoding, or None."""
    return NAMED_ENCODINGS.get(name.lstrip("/"))


class Differences:
    """Parsed ``/Differences`` array.

    The array is kept as runs of ``(first_code, [glyph, ...])`` so that
    writing it back reproduces the source array exactly.
    """

    def __init__(self, runs: Iterable[tuple[int, list[str]]]) -> None:
        self._runs = tuple((code, tuple(glyphs)) for code, glyphs in runs)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, str]]) -> "Differences":
        """Builds differences from ordered ``(code, glyph)`` pairs."""
        runs: list[tuple[int, list[str]]] = []
        next_code = None
        for code, glyph in pairs:
            if runs and code == next_code:
                runs[-1][1].append(glyph)
            else:
                runs.append((code, [glyph]))
            next_code = code + 1
        return cls(runs)

    @classmethod
    def from_object(cls, array: pikepdf.Object) -> "Differences":
        """Parses a ``/Differences`` array.

        Raises:
            MalformedDictionaryError: If the value is not an array of
                integers and names starting with an integer.
        """
        array = resolve_indirect(array)
        if not isinstance(array, pikepdf.Array):
            raise MalformedDictionaryError("Differences", "not an array")

        runs: list[tuple[int, list[str]]] = []
        for item in array:
            item = resolve_indirect(item)
            if is_number(item):
                if int(item) != item:
                    raise MalformedDictionaryError(
                        "Differences", f"non-integer code {item}"
                    )
                runs.append((int(item), []))
            elif isinstance(item, pikepdf.Name):
                if not runs:
                    raise MalformedDictionaryError(
                        "Differences", "glyph name before the first code"
                    )
                runs[-1][1].append(name_str(item))
            else:
                raise MalformedDictionaryError(
                    "Differences", f"unexpected item {item!r}"
                )
        return cls(runs)

    def __iter__(self) -> Iterator[tuple[int, str]]:
        """Yields ``(code, glyph)`` pairs in array order."""
        for first_code, glyphs in self._runs:
            for offset, glyph in enumerate(glyphs):
                yield first_code + offset, glyph

    def __len__(self) -> int:
        return sum(len(glyphs) for _, glyphs in self._runs)

    def __repr__(self) -> str:
        return f"Differences({list(self)!r})"

    def to_object(self) -> pikepdf.Array:
        """Writes the differences back as a PDF array."""
        items: list = []
        for first_code, glyphs in self._runs:
            items.append(first_code)
            items.extend(pikepdf.Name("/" + glyph) for glyph in glyphs)
        return pikepdf.Array(items)


class SimpleEncoding:
    """Bidirectional code <-> glyph name table of a simple font.

    Instances are immutable once built. Use :meth:`build` for the
    base-plus-differences construction and :meth:`from_object` to parse a
    font's ``/Encoding`` entry (name or dictionary).
    """

    def __init__(
        self,
        code_to_glyph: Mapping[int, str],
        *,
        base_name: str | None = None,
        differences: Differences | None = None,
        tie_break: str = "lowest",
        source: pikepdf.Object | None = None,
    ) -> None:
        if tie_break not in ("lowest", "highest"):
            raise ValueError(f"tie_break must be 'lowest' or 'highest', not {tie_break!r}")
        self._code_to_glyph = MappingProxyType(dict(code_to_glyph))
        self.base_name = base_name
        self.differences = differences
        self._source = source

        codes = sorted(self._code_to_glyph, reverse=tie_break == "highest")
        glyph_to_code: dict[str, int] = {}
        for code in codes:
            glyph_to_code.setdefault(self._code_to_glyph[code], code)
        self._glyph_to_code = MappingProxyType(glyph_to_code)

    @classmethod
    def build(
        cls,
        base_name: str | None = None,
        differences: Iterable[tuple[int, str]] | Differences | None = None,
        *,
        fallback: Mapping[int, str] | None = None,
        tie_break: str = "lowest",
    ) -> "SimpleEncoding":
        """Builds an encoding from a base encoding name and differences.

        Resolution order:
        1. Start from the table named by ``base_name``. An unrecognised
           name is logged and treated as absent.
        2. Without a usable base name, start from ``fallback`` (the
           caller's implicit base encoding), or from an empty table.
        3. Apply the differences in order; later entries overwrite
           earlier ones for the same code.

        Args:
            base_name: Encoding name with or without a leading slash.
            differences: Ordered ``(code, glyph)`` overrides.
            fallback: Implicit base table used when no base name applies.
            tie_break: Which code reverse lookup returns when several codes
                map to one glyph: ``"lowest"`` or ``"highest"``.

        Returns:
            The resolved encoding.
        """
        table: dict[int, str] = {}
        base = None
        if base_name is not None:
            base = get_named_encoding(base_name)
            if base is None:
                logger.warning(
                    "Unknown base encoding %s, using implicit encoding", base_name
                )
        if base is None and fallback is not None:
            base = fallback
        if base is not None:
            table.update(base)

        if differences is not None and not isinstance(differences, Differences):
            differences = Differences.from_pairs(differences)
        if differences is not None:
            for code, glyph in differences:
                table[code] = glyph

        return cls(
            table,
            base_name=base_name.lstrip("/") if base_name else None,
            differences=differences,
            tie_break=tie_break,
        )

    @classmethod
    def from_object(
        cls,
        obj: pikepdf.Object | None,
        *,
        fallback: Mapping[int, str] | None = None,
    ) -> "SimpleEncoding":
        """Parses a simple font's ``/Encoding`` entry.

        Args:
            obj: A Name, an encoding dictionary, or None when the font has
                no ``/Encoding`` entry.
            fallback: Implicit base table (font built-in encoding).

        Raises:
            MalformedDictionaryError: If the entry is neither a name nor a
                dictionary, or its sub-entries have the wrong kind.
        """
        obj = resolve_indirect(obj) if obj is not None else None
        if obj is None:
            return cls.build(fallback=fallback)

        if isinstance(obj, pikepdf.Name):
            encoding = cls.build(name_str(obj), fallback=fallback)
        elif isinstance(obj, pikepdf.Dictionary):
            base_obj = obj.get("/BaseEncoding")
            base_name = None
            if base_obj is not None:
                base_obj = resolve_indirect(base_obj)
                if not isinstance(base_obj, pikepdf.Name):
                    raise MalformedDictionaryError("BaseEncoding", "not a name")
                base_name = name_str(base_obj)
            differences = None
            if "/Differences" in obj:
                differences = Differences.from_object(obj["/Differences"])
            encoding = cls.build(base_name, differences, fallback=fallback)
        else:
            raise MalformedDictionaryError("Encoding", "not a name or dictionary")

        encoding._source = obj
        return encoding

    def glyph_for(self, code: int) -> str | None:
        """Returns the glyph name for a character code, or None."""
        return self._code_to_glyph.get(code)

    def code_for(self, glyph: str) -> int | None:
        """Returns the character code for a glyph name, or None."""
        return self._glyph_to_code.get(glyph)

    def items(self):
        """``(code, glyph)`` pairs of the resolved table."""
        return self._code_to_glyph.items()

    def __len__(self) -> int:
        return len(self._code_to_glyph)

    def __contains__(self, code: object) -> bool:
        return code in self._code_to_glyph

    def __repr__(self) -> str:
        return (
            f"SimpleEncoding(base={self.base_name!r}, "
            f"differences={len(self.differences or ())}, size={len(self)})"
        )

    def to_object(self) -> pikepdf.Object | None:
        """Rebuilds the ``/Encoding`` entry this encoding was parsed from.

        Returns:
            A Name, a new Dictionary carrying the same keys as the source
            dictionary, or None when the font had no ``/Encoding`` entry.
        """
        source = self._source
        if source is None:
            return None
        if isinstance(source, pikepdf.Name):
            return pikepdf.Name("/" + self.base_name)

        result = pikepdf.Dictionary()
        for key in source.keys():
            if key == "/BaseEncoding":
                result[key] = pikepdf.Name("/" + self.base_name)
            elif key == "/Differences":
                result[key] = self.differences.to_object()
            else:
                result[key] = source[key]
        return result
