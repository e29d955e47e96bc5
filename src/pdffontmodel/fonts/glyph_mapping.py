# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Glyph name to Unicode mapping.

Glyph names are resolved with the Adobe Glyph List rules implemented by
``fontTools.agl`` (including ``uniXXXX``/``uXXXXX`` names and ligature
names such as ``f_f_i``). The Symbol font uses a few names whose AGL
values are private-use code points; those are overridden with their real
Unicode equivalents here. ZapfDingbats names (``a1``..``a206``) are resolved
through the ITC Zapf Dingbats glyph list in fontTools.
"""

import logging

from fontTools.agl import toUnicode

logger = logging.getLogger(__name__)

# Symbol font glyphs that AGL maps to the private use area or not at all.
# None marks construction glyphs without a standalone Unicode equivalent.
SYMBOL_GLYPH_TO_UNICODE: dict[str, int | None] = {
    "radicalex": None,
    "arrowvertex": None,
    "arrowhorizex": 0x23AF,
    "theta1": 0x03D1,
    "phi1": 0x03D5,
    "omega1": 0x03D6,
    "sigma1": 0x03C2,
    "Upsilon1": 0x03D2,
    "suchthat": 0x220B,
    "universal": 0x2200,
    "existential": 0x2203,
    "asteriskmath": 0x2217,
    "perpendicular": 0x22A5,
    "similar": 0x223C,
    "congruent": 0x2245,
    "propersuperset": 0x2283,
    "reflexsuperset": 0x2287,
    "notsubset": 0x2284,
    "propersubset": 0x2282,
    "reflexsubset": 0x2286,
    "element": 0x2208,
    "notelement": 0x2209,
    "registerserif": 0x00AE,
    "copyrightserif": 0x00A9,
    "trademarkserif": 0x2122,
    "registersans": 0x00AE,
    "copyrightsans": 0x00A9,
    "trademarksans": 0x2122,
    "weierstrass": 0x2118,
    "Ifraktur": 0x2111,
    "Rfraktur": 0x211C,
    "aleph": 0x2135,
    "minute": 0x2032,
    "second": 0x2033,
    "dotmath": 0x22C5,
    "circlemultiply": 0x2297,
    "circleplus": 0x2295,
    "emptyset": 0x2205,
    "lozenge": 0x25CA,
    "angleleft": 0x2329,
    "angleright": 0x232A,
    "gradient": 0x2207,
    "integraltp": 0x2320,
    "integralbt": 0x2321,
    "integralex": None,
    "parenlefttp": 0x239B,
    "parenleftex": 0x239C,
    "parenleftbt": 0x239D,
    "parenrighttp": 0x239E,
    "parenrightex": 0x239F,
    "parenrightbt": 0x23A0,
    "bracketlefttp": 0x23A1,
    "bracketleftex": 0x23A2,
    "bracketleftbt": 0x23A3,
    "bracketrighttp": 0x23A4,
    "bracketrightex": 0x23A5,
    "bracketrightbt": 0x23A6,
    "bracelefttp": 0x23A7,
    "braceleftmid": 0x23A8,
    "braceleftbt": 0x23A9,
    "bracerighttp": 0x23AB,
    "bracerightmid": 0x23AC,
    "bracerightbt": 0x23AD,
    "braceex": 0x23AA,
    "arrowboth": 0x2194,
    "arrowleft": 0x2190,
    "arrowup": 0x2191,
    "arrowright": 0x2192,
    "arrowdown": 0x2193,
    "arrowdblboth": 0x21D4,
    "arrowdblleft": 0x21D0,
    "arrowdblup": 0x21D1,
    "arrowdblright": 0x21D2,
    "arrowdbldown": 0x21D3,
    "carriagereturn": 0x21B5,
}

_NOTDEF_NAMES = frozenset({"", ".notdef", ".null", "nonmarkingreturn"})


def glyph_to_unicode(glyph: str, symbolic_font: str | None = None) -> str | None:
    """Maps a glyph name to its Unicode text.

    Args:
        glyph: Glyph name without leading slash (e.g. ``"Adieresis"``).
        symbolic_font: ``"Symbol"`` or ``"ZapfDingbats"`` when the glyph
            comes from one of those fonts, which enables their naming
            conventions.

    Returns:
        The Unicode string (possibly several code points for ligatures),
        or None if the name has no Unicode mapping.
    """
    if glyph in _NOTDEF_NAMES:
        return None

    if symbolic_font == "Symbol" and glyph in SYMBOL_GLYPH_TO_UNICODE:
        codepoint = SYMBOL_GLYPH_TO_UNICODE[glyph]
        return chr(codepoint) if codepoint is not None else None

    text = toUnicode(glyph, isZapfDingbats=symbolic_font == "ZapfDingbats")
    if not text:
        logger.debug("No Unicode mapping for glyph %s", glyph)
        return None
    return text
