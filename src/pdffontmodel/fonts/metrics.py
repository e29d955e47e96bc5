# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Built-in metrics of the 14 standard PDF fonts.

Glyph widths come from the Adobe Font Metrics (AFM) files and are given in
1/1000 of the font size, keyed by glyph name. Fonts that are not part of
the standard 14 (after alias and subset-prefix resolution) have no entry;
callers fall back to other width sources.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import NamedTuple

from .constants import STANDARD_14_ALIASES, STANDARD_14_FONTS
from .encodings import (
    STANDARD_ENCODING,
    SYMBOL_ENCODING,
    WIN_ANSI_ENCODING,
    ZAPFDINGBATS_ENCODING,
)

logger = logging.getLogger(__name__)

_SUBSET_PREFIX_RE = re.compile(r"^[A-Z]{6}\+")


class CharMetrics(NamedTuple):
    """Advance of one glyph in glyph space units."""

    wx: float
    wy: float = 0


def _widths(data: str) -> Mapping[str, int]:
    """Parses ``glyph width glyph width ...`` pairs into a read-only map."""
    tokens = data.split()
    return MappingProxyType(
        {tokens[i]: int(tokens[i + 1]) for i in range(0, len(tokens), 2)}
    )


# Widths for the glyphs of WinAnsiEncoding
_HELVETICA_WIDTHS = _widths(
    """
    space 278 exclam 278 quotedbl 355 numbersign 556 dollar 556 percent 889 ampersand 667
    quotesingle 191 parenleft 333 parenright 333 asterisk 389 plus 584 comma 278 hyphen 333
    period 278 slash 278 zero 556 one 556 two 556 three 556 four 556
    five 556 six 556 seven 556 eight 556 nine 556 colon 278 semicolon 278
    less 584 equal 584 greater 584 question 556 at 1015 A 667 B 667
    C 722 D 722 E 667 F 611 G 778 H 722 I 278
    J 500 K 667 L 556 M 833 N 722 O 778 P 667
    Q 778 R 722 S 667 T 611 U 722 V 667 W 944
    X 667 Y 667 Z 611 bracketleft 278 backslash 278 bracketright 278 asciicircum 469
    underscore 556 grave 333 a 556 b 556 c 500 d 556 e 556
    f 278 g 556 h 556 i 222 j 222 k 500 l 222
    m 833 n 556 o 556 p 556 q 556 r 333 s 500
    t 278 u 556 v 500 w 722 x 500 y 500 z 500
    braceleft 334 bar 260 braceright 334 asciitilde 584 Euro 556 quotesinglbase 222 florin 556
    quotedblbase 333 ellipsis 1000 dagger 556 daggerdbl 556 circumflex 333 perthousand 1000 Scaron 667
    guilsinglleft 333 OE 1000 Zcaron 611 quoteleft 222 quoteright 222 quotedblleft 333 quotedblright 333
    bullet 350 endash 556 emdash 1000 tilde 333 trademark 1000 scaron 500 guilsinglright 333
    oe 944 zcaron 500 Ydieresis 667 exclamdown 333 cent 556 sterling 556 currency 556
    yen 556 brokenbar 260 section 556 dieresis 333 copyright 737 ordfeminine 370 guillemotleft 556
    logicalnot 584 registered 737 macron 333 degree 400 plusminus 584 twosuperior 333 threesuperior 333
    acute 333 mu 556 paragraph 537 periodcentered 278 cedilla 333 onesuperior 333 ordmasculine 365
    guillemotright 556 onequarter 834 onehalf 834 threequarters 834 questiondown 611 Agrave 667 Aacute 667
    Acircumflex 667 Atilde 667 Adieresis 667 Aring 667 AE 1000 Ccedilla 722 Egrave 667
    Eacute 667 Ecircumflex 667 Edieresis 667 Igrave 278 Iacute 278 Icircumflex 278 Idieresis 278
    Eth 722 Ntilde 722 Ograve 778 Oacute 778 Ocircumflex 778 Otilde 778 Odieresis 778
    multiply 584 Oslash 778 Ugrave 722 Uacute 722 Ucircumflex 722 Udieresis 722 Yacute 667
    Thorn 667 germandbls 611 agrave 556 aacute 556 acircumflex 556 atilde 556 adieresis 556
    aring 556 ae 889 ccedilla 500 egrave 556 eacute 556 ecircumflex 556 edieresis 556
    igrave 278 iacute 278 icircumflex 278 idieresis 278 eth 556 ntilde 556 ograve 556
    oacute 556 ocircumflex 556 otilde 556 odieresis 556 divide 584 oslash 611 ugrave 556
    uacute 556 ucircumflex 556 udieresis 556 yacute 500 thorn 556 ydieresis 500
    """
)

_HELVETICA_BOLD_WIDTHS = _widths(
    """
    space 278 exclam 333 quotedbl 474 numbersign 556 dollar 556 percent 889 ampersand 722
    quotesingle 238 parenleft 333 parenright 333 asterisk 389 plus 584 comma 278 hyphen 333
    period 278 slash 278 zero 556 one 556 two 556 three 556 four 556
    five 556 six 556 seven 556 eight 556 nine 556 colon 333 semicolon 333
    less 584 equal 584 greater 584 question 611 at 975 A 722 B 722
    C 722 D 722 E 667 F 611 G 778 H 722 I 278
    J 556 K 722 L 611 M 833 N 722 O 778 P 667
    Q 778 R 722 S 667 T 611 U 722 V 667 W 944
    X 667 Y 667 Z 611 bracketleft 333 backslash 278 bracketright 333 asciicircum 584
    underscore 556 grave 333 a 556 b 611 c 556 d 611 e 556
    f 333 g 611 h 611 i 278 j 278 k 556 l 278
    m 889 n 611 o 611 p 611 q 611 r 389 s 556
    t 333 u 611 v 556 w 778 x 556 y 556 z 500
    braceleft 389 bar 280 braceright 389 asciitilde 584 Euro 556 quotesinglbase 278 florin 556
    quotedblbase 500 ellipsis 1000 dagger 556 daggerdbl 556 circumflex 333 perthousand 1000 Scaron 667
    guilsinglleft 333 OE 1000 Zcaron 611 quoteleft 278 quoteright 278 quotedblleft 500 quotedblright 500
    bullet 350 endash 556 emdash 1000 tilde 333 trademark 1000 scaron 556 guilsinglright 333
    oe 944 zcaron 500 Ydieresis 667 exclamdown 333 cent 556 sterling 556 currency 556
    yen 556 brokenbar 280 section 556 dieresis 333 copyright 737 ordfeminine 370 guillemotleft 556
    logicalnot 584 registered 737 macron 333 degree 400 plusminus 584 twosuperior 333 threesuperior 333
    acute 333 mu 611 paragraph 556 periodcentered 278 cedilla 333 onesuperior 333 ordmasculine 365
    guillemotright 556 onequarter 834 onehalf 834 threequarters 834 questiondown 611 Agrave 722 Aacute 722
    Acircumflex 722 Atilde 722 Adieresis 722 Aring 722 AE 1000 Ccedilla 722 Egrave 667
    Eacute 667 Ecircumflex 667 Edieresis 667 Igrave 278 Iacute 278 Icircumflex 278 Idieresis 278
    Eth 722 Ntilde 722 Ograve 778 Oacute 778 Ocircumflex 778 Otilde 778 Odieresis 778
    multiply 584 Oslash 778 Ugrave 722 Uacute 722 Ucircumflex 722 Udieresis 722 Yacute 667
    Thorn 667 germandbls 611 agrave 556 aacute 556 acircumflex 556 atilde 556 adieresis 556
    aring 556 ae 889 ccedilla 556 egrave 556 eacute 556 ecircumflex 556 edieresis 556
    igrave 278 iacute 278 icircumflex 278 idieresis 278 eth 611 ntilde 611 ograve 611
    oacute 611 ocircumflex 611 otilde 611 odieresis 611 divide 584 oslash 611 ugrave 611
    uacute 611 ucircumflex 611 udieresis 611 yacute 556 thorn 611 ydieresis 556
    """
)

_TIMES_ROMAN_WIDTHS = _widths(
    """
    space 250 exclam 333 quotedbl 408 numbersign 500 dollar 500 percent 833 ampersand 778
    quotesingle 180 parenleft 333 parenright 333 asterisk 500 plus 564 comma 250 hyphen 333
    period 250 slash 278 zero 500 one 500 two 500 three 500 four 500
    five 500 six 500 seven 500 eight 500 nine 500 colon 278 semicolon 278
    less 564 equal 564 greater 564 question 444 at 921 A 722 B 667
    C 667 D 722 E 611 F 556 G 722 H 722 I 333
    J 389 K 722 L 611 M 889 N 722 O 722 P 556
    Q 722 R 667 S 556 T 611 U 722 V 722 W 944
    X 722 Y 722 Z 611 bracketleft 333 backslash 278 bracketright 333 asciicircum 469
    underscore 500 grave 333 a 444 b 500 c 444 d 500 e 444
    f 333 g 500 h 500 i 278 j 278 k 500 l 278
    m 778 n 500 o 500 p 500 q 500 r 333 s 389
    t 278 u 500 v 500 w 722 x 500 y 500 z 444
    braceleft 480 bar 200 braceright 480 asciitilde 541 Euro 500 quotesinglbase 333 florin 500
    quotedblbase 444 ellipsis 1000 dagger 500 daggerdbl 500 circumflex 333 perthousand 1000 Scaron 556
    guilsinglleft 333 OE 889 Zcaron 611 quoteleft 333 quoteright 333 quotedblleft 444 quotedblright 444
    bullet 350 endash 500 emdash 1000 tilde 333 trademark 980 scaron 389 guilsinglright 333
    oe 722 zcaron 444 Ydieresis 722 exclamdown 333 cent 500 sterling 500 currency 500
    yen 500 brokenbar 200 section 500 dieresis 333 copyright 760 ordfeminine 276 guillemotleft 500
    logicalnot 564 registered 760 macron 333 degree 400 plusminus 564 twosuperior 300 threesuperior 300
    acute 333 mu 500 paragraph 453 periodcentered 250 cedilla 333 onesuperior 300 ordmasculine 310
    guillemotright 500 onequarter 750 onehalf 750 threequarters 750 questiondown 444 Agrave 722 Aacute 722
    Acircumflex 722 Atilde 722 Adieresis 722 Aring 722 AE 889 Ccedilla 667 Egrave 611
    Eacute 611 Ecircumflex 611 Edieresis 611 Igrave 333 Iacute 333 Icircumflex 333 Idieresis 333
    Eth 722 Ntilde 722 Ograve 722 Oacute 722 Ocircumflex 722 Otilde 722 Odieresis 722
    multiply 564 Oslash 722 Ugrave 722 Uacute 722 Ucircumflex 722 Udieresis 722 Yacute 722
    Thorn 556 germandbls 500 agrave 444 aacute 444 acircumflex 444 atilde 444 adieresis 444
    aring 444 ae 667 ccedilla 444 egrave 444 eacute 444 ecircumflex 444 edieresis 444
    igrave 278 iacute 278 icircumflex 278 idieresis 278 eth 500 ntilde 500 ograve 500
    oacute 500 ocircumflex 500 otilde 500 odieresis 500 divide 564 oslash 500 ugrave 500
    uacute 500 ucircumflex 500 udieresis 500 yacute 500 thorn 500 ydieresis 500
    """
)

_TIMES_BOLD_WIDTHS = _widths(
    """
    space 250 exclam 333 quotedbl 555 numbersign 500 dollar 500 percent 1000 ampersand 833
    quotesingle 278 parenleft 333 parenright 333 asterisk 500 plus 570 comma 250 hyphen 333
    period 250 slash 278 zero 500 one 500 two 500 three 500 four 500
    five 500 six 500 seven 500 eight 500 nine 500 colon 333 semicolon 333
    less 570 equal 570 greater 570 question 500 at 930 A 722 B 667
    C 722 D 722 E 667 F 611 G 778 H 778 I 389
    J 500 K 778 L 667 M 944 N 722 O 778 P 611
    Q 778 R 722 S 556 T 667 U 722 V 722 W 1000
    X 722 Y 722 Z 667 bracketleft 333 backslash 278 bracketright 333 asciicircum 581
    underscore 500 grave 333 a 500 b 556 c 444 d 556 e 444
    f 333 g 500 h 556 i 278 j 333 k 556 l 278
    m 833 n 556 o 500 p 556 q 556 r 444 s 389
    t 333 u 556 v 500 w 722 x 500 y 500 z 444
    braceleft 394 bar 220 braceright 394 asciitilde 520 Euro 500 quotesinglbase 333 florin 500
    quotedblbase 500 ellipsis 1000 dagger 500 daggerdbl 500 circumflex 333 perthousand 1000 Scaron 556
    guilsinglleft 333 OE 1000 Zcaron 667 quoteleft 333 quoteright 333 quotedblleft 500 quotedblright 500
    bullet 350 endash 500 emdash 1000 tilde 333 trademark 1000 scaron 389 guilsinglright 333
    oe 722 zcaron 444 Ydieresis 722 exclamdown 333 cent 500 sterling 500 currency 500
    yen 500 brokenbar 220 section 500 dieresis 333 copyright 747 ordfeminine 300 guillemotleft 500
    logicalnot 570 registered 747 macron 333 degree 400 plusminus 570 twosuperior 300 threesuperior 300
    acute 333 mu 556 paragraph 540 periodcentered 250 cedilla 333 onesuperior 300 ordmasculine 330
    guillemotright 500 onequarter 750 onehalf 750 threequarters 750 questiondown 500 Agrave 722 Aacute 722
    Acircumflex 722 Atilde 722 Adieresis 722 Aring 722 AE 1000 Ccedilla 722 Egrave 667
    Eacute 667 Ecircumflex 667 Edieresis 667 Igrave 389 Iacute 389 Icircumflex 389 Idieresis 389
    Eth 722 Ntilde 722 Ograve 778 Oacute 778 Ocircumflex 778 Otilde 778 Odieresis 778
    multiply 570 Oslash 778 Ugrave 722 Uacute 722 Ucircumflex 722 Udieresis 722 Yacute 722
    Thorn 611 germandbls 556 agrave 500 aacute 500 acircumflex 500 atilde 500 adieresis 500
    aring 500 ae 722 ccedilla 444 egrave 444 eacute 444 ecircumflex 444 edieresis 444
    igrave 278 iacute 278 icircumflex 278 idieresis 278 eth 500 ntilde 556 ograve 500
    oacute 500 ocircumflex 500 otilde 500 odieresis 500 divide 570 oslash 500 ugrave 556
    uacute 556 ucircumflex 556 udieresis 556 yacute 500 thorn 556 ydieresis 500
    """
)

_TIMES_ITALIC_WIDTHS = _widths(
    """
    space 250 exclam 333 quotedbl 420 numbersign 500 dollar 500 percent 833 ampersand 778
    quotesingle 214 parenleft 333 parenright 333 asterisk 500 plus 675 comma 250 hyphen 333
    period 250 slash 278 zero 500 one 500 two 500 three 500 four 500
    five 500 six 500 seven 500 eight 500 nine 500 colon 333 semicolon 333
    less 675 equal 675 greater 675 question 500 at 920 A 611 B 611
    C 667 D 722 E 611 F 611 G 722 H 722 I 333
    J 444 K 667 L 556 M 833 N 667 O 722 P 611
    Q 722 R 611 S 500 T 556 U 722 V 611 W 833
    X 611 Y 556 Z 556 bracketleft 389 backslash 278 bracketright 389 asciicircum 422
    underscore 500 grave 333 a 500 b 500 c 444 d 500 e 444
    f 278 g 500 h 500 i 278 j 278 k 444 l 278
    m 722 n 500 o 500 p 500 q 500 r 389 s 389
    t 278 u 500 v 444 w 667 x 444 y 444 z 389
    braceleft 400 bar 275 braceright 400 asciitilde 541 Euro 500 quotesinglbase 333 florin 500
    quotedblbase 556 ellipsis 889 dagger 500 daggerdbl 500 circumflex 333 perthousand 1000 Scaron 500
    guilsinglleft 333 OE 944 Zcaron 556 quoteleft 333 quoteright 333 quotedblleft 556 quotedblright 556
    bullet 350 endash 500 emdash 889 tilde 333 trademark 980 scaron 389 guilsinglright 333
    oe 722 zcaron 389 Ydieresis 556 exclamdown 389 cent 500 sterling 500 currency 500
    yen 500 brokenbar 275 section 500 dieresis 333 copyright 760 ordfeminine 276 guillemotleft 500
    logicalnot 675 registered 760 macron 333 degree 400 plusminus 675 twosuperior 300 threesuperior 300
    acute 333 mu 500 paragraph 523 periodcentered 250 cedilla 333 onesuperior 300 ordmasculine 310
    guillemotright 500 onequarter 750 onehalf 750 threequarters 750 questiondown 500 Agrave 611 Aacute 611
    Acircumflex 611 Atilde 611 Adieresis 611 Aring 611 AE 889 Ccedilla 667 Egrave 611
    Eacute 611 Ecircumflex 611 Edieresis 611 Igrave 333 Iacute 333 Icircumflex 333 Idieresis 333
    Eth 722 Ntilde 667 Ograve 722 Oacute 722 Ocircumflex 722 Otilde 722 Odieresis 722
    multiply 675 Oslash 722 Ugrave 722 Uacute 722 Ucircumflex 722 Udieresis 722 Yacute 556
    Thorn 611 germandbls 500 agrave 500 aacute 500 acircumflex 500 atilde 500 adieresis 500
    aring 500 ae 667 ccedilla 444 egrave 444 eacute 444 ecircumflex 444 edieresis 444
    igrave 278 iacute 278 icircumflex 278 idieresis 278 eth 500 ntilde 500 ograve 500
    oacute 500 ocircumflex 500 otilde 500 odieresis 500 divide 675 oslash 500 ugrave 500
    uacute 500 ucircumflex 500 udieresis 500 yacute 444 thorn 500 ydieresis 444
    """
)

_TIMES_BOLD_ITALIC_WIDTHS = _widths(
    """
    space 250 exclam 389 quotedbl 555 numbersign 500 dollar 500 percent 833 ampersand 778
    quotesingle 278 parenleft 333 parenright 333 asterisk 500 plus 570 comma 250 hyphen 333
    period 250 slash 278 zero 500 one 500 two 500 three 500 four 500
    five 500 six 500 seven 500 eight 500 nine 500 colon 333 semicolon 333
    less 570 equal 570 greater 570 question 500 at 832 A 667 B 667
    C 667 D 722 E 667 F 667 G 722 H 778 I 389
    J 500 K 667 L 611 M 889 N 722 O 722 P 611
    Q 722 R 667 S 556 T 611 U 722 V 667 W 889
    X 667 Y 611 Z 611 bracketleft 333 backslash 278 bracketright 333 asciicircum 570
    underscore 500 grave 333 a 500 b 500 c 444 d 500 e 444
    f 333 g 500 h 556 i 278 j 278 k 500 l 278
    m 778 n 556 o 500 p 556 q 500 r 389 s 389
    t 278 u 556 v 444 w 667 x 500 y 444 z 389
    braceleft 348 bar 220 braceright 348 asciitilde 570 Euro 500 quotesinglbase 333 florin 500
    quotedblbase 500 ellipsis 1000 dagger 500 daggerdbl 500 circumflex 333 perthousand 1000 Scaron 556
    guilsinglleft 333 OE 944 Zcaron 611 quoteleft 333 quoteright 333 quotedblleft 500 quotedblright 500
    bullet 350 endash 500 emdash 1000 tilde 333 trademark 1000 scaron 389 guilsinglright 333
    oe 722 zcaron 389 Ydieresis 611 exclamdown 389 cent 500 sterling 500 currency 500
    yen 500 brokenbar 220 section 500 dieresis 333 copyright 747 ordfeminine 266 guillemotleft 500
    logicalnot 606 registered 747 macron 333 degree 400 plusminus 570 twosuperior 300 threesuperior 300
    acute 333 mu 576 paragraph 500 periodcentered 250 cedilla 333 onesuperior 300 ordmasculine 300
    guillemotright 500 onequarter 750 onehalf 750 threequarters 750 questiondown 500 Agrave 667 Aacute 667
    Acircumflex 667 Atilde 667 Adieresis 667 Aring 667 AE 944 Ccedilla 667 Egrave 667
    Eacute 667 Ecircumflex 667 Edieresis 667 Igrave 389 Iacute 389 Icircumflex 389 Idieresis 389
    Eth 722 Ntilde 722 Ograve 722 Oacute 722 Ocircumflex 722 Otilde 722 Odieresis 722
    multiply 570 Oslash 722 Ugrave 722 Uacute 722 Ucircumflex 722 Udieresis 722 Yacute 611
    Thorn 611 germandbls 500 agrave 500 aacute 500 acircumflex 500 atilde 500 adieresis 500
    aring 500 ae 722 ccedilla 444 egrave 444 eacute 444 ecircumflex 444 edieresis 444
    igrave 278 iacute 278 icircumflex 278 idieresis 278 eth 500 ntilde 556 ograve 500
    oacute 500 ocircumflex 500 otilde 500 odieresis 500 divide 570 oslash 500 ugrave 556
    uacute 556 ucircumflex 556 udieresis 556 yacute 444 thorn 500 ydieresis 444
    """
)

# Courier family: all glyphs are 600 units wide (monospaced)
_COURIER_WIDTHS = MappingProxyType(
    {
        glyph: 600
        for table in (STANDARD_ENCODING, WIN_ANSI_ENCODING)
        for glyph in table.values()
    }
)

def _code_widths(encoding: Mapping[int, str], rows: dict[int, str]) -> Mapping[str, int]:
    """Maps rows of widths, keyed by their first code, through an encoding."""
    widths = {}
    for start, data in rows.items():
        for code, width in enumerate(data.split(), start):
            glyph = encoding.get(code)
            if glyph is not None:
                widths[glyph] = int(width)
    return MappingProxyType(widths)


# Symbol font, by code of its built-in encoding
_SYMBOL_WIDTHS = _code_widths(
    SYMBOL_ENCODING,
    {
        32: "250 333 713 500 549 833 778 439 333 333 500 549 250 549 250 278 "
        "500 500 500 500 500 500 500 500 500 500 278 278 549 549 549 444",
        64: "549 722 667 722 612 611 763 603 722 333 631 722 686 889 722 722 "
        "768 741 556 592 611 690 439 768 645 795 611 333 863 333 658 500",
        96: "500 631 549 549 494 439 521 411 603 329 603 549 549 576 521 549 "
        "549 521 549 603 439 576 713 686 493 686 494 480 200 480 549",
        160: "750 620 247 549 167 713 500 753 753 753 753 1042 987 603 987 603",
        176: "400 549 411 549 549 713 494 460 549 549 549 549 1000 603 1000 658",
        192: "823 686 795 987 768 768 823 768 768 713 713 713 713 713 713 713",
        208: "768 713 790 790 890 823 549 250 713 603 603 1042 987 603 987 603",
        224: "494 329 790 790 786 713 384 384 384 384 384 384 494 494 494 494",
        241: "329 274 686 686 686 384 384 384 384 384 384 494 494 494",
    },
)

# ZapfDingbats font, by code of its built-in encoding
_ZAPFDINGBATS_WIDTHS = _code_widths(
    ZAPFDINGBATS_ENCODING,
    {
        32: "278 974 961 974 980 719 789 790 791 690 960 939 549 855 911 933",
        48: "911 945 974 755 846 762 761 571 677 763 760 759 754 494 552 537",
        64: "577 692 786 788 788 790 793 794 816 823 789 841 823 833 816 831",
        80: "923 744 723 749 790 792 695 776 768 792 759 707 708 682 701 826",
        96: "815 789 789 707 687 696 689 786 787 713 791 785 791 873 761 762",
        112: "762 759 759 892 892 788 784 438 138 277 415 392 392 668 668",
        128: "390 390 317 317 276 276 509 509 410 410 234 234 334 334",
        161: "732 544 544 910 667 760 760 776 595 694 626",
        # a120 to a159, the circled digits
        172: "788 788 788 788 788 788 788 788 788 788 788 788 788 788 788 788 "
        "788 788 788 788",
        192: "788 788 788 788 788 788 788 788 788 788 788 788 788 788 788 788 "
        "788 788 788 788",
        212: "894 838 1016 458 748 924 748 918 927 928 928 834 873 828 924 924 "
        "917 930 931 463 883 836 836 867 867 696 696 874",
        241: "874 760 946 771 865 771 888 967 888 831 873 927 970 918",
    },
)


@dataclass(frozen=True)
class StandardFontMetrics:
    """Metrics of one standard-14 font."""

    name: str
    widths: Mapping[str, int]
    ascent: int
    descent: int
    cap_height: int
    bbox: tuple[int, int, int, int]
    default_width: int

    def lookup(self, glyph: str) -> CharMetrics | None:
        """Returns the metrics of a glyph, or None if it is not catalogued."""
        width = self.widths.get(glyph)
        if width is None:
            return None
        return CharMetrics(width, 0)


_STANDARD_14: dict[str, StandardFontMetrics] = {
    metrics.name: metrics
    for metrics in (
        StandardFontMetrics(
            "Helvetica", _HELVETICA_WIDTHS, 718, -207, 718, (-166, -225, 1000, 931), 278
        ),
        StandardFontMetrics(
            "Helvetica-Bold",
            _HELVETICA_BOLD_WIDTHS,
            718,
            -207,
            718,
            (-170, -228, 1003, 962),
            278,
        ),
        StandardFontMetrics(
            "Helvetica-Oblique",
            _HELVETICA_WIDTHS,
            718,
            -207,
            718,
            (-170, -225, 1116, 931),
            278,
        ),
        StandardFontMetrics(
            "Helvetica-BoldOblique",
            _HELVETICA_BOLD_WIDTHS,
            718,
            -207,
            718,
            (-174, -228, 1114, 962),
            278,
        ),
        StandardFontMetrics(
            "Times-Roman", _TIMES_ROMAN_WIDTHS, 683, -217, 662, (-168, -218, 1000, 898), 250
        ),
        StandardFontMetrics(
            "Times-Bold", _TIMES_BOLD_WIDTHS, 683, -217, 676, (-168, -218, 1000, 935), 250
        ),
        StandardFontMetrics(
            "Times-Italic", _TIMES_ITALIC_WIDTHS, 683, -217, 653, (-169, -217, 1010, 883), 250
        ),
        StandardFontMetrics(
            "Times-BoldItalic",
            _TIMES_BOLD_ITALIC_WIDTHS,
            683,
            -217,
            669,
            (-200, -218, 996, 921),
            250,
        ),
        StandardFontMetrics(
            "Courier", _COURIER_WIDTHS, 629, -157, 562, (-23, -250, 715, 805), 600
        ),
        StandardFontMetrics(
            "Courier-Bold", _COURIER_WIDTHS, 629, -157, 562, (-113, -250, 749, 801), 600
        ),
        StandardFontMetrics(
            "Courier-Oblique", _COURIER_WIDTHS, 629, -157, 562, (-27, -250, 849, 805), 600
        ),
        StandardFontMetrics(
            "Courier-BoldOblique",
            _COURIER_WIDTHS,
            629,
            -157,
            562,
            (-57, -250, 869, 801),
            600,
        ),
        StandardFontMetrics(
            "Symbol", _SYMBOL_WIDTHS, 800, -200, 700, (-180, -293, 1090, 1010), 500
        ),
        StandardFontMetrics(
            "ZapfDingbats", _ZAPFDINGBATS_WIDTHS, 800, -200, 700, (-1, -143, 981, 820), 278
        ),
    )
}


def strip_subset_prefix(name: str) -> str:
    """Removes a subset tag such as ``AOMFKK+`` from a font name."""
    return _SUBSET_PREFIX_RE.sub("", name)


@lru_cache(maxsize=256)
def canonical_standard14_name(name: str) -> str | None:
    """Resolves a font name to one of the standard 14 font names.

    Accepts a leading slash, a subset prefix and the common aliases
    (``Arial`` -> ``Helvetica``, ``TimesNewRoman,Bold`` -> ``Times-Bold``).

    Returns:
        The standard font name, or None if the name is not a standard font.
    """
    name = strip_subset_prefix(name.lstrip("/"))
    if name in STANDARD_14_FONTS:
        return name
    return STANDARD_14_ALIASES.get(name)


def get_standard14_metrics(name: str) -> StandardFontMetrics | None:
    """Returns the metrics of a standard-14 font (aliases accepted)."""
    canonical = canonical_standard14_name(name)
    if canonical is None:
        return None
    return _STANDARD_14[canonical]


def lookup(font_name: str, glyph: str) -> CharMetrics | None:
    """Looks up a glyph's metrics in a standard font's table.

    Args:
        font_name: Standard-14 font name, alias or subset name.
        glyph: Glyph name.

    Returns:
        The glyph's metrics, or None if the font or the glyph is unknown.
    """
    metrics = get_standard14_metrics(font_name)
    if metrics is None:
        logger.debug("No built-in metrics for font %s", font_name)
        return None
    return metrics.lookup(glyph)
