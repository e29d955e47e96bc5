# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Font constants shared by the font model."""

# Standard 14 PDF fonts (not embedded in standard PDFs)
STANDARD_14_FONTS = frozenset(
    {
        "Courier",
        "Courier-Bold",
        "Courier-BoldOblique",
        "Courier-Oblique",
        "Helvetica",
        "Helvetica-Bold",
        "Helvetica-BoldOblique",
        "Helvetica-Oblique",
        "Times-Roman",
        "Times-Bold",
        "Times-BoldItalic",
        "Times-Italic",
        "Symbol",
        "ZapfDingbats",
    }
)

# Symbol fonts (built-in encoding is not StandardEncoding)
SYMBOL_FONTS = frozenset({"Symbol", "ZapfDingbats"})

# Alternative names that viewers map onto the standard 14 fonts
# (PDF 1.7 Reference, implementation note for section 5.5.1)
STANDARD_14_ALIASES: dict[str, str] = {
    "Arial": "Helvetica",
    "Arial,Bold": "Helvetica-Bold",
    "Arial,Italic": "Helvetica-Oblique",
    "Arial,BoldItalic": "Helvetica-BoldOblique",
    "ArialMT": "Helvetica",
    "Arial-BoldMT": "Helvetica-Bold",
    "Arial-ItalicMT": "Helvetica-Oblique",
    "Arial-BoldItalicMT": "Helvetica-BoldOblique",
    "CourierNew": "Courier",
    "CourierNew,Bold": "Courier-Bold",
    "CourierNew,Italic": "Courier-Oblique",
    "CourierNew,BoldItalic": "Courier-BoldOblique",
    "CourierNewPSMT": "Courier",
    "TimesNewRoman": "Times-Roman",
    "TimesNewRoman,Bold": "Times-Bold",
    "TimesNewRoman,Italic": "Times-Italic",
    "TimesNewRoman,BoldItalic": "Times-BoldItalic",
    "TimesNewRomanPSMT": "Times-Roman",
    "TimesNewRomanPS-BoldMT": "Times-Bold",
    "TimesNewRomanPS-ItalicMT": "Times-Italic",
    "TimesNewRomanPS-BoldItalicMT": "Times-BoldItalic",
}

# Font descriptor /Flags bits (ISO 32000-1, Table 123)
FLAG_FIXED_PITCH = 1
FLAG_SERIF = 1 << 1
FLAG_SYMBOLIC = 1 << 2
FLAG_SCRIPT = 1 << 3
FLAG_NONSYMBOLIC = 1 << 5
FLAG_ITALIC = 1 << 6
FLAG_ALL_CAP = 1 << 16
FLAG_SMALL_CAP = 1 << 17
FLAG_FORCE_BOLD = 1 << 18

# Width used when no other source yields a width for a simple font
# (Courier width)
FALLBACK_WIDTH = 600

# Default /DW of a CIDFont (ISO 32000-1, Table 117)
DEFAULT_CID_WIDTH = 1000

# Simple font subtypes handled by the simple font model
SIMPLE_FONT_SUBTYPES = frozenset({"Type1", "MMType1", "TrueType"})

# Descendant CIDFont subtypes
CIDFONT_SUBTYPES = frozenset({"CIDFontType0", "CIDFontType2"})

# Predefined CMaps with a 2-byte identity code space
IDENTITY_ENCODING_NAMES = frozenset({"Identity-H", "Identity-V"})

# UTF-16/UCS-2 CMap encoding names where character codes are already Unicode
UTF16_ENCODING_NAMES = frozenset(
    {
        "UniJIS-UTF16-H",
        "UniJIS-UTF16-V",
        "UniGB-UTF16-H",
        "UniGB-UTF16-V",
        "UniCNS-UTF16-H",
        "UniCNS-UTF16-V",
        "UniKS-UTF16-H",
        "UniKS-UTF16-V",
        "UniJIS-UCS2-H",
        "UniJIS-UCS2-V",
        "UniGB-UCS2-H",
        "UniGB-UCS2-V",
        "UniCNS-UCS2-H",
        "UniCNS-UCS2-V",
        "UniKS-UCS2-H",
        "UniKS-UCS2-V",
    }
)
