# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Font models: encodings, CMaps, metrics and the font variants."""

from .cmap import CMap, DecodeResult, parse_cmap
from .composite import CIDFont, CIDSystemInfo, CompositeFont
from .constants import FALLBACK_WIDTH, STANDARD_14_FONTS
from .descriptor import FontDescriptor
from .encodings import Differences, SimpleEncoding
from .font import PdfFont, new_standard14_font, register_font_subtype
from .metrics import CharMetrics
from .simple import SimpleFont, Standard14Font
from .traversal import iter_page_fonts, load_page_fonts

__all__ = [
    # Facade
    "PdfFont",
    "new_standard14_font",
    "register_font_subtype",
    # Variants
    "SimpleFont",
    "Standard14Font",
    "CompositeFont",
    "CIDFont",
    "CIDSystemInfo",
    # Components
    "CMap",
    "parse_cmap",
    "DecodeResult",
    "SimpleEncoding",
    "Differences",
    "FontDescriptor",
    "CharMetrics",
    # Constants
    "FALLBACK_WIDTH",
    "STANDARD_14_FONTS",
    # Discovery
    "iter_page_fonts",
    "load_page_fonts",
]
