# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""pdffontmodel - PDF font dictionaries as decodable, measurable models."""

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    CMapSyntaxError,
    FontModelError,
    MalformedDictionaryError,
    UnknownStandardFontError,
    UnsupportedSubtypeError,
)
from .fonts import (
    CharMetrics,
    DecodeResult,
    PdfFont,
    load_page_fonts,
    new_standard14_font,
    register_font_subtype,
)

try:
    __version__ = version("pdffontmodel")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "__version__",
    "PdfFont",
    "new_standard14_font",
    "register_font_subtype",
    "load_page_fonts",
    "DecodeResult",
    "CharMetrics",
    "FontModelError",
    "MalformedDictionaryError",
    "UnsupportedSubtypeError",
    "UnknownStandardFontError",
    "CMapSyntaxError",
]
