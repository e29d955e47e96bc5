# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Font facade: builds the right font model for a font dictionary.

Example:
    >>> font = PdfFont.from_object(page.Resources.Font.F1)
    >>> font.decode(b"Hello").text
    'Hello'
"""

import logging
from collections.abc import Callable

import pikepdf

from ..exceptions import (
    MalformedDictionaryError,
    UnknownStandardFontError,
    UnsupportedSubtypeError,
)
from ..utils import resolve_indirect
from .base import FontBase, get_name
from .cmap import CMap, DecodeResult
from .composite import CompositeFont
from .constants import CIDFONT_SUBTYPES, SIMPLE_FONT_SUBTYPES
from .descriptor import FontDescriptor
from .encodings import SimpleEncoding
from .metrics import CharMetrics, canonical_standard14_name
from .simple import SimpleFont, Standard14Font

logger = logging.getLogger(__name__)

FontBuilder = Callable[[pikepdf.Dictionary], FontBase]

_FONT_BUILDERS: dict[str, FontBuilder] = {}


def register_font_subtype(subtype: str) -> Callable[[FontBuilder], FontBuilder]:
    """Registers a builder for a font ``/Subtype``.

    The builder receives the resolved font dictionary and returns a font
    model implementing ``decode``, ``metrics``, ``glyph_metrics`` and
    ``to_object``. Registering an existing subtype replaces its builder.

    Example:
        >>> @register_font_subtype("Type3")
        ... def build_type3(obj):
        ...     return MyType3Font(obj)
    """

    def decorator(builder: FontBuilder) -> FontBuilder:
        _FONT_BUILDERS[subtype.lstrip("/")] = builder
        return builder

    return decorator


def _is_bare_standard_font(obj: pikepdf.Dictionary) -> bool:
    """True for a standard 14 font without its own widths or descriptor."""
    if "/Widths" in obj or "/FontDescriptor" in obj:
        return False
    base_font = get_name(obj, "BaseFont")
    return base_font is not None and canonical_standard14_name(base_font) is not None


def _build_simple_font(obj: pikepdf.Dictionary) -> FontBase:
    if _is_bare_standard_font(obj):
        return Standard14Font(obj)
    return SimpleFont(obj)


for _subtype in SIMPLE_FONT_SUBTYPES:
    register_font_subtype(_subtype)(_build_simple_font)


@register_font_subtype("Type0")
def _build_composite_font(obj: pikepdf.Dictionary) -> FontBase:
    return CompositeFont(obj)


class PdfFont:
    """A parsed PDF font.

    Wraps one of the font variants (:class:`SimpleFont`,
    :class:`Standard14Font`, :class:`CompositeFont`) and forwards the
    decode, metrics and serialization operations to it. Instances are
    not modified after construction.
    """

    def __init__(self, font: FontBase) -> None:
        self._font = font

    @classmethod
    def from_object(cls, obj: pikepdf.Object) -> "PdfFont":
        """Builds a font model from a font dictionary.

        Args:
            obj: Font dictionary (or an indirect reference to one).

        Returns:
            The font model.

        Raises:
            MalformedDictionaryError: If a required key is missing or an
                entry has the wrong object type.
            UnsupportedSubtypeError: If the font subtype is not handled.
        """
        obj = resolve_indirect(obj)
        if not isinstance(obj, pikepdf.Dictionary):
            raise MalformedDictionaryError("Font", "not a dictionary")
        subtype = get_name(obj, "Subtype", required=True)
        builder = _FONT_BUILDERS.get(subtype)
        if builder is None:
            if subtype in CIDFONT_SUBTYPES:
                raise UnsupportedSubtypeError(
                    subtype, "CIDFonts are only valid as descendants of a Type0 font"
                )
            raise UnsupportedSubtypeError(subtype)
        font = builder(obj)
        logger.debug("Loaded %r", font)
        return cls(font)

    def __repr__(self) -> str:
        return f"PdfFont({self._font!r})"

    @property
    def font(self) -> FontBase:
        """The underlying font variant."""
        return self._font

    @property
    def subtype(self) -> str:
        return self._font.subtype

    @property
    def base_font(self) -> str | None:
        return self._font.base_font

    @property
    def is_composite(self) -> bool:
        return self._font.is_composite

    @property
    def is_standard14(self) -> bool:
        return isinstance(self._font, Standard14Font)

    @property
    def encoding(self) -> SimpleEncoding | CMap | None:
        """Simple fonts: the code <-> glyph table. Type0: the encoding CMap."""
        if isinstance(self._font, CompositeFont):
            return self._font.cmap
        return getattr(self._font, "encoding", None)

    @property
    def descriptor(self) -> FontDescriptor | None:
        return getattr(self._font, "descriptor", None)

    @property
    def to_unicode(self) -> CMap | None:
        return self._font.to_unicode

    def decode(self, data: bytes) -> DecodeResult:
        """Decodes a string operand to Unicode text.

        Never raises for unmapped codes; they are counted in
        ``num_misses``.
        """
        return self._font.decode(bytes(data))

    def metrics(self, code: int) -> float:
        """Advance width of a character code (simple) or CID (Type0)."""
        return self._font.metrics(code)

    def glyph_metrics(self, glyph: str) -> CharMetrics | None:
        """Metrics of a glyph by name, or None if unknown."""
        return self._font.glyph_metrics(glyph)

    def to_object(self) -> pikepdf.Dictionary:
        """Serializes the font back to a new direct dictionary."""
        return self._font.to_object()


def new_standard14_font(name: str) -> PdfFont:
    """Builds one of the standard 14 fonts.

    Args:
        name: Standard font name or alias (``Courier``, ``Arial,Bold``).

    Raises:
        UnknownStandardFontError: If the name is not a standard font.
    """
    canonical = canonical_standard14_name(name)
    if canonical is None:
        raise UnknownStandardFontError(f"{name} is not a standard 14 font")
    obj = pikepdf.Dictionary(
        Type=pikepdf.Name.Font,
        Subtype=pikepdf.Name.Type1,
        BaseFont=pikepdf.Name("/" + canonical),
    )
    return PdfFont(Standard14Font(obj))
