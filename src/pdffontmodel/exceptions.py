# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Custom exceptions for pdffontmodel."""


class FontModelError(Exception):
    """Base exception for all pdffontmodel errors."""


class MalformedDictionaryError(FontModelError):
    """A required key is missing or holds the wrong kind of object.

    Attributes:
        key: Name of the offending dictionary key (without leading slash).
        reason: Human-readable description of the problem.
    """

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"/{key}: {reason}")


class UnsupportedSubtypeError(FontModelError):
    """The font subtype is known but not implemented.

    Attributes:
        subtype: The subtype name (without leading slash).
    """

    def __init__(self, subtype: str, reason: str = "font subtype not supported") -> None:
        self.subtype = subtype
        super().__init__(f"/{subtype}: {reason}")


class UnknownStandardFontError(FontModelError):
    """Name is neither a standard 14 font nor one of its aliases."""


class CMapSyntaxError(FontModelError):
    """CMap stream could not be tokenized."""
