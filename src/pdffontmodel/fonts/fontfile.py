# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Built-in encodings of embedded font programs.

A simple font without an explicit base encoding uses the encoding built
into its font program. Embedded programs are only read for that table;
outlines and hinting are never interpreted.
"""

import logging
import os
import tempfile
from collections.abc import Mapping
from io import BytesIO

import pikepdf
from fontTools.cffLib import CFFFontSet
from fontTools.encodings.StandardEncoding import StandardEncoding
from fontTools.t1Lib import T1Font
from fontTools.ttLib import TTFont

from .encodings import STANDARD_ENCODING

logger = logging.getLogger(__name__)

# Symbolic TrueType fonts map single-byte codes into this range of the
# (3, 0) cmap subtable
_SYMBOL_CMAP_OFFSETS = (0xF000, 0xF100, 0xF200, 0x0000)


def read_type1_encoding(data: bytes) -> Mapping[int, str] | None:
    """Reads the encoding vector of a Type 1 program.

    The program is interpreted with fontTools, so entries that live in
    the encrypted portion are read as well.

    Args:
        data: Decoded ``/FontFile`` stream data.

    Returns:
        Code -> glyph table, or None if the program declares none.
    """
    # T1Font requires a file path, not a BytesIO
    suffix = ".pfa" if data[:2] == b"%!" else ".pfb"
    tmp_fd, tmp_path = tempfile.mkstemp(suffix=suffix)
    try:
        os.write(tmp_fd, data)
    finally:
        os.close(tmp_fd)
    try:
        t1 = T1Font(tmp_path)
        t1.parse()
    finally:
        os.unlink(tmp_path)

    encoding = t1.font.get("Encoding")
    if encoding is None:
        return None
    if encoding == "StandardEncoding" or encoding == StandardEncoding:
        return STANDARD_ENCODING
    if isinstance(encoding, str):
        logger.debug("Type 1 font uses %s", encoding)
        return None
    table = {
        code: glyph
        for code, glyph in enumerate(encoding[:256])
        if isinstance(glyph, str) and glyph != ".notdef"
    }
    return table or None


def read_cff_encoding(data: bytes) -> Mapping[int, str] | None:
    """Reads the built-in encoding of a bare CFF program (``/FontFile3``)."""
    cff = CFFFontSet()
    cff.decompile(BytesIO(data), None)
    top = cff[cff.fontNames[0]]
    if hasattr(top, "ROS"):
        # CID-keyed fonts have no encoding
        return None
    encoding = getattr(top, "Encoding", "StandardEncoding")
    if encoding == "StandardEncoding":
        return STANDARD_ENCODING
    if isinstance(encoding, str):
        # ExpertEncoding glyphs have no Unicode in the standard tables
        logger.debug("CFF font uses %s", encoding)
        return None
    return {
        code: glyph
        for code, glyph in enumerate(encoding)
        if glyph and glyph != ".notdef"
    }


def read_truetype_encoding(data: bytes) -> Mapping[int, str] | None:
    """Reads the single-byte encoding of a symbolic TrueType program.

    Uses the (3, 0) Microsoft Symbol cmap, else the (1, 0) Macintosh cmap.
    """
    font = TTFont(BytesIO(data), lazy=True)
    try:
        if "cmap" not in font:
            return None
        cmap_table = font["cmap"]
        subtable = cmap_table.getcmap(3, 0)
        if subtable is not None:
            for offset in _SYMBOL_CMAP_OFFSETS:
                encoding = {
                    code - offset: glyph
                    for code, glyph in subtable.cmap.items()
                    if offset <= code < offset + 256
                }
                if encoding:
                    return encoding
        subtable = cmap_table.getcmap(1, 0)
        if subtable is not None:
            return {code: glyph for code, glyph in subtable.cmap.items() if code < 256}
        return None
    finally:
        font.close()


def read_builtin_encoding(
    key: str, stream: pikepdf.Stream
) -> Mapping[int, str] | None:
    """Returns the built-in encoding of an embedded font program.

    Failures to read the program are logged and reported as no built-in
    encoding.

    Args:
        key: Descriptor key holding the program (``FontFile``,
            ``FontFile2`` or ``FontFile3``).
        stream: The font program stream.
    """
    try:
        data = bytes(stream.read_bytes())
        if key == "FontFile":
            return read_type1_encoding(data)
        if key == "FontFile2":
            return read_truetype_encoding(data)
        if key == "FontFile3":
            subtype = stream.stream_dict.get("/Subtype")
            if subtype == pikepdf.Name("/OpenType"):
                return read_truetype_encoding(data)
            return read_cff_encoding(data)
    except Exception as e:
        logger.debug("Could not read built-in encoding from %s: %s", key, e)
    return None
