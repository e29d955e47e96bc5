# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Pytest fixtures for the pdffontmodel test suite."""

import logging
from pathlib import Path

import pikepdf
import pytest
from pikepdf import Array, Dictionary, Name, Pdf

# -- Global PDF tracker --

_tracked_pdfs: list[Pdf] = []


@pytest.fixture(autouse=True)
def _auto_close_pdfs():
    """Close all tracked PDF objects after each test."""
    yield
    for pdf in reversed(_tracked_pdfs):
        try:
            pdf.close()
        except Exception:
            pass
    _tracked_pdfs.clear()


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo setup_logging() calls made by a test (CLI runs included)."""
    package_logger = logging.getLogger("pdffontmodel")
    level = package_logger.level
    handlers = list(package_logger.handlers)
    yield
    package_logger.setLevel(level)
    package_logger.handlers[:] = handlers


def new_pdf(**kwargs) -> Pdf:
    """Create a tracked Pdf (auto-closed after test)."""
    pdf = Pdf.new(**kwargs)
    _tracked_pdfs.append(pdf)
    return pdf


def open_pdf(source, **kwargs) -> Pdf:
    """Open a tracked Pdf (auto-closed after test)."""
    pdf = Pdf.open(source, **kwargs)
    _tracked_pdfs.append(pdf)
    return pdf


_CMAP_HEADER = b"""/CIDInit /ProcSet findresource begin
12 dict begin
begincmap
/CIDSystemInfo << /Registry (Adobe) /Ordering (UCS) /Supplement 0 >> def
/CMapName /Adobe-Identity-UCS def
/CMapType 2 def
"""

_CMAP_FOOTER = b"""
endcmap
CMapName currentdict /CMap defineresource pop
end
end
"""


def cmap_data(body: bytes) -> bytes:
    """Wraps CMap mapping blocks in the usual ToUnicode boilerplate."""
    return _CMAP_HEADER + body + _CMAP_FOOTER


def cmap_stream(pdf: Pdf, body: bytes) -> pikepdf.Stream:
    """Creates a ToUnicode CMap stream from its mapping blocks."""
    return pdf.make_stream(cmap_data(body))


def new_page(pdf: Pdf, resources: Dictionary, content: bytes = b"") -> pikepdf.Page:
    """Appends a Letter-sized page with the given resources and content."""
    page_dict = Dictionary(
        Type=Name.Page,
        MediaBox=Array([0, 0, 612, 792]),
        Resources=resources,
    )
    page_dict[Name.Contents] = pdf.make_stream(content)
    pdf.pages.append(pikepdf.Page(page_dict))
    return pdf.pages[-1]


# -- Fixtures --


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Temporary directory for tests.

    Args:
        tmp_path: Pytest-provided temporary directory.

    Returns:
        Path to the temporary directory.
    """
    return tmp_path


@pytest.fixture
def sample_pdf(tmp_dir: Path) -> Path:
    """Minimal valid PDF on disk, one page without fonts.

    Args:
        tmp_dir: Temporary directory.

    Returns:
        Path to the PDF file.
    """
    pdf = new_pdf()
    page = pikepdf.Page(Dictionary(Type=Name.Page, MediaBox=Array([0, 0, 612, 792])))
    pdf.pages.append(page)

    pdf_path = tmp_dir / "sample.pdf"
    pdf.save(pdf_path)
    return pdf_path


@pytest.fixture
def encrypted_pdf(tmp_dir: Path) -> Path:
    """Encrypted PDF for error tests.

    Args:
        tmp_dir: Temporary directory.

    Returns:
        Path to the encrypted PDF file.
    """
    pdf = new_pdf()
    page = pikepdf.Page(Dictionary(Type=Name.Page, MediaBox=Array([0, 0, 612, 792])))
    pdf.pages.append(page)

    encrypted_path = tmp_dir / "encrypted.pdf"
    pdf.save(
        encrypted_path,
        encryption=pikepdf.Encryption(owner="ownerpass", user="userpass"),
    )
    return encrypted_path


@pytest.fixture
def pdf_with_text(tmp_dir: Path) -> Path:
    """PDF with text shown in a standard font and a subset TrueType font.

    Page 1 uses Helvetica (no widths, no descriptor) for ``Hello World``.
    Page 2 uses a TrueType font whose ToUnicode map covers only
    ``A`` and ``B``, so the string ``ABC`` decodes with one miss.

    Args:
        tmp_dir: Temporary directory.

    Returns:
        Path to the PDF file with text.
    """
    pdf = new_pdf()

    helvetica = Dictionary(
        Type=Name.Font,
        Subtype=Name.Type1,
        BaseFont=Name("/Helvetica"),
        Encoding=Name.WinAnsiEncoding,
    )
    new_page(
        pdf,
        Dictionary(Font=Dictionary(F1=helvetica)),
        b"BT /F1 12 Tf 100 700 Td (Hello World) Tj ET",
    )

    subset = Dictionary(
        Type=Name.Font,
        Subtype=Name.TrueType,
        BaseFont=Name("/ABCDEF+Subset"),
        FirstChar=1,
        LastChar=3,
        Widths=Array([500, 600, 700]),
        ToUnicode=cmap_stream(
            pdf,
            b"1 begincodespacerange\n<00> <FF>\nendcodespacerange\n"
            b"2 beginbfchar\n<01> <0041>\n<02> <0042>\nendbfchar\n",
        ),
    )
    subset.FontDescriptor = Dictionary(
        Type=Name.FontDescriptor,
        FontName=Name("/ABCDEF+Subset"),
        Flags=4,
        FontBBox=Array([0, -200, 1000, 800]),
        ItalicAngle=0,
        Ascent=800,
        Descent=-200,
        CapHeight=700,
        StemV=80,
    )
    new_page(
        pdf,
        Dictionary(Font=Dictionary(F2=subset)),
        b"BT /F2 10 Tf 72 720 Td <010203> Tj [<01> -120 <02>] TJ ET",
    )

    pdf_path = tmp_dir / "with_text.pdf"
    pdf.save(pdf_path)
    return pdf_path
