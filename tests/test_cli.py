# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Unit tests for cli.py."""

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from conftest import new_page, new_pdf, open_pdf
from pikepdf import Array, Dictionary, Name

from pdffontmodel import __version__
from pdffontmodel.cli import (
    EXIT_FILE_NOT_FOUND,
    EXIT_GENERAL_ERROR,
    EXIT_OPEN_FAILED,
    EXIT_SUCCESS,
    describe_encoding,
    extract_page_text,
    main,
)
from pdffontmodel.exceptions import MalformedDictionaryError
from pdffontmodel.fonts import PdfFont, load_page_fonts


@pytest.fixture
def runner() -> CliRunner:
    """CLI Test Runner."""
    return CliRunner()


class TestCliHelp:
    """Tests for --help option."""

    def test_cli_help(self, runner: CliRunner) -> None:
        """--help returns exit code 0 and shows options."""
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "--page" in result.output
        assert "--text" in result.output
        assert "--quiet" in result.output
        assert "--verbose" in result.output

    def test_cli_no_input(self, runner: CliRunner) -> None:
        """Without input the help is shown with a general error."""
        result = runner.invoke(main, [])

        assert result.exit_code == EXIT_GENERAL_ERROR
        assert "--page" in result.output


class TestCliVersion:
    """Tests for --version option."""

    def test_cli_version(self, runner: CliRunner) -> None:
        """--version returns exit code 0 and shows version."""
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestCliErrors:
    """Tests for input errors."""

    def test_file_not_found(self, runner: CliRunner, tmp_dir: Path) -> None:
        """Missing input gives EXIT_FILE_NOT_FOUND."""
        result = runner.invoke(main, [str(tmp_dir / "missing.pdf")])

        assert result.exit_code == EXIT_FILE_NOT_FOUND
        assert "File not found" in result.output

    def test_encrypted_pdf(self, runner: CliRunner, encrypted_pdf: Path) -> None:
        """PDFs needing a password give EXIT_OPEN_FAILED."""
        result = runner.invoke(main, [str(encrypted_pdf)])

        assert result.exit_code == EXIT_OPEN_FAILED
        assert "encrypted" in result.output

    def test_not_a_pdf(self, runner: CliRunner, tmp_dir: Path) -> None:
        """Unparsable files give EXIT_OPEN_FAILED."""
        path = tmp_dir / "garbage.pdf"
        path.write_bytes(b"this is not a pdf")

        result = runner.invoke(main, [str(path)])

        assert result.exit_code == EXIT_OPEN_FAILED
        assert "Cannot open" in result.output

    def test_page_out_of_range(self, runner: CliRunner, pdf_with_text: Path) -> None:
        """A page number past the end is rejected."""
        result = runner.invoke(main, [str(pdf_with_text), "-p", "5"])

        assert result.exit_code == EXIT_GENERAL_ERROR
        assert "out of range" in result.output

    def test_font_model_error(self, runner: CliRunner, pdf_with_text: Path) -> None:
        """Font model errors are reported with a general error."""
        with patch(
            "pdffontmodel.cli.load_page_fonts",
            side_effect=MalformedDictionaryError("Font", "not a dictionary"),
        ):
            result = runner.invoke(main, [str(pdf_with_text)])

        assert result.exit_code == EXIT_GENERAL_ERROR
        assert "/Font: not a dictionary" in result.output

    def test_unexpected_error(self, runner: CliRunner, pdf_with_text: Path) -> None:
        """Unexpected exceptions are reported, not raised."""
        with patch("pdffontmodel.cli.load_page_fonts", side_effect=RuntimeError("boom")):
            result = runner.invoke(main, [str(pdf_with_text)])

        assert result.exit_code == EXIT_GENERAL_ERROR
        assert "Unexpected error: boom" in result.output


class TestCliListFonts:
    """Tests for the font listing."""

    def test_no_fonts(self, runner: CliRunner, sample_pdf: Path) -> None:
        """Pages without fonts are reported as such."""
        result = runner.invoke(main, [str(sample_pdf)])

        assert result.exit_code == EXIT_SUCCESS
        assert "Page 1:" in result.output
        assert "(no fonts)" in result.output
        assert "1 page(s) processed" in result.output

    def test_lists_fonts(self, runner: CliRunner, pdf_with_text: Path) -> None:
        """Every page's fonts are listed with their encoding."""
        result = runner.invoke(main, [str(pdf_with_text)])

        assert result.exit_code == EXIT_SUCCESS
        assert "/F1" in result.output
        assert "Helvetica" in result.output
        assert "encoding=WinAnsiEncoding" in result.output
        assert "/F2" in result.output
        assert "ABCDEF+Subset" in result.output
        assert "ToUnicode=yes" in result.output
        assert "2 page(s) processed" in result.output
        assert "Hello World" not in result.output

    def test_single_page(self, runner: CliRunner, pdf_with_text: Path) -> None:
        """--page restricts output to one page."""
        result = runner.invoke(main, [str(pdf_with_text), "--page", "2"])

        assert result.exit_code == EXIT_SUCCESS
        assert "Page 1:" not in result.output
        assert "Page 2:" in result.output
        assert "/F1" not in result.output

    def test_quiet_suppresses_summary(self, runner: CliRunner, pdf_with_text: Path) -> None:
        """--quiet drops the summary line."""
        result = runner.invoke(main, [str(pdf_with_text), "--quiet"])

        assert result.exit_code == EXIT_SUCCESS
        assert "page(s) processed" not in result.output


class TestCliText:
    """Tests for --text."""

    def test_decodes_text(self, runner: CliRunner, pdf_with_text: Path) -> None:
        """Shown strings are decoded with their fonts."""
        result = runner.invoke(main, [str(pdf_with_text), "-p", "1", "--text"])

        assert result.exit_code == EXIT_SUCCESS
        assert "    Hello World" in result.output
        assert "0 decode miss(es)" in result.output

    def test_reports_misses(self, runner: CliRunner, pdf_with_text: Path) -> None:
        """Codes without Unicode mapping are counted per page."""
        result = runner.invoke(main, [str(pdf_with_text), "-p", "2", "-t"])

        assert result.exit_code == EXIT_SUCCESS
        assert "    AB" in result.output
        assert "Page 2: 1 character code(s) without Unicode mapping" in result.output
        assert "1 decode miss(es)" in result.output


class TestExtractPageText:
    """Tests for extract_page_text."""

    def test_text_operators(self, pdf_with_text: Path) -> None:
        """Tj and TJ strings are decoded in content order."""
        pdf = open_pdf(pdf_with_text)
        page = pdf.pages[1]
        results = extract_page_text(page, load_page_fonts(page))

        assert [r.text for r in results] == ["AB", "A", "B"]
        assert [r.num_misses for r in results] == [1, 0, 0]

    def test_quote_operators(self) -> None:
        """' and " show their string operand."""
        pdf = new_pdf()
        font = Dictionary(
            Type=Name.Font,
            Subtype=Name.Type1,
            BaseFont=Name.Courier,
            Encoding=Name.WinAnsiEncoding,
        )
        page = new_page(
            pdf,
            Dictionary(Font=Dictionary(F1=font)),
            b"BT /F1 10 Tf 12 TL (one) ' 1 2 (two) \" ET",
        )

        results = extract_page_text(page, load_page_fonts(page))

        assert [r.text for r in results] == ["one", "two"]

    def test_unknown_font_is_ignored(self) -> None:
        """Strings shown with a missing font resource are skipped."""
        pdf = new_pdf()
        page = new_page(pdf, Dictionary(), b"BT /F9 10 Tf (lost) Tj ET")

        assert extract_page_text(page, {}) == []


class TestDescribeEncoding:
    """Tests for describe_encoding."""

    def test_named_encoding_with_differences(self) -> None:
        """Base name and the number of differences are shown."""
        font = PdfFont.from_object(
            Dictionary(
                Type=Name.Font,
                Subtype=Name.Type1,
                BaseFont=Name.Helvetica,
                Encoding=Dictionary(
                    BaseEncoding=Name.WinAnsiEncoding,
                    Differences=Array([128, Name.bullet, Name.dagger]),
                ),
            )
        )

        assert describe_encoding(font) == "WinAnsiEncoding + 2 differences"

    def test_composite(self) -> None:
        """Type0 fonts show their CMap name."""
        font = PdfFont.from_object(
            Dictionary(
                Type=Name.Font,
                Subtype=Name.Type0,
                BaseFont=Name("/Noto"),
                Encoding=Name("/Identity-H"),
                DescendantFonts=Array(
                    [
                        Dictionary(
                            Type=Name.Font,
                            Subtype=Name.CIDFontType0,
                            BaseFont=Name("/Noto"),
                        )
                    ]
                ),
            )
        )

        assert describe_encoding(font) == "Identity-H"
