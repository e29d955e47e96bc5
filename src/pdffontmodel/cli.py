# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Click-based CLI for pdffontmodel.

Lists the fonts of a PDF's pages and optionally decodes the text shown
with them.
"""

# Standard Library
import logging
import sys
from pathlib import Path

# Third Party
import click
import pikepdf
from colorama import Fore, Style, init

# Local
from . import __version__
from .exceptions import FontModelError
from .fonts import PdfFont, load_page_fonts
from .fonts.cmap import DecodeResult
from .utils import setup_logging

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1
EXIT_FILE_NOT_FOUND = 2
EXIT_OPEN_FAILED = 3

# Text-showing operators and the index of their string operand
_SHOW_TEXT_OPERATORS = {"Tj": 0, "'": 0, '"': 2, "TJ": 0}

logger = logging.getLogger(__name__)


def print_success(msg: str) -> None:
    """Prints a success message in green.

    Args:
        msg: The message to output.
    """
    click.echo(f"{Fore.GREEN}✓{Style.RESET_ALL} {msg}")


def print_error(msg: str) -> None:
    """Prints an error message in red.

    Args:
        msg: The error message to output.
    """
    click.echo(f"{Fore.RED}✗ Error:{Style.RESET_ALL} {msg}", err=True)


def print_warning(msg: str) -> None:
    """Prints a warning in yellow.

    Args:
        msg: The warning to output.
    """
    click.echo(f"{Fore.YELLOW}⚠{Style.RESET_ALL} {msg}")


def describe_encoding(font: PdfFont) -> str:
    """Short human-readable description of a font's encoding."""
    if font.is_composite:
        return font.font.encoding_name or "embedded CMap"
    encoding = font.encoding
    if encoding is None:
        return "-"
    label = encoding.base_name or "built-in"
    if encoding.differences:
        label += f" + {len(encoding.differences)} differences"
    return label


def _print_font(key: str, font: PdfFont) -> None:
    to_unicode = "yes" if font.to_unicode is not None else "no"
    click.echo(
        f"  {Fore.CYAN}{key}{Style.RESET_ALL}  {font.subtype}  "
        f"{font.base_font or '-'}  encoding={describe_encoding(font)}  "
        f"ToUnicode={to_unicode}"
    )


def _string_operands(operator: str, operands: list) -> list[bytes]:
    """Returns the strings shown by a text-showing instruction."""
    index = _SHOW_TEXT_OPERATORS[operator]
    if len(operands) <= index:
        return []
    operand = operands[index]
    if operator == "TJ":
        if not isinstance(operand, pikepdf.Array):
            return []
        return [bytes(item) for item in operand if isinstance(item, pikepdf.String)]
    if isinstance(operand, pikepdf.String):
        return [bytes(operand)]
    return []


def extract_page_text(
    page: pikepdf.Page, fonts: dict[str, PdfFont]
) -> list[DecodeResult]:
    """Decodes the text shown by a page's content stream.

    Args:
        page: The page to read.
        fonts: The page's fonts by resource key.

    Returns:
        One decode result per text-showing instruction.
    """
    results: list[DecodeResult] = []
    current: PdfFont | None = None
    for instruction in pikepdf.parse_content_stream(page):
        op = str(instruction.operator)
        operands = instruction.operands
        if op == "Tf" and operands:
            current = fonts.get(str(operands[0]))
            if current is None:
                logger.debug("Font %s not available", operands[0])
        elif op in _SHOW_TEXT_OPERATORS and current is not None:
            for data in _string_operands(op, list(operands)):
                results.append(current.decode(data))
    return results


def _process_page(number: int, page: pikepdf.Page, show_text: bool) -> int:
    """Prints one page's fonts (and text); returns its decode miss count."""
    click.echo(f"Page {number}:")
    fonts = load_page_fonts(page)
    if not fonts:
        click.echo("  (no fonts)")
    for key, font in fonts.items():
        _print_font(key, font)
    if not show_text:
        return 0

    misses = 0
    for result in extract_page_text(page, fonts):
        if result.text:
            click.echo(f"    {result.text}")
        misses += result.num_misses
    if misses:
        print_warning(f"Page {number}: {misses} character code(s) without Unicode mapping")
    return misses


@click.command()
@click.argument("input_path", required=False, type=click.Path())
@click.option(
    "-p",
    "--page",
    "page_number",
    type=int,
    default=None,
    help="Only process this page (1-based)",
)
@click.option(
    "-t",
    "--text",
    "show_text",
    is_flag=True,
    help="Decode and print the text shown with each font",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Suppress log messages and the summary",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Detailed output",
)
@click.version_option(version=__version__)
def main(
    input_path: str | None,
    page_number: int | None,
    show_text: bool,
    quiet: bool,
    verbose: bool,
) -> None:
    """Lists the fonts of a PDF file and decodes their text.

    INPUT is the path to the PDF file.
    """
    # Initialize colorama for Windows compatibility
    init()

    if input_path is None:
        click.echo(click.get_current_context().get_help())
        sys.exit(EXIT_GENERAL_ERROR)

    setup_logging(verbose=verbose, quiet=quiet)

    path = Path(input_path)
    if not path.is_file():
        print_error(f"File not found: {input_path}")
        sys.exit(EXIT_FILE_NOT_FOUND)

    try:
        pdf = pikepdf.open(path)
    except pikepdf.PasswordError:
        print_error(f"{path.name} is encrypted")
        sys.exit(EXIT_OPEN_FAILED)
    except pikepdf.PdfError as e:
        print_error(f"Cannot open {path.name}: {e}")
        sys.exit(EXIT_OPEN_FAILED)

    exit_code = EXIT_SUCCESS
    with pdf:
        pages = list(enumerate(pdf.pages, start=1))
        if page_number is not None:
            if not 1 <= page_number <= len(pages):
                print_error(
                    f"Page {page_number} out of range (document has {len(pages)} pages)"
                )
                sys.exit(EXIT_GENERAL_ERROR)
            pages = [pages[page_number - 1]]

        try:
            total_misses = sum(
                _process_page(number, page, show_text) for number, page in pages
            )
        except (FontModelError, pikepdf.PdfError) as e:
            print_error(str(e))
            exit_code = EXIT_GENERAL_ERROR
        except Exception as e:
            logger.exception("Unexpected error")
            print_error(f"Unexpected error: {e}")
            exit_code = EXIT_GENERAL_ERROR
        else:
            if not quiet:
                print_success(
                    f"{path.name}: {len(pages)} page(s) processed"
                    + (f", {total_misses} decode miss(es)" if show_text else "")
                )

    sys.exit(exit_code)
