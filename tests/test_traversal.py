# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Tests for finding the fonts of a page."""

import logging

from conftest import new_page, new_pdf
from pikepdf import Array, Dictionary, Name

from pdffontmodel.fonts import PdfFont, iter_page_fonts, load_page_fonts


def _font(pdf, base_font: str):
    return pdf.make_indirect(
        Dictionary(
            Type=Name.Font,
            Subtype=Name.Type1,
            BaseFont=Name("/" + base_font),
            Encoding=Name.WinAnsiEncoding,
        )
    )


def _form(pdf, resources: Dictionary | None = None):
    form = pdf.make_stream(b"")
    form.Type = Name.XObject
    form.Subtype = Name.Form
    form.BBox = Array([0, 0, 100, 100])
    if resources is not None:
        form.Resources = resources
    return form


class TestIterPageFonts:
    """Tests for iter_page_fonts."""

    def test_page_fonts(self) -> None:
        """Page-level fonts are yielded in resource order."""
        pdf = new_pdf()
        page = new_page(
            pdf,
            Dictionary(Font=Dictionary(F1=_font(pdf, "Helvetica"), F2=_font(pdf, "Courier"))),
        )
        assert [key for key, _ in iter_page_fonts(page)] == ["/F1", "/F2"]

    def test_page_without_resources(self) -> None:
        """A page without resources has no fonts."""
        pdf = new_pdf()
        pdf.add_blank_page()
        assert list(iter_page_fonts(pdf.pages[0])) == []

    def test_form_xobject_fonts(self) -> None:
        """Fonts of Form XObjects follow the page fonts."""
        pdf = new_pdf()
        form = _form(pdf, Dictionary(Font=Dictionary(F9=_font(pdf, "Times-Roman"))))
        page = new_page(
            pdf,
            Dictionary(
                Font=Dictionary(F1=_font(pdf, "Helvetica")),
                XObject=Dictionary(Fm0=form),
            ),
        )
        found = list(iter_page_fonts(page))
        assert [key for key, _ in found] == ["/F1", "/F9"]
        assert found[1][1].BaseFont == Name("/Times-Roman")

    def test_image_xobjects_are_skipped(self) -> None:
        """Only Form XObjects carry fonts."""
        pdf = new_pdf()
        image = pdf.make_stream(b"\x00")
        image.Subtype = Name.Image
        image.Resources = Dictionary(Font=Dictionary(F1=_font(pdf, "Helvetica")))
        page = new_page(pdf, Dictionary(XObject=Dictionary(Im0=image)))
        assert list(iter_page_fonts(page)) == []

    def test_type3_resources(self) -> None:
        """Fonts used by Type3 glyph procedures are found."""
        pdf = new_pdf()
        type3 = pdf.make_indirect(
            Dictionary(
                Type=Name.Font,
                Subtype=Name.Type3,
                Resources=Dictionary(Font=Dictionary(G1=_font(pdf, "Symbol"))),
            )
        )
        page = new_page(pdf, Dictionary(Font=Dictionary(T3=type3)))
        assert [key for key, _ in iter_page_fonts(page)] == ["/T3", "/G1"]

    def test_annotation_appearances(self) -> None:
        """Normal appearance streams and sub-state dictionaries are searched."""
        pdf = new_pdf()
        normal = _form(pdf, Dictionary(Font=Dictionary(Helv=_font(pdf, "Helvetica"))))
        on = _form(pdf, Dictionary(Font=Dictionary(ZaDb=_font(pdf, "ZapfDingbats"))))
        off = _form(pdf)
        page = new_page(pdf, Dictionary())
        page.obj.Annots = Array(
            [
                pdf.make_indirect(
                    Dictionary(Type=Name.Annot, Subtype=Name.FreeText, AP=Dictionary(N=normal))
                ),
                pdf.make_indirect(
                    Dictionary(
                        Type=Name.Annot,
                        Subtype=Name.Widget,
                        AP=Dictionary(D=Dictionary(On=on, Off=off)),
                    )
                ),
                pdf.make_indirect(Dictionary(Type=Name.Annot, Subtype=Name.Link)),
            ]
        )
        assert [key for key, _ in iter_page_fonts(page)] == ["/Helv", "/ZaDb"]

    def test_shared_form_visited_once(self) -> None:
        """A form used twice contributes its fonts once."""
        pdf = new_pdf()
        form = _form(pdf, Dictionary(Font=Dictionary(F9=_font(pdf, "Times-Roman"))))
        page = new_page(pdf, Dictionary(XObject=Dictionary(Fm0=form, Fm1=form)))
        assert [key for key, _ in iter_page_fonts(page)] == ["/F9"]

    def test_self_referencing_form(self) -> None:
        """A form drawing itself does not loop forever."""
        pdf = new_pdf()
        form = _form(pdf, Dictionary(Font=Dictionary(F9=_font(pdf, "Times-Roman"))))
        form.Resources.XObject = Dictionary(Self=form)
        page = new_page(pdf, Dictionary(XObject=Dictionary(Fm0=form)))
        assert [key for key, _ in iter_page_fonts(page)] == ["/F9"]

    def test_non_dictionary_font_entries_are_skipped(self) -> None:
        """Entries that are not dictionaries are ignored."""
        pdf = new_pdf()
        page = new_page(
            pdf, Dictionary(Font=Dictionary(F1=Name.Helvetica, F2=_font(pdf, "Courier")))
        )
        assert [key for key, _ in iter_page_fonts(page)] == ["/F2"]


class TestLoadPageFonts:
    """Tests for load_page_fonts."""

    def test_loads_models(self) -> None:
        """Every font becomes a PdfFont keyed by resource name."""
        pdf = new_pdf()
        page = new_page(
            pdf,
            Dictionary(Font=Dictionary(F1=_font(pdf, "Helvetica"), F2=_font(pdf, "Courier"))),
        )
        fonts = load_page_fonts(page)
        assert set(fonts) == {"/F1", "/F2"}
        assert all(isinstance(font, PdfFont) for font in fonts.values())
        assert fonts["/F2"].base_font == "Courier"

    def test_broken_font_is_skipped(self, caplog) -> None:
        """Fonts that fail to load are logged and left out."""
        pdf = new_pdf()
        broken = pdf.make_indirect(Dictionary(Type=Name.Font, BaseFont=Name.Helvetica))
        page = new_page(
            pdf, Dictionary(Font=Dictionary(F1=broken, F2=_font(pdf, "Courier")))
        )
        with caplog.at_level(logging.WARNING, logger="pdffontmodel"):
            fonts = load_page_fonts(page)
        assert list(fonts) == ["/F2"]
        assert "Skipping font /F1" in caplog.text

    def test_unsupported_type3_is_skipped(self, caplog) -> None:
        """Type3 fonts are skipped but their nested fonts load."""
        pdf = new_pdf()
        type3 = pdf.make_indirect(
            Dictionary(
                Type=Name.Font,
                Subtype=Name.Type3,
                Resources=Dictionary(Font=Dictionary(G1=_font(pdf, "Symbol"))),
            )
        )
        page = new_page(pdf, Dictionary(Font=Dictionary(T3=type3)))
        with caplog.at_level(logging.WARNING, logger="pdffontmodel"):
            fonts = load_page_fonts(page)
        assert list(fonts) == ["/G1"]
        assert "Type3" in caplog.text

    def test_page_level_key_wins(self) -> None:
        """A key reused in a form keeps the page-level font."""
        pdf = new_pdf()
        form = _form(pdf, Dictionary(Font=Dictionary(F1=_font(pdf, "Times-Roman"))))
        page = new_page(
            pdf,
            Dictionary(
                Font=Dictionary(F1=_font(pdf, "Helvetica")),
                XObject=Dictionary(Fm0=form),
            ),
        )
        assert load_page_fonts(page)["/F1"].base_font == "Helvetica"

    def test_shared_font_parsed_once(self) -> None:
        """Two keys naming the same font object share one model."""
        pdf = new_pdf()
        font = _font(pdf, "Helvetica")
        form = _form(pdf, Dictionary(Font=Dictionary(F7=font)))
        page = new_page(
            pdf,
            Dictionary(Font=Dictionary(F1=font), XObject=Dictionary(Fm0=form)),
        )
        fonts = load_page_fonts(page)
        assert fonts["/F1"] is fonts["/F7"]
