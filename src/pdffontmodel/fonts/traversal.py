# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Font discovery in a page and its nested resources.

Fonts are found in:
- Page-level Resources/Font
- Form XObjects (Resources/XObject/*/Resources/Font where Subtype=/Form)
- Type3 font resources
- Annotation appearance streams (Annots/*/AP/{N,R,D})
"""

import logging
from collections.abc import Iterator

import pikepdf

from ..exceptions import FontModelError
from ..utils import resolve_indirect, safe_str
from .font import PdfFont

logger = logging.getLogger(__name__)

_TRAVERSAL_ERRORS = (pikepdf.PdfError, AttributeError, TypeError, ValueError, KeyError)


def _mark_visited(obj: pikepdf.Object, visited: set[tuple[int, int]]) -> bool:
    """Records an indirect object; True if it had been seen already."""
    objgen = obj.objgen
    if objgen == (0, 0):
        # Direct objects cannot form cycles
        return False
    if objgen in visited:
        return True
    visited.add(objgen)
    return False


def _get_dict(container: pikepdf.Object, key: str) -> pikepdf.Dictionary | None:
    value = container.get(key)
    if value is None:
        return None
    value = resolve_indirect(value)
    return value if isinstance(value, pikepdf.Dictionary) else None


def iter_page_fonts(page: pikepdf.Page) -> Iterator[tuple[str, pikepdf.Object]]:
    """Yields ``(resource_key, font_dict)`` for every font used by a page.

    Page-level fonts come first. Shared resources are visited once.

    Args:
        page: A pikepdf Page.
    """
    visited: set[tuple[int, int]] = set()
    resources = _get_dict(page.obj, "/Resources")
    if resources is not None:
        yield from _iter_resource_fonts(resources, visited)
    yield from _iter_annotation_fonts(page, visited)


def _iter_resource_fonts(
    resources: pikepdf.Dictionary, visited: set[tuple[int, int]]
) -> Iterator[tuple[str, pikepdf.Object]]:
    fonts = _get_dict(resources, "/Font")
    for key in list(fonts.keys()) if fonts is not None else ():
        try:
            font = resolve_indirect(fonts[key])
        except _TRAVERSAL_ERRORS as e:
            logger.debug("Skipping unreadable font %s: %s", key, e)
            continue
        if not isinstance(font, pikepdf.Dictionary):
            continue
        yield safe_str(key), font
        if font.get("/Subtype") == pikepdf.Name.Type3 and not _mark_visited(font, visited):
            nested = _get_dict(font, "/Resources")
            if nested is not None:
                yield from _iter_resource_fonts(nested, visited)

    xobjects = _get_dict(resources, "/XObject")
    for key in list(xobjects.keys()) if xobjects is not None else ():
        try:
            xobject = resolve_indirect(xobjects[key])
        except _TRAVERSAL_ERRORS as e:
            logger.debug("Skipping unreadable XObject %s: %s", key, e)
            continue
        if isinstance(xobject, pikepdf.Stream) and xobject.get("/Subtype") == pikepdf.Name.Form:
            yield from _iter_form_fonts(xobject, visited)


def _iter_form_fonts(
    form: pikepdf.Stream, visited: set[tuple[int, int]]
) -> Iterator[tuple[str, pikepdf.Object]]:
    if _mark_visited(form, visited):
        return
    resources = _get_dict(form, "/Resources")
    if resources is not None:
        yield from _iter_resource_fonts(resources, visited)


def _iter_annotation_fonts(
    page: pikepdf.Page, visited: set[tuple[int, int]]
) -> Iterator[tuple[str, pikepdf.Object]]:
    annots = page.obj.get("/Annots")
    if annots is None:
        return
    annots = resolve_indirect(annots)
    if not isinstance(annots, pikepdf.Array):
        return
    for annot in annots:
        annot = resolve_indirect(annot)
        if not isinstance(annot, pikepdf.Dictionary):
            continue
        appearance = _get_dict(annot, "/AP")
        if appearance is None:
            continue
        for state in ("/N", "/R", "/D"):
            entry = appearance.get(state)
            if entry is None:
                continue
            entry = resolve_indirect(entry)
            # Either a form XObject or a dictionary of sub-state forms
            if isinstance(entry, pikepdf.Stream):
                yield from _iter_form_fonts(entry, visited)
            elif isinstance(entry, pikepdf.Dictionary):
                for sub_key in list(entry.keys()):
                    sub_entry = resolve_indirect(entry[sub_key])
                    if isinstance(sub_entry, pikepdf.Stream):
                        yield from _iter_form_fonts(sub_entry, visited)


def load_page_fonts(page: pikepdf.Page) -> dict[str, PdfFont]:
    """Builds font models for every font of a page.

    Best effort: fonts that fail to load are logged and left out. When the
    same resource key names different fonts in nested resources, the
    page-level (first found) font is kept.

    Args:
        page: A pikepdf Page.

    Returns:
        Mapping of resource key (e.g. ``"/F1"``) to font model.
    """
    fonts: dict[str, PdfFont] = {}
    by_objgen: dict[tuple[int, int], PdfFont] = {}
    for key, obj in iter_page_fonts(page):
        if key in fonts:
            continue
        objgen = obj.objgen
        if objgen != (0, 0) and objgen in by_objgen:
            fonts[key] = by_objgen[objgen]
            continue
        try:
            font = PdfFont.from_object(obj)
        except FontModelError as e:
            logger.warning("Skipping font %s: %s", key, e)
            continue
        fonts[key] = font
        if objgen != (0, 0):
            by_objgen[objgen] = font
    return fonts
