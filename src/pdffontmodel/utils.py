# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Utility functions shared by the font model."""

import logging
import sys
from decimal import Decimal
from typing import Any

import pikepdf

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Configures logging for pdffontmodel.

    Args:
        verbose: If True, DEBUG level is used.
        quiet: If True, only ERROR and higher are output.
            Takes precedence over verbose.

    Returns:
        Configured logger for pdffontmodel.
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    package_logger = logging.getLogger("pdffontmodel")
    package_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    package_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)

    logger.debug("Logging configured with level: %s", logging.getLevelName(level))
    return package_logger


def resolve_indirect(obj: Any) -> Any:
    """Resolve indirect object reference if needed.

    pikepdf objects may be indirect references that need to be resolved.
    This safely handles the resolution without using hasattr which can
    throw exceptions on certain pikepdf object types.

    Args:
        obj: A pikepdf object that may be an indirect reference.

    Returns:
        The resolved object.
    """
    try:
        return obj.get_object()
    except Exception:
        return obj


def safe_str(obj: pikepdf.Object, fallback: str = "Unknown") -> str:
    """Converts a pikepdf object to string, handling non-UTF-8 bytes.

    Args:
        obj: pikepdf object to convert.
        fallback: Value to return if conversion fails entirely.

    Returns:
        String representation of the object.
    """
    try:
        return str(obj)
    except (UnicodeDecodeError, UnicodeEncodeError):
        try:
            return bytes(obj).decode("latin-1")
        except Exception:
            return fallback


def name_str(obj: pikepdf.Object) -> str:
    """Returns a Name object's value without the leading slash."""
    return safe_str(obj)[1:] if isinstance(obj, pikepdf.Name) else safe_str(obj)


def is_number(obj: Any) -> bool:
    """True for PDF integer and real values (booleans excluded)."""
    return isinstance(obj, (int, float, Decimal)) and not isinstance(obj, bool)


def to_number(obj: Any) -> int | float:
    """Converts a PDF numeric value to int or float.

    Integers stay integers so that values written back compare equal to
    the source; reals become floats.

    Raises:
        TypeError: If the object is not numeric.
    """
    if not is_number(obj):
        raise TypeError(f"not a number: {obj!r}")
    if isinstance(obj, int):
        return obj
    return float(obj)


def flatten_object(obj: Any, _path: frozenset = frozenset()) -> Any:
    """Converts a pikepdf object graph into plain Python values.

    Indirect references are replaced by their values. Names become
    strings (with the leading slash), strings become bytes, streams become
    ``{"dict": ..., "data": ...}`` with the decoded stream data. A
    reference back to an object on the current path is replaced by a
    ``("cycle", objgen)`` marker.

    Args:
        obj: pikepdf object (or plain Python scalar).

    Returns:
        Nested dict/list/scalar structure suitable for ``==`` comparison.
    """
    obj = resolve_indirect(obj)

    objgen = None
    if isinstance(obj, (pikepdf.Dictionary, pikepdf.Array, pikepdf.Stream)):
        try:
            og = obj.objgen
            if og != (0, 0):
                objgen = og
        except Exception:
            objgen = None
    if objgen is not None:
        if objgen in _path:
            return ("cycle", objgen)
        _path = _path | {objgen}

    if isinstance(obj, pikepdf.Stream):
        stream_dict = {
            key: flatten_object(value, _path)
            for key, value in obj.stream_dict.items()
            if key != "/Length"
        }
        return {"dict": stream_dict, "data": bytes(obj.read_bytes())}
    if isinstance(obj, pikepdf.Dictionary):
        return {key: flatten_object(value, _path) for key, value in obj.items()}
    if isinstance(obj, pikepdf.Array):
        return [flatten_object(item, _path) for item in obj]
    if isinstance(obj, pikepdf.Name):
        return safe_str(obj)
    if isinstance(obj, pikepdf.String):
        return bytes(obj)
    if isinstance(obj, Decimal):
        return float(obj)
    return obj


def equal_objects(obj1: Any, obj2: Any) -> bool:
    """Structural equality of two pikepdf object graphs after flattening."""
    return flatten_object(obj1) == flatten_object(obj2)
