"""Classify the ``--file-type`` hint.

A hint can be a MIME type (``image/png``, ``text/markdown``), a file
extension (``.png``, ``.c``) or a language name (``Java``).  Image types
go through geometry resolution; anything pygments knows as a language is
sent to the terminal as a document with its MIME type attached.
"""

from __future__ import annotations

import mimetypes
import re
from dataclasses import dataclass
from enum import Enum

from pygments.lexer import Lexer
from pygments.lexers import (
    get_lexer_by_name,
    get_lexer_for_filename,
    get_lexer_for_mimetype,
)
from pygments.util import ClassNotFound


class FileKind(str, Enum):
    IMAGE = "image"
    DOCUMENT = "document"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class TypeHint:
    kind: FileKind
    mime_type: str | None = None


UNKNOWN_HINT = TypeHint(FileKind.UNKNOWN)

# type/subtype of RFC 6838 name characters. Anything else would be copied
# into the frame arguments verbatim.
_MIME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]*/[A-Za-z0-9][A-Za-z0-9!#$&^_.+-]*$")


def _image_mime(hint: str) -> str | None:
    lowered = hint.lower()
    if lowered.startswith("image/"):
        return lowered
    ext = lowered if lowered.startswith(".") else f".{lowered}"
    guessed, _ = mimetypes.guess_type(f"file{ext}", strict=False)
    if guessed and guessed.startswith("image/"):
        return guessed
    return None


def _find_lexer(hint: str) -> Lexer | None:
    if "/" in hint:
        lookups = (get_lexer_for_mimetype,)
    elif hint.startswith("."):
        lookups = (lambda h: get_lexer_for_filename(f"file{h}"),)
    else:
        lookups = (get_lexer_by_name, lambda h: get_lexer_for_filename(f"file.{h}"))
    for lookup in lookups:
        try:
            return lookup(hint)
        except ClassNotFound:
            continue
    return None


def _document_mime(hint: str, lexer: Lexer) -> str:
    if "/" in hint:
        return hint.lower()
    if lexer.mimetypes:
        return lexer.mimetypes[0]
    return "text/plain"


def classify_hint(hint: str | None) -> TypeHint:
    """Return what kind of content *hint* names."""
    if hint is None or not hint.strip():
        return UNKNOWN_HINT
    hint = hint.strip()
    if "/" in hint and not _MIME_RE.match(hint):
        return UNKNOWN_HINT

    image_mime = _image_mime(hint)
    if image_mime is not None:
        return TypeHint(FileKind.IMAGE, image_mime)

    lexer = _find_lexer(hint)
    if lexer is not None:
        return TypeHint(FileKind.DOCUMENT, _document_mime(hint, lexer))
    if hint.lower().startswith("text/"):
        return TypeHint(FileKind.DOCUMENT, hint.lower())
    return UNKNOWN_HINT
