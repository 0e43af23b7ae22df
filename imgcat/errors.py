"""Exception hierarchy for imgcat.

Argument-level errors (``InvalidSizeSyntax``) abort the run before any
image is processed.  Per-image errors (``SourceError``,
``SizeResolutionError``, ``ProtocolEncodingError``) skip that image only.
``TerminalUnavailable`` is always recovered with the fallback grid.
"""

from __future__ import annotations


class ImgcatError(Exception):
    """Base class for all imgcat errors."""


class InvalidSizeSyntax(ImgcatError, ValueError):
    """A width/height option string is not a valid size specification."""

    def __init__(self, text: str, reason: str = "") -> None:
        self.text = text
        self.reason = reason
        msg = f"invalid size specification {text!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class TerminalUnavailable(ImgcatError):
    """The output stream is not an interactive terminal that can be queried."""


class SizeResolutionError(ImgcatError):
    """No display geometry can be computed for an image."""


class ProtocolEncodingError(ImgcatError):
    """Writing an image's escape sequence to the output stream failed."""


class SourceError(ImgcatError):
    """An input could not be read or fetched."""
