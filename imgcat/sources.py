"""Input layer — reads image bytes from files, stdin and URLs."""

from __future__ import annotations

import http.client
import sys
import urllib.error
import urllib.request
from dataclasses import dataclass
from enum import Enum
from typing import IO

from imgcat.config import DEFAULT_FETCH_TIMEOUT, VERSION
from imgcat.errors import SourceError

_URL_PREFIXES = ("http://", "https://")


class InputKind(str, Enum):
    FILE = "file"
    URL = "url"
    STDIN = "stdin"


@dataclass(frozen=True)
class InputRef:
    kind: InputKind
    value: str | None = None

    @classmethod
    def from_arg(cls, arg: str) -> "InputRef":
        """Classify a positional argument: ``-`` is stdin, http(s) is a URL."""
        if arg == "-":
            return cls(InputKind.STDIN)
        if arg.lower().startswith(_URL_PREFIXES):
            return cls(InputKind.URL, arg)
        return cls(InputKind.FILE, arg)

    @property
    def label(self) -> str:
        return self.value if self.value is not None else "<stdin>"


@dataclass(frozen=True)
class ImageSource:
    data: bytes
    hint: str | None = None
    origin: str | None = None


def read_file(path: str, hint: str | None = None) -> ImageSource:
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as exc:
        raise SourceError(f"failed to open file {path}: {exc.strerror or exc}") from exc
    return ImageSource(data=data, hint=hint, origin=path)


def read_stdin(stream: IO[bytes] | None = None, hint: str | None = None) -> ImageSource:
    stream = sys.stdin.buffer if stream is None else stream
    try:
        data = stream.read()
    except OSError as exc:
        raise SourceError(f"failed to read stdin: {exc}") from exc
    return ImageSource(data=data, hint=hint, origin=None)


def fetch_url(
    url: str,
    hint: str | None = None,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
) -> ImageSource:
    """Download *url* into memory.

    An ``image/*`` response ``Content-Type`` becomes the hint when none was
    given.
    """
    req = urllib.request.Request(url, headers={"User-Agent": f"imgcat/{VERSION}"})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            data = resp.read()
            content_type = resp.headers.get("Content-Type", "") if resp.headers else ""
    except urllib.error.HTTPError as exc:
        raise SourceError(f"failed to fetch image data from {url}: HTTP {exc.code}") from exc
    except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as exc:
        raise SourceError(f"failed to connect to {url}: {exc}") from exc

    mime = content_type.split(";", 1)[0].strip().lower() if isinstance(content_type, str) else ""
    if hint is None and mime.startswith("image/"):
        hint = mime
    return ImageSource(data=data, hint=hint, origin=url)


def load_source(
    ref: InputRef,
    hint: str | None = None,
    stdin: IO[bytes] | None = None,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
) -> ImageSource:
    if ref.kind is InputKind.URL:
        return fetch_url(ref.value, hint=hint, timeout=timeout)
    if ref.kind is InputKind.FILE:
        return read_file(ref.value, hint=hint)
    return read_stdin(stdin, hint=hint)
