"""Tests for imgcat.sources — files, stdin and URLs."""

from __future__ import annotations

import http.client
import urllib.error
from io import BytesIO
from unittest.mock import MagicMock, patch

import pytest

from imgcat.errors import SourceError
from imgcat.sources import (
    ImageSource,
    InputKind,
    InputRef,
    fetch_url,
    load_source,
    read_file,
    read_stdin,
)


def _mock_response(body: bytes, content_type: str | None = None) -> MagicMock:
    resp = MagicMock()
    resp.read.return_value = body
    resp.headers = {"Content-Type": content_type} if content_type else {}
    resp.__enter__ = lambda s: s
    resp.__exit__ = MagicMock(return_value=False)
    return resp


class TestInputRef:
    def test_dash_is_stdin(self):
        assert InputRef.from_arg("-") == InputRef(InputKind.STDIN)

    @pytest.mark.parametrize("arg", ["http://h/a.png", "HTTPS://h/a.png"])
    def test_urls(self, arg):
        assert InputRef.from_arg(arg).kind is InputKind.URL

    def test_plain_path(self):
        assert InputRef.from_arg("pics/a.png") == InputRef(InputKind.FILE, "pics/a.png")

    def test_labels(self):
        assert InputRef(InputKind.STDIN).label == "<stdin>"
        assert InputRef(InputKind.FILE, "a.png").label == "a.png"


class TestReadFile:
    def test_reads_bytes(self, tmp_path):
        img = tmp_path / "a.png"
        img.write_bytes(b"\x89PNG\r\n")
        src = read_file(str(img), hint="png")
        assert src == ImageSource(data=b"\x89PNG\r\n", hint="png", origin=str(img))

    def test_missing_file(self):
        with pytest.raises(SourceError, match="failed to open file"):
            read_file("/nonexistent/file.png")


class TestReadStdin:
    def test_reads_stream(self):
        src = read_stdin(BytesIO(b"data"))
        assert src.data == b"data"
        assert src.origin is None

    def test_read_error(self):
        stream = MagicMock()
        stream.read.side_effect = OSError("EIO")
        with pytest.raises(SourceError):
            read_stdin(stream)


class TestFetchUrl:
    def test_success(self):
        resp = _mock_response(b"GIF89a...", "image/gif")
        with patch("urllib.request.urlopen", return_value=resp) as urlopen:
            src = fetch_url("https://example.com/a.gif", timeout=5)
        assert src.data == b"GIF89a..."
        assert src.origin == "https://example.com/a.gif"
        assert src.hint == "image/gif"
        req = urlopen.call_args[0][0]
        assert req.get_header("User-agent").startswith("imgcat/")
        assert urlopen.call_args[1]["timeout"] == 5

    def test_content_type_parameters_stripped(self):
        resp = _mock_response(b"x", "image/png; charset=binary")
        with patch("urllib.request.urlopen", return_value=resp):
            assert fetch_url("http://h/x").hint == "image/png"

    def test_non_image_content_type_ignored(self):
        resp = _mock_response(b"x", "text/html")
        with patch("urllib.request.urlopen", return_value=resp):
            assert fetch_url("http://h/x").hint is None

    def test_explicit_hint_wins(self):
        resp = _mock_response(b"x", "image/gif")
        with patch("urllib.request.urlopen", return_value=resp):
            assert fetch_url("http://h/x", hint="png").hint == "png"

    def test_connection_failure(self):
        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("refused")):
            with pytest.raises(SourceError, match="failed to connect"):
                fetch_url("http://localhost:1/a.png")

    def test_http_error(self):
        err = urllib.error.HTTPError("http://h/a.png", 404, "Not Found", {}, None)
        with patch("urllib.request.urlopen", side_effect=err):
            with pytest.raises(SourceError, match="HTTP 404"):
                fetch_url("http://h/a.png")

    def test_truncated_body(self):
        resp = _mock_response(b"")
        resp.read.side_effect = http.client.IncompleteRead(b"abc", 10)
        with patch("urllib.request.urlopen", return_value=resp):
            with pytest.raises(SourceError, match="http://h/a.png"):
                fetch_url("http://h/a.png")

    def test_malformed_status_line(self):
        err = http.client.BadStatusLine("garbage")
        with patch("urllib.request.urlopen", side_effect=err):
            with pytest.raises(SourceError):
                fetch_url("http://h/a.png")


class TestLoadSource:
    def test_dispatch_file(self, tmp_path):
        img = tmp_path / "b.png"
        img.write_bytes(b"b")
        assert load_source(InputRef(InputKind.FILE, str(img))).data == b"b"

    def test_dispatch_stdin(self):
        src = load_source(InputRef(InputKind.STDIN), hint="png", stdin=BytesIO(b"s"))
        assert (src.data, src.hint) == (b"s", "png")

    def test_dispatch_url(self):
        with patch("urllib.request.urlopen", return_value=_mock_response(b"u")):
            assert load_source(InputRef(InputKind.URL, "http://h/u")).data == b"u"
