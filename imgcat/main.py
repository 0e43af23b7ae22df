"""Entry point for imgcat."""

from __future__ import annotations

import os
import sys
import urllib.parse
from typing import IO

from imgcat.cli import build_parser, input_refs, parse_args
from imgcat.config import EXIT_IMAGE_FAILED, EXIT_OK, EXIT_USAGE, Settings
from imgcat.encoder import ProtocolFrame, encode, encode_document
from imgcat.errors import (
    InvalidSizeSyntax,
    ProtocolEncodingError,
    SizeResolutionError,
    SourceError,
)
from imgcat.filetype import FileKind, classify_hint
from imgcat.geometry import resolve
from imgcat.image_info import intrinsic_size
from imgcat.metrics import Metrics
from imgcat.size_spec import SizeSpec, parse_size_spec
from imgcat.sources import ImageSource, InputKind, load_source
from imgcat.spinner import Spinner
from imgcat.terminal import TerminalGeometry, query_or_fallback
from imgcat.writer import StreamWriter


def display_name(origin: str | None) -> str:
    """Basename of a file path or URL path, used as the frame's ``name``.

    Stdin has no origin and gets an empty name, which is still sent.
    """
    if not origin:
        return ""
    path = origin
    if "://" in origin:
        path = urllib.parse.urlsplit(origin).path
    return os.path.basename(path.rstrip("/")) or origin


def build_frame(
    source: ImageSource,
    width_spec: SizeSpec,
    height_spec: SizeSpec,
    terminal: TerminalGeometry,
    preserve_aspect: bool = True,
) -> ProtocolFrame:
    """Resolve geometry for *source* and encode it.

    Raises ``SizeResolutionError`` when *source* is not a recognised image.
    """
    name = display_name(source.origin)
    hint = classify_hint(source.hint)
    if hint.kind is FileKind.DOCUMENT:
        return encode_document(
            source.data, name, width_spec, height_spec, preserve_aspect, hint.mime_type
        )

    dims = intrinsic_size(source.data)
    if dims is None:
        raise SizeResolutionError("not a recognised image (unknown dimensions)")
    geometry = resolve(dims[0], dims[1], width_spec, height_spec, terminal, preserve_aspect)
    return encode(source.data, name, geometry)


def display_source(
    source: ImageSource,
    writer: StreamWriter,
    width_spec: SizeSpec,
    height_spec: SizeSpec,
    terminal: TerminalGeometry,
    preserve_aspect: bool = True,
) -> int:
    """Build and write the frame for one image; return bytes written."""
    frame = build_frame(source, width_spec, height_spec, terminal, preserve_aspect)
    return writer.write_frame(frame, source.origin)


def run(
    argv: list[str] | None = None,
    stdout: IO[bytes] | None = None,
    stderr: IO[str] | None = None,
    stdin: IO[bytes] | None = None,
    env: dict[str, str] | None = None,
) -> int:
    parser = build_parser()
    args = parse_args(parser, argv)
    err = sys.stderr if stderr is None else stderr

    def debug(msg: str) -> None:
        if args.debug:
            print(msg, file=err)

    # ── Size specs: fatal before any image is touched ───────────
    try:
        width_spec = parse_size_spec(args.width)
        height_spec = parse_size_spec(args.height)
    except InvalidSizeSyntax as exc:
        parser.print_usage(err)
        print(f"imgcat: error: {exc}", file=err)
        return EXIT_USAGE

    settings = Settings.from_env(env)
    terminal = query_or_fallback(sys.stdout if stdout is None else stdout, settings)
    out = sys.stdout.buffer if stdout is None else stdout
    writer = StreamWriter.from_settings(out, settings, print_path=args.print_path)
    preserve_aspect = not args.stretch
    debug(
        f"[terminal] {terminal.columns}x{terminal.rows} cells, "
        f"cell={terminal.cell_width_px}x{terminal.cell_height_px}px"
    )
    debug(f"[size] width={width_spec} height={height_spec} preserve={int(preserve_aspect)}")

    metrics = Metrics()
    for ref in input_refs(args):
        try:
            if ref.kind is InputKind.URL:
                with Spinner(f"fetching {ref.value}", stream=err):
                    source = load_source(ref, args.file_type, timeout=settings.fetch_timeout)
            else:
                source = load_source(ref, args.file_type, stdin=stdin)
            written = display_source(
                source, writer, width_spec, height_spec, terminal, preserve_aspect
            )
        except (SourceError, SizeResolutionError, ProtocolEncodingError) as exc:
            metrics.record_failure(type(exc).__name__)
            print(f"imgcat: {ref.label}: {exc}", file=err)
            continue
        metrics.record_display(len(source.data), written)
        debug(f"[write] {ref.label}: {len(source.data)} bytes in, {written} bytes out")

    debug(metrics.display())
    return EXIT_IMAGE_FAILED if metrics.failed else EXIT_OK


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
