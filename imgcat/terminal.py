"""Terminal capabilities — character grid and per-cell pixel size."""

from __future__ import annotations

import dataclasses
import fcntl
import os
import struct
import sys
import termios
from dataclasses import dataclass
from typing import IO

from imgcat.config import FALLBACK_COLUMNS, FALLBACK_ROWS, Settings
from imgcat.errors import TerminalUnavailable

_WINSIZE = "HHHH"  # ws_row, ws_col, ws_xpixel, ws_ypixel


@dataclass(frozen=True)
class TerminalGeometry:
    """Snapshot of the output terminal, shared read-only by every image."""

    rows: int
    columns: int
    cell_width_px: int | None = None
    cell_height_px: int | None = None

    @property
    def has_cell_pixels(self) -> bool:
        return bool(self.cell_width_px and self.cell_height_px)


FALLBACK_GEOMETRY = TerminalGeometry(rows=FALLBACK_ROWS, columns=FALLBACK_COLUMNS)


def _cell_pixels(fd: int, columns: int, rows: int) -> tuple[int | None, int | None]:
    """Query TIOCGWINSZ for the window's pixel size and divide it per cell.

    Many terminals report zero pixels; that yields ``(None, None)``.
    """
    try:
        packed = fcntl.ioctl(fd, termios.TIOCGWINSZ, struct.pack(_WINSIZE, 0, 0, 0, 0))
    except OSError:
        return None, None
    _, _, xpixel, ypixel = struct.unpack(_WINSIZE, packed)
    if not xpixel or not ypixel:
        return None, None
    return max(1, xpixel // columns), max(1, ypixel // rows)


def query_terminal(stream: IO | None = None) -> TerminalGeometry:
    """Return the grid size of the terminal behind *stream* (default stdout).

    Raises ``TerminalUnavailable`` when *stream* is redirected to a file or
    pipe, or has no file descriptor at all.
    """
    stream = sys.stdout if stream is None else stream
    try:
        fd = stream.fileno()
    except (AttributeError, OSError, ValueError) as exc:
        raise TerminalUnavailable("output stream has no file descriptor") from exc

    if not os.isatty(fd):
        raise TerminalUnavailable("output is not a terminal")

    try:
        size = os.get_terminal_size(fd)
    except OSError as exc:
        raise TerminalUnavailable(f"cannot query terminal size: {exc}") from exc
    if size.columns <= 0 or size.lines <= 0:
        raise TerminalUnavailable("terminal reported an empty grid")

    cell_w, cell_h = _cell_pixels(fd, size.columns, size.lines)
    return TerminalGeometry(
        rows=size.lines,
        columns=size.columns,
        cell_width_px=cell_w,
        cell_height_px=cell_h,
    )


def query_or_fallback(
    stream: IO | None = None,
    settings: Settings | None = None,
) -> TerminalGeometry:
    """Query the terminal, falling back to an 80x24 grid when it is unavailable.

    ``IMGCAT_COLUMNS`` / ``IMGCAT_ROWS`` from *settings* override whatever
    grid size was found.
    """
    try:
        geometry = query_terminal(stream)
    except TerminalUnavailable:
        geometry = FALLBACK_GEOMETRY

    if settings is not None:
        if settings.columns:
            geometry = dataclasses.replace(geometry, columns=settings.columns)
        if settings.rows:
            geometry = dataclasses.replace(geometry, rows=settings.rows)
    return geometry
