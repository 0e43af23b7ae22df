"""Geometry resolver — turns size specs and intrinsic pixels into cell counts.

Policy when both width and height are given explicitly: both values are
kept as-is and nothing is recomputed.  Whether the image is distorted to
fill that box is up to the terminal, steered by the frame's
``preserveAspectRatio`` flag (on by default, off with ``--stretch``).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from imgcat.config import DEFAULT_CELL_HEIGHT_PX, DEFAULT_CELL_WIDTH_PX
from imgcat.errors import SizeResolutionError
from imgcat.size_spec import SizeSpec, SizeUnit, cells
from imgcat.terminal import TerminalGeometry


@dataclass(frozen=True)
class ResolvedGeometry:
    width: int
    height: int
    preserve_aspect: bool
    width_spec: SizeSpec
    height_spec: SizeSpec


def _round_cells(value: float) -> int:
    """Round half-up to a positive cell count."""
    return max(1, int(math.floor(value + 0.5)))


def _cell_size(terminal: TerminalGeometry) -> tuple[float, float]:
    if terminal.has_cell_pixels:
        return float(terminal.cell_width_px), float(terminal.cell_height_px)
    return float(DEFAULT_CELL_WIDTH_PX), float(DEFAULT_CELL_HEIGHT_PX)


def _to_cells(spec: SizeSpec, cell_px: float, grid: int, axis: str) -> float | None:
    """Convert *spec* to a fractional cell count; ``None`` for auto."""
    if spec.unit is SizeUnit.AUTO:
        return None
    if spec.unit is SizeUnit.CELLS:
        value = float(spec.value)
    elif spec.unit is SizeUnit.PIXELS:
        value = spec.value / cell_px
    elif spec.unit is SizeUnit.PERCENT:
        value = spec.value / 100.0 * grid
    else:
        raise SizeResolutionError(f"unsupported {axis} unit: {spec.unit!r}")
    if value <= 0:
        raise SizeResolutionError(f"{axis} {spec.render()} resolves to zero cells")
    return value


def _wire_spec(spec: SizeSpec, resolved: int) -> SizeSpec:
    # Pixel and percent values go to the terminal untouched; it knows its
    # real cell size better than our estimate.
    if spec.unit in (SizeUnit.PIXELS, SizeUnit.PERCENT):
        return spec
    return cells(resolved)


def resolve(
    intrinsic_px_w: int | None,
    intrinsic_px_h: int | None,
    width_spec: SizeSpec,
    height_spec: SizeSpec,
    terminal: TerminalGeometry,
    preserve_aspect: bool = True,
) -> ResolvedGeometry:
    """Compute the display size of one image in terminal cells.

    Raises ``SizeResolutionError`` when the intrinsic size is zero or
    unknown, or when an explicit spec resolves to zero cells.
    """
    if not intrinsic_px_w or not intrinsic_px_h or intrinsic_px_w <= 0 or intrinsic_px_h <= 0:
        raise SizeResolutionError(
            f"unknown or zero image dimensions ({intrinsic_px_w}x{intrinsic_px_h})"
        )

    cell_w, cell_h = _cell_size(terminal)
    # Intrinsic size expressed in cells; its ratio drives every derivation.
    img_cols = intrinsic_px_w / cell_w
    img_rows = intrinsic_px_h / cell_h
    aspect = img_cols / img_rows

    width = _to_cells(width_spec, cell_w, terminal.columns, "width")
    height = _to_cells(height_spec, cell_h, terminal.rows, "height")

    if width is None and height is None:
        scale = min(terminal.columns / img_cols, terminal.rows / img_rows)
        width = img_cols * scale
        height = img_rows * scale
    elif height is None:
        height = width / aspect
    elif width is None:
        width = height * aspect

    resolved_w = _round_cells(width)
    resolved_h = _round_cells(height)
    return ResolvedGeometry(
        width=resolved_w,
        height=resolved_h,
        preserve_aspect=preserve_aspect,
        width_spec=_wire_spec(width_spec, resolved_w),
        height_spec=_wire_spec(height_spec, resolved_h),
    )
