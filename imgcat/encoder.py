"""Payload encoder — builds the OSC 1337 ``File=`` frame for one image."""

from __future__ import annotations

import base64
from dataclasses import dataclass

from imgcat.geometry import ResolvedGeometry
from imgcat.size_spec import SizeSpec


def _b64(data: bytes) -> str:
    return base64.standard_b64encode(data).decode("ascii")


@dataclass(frozen=True)
class ProtocolFrame:
    name: str | None
    size: int
    width: str
    height: str
    preserve_aspect: bool
    inline: bool
    payload: str
    file_type: str | None = None

    def arguments(self) -> str:
        """Render the ``key=value;...`` argument list in wire order."""
        params: list[str] = []
        if self.name is not None:
            params.append(f"name={_b64(self.name.encode('utf-8'))}")
        params.append(f"size={self.size}")
        params.append(f"width={self.width}")
        params.append(f"height={self.height}")
        params.append(f"preserveAspectRatio={int(self.preserve_aspect)}")
        params.append(f"inline={int(self.inline)}")
        if self.file_type:
            params.append(f"type={self.file_type}")
        return ";".join(params)


def encode(
    image_bytes: bytes,
    name: str | None,
    geometry: ResolvedGeometry,
    inline: bool = True,
) -> ProtocolFrame:
    """Base64-encode *image_bytes* into a frame sized by *geometry*."""
    return ProtocolFrame(
        name=name,
        size=len(image_bytes),
        width=geometry.width_spec.render(),
        height=geometry.height_spec.render(),
        preserve_aspect=geometry.preserve_aspect,
        inline=inline,
        payload=_b64(image_bytes),
    )


def encode_document(
    data: bytes,
    name: str | None,
    width_spec: SizeSpec,
    height_spec: SizeSpec,
    preserve_aspect: bool,
    file_type: str,
    inline: bool = True,
) -> ProtocolFrame:
    """Frame a non-image file; the terminal lays it out from ``type``."""
    return ProtocolFrame(
        name=name,
        size=len(data),
        width=width_spec.render(),
        height=height_spec.render(),
        preserve_aspect=preserve_aspect,
        inline=inline,
        payload=_b64(data),
        file_type=file_type,
    )
