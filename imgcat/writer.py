"""Stream writer — serializes frames to the terminal, one write per image."""

from __future__ import annotations

from typing import IO

from imgcat.config import TERMINATOR_BYTES, Settings, Terminator
from imgcat.encoder import ProtocolFrame
from imgcat.errors import ProtocolEncodingError

_ESC = b"\x1b"
_ST = b"\x1b\\"

# tmux / screen swallow unknown OSC sequences; a DCS passthrough forwards
# them to the outer terminal.
_PASSTHROUGH_START = b"\x1bPtmux;\x1b\x1b]"


class StreamWriter:
    """Write ``ProtocolFrame`` objects to a binary stream.

    Every image (frame, trailing newline, optional path line) goes out in
    one ``write`` call so frames can never interleave.
    """

    def __init__(
        self,
        stream: IO[bytes],
        terminator: Terminator = Terminator.BEL,
        passthrough: bool = False,
        print_path: bool = False,
    ) -> None:
        self.stream = stream
        self.terminator = terminator
        self.passthrough = passthrough
        self.print_path = print_path

    @classmethod
    def from_settings(
        cls,
        stream: IO[bytes],
        settings: Settings,
        print_path: bool = False,
    ) -> "StreamWriter":
        return cls(
            stream,
            terminator=settings.terminator,
            passthrough=settings.passthrough,
            print_path=print_path,
        )

    def serialize(self, frame: ProtocolFrame) -> bytes:
        body = f"1337;File={frame.arguments()}:{frame.payload}".encode("ascii")
        if self.passthrough:
            # ESC inside the DCS body is doubled, so an ST terminator survives.
            inner = TERMINATOR_BYTES[self.terminator].replace(_ESC, _ESC + _ESC)
            return _PASSTHROUGH_START + body + inner + _ST
        return _ESC + b"]" + body + TERMINATOR_BYTES[self.terminator]

    def write_frame(self, frame: ProtocolFrame, origin: str | None = None) -> int:
        """Write *frame* and return the number of bytes sent.

        Raises ``ProtocolEncodingError`` if the stream rejects the write.
        """
        chunk = self.serialize(frame) + b"\n"
        if self.print_path and origin:
            chunk += origin.encode("utf-8", "replace") + b"\n"
        try:
            self.stream.write(chunk)
            self.stream.flush()
        except (OSError, ValueError) as exc:
            raise ProtocolEncodingError(f"failed to write image: {exc}") from exc
        return len(chunk)
