"""Terminal spinner shown on stderr while remote images download."""

from __future__ import annotations

import sys
import threading
import time
from typing import IO

_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
_INTERVAL = 0.08  # seconds between frames


class Spinner:
    """Thread-based braille-dot spinner.

    * ``start(msg)`` — begin spinning (or update message if already running).
    * ``stop()`` — clear the spinner line and stop the thread.
    * usable as a context manager around a blocking call.

    Writes go to *stream* (default stderr), never to the image output, and
    the spinner is a no-op when that stream is not a TTY.
    """

    def __init__(self, msg: str = "fetching...", stream: IO[str] | None = None) -> None:
        self._lock = threading.Lock()
        self._msg = msg
        self._running = False
        self._thread: threading.Thread | None = None
        self._stream = stream
        out = self.stream
        self._is_tty: bool = hasattr(out, "isatty") and out.isatty()

    @property
    def stream(self) -> IO[str]:
        return self._stream if self._stream is not None else sys.stderr

    def __enter__(self) -> "Spinner":
        self.start(self._msg)
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def start(self, msg: str | None = None) -> None:
        with self._lock:
            if msg is not None:
                self._msg = msg
            if self._running:
                return
            self._running = True
        if not self._is_tty:
            return
        t = threading.Thread(target=self._spin, daemon=True)
        self._thread = t
        t.start()

    def stop(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._running = False
        t = self._thread
        if t is not None:
            t.join(timeout=1.0)
            self._thread = None
        if self._is_tty:
            self.stream.write("\033[2K\r")
            self.stream.flush()

    def _spin(self) -> None:
        idx = 0
        while True:
            with self._lock:
                if not self._running:
                    break
                msg = self._msg
            frame = _FRAMES[idx % len(_FRAMES)]
            self.stream.write(f"\033[2K\r  {frame} {msg}")
            self.stream.flush()
            idx += 1
            time.sleep(_INTERVAL)
