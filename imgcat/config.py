"""Configuration constants and environment settings for imgcat."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum


VERSION = "0.3.0"


# ── Terminal grid ───────────────────────────────────────────────────

FALLBACK_COLUMNS = 80
FALLBACK_ROWS = 24

# Used to convert pixels to cells when the terminal does not report its
# cell size. Square cells keep the pixel aspect ratio unchanged.
DEFAULT_CELL_WIDTH_PX = 10
DEFAULT_CELL_HEIGHT_PX = 10


# ── Escape sequences ────────────────────────────────────────────────

class Terminator(str, Enum):
    BEL = "bel"
    ST = "st"


TERMINATOR_BYTES: dict[Terminator, bytes] = {
    Terminator.BEL: b"\x07",
    Terminator.ST: b"\x1b\\",
}

PASSTHROUGH_TERMS = ("screen", "tmux")


# ── Exit codes ──────────────────────────────────────────────────────

EXIT_OK = 0
EXIT_IMAGE_FAILED = 1
EXIT_USAGE = 2


# ── Environment ─────────────────────────────────────────────────────

DEFAULT_FETCH_TIMEOUT = 30.0  # seconds


def _env_int(env: Mapping[str, str], key: str) -> int | None:
    raw = env.get(key, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value > 0 else None


def _env_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key, "").strip()
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Settings:
    """Run-wide settings resolved once from the environment."""

    terminator: Terminator = Terminator.BEL
    passthrough: bool = False
    columns: int | None = None
    rows: int | None = None
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from *env* (defaults to ``os.environ``).

        Unparseable values fall back to their defaults instead of failing.
        """
        env = os.environ if env is None else env

        try:
            terminator = Terminator(env.get("IMGCAT_TERMINATOR", "bel").strip().lower())
        except ValueError:
            terminator = Terminator.BEL

        term = env.get("TERM", "")
        return cls(
            terminator=terminator,
            passthrough=term.startswith(PASSTHROUGH_TERMS),
            columns=_env_int(env, "IMGCAT_COLUMNS"),
            rows=_env_int(env, "IMGCAT_ROWS"),
            fetch_timeout=_env_float(env, "IMGCAT_TIMEOUT", DEFAULT_FETCH_TIMEOUT),
        )
