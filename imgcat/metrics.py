"""Run metrics — images shown, failures by kind, bytes written."""

from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class Metrics:
    displayed: int = 0
    failures: dict[str, int] = field(default_factory=dict)
    bytes_in: int = 0
    bytes_out: int = 0
    start_time: float = field(default_factory=time.time)

    def record_display(self, bytes_in: int, bytes_out: int) -> None:
        self.displayed += 1
        self.bytes_in += bytes_in
        self.bytes_out += bytes_out

    def record_failure(self, kind: str) -> None:
        self.failures[kind] = self.failures.get(kind, 0) + 1

    @property
    def failed(self) -> int:
        return sum(self.failures.values())

    def elapsed_seconds(self) -> float:
        return time.time() - self.start_time

    def display(self) -> str:
        lines = [
            f"Displayed : {self.displayed}",
            f"Failed    : {self.failed}",
            f"Bytes in  : {self.bytes_in}",
            f"Bytes out : {self.bytes_out}",
            f"Elapsed   : {self.elapsed_seconds():.2f}s",
        ]
        for kind, count in sorted(self.failures.items()):
            lines.append(f"  {kind}: {count}")
        return "\n".join(lines)
