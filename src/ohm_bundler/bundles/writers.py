"""Output sinks for generated bundles.

`DiskWriter` writes under a base directory; `Plan` only records what would
be written. Emitters depend on the `Writer` protocol and never on either.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from ..core.context import RunContext
from ..core.logging import log_event


class Writer(Protocol):
    def write(self, filename: str, contents: str) -> None: ...


class Plan:
    def __init__(self) -> None:
        self.files_to_write: dict[str, str] = {}

    def write(self, filename: str, contents: str) -> None:
        self.files_to_write[filename] = contents


class DiskWriter:
    def __init__(self, ctx: RunContext, base_path: str | Path | None = None) -> None:
        self.ctx = ctx
        self.base_path = Path(base_path) if base_path else Path()
        self.written: list[Path] = []

    def write(self, filename: str, contents: str) -> None:
        output_path = self.base_path / filename
        log_event(self.ctx, "info", "bundles", "write", path=str(output_path))
        output_path.write_text(contents, encoding="utf-8")
        self.written.append(output_path)
