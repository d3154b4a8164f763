from __future__ import annotations

import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .logging import log_event

if TYPE_CHECKING:
    from .context import RunContext

TIMEOUT_CODE = 124


@dataclass(frozen=True)
class CommandResult:
    code: int
    stdout: str
    stderr: str
    duration_ms: int

    @property
    def combined_output(self) -> str:
        return (self.stdout + self.stderr).strip()


def run_command(
    cmd: list[str],
    cwd: Path,
    input_text: str | None = None,
    timeout_seconds: int = 0,
    ctx: RunContext | None = None,
) -> CommandResult:
    """Run `cmd` to completion and capture its output.

    A missing executable raises `FileNotFoundError`; a timeout is reported as
    exit code 124 with a note appended to stderr.
    """
    started = time.monotonic()
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            input=input_text,
            text=True,
            encoding="utf-8",
            capture_output=True,
            check=False,
            timeout=(timeout_seconds if timeout_seconds > 0 else None),
        )
        result = CommandResult(
            code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
            duration_ms=int((time.monotonic() - started) * 1000),
        )
    except subprocess.TimeoutExpired as exc:
        result = CommandResult(
            code=TIMEOUT_CODE,
            stdout=_as_text(exc.stdout),
            stderr=(_as_text(exc.stderr) + f"\ncommand timed out after {timeout_seconds}s").strip(),
            duration_ms=int((time.monotonic() - started) * 1000),
        )
    if ctx is not None:
        log_event(
            ctx,
            "debug",
            "process",
            "run-command",
            command=cmd[0],
            cwd=str(cwd),
            code=result.code,
            duration_ms=result.duration_ms,
        )
    return result


def _as_text(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
