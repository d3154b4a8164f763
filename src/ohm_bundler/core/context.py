from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .clock import utc_now
from .config import BundlerConfig, load_config
from .env import getenv

OutputFormat = Literal["text", "json"]


@dataclass(frozen=True)
class RunContext:
    run_id: str
    cwd: Path
    dry_run: bool
    output_format: OutputFormat
    verbose: bool
    quiet: bool
    log_json: bool
    config: BundlerConfig = field(default_factory=BundlerConfig)

    @classmethod
    def from_args(
        cls,
        run_id: str | None = None,
        cwd: str | Path | None = None,
        dry_run: bool = False,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
        config_path: str | None = None,
    ) -> "RunContext":
        root = Path(cwd) if cwd else Path.cwd()
        default_run = f"ohm-bundler-{utc_now().strftime('%Y%m%d-%H%M%S')}"
        resolved_run_id = run_id or getenv("RUN_ID") or default_run
        return cls(
            run_id=resolved_run_id,
            cwd=root,
            dry_run=dry_run,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json,
            config=load_config(root, config_path),
        )
