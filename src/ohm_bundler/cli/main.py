from __future__ import annotations

import argparse
import sys

from .. import __version__
from ..bundles.command import COMMAND, configure_generate_bundles_parser, run_generate_bundles_command
from ..core.context import RunContext
from ..core.errors import BundleError
from ..core.exit_codes import ERR_CONFIG, ERR_INTERNAL, ERR_IO
from ..core.logging import log_event
from ..doctor import run_doctor
from .output import build_base_payload, emit, render_error, resolve_output_format


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ohm-bundler")
    p.add_argument("--version", action="version", version=f"ohm-bundler {__version__}")
    p.add_argument("--json", action="store_true", help="emit JSON output")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--run-id", help="run identifier for log events")
    p.add_argument("--cwd", help="working directory for pattern matching and output files")
    p.add_argument("--config", help="path to an ohm-bundler config file")
    p.add_argument("--dry-run", action="store_true", help="print the files that would be written instead of writing")
    p.add_argument("--log-json", action="store_true", help="emit log events as JSON lines on stderr")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable verbose diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only emit errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    configure_generate_bundles_parser(sub)
    version_p = sub.add_parser("version", help="print version")
    version_p.add_argument("--json", action="store_true", help="emit JSON output")
    doctor_p = sub.add_parser("doctor", help="show node and ohm-js runtime diagnostics")
    doctor_p.add_argument("--json", action="store_true", help="emit JSON output")
    return p


def main(argv: list[str] | None = None) -> int:
    raw_argv = argv if argv is not None else sys.argv[1:]
    p = build_parser()
    ns = p.parse_args(raw_argv)
    fmt = resolve_output_format(cli_json=("--json" in raw_argv), cli_format=ns.format)
    if ns.format and "--json" in raw_argv and ns.format != "json":
        print(render_error(as_json=False, message="conflicting output flags: use either --format json or --json", code=ERR_CONFIG), file=sys.stderr)
        return ERR_CONFIG
    as_json = fmt == "json"
    try:
        ctx = RunContext.from_args(
            run_id=ns.run_id,
            cwd=ns.cwd,
            dry_run=ns.dry_run,
            output_format="json" if as_json else "text",
            verbose=ns.verbose,
            quiet=ns.quiet,
            log_json=ns.log_json,
            config_path=ns.config,
        )
        log_event(ctx, "debug", "cli", "start", cmd=ns.cmd, fmt=ctx.output_format, dry_run=ctx.dry_run)
        if ns.cmd == COMMAND:
            return run_generate_bundles_command(ctx, ns, as_json)
        if ns.cmd == "version":
            emit({**build_base_payload(ctx), "version": __version__}, as_json)
            return 0
        if ns.cmd == "doctor":
            return run_doctor(ctx, as_json)
        return 2
    except BundleError as exc:
        print(render_error(as_json=as_json, message=str(exc), code=exc.code, kind=exc.kind), file=sys.stderr)
        return exc.code
    except OSError as exc:
        print(render_error(as_json=as_json, message=str(exc), code=ERR_IO, kind="io_error"), file=sys.stderr)
        return ERR_IO
    except Exception as exc:  # pragma: no cover
        print(render_error(as_json=as_json, message=f"internal error: {exc}", code=ERR_INTERNAL), file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
