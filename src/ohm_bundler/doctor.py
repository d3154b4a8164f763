from __future__ import annotations

from .cli.output import build_base_payload, emit
from .core.context import RunContext
from .core.errors import BundleError
from .core.exit_codes import ERR_PREREQ
from .grammar.compiler import probe_runtime


def run_doctor(ctx: RunContext, as_json: bool) -> int:
    cfg = ctx.config
    payload = build_base_payload(ctx)
    payload["config"] = {
        "source": str(cfg.source) if cfg.source else None,
        "node": cfg.node,
        "ohm_module": cfg.ohm_module,
        "types_module": cfg.types_module,
        "timeout_seconds": cfg.timeout_seconds,
    }
    try:
        payload["runtime"] = probe_runtime(ctx)
    except BundleError as exc:
        payload["status"] = "fail"
        payload["runtime"] = {"error": str(exc), "kind": exc.kind}
    emit(payload, as_json)
    return 0 if payload["status"] == "ok" else ERR_PREREQ
