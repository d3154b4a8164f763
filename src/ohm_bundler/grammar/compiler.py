from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

from ..core.context import RunContext
from ..core.errors import BundleError
from ..core.exit_codes import ERR_COMPILE, ERR_IO, ERR_PREREQ, ERR_TIMEOUT
from ..core.process import TIMEOUT_CODE, run_command
from .model import Grammar, GrammarCollection, grammars_from_payload

BRIDGE_SCRIPT = Path(__file__).resolve().parents[1] / "bridge" / "ohm_bridge.mjs"


class GrammarCompileError(BundleError):
    pass


class GrammarCompiler(Protocol):
    def compile(self, source: str) -> GrammarCollection: ...


class TypeGenerator(Protocol):
    def generate_types(self, grammars: GrammarCollection) -> str: ...


class NodeBridge:
    """Runs `ohm_bridge.mjs` under node, one request per process."""

    def __init__(self, ctx: RunContext) -> None:
        self.ctx = ctx

    def call(self, op: str, **fields: object) -> dict[str, Any]:
        cfg = self.ctx.config
        request = {"op": op, "ohmModule": cfg.ohm_module, **fields}
        if not self.ctx.cwd.is_dir():
            raise BundleError(f"working directory does not exist: {self.ctx.cwd}", ERR_IO, kind="missing_cwd")
        try:
            res = run_command(
                [cfg.node, str(BRIDGE_SCRIPT)],
                self.ctx.cwd,
                input_text=json.dumps(request),
                timeout_seconds=cfg.timeout_seconds,
                ctx=self.ctx,
            )
        except FileNotFoundError as exc:
            raise BundleError(
                f"node executable not found: {cfg.node} (set `node` in ohm-bundler config or OHM_BUNDLER_NODE)",
                ERR_PREREQ,
                kind="missing_tool",
            ) from exc
        if res.code == TIMEOUT_CODE:
            raise BundleError(f"ohm bridge `{op}` {res.stderr.splitlines()[-1]}", ERR_TIMEOUT, kind="timeout")
        try:
            payload = json.loads(res.stdout)
        except json.JSONDecodeError as exc:
            detail = res.combined_output or f"exit code {res.code}"
            raise BundleError(f"ohm bridge `{op}` failed: {detail}", ERR_PREREQ, kind="bridge_error") from exc
        if payload.get("status") != "ok":
            raise GrammarCompileError(str(payload.get("message", "unknown bridge error")), ERR_COMPILE, kind="compile_error")
        return payload


class NodeGrammarCompiler:
    def __init__(self, ctx: RunContext, bridge: NodeBridge | None = None) -> None:
        self.bridge = bridge or NodeBridge(ctx)

    def compile(self, source: str) -> dict[str, Grammar]:
        payload = self.bridge.call("compile", source=source)
        return grammars_from_payload(payload["grammars"])


class NodeTypeGenerator:
    def __init__(self, ctx: RunContext, bridge: NodeBridge | None = None) -> None:
        self.types_module = ctx.config.types_module
        self.bridge = bridge or NodeBridge(ctx)

    def generate_types(self, grammars: GrammarCollection) -> str:
        sources = [str(getattr(g, "source", None) or "") for g in grammars.values()]
        payload = self.bridge.call("types", typesModule=self.types_module, sources=sources)
        return str(payload["types"])


def probe_runtime(ctx: RunContext) -> dict[str, Any]:
    return NodeBridge(ctx).call("probe")
