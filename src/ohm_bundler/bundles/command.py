from __future__ import annotations

import argparse

from ..cli.output import build_base_payload, emit
from ..core.context import RunContext
from ..grammar.compiler import GrammarCompiler, NodeGrammarCompiler, NodeTypeGenerator, TypeGenerator
from .generate import GenerateOptions, generate_bundles
from .writers import DiskWriter

COMMAND = "generateBundles"


def build_compiler(ctx: RunContext) -> GrammarCompiler:
    return NodeGrammarCompiler(ctx)


def build_type_generator(ctx: RunContext) -> TypeGenerator:
    return NodeTypeGenerator(ctx)


def configure_generate_bundles_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    p = sub.add_parser(
        COMMAND,
        aliases=["generate-bundles"],
        help='generate standalone modules (aka "bundles") from .ohm files',
    )
    p.add_argument("patterns", nargs="+", help="glob patterns matched against the working directory")
    p.add_argument("-t", "--withTypes", action="store_true", help="generate a corresponding .d.ts file for TypeScript")
    p.add_argument("-e", "--esm", action="store_true", help="generate bundle in ES module format [default is CommonJS]")
    p.set_defaults(cmd=COMMAND)


def run_generate_bundles_command(ctx: RunContext, ns: argparse.Namespace, as_json: bool) -> int:
    opts = GenerateOptions(
        dry_run=ctx.dry_run,
        cwd=ctx.cwd,
        with_types=ns.withTypes or ctx.config.with_types,
        esm=ns.esm or ctx.config.esm,
    )
    writer = None if ctx.dry_run else DiskWriter(ctx, ctx.cwd)
    files = generate_bundles(
        ns.patterns,
        opts,
        ctx=ctx,
        compiler=build_compiler(ctx),
        type_generator=build_type_generator(ctx) if opts.with_types else None,
        writer=writer,
    )
    if ctx.dry_run:
        if as_json:
            emit({**build_base_payload(ctx), "files_to_write": files}, True)
        else:
            for filename, contents in files.items():
                print(filename)
                if ctx.verbose:
                    print(contents)
        return 0
    written = [str(path) for path in writer.written] if writer is not None else []
    if as_json:
        emit({**build_base_payload(ctx), "written": written}, True)
    else:
        for path in written:
            print(path)
    return 0
