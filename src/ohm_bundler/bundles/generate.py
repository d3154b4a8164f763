"""Bundle generation: discover `.ohm` files, compile them, emit bundles."""

from __future__ import annotations

import glob
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from ..core.context import RunContext
from ..core.logging import log_event
from ..grammar.compiler import GrammarCompiler, NodeGrammarCompiler, NodeTypeGenerator, TypeGenerator
from ..grammar.model import check_declaration_order
from .extension import OHM_FILE_EXT, file_extension
from .recipe import generate_recipe
from .typedecls import generate_types_with_writer
from .writers import DiskWriter, Plan, Writer


@dataclass(frozen=True)
class GenerateOptions:
    dry_run: bool = False
    cwd: str | Path | None = None
    with_types: bool = False
    esm: bool = False


def _split_alternatives(body: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current = ""
    for ch in body:
        if ch == "," and depth == 0:
            parts.append(current)
            current = ""
            continue
        if ch == "{":
            depth += 1
        elif ch == "}" and depth:
            depth -= 1
        current += ch
    parts.append(current)
    return parts


def expand_braces(pattern: str) -> list[str]:
    """Expand `{a,b}` alternatives (nesting allowed) into plain glob patterns.

    A group without a top-level comma, or an unbalanced brace, stays literal.
    """
    depth = 0
    start = 0
    for i, ch in enumerate(pattern):
        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth:
            depth -= 1
            if depth:
                continue
            alternatives = _split_alternatives(pattern[start + 1 : i])
            if len(alternatives) < 2:
                continue
            head, tail = pattern[:start], pattern[i + 1 :]
            out: list[str] = []
            for alternative in alternatives:
                for expanded in expand_braces(head + alternative + tail):
                    if expanded not in out:
                        out.append(expanded)
            return out
    return [pattern]


def expand_patterns(patterns: Iterable[str], cwd: str | Path | None = None) -> list[str]:
    """Match glob `patterns` against `cwd`; returns relative file paths.

    `**` matches recursively and `{a,b}` alternatives are expanded first.
    Directories are dropped, and a file matched by
    several patterns is listed once, at its first match.
    """
    root = os.fspath(cwd) if cwd else os.curdir
    seen: set[str] = set()
    out: list[str] = []
    for pattern in (expanded for raw in patterns for expanded in expand_braces(raw)):
        for match in glob.glob(pattern, root_dir=root, recursive=True):
            if match in seen or not os.path.isfile(os.path.join(root, match)):
                continue
            seen.add(match)
            out.append(match)
    return out


def generate_bundles(
    patterns: Iterable[str],
    opts: GenerateOptions,
    *,
    ctx: RunContext | None = None,
    compiler: GrammarCompiler | None = None,
    type_generator: TypeGenerator | None = None,
    writer: Writer | None = None,
) -> dict[str, str]:
    run_ctx = ctx or RunContext.from_args(cwd=opts.cwd, dry_run=opts.dry_run, quiet=True)
    plan = Plan()
    if writer is None:
        writer = plan if opts.dry_run else DiskWriter(run_ctx, opts.cwd)
    grammar_compiler = compiler or NodeGrammarCompiler(run_ctx)

    for source_filename in expand_patterns(patterns, opts.cwd):
        source_path = Path(opts.cwd) / source_filename if opts.cwd else Path(source_filename)

        # Files without the grammar extension are not processed at all.
        if file_extension(source_filename) != OHM_FILE_EXT:
            log_event(run_ctx, "debug", "bundles", "skip", path=source_filename)
            continue

        grammar_source = source_path.read_text(encoding="utf-8")
        grammars = grammar_compiler.compile(grammar_source)
        check_declaration_order(grammars, source_filename)
        log_event(run_ctx, "debug", "bundles", "compiled", path=source_filename, grammars=len(grammars))
        generate_recipe(source_filename, grammars, writer, opts.esm)
        if opts.with_types:
            if type_generator is None:
                type_generator = NodeTypeGenerator(run_ctx)
            generate_types_with_writer(source_filename, grammars, writer, type_generator)

    return plan.files_to_write
