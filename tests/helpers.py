from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ohm_bundler.core.context import RunContext
from ohm_bundler.grammar.model import BUILT_IN, BuiltIn


@dataclass
class FakeGrammar:
    name: str
    super_grammar: "FakeGrammar | BuiltIn" = BUILT_IN
    source: str = ""

    def is_built_in(self) -> bool:
        return False

    def to_recipe(self, super_grammar_expr: str | None = None) -> str:
        return f'["{self.name}",{super_grammar_expr or "null"}]'


@dataclass
class FakeCompiler:
    """Compiles one grammar per line: `Name` or `Name <: Super`."""

    sources: list[str] = field(default_factory=list)

    def compile(self, source: str) -> dict[str, FakeGrammar]:
        self.sources.append(source)
        out: dict[str, FakeGrammar] = {}
        for line in source.splitlines():
            if not line.strip():
                continue
            name, _, sup = (part.strip() for part in line.partition("<:"))
            super_grammar = BUILT_IN if not sup else out.get(sup, FakeGrammar(sup))
            out[name] = FakeGrammar(name, super_grammar, line)
        return out


@dataclass
class FakeTypeGenerator:
    calls: int = 0

    def generate_types(self, grammars) -> str:  # noqa: ANN001
        self.calls += 1
        return "\n".join(f"export interface {name}Grammar {{}}" for name in grammars)


def quiet_ctx(cwd: Path, dry_run: bool = False) -> RunContext:
    return RunContext.from_args(run_id="pytest-run", cwd=cwd, dry_run=dry_run, quiet=True)
