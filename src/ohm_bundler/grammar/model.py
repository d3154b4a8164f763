"""In-memory view of compiled ohm grammars.

Grammars come back from the compiler as an ordered mapping of name to
`Grammar`. Only two facets matter to bundle generation: the super-grammar
(built-in or another grammar) and `to_recipe`, which serializes the grammar
into an expression that `ohm.makeRecipe` can replay.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol

from ..core.errors import BundleError
from ..core.exit_codes import ERR_VALIDATION
from ..core.serialize import dumps_js

BUILT_IN_RULES = "BuiltInRules"


class GrammarLike(Protocol):
    name: str

    @property
    def super_grammar(self) -> "SuperGrammar": ...

    def to_recipe(self, super_grammar_expr: str | None = None) -> str: ...


class SuperGrammar(Protocol):
    name: str

    def is_built_in(self) -> bool: ...


@dataclass(frozen=True)
class BuiltIn:
    name: str = BUILT_IN_RULES

    def is_built_in(self) -> bool:
        return True


BUILT_IN = BuiltIn()

GrammarCollection = Mapping[str, GrammarLike]


@dataclass
class Grammar:
    name: str
    super_grammar: "Grammar | BuiltIn" = BUILT_IN
    meta_info: dict[str, Any] = field(default_factory=dict)
    start_rule: str | None = None
    rules: dict[str, Any] = field(default_factory=dict)

    @property
    def source(self) -> str | None:
        return self.meta_info.get("source")

    def is_built_in(self) -> bool:
        return False

    def to_recipe(self, super_grammar_expr: str | None = None) -> str:
        if super_grammar_expr:
            super_output = super_grammar_expr
        elif not self.super_grammar.is_built_in():
            super_output = self.super_grammar.to_recipe()  # type: ignore[union-attr]
        else:
            super_output = "null"
        elements = [
            dumps_js("grammar"),
            dumps_js(self.meta_info),
            dumps_js(self.name),
            super_output,
            dumps_js(self.start_rule),
            dumps_js(self.rules),
        ]
        return f"[{','.join(elements)}]"


def grammars_from_payload(rows: list[dict[str, Any]], known: Mapping[str, Grammar] | None = None) -> dict[str, Grammar]:
    """Build a grammar collection from the bridge's `compile` response.

    Each row carries `name`, `superGrammar` ({"name", "builtIn"}) and `recipe`,
    the grammar's recipe with a `null` super slot, already parsed as JSON.
    Super-grammars are looked up among earlier rows, then in `known`.
    """
    out: dict[str, Grammar] = {}
    for row in rows:
        recipe = row["recipe"]
        sup = row.get("superGrammar") or {}
        if sup.get("builtIn", True):
            super_grammar: Grammar | BuiltIn = BUILT_IN
        else:
            super_name = str(sup["name"])
            found = out.get(super_name) or (known or {}).get(super_name)
            super_grammar = found if found is not None else Grammar(name=super_name)
        out[str(row["name"])] = Grammar(
            name=str(row["name"]),
            super_grammar=super_grammar,
            meta_info=dict(recipe[1] or {}),
            start_rule=recipe[4],
            rules=dict(recipe[5] or {}),
        )
    return out


def check_declaration_order(grammars: GrammarCollection, source: str = "<grammars>") -> None:
    """Fail unless every user super-grammar is declared earlier in `grammars`."""
    seen: set[str] = set()
    for name, grammar in grammars.items():
        sup = grammar.super_grammar
        if not sup.is_built_in() and sup.name not in seen:
            where = "later in" if sup.name in grammars else "outside"
            raise BundleError(
                f"{source}: grammar '{name}' extends '{sup.name}', which is declared {where} this file",
                ERR_VALIDATION,
                kind="grammar_order",
            )
        seen.add(name)
