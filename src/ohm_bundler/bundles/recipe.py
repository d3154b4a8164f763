from __future__ import annotations

from ..grammar.model import GrammarCollection
from .extension import OHM_FILE_EXT, assert_file_extension_equals
from .writers import Writer


def bundle_filename(grammar_path: str) -> str:
    return f"{grammar_path}-bundle.js"


def _preamble(is_esm: bool, ohm_module: str) -> str:
    if is_esm:
        return f"import ohm from '{ohm_module}';"
    return f"'use strict';const ohm=require('{ohm_module}');"


def render_recipe_module(grammars: GrammarCollection, is_esm: bool, ohm_module: str = "ohm-js") -> str:
    is_single_grammar = len(grammars) == 1
    output = _preamble(is_esm, ohm_module)

    # A single-grammar file exports the grammar itself; anything else exports
    # a (possibly empty) object keyed by grammar name.
    if not is_single_grammar:
        output += "const result={};"
    for name, grammar in grammars.items():
        super_grammar = grammar.super_grammar
        super_grammar_expr = None if super_grammar.is_built_in() else f"result.{super_grammar.name}"
        output += "const result=" if is_single_grammar else f"result.{name}="
        output += f"ohm.makeRecipe({grammar.to_recipe(super_grammar_expr)});"
    output += "export default result;" if is_esm else "module.exports=result;"
    return output


def generate_recipe(
    grammar_path: str,
    grammars: GrammarCollection,
    writer: Writer,
    is_esm: bool,
    ohm_module: str = "ohm-js",
) -> str:
    assert_file_extension_equals(grammar_path, OHM_FILE_EXT)
    output_filename = bundle_filename(grammar_path)
    writer.write(output_filename, render_recipe_module(grammars, is_esm, ohm_module))
    return output_filename
