from __future__ import annotations

from pathlib import PurePath

from ..grammar.compiler import TypeGenerator
from ..grammar.model import GrammarCollection
from .banner import create_banner
from .extension import OHM_FILE_EXT, assert_file_extension_equals
from .writers import Writer


def types_filename(grammar_path: str) -> str:
    return f"{grammar_path}-bundle.d.ts"


def generate_types_with_writer(
    grammar_path: str,
    grammars: GrammarCollection,
    writer: Writer,
    type_generator: TypeGenerator,
) -> str:
    assert_file_extension_equals(grammar_path, OHM_FILE_EXT)
    filename = PurePath(grammar_path).name
    contents = "\n".join([create_banner(filename), "", type_generator.generate_types(grammars), ""])
    output_filename = types_filename(grammar_path)
    writer.write(output_filename, contents)
    return output_filename
