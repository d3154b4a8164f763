"""Grammar compiler boundary: model types and the node-backed collaborators."""
from .compiler import (
    GrammarCompileError,
    GrammarCompiler,
    NodeBridge,
    NodeGrammarCompiler,
    NodeTypeGenerator,
    TypeGenerator,
    probe_runtime,
)
from .model import BUILT_IN, BuiltIn, Grammar, GrammarCollection, check_declaration_order, grammars_from_payload

__all__ = [
    "BUILT_IN",
    "BuiltIn",
    "Grammar",
    "GrammarCollection",
    "GrammarCompileError",
    "GrammarCompiler",
    "NodeBridge",
    "NodeGrammarCompiler",
    "NodeTypeGenerator",
    "TypeGenerator",
    "check_declaration_order",
    "grammars_from_payload",
    "probe_runtime",
]
