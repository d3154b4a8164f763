from __future__ import annotations

import pytest

from ohm_bundler.bundles.typedecls import generate_types_with_writer
from ohm_bundler.bundles.writers import Plan
from ohm_bundler.core.errors import BundleError

from tests.helpers import FakeGrammar, FakeTypeGenerator


def test_types_file_has_banner_with_base_name() -> None:
    plan = Plan()
    out = generate_types_with_writer("src/grammars/arith.ohm", {"Arith": FakeGrammar("Arith")}, plan, FakeTypeGenerator())
    assert out == "src/grammars/arith.ohm-bundle.d.ts"
    assert plan.files_to_write[out] == (
        "// AUTOGENERATED FILE\n"
        "// This file was generated from arith.ohm by `ohm-bundler generateBundles`.\n"
        "\n"
        "export interface ArithGrammar {}\n"
    )


def test_types_require_grammar_extension() -> None:
    gen = FakeTypeGenerator()
    with pytest.raises(BundleError):
        generate_types_with_writer("arith.js", {}, Plan(), gen)
    assert gen.calls == 0
