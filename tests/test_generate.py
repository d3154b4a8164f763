from __future__ import annotations

from pathlib import Path

import pytest

from ohm_bundler.bundles.generate import GenerateOptions, expand_braces, expand_patterns, generate_bundles
from ohm_bundler.core.context import RunContext
from ohm_bundler.core.errors import BundleError

from tests.helpers import FakeCompiler, FakeTypeGenerator, quiet_ctx


def _run(project: Path, patterns: list[str], **opts: bool) -> tuple[dict[str, str], FakeCompiler, FakeTypeGenerator]:
    compiler = FakeCompiler()
    types = FakeTypeGenerator()
    options = GenerateOptions(cwd=project, **opts)
    files = generate_bundles(
        patterns,
        options,
        ctx=quiet_ctx(project, options.dry_run),
        compiler=compiler,
        type_generator=types,
    )
    return files, compiler, types


def test_expand_patterns_is_relative_and_deduplicated(grammar_project: Path) -> None:
    matches = expand_patterns(["grammars/*.ohm", "**/*.ohm"], grammar_project)
    assert sorted(matches) == ["grammars/arith.ohm", "grammars/family.ohm", "grammars/nested/empty.ohm"]
    assert len(matches) == len(set(matches))


def test_expand_patterns_supports_brace_alternatives(grammar_project: Path) -> None:
    assert expand_patterns(["grammars/{arith,family}.ohm"], grammar_project) == [
        "grammars/arith.ohm",
        "grammars/family.ohm",
    ]
    matches = expand_patterns(["grammars/**/*.{ohm,txt}"], grammar_project)
    assert sorted(matches) == [
        "grammars/README.txt",
        "grammars/arith.ohm",
        "grammars/family.ohm",
        "grammars/nested/empty.ohm",
    ]


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("*.ohm", ["*.ohm"]),
        ("{a,b}.ohm", ["a.ohm", "b.ohm"]),
        ("{a,{b,c}}/x", ["a/x", "b/x", "c/x"]),
        ("{a,b}/{c,d}", ["a/c", "a/d", "b/c", "b/d"]),
        ("{solo}.ohm", ["{solo}.ohm"]),
        ("{open.ohm", ["{open.ohm"]),
    ],
)
def test_expand_braces(pattern: str, expected: list[str]) -> None:
    assert expand_braces(pattern) == expected


def test_expand_patterns_skips_directories(grammar_project: Path) -> None:
    matches = expand_patterns(["grammars/*"], grammar_project)
    assert "grammars/nested" not in matches
    assert "grammars/README.txt" in matches


def test_dry_run_returns_plan_without_writing(grammar_project: Path) -> None:
    files, compiler, types = _run(grammar_project, ["grammars/**/*"], dry_run=True)
    assert sorted(files) == [
        "grammars/arith.ohm-bundle.js",
        "grammars/family.ohm-bundle.js",
        "grammars/nested/empty.ohm-bundle.js",
    ]
    assert len(compiler.sources) == 3
    assert types.calls == 0
    assert not list(grammar_project.rglob("*-bundle.*"))


def test_non_grammar_files_are_never_compiled(grammar_project: Path) -> None:
    files, compiler, _ = _run(grammar_project, ["grammars/README.txt"], dry_run=True)
    assert files == {}
    assert compiler.sources == []


def test_bundle_contents_follow_grammar_count(grammar_project: Path) -> None:
    files, _, _ = _run(grammar_project, ["grammars/**/*.ohm"], dry_run=True)
    assert "const result=ohm.makeRecipe" in files["grammars/arith.ohm-bundle.js"]
    family = files["grammars/family.ohm-bundle.js"]
    assert 'result.Derived=ohm.makeRecipe(["Derived",result.Base]);' in family
    assert files["grammars/nested/empty.ohm-bundle.js"].endswith("const result={};module.exports=result;")


def test_esm_option_switches_module_syntax(grammar_project: Path) -> None:
    files, _, _ = _run(grammar_project, ["grammars/arith.ohm"], dry_run=True, esm=True)
    text = files["grammars/arith.ohm-bundle.js"]
    assert text.startswith("import ohm from 'ohm-js';")
    assert text.endswith("export default result;")


def test_with_types_adds_one_declaration_per_grammar_file(grammar_project: Path) -> None:
    files, _, types = _run(grammar_project, ["**/*.ohm"], dry_run=True, with_types=True)
    decls = sorted(name for name in files if name.endswith(".d.ts"))
    assert decls == [
        "grammars/arith.ohm-bundle.d.ts",
        "grammars/family.ohm-bundle.d.ts",
        "grammars/nested/empty.ohm-bundle.d.ts",
    ]
    assert types.calls == 3
    assert "generated from empty.ohm by" in files["grammars/nested/empty.ohm-bundle.d.ts"]


def test_disk_mode_writes_files_and_returns_empty_plan(grammar_project: Path) -> None:
    files, _, _ = _run(grammar_project, ["grammars/*.ohm"], with_types=True)
    assert files == {}
    assert (grammar_project / "grammars/arith.ohm-bundle.js").is_file()
    assert (grammar_project / "grammars/arith.ohm-bundle.d.ts").is_file()
    assert (grammar_project / "grammars/family.ohm-bundle.js").read_text(encoding="utf-8").startswith("'use strict';")
    assert not (grammar_project / "grammars/nested/empty.ohm-bundle.js").exists()


def test_out_of_order_grammars_abort_the_run(grammar_project: Path) -> None:
    (grammar_project / "grammars" / "family.ohm").write_text("Derived <: Base\nBase\n", encoding="utf-8")
    with pytest.raises(BundleError) as excinfo:
        _run(grammar_project, ["grammars/family.ohm"], dry_run=True)
    assert excinfo.value.kind == "grammar_order"


def test_compile_failure_aborts_but_keeps_earlier_outputs(grammar_project: Path) -> None:
    class FailingCompiler(FakeCompiler):
        def compile(self, source: str):  # noqa: ANN201
            if "Derived" in source:
                raise BundleError("Line 2: expected a rule", 5, kind="compile_error")
            return super().compile(source)

    with pytest.raises(BundleError, match="expected a rule"):
        generate_bundles(
            ["grammars/arith.ohm", "grammars/family.ohm", "grammars/nested/empty.ohm"],
            GenerateOptions(cwd=grammar_project),
            ctx=quiet_ctx(grammar_project),
            compiler=FailingCompiler(),
        )
    assert (grammar_project / "grammars/arith.ohm-bundle.js").is_file()
    assert not (grammar_project / "grammars/nested/empty.ohm-bundle.js").exists()


def test_unreadable_source_propagates(grammar_project: Path) -> None:
    (grammar_project / "grammars" / "broken.ohm").write_bytes(b"\xff\xfe\x00bad")
    with pytest.raises(UnicodeDecodeError):
        _run(grammar_project, ["grammars/broken.ohm"], dry_run=True)


def test_bundles_import_ohm_js_whatever_module_the_bridge_resolves(grammar_project: Path) -> None:
    (grammar_project / "ohm-bundler.yaml").write_text("ohm_module: /opt/vendor/ohm-js\n", encoding="utf-8")
    ctx = RunContext.from_args(run_id="pytest-run", cwd=grammar_project, dry_run=True, quiet=True)
    assert ctx.config.ohm_module == "/opt/vendor/ohm-js"
    files = generate_bundles(
        ["grammars/arith.ohm"],
        GenerateOptions(dry_run=True, cwd=grammar_project),
        ctx=ctx,
        compiler=FakeCompiler(),
    )
    assert files["grammars/arith.ohm-bundle.js"].startswith("'use strict';const ohm=require('ohm-js');")
    assert "/opt/vendor" not in files["grammars/arith.ohm-bundle.js"]
