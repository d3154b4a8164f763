from __future__ import annotations

import socket
from pathlib import Path

import pytest
from hypothesis import settings

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

settings.register_profile("ohm-bundler", deadline=None, max_examples=50)
settings.load_profile("ohm-bundler")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def no_network_for_unit(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("slow"):
        return

    def _blocked(*_args: object, **_kwargs: object) -> socket.socket:
        raise RuntimeError("network disabled in unit tests")

    def _blocked_connect(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("network disabled in unit tests")

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket.socket, "connect", _blocked_connect)


@pytest.fixture(autouse=True)
def clean_bundler_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("OHM_BUNDLER_NODE", "OHM_BUNDLER_OHM_MODULE", "RUN_ID"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def grammar_project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    (root / "grammars" / "nested").mkdir(parents=True)
    (root / "grammars" / "arith.ohm").write_text("Arithmetic\n", encoding="utf-8")
    (root / "grammars" / "family.ohm").write_text("Base\nDerived <: Base\n", encoding="utf-8")
    (root / "grammars" / "nested" / "empty.ohm").write_text("", encoding="utf-8")
    (root / "grammars" / "README.txt").write_text("not a grammar\n", encoding="utf-8")
    return root
