"""Loading and validation of `ohm-bundler` configuration files.

A configuration file is optional. When present it is a YAML or JSON mapping
validated against `schemas/config.schema.json`; environment variables then
override the node executable and the ohm runtime module.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from .env import getenv
from .errors import BundleError
from .exit_codes import ERR_CONFIG

CONFIG_FILENAMES = ("ohm-bundler.yaml", "ohm-bundler.yml", "ohm-bundler.json")
CONFIG_SCHEMA = Path(__file__).resolve().parents[1] / "schemas" / "config.schema.json"
DEFAULT_TYPES_MODULE = "@ohm-js/cli/src/helpers/generateTypes.js"


@dataclass(frozen=True)
class BundlerConfig:
    node: str = "node"
    ohm_module: str = "ohm-js"
    types_module: str = DEFAULT_TYPES_MODULE
    timeout_seconds: int = 60
    with_types: bool = False
    esm: bool = False
    source: Path | None = None


def find_config_file(cwd: Path) -> Path | None:
    for name in CONFIG_FILENAMES:
        candidate = cwd / name
        if candidate.is_file():
            return candidate
    return None


def _read_mapping(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise BundleError(f"unable to parse config {path}: {exc}", ERR_CONFIG, kind="invalid_config") from exc


def validate_config_payload(payload: Any, path: Path | None = None) -> dict[str, Any]:
    if payload is None:
        return {}
    schema = json.loads(CONFIG_SCHEMA.read_text(encoding="utf-8"))
    try:
        jsonschema.validate(payload, schema)
    except jsonschema.ValidationError as exc:
        where = f" {path}" if path else ""
        raise BundleError(f"invalid config{where}: {exc.message}", ERR_CONFIG, kind="invalid_config") from exc
    return dict(payload)


def _apply_env(config: BundlerConfig) -> BundlerConfig:
    node = getenv("OHM_BUNDLER_NODE")
    if node:
        config = replace(config, node=node)
    ohm_module = getenv("OHM_BUNDLER_OHM_MODULE")
    if ohm_module:
        config = replace(config, ohm_module=ohm_module)
    return config


def load_config(cwd: Path, explicit: str | None = None) -> BundlerConfig:
    if explicit:
        path: Path | None = Path(explicit) if Path(explicit).is_absolute() else cwd / explicit
        if not path.is_file():
            raise BundleError(f"config file not found: {path}", ERR_CONFIG, kind="invalid_config")
    else:
        path = find_config_file(cwd)
    if path is None:
        return _apply_env(BundlerConfig())
    values = validate_config_payload(_read_mapping(path), path)
    values.pop("schema_version", None)
    return _apply_env(BundlerConfig(source=path, **values))
