"""Canonical JSON serialization helpers."""

from __future__ import annotations

import json
import re
from typing import Any

# Paired surrogates never survive into a Python str, so any match is a lone one.
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def dumps_json(payload: Any, pretty: bool = False) -> str:
    if pretty:
        return json.dumps(payload, indent=2, sort_keys=True)
    return json.dumps(payload, sort_keys=True)


def dumps_js(value: Any) -> str:
    """Encode `value` the way JavaScript's `JSON.stringify` does.

    Non-ASCII text is kept as-is; lone surrogates are written as `\\uXXXX`
    escapes so the result always encodes to UTF-8.
    """
    out = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return _LONE_SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", out)
