from __future__ import annotations

GENERATOR = "ohm-bundler generateBundles"


def create_banner(filename: str | None = None) -> str:
    origin = f" from {filename}" if filename else ""
    return f"// AUTOGENERATED FILE\n// This file was generated{origin} by `{GENERATOR}`."
