from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_INTERNAL


@dataclass
class BundleError(Exception):
    message: str
    code: int = ERR_INTERNAL
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message
