from __future__ import annotations

from pathlib import PurePath

from ..core.errors import BundleError
from ..core.exit_codes import ERR_VALIDATION

OHM_FILE_EXT = ".ohm"


def file_extension(filename: str) -> str:
    return PurePath(filename).suffix


def assert_file_extension_equals(filename: str, ext: str) -> None:
    actual = file_extension(filename)
    if actual != ext:
        raise BundleError(
            f"Wrong file extension: expected '{ext}', got '{actual}'",
            ERR_VALIDATION,
            kind="wrong_extension",
        )
