"""Ohm-bundler core package."""
from .clock import utc_now_iso
from .config import BundlerConfig, load_config
from .context import RunContext
from .errors import BundleError
from .logging import log_event
from .process import CommandResult, run_command
from .serialize import dumps_js, dumps_json

__all__ = [
    "BundleError",
    "BundlerConfig",
    "CommandResult",
    "RunContext",
    "dumps_js",
    "dumps_json",
    "load_config",
    "log_event",
    "run_command",
    "utc_now_iso",
]
