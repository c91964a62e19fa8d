"""layered_hooks.hooks package - discovery and dispatch of file-based hook units.

This package provides:
- base: errors, the NO_UNITS marker and the HookUnit record
- loader: layered filesystem discovery of units
- filesystem_adapter: importing a unit file and extracting its callable
- orchestrator: the Dispatcher that runs units in order
- entrypoints: the fixed hook table and generated entry points
- diagnostics: the append-only dispatch log
"""

from .base import NO_UNITS, HookError, HookLoadError, HookUnit, InvalidScopeError, UnknownHookError
from .diagnostics import DiagnosticRecord, DiagnosticsSink, DispatchContext
from .entrypoints import HOOK_NAMES, HOOK_SPECS, HookHost, HookSpec, get_hook_spec, make_entry_point
from .filesystem_adapter import load_unit
from .loader import resolve_units
from .orchestrator import Dispatcher

__all__ = [
    "NO_UNITS",
    "HookError",
    "HookLoadError",
    "HookUnit",
    "InvalidScopeError",
    "UnknownHookError",
    "DiagnosticRecord",
    "DiagnosticsSink",
    "DispatchContext",
    "HOOK_NAMES",
    "HOOK_SPECS",
    "HookHost",
    "HookSpec",
    "get_hook_spec",
    "make_entry_point",
    "load_unit",
    "resolve_units",
    "Dispatcher",
]
