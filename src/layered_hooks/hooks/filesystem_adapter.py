"""Load a unit file from disk and return the callable it exposes.

A unit is a plain python file. It must define ``run`` (or ``main``, or a
function named after the hook) accepting the hook's positional arguments.
The file is executed afresh on every load and is only present in
``sys.modules`` while it executes.
"""

from __future__ import annotations

import hashlib
import importlib.machinery
import importlib.util
import os
import sys
from collections.abc import Callable
from typing import Any

from .base import HookLoadError, HookUnit


def _module_name_for(path: str) -> str:
    digest = hashlib.sha1(os.path.abspath(path).encode("utf-8")).hexdigest()[:12]
    stem = os.path.splitext(os.path.basename(path))[0].replace("-", "_").replace(".", "_")
    return f"_layered_hook_{stem}_{digest}"


def load_unit(unit: HookUnit | str, hook_name: str | None = None) -> Callable[..., Any]:
    path = unit.path if isinstance(unit, HookUnit) else unit

    module_name = _module_name_for(path)
    # explicit loader so units with a non-.py extension import too
    loader = importlib.machinery.SourceFileLoader(module_name, path)
    spec = importlib.util.spec_from_file_location(module_name, path, loader=loader)
    if not spec or not spec.loader:
        raise HookLoadError(f"cannot load hook unit {path}")
    mod = importlib.util.module_from_spec(spec)
    # dataclasses resolves annotations through sys.modules
    sys.modules[module_name] = mod
    try:
        spec.loader.exec_module(mod)
    except Exception as e:
        raise HookLoadError(f"failed to import hook unit {path}: {e}") from e
    finally:
        sys.modules.pop(module_name, None)

    # find a run function
    candidates = ["run", "main"]
    if hook_name:
        candidates.append(hook_name)
    for attr in candidates:
        runner = getattr(mod, attr, None)
        if runner is not None and callable(runner):
            return runner

    raise HookLoadError(f"hook unit {path} must define a callable 'run' or 'main'")
