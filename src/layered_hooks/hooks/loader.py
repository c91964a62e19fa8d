from __future__ import annotations

import logging
import os

from .base import HookUnit, InvalidScopeError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".py"
DEFAULT_SCOPE_PREFIX = "scope-"

LAYER_GLOBAL = "global"
LAYER_GLOBAL_DIR = "global-dir"
LAYER_SCOPE = "scope"
LAYER_SCOPE_DIR = "scope-dir"


def _single_unit(path: str) -> list[str]:
    return [path] if os.path.isfile(path) else []


def _directory_units(directory: str, extension: str) -> list[str]:
    """Return unit files directly inside ``directory`` in plain string order.

    Numeric prefixes ("00-", "01-", "9-") are compared as text, so "10-x"
    runs before "9-c".
    """

    if not os.path.isdir(directory):
        return []

    found: list[str] = []
    for fn in sorted(os.listdir(directory)):
        if not fn.endswith(extension):
            continue
        path = os.path.join(directory, fn)
        if os.path.isfile(path):
            found.append(path)
    return found


def scope_dir_name(scope_id: str | int | None, scope_prefix: str = DEFAULT_SCOPE_PREFIX) -> str | None:
    scope = "" if scope_id is None else str(scope_id)
    if not scope:
        return None
    separators = [sep for sep in (os.sep, os.altsep) if sep]
    if ".." in scope or any(sep in scope for sep in separators):
        raise InvalidScopeError(f"invalid scope id {scope!r}")
    return f"{scope_prefix}{scope}"


def resolve_units(
    hook_name: str,
    scope_id: str | int | None = "",
    hooks_dir: str | None = None,
    extension: str = DEFAULT_EXTENSION,
    scope_prefix: str = DEFAULT_SCOPE_PREFIX,
) -> list[HookUnit]:
    """Find the unit files for ``hook_name`` in execution order.

    Four layers are searched and concatenated without de-duplication:

    1. ``<hooks_dir>/<hook_name><ext>``
    2. ``<hooks_dir>/<hook_name>/*<ext>``
    3. ``<hooks_dir>/<scope_prefix><scope_id>/<hook_name><ext>``
    4. ``<hooks_dir>/<scope_prefix><scope_id>/<hook_name>/*<ext>``

    The scoped layers are skipped when ``scope_id`` is empty. Nothing is
    cached; the filesystem is read on every call.
    """

    if not hook_name:
        raise ValueError("hook_name must be non-empty")
    if not hooks_dir or not os.path.isdir(hooks_dir):
        logger.debug("hooks directory %r does not exist", hooks_dir)
        return []

    paths: list[tuple[str, str]] = []
    paths.extend((p, LAYER_GLOBAL) for p in _single_unit(os.path.join(hooks_dir, hook_name + extension)))
    paths.extend((p, LAYER_GLOBAL_DIR) for p in _directory_units(os.path.join(hooks_dir, hook_name), extension))

    scope_dir = scope_dir_name(scope_id, scope_prefix)
    if scope_dir:
        base = os.path.join(hooks_dir, scope_dir)
        paths.extend((p, LAYER_SCOPE) for p in _single_unit(os.path.join(base, hook_name + extension)))
        paths.extend((p, LAYER_SCOPE_DIR) for p in _directory_units(os.path.join(base, hook_name), extension))

    units = [HookUnit(path, layer, rank) for rank, (path, layer) in enumerate(paths)]
    logger.debug("resolved %d unit(s) for %s (scope %r)", len(units), hook_name, scope_id)
    return units
