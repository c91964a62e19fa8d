from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from .base import NO_UNITS, HookUnit
from .diagnostics import DiagnosticRecord, DiagnosticsSink, DispatchContext
from .entrypoints import get_hook_spec
from .filesystem_adapter import load_unit
from .loader import DEFAULT_EXTENSION, DEFAULT_SCOPE_PREFIX, resolve_units

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)

ModuleRegistry = Callable[[str, tuple], Any]


@dataclass
class Dispatcher:
    """Resolves and runs the units of one hook per call.

    ``module_registry``, when set, is called with ``(hook_name, args)`` before
    any unit runs unless the caller passes ``notify_registry=False``.
    ``diagnostics`` receives a record for hooks named in ``logged_hooks`` or
    for any call made with ``log=True``.
    """

    hooks_dir: str | None = None
    extension: str = DEFAULT_EXTENSION
    scope_prefix: str = DEFAULT_SCOPE_PREFIX
    module_registry: ModuleRegistry | None = None
    diagnostics: DiagnosticsSink | None = None
    logged_hooks: list[str] = field(default_factory=list)

    @classmethod
    def from_settings(cls, settings: Settings, module_registry: ModuleRegistry | None = None) -> Dispatcher:
        return cls(
            hooks_dir=str(settings.hooks_dir),
            extension=settings.extension,
            scope_prefix=settings.scope_prefix,
            module_registry=module_registry,
            diagnostics=DiagnosticsSink(settings.log_file),
            logged_hooks=list(settings.logged_hooks),
        )

    def list_units(self, hook_name: str, scope_id: str | int | None = "") -> list[HookUnit]:
        get_hook_spec(hook_name)
        return resolve_units(
            hook_name,
            scope_id,
            hooks_dir=self.hooks_dir,
            extension=self.extension,
            scope_prefix=self.scope_prefix,
        )

    def _should_log(self, hook_name: str, log: bool | None) -> bool:
        if self.diagnostics is None:
            return False
        if log is not None:
            return log
        return "all" in self.logged_hooks or hook_name in self.logged_hooks

    def invoke(
        self,
        hook_name: str,
        scope_id: str | int | None = "",
        args: tuple = (),
        *,
        notify_registry: bool = True,
        log: bool | None = None,
        context: DispatchContext | None = None,
    ) -> Any:
        """Run every unit of ``hook_name`` in order and return the last result.

        Returns ``NO_UNITS`` when nothing was found. The first load failure or
        unit exception propagates and the remaining units do not run.
        """
        args = tuple(args)
        units = self.list_units(hook_name, scope_id)

        if notify_registry and self.module_registry is not None:
            self.module_registry(hook_name, args)

        if self._should_log(hook_name, log):
            record = DiagnosticRecord.build(hook_name, scope_id, [u.path for u in units], context)
            self.diagnostics.record(record)

        if not units:
            return NO_UNITS

        result: Any = NO_UNITS
        for unit in units:
            logger.debug("running %s unit %s", hook_name, unit.path)
            try:
                hook = load_unit(unit, hook_name)
                result = hook(*args)
            except Exception:
                logger.error("hook %s failed in unit %s", hook_name, unit.path)
                raise
        return result
