from __future__ import annotations

from dataclasses import dataclass


class HookError(Exception):
    """Base class for errors raised by the dispatcher itself."""


class HookLoadError(HookError):
    """Raised when a unit file cannot be imported or exposes no callable."""


class UnknownHookError(HookError, KeyError):
    """Raised when a hook name is not in the entry-point table."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class InvalidScopeError(HookError, ValueError):
    """Raised when a scope id would leave its scope directory."""


class _NoUnits:
    """Result of a dispatch in which no unit was found.

    Distinct from ``None`` so callers can tell "nothing ran" apart from a
    unit that returned ``None``.
    """

    _instance: _NoUnits | None = None

    def __new__(cls) -> _NoUnits:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_UNITS"


NO_UNITS = _NoUnits()


@dataclass(frozen=True)
class HookUnit:
    """One resolved implementation file of a hook.

    ``layer`` is one of ``global``, ``global-dir``, ``scope`` or ``scope-dir``;
    ``rank`` is the unit's position in the execution order.
    """

    path: str
    layer: str
    rank: int

    @property
    def scoped(self) -> bool:
        return self.layer.startswith("scope")
