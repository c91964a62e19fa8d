"""Named hook entry points.

The host calls one function per hook. Every entry point is generated from
the ``HOOK_SPECS`` table; none is written by hand. An entry point only
checks the argument count and forwards to :meth:`Dispatcher.invoke`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .base import NO_UNITS, UnknownHookError

if TYPE_CHECKING:
    from .orchestrator import Dispatcher

RECORD_PARAMS = ("project_id", "record", "instrument", "event_id", "group_id")
SURVEY_PARAMS = RECORD_PARAMS + ("survey_hash", "response_id")


@dataclass(frozen=True)
class HookSpec:
    name: str
    params: tuple[str, ...] = ()
    # the first parameter is the scope id
    scoped: bool = True
    # result is handed back to the host
    returns: bool = False

    @property
    def arity(self) -> int:
        return len(self.params)

    def scope_of(self, args: tuple[Any, ...]) -> str:
        if not self.scoped or not args or args[0] is None:
            return ""
        return str(args[0])


HOOK_SPECS: tuple[HookSpec, ...] = (
    HookSpec("on_add_edit_records_page", ("project_id", "instrument", "event_id")),
    HookSpec("on_control_center", (), scoped=False),
    HookSpec("on_custom_verify_username", ("username",), scoped=False, returns=True),
    HookSpec("on_data_entry_form", RECORD_PARAMS),
    HookSpec("on_data_entry_form_top", RECORD_PARAMS),
    HookSpec("on_every_page_before_render", ("project_id",)),
    HookSpec("on_every_page_top", ("project_id",)),
    HookSpec("on_project_home_page", ("project_id",)),
    HookSpec("on_save_record", SURVEY_PARAMS),
    HookSpec("on_survey_acknowledgement_page", SURVEY_PARAMS),
    HookSpec("on_survey_complete", SURVEY_PARAMS),
    HookSpec("on_survey_page", SURVEY_PARAMS),
    HookSpec("on_survey_page_top", SURVEY_PARAMS),
    HookSpec("on_user_rights", ("project_id",)),
)

_SPECS_BY_NAME = {spec.name: spec for spec in HOOK_SPECS}

HOOK_NAMES: tuple[str, ...] = tuple(_SPECS_BY_NAME)


def get_hook_spec(name: str) -> HookSpec:
    try:
        return _SPECS_BY_NAME[name]
    except KeyError:
        raise UnknownHookError(f"unknown hook {name!r}") from None


def make_entry_point(spec: HookSpec, dispatcher: Dispatcher) -> Callable[..., Any]:
    def entry_point(*args: Any) -> Any:
        if len(args) != spec.arity:
            raise TypeError(f"{spec.name}() takes {spec.arity} positional argument(s) but {len(args)} were given")
        result = dispatcher.invoke(spec.name, spec.scope_of(args), args)
        if not spec.returns:
            return None
        return None if result is NO_UNITS else result

    entry_point.__name__ = spec.name
    entry_point.__qualname__ = spec.name
    entry_point.__doc__ = f"Find and run `{spec.name}` units ({', '.join(spec.params) or 'no arguments'})."
    return entry_point


class HookHost:
    """Exposes every entry point in ``HOOK_SPECS`` as an attribute.

    >>> host = HookHost(dispatcher)
    >>> host.on_every_page_top(12)
    """

    def __init__(self, dispatcher: Dispatcher):
        self.dispatcher = dispatcher
        for spec in HOOK_SPECS:
            setattr(self, spec.name, make_entry_point(spec, dispatcher))

    def fire(self, name: str, *args: Any) -> Any:
        get_hook_spec(name)
        return getattr(self, name)(*args)
