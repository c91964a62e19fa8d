"""Append-only diagnostics log for dispatch attempts.

Each dispatch writes ``"<hook> at <page> with <json>"`` and, when units were
found, ``"found hooks: <json list of paths>"``. A record's lines go out in a
single ``os.write`` on an ``O_APPEND`` descriptor so overlapping dispatches
never interleave inside a record.
"""

from __future__ import annotations

import json
import os
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

DEFAULT_LOG_FILE = "/tmp/hook_events.log"

ALLOWED_REQUEST_KEYS = ("pid", "page", "id", "auto", "arm", "pids", "csrf-token", "type", "action")


@dataclass
class DispatchContext:
    """Request-like values the host passes in for diagnostics only."""

    page: str = ""
    request: Mapping[str, Any] = field(default_factory=dict)


def filter_request(request: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in request.items() if k in ALLOWED_REQUEST_KEYS}


@dataclass
class DiagnosticRecord:
    hook_name: str
    scope_id: str
    page: str
    request: dict[str, Any]
    units: list[str]

    @classmethod
    def build(cls, hook_name: str, scope_id: Any, units: list[str], context: DispatchContext | None = None) -> DiagnosticRecord:
        ctx = context or DispatchContext()
        return cls(
            hook_name=hook_name,
            scope_id="" if scope_id is None else str(scope_id),
            page=ctx.page,
            request=filter_request(ctx.request),
            units=list(units),
        )

    def lines(self) -> list[str]:
        out = [f"{self.hook_name} at {self.page} with {json.dumps(self.request, default=str)}"]
        if self.units:
            out.append(f"found hooks: {json.dumps(self.units)}")
        return out


class DiagnosticsSink:
    def __init__(self, log_path: str = DEFAULT_LOG_FILE):
        self.log_path = log_path

    def _append_lines(self, lines: list[str]) -> None:
        data = "".join(line.replace("\n", " ") + "\n" for line in lines).encode("utf-8")
        fd = os.open(self.log_path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, 0o644)
        try:
            os.write(fd, data)
        finally:
            os.close(fd)

    def record(self, record: DiagnosticRecord) -> None:
        parent = os.path.dirname(self.log_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        self._append_lines(record.lines())


def read_log(log_path: str = DEFAULT_LOG_FILE, limit: int | None = 50) -> list[str]:
    """Return the last ``limit`` lines of the diagnostics log (all when None)."""

    if not os.path.exists(log_path):
        return []
    with open(log_path, encoding="utf-8") as f:
        tail = deque((line.rstrip("\n") for line in f), maxlen=limit)
    return list(tail)
