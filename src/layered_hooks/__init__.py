"""
Layered-Hooks: file-based dispatcher for host application hooks

Provides:
- Layered discovery of hook units (global, global directory, scoped, scoped directory)
- Ordered, fail-fast execution of every unit with the host's arguments
- A fixed table of named entry points generated from one declaration
- Optional append-only diagnostics of each dispatch
"""

__version__ = "0.1.0"
