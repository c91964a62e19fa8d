#!/usr/bin/env python3
"""
Layered Hooks CLI Tools

Command-line interface for inspecting, firing and scaffolding hook units.
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import load_settings
from .hooks.base import NO_UNITS, HookError
from .hooks.diagnostics import DispatchContext, read_log
from .hooks.entrypoints import HOOK_SPECS, get_hook_spec
from .hooks.loader import scope_dir_name
from .hooks.orchestrator import Dispatcher

UNIT_TEMPLATE = '''"""{hook} unit."""


def run({params}):
    pass
'''


def _settings(args):
    project_root = Path(args.project_root) if args.project_root else None
    return load_settings(project_root=project_root, hooks_dir=args.hooks_dir)


def _parse_request(pairs):
    request = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep:
            raise HookError(f"--request expects KEY=VALUE, got {pair!r}")
        request[key] = value
    return request


def hooks_command(args):
    """Print the hook table."""
    for spec in HOOK_SPECS:
        flags = []
        if spec.scoped:
            flags.append("scoped")
        if spec.returns:
            flags.append("returns")
        suffix = f"  [{', '.join(flags)}]" if flags else ""
        print(f"{spec.name}({', '.join(spec.params)}){suffix}")


def find_command(args):
    """Print the units that would run for a hook, in order."""
    dispatcher = Dispatcher.from_settings(_settings(args))
    units = dispatcher.list_units(args.hook, args.scope)
    if not units:
        print(f"No units found for {args.hook}")
        return
    for unit in units:
        print(f"{unit.rank:>3}  {unit.layer:<10}  {unit.path}")


def fire_command(args):
    """Run a hook by hand with string arguments."""
    spec = get_hook_spec(args.hook)
    if len(args.args) != spec.arity:
        raise HookError(f"{spec.name} takes {spec.arity} argument(s): {', '.join(spec.params) or 'none'}")

    dispatcher = Dispatcher.from_settings(_settings(args))
    hook_args = tuple(args.args)
    context = DispatchContext(page=args.page, request=_parse_request(args.request))
    result = dispatcher.invoke(
        spec.name,
        spec.scope_of(hook_args),
        hook_args,
        log=True if args.log else None,
        context=context,
    )

    if result is NO_UNITS:
        print(f"No units found for {spec.name}")
    else:
        print(f"{spec.name} -> {result!r}")


def new_command(args):
    """Create a unit file for a hook in the right place."""
    spec = get_hook_spec(args.hook)
    settings = _settings(args)

    base = settings.hooks_dir
    scope_dir = scope_dir_name(args.scope, settings.scope_prefix)
    if scope_dir:
        base = base / scope_dir
    if args.name:
        target = base / spec.name / f"{args.name}{settings.extension}"
    else:
        target = base / f"{spec.name}{settings.extension}"

    if target.exists():
        raise HookError(f"{target} already exists")

    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(UNIT_TEMPLATE.format(hook=spec.name, params=", ".join(spec.params)))
    print(f"Created {target}")


def log_command(args):
    """Show the tail of the diagnostics log."""
    settings = _settings(args)
    lines = read_log(settings.log_file, args.lines)
    if not lines:
        print(f"No diagnostics in {settings.log_file}")
        return
    for line in lines:
        print(line)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Layered Hooks CLI Tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--hooks-dir", help="Hook units directory (overrides configuration)")
    parser.add_argument("--project-root", help="Project root holding pyproject.toml")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    hooks_parser = subparsers.add_parser("hooks", help="List the known hooks")
    hooks_parser.set_defaults(func=hooks_command)

    find_parser = subparsers.add_parser("find", help="Show the units a hook would run")
    find_parser.add_argument("hook", help="Hook name")
    find_parser.add_argument("--scope", default="", help="Scope (project) id")
    find_parser.set_defaults(func=find_command)

    fire_parser = subparsers.add_parser("fire", help="Run a hook with the given arguments")
    fire_parser.add_argument("hook", help="Hook name")
    fire_parser.add_argument("args", nargs="*", help="Positional hook arguments")
    fire_parser.add_argument("--log", action="store_true", help="Write a diagnostics record")
    fire_parser.add_argument("--page", default="", help="Page marker for diagnostics")
    fire_parser.add_argument(
        "--request", action="append", metavar="KEY=VALUE", help="Request parameter for diagnostics"
    )
    fire_parser.set_defaults(func=fire_command)

    new_parser = subparsers.add_parser("new", help="Scaffold a unit file")
    new_parser.add_argument("hook", help="Hook name")
    new_parser.add_argument("--scope", default="", help="Scope (project) id")
    new_parser.add_argument("--name", help="Unit name inside the hook directory, e.g. 00-banner")
    new_parser.set_defaults(func=new_command)

    log_parser = subparsers.add_parser("log", help="Show the diagnostics log")
    log_parser.add_argument("--lines", "-n", type=int, default=50, help="Number of lines (default: 50)")
    log_parser.set_defaults(func=log_command)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except HookError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
