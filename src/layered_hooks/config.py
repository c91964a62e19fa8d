"""
Settings loader

Reads ``[tool.layered_hooks]`` from pyproject.toml, merges overrides from
dev.pyproject.toml when that file exists, then applies environment variables.
"""
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .hooks.base import HookError
from .hooks.diagnostics import DEFAULT_LOG_FILE
from .hooks.loader import DEFAULT_EXTENSION, DEFAULT_SCOPE_PREFIX

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError as e:
        raise ImportError(
            "layered-hooks requires Python 3.11+ or the 'tomli' package "
            "to parse pyproject.toml on Python 3.10. "
            f"Install tomli: pip install tomli"
        ) from e

TOOL_KEY = "layered_hooks"

ENV_HOOKS_DIR = "LAYERED_HOOKS_DIR"
ENV_LOG_FILE = "LAYERED_HOOKS_LOG_FILE"
ENV_LOGGED = "LAYERED_HOOKS_LOGGED"


class ConfigError(HookError):
    """Raised when a configuration file cannot be parsed."""


@dataclass
class Settings:
    hooks_dir: Path
    log_file: str = DEFAULT_LOG_FILE
    extension: str = DEFAULT_EXTENSION
    scope_prefix: str = DEFAULT_SCOPE_PREFIX
    logged_hooks: List[str] = field(default_factory=list)


def find_project_root(start: Optional[Path] = None) -> Path:
    """Find project root (where pyproject.toml exists)."""
    start = start or Path.cwd()
    current = start.resolve()
    while current.parent != current:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    return start


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _load_toml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"invalid TOML in {path}: {e}") from e


def _split_names(value: Any) -> List[str]:
    if isinstance(value, str):
        return [name.strip() for name in value.split(",") if name.strip()]
    return [str(name) for name in value or []]


def load_tool_config(project_root: Path) -> Dict[str, Any]:
    """Return the merged ``[tool.layered_hooks]`` table (dev overrides prod)."""
    prod_config = _load_toml(project_root / "pyproject.toml")
    dev_config = _load_toml(project_root / "dev.pyproject.toml")
    merged = _deep_merge(prod_config, dev_config)
    return merged.get("tool", {}).get(TOOL_KEY, {})


def load_settings(project_root: Optional[Path] = None, hooks_dir: Optional[str] = None) -> Settings:
    """Build settings from config files and the environment.

    An explicit ``hooks_dir`` argument wins over everything else.
    """
    root = Path(project_root) if project_root else find_project_root()
    tool_config = load_tool_config(root)

    raw_dir = hooks_dir or os.environ.get(ENV_HOOKS_DIR) or tool_config.get("hooks_dir", "hooks")
    resolved_dir = Path(raw_dir).expanduser()
    if not resolved_dir.is_absolute():
        resolved_dir = root / resolved_dir

    log_file = Path(os.environ.get(ENV_LOG_FILE) or tool_config.get("log_file", DEFAULT_LOG_FILE)).expanduser()
    if not log_file.is_absolute():
        log_file = root / log_file

    logged = os.environ.get(ENV_LOGGED)
    return Settings(
        hooks_dir=resolved_dir,
        log_file=str(log_file),
        extension=tool_config.get("extension", DEFAULT_EXTENSION),
        scope_prefix=tool_config.get("scope_prefix", DEFAULT_SCOPE_PREFIX),
        logged_hooks=_split_names(logged if logged is not None else tool_config.get("logged_hooks", [])),
    )
