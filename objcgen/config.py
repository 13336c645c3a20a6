"""Configuration loading for objcgen (.objcgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .emitter import DEFAULT_FOUNDATION_IMPORT, DEFAULT_RUNTIME_IMPORT

CONFIG_FILENAME = ".objcgen.yml"
DEFAULT_PACKAGE = "appkit"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ImportsConfig:
    """Go import paths referenced by generated files."""

    runtime: str = DEFAULT_RUNTIME_IMPORT
    foundation: str = DEFAULT_FOUNDATION_IMPORT


@dataclass
class ObjcGenConfig:
    """Represents the settings defined in .objcgen.yml."""

    root: Path
    index_dirs: List[Path] = field(default_factory=list)
    package: str = DEFAULT_PACKAGE
    classes: List[str] = field(default_factory=list)
    output: Optional[Path] = None
    imports: ImportsConfig = field(default_factory=ImportsConfig)


def load_config(config_path: Path) -> ObjcGenConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ObjcGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    index_dirs = [root / path for path in _as_str_list(data.get("index_dirs"))]
    output_str = _as_str(data.get("output"))

    imports = ImportsConfig()
    imports_data = _as_dict(data.get("imports"))
    if imports_data:
        imports.runtime = _as_str(imports_data.get("runtime")) or imports.runtime
        imports.foundation = _as_str(imports_data.get("foundation")) or imports.foundation

    return ObjcGenConfig(
        root=root,
        index_dirs=index_dirs,
        package=_as_str(data.get("package")) or DEFAULT_PACKAGE,
        classes=_as_str_list(data.get("classes")),
        output=root / output_str if output_str else None,
        imports=imports,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "ImportsConfig", "ObjcGenConfig", "load_config"]
