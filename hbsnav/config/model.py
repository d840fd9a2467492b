from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..errors import ConfigLoadError

DEFAULT_MAX_DEPTH = 10
DEFAULT_EXCLUDED_DIRS = ["node_modules/", ".git/"]


def _expect_str_list(value: Any, path: str) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ConfigLoadError(f"{path}: expected list of strings, got {type(value).__name__}")
    out: List[str] = []
    for i, item in enumerate(value):
        if not isinstance(item, str) or not item.strip():
            raise ConfigLoadError(f"{path}[{i}]: expected non-empty string, got {item!r}")
        out.append(item.strip())
    return out


@dataclass
class ModuleCfg:
    """A build unit declaring the folders its templates live in."""
    name: str
    source_folders: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, name: str, data: Any, path: str) -> "ModuleCfg":
        """Create from a YAML node; a bare list is shorthand for source_folders."""
        if isinstance(data, list) or isinstance(data, str):
            return cls(name=name, source_folders=_expect_str_list(data, f"{path}.source_folders"))
        if data is None:
            return cls(name=name)
        if not isinstance(data, dict):
            raise ConfigLoadError(f"{path}: expected mapping, got {type(data).__name__}")
        unknown = set(data) - {"source_folders"}
        if unknown:
            raise ConfigLoadError(f"{path}: unknown keys {sorted(unknown)}")
        return cls(
            name=name,
            source_folders=_expect_str_list(data.get("source_folders"), f"{path}.source_folders"),
        )


@dataclass
class ResolutionCfg:
    """Knobs for enumeration and naming conventions."""
    max_depth: int = DEFAULT_MAX_DEPTH
    excluded_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS))
    extension: str = ".hbs"

    @classmethod
    def from_dict(cls, data: Any, path: str = "resolution") -> "ResolutionCfg":
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigLoadError(f"{path}: expected mapping, got {type(data).__name__}")
        unknown = set(data) - {"max_depth", "excluded_dirs", "extension"}
        if unknown:
            raise ConfigLoadError(f"{path}: unknown keys {sorted(unknown)}")

        max_depth = data.get("max_depth", DEFAULT_MAX_DEPTH)
        # bool is an int subclass; reject it explicitly
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
            raise ConfigLoadError(f"{path}.max_depth: expected non-negative integer, got {max_depth!r}")

        if "excluded_dirs" in data:
            excluded = _expect_str_list(data.get("excluded_dirs"), f"{path}.excluded_dirs")
        else:
            excluded = list(DEFAULT_EXCLUDED_DIRS)

        extension = data.get("extension", ".hbs")
        if not isinstance(extension, str) or not extension.startswith("."):
            raise ConfigLoadError(f"{path}.extension: expected string starting with '.', got {extension!r}")

        return cls(max_depth=max_depth, excluded_dirs=excluded, extension=extension)


@dataclass
class ProjectCfg:
    """Whole project configuration (hbs-cfg/project.yaml)."""
    modules: List[ModuleCfg] = field(default_factory=list)
    resolution: ResolutionCfg = field(default_factory=ResolutionCfg)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectCfg":
        unknown = set(data) - {"modules", "resolution"}
        if unknown:
            raise ConfigLoadError(f"unknown top-level keys {sorted(unknown)}")

        raw_modules = data.get("modules") or {}
        if not isinstance(raw_modules, dict):
            raise ConfigLoadError(f"modules: expected mapping, got {type(raw_modules).__name__}")

        # mapping order is discovery order
        modules = [
            ModuleCfg.from_dict(str(name), body, f"modules.{name}")
            for name, body in raw_modules.items()
        ]
        return cls(
            modules=modules,
            resolution=ResolutionCfg.from_dict(data.get("resolution")),
        )


__all__ = ["ModuleCfg", "ResolutionCfg", "ProjectCfg", "DEFAULT_MAX_DEPTH", "DEFAULT_EXCLUDED_DIRS"]
