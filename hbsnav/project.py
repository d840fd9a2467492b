"""
Project model: a base directory plus the modules that declare source folders.

Hosts with their own notion of modules implement ModuleSource; a project
without a host uses the modules listed in hbs-cfg/project.yaml.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Sequence, runtime_checkable

from .config import ModuleCfg, ProjectCfg, ResolutionCfg, load_project_config


@runtime_checkable
class ModuleSource(Protocol):
    """A build unit whose declared source folders are resolution roots."""

    @property
    def name(self) -> str:
        ...

    def source_folders(self) -> Iterable[Path]:
        """Absolute folders in declaration order; may raise if metadata is unreadable."""
        ...


@dataclass
class ConfiguredModule:
    """ModuleSource backed by a ModuleCfg entry."""
    cfg: ModuleCfg
    base_dir: Path

    @property
    def name(self) -> str:
        return self.cfg.name

    def source_folders(self) -> List[Path]:
        return [Path(os.path.abspath(self.base_dir / folder)) for folder in self.cfg.source_folders]


@dataclass
class Project:
    """One project session: base directory, modules and resolution settings."""
    base_dir: Path
    modules: Sequence[ModuleSource] = field(default_factory=list)
    resolution: ResolutionCfg = field(default_factory=ResolutionCfg)

    def __post_init__(self) -> None:
        self.base_dir = Path(os.path.abspath(self.base_dir))

    @classmethod
    def from_config(cls, base_dir: Path, cfg: Optional[ProjectCfg] = None) -> "Project":
        """Build a project from hbs-cfg/project.yaml (loaded when cfg is None)."""
        base = Path(os.path.abspath(base_dir))
        if cfg is None:
            cfg = load_project_config(base)
        modules = [ConfiguredModule(m, base) for m in cfg.modules]
        return cls(base_dir=base, modules=modules, resolution=cfg.resolution)


__all__ = ["ModuleSource", "ConfiguredModule", "Project"]
