from __future__ import annotations

import logging
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import ConfigLoadError
from .model import ProjectCfg
from .paths import project_config_path

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Read a YAML file and return it as a mapping ({} when absent)."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"YAML must be a mapping: {path}")
    return raw


def load_project_config(root: Path) -> ProjectCfg:
    """
    Load hbs-cfg/project.yaml for a project.

    Args:
        root: Project base directory

    Returns:
        Parsed configuration, or defaults when the file does not exist

    Raises:
        ConfigLoadError: On malformed YAML or wrongly typed values
    """
    path = project_config_path(root)
    raw = _read_yaml_map(path)
    if not raw:
        logger.debug(f"No project configuration at {path}, using defaults")
    return ProjectCfg.from_dict(raw)


__all__ = ["load_project_config"]
