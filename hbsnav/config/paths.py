from __future__ import annotations

from pathlib import Path

# Single source of truth for configuration file layout.
CFG_DIR = "hbs-cfg"
PROJECT_FILE = "project.yaml"

# Conventional partial naming.
TEMPLATE_EXT = ".hbs"
PARTIAL_PREFIX = "_"
INDEX_STEM = "index"


def cfg_root(root: Path) -> Path:
    """Absolute path to the hbs-cfg/ directory."""
    return (root / CFG_DIR).resolve()


def project_config_path(root: Path) -> Path:
    """Path to the project configuration file hbs-cfg/project.yaml."""
    return cfg_root(root) / PROJECT_FILE


def is_template_file(path: Path | str) -> bool:
    """Handlebars template check by extension (case-insensitive)."""
    name = path.name if isinstance(path, Path) else str(path)
    return name.lower().endswith(TEMPLATE_EXT)


__all__ = [
    "CFG_DIR",
    "PROJECT_FILE",
    "TEMPLATE_EXT",
    "PARTIAL_PREFIX",
    "INDEX_STEM",
    "cfg_root",
    "project_config_path",
    "is_template_file",
]
