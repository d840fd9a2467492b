from .load import load_project_config
from .model import ModuleCfg, ResolutionCfg, ProjectCfg
from .paths import (
    CFG_DIR,
    PROJECT_FILE,
    TEMPLATE_EXT,
    cfg_root,
    project_config_path,
    is_template_file,
)

__all__ = [
    "load_project_config",
    "ModuleCfg",
    "ResolutionCfg",
    "ProjectCfg",
    "CFG_DIR",
    "PROJECT_FILE",
    "TEMPLATE_EXT",
    "cfg_root",
    "project_config_path",
    "is_template_file",
]
