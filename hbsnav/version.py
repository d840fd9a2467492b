from __future__ import annotations

from functools import lru_cache
from importlib import metadata

DIST_NAME = "hbs-partial-nav"


@lru_cache(maxsize=1)
def tool_version() -> str:
    """Installed version of hbs-partial-nav; '0.0.0+local' for an uninstalled checkout."""
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0+local"


__all__ = ["DIST_NAME", "tool_version"]
