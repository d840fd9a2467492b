"""
Shared test infrastructure: file writers and project builders.
"""

from .file_utils import write, write_partial, write_text_file
from .project_builders import create_project_yaml, make_project, create_partials, BrokenModule

__all__ = [
    "write", "write_partial", "write_text_file",
    "create_project_yaml", "make_project", "create_partials", "BrokenModule",
]
