from __future__ import annotations

from pathlib import Path

import pytest

from hbsnav import PartialNavigator, Project
from hbsnav.resolver import RootSet, SegmentResolver
from hbsnav.vfs import LocalFileSystem

from tests.infrastructure import create_partials, create_project_yaml, write


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """
    Project with two module source folders and loose templates in the base dir.

    Structure:
        root/
        ├── hbs-cfg/project.yaml      (modules: web, shared)
        ├── src/templates/            (web)
        │   ├── _button.hbs
        │   ├── components/
        │   │   ├── _header.hbs
        │   │   ├── footer.hbs
        │   │   ├── readme.md
        │   │   ├── header/_header.hbs
        │   │   └── nav/index.hbs
        │   └── layouts/main.hbs
        ├── shared/hbs/               (shared)
        │   ├── components/_header.hbs
        │   └── widgets/_card.hbs
        ├── pages/home.hbs
        ├── node_modules/pkg/_x.hbs
        └── README.md
    """
    root = tmp_path
    create_project_yaml(root, {"web": ["src/templates"], "shared": ["shared/hbs"]})
    create_partials(root, [
        "src/templates/_button.hbs",
        "src/templates/components/_header.hbs",
        "src/templates/components/footer.hbs",
        "src/templates/components/header/_header.hbs",
        "src/templates/components/nav/index.hbs",
        "src/templates/layouts/main.hbs",
        "shared/hbs/components/_header.hbs",
        "shared/hbs/widgets/_card.hbs",
        "pages/home.hbs",
        "node_modules/pkg/_x.hbs",
    ])
    write(root / "src" / "templates" / "components" / "readme.md", "# components\n")
    write(root / "README.md", "# site\n")
    return root


@pytest.fixture
def fs() -> LocalFileSystem:
    return LocalFileSystem()


@pytest.fixture
def site_project(site: Path) -> Project:
    return Project.from_config(site)


@pytest.fixture
def root_set(site_project: Project, fs: LocalFileSystem):
    rs = RootSet(site_project, fs)
    yield rs
    rs.close()


@pytest.fixture
def resolver(root_set: RootSet, fs: LocalFileSystem) -> SegmentResolver:
    return SegmentResolver(root_set, fs)


@pytest.fixture
def nav(site: Path, fs: LocalFileSystem):
    with PartialNavigator.open(site, fs) as navigator:
        yield navigator
