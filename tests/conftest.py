from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from kitecli.config import ModuleKind, ProjectConfig  # noqa: E402


@pytest.fixture()
def npm_project(tmp_path: Path) -> Path:
    """An empty npm package, the starting point for ``kite init``."""

    project = tmp_path / "app"
    project.mkdir()
    (project / "package.json").write_text(json.dumps({"name": "app", "dependencies": {}}), encoding="utf-8")
    return project


@pytest.fixture()
def project_config(tmp_path: Path) -> ProjectConfig:
    """Default layout with every kind folder present on disk."""

    config = ProjectConfig.default(tmp_path)
    for kind in ModuleKind:
        config.folder_for(kind).mkdir(parents=True)
    return config
