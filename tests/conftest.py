"""共享 fixture"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from saaj.core.catalog import Catalog
from saaj.core.config import Config
from saaj.core.sources import SourceStore
from saaj.utils.logger import reset_logging

from tests.helpers import SCENARIO_ENTRIES, UI_ENTRIES, write_sources


@pytest.fixture(autouse=True)
def _isolate_globals(monkeypatch: pytest.MonkeyPatch):
    """每个测试使用独立的全局配置 / 容器，不受宿主环境变量影响"""
    import saaj.core.config as cfgmod
    from saaj.services.container import reset_container
    for name in ("SAAJ_REGISTRY_URL", "SAAJ_CATALOG", "SAAJ_SOURCE_ROOT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cfgmod, "_current", None)
    reset_container()
    yield
    reset_container()
    reset_logging()


@pytest.fixture()
def scenario_catalog() -> Catalog:
    return Catalog.from_entries(SCENARIO_ENTRIES)


@pytest.fixture()
def ui_catalog() -> Catalog:
    return Catalog.from_entries(UI_ENTRIES)


@pytest.fixture()
def ui_sources(tmp_path: Path, ui_catalog: Catalog) -> SourceStore:
    return write_sources(tmp_path / "registry", ui_catalog)


@pytest.fixture()
def catalog_file(tmp_path: Path) -> Path:
    path = tmp_path / "catalog.yml"
    path.write_text(yaml.safe_dump({"items": UI_ENTRIES}), encoding="utf-8")
    return path


@pytest.fixture()
def local_config(tmp_path: Path, catalog_file: Path, ui_catalog: Catalog) -> Config:
    """本进程内解析的工具配置"""
    write_sources(tmp_path / "registry", ui_catalog)
    return Config(
        registry_url="local",
        catalog_file=str(catalog_file),
        source_root=str(tmp_path / "registry"),
    )


@pytest.fixture()
def project_root(tmp_path: Path) -> Path:
    root = tmp_path / "app"
    root.mkdir()
    (root / "package.json").write_text(
        json.dumps({"name": "app", "dependencies": {"react-native": "0.74.0"}}),
        encoding="utf-8",
    )
    return root
