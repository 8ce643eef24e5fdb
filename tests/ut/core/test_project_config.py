"""项目配置读取 / 校验 / 保存"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from saaj.core.exceptions import ConfigError
from saaj.core.models import ItemKind
from saaj.core.project_config import DEFAULT_DIRECTORIES, ProjectConfig, ProjectConfigStore

SCHEMA = "https://registry.example/schema.json"


@pytest.fixture()
def store(tmp_path: Path) -> ProjectConfigStore:
    return ProjectConfigStore(tmp_path / "components.json", schema_url=SCHEMA)


class TestProjectConfigStore:
    def test_load_absent(self, store: ProjectConfigStore) -> None:
        assert store.load() is None
        assert store.validate(None) is False

    def test_save_then_load(self, store: ProjectConfigStore) -> None:
        store.save(store.new_config({ItemKind.COMPONENT: "src/ui"}))
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert set(data) == {"schemaUrl", "directories"}
        assert data["directories"]["component"] == "src/ui"

        loaded = store.load()
        assert loaded.directory_for(ItemKind.COMPONENT) == "src/ui"
        assert loaded.directory_for(ItemKind.HOOK) == DEFAULT_DIRECTORIES[ItemKind.HOOK]
        assert store.validate(loaded)

    def test_missing_kind_invalid(self, store: ProjectConfigStore) -> None:
        dirs = {k.value: v for k, v in DEFAULT_DIRECTORIES.items() if k is not ItemKind.STYLE}
        store.path.write_text(json.dumps({"schemaUrl": SCHEMA, "directories": dirs}))
        config = store.load()
        assert store.validate(config) is False
        with pytest.raises(ConfigError, match="style"):
            config.directory_for(ItemKind.STYLE)

    def test_stale_schema_url_invalid(self, store: ProjectConfigStore) -> None:
        stale = ProjectConfig.default("http://localhost:3000/schema.json")
        store.save(stale)
        assert store.validate(store.load()) is False

    def test_malformed_json(self, store: ProjectConfigStore) -> None:
        store.path.write_text("{not json")
        with pytest.raises(ConfigError, match="JSON"):
            store.load()

    def test_non_object_is_invalid(self, store: ProjectConfigStore) -> None:
        store.path.write_text("[]")
        assert store.validate(store.load()) is False
