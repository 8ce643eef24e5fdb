"""注册表 HTTP 端点测试"""

from __future__ import annotations

from pathlib import Path

import pytest

from saaj.core.config import Config
from saaj.services.container import ServiceContainer
from saaj.web.app import create_app

from tests.helpers import source_text


@pytest.fixture()
def client(local_config: Config):
    app = create_app(ServiceContainer(local_config))
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


class TestResolveItems:
    def test_single_item_tree(self, client) -> None:
        resp = client.get("/api/registry/items?names=Button")
        assert resp.status_code == 200
        [button] = resp.get_json()
        assert button["name"] == "Button.tsx"
        assert button["sourceCode"] == source_text("Button.tsx")
        assert [d["name"] for d in button["resolvedDependencies"]] == ["Text.tsx", "Icon.tsx"]
        text = button["resolvedDependencies"][0]
        assert [d["name"] for d in text["resolvedDependencies"]] == [
            "genericForwardRef.ts", "components.ts", "tokens.ts",
        ]
        assert button["resolvedDependencies"][1]["resolvedDependencies"] == []

    def test_ordering_and_dedupe(self, client) -> None:
        data = client.get("/api/registry/items?names=Button,Spinner,Text").get_json()
        assert [d["name"] for d in data] == ["Spinner.tsx", "Text.tsx", "Button.tsx"]
        names = []

        def walk(items):  # type: ignore[no-untyped-def]
            for i in items:
                names.append(i["name"])
                walk(i["resolvedDependencies"])

        walk(data)
        assert len(names) == len(set(names))

    def test_extension_and_case_insensitive(self, client) -> None:
        data = client.get("/api/registry/items?names=button.tsx").get_json()
        assert data[0]["name"] == "Button.tsx"

    def test_type_filter(self, client) -> None:
        data = client.get("/api/registry/items?names=tokens&type=style").get_json()
        assert data[0]["kind"] == "style"

    def test_missing_names(self, client) -> None:
        resp = client.get("/api/registry/items")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "names must be provided"

    def test_blank_names(self, client) -> None:
        assert client.get("/api/registry/items?names=,,").status_code == 400

    def test_invalid_type(self, client) -> None:
        resp = client.get("/api/registry/items?names=Button&type=gadget")
        assert resp.status_code == 400
        assert "invalid type 'gadget'" in resp.get_json()["error"]

    def test_not_found_lists_all(self, client) -> None:
        resp = client.get("/api/registry/items?names=Foo,Button,Bar")
        assert resp.status_code == 404
        assert resp.get_json()["error"].startswith(
            "the following items could not be found: Foo, Bar."
        )

    def test_kind_mismatch_is_not_found(self, client) -> None:
        assert client.get("/api/registry/items?names=Button&type=hook").status_code == 404

    def test_unreadable_source(self, client, local_config: Config) -> None:
        (Path(local_config.source_root) / "components" / "Spinner.tsx").unlink()
        resp = client.get("/api/registry/items?names=Spinner")
        assert resp.status_code == 500
        assert "Spinner.tsx" in resp.get_json()["error"]


class TestCatalogEndpoints:
    def test_list(self, client) -> None:
        data = client.get("/api/registry").get_json()
        icon = next(d for d in data if d["name"] == "Icon.tsx")
        assert icon["devPackageDependencies"] == ["@types/react-native-vector-icons"]
        assert "sourceCode" not in icon

    def test_schema(self, client) -> None:
        schema = client.get("/schema.json").get_json()
        assert set(schema["properties"]["directories"]["required"]) == {
            "component", "hook", "type", "utility", "style",
        }

    def test_health(self, client) -> None:
        assert client.get("/health").get_json() == {"status": "ok"}


class TestGlobalErrorHandlers:
    def test_404_returns_json(self, client) -> None:
        resp = client.get("/api/nonexistent")
        assert resp.status_code == 404
        assert "error" in resp.get_json()

    def test_405_returns_json(self, client) -> None:
        resp = client.post("/api/registry/items")
        assert resp.status_code == 405
        assert "error" in resp.get_json()


class TestUnexpectedErrors:
    def test_generic_500_body(self, local_config: Config, monkeypatch: pytest.MonkeyPatch) -> None:
        container = ServiceContainer(local_config)

        def boom(names, kind=None):  # type: ignore[no-untyped-def]
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(container.resolver, "resolve", boom)
        app = create_app(container)
        with app.test_client() as c:
            resp = c.get("/api/registry/items?names=Button")
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "error fetching registry items"}
