"""package.json 读取与依赖过滤"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from saaj.core.manifest import ProjectManifest, package_name


@pytest.mark.parametrize(("spec", "expected"), [
    ("react-native-svg", "react-native-svg"),
    ("react-native-unistyles@2.20.0", "react-native-unistyles"),
    ("@radix-ui/colors", "@radix-ui/colors"),
    ("@types/react-native-vector-icons@^6", "@types/react-native-vector-icons"),
])
def test_package_name(spec: str, expected: str) -> None:
    assert package_name(spec) == expected


class TestProjectManifest:
    def test_missing_filters_declared(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text(json.dumps({
            "dependencies": {"react-native-svg": "15.0.0"},
            "devDependencies": {"@types/react": "18.0.0"},
        }))
        m = ProjectManifest(path)
        assert m.missing(["react-native-svg@15", "react-native-reanimated"]) == [
            "react-native-reanimated",
        ]
        assert m.missing(["@types/react", "@types/node"], dev=True) == ["@types/node"]

    def test_no_sections(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text("{}")
        assert ProjectManifest(path).missing(["a", "b"]) == ["a", "b"]

    def test_reread_each_call(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text("{}")
        m = ProjectManifest(path)
        assert m.missing(["a"]) == ["a"]
        path.write_text(json.dumps({"dependencies": {"a": "1"}}))
        assert m.missing(["a"]) == []

    def test_exists(self, tmp_path: Path) -> None:
        assert not ProjectManifest(tmp_path / "package.json").exists()
