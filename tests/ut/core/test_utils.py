"""utils 单元测试: shell / net / yaml_io / logger"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from saaj.core.exceptions import ExecutionError
from saaj.utils import shell
from saaj.utils.logger import JSONFormatter, reset_logging, setup_logging
from saaj.utils.net import build_url
from saaj.utils.yaml_io import load_json, load_yaml, save_json

from tests.helpers import FakeExecutor


class TestRunCmd:
    def test_uses_global_executor(self, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = FakeExecutor()
        monkeypatch.setattr(shell, "_default_executor", shell.get_executor())
        shell.set_executor(fake)
        shell.run_cmd(["npm", "install", "a"], label="npm install")
        assert fake.calls == [["npm", "install", "a"]]

    def test_failure_raises_with_label(self) -> None:
        with pytest.raises(ExecutionError, match="yarn add failed"):
            shell.run_cmd(["yarn", "add", "x"], label="yarn add", executor=FakeExecutor(returncode=2))

    def test_local_executor_missing_binary(self, tmp_path: Path) -> None:
        r = shell.LocalExecutor().execute(["definitely-not-a-real-binary-xyz"], cwd=tmp_path)
        assert r.returncode == 127
        assert not r.success


class TestNet:
    def test_build_url_skips_empty_params(self) -> None:
        url = build_url("http://a/", "/api/x", {"names": "A,B", "type": ""})
        assert url == "http://a/api/x?names=A,B"


class TestFileIO:
    def test_json_roundtrip_and_absent(self, tmp_path: Path) -> None:
        path = tmp_path / "sub" / "c.json"
        assert load_json(path) is None
        save_json(path, {"a": 1})
        assert load_json(path) == {"a": 1}
        assert path.read_text().endswith("\n")

    def test_yaml_non_dict_is_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "x.yml"
        path.write_text("- a\n- b\n")
        assert load_yaml(path) == {}


class TestLogger:
    def test_json_formatter(self) -> None:
        record = logging.LogRecord("saaj.x", logging.INFO, __file__, 1, "已加载 %d", (3,), None)
        data = json.loads(JSONFormatter().format(record))
        assert data["message"] == "已加载 3"
        assert data["logger"] == "saaj.x"

    def test_setup_replaces_handlers(self) -> None:
        setup_logging("DEBUG")
        setup_logging("INFO", json_output=True)
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        reset_logging()
        assert root.handlers == []
