"""使用方项目配置（components.json）

记录每个条目类别在项目中的目标目录，init 时写入一次，之后不自动更新:

    {
      "schemaUrl": "https://saaj-ui.vercel.app/schema.json",
      "directories": {"component": "components/ui", "hook": "hooks", ...}
    }

schemaUrl 只做轻量的版本/来源校验: 与工具当前会写入的值不一致即视为无效。
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from saaj.core.exceptions import ConfigError
from saaj.core.models import ItemKind
from saaj.utils.yaml_io import load_json, save_json

logger = logging.getLogger(__name__)

DEFAULT_DIRECTORIES: dict[ItemKind, str] = {
    ItemKind.COMPONENT: "components/ui",
    ItemKind.HOOK: "hooks",
    ItemKind.UTILITY: "utils",
    ItemKind.STYLE: "styles",
    ItemKind.TYPE: "types",
}


@dataclass
class ProjectConfig:
    schema_url: str
    directories: dict[ItemKind, str] = field(default_factory=dict)

    def directory_for(self, kind: ItemKind) -> str:
        try:
            return self.directories[kind]
        except KeyError:
            raise ConfigError(f"项目配置缺少 '{kind.value}' 的目录") from None

    def to_dict(self) -> dict[str, Any]:
        return {
            "schemaUrl": self.schema_url,
            "directories": {k.value: v for k, v in self.directories.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectConfig:
        """宽松解析: 未知类别丢弃，缺失项留给 validate 判定"""
        directories: dict[ItemKind, str] = {}
        raw_dirs = data.get("directories")
        if isinstance(raw_dirs, dict):
            for key, value in raw_dirs.items():
                if key in ItemKind.values() and isinstance(value, str) and value:
                    directories[ItemKind(key)] = value
        schema_url = data.get("schemaUrl")
        return cls(
            schema_url=schema_url if isinstance(schema_url, str) else "",
            directories=directories,
        )

    @classmethod
    def default(cls, schema_url: str) -> ProjectConfig:
        return cls(schema_url=schema_url, directories=dict(DEFAULT_DIRECTORIES))


class ProjectConfigStore:
    """项目配置的读取 / 校验 / 保存"""

    def __init__(self, path: str | Path, schema_url: str) -> None:
        self.path = Path(path)
        self.schema_url = schema_url

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> ProjectConfig | None:
        """读取配置；文件不存在返回 None，JSON 损坏抛 ConfigError"""
        try:
            data = load_json(self.path)
        except json.JSONDecodeError as e:
            raise ConfigError(f"{self.path.name} 不是合法的 JSON: {e}") from e
        if data is None:
            return None
        if not isinstance(data, dict):
            return ProjectConfig(schema_url="")
        return ProjectConfig.from_dict(data)

    def validate(self, config: ProjectConfig | None) -> bool:
        """所有类别都有目录，且 schemaUrl 与当前工具一致"""
        if config is None:
            return False
        if any(kind not in config.directories for kind in ItemKind):
            return False
        return config.schema_url == self.schema_url

    def save(self, config: ProjectConfig) -> None:
        save_json(self.path, config.to_dict())
        logger.info("项目配置已写入: %s", self.path)

    def new_config(self, directories: dict[ItemKind, str] | None = None) -> ProjectConfig:
        """以当前 schemaUrl 构造配置，未提供的类别取默认目录"""
        dirs = dict(DEFAULT_DIRECTORIES)
        dirs.update(directories or {})
        return ProjectConfig(schema_url=self.schema_url, directories=dirs)
