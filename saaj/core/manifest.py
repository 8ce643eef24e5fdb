"""使用方项目的依赖清单（package.json）读取

只读: 清单的修改完全交给包管理器子进程。
包管理器会在条目之间改写清单，因此每次过滤都重新读取。
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from saaj.core.exceptions import ConfigError
from saaj.utils.yaml_io import load_json

logger = logging.getLogger(__name__)


def package_name(spec: str) -> str:
    """去掉版本后缀: "react-native-svg@15" -> "react-native-svg"，兼容 @scope/name"""
    spec = spec.strip()
    if spec.startswith("@"):
        scope, _, rest = spec.partition("/")
        return f"{scope}/{rest.split('@', 1)[0]}" if rest else spec
    return spec.split("@", 1)[0]


class ProjectManifest:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> dict[str, Any]:
        try:
            data = load_json(self.path)
        except json.JSONDecodeError as e:
            raise ConfigError(f"{self.path.name} 不是合法的 JSON: {e}") from e
        return data if isinstance(data, dict) else {}

    def installed(self, dev: bool = False) -> set[str]:
        section = self.load().get("devDependencies" if dev else "dependencies")
        return set(section) if isinstance(section, dict) else set()

    def missing(self, specs: Iterable[str], dev: bool = False) -> list[str]:
        """过滤掉清单中已声明的包，保持原顺序"""
        present = self.installed(dev=dev)
        result = [s for s in specs if package_name(s) not in present]
        logger.debug("依赖过滤 (dev=%s): %s", dev, result)
        return result
