"""集中配置管理

工具自身的配置（注册表地址、目录文件、源码根目录等），
支持从 YAML 文件加载 + 环境变量覆盖 + 编程式覆盖。

注意区分: 这里是工具配置；使用方项目的目录映射见 project_config.py。
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path

from saaj.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL = "https://saaj-ui.vercel.app"
DEFAULT_CATALOG_FILE = str(Path(__file__).resolve().parent.parent / "data" / "catalog.yml")

# registry_url 取该值时在本进程内解析，不走网络
LOCAL_REGISTRY = "local"

_ENV_OVERRIDES = {
    "registry_url": "SAAJ_REGISTRY_URL",
    "catalog_file": "SAAJ_CATALOG",
    "source_root": "SAAJ_SOURCE_ROOT",
}


@dataclass
class Config:
    """工具全局配置"""

    # 注册表
    registry_url: str = DEFAULT_REGISTRY_URL
    request_timeout: int = 30

    # 服务端: 目录文件与各类别源码所在根目录
    catalog_file: str = DEFAULT_CATALOG_FILE
    source_root: str = "registry/src"

    # 使用方项目
    project_config_file: str = "components.json"
    manifest_file: str = "package.json"

    extra: dict = field(default_factory=dict)

    @property
    def schema_url(self) -> str:
        """当前版本写入项目配置的 schemaUrl，也是校验已有配置的依据"""
        return f"{self.registry_url.rstrip('/')}/schema.json"

    @property
    def local_registry(self) -> bool:
        return self.registry_url == LOCAL_REGISTRY

    @classmethod
    def from_file(cls, path: str = "saaj.yml") -> Config:
        """从 YAML 文件加载配置（不存在则用默认值），再应用环境变量覆盖"""
        data = load_yaml(path)
        known = {f.name for f in cls.__dataclass_fields__.values()}
        matched = {k: v for k, v in data.items() if k in known and k != "extra"}
        extra = {k: v for k, v in data.items() if k not in known}
        cfg = cls(**matched)
        cfg.extra = extra
        cfg.apply_env()
        return cfg

    def apply_env(self) -> None:
        for attr, env_name in _ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                setattr(self, attr, value)

    def to_dict(self) -> dict:
        return asdict(self)


# 全局单例，由 CLI / Web 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值 + 环境变量覆盖）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
        _current.apply_env()
    return _current


def init_config(path: str = "saaj.yml") -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current
