"""服务容器: 统一依赖注入

目录、解析器、远程客户端、安装器等通过容器懒加载获取，
同一容器内共享实例。CLI 和 Web 层均通过容器取用，不直接构造。

依赖关系（→ 表示依赖）:
  resolver  → catalog, sources
  registry  → resolver（本地模式）或 client（远程模式）
  installer → project_store, package_manager, manifest
  project   → registry, installer, project_store, manifest, package_manager

用法:
    container = ServiceContainer(project_root="path/to/app")
    items = container.registry.fetch(["Button"])
    container.installer.install(items)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from saaj.core.catalog import Catalog
    from saaj.core.config import Config
    from saaj.core.installer import Installer
    from saaj.core.manifest import ProjectManifest
    from saaj.core.package_manager import PackageManager
    from saaj.core.project_config import ProjectConfigStore
    from saaj.core.remote import RegistryClient
    from saaj.core.resolver import Resolver
    from saaj.core.sources import SourceStore
    from saaj.services.project_service import ItemSource, ProjectService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """懒加载服务容器

    Args:
        config: 工具配置（默认取全局 get_config()）
        project_root: 使用方项目根目录
        on_progress: 安装进度回调（CLI 用来输出进度）
    """

    def __init__(
        self,
        config: Config | None = None,
        project_root: str | Path = ".",
        on_progress: Callable[[str], None] | None = None,
    ) -> None:
        self._instances: dict[str, object] = {}
        if config is None:
            from saaj.core.config import get_config
            config = get_config()
        self._config = config
        self.project_root = Path(project_root)
        self.on_progress = on_progress

    @property
    def config(self) -> Config:
        return self._config

    # ---- 注册表（服务端） ----

    @property
    def catalog(self) -> Catalog:
        if "catalog" not in self._instances:
            from saaj.core.catalog import Catalog
            self._instances["catalog"] = Catalog.from_file(self._config.catalog_file)
        return self._instances["catalog"]  # type: ignore[return-value]

    @property
    def sources(self) -> SourceStore:
        if "sources" not in self._instances:
            from saaj.core.sources import SourceStore
            self._instances["sources"] = SourceStore(self._config.source_root)
        return self._instances["sources"]  # type: ignore[return-value]

    @property
    def resolver(self) -> Resolver:
        if "resolver" not in self._instances:
            from saaj.core.resolver import Resolver
            self._instances["resolver"] = Resolver(self.catalog, self.sources)
        return self._instances["resolver"]  # type: ignore[return-value]

    # ---- 注册表（客户端） ----

    @property
    def client(self) -> RegistryClient:
        if "client" not in self._instances:
            from saaj.core.remote import RegistryClient
            self._instances["client"] = RegistryClient(
                self._config.registry_url, timeout=self._config.request_timeout,
            )
        return self._instances["client"]  # type: ignore[return-value]

    @property
    def registry(self) -> ItemSource:
        """本地模式直接用 Resolver，否则走远程客户端"""
        if self._config.local_registry:
            return self.resolver
        return self.client

    # ---- 使用方项目 ----

    @property
    def project_store(self) -> ProjectConfigStore:
        if "project_store" not in self._instances:
            from saaj.core.project_config import ProjectConfigStore
            self._instances["project_store"] = ProjectConfigStore(
                self.project_root / self._config.project_config_file,
                schema_url=self._config.schema_url,
            )
        return self._instances["project_store"]  # type: ignore[return-value]

    @property
    def manifest(self) -> ProjectManifest:
        if "manifest" not in self._instances:
            from saaj.core.manifest import ProjectManifest
            self._instances["manifest"] = ProjectManifest(
                self.project_root / self._config.manifest_file,
            )
        return self._instances["manifest"]  # type: ignore[return-value]

    @property
    def package_manager(self) -> PackageManager:
        if "package_manager" not in self._instances:
            from saaj.core.package_manager import PackageManager
            self._instances["package_manager"] = PackageManager(self.project_root)
        return self._instances["package_manager"]  # type: ignore[return-value]

    @property
    def installer(self) -> Installer:
        if "installer" not in self._instances:
            from saaj.core.installer import Installer
            self._instances["installer"] = Installer(
                store=self.project_store,
                package_manager=self.package_manager,
                manifest=self.manifest,
                project_root=self.project_root,
                on_progress=self.on_progress,
            )
        return self._instances["installer"]  # type: ignore[return-value]

    @property
    def project(self) -> ProjectService:
        if "project" not in self._instances:
            from saaj.services.project_service import ProjectService
            self._instances["project"] = ProjectService(
                registry=self.registry,
                installer=self.installer,
                store=self.project_store,
                manifest=self.manifest,
                package_manager=self.package_manager,
            )
        return self._instances["project"]  # type: ignore[return-value]


# ---- 全局单例（Web 服务共享目录与解析器） ----

_global: ServiceContainer | None = None
_global_lock = threading.Lock()


def get_container() -> ServiceContainer:
    """获取全局 ServiceContainer 单例（线程安全）"""
    global _global  # noqa: PLW0603
    if _global is not None:
        return _global
    with _global_lock:
        if _global is None:
            _global = ServiceContainer()
        return _global


def set_container(container: ServiceContainer) -> None:
    global _global  # noqa: PLW0603
    with _global_lock:
        _global = container


def reset_container() -> None:
    """重置全局容器（仅用于测试）"""
    global _global  # noqa: PLW0603
    with _global_lock:
        _global = None
