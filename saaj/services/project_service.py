"""项目服务: init / add 流程

  init: 校验 package.json → 读取或收集目录配置并保存 → 安装必需的第三方包
        → 安装基础条目（类型、样式、工具函数、常用 hook）
  add:  校验 package.json 与项目配置 → 从注册表获取条目 → 安装
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Protocol

from saaj.core.exceptions import ConfigError, ExecutionError
from saaj.core.installer import Installer, InstallReport, PackageFailure
from saaj.core.manifest import ProjectManifest
from saaj.core.models import ItemKind, ResolvedItem
from saaj.core.package_manager import PackageManager
from saaj.core.project_config import DEFAULT_DIRECTORIES, ProjectConfig, ProjectConfigStore

logger = logging.getLogger(__name__)

MINIMUM_REQUIRED_DEPENDENCIES = ("react-native-unistyles@2.20.0", "@radix-ui/colors")

# 几乎所有组件都会用到的基础条目，按安装顺序排列
FOUNDATION_ITEMS: tuple[tuple[ItemKind, tuple[str, ...]], ...] = (
    (ItemKind.TYPE, ("components.ts",)),
    (ItemKind.STYLE, ("tokens.ts", "themes.ts", "unistyles.ts")),
    (ItemKind.UTILITY, ("composeRefs.ts", "genericForwardRef.ts")),
    (ItemKind.HOOK, ("useControllableState.ts",)),
)

# prompt(kind, default) -> 用户输入的目录
DirectoryPrompt = Callable[[ItemKind, str], str]


class ItemSource(Protocol):
    """本地 Resolver 与远程 RegistryClient 的共同接口"""

    def fetch(
        self, names: Iterable[str], kind: str | ItemKind | None = None,
    ) -> list[ResolvedItem]:
        ...


class ProjectService:
    def __init__(
        self,
        registry: ItemSource,
        installer: Installer,
        store: ProjectConfigStore,
        manifest: ProjectManifest,
        package_manager: PackageManager,
    ) -> None:
        self.registry = registry
        self.installer = installer
        self.store = store
        self.manifest = manifest
        self.package_manager = package_manager

    # ------------------------------------------------------------------
    # 前置校验
    # ------------------------------------------------------------------

    def require_manifest(self) -> None:
        if not self.manifest.exists():
            raise ConfigError(
                f"No {self.manifest.path.name} file found, please create a "
                "react-native project first and then run init."
            )

    def require_project_config(self) -> ProjectConfig:
        name = self.store.path.name
        config = self.store.load()
        if config is None:
            raise ConfigError(f"No {name} file found. Please run init first.")
        if not self.store.validate(config):
            raise ConfigError(
                f"Invalid {name} file found. To start over, remove {name} "
                "file and run init again."
            )
        return config

    def ensure_project_config(self, prompt: DirectoryPrompt | None = None) -> tuple[ProjectConfig, bool]:
        """已有配置则校验后返回，否则收集目录并保存（只写一次）

        返回 (config, created)。
        """
        if self.store.exists():
            return self.require_project_config(), False

        directories: dict[ItemKind, str] = {}
        for kind, default in DEFAULT_DIRECTORIES.items():
            directories[kind] = prompt(kind, default) if prompt else default
        config = self.store.new_config(directories)
        self.store.save(config)
        return config, True

    # ------------------------------------------------------------------
    # 流程
    # ------------------------------------------------------------------

    def add(self, names: list[str], kind: str | ItemKind | None = None) -> InstallReport:
        self.require_manifest()
        config = self.require_project_config()
        items = self.registry.fetch(names, kind)
        return self.installer.install(items, config)

    def init(self, prompt: DirectoryPrompt | None = None) -> InstallReport:
        self.require_manifest()
        config, created = self.ensure_project_config(prompt)
        logger.info("项目配置%s: %s", "已创建" if created else "已存在且有效", self.store.path)

        report = InstallReport()
        self.install_required_packages(report)
        for kind, names in FOUNDATION_ITEMS:
            items = self.registry.fetch(list(names), kind)
            self.installer.install(items, config, report)
        return report

    def install_required_packages(self, report: InstallReport) -> None:
        pending = self.manifest.missing(MINIMUM_REQUIRED_DEPENDENCIES)
        if not pending:
            return
        try:
            self.package_manager.install(pending)
        except ExecutionError as e:
            logger.error("必需依赖安装失败: %s", e)
            report.failed_packages.append(
                PackageFailure(item="init", packages=pending, dev=False, error=str(e)),
            )
            return
        report.installed_packages.extend(pending)
