"""条目安装器

把解析结果写入使用方项目:

  - 目标目录取自项目配置中该类别的目录
  - 目标文件已存在即视为已安装，直接跳过: 不比对、不合并、不覆盖
  - 先安装第三方依赖（过滤掉清单中已有的），再递归安装嵌套条目，最后写文件
  - 严格顺序执行，"是否存在" 检查与写入对单个文件是原子的（独占创建）

包管理器失败只记录到报告中，不阻止后续条目的文件写入；
文件系统失败对当前顶层条目是致命的，记入报告后继续安装其余兄弟条目，
已完成的条目不回滚。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from saaj.core.exceptions import ConfigError, ExecutionError, InstallError
from saaj.core.manifest import ProjectManifest
from saaj.core.models import ResolvedItem
from saaj.core.package_manager import PackageManager
from saaj.core.project_config import ProjectConfig, ProjectConfigStore

logger = logging.getLogger(__name__)


def safe_filename(name: str) -> str:
    """条目名只能是单个文件名，不能带路径分隔符或指向上级目录"""
    if (
        not name or name in (".", "..")
        or "/" in name or "\\" in name
        or Path(name).is_absolute()
    ):
        raise InstallError(f"refusing to write item with unsafe name '{name}'")
    return name


@dataclass
class PackageFailure:
    item: str
    packages: list[str]
    dev: bool
    error: str


@dataclass
class ItemFailure:
    item: str
    error: str


@dataclass
class InstallReport:
    """一次安装的结果汇总"""

    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    installed_packages: list[str] = field(default_factory=list)
    failed_packages: list[PackageFailure] = field(default_factory=list)
    failed_items: list[ItemFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed_packages and not self.failed_items


class Installer:
    def __init__(
        self,
        store: ProjectConfigStore,
        package_manager: PackageManager,
        manifest: ProjectManifest,
        project_root: str | Path = ".",
        on_progress: Callable[[str], None] | None = None,
    ) -> None:
        self.store = store
        self.package_manager = package_manager
        self.manifest = manifest
        self.project_root = Path(project_root)
        self.on_progress = on_progress

    def _progress(self, message: str) -> None:
        logger.info(message)
        if self.on_progress:
            self.on_progress(message)

    def install(
        self,
        items: list[ResolvedItem],
        config: ProjectConfig | None = None,
        report: InstallReport | None = None,
    ) -> InstallReport:
        """按顺序安装条目；未传 config 时读取已持久化的项目配置"""
        if config is None:
            config = self.store.load()
            if config is None:
                raise ConfigError(
                    f"No {self.store.path.name} file found. Please run init first."
                )
        report = report if report is not None else InstallReport()
        for item in items:
            try:
                self.install_one(item, config, report)
            except InstallError as e:
                logger.error("安装 %s 失败: %s", item.name, e.message)
                report.failed_items.append(ItemFailure(item=item.name, error=e.message))
        return report

    def install_one(
        self, item: ResolvedItem, config: ProjectConfig, report: InstallReport,
    ) -> None:
        dirpath = self.project_root / config.directory_for(item.kind)
        dest = dirpath / safe_filename(item.name)

        if dest.exists():
            logger.debug("已存在，跳过: %s", dest)
            report.skipped.append(dest)
            return

        self._progress(f"Adding {item.name}")
        try:
            dirpath.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InstallError(f"cannot create directory {dirpath}: {e}") from e

        self._install_packages(item, report, dev=False)
        self._install_packages(item, report, dev=True)

        # 文件中的 import 假定依赖已在磁盘上
        for dep in item.resolved_dependencies:
            self.install_one(dep, config, report)

        try:
            with open(dest, "x", encoding="utf-8", newline="") as f:
                f.write(item.source_code)
        except FileExistsError:
            report.skipped.append(dest)
            return
        except OSError as e:
            raise InstallError(f"cannot write {dest}: {e}") from e
        report.written.append(dest)

    def _install_packages(self, item: ResolvedItem, report: InstallReport, dev: bool) -> None:
        specs = item.dev_dependencies if dev else item.dependencies
        if not specs:
            return
        pending = self.manifest.missing(specs, dev=dev)
        if not pending:
            return
        label = "dev dependencies" if dev else "dependencies"
        self._progress(f"Installing {label}: {' '.join(pending)}")
        try:
            self.package_manager.install(pending, dev=dev)
        except ExecutionError as e:
            logger.error("%s 的依赖安装失败: %s", item.name, e)
            report.failed_packages.append(
                PackageFailure(item=item.name, packages=list(pending), dev=dev, error=str(e)),
            )
            return
        report.installed_packages.extend(pending)
