"""包管理器探测与调用

按锁文件（或 package.json 的 packageManager 字段）探测 npm / yarn / pnpm / bun，
默认 npm。安装调用是阻塞的，调用方逐个等待完成: 同一项目清单上
并发运行包管理器会争用锁文件。
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from saaj.core.manifest import ProjectManifest
from saaj.utils.shell import CommandExecutor, CommandResult, run_cmd

logger = logging.getLogger(__name__)

SUPPORTED = ("npm", "yarn", "pnpm", "bun")

# 检查顺序即优先级
LOCKFILES: tuple[tuple[str, str], ...] = (
    ("bun.lockb", "bun"),
    ("bun.lock", "bun"),
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("package-lock.json", "npm"),
)


def detect_package_manager(project_root: str | Path) -> str:
    root = Path(project_root)
    for lockfile, name in LOCKFILES:
        if (root / lockfile).exists():
            return name

    declared = ProjectManifest(root / "package.json").load().get("packageManager", "")
    if isinstance(declared, str):
        name = declared.split("@", 1)[0]
        if name in SUPPORTED:
            return name
    return "npm"


class PackageManager:
    """对单个项目执行依赖安装"""

    def __init__(
        self,
        project_root: str | Path = ".",
        name: str | None = None,
        executor: CommandExecutor | None = None,
    ) -> None:
        self.project_root = Path(project_root)
        self._name = name
        self.executor = executor

    @property
    def name(self) -> str:
        if self._name is None:
            self._name = detect_package_manager(self.project_root)
            logger.info("使用包管理器: %s", self._name)
        return self._name

    def command(self, specs: Sequence[str], dev: bool = False) -> list[str]:
        args = [self.name, "install" if self.name == "npm" else "add"]
        if dev:
            args.append("-D")
        return args + list(specs)

    def install(self, specs: Sequence[str], dev: bool = False) -> CommandResult | None:
        """安装依赖，失败抛 ExecutionError；specs 为空时不调用"""
        if not specs:
            return None
        return run_cmd(
            self.command(specs, dev=dev),
            cwd=self.project_root,
            label=f"{self.name} {'dev ' if dev else ''}install",
            executor=self.executor,
        )
