"""子进程执行工具

通过 CommandExecutor 协议抽象子进程调用，包管理器安装走这里，
测试时注入假的执行器即可，无需 patch subprocess。
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from saaj.core.exceptions import ExecutionError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """命令执行结果（与 subprocess 解耦）"""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


class CommandExecutor(Protocol):
    """命令执行器协议"""

    def execute(
        self,
        args: list[str],
        *,
        cwd: str | Path = ".",
        timeout: int | None = None,
    ) -> CommandResult:
        """执行命令并返回结果（阻塞直到子进程结束）"""
        ...


class LocalExecutor:
    """本地子进程执行器（默认实现）"""

    def execute(
        self,
        args: list[str],
        *,
        cwd: str | Path = ".",
        timeout: int | None = None,
    ) -> CommandResult:
        try:
            r = subprocess.run(
                args, capture_output=True, text=True,
                cwd=str(cwd), check=False, timeout=timeout,
            )
        except FileNotFoundError as e:
            return CommandResult(returncode=127, stdout="", stderr=str(e))
        return CommandResult(
            returncode=r.returncode,
            stdout=r.stdout,
            stderr=r.stderr,
        )


_default_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    """获取全局默认命令执行器"""
    return _default_executor


def set_executor(executor: CommandExecutor) -> None:
    """替换全局默认命令执行器（用于测试）"""
    global _default_executor  # noqa: PLW0603
    _default_executor = executor


def run_cmd(
    args: list[str], *, cwd: str | Path = ".",
    label: str = "cmd",
    executor: CommandExecutor | None = None,
) -> CommandResult:
    """执行命令，失败抛 ExecutionError

    Args:
        args: 命令参数列表
        cwd: 工作目录
        label: 日志及错误信息中的标签
        executor: 指定执行器（默认使用全局执行器）
    """
    logger.info("  %s: %s (cwd=%s)", label, " ".join(args), cwd)
    r = (executor or get_executor()).execute(args, cwd=cwd)
    if not r.success:
        detail = (r.stderr or r.stdout).strip()[:500]
        raise ExecutionError(f"{label} failed (rc={r.returncode}): {detail}")
    return r
