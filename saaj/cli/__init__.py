"""saaj-ui 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
业务异常统一在这里转换为红色提示 + 退出码 1。
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click

from saaj import __version__
from saaj.core.exceptions import SaajError
from saaj.services.container import ServiceContainer
from saaj.utils.logger import setup_logging_from_env

F = TypeVar("F", bound=Callable[..., Any])


def _svc() -> ServiceContainer:
    """当前命令的服务容器"""
    return click.get_current_context().find_root().obj  # type: ignore[no-any-return]


def fail(message: str) -> None:
    click.secho(message, fg="red", err=True)
    raise SystemExit(1)


def handle_errors(func: F) -> F:
    """SaajError -> stderr 提示 + exit 1"""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except SaajError as e:
            fail(e.message)
        return None

    return wrapper  # type: ignore[return-value]


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", default="saaj.yml", help="工具配置文件路径")
@click.option("--registry", default=None, help="注册表地址（'local' 表示本进程内解析）")
@click.option("--cwd", default=".", type=click.Path(file_okay=False), help="项目根目录")
@click.pass_context
def main(ctx: click.Context, config_path: str, registry: str | None, cwd: str) -> None:
    """saaj-ui - 把组件、hook、类型、工具函数和样式源码添加到你的项目"""
    setup_logging_from_env()
    from saaj.core.config import init_config
    cfg = init_config(config_path)
    if registry:
        cfg.registry_url = registry
    ctx.obj = ServiceContainer(
        config=cfg, project_root=cwd, on_progress=lambda m: click.echo(f"  {m}"),
    )


from saaj.cli.cmd_project import register as _reg_project  # noqa: E402
from saaj.cli.cmd_registry import register as _reg_registry  # noqa: E402

_reg_project(main)
_reg_registry(main)
