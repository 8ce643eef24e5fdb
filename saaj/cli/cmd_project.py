"""CLI: 项目命令: init / add"""

from __future__ import annotations

import click

from saaj.cli import _svc, fail, handle_errors
from saaj.core.installer import InstallReport
from saaj.core.models import ItemKind


def register(group: click.Group) -> None:
    group.add_command(init)
    group.add_command(add)


def _print_report(report: InstallReport) -> None:
    for path in report.written:
        click.echo(f"  {click.style('+', fg='green')} {path}")
    if report.skipped:
        click.echo(f"  已存在，跳过 {len(report.skipped)} 个文件")
    for failure in report.failed_packages:
        scope = "dev " if failure.dev else ""
        click.secho(
            f"  {failure.item}: {scope}依赖安装失败 ({' '.join(failure.packages)})，"
            "请手动安装后再使用该条目",
            fg="yellow", err=True,
        )
        click.echo(f"    {failure.error}", err=True)
    for item_failure in report.failed_items:
        click.secho(f"  {item_failure.item}: 安装失败", fg="red", err=True)
        click.echo(f"    {item_failure.error}", err=True)


def _prompt_directory(kind: ItemKind, default: str) -> str:
    return click.prompt(
        f"Where would you like to keep your {click.style(kind.value + 's', fg='cyan')}?",
        default=default,
    )


@click.command()
@click.option("--yes", "-y", is_flag=True, help="不交互，全部使用默认目录")
@handle_errors
def init(yes: bool) -> None:
    """初始化项目配置并安装基础依赖"""
    svc = _svc()
    report = svc.project.init(prompt=None if yes else _prompt_directory)
    _print_report(report)
    if not report.success:
        fail("Setup finished with errors.")
    click.echo(f"{click.style('Success!', fg='green')} Setup completed. You may now add components.")


_KIND_FLAGS = ("component", "hook", "type", "utility", "style")


@click.command()
@click.argument("items", nargs=-1, required=True)
@click.option("-C", "--component", is_flag=True, help="条目为组件")
@click.option("-H", "--hook", is_flag=True, help="条目为 hook")
@click.option("-T", "--type", "type_", is_flag=True, help="条目为类型")
@click.option("-U", "--utility", is_flag=True, help="条目为工具函数")
@click.option("-S", "--style", is_flag=True, help="条目为样式")
@handle_errors
def add(
    items: tuple[str, ...], component: bool, hook: bool,
    type_: bool, utility: bool, style: bool,
) -> None:
    """添加组件、hook、类型、工具函数或样式到项目"""
    selected = [
        name for name, flag in zip(_KIND_FLAGS, (component, hook, type_, utility, style))
        if flag
    ]
    if len(selected) > 1:
        raise click.UsageError("只能指定一个类别选项")
    kind = selected[0] if selected else None

    report = _svc().project.add(list(items), kind)
    _print_report(report)
    if report.failed_items:
        fail("Some items could not be installed.")
    if not report.success:
        fail("Some dependencies could not be installed.")
    if not report.written:
        click.echo("所有条目均已存在，未做修改。")
