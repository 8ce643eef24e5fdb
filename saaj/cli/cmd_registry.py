"""CLI: 注册表命令: list / serve"""

from __future__ import annotations

import click

from saaj.cli import _svc, handle_errors
from saaj.core.models import ItemKind


def register(group: click.Group) -> None:
    group.add_command(list_items)
    group.add_command(serve)


@click.command(name="list")
@click.option("--kind", "-k", type=click.Choice(ItemKind.values()), default=None, help="按类别过滤")
@handle_errors
def list_items(kind: str | None) -> None:
    """列出注册表中的全部条目"""
    svc = _svc()
    if svc.config.local_registry:
        entries = [i.to_dict() for i in svc.catalog.items()]
    else:
        entries = svc.client.list_items()
    if kind:
        entries = [e for e in entries if e.get("kind") == kind]
    if not entries:
        click.echo("没有匹配的条目。")
        return
    for e in entries:
        deps = [d["name"] if isinstance(d, dict) else d for d in e.get("itemDependencies") or []]
        pkgs = e.get("packageDependencies") or []
        line = f"  {e['name']:28s} [{e['kind']:9s}]"
        if deps:
            line += f"  items: {', '.join(deps)}"
        if pkgs:
            line += f"  packages: {', '.join(pkgs)}"
        click.echo(line)


@click.command()
@click.option("--host", default="127.0.0.1", help="监听地址")
@click.option("--port", default=3000, help="监听端口")
@click.option("--source-root", default=None, help="条目源码根目录（覆盖配置）")
def serve(host: str, port: int, source_root: str | None) -> None:
    """启动注册表 HTTP 服务"""
    from saaj.services.container import set_container
    from saaj.web.app import run_server
    svc = _svc()
    if source_root:
        svc.config.source_root = source_root
    set_container(svc)
    run_server(host=host, port=port)
