"""注册表 API Blueprint

GET /api/registry                      目录列表（不含源码）
GET /api/registry/items?names=&type=   解析条目（含源码与去重后的嵌套依赖）
GET /schema.json                       项目配置（components.json）的 JSON Schema
"""

from __future__ import annotations

from flask import Blueprint, Response, request

from saaj.core.models import ItemKind
from saaj.web.responses import ok

registry_bp = Blueprint("registry", __name__)


def _container():  # type: ignore[no-untyped-def]
    from saaj.services.container import get_container
    return get_container()


@registry_bp.route("/api/registry", methods=["GET"])
def list_items() -> Response:
    """目录浏览 / 文档用途"""
    catalog = _container().catalog
    return ok([item.to_dict() for item in catalog.items()])


@registry_bp.route("/api/registry/items", methods=["GET"])
def resolve_items() -> Response:
    """names 逗号分隔（必填），type 可选；错误由 app 的 SaajError 处理器映射"""
    names = [n for n in request.args.get("names", "").split(",") if n.strip()]
    kind = request.args.get("type") or None
    items = _container().resolver.resolve(names, kind)
    return ok([item.to_dict() for item in items])


@registry_bp.route("/schema.json", methods=["GET"])
def project_config_schema() -> Response:
    kinds = ItemKind.values()
    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "title": "saaj-ui project configuration",
        "type": "object",
        "required": ["schemaUrl", "directories"],
        "additionalProperties": False,
        "properties": {
            "schemaUrl": {"type": "string"},
            "directories": {
                "type": "object",
                "required": kinds,
                "additionalProperties": False,
                "properties": {k: {"type": "string", "minLength": 1} for k in kinds},
            },
        },
    }
    return ok(schema)
