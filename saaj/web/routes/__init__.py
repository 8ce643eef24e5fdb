"""Web 路由模块 - Blueprint 集合

- registry_bp.py: 目录列表、条目解析、项目配置 schema
"""

from saaj.web.routes.registry_bp import registry_bp

__all__ = ["registry_bp"]
