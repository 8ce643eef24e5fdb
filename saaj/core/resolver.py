"""注册表解析器

把请求的条目名称（可选类别过滤）展开为去重、附带源码的依赖闭包:

  1. 逐个在目录中查找，收集全部未命中的名称
  2. 只要有未命中就整体失败（ItemNotFoundError 一次列出全部）
  3. 按直接依赖数量升序排列顶层条目（仅影响展示顺序）
  4. 递归附加源码；"已产出" 集合作为参数在整个调用树中传递，
     同一次 resolve 内任何条目最多出现一次
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from saaj.core.catalog import Catalog
from saaj.core.exceptions import ItemNotFoundError, ValidationError
from saaj.core.models import ItemDescriptor, ItemKind, ResolvedItem
from saaj.core.sources import SourceStore

logger = logging.getLogger(__name__)


class Resolver:
    """本地解析器: 直接访问目录与源码存储"""

    def __init__(self, catalog: Catalog, sources: SourceStore) -> None:
        self.catalog = catalog
        self.sources = sources

    def lookup(
        self, names: Iterable[str], kind: str | ItemKind | None = None,
    ) -> list[ItemDescriptor]:
        """校验输入并查找描述符，按直接依赖数量升序返回"""
        names = [n.strip() for n in names if n and n.strip()]
        if not names:
            raise ValidationError("names must be provided")
        kind_filter = ItemKind.parse(kind) if kind else None

        found: list[ItemDescriptor] = []
        missing: list[str] = []
        for name in names:
            item = self.catalog.find(name, kind_filter)
            if item is None:
                missing.append(name)
            else:
                found.append(item)

        if missing:
            raise ItemNotFoundError(missing)

        # sorted 稳定，依赖数相同时保持请求顺序
        return sorted(found, key=lambda d: len(d.item_dependencies))

    def resolve(
        self, names: Iterable[str], kind: str | ItemKind | None = None,
    ) -> list[ResolvedItem]:
        ordered = self.lookup(names, kind)
        seen: set[str] = set()
        result = [
            self._resolve_item(item, seen)
            for item in ordered
            if item.basename not in seen
        ]
        logger.info(
            "解析完成: 请求 %d 个, 顶层 %d 个, 共 %d 个条目",
            len(ordered), len(result), len(seen),
        )
        return result

    # Remote Accessor 与本地解析器对调用方暴露相同签名
    fetch = resolve

    def _resolve_item(self, item: ItemDescriptor, seen: set[str]) -> ResolvedItem:
        seen.add(item.basename)
        resolved = ResolvedItem(
            name=item.name,
            kind=item.kind,
            source_code=self.sources.read(item),
            dependencies=list(item.dependencies),
            dev_dependencies=list(item.dev_dependencies),
        )
        for dep in item.item_dependencies:
            # 前面的兄弟分支可能已经产出该依赖，逐个检查
            if dep.basename not in seen:
                resolved.resolved_dependencies.append(self._resolve_item(dep, seen))
        return resolved
