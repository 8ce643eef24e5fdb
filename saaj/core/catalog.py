"""条目目录: 静态、完整枚举的条目元数据表

目录在加载时一次性构建为不可变的 ItemDescriptor 集合，之后只读。
加载阶段即拒绝编写错误（重名、未知引用、自引用、循环依赖），
解析器因此无需在运行时处理环。

YAML 格式:
    items:
      - name: Button.tsx
        kind: component
        dependencies: [react-native-reanimated]
        devDependencies: []
        itemDependencies: [Text, Icon]     # 按 basename 引用
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from saaj.core.exceptions import CatalogError, ValidationError
from saaj.core.models import ItemDescriptor, ItemKind, basename
from saaj.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

_WHITE, _GREY, _BLACK = 0, 1, 2


class Catalog:
    """不可变条目目录，按 basename 唯一索引"""

    def __init__(self, items: list[ItemDescriptor]) -> None:
        self._items = tuple(items)
        self._index: dict[str, ItemDescriptor] = {}
        for item in self._items:
            if item.basename in self._index:
                raise CatalogError(
                    f"duplicate catalog entry '{item.name}' "
                    f"(conflicts with '{self._index[item.basename].name}')"
                )
            self._index[item.basename] = item

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):  # type: ignore[no-untyped-def]
        return iter(self._items)

    def items(self, kind: ItemKind | None = None) -> list[ItemDescriptor]:
        """按编写顺序返回全部条目，可按类别过滤"""
        if kind is None:
            return list(self._items)
        return [i for i in self._items if i.kind is kind]

    def find(self, name: str, kind: ItemKind | None = None) -> ItemDescriptor | None:
        """按 basename 查找；指定 kind 时类别也必须一致"""
        item = self._index.get(basename(name))
        if item is None or (kind is not None and item.kind is not kind):
            return None
        return item

    # ------------------------------------------------------------------
    # 构建
    # ------------------------------------------------------------------

    @classmethod
    def from_file(cls, path: str | Path) -> Catalog:
        p = Path(path)
        if not p.exists():
            raise CatalogError(f"目录文件不存在: {p}")
        catalog = cls.from_entries(load_yaml(p).get("items") or [])
        logger.info("已加载目录 %s: %d 个条目", p, len(catalog))
        return catalog

    @classmethod
    def from_entries(cls, entries: list[dict[str, Any]]) -> Catalog:
        """从原始字典列表构建目录，引用按 basename 解析"""
        raw: dict[str, dict[str, Any]] = {}
        order: list[str] = []
        for entry in entries:
            name = entry.get("name", "")
            if not name:
                raise CatalogError(f"目录条目缺少 name: {entry}")
            key = basename(name)
            if key in raw:
                raise CatalogError(
                    f"duplicate catalog entry '{name}' (conflicts with '{raw[key]['name']}')"
                )
            raw[key] = entry
            order.append(key)

        for key in order:
            for ref in raw[key].get("itemDependencies") or []:
                ref_key = basename(ref)
                if ref_key == key:
                    raise CatalogError(f"'{raw[key]['name']}' depends on itself")
                if ref_key not in raw:
                    raise CatalogError(
                        f"'{raw[key]['name']}' references unknown item '{ref}'"
                    )

        built: dict[str, ItemDescriptor] = {}
        state = dict.fromkeys(order, _WHITE)

        def build(key: str, path: list[str]) -> ItemDescriptor:
            if state[key] == _BLACK:
                return built[key]
            if state[key] == _GREY:
                cycle = path[path.index(key):] + [key]
                raise CatalogError(
                    "dependency cycle: " + " -> ".join(raw[k]["name"] for k in cycle)
                )
            state[key] = _GREY
            entry = raw[key]
            deps = tuple(
                build(basename(ref), path + [key])
                for ref in entry.get("itemDependencies") or []
            )
            try:
                kind = ItemKind.parse(entry.get("kind", ""))
            except ValidationError as e:
                raise CatalogError(f"'{entry['name']}': {e}") from e
            built[key] = ItemDescriptor(
                name=entry["name"],
                kind=kind,
                dependencies=tuple(entry.get("dependencies") or ()),
                dev_dependencies=tuple(entry.get("devDependencies") or ()),
                item_dependencies=deps,
            )
            state[key] = _BLACK
            return built[key]

        return cls([build(key, []) for key in order])
