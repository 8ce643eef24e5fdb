"""核心数据模型

ItemKind / ItemDescriptor / ResolvedItem 集中定义，
目录、解析器、远程访问器、安装器统一从此处导入。

序列化字段名（packageDependencies 等）即 HTTP 接口的线上格式。
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from saaj.core.exceptions import ValidationError


class ItemKind(str, Enum):
    """条目类别（固定枚举）"""

    COMPONENT = "component"
    HOOK = "hook"
    TYPE = "type"
    UTILITY = "utility"
    STYLE = "style"

    @classmethod
    def values(cls) -> list[str]:
        return [k.value for k in cls]

    @classmethod
    def parse(cls, value: str | ItemKind) -> ItemKind:
        """字符串转枚举，非法值抛 ValidationError 并列出合法取值"""
        if isinstance(value, ItemKind):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = cls.values()
            raise ValidationError(
                f"invalid type '{value}' provided. valid types are: {', '.join(valid)}",
                details=valid,
            ) from None


def basename(name: str) -> str:
    """条目的逻辑标识：第一个 '.' 之前的部分，大小写不敏感"""
    return name.split(".", 1)[0].casefold()


@dataclass(frozen=True)
class ItemDescriptor:
    """目录中的一个可分发条目（不可变）

    item_dependencies 直接持有被依赖条目的描述符，不包含自身。
    """

    name: str
    kind: ItemKind
    dependencies: tuple[str, ...] = ()
    dev_dependencies: tuple[str, ...] = ()
    item_dependencies: tuple[ItemDescriptor, ...] = ()

    @property
    def basename(self) -> str:
        return basename(self.name)

    def matches(self, name: str, kind: ItemKind | None = None) -> bool:
        if kind is not None and self.kind is not kind:
            return False
        return self.basename == basename(name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "packageDependencies": list(self.dependencies),
            "devPackageDependencies": list(self.dev_dependencies),
            "itemDependencies": [d.to_dict() for d in self.item_dependencies],
        }


@dataclass
class ResolvedItem:
    """附带源码、且嵌套依赖已解析去重的条目（按次请求创建，不持久化）"""

    name: str
    kind: ItemKind
    source_code: str
    dependencies: list[str] = field(default_factory=list)
    dev_dependencies: list[str] = field(default_factory=list)
    resolved_dependencies: list[ResolvedItem] = field(default_factory=list)

    @property
    def basename(self) -> str:
        return basename(self.name)

    def walk(self) -> Iterator[ResolvedItem]:
        """先序遍历自身及全部嵌套依赖"""
        yield self
        for dep in self.resolved_dependencies:
            yield from dep.walk()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "packageDependencies": list(self.dependencies),
            "devPackageDependencies": list(self.dev_dependencies),
            "sourceCode": self.source_code,
            "resolvedDependencies": [d.to_dict() for d in self.resolved_dependencies],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ResolvedItem:
        return cls(
            name=data["name"],
            kind=ItemKind.parse(data["kind"]),
            source_code=data.get("sourceCode", ""),
            dependencies=list(data.get("packageDependencies") or []),
            dev_dependencies=list(data.get("devPackageDependencies") or []),
            resolved_dependencies=[
                cls.from_dict(d) for d in data.get("resolvedDependencies") or []
            ],
        )
