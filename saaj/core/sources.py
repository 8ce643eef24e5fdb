"""条目源码存储: 按类别分目录存放

    <root>/components/Button.tsx
    <root>/hooks/useInsets.ts
    <root>/types/components.ts
    <root>/utils/composeRefs.ts
    <root>/styles/tokens.ts
"""

from __future__ import annotations

import logging
from pathlib import Path

from saaj.core.exceptions import SourceReadError
from saaj.core.models import ItemDescriptor, ItemKind

logger = logging.getLogger(__name__)

KIND_DIRS: dict[ItemKind, str] = {
    ItemKind.COMPONENT: "components",
    ItemKind.HOOK: "hooks",
    ItemKind.TYPE: "types",
    ItemKind.UTILITY: "utils",
    ItemKind.STYLE: "styles",
}


class SourceStore:
    """只读源码存储"""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def path_for(self, item: ItemDescriptor) -> Path:
        return self.root / KIND_DIRS[item.kind] / item.name

    def read(self, item: ItemDescriptor) -> str:
        """读取条目源码原文；失败说明目录与存储不一致，不做掩盖"""
        path = self.path_for(item)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("读取源码失败: %s (%s)", path, e)
            raise SourceReadError(f"cannot read source for '{item.name}': {e}") from e
