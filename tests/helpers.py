"""测试辅助: 小型目录数据、源码写入、假的命令执行器"""

from __future__ import annotations

from pathlib import Path

from saaj.core.catalog import Catalog
from saaj.core.models import ResolvedItem
from saaj.core.sources import KIND_DIRS, SourceStore
from saaj.utils.shell import CommandResult

# Icon 被 Button / Badge 共同依赖
SCENARIO_ENTRIES = [
    {"name": "Icon.tsx", "kind": "component", "dependencies": ["icon-lib"]},
    {"name": "Button.tsx", "kind": "component", "itemDependencies": ["Icon"]},
    {"name": "Badge.tsx", "kind": "component", "itemDependencies": ["Icon"]},
]

UI_ENTRIES = [
    {"name": "components.ts", "kind": "type"},
    {"name": "tokens.ts", "kind": "style"},
    {"name": "themes.ts", "kind": "style", "itemDependencies": ["tokens"]},
    {"name": "unistyles.ts", "kind": "style", "itemDependencies": ["themes", "tokens"]},
    {"name": "composeRefs.ts", "kind": "utility"},
    {"name": "genericForwardRef.ts", "kind": "utility"},
    {"name": "useControllableState.ts", "kind": "hook"},
    {
        "name": "Icon.tsx", "kind": "component",
        "dependencies": ["@react-native-vector-icons/ionicons"],
        "devDependencies": ["@types/react-native-vector-icons"],
        "itemDependencies": ["tokens"],
    },
    {
        "name": "Text.tsx", "kind": "component",
        "itemDependencies": ["genericForwardRef", "components", "tokens"],
    },
    {
        "name": "Button.tsx", "kind": "component",
        "itemDependencies": ["Text", "Icon", "genericForwardRef", "components", "tokens"],
    },
    {
        "name": "Spinner.tsx", "kind": "component",
        "dependencies": ["react-native-reanimated", "react-native-svg"],
    },
]


def flatten(items: list[ResolvedItem]) -> list[ResolvedItem]:
    """解析结果树先序展开"""
    return [node for item in items for node in item.walk()]


def source_text(name: str) -> str:
    return f"// {name}\nexport {{}};\n"


def write_sources(root: Path, catalog: Catalog) -> SourceStore:
    store = SourceStore(root)
    for item in catalog:
        path = root / KIND_DIRS[item.kind] / item.name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source_text(item.name), encoding="utf-8")
    return store


class FakeExecutor:
    """记录调用的命令执行器，returncode 可配置"""

    def __init__(self, returncode: int = 0, stderr: str = "") -> None:
        self.calls: list[list[str]] = []
        self.returncode = returncode
        self.stderr = stderr

    def execute(self, args, *, cwd=".", timeout=None) -> CommandResult:  # type: ignore[no-untyped-def]
        self.calls.append(list(args))
        return CommandResult(returncode=self.returncode, stdout="", stderr=self.stderr)


