"""远程注册表访问器

调用方（通常是运行在用户机器上的 CLI）无法直接访问目录和源码时，
通过 HTTP 请求服务端的 Resolver。

失败即终止，不做重试: 注册表返回错误几乎总是 "条目不存在" 或 "输入非法"，
不是值得自动重试的瞬时网络问题。
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from saaj.core.exceptions import RegistryError, ValidationError
from saaj.core.models import ItemKind, ResolvedItem
from saaj.utils.net import build_url, validate_url_scheme

logger = logging.getLogger(__name__)

ITEMS_PATH = "/api/registry/items"
CATALOG_PATH = "/api/registry"


class RegistryClient:
    """注册表 HTTP 客户端

    Args:
        base_url: 服务地址，如 "https://saaj-ui.vercel.app"
        timeout: 单次请求超时（秒）
    """

    def __init__(self, base_url: str, timeout: float = 30) -> None:
        validate_url_scheme(base_url, context="registry url")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        url = build_url(self.base_url, path, params)
        logger.info("请求注册表: %s", url)
        req = Request(url, headers={"Accept": "application/json"}, method="GET")
        try:
            with urlopen(req, timeout=self.timeout) as response:  # nosec B310
                return json.loads(response.read().decode("utf-8"))
        except HTTPError as e:
            body = e.read().decode("utf-8", errors="replace")
            try:
                message = json.loads(body).get("error") or str(e)
            except (json.JSONDecodeError, AttributeError):
                message = f"HTTP {e.code}: {body[:200]}"
            raise RegistryError(message, status=e.code) from e
        except URLError as e:
            raise RegistryError(f"failed to reach registry {self.base_url}: {e.reason}") from e
        except json.JSONDecodeError as e:
            raise RegistryError(f"invalid JSON from registry: {e}") from e
        except (OSError, ValueError) as e:
            raise RegistryError(f"registry request failed ({self.base_url}): {e}") from e

    def fetch(
        self, names: Iterable[str], kind: str | ItemKind | None = None,
    ) -> list[ResolvedItem]:
        """获取解析后的条目树；names 以逗号拼接"""
        params = {"names": ",".join(names)}
        if kind:
            params["type"] = ItemKind.parse(kind).value
        data = self._get(ITEMS_PATH, params)
        if not isinstance(data, list):
            raise RegistryError("unexpected registry response: expected a list of items")
        try:
            return [ResolvedItem.from_dict(d) for d in data]
        except (KeyError, TypeError, AttributeError, ValidationError) as e:
            raise RegistryError(f"malformed item in registry response: {e!r}") from e

    def list_items(self) -> list[dict[str, Any]]:
        """不带参数的目录列表（无源码，用于浏览）"""
        data = self._get(CATALOG_PATH)
        if not isinstance(data, list):
            raise RegistryError("unexpected registry response: expected a list of items")
        return data
