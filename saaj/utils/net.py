"""网络工具: URL 校验与拼接"""

from __future__ import annotations

from urllib.parse import urlencode, urlparse

from saaj.core.exceptions import ValidationError

_ALLOWED_SCHEMES = frozenset(("http", "https"))


def validate_url_scheme(url: str, *, context: str = "") -> None:
    """校验 URL 仅使用 http/https，防止 file:// 等非预期协议

    Raises:
        ValidationError: URL scheme 不在白名单内
    """
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES:
        label = f" ({context})" if context else ""
        raise ValidationError(
            f"unsupported URL scheme '{parsed.scheme}'{label}, "
            f"only http/https are allowed: {url}"
        )


def build_url(base_url: str, path: str, params: dict[str, str] | None = None) -> str:
    """拼接 base_url + path，并附加非空查询参数"""
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    query = {k: v for k, v in (params or {}).items() if v}
    if query:
        url = f"{url}?{urlencode(query, safe=',')}"
    return url
