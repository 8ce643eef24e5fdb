"""Web 层统一响应辅助函数"""

from __future__ import annotations

from flask import Response, jsonify

from saaj.core.exceptions import SaajError


def ok(data: object) -> Response:
    """成功响应（data 可以是 dict 或 list）"""
    return jsonify(data)


def error(message: str, status: int) -> tuple[Response, int]:
    return jsonify(error=message), status


def from_exception(exc: SaajError) -> tuple[Response, int]:
    """业务异常按 http_status 映射"""
    return error(exc.message, exc.http_status)
