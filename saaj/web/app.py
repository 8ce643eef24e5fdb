"""注册表 HTTP 服务（基于 Flask）

启动方式:
    saaj-ui serve --port 3000
    gunicorn --config deploy/gunicorn.conf.py "saaj.web.app:create_app()"
"""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException

from saaj.core.exceptions import SaajError
from saaj.web.responses import error, from_exception
from saaj.web.routes import registry_bp

logger = logging.getLogger(__name__)


def create_app(container=None) -> Flask:  # type: ignore[no-untyped-def]
    """创建应用；传入 container 时替换全局服务容器"""
    if container is not None:
        from saaj.services.container import set_container
        set_container(container)

    app = Flask(__name__)
    app.json.sort_keys = False  # type: ignore[attr-defined]
    app.register_blueprint(registry_bp)

    @app.route("/health")
    def health() -> Response:
        return jsonify(status="ok")

    @app.errorhandler(SaajError)
    def handle_saaj_error(exc: SaajError):  # type: ignore[no-untyped-def]
        if exc.http_status >= 500:
            logger.exception("注册表请求失败")
        else:
            logger.info("请求被拒绝 (%d): %s", exc.http_status, exc.message)
        return from_exception(exc)

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):  # type: ignore[no-untyped-def]
        """所有 HTTP 异常统一返回 JSON"""
        return error(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def handle_generic_exception(exc: Exception):  # type: ignore[no-untyped-def]  # noqa: ARG001
        logger.exception("未处理的异常")
        return error("error fetching registry items", 500)

    return app


def run_server(host: str = "127.0.0.1", port: int = 3000, debug: bool = False) -> None:
    app = create_app()
    logger.info("saaj 注册表服务已启动: http://%s:%d", host, port)
    app.run(host=host, port=port, debug=debug)
