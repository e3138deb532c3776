from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, make_response, request

from ..config import AppConfig, get_config
from .handler import OrdersHandler, StoreFactory
from .interface import ParsedRequest

ORDERS_ROUTE = "/api/orders"
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(config: Optional[AppConfig] = None, store_factory: Optional[StoreFactory] = None) -> Flask:
    # ─── App setup ───────────────────────────────────────────────────────────
    app = Flask(__name__)
    handler = OrdersHandler(config=config, store_factory=store_factory)

    # ─── /api/orders ─────────────────────────────────────────────────────────
    # Every method reaches the handler, which answers OPTIONS and 405 itself.
    @app.route(ORDERS_ROUTE, methods=ALL_METHODS)
    def orders():
        body = request.get_json(silent=True)
        if body is None and request.content_length:
            body = request.get_data(as_text=True)
        parsed = ParsedRequest(method=request.method, headers=dict(request.headers), body=body)

        result = handler.handle(parsed)
        if result.body is None:
            response = make_response("", result.status)
        else:
            response = make_response(jsonify(result.body), result.status)
        for key, value in result.headers.items():
            response.headers[key] = value
        return response

    # ─── Health check ────────────────────────────────────────────────────────
    @app.route("/healthz")
    def healthz():
        return "OK", 200

    return app


# WSGI entry point
app = create_app()

if __name__ == "__main__":
    settings = get_config()
    app.run(host=settings.host, port=settings.port)
