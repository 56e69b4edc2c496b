"""Flask application factory for the back-office API."""

from __future__ import annotations

from flask import Flask

from backoffice.domain.repository.product_repository import ProductRepository
from backoffice.infrastructure.bootstrap import product_repository
from backoffice.infrastructure.config import Config, configure_logging
from backoffice.infrastructure.http.routes import products_bp


def create_app(
    repo: ProductRepository | None = None,
    config: Config | None = None,
) -> Flask:
    config = config or Config.from_env()
    configure_logging(config.log_level)

    app = Flask(__name__)
    app.config["PRODUCT_REPOSITORY"] = repo if repo is not None else product_repository(config)
    app.register_blueprint(products_bp)
    return app
