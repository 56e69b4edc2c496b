"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from backoffice.infrastructure.config import Config
from backoffice.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def product_repository(config: Config | None = None) -> JsonProductRepository:
    config = config or Config.from_env()
    return JsonProductRepository(config.products_file)
