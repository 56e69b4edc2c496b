"""
Product & Inventory API Routes
==============================

JSON endpoints for the admin dashboard, mounted at ``/api/products``.

Domain errors map to HTTP statuses in one place:

- ValidationError       -> 400
- EntityNotFoundError   -> 404
- DataIntegrityError    -> 500
- StoreUnavailableError -> 500
"""

from __future__ import annotations

import logging
from dataclasses import asdict

from flask import Blueprint, current_app, jsonify, request

from backoffice.application.add_product import AddProductHandler
from backoffice.application.delete_product import DeleteProductHandler
from backoffice.application.dto import (
    CreateProductRequest,
    IncrementColorQuantityRequest,
    SetColorQuantityRequest,
    SetStockRequest,
    UpdateProductRequest,
)
from backoffice.application.increment_color_quantity import (
    IncrementColorQuantityHandler,
)
from backoffice.application.list_products import ListProductsHandler
from backoffice.application.set_color_quantity import SetColorQuantityHandler
from backoffice.application.set_stock import SetStockHandler
from backoffice.application.show_product import ShowProductHandler
from backoffice.application.update_product import UpdateProductHandler
from backoffice.domain.exceptions import (
    DataIntegrityError,
    DomainException,
    EntityNotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from backoffice.domain.repository.product_repository import ProductRepository

LOGGER = logging.getLogger(__name__)

products_bp = Blueprint("products_api", __name__, url_prefix="/api/products")


def _repo() -> ProductRepository:
    return current_app.config["PRODUCT_REPOSITORY"]


def _json_body() -> object:
    body = request.get_json(silent=True)
    if body is None:
        raise ValidationError("Invalid request body")
    return body


# --- Error mapping ------------------------------------------------------------


@products_bp.errorhandler(ValidationError)
def _invalid_argument(exc: ValidationError):
    return jsonify({"error": str(exc)}), 400


@products_bp.errorhandler(EntityNotFoundError)
def _not_found(exc: EntityNotFoundError):
    return jsonify({"error": str(exc)}), 404


@products_bp.errorhandler(DataIntegrityError)
def _data_integrity(exc: DataIntegrityError):
    LOGGER.error("Data integrity failure: %s", exc)
    return jsonify({"error": str(exc)}), 500


@products_bp.errorhandler(StoreUnavailableError)
def _store_unavailable(exc: StoreUnavailableError):
    return jsonify({"error": "Product store unavailable"}), 500


@products_bp.errorhandler(DomainException)
def _domain_error(exc: DomainException):
    LOGGER.error("Unhandled domain error: %s", exc)
    return jsonify({"error": "Internal Server Error"}), 500


# --- Catalog ------------------------------------------------------------------


@products_bp.route("", methods=["GET"])
def list_products():
    """List products, optionally filtered by title search and category"""
    dtos = ListProductsHandler(_repo()).handle(
        search=request.args.get("search") or None,
        category=request.args.get("category") or None,
    )
    return jsonify([asdict(dto) for dto in dtos])


@products_bp.route("", methods=["POST"])
def create_product():
    """Create a single or collection product"""
    dto = AddProductHandler(_repo()).handle(
        CreateProductRequest.from_payload(_json_body())
    )
    return jsonify(asdict(dto)), 201


@products_bp.route("/<product_id>", methods=["GET"])
def get_product(product_id):
    dto = ShowProductHandler(_repo()).handle(product_id)
    return jsonify(asdict(dto))


@products_bp.route("/<product_id>", methods=["PATCH"])
def update_product(product_id):
    """Edit catalog fields; inventory has its own endpoints"""
    dto = UpdateProductHandler(_repo()).handle(
        UpdateProductRequest.from_payload(product_id, _json_body())
    )
    return jsonify(asdict(dto))


@products_bp.route("/<product_id>", methods=["DELETE"])
def delete_product(product_id):
    DeleteProductHandler(_repo()).handle(product_id)
    return jsonify({"message": "Product deleted"})


# --- Inventory ----------------------------------------------------------------


@products_bp.route("/<product_id>/colors/set", methods=["PATCH"])
def set_color_quantity(product_id):
    """Set one color of a collection to an absolute quantity"""
    dto = SetColorQuantityHandler(_repo()).handle(
        SetColorQuantityRequest.from_payload(product_id, _json_body())
    )
    return jsonify({"message": "Color quantity updated", "product": asdict(dto)})


@products_bp.route("/<product_id>/colors/increment", methods=["PATCH"])
def increment_color_quantity(product_id):
    """Add units to one color of a collection"""
    dto = IncrementColorQuantityHandler(_repo()).handle(
        IncrementColorQuantityRequest.from_payload(product_id, _json_body())
    )
    return jsonify({"message": "Color quantity updated", "product": asdict(dto)})


@products_bp.route("/<product_id>/stock", methods=["PATCH"])
def set_stock(product_id):
    """Set the stock count of a single product"""
    dto = SetStockHandler(_repo()).handle(
        SetStockRequest.from_payload(product_id, _json_body())
    )
    return jsonify({"message": "Stock updated", "product": asdict(dto)})
