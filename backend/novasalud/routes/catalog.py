# Overview: Flask API routes for categories and products.

# backend/novasalud/routes/catalog.py
from flask import Blueprint, request, jsonify

from ..services import catalog_service

catalog_bp = Blueprint("catalog", __name__)


@catalog_bp.get("/categorias")
def list_categories():
    return jsonify(catalog_service.list_categories()), 200


@catalog_bp.get("/productos")
def list_products():
    """
    List products with their category name.

    Query params:
    - categoria_id: int (optional) - only products of this category
    """
    category_id = request.args.get("categoria_id")
    return jsonify(catalog_service.list_products(category_id)), 200


@catalog_bp.delete("/productos/<int:product_id>")
def delete_product_route(product_id: int):
    """Delete a product. Its sales are kept."""
    catalog_service.delete_product(product_id)
    return jsonify({"mensaje": "Producto eliminado correctamente"}), 200
