# Overview: Flask API routes for sales operations; parses input and returns JSON responses.

# backend/novasalud/routes/sales.py
"""
Sales API routes.

Failures are raised by the sales service and mapped to {"error": ...}
responses by the handlers in errors.py.
"""

from flask import Blueprint, request, jsonify

from ..services import sales_service


sales_bp = Blueprint("sales", __name__, url_prefix="/ventas")


@sales_bp.post("")
def register_sale_route():
    """
    Register a sale and debit stock.

    Body: {"producto_id": int, "cantidad": int}
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        data = {}

    sale = sales_service.register_sale(data.get("producto_id"), data.get("cantidad"))

    return jsonify({
        "mensaje": f"Venta registrada: {sale.quantity} unidad(es) de {sale.product.name}",
        "venta": sale.to_dict(),
    }), 200


@sales_bp.get("")
def list_sales_route():
    """List sales with product name, most recent first."""
    return jsonify(sales_service.list_sales()), 200


@sales_bp.put("/<int:sale_id>")
def update_sale_route(sale_id: int):
    """
    Change the quantity of a sale; stock absorbs the difference.

    Body: {"cantidad": int}
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        data = {}

    sale = sales_service.update_sale(sale_id, data.get("cantidad"))

    return jsonify({
        "mensaje": "Venta actualizada correctamente",
        "venta": sale.to_dict(),
    }), 200


@sales_bp.delete("/<int:sale_id>")
def delete_sale_route(sale_id: int):
    """Delete a sale and give its quantity back to stock."""
    sales_service.delete_sale(sale_id)
    return jsonify({"mensaje": "Venta eliminada correctamente y stock actualizado"}), 200
