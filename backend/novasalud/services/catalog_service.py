# backend/novasalud/services/catalog_service.py
"""
Product catalog service.

Categories and products are plain reads; the only write here is product
deletion, which goes through the same transaction scope as the sales ledger
because it removes a row the ledger reads.

PRODUCT DELETION POLICY:
Deleting a product that still has sales is allowed. The sales stay in place,
drop out of the sales listing (inner join on product) and any later update or
delete of them fails with NotFoundError without touching stock.
"""
from __future__ import annotations

from typing import Any

from flask import current_app

from ..errors import NotFoundError
from ..extensions import db
from ..models import Category, Product
from ..validation import coerce_positive_int, fits_int64
from .concurrency import ledger_transaction, lock_for_update


def list_categories() -> list[dict]:
    categories = db.session.query(Category).order_by(Category.id.asc()).all()
    return [c.to_dict() for c in categories]


def list_products(category_id: Any = None) -> list[dict]:
    """
    List products with their category name.

    Uses a LEFT JOIN so products without a category are still returned
    (categoria_nombre is None for them).

    Args:
        category_id: Optional category filter; blank or None means no filter.

    Raises:
        ValidationError: If category_id is present but not a positive integer
    """
    query = (
        db.session.query(Product, Category.name)
        .outerjoin(Category, Product.category_id == Category.id)
        .order_by(Product.id.asc())
    )

    if category_id is not None and str(category_id).strip() != "":
        category_id = coerce_positive_int(category_id, "categoria_id inválido")
        if not fits_int64(category_id):
            return []
        query = query.filter(Product.category_id == category_id)

    return [product.to_dict(category_name=name) for product, name in query.all()]


def delete_product(product_id: int) -> None:
    """
    Delete a product row. Its sales are left untouched.

    Raises:
        NotFoundError: If the product does not exist
    """
    with ledger_transaction() as session:
        product = None
        if fits_int64(product_id):
            product = lock_for_update(session.query(Product).filter_by(id=product_id)).first()
        if product is None:
            raise NotFoundError("Producto no encontrado")

        name = product.name
        session.delete(product)

    current_app.logger.info("product_deleted product_id=%s name=%s", product_id, name)
