"""
Sales ledger: registers, updates and deletes sales while keeping product stock
consistent with them.

INVARIANT: for every product, stock + sum(quantity of its existing sales) is
constant under these operations. Registering debits exactly once, deleting
credits exactly once, and updating applies the signed difference exactly once.

Each write runs inside ledger_transaction(): the stock check, the sale write
and the stock write commit together or not at all.
"""

from __future__ import annotations

from typing import Any

from flask import current_app

from ..errors import InsufficientStockError, NotFoundError
from ..extensions import db
from ..models import Product, Sale
from ..time_utils import to_utc_z
from ..validation import coerce_positive_int, fits_int64
from .concurrency import ledger_transaction, lock_for_update


def _locked_product(session, product_id: int | None) -> Product | None:
    if product_id is None or not fits_int64(product_id):
        return None
    return lock_for_update(session.query(Product).filter_by(id=product_id)).first()


def _locked_sale(session, sale_id: int) -> Sale:
    sale = None
    if fits_int64(sale_id):
        sale = lock_for_update(session.query(Sale).filter_by(id=sale_id)).first()
    if sale is None:
        raise NotFoundError("Venta no encontrada")
    return sale


def register_sale(product_id: Any, quantity: Any) -> Sale:
    """
    Record a sale and debit its quantity from the product's stock.

    Raises:
        ValidationError: product_id or quantity is missing or not a positive integer
        NotFoundError: the product does not exist
        InsufficientStockError: the product has less stock than quantity
    """
    product_id = coerce_positive_int(product_id, "Datos de venta inválidos")
    quantity = coerce_positive_int(quantity, "Datos de venta inválidos")

    with ledger_transaction() as session:
        product = _locked_product(session, product_id)
        if product is None:
            raise NotFoundError("Producto no encontrado")

        if product.stock < quantity:
            current_app.logger.warning(
                "sale_refused product_id=%s stock=%s requested=%s",
                product.id, product.stock, quantity,
            )
            raise InsufficientStockError(
                f"Stock insuficiente de {product.name}: "
                f"disponible {product.stock}, solicitado {quantity}"
            )

        sale = Sale(product_id=product.id, quantity=quantity)
        session.add(sale)
        product.stock -= quantity
        session.flush()

        stock_after = product.stock
        sale_id = sale.id

    current_app.logger.info(
        "sale_registered sale_id=%s product_id=%s quantity=%s stock_after=%s",
        sale_id, product_id, quantity, stock_after,
    )
    return sale


def update_sale(sale_id: int, quantity: Any) -> Sale:
    """
    Change a sale's quantity and apply the difference to stock.

    delta = new - old; stock -= delta. A decrease gives stock back, an
    increase needs at least delta units available.

    Raises:
        ValidationError: quantity is missing or not a positive integer
        NotFoundError: the sale or its product does not exist
        InsufficientStockError: the increase exceeds the product's stock
    """
    quantity = coerce_positive_int(quantity, "Cantidad inválida")

    with ledger_transaction() as session:
        sale = _locked_sale(session, sale_id)

        product = _locked_product(session, sale.product_id)
        if product is None:
            raise NotFoundError("Producto no encontrado")

        delta = quantity - sale.quantity
        if delta > 0 and product.stock < delta:
            current_app.logger.warning(
                "sale_update_refused sale_id=%s stock=%s delta=%s",
                sale.id, product.stock, delta,
            )
            raise InsufficientStockError(
                f"Stock insuficiente para aumentar la cantidad de {product.name}"
            )

        sale.quantity = quantity
        product.stock -= delta
        session.flush()

        stock_after = product.stock

    current_app.logger.info(
        "sale_updated sale_id=%s quantity=%s delta=%s stock_after=%s",
        sale_id, quantity, delta, stock_after,
    )
    return sale


def delete_sale(sale_id: int) -> None:
    """
    Delete a sale and credit its quantity back to the product's stock.

    A sale whose product no longer exists cannot be deleted: the stock it
    debited has nowhere to go back to.

    Raises:
        NotFoundError: the sale or its product does not exist
    """
    with ledger_transaction() as session:
        sale = _locked_sale(session, sale_id)

        product = _locked_product(session, sale.product_id)
        if product is None:
            raise NotFoundError("Producto no encontrado")

        product_id = product.id
        quantity = sale.quantity
        session.delete(sale)
        product.stock += quantity
        session.flush()

        stock_after = product.stock

    current_app.logger.info(
        "sale_deleted sale_id=%s product_id=%s quantity=%s stock_after=%s",
        sale_id, product_id, quantity, stock_after,
    )


def list_sales() -> list[dict]:
    """All sales with their product name, most recent first."""
    rows = (
        db.session.query(Sale, Product.name)
        .join(Product, Sale.product_id == Product.id)
        .order_by(Sale.created_at.desc(), Sale.id.desc())
        .all()
    )
    return [
        {
            "id": sale.id,
            "nombre": name,
            "cantidad": sale.quantity,
            "fecha": to_utc_z(sale.created_at),
        }
        for sale, name in rows
    ]
