from __future__ import annotations

from ..extensions import db
from ..time_utils import utcnow, to_utc_z


class Sale(db.Model):
    """
    A recorded sale of a single product.

    An existing row always means its quantity has already been debited from
    the product's stock. Rows are never soft-deleted: deleting a sale is the
    only terminal transition and it credits the quantity back.

    product_id is nullable only so that a durable store enforcing foreign keys
    can null it when the product is deleted; the ledger treats a missing
    product the same way in both cases.
    """
    __tablename__ = "sales"
    __table_args__ = (
        db.CheckConstraint("quantity > 0", name="ck_sales_quantity_positive"),
        db.Index("ix_sales_created_at", "created_at"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    quantity = db.Column(db.Integer, nullable=False)

    # Python-side default keeps sub-second ordering
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    product = db.relationship("Product")

    def __repr__(self) -> str:
        return f"<Sale id={self.id} product_id={self.product_id} quantity={self.quantity}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "producto_id": self.product_id,
            "cantidad": self.quantity,
            "fecha": to_utc_z(self.created_at),
        }
