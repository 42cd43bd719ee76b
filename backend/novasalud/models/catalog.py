from __future__ import annotations

from ..extensions import db


class Category(db.Model):
    """Product category. Seeded at startup and not edited afterwards."""
    __tablename__ = "categories"
    __table_args__ = (
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False, unique=True)

    def __repr__(self) -> str:
        return f"<Category id={self.id} name={self.name!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "nombre": self.name,
        }


class Product(db.Model):
    """
    Product master data.

    STOCK OWNERSHIP:
    Product.stock is written only by the sales ledger (services/sales_service.py)
    as a side effect of registering, updating or deleting a sale. The check
    constraint backs the non-negative invariant at the store level.

    version_id is an optimistic-concurrency counter: a stock write computed from
    a stale read fails with StaleDataError instead of overwriting another writer.
    """
    __tablename__ = "products"
    __table_args__ = (
        db.CheckConstraint("stock >= 0", name="ck_products_stock_nonnegative"),
        db.Index("ix_products_category", "category_id"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)

    # Authoritative storage in cents; exposed as a decimal "precio"
    price_cents = db.Column(db.Integer, nullable=False, default=0)

    stock = db.Column(db.Integer, nullable=False, default=0)

    category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=True)

    version_id = db.Column(db.Integer, nullable=False, default=1)

    category = db.relationship("Category", backref=db.backref("products", lazy=True))
    __mapper_args__ = {"version_id_col": version_id}

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r} stock={self.stock}>"

    @property
    def price(self) -> float:
        return self.price_cents / 100

    def to_dict(self, category_name: str | None = None) -> dict:
        return {
            "id": self.id,
            "nombre": self.name,
            "descripcion": self.description,
            "precio": self.price,
            "stock": self.stock,
            "categoria_id": self.category_id,
            "categoria_nombre": category_name,
        }
