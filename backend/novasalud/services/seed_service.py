# Overview: Fixed pharmacy catalog inserted at startup or through the CLI.

from __future__ import annotations

from flask import current_app

from ..extensions import db
from ..models import Category, Product

CATEGORY_NAMES = (
    "Analgésicos",
    "Antibióticos",
    "Vitaminas",
    "Cuidado Personal",
)

# (name, description, price_cents, stock, category position in CATEGORY_NAMES)
PRODUCT_ROWS = (
    ("Paracetamol", "Medicamento analgésico", 50, 100, 0),
    ("Ibuprofeno", "Medicamento antiinflamatorio", 75, 1, 0),
    ("Amoxicilina", "Antibiótico penicilínico", 120, 80, 1),
    ("Loratadina", "Antihistamínico para alergias", 65, 120, 1),
    ("Multivitamínico", "Vitaminas diarias", 70, 150, 2),
    ("Metformina", "Medicamento para diabetes", 90, 60, 2),
    ("Jabón Liquido", "Cuidado personal", 100, 200, 3),
    ("Crema Antiséptica", "Cuidado personal", 110, 90, 3),
)


def seed_catalog() -> bool:
    """
    Insert the fixed categories and products.

    Idempotent: does nothing when any category already exists.
    Returns True when rows were inserted.
    """
    if db.session.query(Category).first() is not None:
        return False

    categories = [Category(name=name) for name in CATEGORY_NAMES]
    db.session.add_all(categories)
    db.session.flush()  # ensure category ids exist before products reference them

    for name, description, price_cents, stock, category_pos in PRODUCT_ROWS:
        db.session.add(Product(
            name=name,
            description=description,
            price_cents=price_cents,
            stock=stock,
            category_id=categories[category_pos].id,
        ))

    db.session.commit()
    current_app.logger.info(
        "catalog_seeded categories=%s products=%s", len(CATEGORY_NAMES), len(PRODUCT_ROWS)
    )
    return True
