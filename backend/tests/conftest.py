"""
Pytest fixtures for the Nova Salud backend tests.

Provides an in-memory application, a freshly seeded catalog per test and a
test client.
"""

import pytest
from novasalud import create_app
from novasalud.extensions import db
from novasalud.models import Product, Sale
from novasalud.services.seed_service import seed_catalog


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SEED_ON_STARTUP': False,
    })

    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def db_session(app):
    """Recreate the schema and reseed the catalog for each test."""
    db.session.remove()
    db.drop_all()
    db.create_all()
    seed_catalog()

    yield db.session

    db.session.remove()


@pytest.fixture(scope='function')
def client(app, db_session):
    """Create test client over a freshly seeded database."""
    return app.test_client()


@pytest.fixture(scope='function')
def product_id(db_session):
    """Return a lookup of seeded product ids by name."""
    def _lookup(name: str) -> int:
        return db_session.query(Product).filter_by(name=name).one().id
    return _lookup


@pytest.fixture(scope='function')
def stock_of(db_session):
    """Read a product's current stock, bypassing the identity map."""
    def _stock(pid: int) -> int:
        db_session.expire_all()
        return db_session.get(Product, pid).stock
    return _stock


@pytest.fixture(scope='function')
def sale_count(db_session):
    def _count(pid: int | None = None) -> int:
        query = db_session.query(Sale)
        if pid is not None:
            query = query.filter_by(product_id=pid)
        return query.count()
    return _count
