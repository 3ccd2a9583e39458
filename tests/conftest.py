import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DEMO_DATA", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.data.database import Base, build_engine, get_db
from storefront.data import models  # noqa: F401
from storefront.main import create_app
from storefront.services.cart_service import CartService
from storefront.services.product_service import ProductService


@pytest.fixture
def engine():
    # one shared in-memory connection per test
    eng = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def product_service(db):
    return ProductService(db)


@pytest.fixture
def cart_service(db):
    return CartService(db)


@pytest.fixture
def make_product(product_service):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        fields = {
            "title": f"Product {counter['n']}",
            "description": "Test product",
            "price": 10,
            "code": f"CODE-{counter['n']}",
            "stock": 5,
            "category": "General",
        }
        fields.update(overrides)
        return product_service.add_product(fields)

    return _make


@pytest.fixture
def client(session_factory):
    app = create_app()

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # no context manager: the lifespan (table creation on the real engine) is not run
    return TestClient(app)
