import pytest
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from freeproduct.connections.database import Base
from freeproduct.core.constants import ProductStatus
from freeproduct.middlewares.request_context import clear_request_context
from freeproduct.models.catalog import ProductModel, StockItemModel
from freeproduct.repository.catalog import CatalogRepository

from helpers import make_cart


@pytest.fixture(autouse=True)
def _fresh_request_context():
    clear_request_context()
    yield
    clear_request_context()


@pytest.fixture
def engine():
    """In-memory SQLite DB for fast testing."""
    _engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(_engine)
    yield _engine
    Base.metadata.drop_all(_engine)


@pytest.fixture
def db_session(engine):
    TestSession = sessionmaker(bind=engine)
    s = TestSession()
    try:
        yield s
    finally:
        s.close()


def _add_product(session, sku, price, qty=100, is_in_stock=True, status=ProductStatus.ENABLED, store_ids=None, manage_stock=True):
    product = ProductModel(sku=sku, name=f"Product {sku}", price=Decimal(price), status=status, store_ids=store_ids or [])
    product.stock_item = StockItemModel(qty=Decimal(qty), is_in_stock=is_in_stock, manage_stock=manage_stock)
    session.add(product)


@pytest.fixture
def seed_catalog(db_session):
    """
    A, B   regular products
    G1     salable gift
    G2     gift out of stock
    G3     disabled gift
    G4     gift assigned to store 2 only
    G5     gift without stock management and zero qty
    """
    _add_product(db_session, "A", "10.00")
    _add_product(db_session, "B", "5.50")
    _add_product(db_session, "G1", "25.00", qty=5)
    _add_product(db_session, "G2", "12.00", qty=0, is_in_stock=False)
    _add_product(db_session, "G3", "8.00", status=ProductStatus.DISABLED)
    _add_product(db_session, "G4", "9.00", store_ids=[2])
    _add_product(db_session, "G5", "3.00", qty=0, manage_stock=False)
    db_session.commit()


@pytest.fixture
def catalog(db_session, seed_catalog):
    return CatalogRepository(db_session, live_stock_check=False)


@pytest.fixture
def cart(catalog):
    """Scenario cart: one regular line, SKU A, qty 2, store 1."""
    return make_cart(catalog, [("A", 2)])
