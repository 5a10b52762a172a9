"""
Pytest fixtures for the StockFlow test suite.

Every test gets its own in-memory SQLite database (StaticPool keeps the single
connection alive across sessions and threads), an application built through
``create_app`` on top of it, and a few ready-made warehouses, users and tokens.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from stockflow.core import Settings, Base, create_db_engine, create_session_factory
from stockflow.models import Warehouse, Category, Product, AppUser
from stockflow.api.auth import get_password_hash, create_access_token
from stockflow.services import mail_service
from main import create_app

TEST_PASSWORD = "Secret@123"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        DATABASE_URL_OVERRIDE="sqlite://",
        SECRET_KEY="test-secret-key",
        LOGS_PATH="",
        LOG_LEVEL="DEBUG",
    )


@pytest.fixture
def engine(settings):
    engine = create_db_engine(settings, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine, settings):
    return create_session_factory(engine, settings)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(settings, session_factory):
    return create_app(settings, session_factory)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# Master data
# =============================================================================


@pytest.fixture
def category(db):
    category = Category(name="Electronics", description="Electronic devices and accessories")
    db.add(category)
    db.commit()
    return category


@pytest.fixture
def main_warehouse(db):
    warehouse = Warehouse(name="Main Warehouse", location="New York, NY", is_active=True)
    db.add(warehouse)
    db.commit()
    return warehouse


@pytest.fixture
def west_warehouse(db):
    warehouse = Warehouse(name="West Coast Hub", location="Los Angeles, CA", is_active=True)
    db.add(warehouse)
    db.commit()
    return warehouse


@pytest.fixture
def make_product(db, category):
    """
    Factory for products with a given starting stock.

    Starting stock is written directly: it is the state the tests begin from,
    not a change under test.
    """
    def _make(warehouse, sku="X", stock=10, min_stock_level=None, name=None):
        product = Product(
            sku=sku,
            name=name or f"Product {sku}",
            category_id=category.id,
            warehouse_id=warehouse.id,
            unit_of_measure="pcs",
            stock=stock,
            min_stock_level=min_stock_level,
        )
        db.add(product)
        db.commit()
        return product
    return _make


# =============================================================================
# Users and tokens
# =============================================================================


def _make_user(db, email, role):
    user = AppUser(
        email=email,
        name=email.split("@")[0].title(),
        hashed_password=get_password_hash(TEST_PASSWORD),
        role=role,
        is_active=True,
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def staff_user(db):
    return _make_user(db, "staff@example.com", "staff")


@pytest.fixture
def admin_user(db):
    return _make_user(db, "admin@example.com", "admin")


@pytest.fixture
def auth_headers(staff_user, settings):
    token = create_access_token({"sub": str(staff_user.id)}, settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user, settings):
    token = create_access_token({"sub": str(admin_user.id)}, settings)
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Mail
# =============================================================================


@pytest.fixture
def outbox(settings, monkeypatch):
    """Route SMTP to a list instead of a server; yields the sent messages"""
    sent = []

    class FakeSMTP:
        def __init__(self, host, port, timeout=None):
            self.host = host
            self.port = port

        def __enter__(self):
            return self

        def __exit__(self, *exc_info):
            return False

        def starttls(self):
            pass

        def login(self, user, password):
            pass

        def send_message(self, message):
            sent.append(message)

    settings.SMTP_HOST = "smtp.example.com"
    monkeypatch.setattr(mail_service.smtplib, "SMTP", FakeSMTP)
    return sent
