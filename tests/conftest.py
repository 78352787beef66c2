# tests/conftest.py
import os

os.environ.setdefault("SUPABASE_URL", "https://example.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from storefront.core.auth import require_admin
from storefront.database import get_session
from storefront.main import app
from storefront.models.product import Brand, Category, Product, ProductImage
from storefront.models.trending import TrendingPerfume
from storefront.models.user import User

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine):
    def _get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_client(client):
    app.dependency_overrides[require_admin] = lambda: User(
        id=uuid.uuid4(), email="admin@example.com", role="admin"
    )
    return client


@pytest.fixture
def make_brand(session):
    def _make(name: str = "Dior", **kwargs) -> Brand:
        brand = Brand(name=name, **kwargs)
        session.add(brand)
        session.commit()
        session.refresh(brand)
        return brand

    return _make


@pytest.fixture
def make_category(session):
    def _make(name: str = "Perfumes", **kwargs) -> Category:
        category = Category(name=name, **kwargs)
        session.add(category)
        session.commit()
        session.refresh(category)
        return category

    return _make


@pytest.fixture
def make_product(session):
    """
    Insert a product; `age` (minutes) pushes created_at into the past so
    newest-first ordering is predictable.
    """
    counter = {"n": 0}

    def _make(title: str = "Sauvage", price: float = 1000.0, age: int = 0, **kwargs) -> Product:
        counter["n"] += 1
        kwargs.setdefault("description", f"{title} description")
        product = Product(
            title=title,
            price=price,
            created_at=BASE_TIME - timedelta(minutes=age) + timedelta(seconds=counter["n"]),
            **kwargs,
        )
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    return _make


@pytest.fixture
def make_image(session):
    def _make(product: Product, url: str, is_primary: bool = False, order_index: int = 0) -> ProductImage:
        image = ProductImage(
            product_id=product.id,
            image_url=url,
            is_primary=is_primary,
            order_index=order_index,
        )
        session.add(image)
        session.commit()
        session.refresh(image)
        return image

    return _make


@pytest.fixture
def make_trending(session):
    def _make(product: Product, order_index: int, is_active: bool = True) -> TrendingPerfume:
        entry = TrendingPerfume(
            product_id=product.id,
            order_index=order_index,
            is_active=is_active,
        )
        session.add(entry)
        session.commit()
        session.refresh(entry)
        return entry

    return _make
