from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from productdb import models  # noqa: F401
from productdb.db.base import Base
from productdb.db.session import build_engine
from productdb.deps import get_db
from productdb.main import app
from productdb.models.product_description import QuantityType
from productdb.schemas.product import (
    Nutrients,
    ProductDescription,
    ProductImage,
    ProductInfo,
    Weight,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x01" * 32


@pytest.fixture
def engine():
    """In-memory SQLite database shared by every session of a test."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    """Test client whose requests run against the test database."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_description(
    product_id: str = "5411188124689",
    name: str = "Haferdrink ungesüßt, 1 Liter",
    quantity_type: QuantityType = QuantityType.VOLUME,
    portion: float = 100.0,
    volume_weight_ratio=1.03,
    with_images: bool = False,
    **nutrient_overrides,
) -> ProductDescription:
    nutrients = {
        "kcal": 40.0,
        "protein": Weight(value=0.2),
        "fat": Weight(value=1.5),
        "carbohydrates": Weight(value=5.6),
        "sugar": Weight(value=0.0),
        "salt": Weight(value=0.09),
    }
    nutrients.update(nutrient_overrides)

    return ProductDescription(
        info=ProductInfo(
            id=product_id,
            name=name,
            producer="Alpro",
            quantity_type=quantity_type,
            portion=portion,
            volume_weight_ratio=volume_weight_ratio,
        ),
        preview=ProductImage(content_type="image/png", data=PNG_BYTES) if with_images else None,
        full_image=ProductImage(content_type="image/jpeg", data=JPEG_BYTES) if with_images else None,
        nutrients=Nutrients(**nutrients),
    )


def make_weight_description(product_id: str, name: str, **kwargs) -> ProductDescription:
    return make_description(
        product_id=product_id,
        name=name,
        quantity_type=QuantityType.WEIGHT,
        volume_weight_ratio=None,
        **kwargs,
    )


@pytest.fixture
def description() -> ProductDescription:
    return make_description(with_images=True)


@pytest.fixture
def volume_product():
    """Factory for volume products (drinks)."""
    return make_description


@pytest.fixture
def weight_product():
    """Factory for weight products."""
    return make_weight_description


@pytest.fixture
def file_session_factory(tmp_path):
    """SQLite file database where every session gets its own connection"""
    engine = build_engine(f"sqlite:///{tmp_path / 'catalog.sqlite3'}")
    Base.metadata.create_all(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()
