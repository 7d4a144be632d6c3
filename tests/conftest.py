"""
pytest configuration: in-memory database and shared shop fixtures
"""
import copy
from typing import Generator
import pytest
from sqlalchemy.orm import Session, sessionmaker

from database.connection import build_engine, create_tables
from schemas.shop import ShopCreate
from services.shop import create_shop
from tests.fixtures.sample_data import SAMPLE_SHOP


@pytest.fixture
def engine():
    """In-memory SQLite engine with all tables created"""
    test_engine = build_engine("sqlite://", echo=False)
    create_tables(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Session bound to the in-memory engine"""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sample_shop_data():
    """Raw payload for a feed shop with schedule and catalog"""
    return copy.deepcopy(SAMPLE_SHOP)


@pytest.fixture
def shop(db_session, sample_shop_data):
    """Persisted feed shop"""
    return create_shop(db_session, ShopCreate(**sample_shop_data))


@pytest.fixture
def make_shop(db_session):
    """Factory persisting minimal shops with unique emails"""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        data = {
            "owner_id": f"owner-{counter['n']}",
            "name": f"Shop {counter['n']}",
            "email": f"shop{counter['n']}@example.com",
            "phone": "5550100000",
            "type": "general",
        }
        data.update(overrides)
        return create_shop(db_session, ShopCreate(**data))

    return _make
