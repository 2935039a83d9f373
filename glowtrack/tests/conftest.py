"""Configuration et fixtures pytest"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ["SCHEDULER_ENABLED"] = "false"

import pytest
from apscheduler.schedulers.background import BackgroundScheduler
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from datetime import datetime

from glowtrack.core.clock import FixedClock, get_clock
from glowtrack.core.database import Base, get_db
from glowtrack.core.dependencies import get_countdown_scheduler
from glowtrack.main import app
from glowtrack.models.product import Product, ProductCategory
from glowtrack.services.product_store import ProductStore
from glowtrack.tasks.countdown_scheduler import CountdownScheduler

SQLALCHEMY_TEST_DATABASE_URL = os.environ["DATABASE_URL"]

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

NOW = datetime(2024, 1, 1, 9, 30)


@pytest.fixture(scope="function")
def db():
    """Fixture de base de données pour les tests"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    """Horloge figée au 01/01/2024 09:30 UTC"""
    return FixedClock(NOW)


@pytest.fixture
def paused_scheduler():
    """Scheduler démarré en pause : les jobs sont enregistrés mais jamais exécutés"""
    scheduler = BackgroundScheduler()
    scheduler.start(paused=True)
    yield scheduler
    scheduler.shutdown(wait=False)


@pytest.fixture
def countdowns(paused_scheduler, clock):
    return CountdownScheduler(paused_scheduler, clock=clock, interval_seconds=10)


@pytest.fixture
def store(db):
    return ProductStore(db)


@pytest.fixture(scope="function")
def client(db, clock, countdowns):
    """Fixture du client de test FastAPI"""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_countdown_scheduler] = lambda: countdowns

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_product(store):
    """Fabrique de produits persistés"""

    def _make(
        name="Test Product",
        category=ProductCategory.LIPS,
        date_added=NOW,
        pao_months=None,
        expiry_date=None,
    ):
        product = Product(
            name=name,
            category=category,
            date_added=date_added,
            pao_months=pao_months,
            expiry_date=expiry_date,
        )
        return store.add(product)

    return _make
