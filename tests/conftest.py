import itertools
from datetime import datetime, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from listing_search import models
from listing_search.db import Base

BASE_TIME = datetime(2025, 3, 1, 9, 0, 0)


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def _adder(db, model, label):
    counter = itertools.count()

    def add(**fields):
        n = next(counter)
        fields.setdefault("name", f"{label} {n}")
        # every row is one minute newer than the previous unless told otherwise
        fields.setdefault("created_at", BASE_TIME + timedelta(minutes=n))
        obj = model(**fields)
        db.add(obj)
        db.commit()
        return obj

    return add


@pytest.fixture
def add_product(db):
    return _adder(db, models.Product, "Product")


@pytest.fixture
def add_service(db):
    return _adder(db, models.Service, "Service")
