from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from starlette.datastructures import QueryParams

from pagekit.config import PaginationConfig, reset_config
from pagekit.repositories.store import SessionStore
from pagekit.services.page_service import BatchWalker, PageResolver
from tests.models import Base, Item, Tag

ITEM_COUNT = 30
TAGGED_ITEMS = 5


class CountingStore:
    """Wraps a store and records every call made to it."""

    def __init__(self, store):
        self.store = store
        self.count_calls = 0
        self.windows = []

    def fetch_window(self, query, offset, limit, **options):
        self.windows.append((offset, limit, options))
        return self.store.fetch_window(query, offset, limit, **options)

    def count_scalar(self, count_query):
        self.count_calls += 1
        return self.store.count_scalar(count_query)

    def raw_sql_count(self, sql, params=None):
        self.count_calls += 1
        return self.store.raw_sql_count(sql, params)


@pytest.fixture(autouse=True)
def _reset_default_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    """Session over 30 items in 4 categories; items 1-5 carry two tags each."""
    session = sessionmaker(bind=engine, autoflush=False)()
    for i in range(1, ITEM_COUNT + 1):
        session.add(Item(id=i, name=f"Item {i}", category=f"Category {i // 10}"))
    for i in range(1, TAGGED_ITEMS + 1):
        session.add(Tag(item_id=i, label="red"))
        session.add(Tag(item_id=i, label="blue"))
    session.commit()
    yield session
    session.close()


@pytest.fixture
def store(db):
    return CountingStore(SessionStore(db))


@pytest.fixture
def config(store):
    return PaginationConfig(store=store)


@pytest.fixture
def resolver(config):
    return PageResolver(config)


@pytest.fixture
def walker(config):
    return BatchWalker(config)


@pytest.fixture
def request_stub():
    """Minimal stand-in for a Starlette request: query params only."""
    return SimpleNamespace(query_params=QueryParams())
