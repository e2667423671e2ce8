"""Tests for the SQLAlchemy-backed store."""

from sqlalchemy import func, select
from sqlalchemy.orm import joinedload

from pagekit.repositories.store import SessionStore, selects_single_entity
from tests.models import Item


def test_selects_single_entity():
    assert selects_single_entity(select(Item))
    assert not selects_single_entity(select(Item.name))
    assert not selects_single_entity(select(Item.id, Item.name))


def test_fetch_window_returns_entities(db):
    rows = SessionStore(db).fetch_window(select(Item).order_by(Item.id), 5, 3)

    assert [item.name for item in rows] == ["Item 6", "Item 7", "Item 8"]


def test_fetch_window_single_column_returns_scalars(db):
    rows = SessionStore(db).fetch_window(select(Item.name).order_by(Item.id), 0, 2)

    assert rows == ["Item 1", "Item 2"]


def test_fetch_window_multiple_columns_returns_rows(db):
    rows = SessionStore(db).fetch_window(
        select(Item.id, Item.category).order_by(Item.id), 29, 5
    )

    assert len(rows) == 1
    assert rows[0].id == 30
    assert rows[0].category == "Category 3"


def test_fetch_window_with_joined_collection(db):
    stmt = select(Item).options(joinedload(Item.tags)).order_by(Item.id)
    rows = SessionStore(db).fetch_window(stmt, 0, 4)

    assert [item.id for item in rows] == [1, 2, 3, 4]
    assert all(len(item.tags) == 2 for item in rows)


def test_count_scalar(db):
    count = SessionStore(db).count_scalar(select(func.count()).select_from(Item))
    assert count == 30


def test_raw_sql_count(db):
    store = SessionStore(db)

    assert store.raw_sql_count("SELECT category FROM test_items GROUP BY category") == 4
    assert (
        store.raw_sql_count(
            "SELECT id FROM test_items WHERE category = :category",
            {"category": "Category 2"},
        )
        == 10
    )
