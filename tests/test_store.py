"""Tests for the item models and the in-memory ItemStore."""

import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from backend.models import HelloResponse, Item, utc_timestamp
from backend.store import ItemStore, ValidationError

TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


@pytest.fixture()
def store() -> ItemStore:
    """A fresh store for instance 'test-1'."""
    return ItemStore("test-1")


# ===================================================================
# Models
# ===================================================================


class TestItemModel:
    def test_create_item_defaults(self) -> None:
        item = Item(id=1, text="hello")
        assert item.id == 1
        assert item.text == "hello"
        assert TIMESTAMP_RE.match(item.created)

    def test_text_min_length(self) -> None:
        with pytest.raises(Exception):
            Item(id=1, text="")

    def test_id_must_be_positive(self) -> None:
        with pytest.raises(Exception):
            Item(id=0, text="x")

    def test_json_shape(self) -> None:
        item = Item(id=3, text="t", created="2026-01-01T00:00:00.000Z")
        assert item.model_dump() == {
            "id": 3,
            "text": "t",
            "created": "2026-01-01T00:00:00.000Z",
        }


class TestHelloResponse:
    def test_default_message(self) -> None:
        body = HelloResponse(instance="web-a")
        assert body.model_dump() == {
            "message": "Hello from backend!",
            "instance": "web-a",
        }


def test_utc_timestamp_format() -> None:
    assert TIMESTAMP_RE.match(utc_timestamp())


# ===================================================================
# ItemStore
# ===================================================================


class TestSeed:
    def test_single_seed_item(self, store: ItemStore) -> None:
        items = store.list_items()
        assert len(items) == 1
        assert items[0].id == 1
        assert "test-1" in items[0].text
        assert store.count == 1

    def test_seed_text(self) -> None:
        assert ItemStore("web-a").list_items()[0].text == "Welcome! served by web-a"

    def test_stores_are_independent(self) -> None:
        a = ItemStore("a")
        b = ItemStore("b")
        a.add_item("only in a")
        assert a.count == 2
        assert b.count == 1


class TestAddItem:
    def test_add_assigns_next_id(self, store: ItemStore) -> None:
        item = store.add_item("buy milk")
        assert item.id == 2
        assert item.text == "buy milk"
        assert TIMESTAMP_RE.match(item.created)
        assert store.count == 2

    def test_ids_strictly_increasing(self, store: ItemStore) -> None:
        for text in ["a", "b", "c"]:
            store.add_item(text)
        ids = [i.id for i in store.list_items()]
        assert ids == [1, 2, 3, 4]

    def test_insertion_order_preserved(self, store: ItemStore) -> None:
        store.add_item("first")
        store.add_item("second")
        texts = [i.text for i in store.list_items()[1:]]
        assert texts == ["first", "second"]

    @pytest.mark.parametrize("bad", ["", None, 123, ["x"], {"text": "x"}])
    def test_rejects_invalid_text(self, store: ItemStore, bad) -> None:
        with pytest.raises(ValidationError, match="text required"):
            store.add_item(bad)
        assert store.count == 1

    def test_whitespace_text_is_accepted(self, store: ItemStore) -> None:
        assert store.add_item("  ").text == "  "


class TestListItems:
    def test_returns_copy(self, store: ItemStore) -> None:
        items = store.list_items()
        items.clear()
        assert store.count == 1

    def test_concurrent_adds_get_unique_ids(self, store: ItemStore) -> None:
        with ThreadPoolExecutor(max_workers=8) as pool:
            created = list(pool.map(store.add_item, [f"n{i}" for i in range(50)]))
        ids = sorted(i.id for i in created)
        assert ids == list(range(2, 52))
        assert [i.id for i in store.list_items()] == list(range(1, 52))
