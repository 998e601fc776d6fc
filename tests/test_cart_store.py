"""
Tests for CartStore
"""

from decimal import Decimal
from unittest.mock import Mock

import pytest

from kalspire.cart import CartStore, InMemoryCartRepository, create_cart_store, load_cart
from kalspire.cart.models import LineItemKey
from kalspire.errors import CartStorageError


@pytest.fixture
def store(memory_repository):
    return CartStore(memory_repository)


class TestCartStore:
    """Tests for store operations."""

    def test_starts_empty(self, store):
        assert store.items == ()
        assert store.total_item_count() == 0
        assert store.total_price() == 0

    def test_add_merges(self, store, sample_product, sample_color):
        store.add(sample_product, 1, sample_color)
        store.add(sample_product, 2, sample_color)

        assert len(store.items) == 1
        assert store.items[0].quantity == 3

    def test_color_partition(self, store, sample_product, sample_color):
        store.add(sample_product, 1)
        store.add(sample_product, 1, sample_color)

        assert [i.key for i in store.items] == [
            LineItemKey("product-a", None),
            LineItemKey("product-a", "color-red"),
        ]

    def test_remove_precision(self, store, sample_product, sample_color):
        store.add(sample_product)
        store.add(sample_product, 1, sample_color)

        store.remove("product-a")

        assert [i.key for i in store.items] == [LineItemKey("product-a", "color-red")]

    @pytest.mark.parametrize("quantity", [0, -5])
    def test_quantity_floor(self, store, sample_product, quantity):
        store.add(sample_product, 3)

        store.set_quantity("product-a", quantity)

        assert store.items == ()

    def test_set_quantity_missing_is_noop(self, store, sample_product):
        store.add(sample_product, 2)
        before = store.items

        store.set_quantity("nonexistent-id", 5)

        assert store.items == before

    def test_aggregates(self, store, sample_product, second_product):
        store.add(sample_product, 2)
        store.add(second_product, 1)

        assert store.total_item_count() == 3
        assert store.total_price() == Decimal("45")

    def test_clear(self, store, sample_product, second_product):
        store.add(sample_product, 2)
        store.add(second_product, 1)

        store.clear()

        assert store.items == ()
        assert store.total_item_count() == 0
        assert store.total_price() == 0

    def test_over_stock_add_is_permitted(self, store, second_product):
        store.add(second_product, second_product.stock + 10)

        assert store.items[0].quantity == 11


class TestCartStorePersistence:
    """Tests for write-through persistence."""

    def test_every_mutation_is_saved(self, sample_product, second_product):
        repository = Mock()
        repository.load.return_value = ()
        store = CartStore(repository)

        store.add(sample_product)
        store.add(second_product)
        store.set_quantity("product-a", 4)
        store.remove("product-b")
        store.clear()

        assert repository.save.call_count == 5
        repository.load.assert_called_once()

    def test_restores_on_init(self, memory_repository, sample_product, sample_color, second_product):
        first = CartStore(memory_repository)
        first.add(sample_product, 2, sample_color)
        first.add(second_product, 1)

        second = CartStore(memory_repository)

        assert second.items == first.items

    def test_slot_holds_current_items(self, memory_repository, sample_product):
        store = CartStore(memory_repository)
        store.add(sample_product, 2)

        assert load_cart(memory_repository.raw) == store.items

    def test_corrupted_slot_starts_empty(self):
        store = CartStore(InMemoryCartRepository(raw="garbage"))

        assert store.items == ()

    def test_load_failure_starts_empty(self):
        repository = Mock()
        repository.load.side_effect = CartStorageError(key="cart-storage")

        assert CartStore(repository).items == ()

    def test_save_failure_keeps_state(self, sample_product):
        repository = Mock()
        repository.load.return_value = ()
        repository.save.side_effect = CartStorageError(key="cart-storage")
        store = CartStore(repository)

        store.add(sample_product, 2)

        assert store.items[0].quantity == 2

    def test_factory_uses_settings(self, memory_settings, sample_product):
        store = create_cart_store(memory_settings)
        store.add(sample_product)

        assert store.total_item_count() == 1


class TestCartStoreObservers:
    """Tests for subscriptions."""

    def test_listener_receives_new_items(self, store, sample_product):
        seen = []
        store.subscribe(seen.append)

        store.add(sample_product, 2)
        store.clear()

        assert len(seen) == 2
        assert seen[0][0].quantity == 2
        assert seen[1] == ()

    def test_unsubscribe(self, store, sample_product):
        seen = []
        unsubscribe = store.subscribe(seen.append)

        unsubscribe()
        store.add(sample_product)

        assert seen == []
        unsubscribe()


class TestCheckoutHandoff:
    """Tests for order_lines and summary."""

    def test_order_lines(self, store, sample_product, sample_color, second_product):
        store.add(sample_product, 2, sample_color)
        store.add(second_product, 1)

        lines = store.order_lines()

        assert lines[0]["productId"] == "product-a"
        assert lines[0]["quantity"] == 2
        assert lines[0]["selectedColor"]["id"] == "color-red"
        assert lines[1] == {"productId": "product-b", "quantity": 1}

    def test_order_lines_do_not_clear(self, store, sample_product):
        store.add(sample_product)

        store.order_lines()

        assert store.total_item_count() == 1

    def test_summary(self, store, sample_product, sample_color, second_product):
        store.add(sample_product, 2, sample_color)
        store.add(second_product, 1)

        summary = store.summary()

        assert summary["is_empty"] is False
        assert summary["total_items"] == 3
        assert summary["total"] == 45.0
        assert summary["total_display"] == "₹45.00"
        assert summary["items"][0]["color"] == "Red"
        assert summary["items"][1]["total"] == 25.0

    def test_empty_summary(self, store):
        assert store.summary() == {
            "is_empty": True,
            "total_items": 0,
            "items": [],
            "total": 0.0,
            "total_display": "₹0.00",
        }
