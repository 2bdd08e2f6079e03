"""
Tests for CartManager
"""
import json
from concurrent.futures import ThreadPoolExecutor

from sqlmodel import Session

from krishi_jyothi.core.notifications import NotificationCollector
from krishi_jyothi.core.storage import DatabaseKeyValueStore, InMemoryKeyValueStore
from krishi_jyothi.services.cart_manager import CartManager

KEY = "krishijyothi_cart"


def make_cart(store=None):
    return CartManager(store or InMemoryKeyValueStore(), NotificationCollector())


class TestAddItem:
    """Tests for adding lines."""

    def test_add_new_item(self, tomatoes):
        cart = make_cart()
        cart.add_item(tomatoes, 2)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.item_count == 2
        assert cart.subtotal == 120

    def test_default_quantity_is_one(self, tomatoes):
        cart = make_cart()
        cart.add_item(tomatoes)

        assert cart.item_count == 1

    def test_repeated_adds_merge_into_one_line(self, tomatoes):
        cart = make_cart()
        for qty in (1, 4, 2):
            cart.add_item(tomatoes, qty)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 7

    def test_notifications_distinguish_new_and_merged(self, tomatoes):
        cart = make_cart()
        cart.add_item(tomatoes)
        cart.add_item(tomatoes)

        titles = [n.title for n in cart.notifier.drain()]
        assert titles == ["Added to cart", "Cart updated"]

    def test_caller_item_is_not_mutated(self, tomatoes):
        cart = make_cart()
        cart.add_item(tomatoes, 3)
        cart.add_item(tomatoes, 3)

        assert tomatoes.quantity == 1


class TestRemoveAndUpdate:
    """Tests for remove / update quantity."""

    def test_remove_item(self, tomatoes, spinach):
        cart = make_cart()
        cart.add_item(tomatoes)
        cart.add_item(spinach)
        cart.notifier.drain()

        cart.remove_item(tomatoes.id)

        assert [i.id for i in cart.items] == [spinach.id]
        assert cart.notifier.drain()[0].title == "Item removed"

    def test_remove_absent_item_is_silent_noop(self, tomatoes):
        cart = make_cart()
        cart.add_item(tomatoes)
        cart.notifier.drain()

        cart.remove_item(999)

        assert cart.item_count == 1
        assert len(cart.notifier) == 0

    def test_update_quantity_replaces_in_place(self, tomatoes):
        cart = make_cart()
        cart.add_item(tomatoes, 2)
        cart.notifier.drain()

        cart.update_quantity(tomatoes.id, 10)

        assert cart.items[0].quantity == 10
        assert len(cart.notifier) == 0

    def test_update_quantity_zero_removes(self, tomatoes):
        cart = make_cart()
        cart.add_item(tomatoes, 2)

        cart.update_quantity(tomatoes.id, 0)

        assert cart.items == []

    def test_update_quantity_negative_removes(self, tomatoes, spinach):
        cart = make_cart()
        cart.add_item(tomatoes)
        cart.add_item(spinach)

        cart.update_quantity(spinach.id, -3)

        assert [i.id for i in cart.items] == [tomatoes.id]

    def test_update_unknown_id_is_noop(self, tomatoes):
        cart = make_cart()
        cart.add_item(tomatoes)

        cart.update_quantity(42, 5)

        assert cart.item_count == 1


class TestTotals:
    """Tests for derived values."""

    def test_totals_over_multiple_lines(self, tomatoes, spinach):
        cart = make_cart()
        cart.add_item(tomatoes, 3)
        cart.add_item(spinach, 2)

        assert cart.item_count == 5
        assert cart.subtotal == 60 * 3 + 40 * 2

    def test_clear_cart(self, tomatoes, spinach):
        cart = make_cart()
        cart.add_item(tomatoes, 3)
        cart.add_item(spinach, 2)

        cart.clear_cart()

        assert cart.items == []
        assert cart.item_count == 0
        assert cart.subtotal == 0
        assert cart.notifier.drain()[-1].title == "Cart cleared"

    def test_example_scenario(self, tomatoes):
        cart = make_cart()

        cart.add_item(tomatoes, 2)
        assert (cart.item_count, cart.subtotal) == (2, 120)

        cart.add_item(tomatoes, 3)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5
        assert cart.subtotal == 300

        cart.update_quantity(tomatoes.id, 0)
        assert cart.items == []


class TestPersistence:
    """Tests for key-value store mirroring."""

    def test_every_change_is_persisted(self, tomatoes):
        store = InMemoryKeyValueStore()
        cart = make_cart(store)

        cart.add_item(tomatoes, 2)
        saved = json.loads(store.get(KEY))
        assert saved[0]["id"] == tomatoes.id
        assert saved[0]["quantity"] == 2

        cart.clear_cart()
        assert json.loads(store.get(KEY)) == []

    def test_reload_restores_same_lines(self, tomatoes, spinach):
        store = InMemoryKeyValueStore()
        cart = make_cart(store)
        cart.add_item(tomatoes, 2)
        cart.add_item(spinach, 1)

        reloaded = make_cart(store)

        assert reloaded.items == cart.items
        assert reloaded.subtotal == cart.subtotal

    def test_malformed_storage_starts_empty(self, caplog):
        store = InMemoryKeyValueStore({KEY: "{not json"})

        cart = make_cart(store)

        assert cart.items == []
        assert "Failed to parse saved cart" in caplog.text

    def test_wrong_shape_starts_empty(self):
        store = InMemoryKeyValueStore({KEY: json.dumps([{"id": 1, "quantity": 0}])})

        cart = make_cart(store)

        assert cart.items == []

    def test_invalid_line_is_skipped_not_whole_cart(self, tomatoes, spinach):
        store = InMemoryKeyValueStore()
        cart = make_cart(store)
        cart.add_item(tomatoes)
        cart.add_item(spinach, 0)

        reloaded = make_cart(store)

        assert [i.id for i in reloaded.items] == [tomatoes.id]

    def test_duplicate_lines_are_merged_on_load(self, tomatoes, spinach):
        rows = [
            tomatoes.model_dump(mode="json"),
            spinach.model_dump(mode="json"),
            tomatoes.model_copy(update={"quantity": 4}).model_dump(mode="json"),
        ]
        store = InMemoryKeyValueStore({KEY: json.dumps(rows)})

        cart = make_cart(store)

        assert [i.id for i in cart.items] == [tomatoes.id, spinach.id]
        assert cart.items[0].quantity == 5

    def test_non_list_storage_starts_empty(self, caplog):
        store = InMemoryKeyValueStore({KEY: "42"})

        cart = make_cart(store)

        assert cart.items == []
        assert "Failed to parse saved cart" in caplog.text


class TestOverlappingRequests:
    """Two managers for the same session, both loaded before either writes."""

    def test_in_memory_store(self, tomatoes, spinach):
        store = InMemoryKeyValueStore()
        first = make_cart(store)
        second = make_cart(store)

        first.add_item(tomatoes)
        second.add_item(spinach)

        assert [i.id for i in make_cart(store).items] == [tomatoes.id, spinach.id]
        assert [i.id for i in second.items] == [tomatoes.id, spinach.id]

    def test_database_store(self, engine, tomatoes, spinach):
        with Session(engine) as a, Session(engine) as b:
            first = make_cart(DatabaseKeyValueStore(a, "shared-scope"))
            second = make_cart(DatabaseKeyValueStore(b, "shared-scope"))

            first.add_item(tomatoes)
            second.add_item(spinach)
            second.add_item(tomatoes, 2)

        with Session(engine) as c:
            reloaded = make_cart(DatabaseKeyValueStore(c, "shared-scope"))

        assert [i.id for i in reloaded.items] == [tomatoes.id, spinach.id]
        assert reloaded.items[0].quantity == 3

    def test_concurrent_adds_sum_up(self, tomatoes):
        store = InMemoryKeyValueStore()

        def add_one(_):
            make_cart(store).add_item(tomatoes)

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(add_one, range(40)))

        cart = make_cart(store)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 40
