"""Tests for key-value stores"""
from krishi_jyothi.core.storage import DatabaseKeyValueStore, InMemoryKeyValueStore


def test_in_memory_store():
    store = InMemoryKeyValueStore()
    assert store.get("k") is None

    store.set("k", "1")
    store.set("k", "2")
    assert store.get("k") == "2"

    store.remove("k")
    store.remove("k")
    assert store.get("k") is None


def test_database_store_upserts(db_session):
    store = DatabaseKeyValueStore(db_session, "scope-a")

    store.set("krishijyothi_cart", "[]")
    store.set("krishijyothi_cart", '[{"id": 1}]')

    assert store.get("krishijyothi_cart") == '[{"id": 1}]'


def test_database_store_scopes_are_isolated(db_session):
    a = DatabaseKeyValueStore(db_session, "scope-a")
    b = DatabaseKeyValueStore(db_session, "scope-b")

    a.set("krishijyothi_user", '{"id": 1}')

    assert b.get("krishijyothi_user") is None

    b.remove("krishijyothi_user")
    assert a.get("krishijyothi_user") == '{"id": 1}'

    a.remove("krishijyothi_user")
    assert a.get("krishijyothi_user") is None
