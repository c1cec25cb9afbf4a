from neighborhub.realtime.presence import InMemoryPresenceStore
from neighborhub.realtime.presence import get_presence_store


def test_register_and_lookup():
    store = InMemoryPresenceStore()
    assert store.register(1, "a") is None
    assert store.lookup(1) == "a"
    assert store.is_online(1)
    assert store.online_user_ids() == [1]


def test_second_connection_replaces_first():
    store = InMemoryPresenceStore()
    store.register(1, "a")
    assert store.register(1, "b") == "a"
    assert store.lookup(1) == "b"


def test_stale_disconnect_keeps_newer_connection():
    store = InMemoryPresenceStore()
    store.register(1, "a")
    store.register(1, "b")

    assert store.unregister("a") is None
    assert store.lookup(1) == "b"
    assert store.unregister("b") == 1
    assert store.lookup(1) is None


def test_unregister_unknown_handle():
    assert InMemoryPresenceStore().unregister("nope") is None


def test_reregistering_same_handle_is_not_a_replacement():
    store = InMemoryPresenceStore()
    store.register(1, "a")
    assert store.register(1, "a") is None
    assert store.snapshot() == {1: "a"}


def test_handle_moves_between_users():
    store = InMemoryPresenceStore()
    store.register(1, "a")
    store.register(2, "a")
    assert store.lookup(1) is None
    assert store.lookup(2) == "a"
    assert store.unregister("a") == 2  # noqa: PLR2004


def test_snapshot_is_a_copy():
    store = InMemoryPresenceStore()
    store.register(1, "a")
    snap = store.snapshot()
    snap[2] = "b"
    assert store.lookup(2) is None


def test_process_store_is_shared():
    assert get_presence_store() is get_presence_store()
    assert isinstance(get_presence_store(), InMemoryPresenceStore)
