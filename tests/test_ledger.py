import pytest

from carechain.ledger import Address, AuthorizationError, Env, Event, Storage


def test_storage_get_returns_default_when_missing():
    storage = Storage()
    assert storage.get("missing") is None
    assert storage.get("missing", 0) == 0


def test_storage_set_get_round_trip():
    storage = Storage()
    storage.set(("Goal", 1), {"a": [1, 2]})
    assert storage.get(("Goal", 1)) == {"a": [1, 2]}
    assert storage.has(("Goal", 1))
    assert ("Goal", 1) in storage
    assert len(storage) == 1


def test_storage_values_are_copied():
    storage = Storage()
    items = [1]
    storage.set("k", items)
    items.append(2)
    loaded = storage.get("k")
    loaded.append(3)
    assert storage.get("k") == [1]


def test_storage_remove():
    storage = Storage()
    storage.set("k", True)
    storage.remove("k")
    assert not storage.has("k")
    storage.remove("k")
    assert len(storage) == 0


def test_generate_address_is_unique():
    env = Env()
    addresses = {env.generate_address() for _ in range(20)}
    assert len(addresses) == 20
    assert all(isinstance(a, Address) for a in addresses)


def test_require_auth_without_mock_raises():
    env = Env()
    address = env.generate_address()
    with pytest.raises(AuthorizationError) as info:
        env.require_auth(address)
    assert info.value.address == address


def test_require_auth_with_mock_records_address():
    env = Env()
    env.mock_all_auths()
    address = env.generate_address()
    env.require_auth(address)
    assert env.authorized == [address]


def test_set_timestamp():
    env = Env()
    assert env.timestamp == 0
    env.set_timestamp(5_000_000)
    assert env.timestamp == 5_000_000


def test_set_timestamp_rejects_negative():
    env = Env()
    with pytest.raises(ValueError):
        env.set_timestamp(-1)


def test_publish_records_event():
    env = Env()
    event = env.publish(["care_plan_created"], (1, "x"))
    assert event == Event(("care_plan_created",), (1, "x"))
    assert env.events == [event]


def test_storages_are_separate():
    env = Env()
    env.storage.set("k", 1)
    assert env.temporary.get("k") is None
    assert env.storage.get("k") == 1