import pytest

from throwrelay.errors import RoomNotFound
from throwrelay.services.rooms import registry as registry_module

WINDOW = 2 * 60 * 60


def test_create_room_is_listed(registry):
    room_id = registry.create_room()
    assert len(room_id) == 8
    assert registry.exists(room_id)
    assert room_id in registry.list_active()
    assert registry.occupancy(room_id) == 0


def test_create_room_retries_on_collision(registry, monkeypatch):
    ids = iter(['aaaa1111', 'aaaa1111', 'bbbb2222'])
    monkeypatch.setattr(registry_module, 'generate_room_id', lambda length=8: next(ids))
    first = registry.create_room()
    second = registry.create_room()
    assert first == 'aaaa1111'
    assert second == 'bbbb2222'
    assert len(registry) == 2


def test_get_unknown_room_raises(registry):
    with pytest.raises(RoomNotFound):
        registry.get('nope')
    assert not registry.exists('nope')


def test_occupancy_never_negative(registry):
    room_id = registry.create_room()
    registry.increment_occupancy(room_id)
    registry.decrement_occupancy(room_id)
    registry.decrement_occupancy(room_id)
    registry.decrement_occupancy(room_id)
    assert registry.occupancy(room_id) == 0
    registry.increment_occupancy(room_id)
    assert registry.occupancy(room_id) == 1


def test_occupancy_on_unknown_room_is_noop(registry, caplog):
    registry.increment_occupancy('ghost')
    registry.decrement_occupancy('ghost')
    assert len(registry) == 0
    assert '[occupancy-anomaly]' in caplog.text


def test_sweep_boundary(registry, clock):
    room_id = registry.create_room()
    clock.advance(WINDOW)
    assert registry.sweep_expired() == []
    assert registry.exists(room_id)
    clock.advance(1)
    assert registry.sweep_expired() == [room_id]
    assert not registry.exists(room_id)


def test_sweep_with_explicit_now_and_window(registry, clock):
    room_id = registry.create_room()
    assert registry.sweep_expired(now=clock() + 10, retention_window=10) == []
    assert registry.sweep_expired(now=clock() + 11, retention_window=10) == [room_id]


def test_sweep_keeps_occupied_rooms_regardless_of_age(registry, clock):
    busy = registry.create_room()
    idle = registry.create_room()
    registry.increment_occupancy(busy)
    clock.advance(WINDOW * 10)
    assert registry.list_active() == [busy]
    assert not registry.exists(idle)


def test_list_active_sweeps_first(registry, clock):
    old = registry.create_room()
    clock.advance(WINDOW + 1)
    fresh = registry.create_room()
    assert set(registry.list_active()) == {fresh}
    assert not registry.exists(old)


def test_occupy_checks_and_increments(registry):
    room_id = registry.create_room()
    assert registry.occupy(room_id) is True
    assert registry.occupancy(room_id) == 1
    assert registry.occupy('ghost') is False
    assert len(registry) == 1
