import uuid

from apeiron.handle import EntityHandle, new_uuid


def test_valid_handle():
    assert EntityHandle("wolf", 1).is_valid()


def test_invalid_handles():
    assert not EntityHandle("", 1).is_valid()
    assert not EntityHandle("wolf", 0).is_valid()


def test_default_handle_is_empty():
    h = EntityHandle()
    assert h.is_empty()
    assert not h.is_valid()
    assert not EntityHandle("wolf", 0).is_empty()


def test_equality_compares_id_and_generation():
    assert EntityHandle("wolf", 2) == EntityHandle("wolf", 2)
    assert not EntityHandle("wolf", 2) == EntityHandle("wolf", 3)
    assert not EntityHandle("wolf", 2) == EntityHandle("rabbit", 2)


def test_string_form():
    assert str(EntityHandle("wolf", 2)) == "Handle[ID=wolf Gen=2]"


def test_new_uuid_round_trips():
    value = new_uuid()
    assert str(uuid.UUID(value)) == value


def test_new_uuid_is_unique():
    values = {new_uuid() for _ in range(50)}
    assert len(values) == 50


def test_handle_from_uuid_is_valid():
    assert EntityHandle(new_uuid(), 1).is_valid()