import pytest

from syncroom.errors import BadRequest, DuplicateRoom, RelationNotFound, RoomNotFound
from syncroom.models import ALL_PERMISSIONS, Permission, Room, RoomRole, RoomUserRelation


def new_room(name, creator=None):
    room = Room(name=name)
    if creator is not None:
        room.creator_id = creator.id
        room.relations = [
            RoomUserRelation(user_id=creator.id, role=RoomRole.CREATOR, permissions=int(ALL_PERMISSIONS))
        ]
    return room


def test_create_and_get(store, make_user):
    alice = make_user("alice")
    room = store.create(new_room("lobby", alice))
    assert room.id is not None

    loaded = store.get_by_id(room.id)
    assert loaded.name == "lobby"
    assert loaded.creator_id == alice.id
    assert loaded.hashed_password == b""
    assert loaded.created_at is not None


def test_get_missing_room(store):
    with pytest.raises(RoomNotFound):
        store.get_by_id(404)
    with pytest.raises(RoomNotFound):
        store.get_by_id_with_creator(404)


def test_duplicate_name(store):
    store.create(new_room("lobby"))
    duplicate = new_room("lobby")
    with pytest.raises(DuplicateRoom) as exc_info:
        store.create(duplicate)
    assert exc_info.value.room is duplicate
    assert exc_info.value.to_dict()["kind"] == "DuplicateRoom"


def test_get_with_creator(store, make_user):
    alice = make_user("alice")
    room = store.create(new_room("lobby", alice))
    loaded = store.get_by_id_with_creator(room.id)
    assert loaded.creator.username == "alice"


def test_updates_on_missing_room(store):
    with pytest.raises(RoomNotFound):
        store.update_setting(1, {"hidden": True})
    with pytest.raises(RoomNotFound):
        store.update_hashed_password(1, b"x")
    with pytest.raises(RoomNotFound):
        store.delete(1)


def test_update_setting_and_password(store):
    room = store.create(new_room("lobby"))
    store.update_setting(room.id, {"hidden": True})
    store.update_hashed_password(room.id, b"hashed")
    loaded = store.get_by_id(room.id)
    assert loaded.room_setting.hidden is True
    assert loaded.need_password


def test_permissions(store, make_user):
    alice = make_user("alice")
    room = store.create(new_room("lobby", alice))
    assert store.get_permission(room.id, alice.id) == ALL_PERMISSIONS

    store.update_permission(room.id, alice.id, Permission.DELETE_ROOM)
    assert store.get_permission(room.id, alice.id) == Permission.DELETE_ROOM

    with pytest.raises(RelationNotFound):
        store.update_permission(room.id, alice.id + 1, Permission.DELETE_ROOM)
    with pytest.raises(RelationNotFound):
        store.get_permission(room.id + 1, alice.id)


@pytest.mark.parametrize("mask", [2**70, -1, int(ALL_PERMISSIONS) + 1])
def test_update_permission_rejects_unknown_bits(store, make_user, mask):
    alice = make_user("alice")
    room = store.create(new_room("lobby", alice))

    with pytest.raises(BadRequest):
        store.update_permission(room.id, alice.id, mask)
    with pytest.raises(BadRequest):
        store.update_role(room.id, alice.id, RoomRole.ADMIN, mask)
    assert store.get_permission(room.id, alice.id) == ALL_PERMISSIONS



def test_delete_cascades_relations(store, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    room = store.create(new_room("lobby", alice))
    store.add_relation(RoomUserRelation(room_id=room.id, user_id=bob.id, role=RoomRole.MEMBER))

    store.delete(room.id)

    with pytest.raises(RoomNotFound):
        store.get_by_id(room.id)
    with pytest.raises(RelationNotFound):
        store.get_relation(room.id, alice.id)
    with pytest.raises(RelationNotFound):
        store.get_relation(room.id, bob.id)
    assert store.list_relations(room.id) == []


def test_ids_are_not_reused(store):
    first = store.create(new_room("one"))
    second = store.create(new_room("two"))
    store.delete(second.id)
    third = store.create(new_room("three"))
    assert third.id > second.id > first.id


def test_exists(store):
    room = store.create(new_room("lobby"))
    assert store.exists(room.id)
    assert not store.exists(room.id + 1)
    assert store.exists_by_name("lobby")
    assert not store.exists_by_name("nowhere")


def test_listing_empty_is_not_an_error(store):
    assert store.list_all() == []
    assert store.list_all_with_creator() == []
    assert store.list_by_creator(1) == []


def test_list_by_creator(store, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    store.create(new_room("a1", alice))
    store.create(new_room("b1", bob))
    store.create(new_room("a2", alice))

    assert [room.name for room in store.list_by_creator(alice.id)] == ["a1", "a2"]
    assert [room.name for room in store.list_all()] == ["a1", "b1", "a2"]
    assert [room.creator.username for room in store.list_all_with_creator()] == ["alice", "bob", "alice"]


def test_add_relation_checks_room_and_pair(store, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    room = store.create(new_room("lobby", alice))

    with pytest.raises(RoomNotFound):
        store.add_relation(RoomUserRelation(room_id=room.id + 1, user_id=bob.id))
    with pytest.raises(DuplicateRoom):
        store.add_relation(RoomUserRelation(room_id=room.id, user_id=alice.id))


def test_delete_relation(store, make_user):
    alice = make_user("alice")
    bob = make_user("bob")
    room = store.create(new_room("lobby", alice))
    store.add_relation(RoomUserRelation(room_id=room.id, user_id=bob.id))

    store.delete_relation(room.id, bob.id)
    with pytest.raises(RelationNotFound):
        store.delete_relation(room.id, bob.id)
    assert [r.user_id for r in store.list_relations(room.id)] == [alice.id]
