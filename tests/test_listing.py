import pytest

from syncroom.errors import BadRequest
from syncroom.services.listing import (
    RoomSummary,
    list_rooms,
    natural_less,
    paginate,
    sort_rooms,
)


def summary(room_id, people_num=0, room_name=None, creator="alice", need_password=False, created_at=0):
    return RoomSummary(
        room_id=room_id,
        room_name=room_name or f"room{room_id}",
        people_num=people_num,
        need_password=need_password,
        creator=creator,
        created_at=created_at,
    )


def ids(rooms):
    return [room.room_id for room in rooms]


def test_people_num_sort_is_stable():
    rooms = [summary(1, 5), summary(2, 5), summary(3, 9)]
    assert ids(sort_rooms(rooms, "peopleNum", "asc")) == [1, 2, 3]


def test_descending_keeps_ties_in_input_order():
    rooms = [summary(1, 5), summary(2, 5), summary(3, 9)]
    assert ids(sort_rooms(rooms, "peopleNum", "desc")) == [3, 1, 2]


def test_defaults_are_people_num_descending():
    rooms = [summary(1, 1), summary(2, 7), summary(3, 3)]
    assert ids(sort_rooms(rooms)) == [2, 3, 1]


def test_room_name_uses_natural_order():
    rooms = [summary(1, room_name="room10"), summary(2, room_name="room2"), summary(3, room_name="room1")]
    assert ids(sort_rooms(rooms, "roomName", "asc")) == [3, 2, 1]


def test_creator_uses_natural_order():
    rooms = [summary(1, creator="user20"), summary(2, creator="user3"), summary(3, creator="admin")]
    assert ids(sort_rooms(rooms, "creator", "asc")) == [3, 2, 1]


def test_created_at_and_room_id():
    rooms = [summary(3, created_at=100), summary(1, created_at=300), summary(2, created_at=200)]
    assert ids(sort_rooms(rooms, "createdAt", "asc")) == [3, 2, 1]
    assert ids(sort_rooms(rooms, "roomId", "asc")) == [1, 2, 3]
    assert ids(sort_rooms(rooms, "roomId", "desc")) == [3, 2, 1]


def test_need_password_sorts_locked_rooms_first():
    rooms = [summary(1), summary(2, need_password=True), summary(3), summary(4, need_password=True)]
    assert ids(sort_rooms(rooms, "needPassword", "asc")) == [2, 4, 1, 3]
    assert ids(sort_rooms(rooms, "needPassword", "desc")) == [1, 3, 2, 4]


def test_unknown_sort_or_order_is_rejected():
    rooms = [summary(2, 1), summary(1, 2)]
    with pytest.raises(BadRequest):
        sort_rooms(rooms, "bogus", "asc")
    with pytest.raises(BadRequest):
        sort_rooms(rooms, "roomId", "sideways")
    assert ids(rooms) == [2, 1]


def test_natural_less():
    assert natural_less("a2", "a10")
    assert not natural_less("a10", "a2")
    assert natural_less("a", "a1")
    assert natural_less("abc", "abd")
    assert not natural_less("same", "same")
    assert natural_less("x1", "x01")


def test_natural_less_with_non_ascii_digits():
    assert natural_less("²", "³")
    assert not natural_less("³", "²")
    assert natural_less("room²", "room³")
    assert natural_less("room9", "room²")


def test_sort_handles_superscript_names():
    rooms = [summary(1, room_name="³"), summary(2, room_name="²"), summary(3, room_name="1")]
    assert ids(sort_rooms(rooms, "roomName", "asc")) == [3, 2, 1]
    assert ids(sort_rooms(rooms, "roomName", "desc")) == [1, 2, 3]

    rooms = [summary(1, creator="³"), summary(2, creator="²")]
    assert ids(sort_rooms(rooms, "creator", "asc")) == [2, 1]


def test_paginate():
    items = list(range(25))
    assert paginate(items, 1, 10) == list(range(10))
    assert paginate(items, 3, 10) == [20, 21, 22, 23, 24]
    assert paginate(items, 4, 10) == []


def test_paginate_bounds():
    with pytest.raises(BadRequest):
        paginate([1, 2], 0, 10)
    with pytest.raises(BadRequest):
        paginate([1, 2], 1, 0)
    with pytest.raises(BadRequest):
        paginate([1, 2], 1, 1000)


def test_list_rooms_reports_total():
    rooms = [summary(i, people_num=i) for i in range(1, 6)]
    total, page = list_rooms(rooms, "peopleNum", "desc", page=2, size=2)
    assert total == 5
    assert ids(page) == [3, 2]
