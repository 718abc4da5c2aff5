"""Ordering and pagination for the public room list.

Works purely on a snapshot of ``RoomSummary`` values; nothing in here
touches the store, so concurrent room changes cannot tear a listing.
"""
import re
from functools import cmp_to_key
from typing import Callable, Sequence, TypeVar

from pydantic import BaseModel

from syncroom.errors import BadRequest

T = TypeVar("T")

DEFAULT_SORT = "peopleNum"
DEFAULT_ORDER = "desc"
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# ASCII digit runs only; other Unicode digits stay in the text chunks
_CHUNK = re.compile(r"([0-9]+)")


class RoomSummary(BaseModel):
    room_id: int
    room_name: str
    people_num: int
    need_password: bool
    creator: str
    created_at: int


def natural_less(a: str, b: str) -> bool:
    """Compare strings treating runs of digits as numbers, so that
    "room2" < "room10"."""
    chunks_a = _CHUNK.split(a)
    chunks_b = _CHUNK.split(b)
    # split() alternates text and digit runs, so odd positions hold numbers
    for i, (x, y) in enumerate(zip(chunks_a, chunks_b)):
        if x == y:
            continue
        if i % 2:
            nx, ny = int(x), int(y)
            if nx != ny:
                return nx < ny
            # same value, fewer leading zeros first
            return len(x) < len(y)
        return x < y
    return len(chunks_a) < len(chunks_b)


Less = Callable[[RoomSummary, RoomSummary], bool]
Equal = Callable[[RoomSummary, RoomSummary], bool]

SORT_KEYS: dict[str, tuple[Less, Equal]] = {
    "peopleNum": (
        lambda a, b: a.people_num < b.people_num,
        lambda a, b: a.people_num == b.people_num,
    ),
    "creator": (
        lambda a, b: natural_less(a.creator, b.creator),
        lambda a, b: a.creator == b.creator,
    ),
    "createdAt": (
        lambda a, b: a.created_at < b.created_at,
        lambda a, b: a.created_at == b.created_at,
    ),
    "roomName": (
        lambda a, b: natural_less(a.room_name, b.room_name),
        lambda a, b: a.room_name == b.room_name,
    ),
    "roomId": (
        lambda a, b: a.room_id < b.room_id,
        lambda a, b: a.room_id == b.room_id,
    ),
    "needPassword": (
        lambda a, b: a.need_password and not b.need_password,
        lambda a, b: a.need_password == b.need_password,
    ),
}

ORDERS = ("asc", "desc")


def stable_sort(items: Sequence[T], less: Callable[[T, T], bool], equal: Callable[[T, T], bool]) -> list[T]:
    def compare(a, b):
        if equal(a, b):
            return 0
        return -1 if less(a, b) else 1

    # sorted() is stable, equal items keep their input order
    return sorted(items, key=cmp_to_key(compare))


def reverse_runs(items: Sequence[T], equal: Callable[[T, T], bool]) -> list[T]:
    """Reverse a sorted sequence run by run: groups of equal items swap
    places, items inside a group keep their order."""
    runs: list[list[T]] = []
    for item in items:
        if runs and equal(runs[-1][-1], item):
            runs[-1].append(item)
        else:
            runs.append([item])
    return [item for run in reversed(runs) for item in run]


def sort_rooms(
    rooms: Sequence[RoomSummary], sort: str = DEFAULT_SORT, order: str = DEFAULT_ORDER
) -> list[RoomSummary]:
    if sort not in SORT_KEYS:
        raise BadRequest(f"sort must be one of {', '.join(SORT_KEYS)}")
    if order not in ORDERS:
        raise BadRequest("order must be asc or desc")
    less, equal = SORT_KEYS[sort]
    result = stable_sort(rooms, less, equal)
    if order == "desc":
        result = reverse_runs(result, equal)
    return result


def paginate(items: Sequence[T], page: int = DEFAULT_PAGE, size: int = DEFAULT_PAGE_SIZE) -> list[T]:
    if page < 1:
        raise BadRequest("page must be greater than 0")
    if size < 1 or size > MAX_PAGE_SIZE:
        raise BadRequest(f"max must be between 1 and {MAX_PAGE_SIZE}")
    start = (page - 1) * size
    return list(items[start:start + size])


def list_rooms(
    rooms: Sequence[RoomSummary],
    sort: str = DEFAULT_SORT,
    order: str = DEFAULT_ORDER,
    page: int = DEFAULT_PAGE,
    size: int = DEFAULT_PAGE_SIZE,
) -> tuple[int, list[RoomSummary]]:
    """Sort then page a room snapshot. Returns the total count alongside the
    requested page."""
    ordered = sort_rooms(rooms, sort, order)
    return len(ordered), paginate(ordered, page, size)
