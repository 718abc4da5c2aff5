from .room_store import RoomStore
from .runtime import RoomRuntime
from .listing import RoomSummary, list_rooms, paginate, sort_rooms
from .membership import MembershipManager, with_creator, with_relations, with_setting

__all__ = [
    "RoomStore",
    "RoomRuntime",
    "RoomSummary",
    "list_rooms",
    "paginate",
    "sort_rooms",
    "MembershipManager",
    "with_creator",
    "with_relations",
    "with_setting",
]
