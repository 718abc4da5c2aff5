from .user import User, UserBase
from .room import Room, RoomBase, RoomSetting
from .relation import RoomUserRelation
from .permission import (
    ALL_PERMISSIONS,
    ROLE_PRESETS,
    Permission,
    RoomRole,
    has,
)

__all__ = [
    "User",
    "UserBase",
    "Room",
    "RoomBase",
    "RoomSetting",
    "RoomUserRelation",
    "Permission",
    "RoomRole",
    "ALL_PERMISSIONS",
    "ROLE_PRESETS",
    "has",
]
