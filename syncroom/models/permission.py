from enum import IntEnum, IntFlag
from types import MappingProxyType


class Permission(IntFlag):
    NONE = 0
    RENAME_ROOM = 1 << 0
    SET_ADMIN = 1 << 1
    SET_ROOM_PASSWORD = 1 << 2
    SET_ROOM_SETTING = 1 << 3
    SET_USER_PERMISSION = 1 << 4
    CREATE_MOVIE = 1 << 5
    EDIT_USER_MOVIES = 1 << 6
    DELETE_USER_MOVIES = 1 << 7
    CHANGE_CURRENT_MOVIE = 1 << 8
    CHANGE_MOVIE_STATUS = 1 << 9
    DELETE_ROOM = 1 << 10


ALL_PERMISSIONS = (
    Permission.RENAME_ROOM
    | Permission.SET_ADMIN
    | Permission.SET_ROOM_PASSWORD
    | Permission.SET_ROOM_SETTING
    | Permission.SET_USER_PERMISSION
    | Permission.CREATE_MOVIE
    | Permission.EDIT_USER_MOVIES
    | Permission.DELETE_USER_MOVIES
    | Permission.CHANGE_CURRENT_MOVIE
    | Permission.CHANGE_MOVIE_STATUS
    | Permission.DELETE_ROOM
)

DEFAULT_MEMBER_PERMISSIONS = (
    Permission.CREATE_MOVIE
    | Permission.CHANGE_CURRENT_MOVIE
    | Permission.CHANGE_MOVIE_STATUS
)

DEFAULT_ADMIN_PERMISSIONS = (
    DEFAULT_MEMBER_PERMISSIONS
    | Permission.RENAME_ROOM
    | Permission.SET_ROOM_SETTING
    | Permission.SET_USER_PERMISSION
    | Permission.EDIT_USER_MOVIES
    | Permission.DELETE_USER_MOVIES
)


class RoomRole(IntEnum):
    MEMBER = 1
    ADMIN = 2
    CREATOR = 3


ROLE_PRESETS = MappingProxyType({
    RoomRole.CREATOR: ALL_PERMISSIONS,
    RoomRole.ADMIN: DEFAULT_ADMIN_PERMISSIONS,
    RoomRole.MEMBER: DEFAULT_MEMBER_PERMISSIONS,
})


def has(mask: int, bit: int) -> bool:
    return mask & bit == bit
