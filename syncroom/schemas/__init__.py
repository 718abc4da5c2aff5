from .user import Token, TokenData, UserCreate, UserPublic
from .room import (
    CheckRoomResp,
    CreateRoomReq,
    LoginRoomReq,
    PermissionResp,
    RoomListItem,
    RoomListResp,
    RoomSettingResp,
    RoomTokenResp,
    SetRoomPasswordReq,
    SetUserPermissionReq,
    SetUserRoleReq,
)

__all__ = [
    "Token",
    "TokenData",
    "UserCreate",
    "UserPublic",
    "CheckRoomResp",
    "CreateRoomReq",
    "LoginRoomReq",
    "PermissionResp",
    "RoomListItem",
    "RoomListResp",
    "RoomSettingResp",
    "RoomTokenResp",
    "SetRoomPasswordReq",
    "SetUserPermissionReq",
    "SetUserRoleReq",
]
