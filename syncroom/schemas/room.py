from pydantic import BaseModel, ConfigDict, Field

from syncroom.models import ALL_PERMISSIONS, Permission, RoomRole, RoomSetting
from syncroom.services.listing import RoomSummary


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateRoomReq(CamelModel):
    room_name: str = Field(alias="roomName", min_length=1, max_length=64)
    password: str = Field(default="", max_length=72)
    setting: RoomSetting = Field(default_factory=RoomSetting)


class LoginRoomReq(CamelModel):
    room_id: int = Field(alias="roomId")
    password: str = ""


class SetRoomPasswordReq(CamelModel):
    password: str = Field(default="", max_length=72)


class SetUserPermissionReq(CamelModel):
    user_id: int = Field(alias="userId")
    permissions: int = Field(ge=0, le=int(ALL_PERMISSIONS))


class SetUserRoleReq(CamelModel):
    user_id: int = Field(alias="userId")
    role: RoomRole


class RoomTokenResp(CamelModel):
    room_id: int = Field(serialization_alias="roomId")
    token: str


class RoomListItem(CamelModel):
    room_id: int = Field(serialization_alias="roomId")
    room_name: str = Field(serialization_alias="roomName")
    people_num: int = Field(serialization_alias="peopleNum")
    need_password: bool = Field(serialization_alias="needPassword")
    creator: str
    created_at: int = Field(serialization_alias="createdAt")

    @classmethod
    def from_summary(cls, summary: RoomSummary) -> "RoomListItem":
        return cls(**summary.model_dump())


class RoomListResp(CamelModel):
    total: int
    list: list[RoomListItem]


class CheckRoomResp(CamelModel):
    people_num: int = Field(serialization_alias="peopleNum")
    need_password: bool = Field(serialization_alias="needPassword")


class RoomSettingResp(CamelModel):
    hidden: bool
    need_password: bool = Field(serialization_alias="needPassword")


class PermissionResp(CamelModel):
    user_id: int = Field(serialization_alias="userId")
    permissions: int

    @classmethod
    def build(cls, user_id: int, permissions: Permission) -> "PermissionResp":
        return cls(user_id=user_id, permissions=int(permissions))
