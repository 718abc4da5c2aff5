from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship, SQLModel

from .permission import Permission, RoomRole

if TYPE_CHECKING:
    from .room import Room


class RoomUserRelation(SQLModel, table=True):
    room_id: int | None = Field(default=None, foreign_key="room.id", primary_key=True)
    user_id: int = Field(foreign_key="user.id", primary_key=True)
    role: RoomRole = Field(default=RoomRole.MEMBER)
    permissions: int = Field(default=0)

    room: Optional["Room"] = Relationship(back_populates="relations")

    @property
    def permission(self) -> Permission:
        return Permission(self.permissions)
