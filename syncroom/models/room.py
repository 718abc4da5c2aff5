from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel
from sqlalchemy import JSON, Column
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from .relation import RoomUserRelation
    from .user import User


class RoomSetting(BaseModel):
    hidden: bool = False


class RoomBase(SQLModel):
    name: str = Field(unique=True, index=True)


class Room(RoomBase, table=True):
    # ids are never handed out twice, even after a hard delete
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)
    hashed_password: bytes = Field(default=b"")
    creator_id: int | None = Field(default=None, foreign_key="user.id", index=True)
    setting: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    creator: Optional["User"] = Relationship()
    relations: list["RoomUserRelation"] = Relationship(back_populates="room")

    @property
    def need_password(self) -> bool:
        return len(self.hashed_password or b"") > 0

    @property
    def room_setting(self) -> RoomSetting:
        return RoomSetting.model_validate(self.setting or {})

    def created_at_ms(self) -> int:
        created_at = self.created_at
        if created_at.tzinfo is None:
            # SQLite hands timestamps back without a zone
            created_at = created_at.replace(tzinfo=timezone.utc)
        return int(created_at.timestamp() * 1000)
