import logging
from typing import Callable, Iterable

from syncroom.auth.passwords import hash_password, verify_password
from syncroom.errors import AuthFailed, BadRequest, DuplicateRoom, RelationNotFound
from syncroom.models import (
    ALL_PERMISSIONS,
    ROLE_PRESETS,
    Permission,
    Room,
    RoomRole,
    RoomSetting,
    RoomUserRelation,
    User,
    has,
)
from .room_store import RoomStore
from .runtime import RoomRuntime
from .listing import RoomSummary

logger = logging.getLogger(__name__)

RoomModifier = Callable[[Room], Room]


def with_setting(setting: RoomSetting | dict) -> RoomModifier:
    def apply(room: Room) -> Room:
        if isinstance(setting, RoomSetting):
            room.setting = setting.model_dump()
        else:
            room.setting = RoomSetting.model_validate(setting).model_dump()
        return room

    return apply


def with_creator(creator: User) -> RoomModifier:
    """Make ``creator`` the owner of the room. Replaces any relations set by
    earlier modifiers with the single creator relation."""

    def apply(room: Room) -> Room:
        room.creator_id = creator.id
        room.relations = [
            RoomUserRelation(
                user_id=creator.id,
                role=RoomRole.CREATOR,
                permissions=int(ALL_PERMISSIONS),
            )
        ]
        return room

    return apply


def with_relations(relations: Iterable[RoomUserRelation]) -> RoomModifier:
    def apply(room: Room) -> Room:
        room.relations = list(room.relations) + list(relations)
        return room

    return apply


def _check_relations(room: Room) -> None:
    creators = [r for r in room.relations if r.role == RoomRole.CREATOR]
    if room.creator_id is None or len(creators) != 1:
        raise BadRequest("a room needs exactly one creator")
    if creators[0].user_id != room.creator_id:
        raise BadRequest("creator relation does not match the room creator")
    user_ids = [r.user_id for r in room.relations]
    if len(user_ids) != len(set(user_ids)):
        raise BadRequest("a user can hold only one relation per room")


class MembershipManager:
    """Room creation, entry and permission management on top of a RoomStore.

    Mutating operations other than creation trust that the caller already
    checked the acting user's permissions.
    """

    def __init__(self, store: RoomStore):
        self.store = store

    def create_room(self, name: str, password: str, *modifiers: RoomModifier) -> Room:
        name = (name or "").strip()
        if not name:
            raise BadRequest("room name is required")
        room = Room(name=name, hashed_password=hash_password(password))
        for modifier in modifiers:
            room = modifier(room)
        _check_relations(room)
        try:
            return self.store.create(room)
        except DuplicateRoom as e:
            if e.room is None:
                e.room = room
            raise

    def verify_and_enter(self, user: User, room_id: int, password: str) -> Room:
        room = self.store.get_by_id(room_id)
        if room.need_password and not verify_password(room.hashed_password, password):
            logger.info(f"User {user.id} failed password check for room {room_id}")
            raise AuthFailed("password incorrect")
        return room

    def set_password(self, room_id: int, password: str) -> None:
        self.store.update_hashed_password(room_id, hash_password(password))

    def change_setting(self, room_id: int, setting: RoomSetting) -> None:
        self.store.update_setting(room_id, setting.model_dump())

    def delete_room(self, room_id: int) -> None:
        self.store.delete(room_id)

    def change_permission(
        self, room_id: int, user_id: int, permissions: int, actor_id: int | None = None
    ) -> None:
        """Overwrite a member's permission mask.

        The creator's mask is fixed. When ``actor_id`` is given, every bit
        that flips must be one the actor holds.
        """
        permissions = int(permissions)
        if permissions < 0 or permissions & ~int(ALL_PERMISSIONS):
            raise BadRequest("unknown permission bits")
        target = self.store.get_relation(room_id, user_id)
        if target.role == RoomRole.CREATOR:
            raise BadRequest("cannot change the permissions of the room creator")
        if actor_id is not None:
            held = self.store.get_permission(room_id, actor_id)
            if (target.permissions ^ permissions) & ~int(held):
                raise BadRequest("cannot grant or revoke permissions you do not hold")
        self.store.update_permission(room_id, user_id, permissions)

    def check_permission(self, room_id: int, user_id: int, permission: Permission) -> bool:
        return has(self.store.get_permission(room_id, user_id), permission)

    def get_permission(self, room_id: int, user_id: int) -> Permission:
        return self.store.get_permission(room_id, user_id)

    def grant_role(self, room_id: int, user_id: int, role: RoomRole) -> RoomUserRelation:
        """Give a user a non-creator role, resetting their permissions to the
        role preset. Adds the relation if the user has none yet."""
        if role == RoomRole.CREATOR:
            raise BadRequest("a room has exactly one creator")
        permissions = int(ROLE_PRESETS[role])
        try:
            current = self.store.get_relation(room_id, user_id)
        except RelationNotFound:
            return self.store.add_relation(
                RoomUserRelation(room_id=room_id, user_id=user_id, role=role, permissions=permissions)
            )
        if current.role == RoomRole.CREATOR:
            raise BadRequest("cannot change the role of the room creator")
        self.store.update_role(room_id, user_id, role, permissions)
        current.role = role
        current.permissions = permissions
        return current

    def remove_user(self, room_id: int, user_id: int) -> None:
        relation = self.store.get_relation(room_id, user_id)
        if relation.role == RoomRole.CREATOR:
            raise BadRequest("cannot remove the room creator")
        self.store.delete_relation(room_id, user_id)

    def room_summaries(self, runtime: RoomRuntime) -> list[RoomSummary]:
        """Snapshot of every visible room, read from the store exactly once."""
        summaries = []
        for room in self.store.list_all_with_creator():
            if room.room_setting.hidden:
                continue
            summaries.append(
                RoomSummary(
                    room_id=room.id,
                    room_name=room.name,
                    people_num=runtime.client_num(room.id),
                    need_password=room.need_password,
                    creator=room.creator.username if room.creator else "",
                    created_at=room.created_at_ms(),
                )
            )
        return summaries
