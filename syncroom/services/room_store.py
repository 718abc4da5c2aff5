import logging
from contextlib import contextmanager

from sqlalchemy import delete, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from syncroom.errors import BadRequest, DuplicateRoom, Internal, RelationNotFound, RoomNotFound
from syncroom.models import ALL_PERMISSIONS, Permission, Room, RoomRole, RoomUserRelation

logger = logging.getLogger(__name__)

ROOM_NOT_FOUND = "room not found"
RELATION_NOT_FOUND = "room or user not found"


def _checked_mask(permissions: int) -> int:
    mask = int(permissions)
    if mask < 0 or mask & ~int(ALL_PERMISSIONS):
        raise BadRequest("unknown permission bits")
    return mask


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    # psycopg exposes the SQLSTATE, sqlite only a message
    if getattr(orig, "pgcode", None) == "23505" or getattr(orig, "sqlstate", None) == "23505":
        return True
    return "UNIQUE" in str(orig).upper()


class RoomStore:
    """Atomic create/read/update/delete over rooms and their user relations.

    This is the one place where persistence signals become typed errors:
    a missing row raises RoomNotFound or RelationNotFound, a uniqueness
    violation raises DuplicateRoom, anything else raises Internal. Nothing
    here retries.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @contextmanager
    def _session(self):
        try:
            with Session(self.engine, expire_on_commit=False) as session:
                yield session
        except SQLAlchemyError as e:
            logger.error("Room store I/O failure", exc_info=True)
            raise Internal("storage failure") from e

    # rooms

    def create(self, room: Room) -> Room:
        """Insert a room together with any relations attached to it, in one
        transaction."""
        try:
            with Session(self.engine, expire_on_commit=False) as session:
                session.add(room)
                session.commit()
                session.refresh(room)
                # load relations while the session is still open
                _ = list(room.relations)
        except IntegrityError as e:
            if _is_unique_violation(e):
                logger.info(f"Room name {room.name!r} already taken")
                raise DuplicateRoom(room=room) from e
            logger.error("Integrity failure while creating room", exc_info=True)
            raise Internal("storage failure") from e
        except SQLAlchemyError as e:
            logger.error("Room store I/O failure", exc_info=True)
            raise Internal("storage failure") from e
        logger.info(f"Room {room.id} created: name={room.name!r}, creator={room.creator_id}")
        return room

    def get_by_id(self, room_id: int) -> Room:
        with self._session() as session:
            room = session.get(Room, room_id)
        if room is None:
            raise RoomNotFound(ROOM_NOT_FOUND)
        return room

    def get_by_id_with_creator(self, room_id: int) -> Room:
        with self._session() as session:
            statement = (
                select(Room).options(selectinload(Room.creator)).where(Room.id == room_id)
            )
            room = session.exec(statement).first()
        if room is None:
            raise RoomNotFound(ROOM_NOT_FOUND)
        return room

    def update_setting(self, room_id: int, setting: dict) -> None:
        self._update_room(room_id, setting=setting)

    def update_hashed_password(self, room_id: int, hashed_password: bytes) -> None:
        self._update_room(room_id, hashed_password=hashed_password)

    def _update_room(self, room_id: int, **values) -> None:
        with self._session() as session:
            result = session.exec(update(Room).where(Room.id == room_id).values(**values))
            matched = result.rowcount
            session.commit()
        if matched == 0:
            raise RoomNotFound(ROOM_NOT_FOUND)

    def delete(self, room_id: int) -> None:
        """Hard delete a room and every relation pointing at it. Irreversible."""
        with self._session() as session:
            session.exec(delete(RoomUserRelation).where(RoomUserRelation.room_id == room_id))
            result = session.exec(delete(Room).where(Room.id == room_id))
            if result.rowcount == 0:
                session.rollback()
                raise RoomNotFound(ROOM_NOT_FOUND)
            session.commit()
        logger.info(f"Room {room_id} deleted")

    def exists(self, room_id: int) -> bool:
        with self._session() as session:
            return session.exec(select(Room.id).where(Room.id == room_id)).first() is not None

    def exists_by_name(self, name: str) -> bool:
        with self._session() as session:
            return session.exec(select(Room.id).where(Room.name == name)).first() is not None

    def list_all(self) -> list[Room]:
        with self._session() as session:
            return list(session.exec(select(Room).order_by(Room.id)).all())

    def list_all_with_creator(self) -> list[Room]:
        with self._session() as session:
            statement = select(Room).options(selectinload(Room.creator)).order_by(Room.id)
            return list(session.exec(statement).all())

    def list_by_creator(self, user_id: int) -> list[Room]:
        with self._session() as session:
            statement = select(Room).where(Room.creator_id == user_id).order_by(Room.id)
            return list(session.exec(statement).all())

    # relations

    def get_relation(self, room_id: int, user_id: int) -> RoomUserRelation:
        with self._session() as session:
            relation = session.get(RoomUserRelation, (room_id, user_id))
        if relation is None:
            raise RelationNotFound(RELATION_NOT_FOUND)
        return relation

    def get_permission(self, room_id: int, user_id: int) -> Permission:
        return self.get_relation(room_id, user_id).permission

    def update_permission(self, room_id: int, user_id: int, permissions: int) -> None:
        self._update_relation(room_id, user_id, permissions=_checked_mask(permissions))

    def update_role(self, room_id: int, user_id: int, role: RoomRole, permissions: int) -> None:
        self._update_relation(room_id, user_id, role=role, permissions=_checked_mask(permissions))

    def _update_relation(self, room_id: int, user_id: int, **values) -> None:
        with self._session() as session:
            statement = (
                update(RoomUserRelation)
                .where(RoomUserRelation.room_id == room_id, RoomUserRelation.user_id == user_id)
                .values(**values)
            )
            matched = session.exec(statement).rowcount
            session.commit()
        if matched == 0:
            raise RelationNotFound(RELATION_NOT_FOUND)

    def add_relation(self, relation: RoomUserRelation) -> RoomUserRelation:
        try:
            with Session(self.engine, expire_on_commit=False) as session:
                if session.get(Room, relation.room_id) is None:
                    raise RoomNotFound(ROOM_NOT_FOUND)
                session.add(relation)
                session.commit()
        except IntegrityError as e:
            if _is_unique_violation(e):
                raise DuplicateRoom("user already belongs to this room") from e
            # foreign key on user_id
            raise RelationNotFound(RELATION_NOT_FOUND) from e
        except SQLAlchemyError as e:
            logger.error("Room store I/O failure", exc_info=True)
            raise Internal("storage failure") from e
        return relation

    def delete_relation(self, room_id: int, user_id: int) -> None:
        with self._session() as session:
            statement = delete(RoomUserRelation).where(
                RoomUserRelation.room_id == room_id, RoomUserRelation.user_id == user_id
            )
            matched = session.exec(statement).rowcount
            session.commit()
        if matched == 0:
            raise RelationNotFound(RELATION_NOT_FOUND)

    def list_relations(self, room_id: int) -> list[RoomUserRelation]:
        with self._session() as session:
            statement = (
                select(RoomUserRelation)
                .where(RoomUserRelation.room_id == room_id)
                .order_by(RoomUserRelation.user_id)
            )
            return list(session.exec(statement).all())
