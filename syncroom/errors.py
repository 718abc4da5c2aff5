"""Typed failure conditions raised by the room core.

The store is the only place raw persistence signals get turned into these;
everything above it lets them propagate unchanged.
"""


class RoomError(Exception):
    kind = "Internal"
    default_message = "internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class DuplicateRoom(RoomError):
    kind = "DuplicateRoom"
    default_message = "room already exists"

    def __init__(self, message: str | None = None, room=None):
        super().__init__(message)
        # the constructed but unpersisted room, for diagnostics only
        self.room = room


class RoomNotFound(RoomError):
    kind = "RoomNotFound"
    default_message = "room not found"


class RelationNotFound(RoomError):
    kind = "RelationNotFound"
    default_message = "room or user not found"


class AuthFailed(RoomError):
    kind = "AuthFailed"
    default_message = "auth failed"


class BadRequest(RoomError):
    kind = "BadRequest"
    default_message = "bad request"


class Internal(RoomError):
    kind = "Internal"
    default_message = "internal error"


STATUS_CODES = {
    DuplicateRoom.kind: 409,
    RoomNotFound.kind: 404,
    RelationNotFound.kind: 404,
    AuthFailed.kind: 401,
    BadRequest.kind: 400,
    Internal.kind: 500,
}
