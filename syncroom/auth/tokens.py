from datetime import datetime, timedelta, timezone
import logging

import jwt
from jwt.exceptions import InvalidTokenError

from syncroom.errors import AuthFailed, Internal

logger = logging.getLogger(__name__)

ROOM_TOKEN_TYPE = "room"


class RoomTokenIssuer:
    """Issues bearer tokens scoped to one (user, room) pair.

    Only call ``issue`` once the user has been let into the room, either by
    creating it or by passing ``MembershipManager.verify_and_enter``.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 4320):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, user_id: int, room_id: int) -> str:
        expire = datetime.now(timezone.utc) + timedelta(minutes=self.expire_minutes)
        to_encode = {"sub": str(user_id), "room_id": room_id, "typ": ROOM_TOKEN_TYPE, "exp": expire}
        try:
            return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
        except (TypeError, ValueError, jwt.PyJWTError) as e:
            logger.error(f"Failed to issue room token for user {user_id} room {room_id}", exc_info=True)
            raise Internal("failed to issue room token") from e

    def decode(self, token: str) -> tuple[int, int]:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            if payload.get("typ") != ROOM_TOKEN_TYPE:
                raise AuthFailed("not a room token")
            user_id = int(payload["sub"])
            room_id = int(payload["room_id"])
        except (InvalidTokenError, KeyError, TypeError, ValueError) as e:
            raise AuthFailed("invalid room token") from e
        return user_id, room_id


def create_access_token(
    data: dict,
    secret_key: str,
    algorithm: str,
    expires_delta: timedelta | None = None,
):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=120)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, secret_key, algorithm=algorithm)
    return encoded_jwt
