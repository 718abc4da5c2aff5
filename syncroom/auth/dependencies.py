from typing import Annotated
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer, OAuth2PasswordBearer
import jwt
from jwt.exceptions import InvalidTokenError
from sqlmodel import Session
from syncroom.config import SECRET_KEY, ALGORITHM
from syncroom.dependencies import SessionDep, TokenIssuerDep
from syncroom.errors import AuthFailed
from syncroom.models import Room, User
from syncroom.schemas import TokenData
from .tokens import ROOM_TOKEN_TYPE
from .utils import get_user_by_username

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")
room_token_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)], session: SessionDep
):
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        username = payload.get("sub")
        if username is None or payload.get("typ") == ROOM_TOKEN_TYPE:
            raise credentials_exception
        token_data = TokenData(username=username)
    except InvalidTokenError:
        raise credentials_exception
    user = get_user_by_username(session, username=token_data.username)
    if user is None:
        raise credentials_exception
    return user


async def get_current_active_user(
    current_user: Annotated[User, Depends(get_current_user)],
):
    if current_user.disabled:
        raise HTTPException(status_code=400, detail="Inactive user")
    return current_user


CurrentUser = Annotated[User, Depends(get_current_active_user)]


class RoomContext:
    def __init__(self, user: User, room: Room):
        self.user = user
        self.room = room


def _load_room_context(session: Session, user_id: int, room_id: int) -> RoomContext:
    user = session.get(User, user_id)
    if user is None or user.disabled:
        raise AuthFailed("invalid room token")
    room = session.get(Room, room_id)
    if room is None:
        raise AuthFailed("invalid room token")
    return RoomContext(user=user, room=room)


def get_current_room(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(room_token_scheme)],
    session: SessionDep,
    issuer: TokenIssuerDep,
) -> RoomContext:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Room token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user_id, room_id = issuer.decode(credentials.credentials)
    return _load_room_context(session, user_id, room_id)


CurrentRoom = Annotated[RoomContext, Depends(get_current_room)]
