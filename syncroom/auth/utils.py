from sqlmodel import Session, select
from syncroom.models import User
from .passwords import verify_user_password


def get_user_by_username(session: Session, username: str):
    statement = select(User).where(User.username == username)
    user = session.exec(statement).first()
    return user


def authenticate_user(session: Session, username: str, password: str):
    user = get_user_by_username(session, username)
    if not user:
        return False
    if not verify_user_password(password, user.hashed_password):
        return False
    return user
