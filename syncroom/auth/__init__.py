from .passwords import get_password_hash, hash_password, verify_password
from .tokens import RoomTokenIssuer, create_access_token
from .utils import authenticate_user, get_user_by_username

__all__ = [
    "get_password_hash",
    "hash_password",
    "verify_password",
    "RoomTokenIssuer",
    "create_access_token",
    "authenticate_user",
    "get_user_by_username",
]
