from dataclasses import dataclass
import logging

import bcrypt
from passlib.context import CryptContext

from syncroom.config import BCRYPT_ROUNDS
from syncroom.errors import Internal

logger = logging.getLogger(__name__)


# https://github.com/pyca/bcrypt/issues/684#issuecomment-2430047176
@dataclass
class SolveBugBcryptWarning:
    __version__: str = getattr(bcrypt, "__version__")


setattr(bcrypt, "__about__", SolveBugBcryptWarning())
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS
)


def hash_password(password: str) -> bytes:
    """Hash a room password. An empty password means "no password" and
    hashes to an empty byte string."""
    if not password:
        return b""
    try:
        return pwd_context.hash(password).encode("ascii")
    except (ValueError, TypeError, MemoryError) as e:
        logger.error("Failed to hash room password", exc_info=True)
        raise Internal("failed to hash password") from e


def verify_password(hashed_password: bytes, candidate: str) -> bool:
    if not hashed_password:
        return not candidate
    if not candidate:
        return False
    try:
        return pwd_context.verify(candidate, hashed_password.decode("ascii"))
    except ValueError:
        # malformed stored hash
        logger.warning("Stored room password hash could not be parsed")
        return False


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_user_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)
