from dotenv import load_dotenv

import os

load_dotenv()

DEV = os.environ.get("DEV", "true").lower() == "true"

SECRET_KEY = os.getenv("SECRET_KEY") or ("dev-only-secret-key-change-me-in-production" if DEV else None)
ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
ROOM_TOKEN_EXPIRE_MINUTES = int(os.getenv("ROOM_TOKEN_EXPIRE_MINUTES", "4320"))

# bcrypt cost factor for room and user passwords
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

SQLITE_URL = os.environ.get("SQLITE_URL", "sqlite:///./syncroom.db")
POSTGRES_URL = os.environ.get("POSTGRES_URL")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
