import os

os.environ.setdefault("DEV", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from syncroom.database import build_engine, create_db_and_tables
from syncroom.models import User
from syncroom.services import MembershipManager, RoomRuntime, RoomStore


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'rooms.db'}")
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return RoomStore(engine)


@pytest.fixture
def membership(store):
    return MembershipManager(store)


@pytest.fixture
def runtime():
    return RoomRuntime()


@pytest.fixture
def make_user(engine):
    def _make_user(username: str) -> User:
        with Session(engine, expire_on_commit=False) as session:
            user = User(username=username, hashed_password="not-used")
            session.add(user)
            session.commit()
            session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def client(engine, runtime):
    from syncroom.main import create_app

    with TestClient(create_app(engine=engine, runtime=runtime)) as c:
        yield c


@pytest.fixture
def login(client):
    def _login(username: str, password: str = "secret") -> dict:
        client.post("/register", json={"username": username, "password": password})
        resp = client.post("/token", data={"username": username, "password": password})
        assert resp.status_code == 200
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}

    return _login
