import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from sqlalchemy.engine import Engine
from .auth.tokens import RoomTokenIssuer
from .config import ALGORITHM, LOG_LEVEL, ROOM_TOKEN_EXPIRE_MINUTES, SECRET_KEY
from .database import build_engine, create_db_and_tables
from .errors import RoomError
from .middleware import add_cors_middleware, room_error_handler
from .routers import auth_router, users_router, rooms_router
from .services import MembershipManager, RoomRuntime, RoomStore

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def create_app(engine: Engine | None = None, runtime: RoomRuntime | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not SECRET_KEY:
            raise ValueError("SECRET_KEY environment variable is required in production")
        db_engine = engine or build_engine()
        create_db_and_tables(db_engine)
        store = RoomStore(db_engine)
        app.state.engine = db_engine
        app.state.membership = MembershipManager(store)
        app.state.runtime = runtime or RoomRuntime()
        app.state.token_issuer = RoomTokenIssuer(SECRET_KEY, ALGORITHM, ROOM_TOKEN_EXPIRE_MINUTES)
        yield
        if engine is None:
            db_engine.dispose()
        logger.info("shutting down")

    app = FastAPI(lifespan=lifespan)
    app.add_middleware(add_cors_middleware)
    app.add_exception_handler(RoomError, room_error_handler)

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(rooms_router)
    return app


app = create_app()
