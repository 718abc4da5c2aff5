import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
from .errors import STATUS_CODES, Internal, RoomError

logger = logging.getLogger(__name__)


def add_cors_middleware(app):
    return CORSMiddleware(
        app=app,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


async def room_error_handler(request: Request, exc: RoomError):
    if isinstance(exc, Internal):
        logger.error(f"Internal error on {request.url.path}: {exc.message}", exc_info=exc)
    else:
        logger.info(f"{exc.kind} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=STATUS_CODES.get(exc.kind, 500), content=exc.to_dict())
