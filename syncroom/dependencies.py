from typing import Annotated
from fastapi import Depends, Request
from sqlmodel import Session
from .auth.tokens import RoomTokenIssuer
from .services import MembershipManager, RoomRuntime


# everything below is built once in the app lifespan and kept on app.state

def get_session(request: Request):
    with Session(request.app.state.engine) as session:
        yield session


def get_membership(request: Request) -> MembershipManager:
    return request.app.state.membership


def get_runtime(request: Request) -> RoomRuntime:
    return request.app.state.runtime


def get_token_issuer(request: Request) -> RoomTokenIssuer:
    return request.app.state.token_issuer


SessionDep = Annotated[Session, Depends(get_session)]
MembershipDep = Annotated[MembershipManager, Depends(get_membership)]
RuntimeDep = Annotated[RoomRuntime, Depends(get_runtime)]
TokenIssuerDep = Annotated[RoomTokenIssuer, Depends(get_token_issuer)]
