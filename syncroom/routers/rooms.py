import logging
from typing import Annotated
from fastapi import APIRouter, HTTPException, Query, Response, status

from syncroom.auth.dependencies import CurrentRoom, CurrentUser
from syncroom.dependencies import MembershipDep, RuntimeDep, TokenIssuerDep
from syncroom.errors import AuthFailed, RelationNotFound, RoomNotFound
from syncroom.models import Permission, RoomSetting
from syncroom.schemas import (
    CheckRoomResp,
    CreateRoomReq,
    LoginRoomReq,
    PermissionResp,
    RoomListItem,
    RoomListResp,
    RoomSettingResp,
    RoomTokenResp,
    SetRoomPasswordReq,
    SetUserPermissionReq,
    SetUserRoleReq,
)
from syncroom.services import list_rooms, with_creator, with_setting
from syncroom.services.listing import DEFAULT_ORDER, DEFAULT_PAGE, DEFAULT_PAGE_SIZE, DEFAULT_SORT

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/room", tags=["rooms"])


def require_permission(membership, ctx, permission: Permission, detail: str):
    try:
        allowed = membership.check_permission(ctx.room.id, ctx.user.id, permission)
    except RelationNotFound:
        allowed = False
    if not allowed:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


@router.post("/create", status_code=status.HTTP_201_CREATED, response_model=RoomTokenResp)
def create_room(
    req: CreateRoomReq,
    current_user: CurrentUser,
    membership: MembershipDep,
    issuer: TokenIssuerDep,
):
    room = membership.create_room(
        req.room_name,
        req.password,
        with_setting(req.setting),
        with_creator(current_user),
    )
    token = issuer.issue(current_user.id, room.id)
    return RoomTokenResp(room_id=room.id, token=token)


@router.get("/list", response_model=RoomListResp)
def room_list(
    membership: MembershipDep,
    runtime: RuntimeDep,
    sort: str = DEFAULT_SORT,
    order: str = DEFAULT_ORDER,
    page: int = Query(DEFAULT_PAGE),
    max: int = Query(DEFAULT_PAGE_SIZE),
):
    snapshot = membership.room_summaries(runtime)
    total, items = list_rooms(snapshot, sort=sort, order=order, page=page, size=max)
    return RoomListResp(total=total, list=[RoomListItem.from_summary(item) for item in items])


@router.get("/check", response_model=CheckRoomResp)
def check_room(
    membership: MembershipDep,
    runtime: RuntimeDep,
    room_id: Annotated[int, Query(alias="roomId")],
):
    room = membership.store.get_by_id(room_id)
    return CheckRoomResp(people_num=runtime.client_num(room.id), need_password=room.need_password)


@router.post("/login", response_model=RoomTokenResp)
def login_room(
    req: LoginRoomReq,
    current_user: CurrentUser,
    membership: MembershipDep,
    issuer: TokenIssuerDep,
):
    try:
        room = membership.verify_and_enter(current_user, req.room_id, req.password)
    except (RoomNotFound, AuthFailed) as e:
        logger.info(f"Room login refused for user {current_user.id}: {e.kind}")
        # both cases look the same from outside
        raise AuthFailed() from e
    token = issuer.issue(current_user.id, room.id)
    return RoomTokenResp(room_id=room.id, token=token)


@router.post("/delete", status_code=status.HTTP_204_NO_CONTENT)
def delete_room(ctx: CurrentRoom, membership: MembershipDep, runtime: RuntimeDep):
    require_permission(membership, ctx, Permission.DELETE_ROOM, "you don't have permission to delete room")
    membership.delete_room(ctx.room.id)
    runtime.forget(ctx.room.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/pwd", response_model=RoomTokenResp)
def set_room_password(
    req: SetRoomPasswordReq,
    ctx: CurrentRoom,
    membership: MembershipDep,
    issuer: TokenIssuerDep,
):
    require_permission(
        membership, ctx, Permission.SET_ROOM_PASSWORD, "you don't have permission to set room password"
    )
    membership.set_password(ctx.room.id, req.password)
    token = issuer.issue(ctx.user.id, ctx.room.id)
    return RoomTokenResp(room_id=ctx.room.id, token=token)


@router.get("/setting", response_model=RoomSettingResp)
def room_setting(ctx: CurrentRoom):
    return RoomSettingResp(hidden=ctx.room.room_setting.hidden, need_password=ctx.room.need_password)


@router.post("/setting", response_model=RoomSettingResp)
def change_room_setting(setting: RoomSetting, ctx: CurrentRoom, membership: MembershipDep):
    require_permission(
        membership, ctx, Permission.SET_ROOM_SETTING, "you don't have permission to change room setting"
    )
    membership.change_setting(ctx.room.id, setting)
    return RoomSettingResp(hidden=setting.hidden, need_password=ctx.room.need_password)


@router.post("/permission", response_model=PermissionResp)
def set_user_permission(req: SetUserPermissionReq, ctx: CurrentRoom, membership: MembershipDep):
    require_permission(
        membership, ctx, Permission.SET_USER_PERMISSION, "you don't have permission to set user permission"
    )
    membership.change_permission(ctx.room.id, req.user_id, req.permissions, actor_id=ctx.user.id)
    return PermissionResp.build(req.user_id, membership.get_permission(ctx.room.id, req.user_id))


@router.post("/role", response_model=PermissionResp)
def set_user_role(req: SetUserRoleReq, ctx: CurrentRoom, membership: MembershipDep):
    require_permission(membership, ctx, Permission.SET_ADMIN, "you don't have permission to set user role")
    relation = membership.grant_role(ctx.room.id, req.user_id, req.role)
    return PermissionResp.build(req.user_id, relation.permission)
