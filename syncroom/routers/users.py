from fastapi import APIRouter
from syncroom.auth.dependencies import CurrentUser
from syncroom.dependencies import MembershipDep
from syncroom.schemas import UserPublic

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me/", response_model=UserPublic)
async def read_current_user(current_user: CurrentUser):
    return current_user


@router.get("/me/rooms")
def read_current_user_rooms(current_user: CurrentUser, membership: MembershipDep):
    rooms = membership.store.list_by_creator(current_user.id)
    return [
        {"roomId": room.id, "roomName": room.name, "needPassword": room.need_password}
        for room in rooms
    ]
