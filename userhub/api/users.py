# userhub/api/users.py

from fastapi import APIRouter, Depends, Response, status

from userhub.api.auth import require_admin
from userhub.api.deps import get_user_service, unwrap
from userhub.api.schemas import UserResponse
from userhub.core.entities import User
from userhub.services.users import UserService


# -------------------------------
# Admin-only User Endpoints
# -------------------------------

router = APIRouter(prefix="/users", dependencies=[Depends(require_admin)])


@router.get("/list", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)):
    return [UserResponse.from_user(user) async for user in service.find_all()]


@router.get("/{id}", response_model=UserResponse)
async def get_user(id: str, service: UserService = Depends(get_user_service)):
    """
    Returns a single user. 404 if the id is unknown.
    """
    return UserResponse.from_user(unwrap(await service.find_by_id(id)))


@router.delete("/{id}", response_model=UserResponse)
async def delete_user(id: str, service: UserService = Depends(get_user_service)):
    """
    Deletes the user and returns it, or answers 204 when nothing was deleted.
    """
    user: User | None = await service.delete(id)
    if user is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return UserResponse.from_user(user)
