"""
User management endpoints (admin only).
"""

from fastapi import APIRouter, Depends, Response, status

from src.api.dependencies import (
    get_create_user_use_case,
    get_delete_user_use_case,
    get_users,
    require_permission,
)
from src.application.dto.requests import CreateUserRequest
from src.application.dto.responses import UserResponse
from src.application.use_cases.manage_users import CreateUserUseCase, DeleteUserUseCase
from src.core.entities.user import Actor
from src.core.interfaces import IUserStore
from src.core.services.access_policy import Permission

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get(
    "",
    response_model=list[UserResponse],
    dependencies=[Depends(require_permission(Permission.MANAGE_USERS))],
)
async def list_users(
    store: IUserStore = Depends(get_users),
) -> list[UserResponse]:
    return [UserResponse.from_entity(u) for u in await store.list_users()]


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission(Permission.MANAGE_USERS))],
)
async def create_user(
    request: CreateUserRequest,
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
) -> UserResponse:
    """Create a user; 409 when the email is taken."""
    user = await use_case.execute(request)
    return use_case.to_response(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int,
    actor: Actor = Depends(require_permission(Permission.MANAGE_USERS)),
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
) -> Response:
    """Delete a user who never recorded a movement (409 otherwise)."""
    await use_case.execute(user_id, actor)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
