"""
Authentication endpoints.

Tokens are stateless JWTs; logging out means the client discards its token.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_authenticate_user_use_case, get_current_user
from src.application.dto.requests import LoginRequest
from src.application.dto.responses import LoginResponse, MessageResponse, UserResponse
from src.application.use_cases.authenticate_user import AuthenticateUserUseCase
from src.core.entities.user import User

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/auth/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    use_case: AuthenticateUserUseCase = Depends(get_authenticate_user_use_case),
) -> LoginResponse:
    """Exchange email and password for a bearer token."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post("/auth/logout", response_model=MessageResponse)
async def logout() -> MessageResponse:
    return MessageResponse(message="Logged out")


@router.get("/user", response_model=UserResponse)
async def current_user(user: User = Depends(get_current_user)) -> UserResponse:
    """The user the bearer token belongs to."""
    return UserResponse.from_entity(user)
