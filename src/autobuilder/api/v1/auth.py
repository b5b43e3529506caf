"""Authentication endpoints - register, login, profile."""

from fastapi import APIRouter, status
from starlette.requests import Request

from src.autobuilder.api.dependencies import AuthServiceDep, RequiredIdentity, UserServiceDep
from src.autobuilder.core.rate_limit import limiter
from src.autobuilder.schemas.auth import AuthData, LoginRequest, RegisterRequest
from src.autobuilder.schemas.envelope import SuccessResponse
from src.autobuilder.schemas.user import UserData, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=SuccessResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Validation failed"},
        409: {"description": "User already exists"},
        429: {"description": "Too many registration attempts"},
    },
)
@limiter.limit("3/minute")
async def register(
    request: Request, data: RegisterRequest, service: AuthServiceDep
) -> SuccessResponse[AuthData]:
    """Create an account and return it with an access token."""
    user, token = await service.register(data.name, data.email, data.password)
    return SuccessResponse(
        data=AuthData(user=UserRead.model_validate(user), token=token),
        message="User registered successfully",
    )


@router.post(
    "/login",
    response_model=SuccessResponse[AuthData],
    responses={
        200: {
            "description": "Successful authentication",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": {
                            "user": {"email": "demo@blockchainai.dev", "name": "Demo User"},
                            "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            "token_type": "bearer",
                        },
                        "message": "Login successful",
                    }
                }
            },
        },
        401: {"description": "Invalid credentials"},
    },
)
@limiter.limit("5/minute")
async def login(
    request: Request, data: LoginRequest, service: AuthServiceDep
) -> SuccessResponse[AuthData]:
    user, token = await service.authenticate(data.email, data.password)
    return SuccessResponse(
        data=AuthData(user=UserRead.model_validate(user), token=token),
        message="Login successful",
    )


@router.get(
    "/profile",
    response_model=SuccessResponse[UserData],
    responses={401: {"description": "Missing or invalid token"}},
)
async def profile(identity: RequiredIdentity, service: UserServiceDep) -> SuccessResponse[UserData]:
    """Return the account behind the access token."""
    user = await service.get(identity.user_id)
    return SuccessResponse(data=UserData(user=UserRead.model_validate(user)))
