"""Users resource router.

Endpoints:
    POST /api/v1/users - Create user (registration)
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.application.commands.auth_commands import RegisterUser
from src.application.commands.handlers.register_user_handler import RegisterUserHandler
from src.core.container import get_register_user_handler
from src.core.result import Failure, Success
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.auth_schemas import UserCreateRequest, UserCreateResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserCreateResponse,
    responses={
        400: {"description": "Invalid username or weak password", "model": ProblemDetails},
        409: {"description": "Email or username already taken", "model": ProblemDetails},
    },
    summary="Create user",
    description="Register a new account and send a verification email.",
)
async def create_user(
    request: Request,
    data: UserCreateRequest,
    handler: RegisterUserHandler = Depends(get_register_user_handler),
) -> UserCreateResponse | JSONResponse:
    """Create a new user (registration).

    POST /api/v1/users → 201 Created

    Args:
        request: FastAPI request object.
        data: Registration data (email, username, password, display_name).
        handler: Registration handler (injected).

    Returns:
        UserCreateResponse on success (201 Created).
        JSONResponse with error on failure (400/409).
    """
    command = RegisterUser(
        email=data.email,
        username=data.username,
        password=data.password,
        display_name=data.display_name,
    )

    match await handler.handle(command):
        case Success(value=user):
            return UserCreateResponse(
                id=user.id,
                email=user.email,
                username=user.username,
                status=user.status,
                message=user.message,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
