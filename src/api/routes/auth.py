from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from src.api.envelope import ApiResponse, ok
from src.api.error import ClientError
from src.app.errors import UnauthenticatedError
from src.app.services.auth_provider import IAuthProvider
from src.app.use_cases.users import Actor
from src.depends import get_auth_provider, get_current_actor

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignInRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=1, description="Account password")


class SessionToken(BaseModel):
    access_token: str
    token_type: str = "bearer"


@router.post(
    "/sign-in", status_code=status.HTTP_200_OK, response_model=ApiResponse[SessionToken]
)
async def sign_in(
    request: SignInRequest,
    auth_provider: IAuthProvider = Depends(get_auth_provider),
):
    """
    Sign in with email and password.

    Raises:
        - 400 Bad Request: Malformed payload
        - 401 Unauthorized: INVALID_CREDENTIALS
    """
    token = await auth_provider.sign_in_with_password(request.email, request.password)
    if token is None:
        raise ClientError(
            UnauthenticatedError("INVALID_CREDENTIALS", "Invalid email or password"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return ok(SessionToken(access_token=token), "Signed in")


@router.get("/session", status_code=status.HTTP_200_OK, response_model=ApiResponse[Actor])
async def get_session(actor: Actor = Depends(get_current_actor)):
    """Current caller with platform role and tenant binding."""
    return ok(actor)
