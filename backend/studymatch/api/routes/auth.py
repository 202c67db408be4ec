"""Auth Routes: registration and login.

Invariants:
    - Register returns 201 with the new profile, never the password hash
    - Login returns a bearer token whose only claim about the user is its id
    - Logout is client-side: discarding the token ends the session
"""

from fastapi import APIRouter, Depends, status

from studymatch.api.dependencies import AccountServiceDep
from studymatch.config import Settings, get_settings
from studymatch.core.enforce_registration import RegistrationForm
from studymatch.infrastructure.access_tokens import create_access_token
from studymatch.schemas.user import (
    LoginRequest, ProfileResponse, RegisterRequest, TokenResponse,
)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post(
    "/register", response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(body: RegisterRequest, accounts: AccountServiceDep):
    """Create an account for an institutional email address."""
    user = accounts.register(RegistrationForm(
        username=body.username,
        password=body.password,
        confirm_password=body.confirm_password,
        first_name=body.first_name,
        last_name=body.last_name,
        major=body.major,
    ))
    return ProfileResponse.from_user(user)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    accounts: AccountServiceDep,
    settings: Settings = Depends(get_settings),
):
    user = accounts.authenticate(body.username, body.password)
    token = create_access_token(
        user.id,
        settings.jwt_secret_key,
        settings.jwt_algorithm,
        settings.access_token_expire_minutes,
    )
    return TokenResponse(access_token=token)
