"""Route Dependencies: services wired to the process stores, and the acting user.

Invariants:
    - The access token yields a user id only; the live User is re-fetched per request
    - A token whose user id no longer resolves is treated as unauthenticated
    - Services are built per request around the shared store singleton
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from studymatch.config import Settings, get_settings
from studymatch.core.errors import AuthenticationRequiredError
from studymatch.core.records import User
from studymatch.infrastructure.access_tokens import decode_access_token
from studymatch.infrastructure.memory_store import (
    StoreManager, get_store_manager,
)
from studymatch.services.accounts import AccountService
from studymatch.services.matchmaking import MatchmakingService
from studymatch.services.request_lifecycle import RequestLifecycleManager

_bearer = HTTPBearer(auto_error=False)


def get_stores() -> StoreManager:
    return get_store_manager()


def get_account_service(
    stores: StoreManager = Depends(get_stores),
    settings: Settings = Depends(get_settings),
) -> AccountService:
    return AccountService(
        stores.users,
        email_domain=settings.institutional_email_domain,
        min_password_length=settings.min_password_length,
        bcrypt_rounds=settings.bcrypt_rounds,
    )


def get_matchmaking_service(
    stores: StoreManager = Depends(get_stores),
) -> MatchmakingService:
    return MatchmakingService(stores.users)


def get_request_lifecycle(
    stores: StoreManager = Depends(get_stores),
) -> RequestLifecycleManager:
    return RequestLifecycleManager(stores.users, stores.requests)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    stores: StoreManager = Depends(get_stores),
    settings: Settings = Depends(get_settings),
) -> User:
    if credentials is None:
        raise AuthenticationRequiredError()
    user_id = decode_access_token(
        credentials.credentials, settings.jwt_secret_key, settings.jwt_algorithm,
    )
    user = stores.users.find_by_id(user_id)
    if user is None:
        raise AuthenticationRequiredError()
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
MatchmakingDep = Annotated[MatchmakingService, Depends(get_matchmaking_service)]
LifecycleDep = Annotated[RequestLifecycleManager, Depends(get_request_lifecycle)]
