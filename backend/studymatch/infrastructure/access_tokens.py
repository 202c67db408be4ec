"""Access Tokens: signed JWTs carrying only the authenticated user's id.

Invariants:
    - The token payload holds `sub` (user id as string) and `exp`, nothing else
    - No user snapshot is ever embedded; callers re-fetch the live record per request
    - decode_access_token raises AuthenticationRequiredError for any bad token
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from studymatch.core.domain_types import UserId
from studymatch.core.errors import AuthenticationRequiredError


def create_access_token(
    user_id: UserId,
    secret_key: str,
    algorithm: str = "HS256",
    expires_minutes: int = 60 * 24,
) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_access_token(
    token: str, secret_key: str, algorithm: str = "HS256",
) -> UserId:
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError:
        raise AuthenticationRequiredError()
    sub = payload.get("sub")
    if sub is None or not str(sub).isdigit():
        raise AuthenticationRequiredError()
    return UserId(int(sub))
