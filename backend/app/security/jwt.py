# backend/app/security/jwt.py
"""
Signed, time-bounded tokens (HS256 via python-jose).

Both token kinds carry the account id in `sub` and nothing else besides
`exp`; they differ only in lifetime.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from backend.app.core.config import settings
from backend.app.schemas.user import TokenPayload


class TokenExpired(Exception):
    pass


class TokenInvalid(Exception):
    pass


def _encode(subject: Any, expires_delta: timedelta) -> str:
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode: Dict[str, Any] = {"sub": str(subject), "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(subject: Any, expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode(subject, expires_delta)


def create_refresh_token(subject: Any, expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.REFRESH_TOKEN_EXPIRE_MINUTES)
    return _encode(subject, expires_delta)


def decode_token(token: str) -> TokenPayload:
    """
    Verify signature and expiry.

    Raises TokenExpired when only the expiry check failed and TokenInvalid
    for everything else, including a payload without a subject.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError as e:
        raise TokenExpired(str(e)) from e
    except JWTError as e:
        raise TokenInvalid(str(e)) from e

    try:
        token_data = TokenPayload(**payload)
    except ValidationError as e:
        raise TokenInvalid(str(e)) from e

    if not token_data.sub:
        raise TokenInvalid("token has no subject")

    return token_data


def subject_as_id(token_data: TokenPayload) -> int:
    try:
        return int(token_data.sub)
    except (TypeError, ValueError) as e:
        raise TokenInvalid("subject is not an account id") from e
