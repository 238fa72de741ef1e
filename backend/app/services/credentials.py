# backend/app/services/credentials.py
"""
Credential Service: accounts, passwords and bearer tokens.

Token checks are stateless. Nothing is stored per session, so an access
token stays valid until its own expiry whatever happens server side.
"""
import logging
from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from backend.app.models.user import User
from backend.app.security import hashing, jwt

logger = logging.getLogger(__name__)


def _require(*values: Optional[str]) -> None:
    if any(value is None or not str(value).strip() for value in values):
        raise ValidationError("All fields are needed")


def _check_password(password: str) -> None:
    if hashing.password_too_long(password):
        raise ValidationError("Password is too long")


class CredentialService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def get_account(self, account_id: int) -> User:
        user = await self.db.get(User, account_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def register(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        confirmpassword: Optional[str],
    ) -> User:
        _require(name, email, password, confirmpassword)

        if password != confirmpassword:
            raise ValidationError("Passwords did not match")
        _check_password(password)

        email = email.strip()
        if await self._find_by_email(email):
            raise ConflictError("E-mail already in use")

        user = User(
            name=name.strip(),
            email=email,
            hashed_password=hashing.get_password_hash(password),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError as e:
            # Someone registered the same address between check and insert
            await self.db.rollback()
            raise ConflictError("E-mail already in use") from e
        await self.db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return user

    async def login(self, email: Optional[str], password: Optional[str]) -> Dict[str, str]:
        _require(email, password)

        user = await self._find_by_email(email.strip())
        if not user:
            raise NotFoundError("User not found")

        if not hashing.verify_password(password, user.hashed_password):
            raise AuthError("Invalid password", reason="credentials")

        return {
            "access_token": jwt.create_access_token(user.id),
            "refresh_token": jwt.create_refresh_token(user.id),
            "token_type": "bearer",
        }

    def refresh_access_token(self, refresh_token: Optional[str]) -> Dict[str, str]:
        """Mint a new access token. The refresh token itself is never rotated."""
        if not refresh_token:
            raise AuthError("Refresh token is required", reason="missing")

        try:
            token_data = jwt.decode_token(refresh_token)
            account_id = jwt.subject_as_id(token_data)
        except (jwt.TokenExpired, jwt.TokenInvalid) as e:
            raise AuthError("Invalid refresh token", reason="invalid") from e

        return {
            "access_token": jwt.create_access_token(account_id),
            "token_type": "bearer",
        }

    @staticmethod
    def authenticate(token: Optional[str]) -> int:
        """Return the account id carried by a bearer token."""
        if not token:
            raise AuthError("Access denied", reason="missing")

        try:
            token_data = jwt.decode_token(token)
            return jwt.subject_as_id(token_data)
        except jwt.TokenExpired as e:
            raise AuthError("Token expired", reason="expired") from e
        except jwt.TokenInvalid as e:
            raise AuthError("Invalid token", reason="invalid", status_code=400) from e

    async def update_profile(
        self,
        account_id: int,
        name: Optional[str] = None,
        password: Optional[str] = None,
        confirmpassword: Optional[str] = None,
    ) -> User:
        if name is not None and not name.strip():
            raise ValidationError("Name cannot be empty")

        if password is not None:
            if not password:
                raise ValidationError("Password cannot be empty")
            if confirmpassword is not None and password != confirmpassword:
                raise ValidationError("Passwords did not match")
            _check_password(password)

        user = await self.get_account(account_id)

        if name is not None:
            user.name = name.strip()
        if password is not None:
            # Fresh salt on every change
            user.hashed_password = hashing.get_password_hash(password)

        await self.db.commit()
        await self.db.refresh(user)
        return user
