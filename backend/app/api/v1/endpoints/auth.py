# backend/app/api/v1/endpoints/auth.py
from fastapi import APIRouter, Depends, status

from backend.app.api import deps
from backend.app.schemas.user import (
    MessageResponse,
    RefreshRequest,
    Token,
    TokenPair,
    UserCreate,
    UserLogin,
)
from backend.app.services.credentials import CredentialService

router = APIRouter()


@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(
        user_in: UserCreate,
        service: CredentialService = Depends(deps.get_credential_service),
):
    # No token here, the client logs in separately
    await service.register(
        name=user_in.name,
        email=user_in.email,
        password=user_in.password,
        confirmpassword=user_in.confirmpassword,
    )
    return {"message": "User created successfully"}


@router.post("/login", response_model=TokenPair)
async def login(
        credentials: UserLogin,
        service: CredentialService = Depends(deps.get_credential_service),
):
    return await service.login(credentials.email, credentials.password)


@router.post("/refreshToken", response_model=Token)
async def refresh_token(
        body: RefreshRequest,
        service: CredentialService = Depends(deps.get_credential_service),
):
    return service.refresh_access_token(body.refresh_token)
