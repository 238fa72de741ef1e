# backend/app/api/v1/endpoints/users.py
from fastapi import APIRouter, Depends

from backend.app.api import deps
from backend.app.schemas.user import UserEnvelope, UserUpdate, UserUpdateResponse
from backend.app.services.credentials import CredentialService

router = APIRouter()


@router.get("/user/{user_id}", response_model=UserEnvelope)
async def read_user(
        user_id: int,
        account_id: int = Depends(deps.get_current_account_id),
        service: CredentialService = Depends(deps.get_credential_service),
):
    # Any authenticated caller may look up any profile; the hash is never returned
    user = await service.get_account(user_id)
    return {"user": user}


@router.put("/user-update", response_model=UserUpdateResponse)
async def update_user(
        user_in: UserUpdate,
        account_id: int = Depends(deps.get_current_account_id),
        service: CredentialService = Depends(deps.get_credential_service),
):
    user = await service.update_profile(
        account_id,
        name=user_in.name,
        password=user_in.password,
        confirmpassword=user_in.confirmpassword,
    )
    return {"message": "User updated successfully", "user": user}
