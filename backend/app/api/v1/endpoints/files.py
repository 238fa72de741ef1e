# backend/app/api/v1/endpoints/files.py
from typing import Optional

from fastapi import APIRouter, Depends, status

from backend.app.api import deps
from backend.app.schemas.file_record import FileRecordWithOwner, FileUploadResponse
from backend.app.schemas.user import MessageResponse
from backend.app.services.files import FileOwnershipGate
from backend.app.storage import UploadPayload

router = APIRouter()


@router.post("", response_model=FileUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
        account_id: int = Depends(deps.get_current_account_id),
        payload: UploadPayload = Depends(deps.read_upload),
        gate: FileOwnershipGate = Depends(deps.get_file_gate),
):
    record = await gate.upload(account_id, payload)
    return {"message": "File uploaded", "file": record}


@router.get("", response_model=Optional[FileRecordWithOwner])
async def read_file(
        account_id: int = Depends(deps.get_current_account_id),
        gate: FileOwnershipGate = Depends(deps.get_file_gate),
):
    # null when the user has no file yet
    return await gate.get(account_id)


@router.put("/{file_id}", response_model=FileUploadResponse)
async def update_file(
        file_id: int,
        account_id: int = Depends(deps.get_current_account_id),
        payload: UploadPayload = Depends(deps.read_upload),
        gate: FileOwnershipGate = Depends(deps.get_file_gate),
):
    record = await gate.update(account_id, file_id, payload)
    return {"message": "File updated successfully", "file": record}


@router.delete("/{file_id}", response_model=MessageResponse)
async def delete_file(
        file_id: int,
        account_id: int = Depends(deps.get_current_account_id),
        gate: FileOwnershipGate = Depends(deps.get_file_gate),
):
    await gate.delete(account_id, file_id)
    return {"message": "File deleted successfully"}
