import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from friendvault.database import get_db
from friendvault.dependencies import get_current_user_id
from friendvault.schemas.common import ApiResponse
from friendvault.schemas.secret import SecretCreate, SecretResponse, SecretUpdate
from friendvault.services import secret_service

router = APIRouter(tags=["secrets"])


@router.post("/secret", response_model=ApiResponse[SecretResponse], status_code=201)
async def create_secret(
    data: SecretCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    secret = await secret_service.create_secret(db, user_id, data.content)
    return ApiResponse[SecretResponse](
        status="created",
        message="Secret message saved successfully.",
        data=SecretResponse.model_validate(secret),
    )


@router.get("/secret-message", response_model=ApiResponse[list[SecretResponse]])
async def list_secrets(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    secrets = await secret_service.list_secrets(db, user_id)
    return ApiResponse[list[SecretResponse]](
        status="fetched",
        message="All secret messages retrieved successfully.",
        data=[SecretResponse.model_validate(s) for s in secrets],
    )


@router.put("/secret/{secret_id}", response_model=ApiResponse[SecretResponse])
async def update_secret(
    secret_id: uuid.UUID,
    data: SecretUpdate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    secret = await secret_service.update_secret(db, secret_id, data.content, user_id)
    return ApiResponse[SecretResponse](
        status="updated",
        message="Secret message updated successfully.",
        data=SecretResponse.model_validate(secret),
    )
